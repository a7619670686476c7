# This project was developed with assistance from AI tools.
"""Customer financial profile routes (read-only data plus notes and flags)."""

from datetime import datetime

from db import CustomerFinancialProfile, InMemoryStore, get_store
from db.enums import (
    PermissionAction,
    PermissionResource,
    RiskLevel,
    TransactionStatus,
    TransactionType,
)
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..middleware.auth import CurrentUser, require_permission
from ..schemas import Pagination
from ..schemas.customer import (
    CreditReportResponse,
    CustomerListResponse,
    CustomerProfileResponse,
    CustomerSummary,
    FlagCreate,
    FlagView,
    IncomeAnalysis,
    NoteCreate,
    NoteView,
    SpendingAnalysis,
    TransactionFilters,
    TransactionListResponse,
    TransactionView,
)
from ..services import customer as customer_service
from ..services.customer_info import mask_customer_info

router = APIRouter()

_CUSTOMERS = PermissionResource.CUSTOMERS
_can_read = require_permission(_CUSTOMERS, PermissionAction.READ)
_can_update = require_permission(_CUSTOMERS, PermissionAction.UPDATE)


def _get_profile_or_404(store: InMemoryStore, customer_id: str) -> CustomerFinancialProfile:
    profile = customer_service.get_customer_profile(store, customer_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )
    return profile


def _credit_response(profile: CustomerFinancialProfile) -> CreditReportResponse:
    summary = customer_service.summarize_credit(profile.credit_reports)
    return CreditReportResponse(
        reports={b: r.model_dump() for b, r in profile.credit_reports.items()},
        summary=summary.model_dump() if summary else None,
    )


@router.get(
    "/",
    response_model=CustomerListResponse,
    dependencies=[Depends(_can_read)],
)
async def list_customers(
    store: InMemoryStore = Depends(get_store),
    search: str = "",
    risk_level: RiskLevel | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> CustomerListResponse:
    profiles, total = customer_service.list_customers(
        store, search=search, risk_level=risk_level, page=page, limit=limit
    )
    rows = []
    for profile in profiles:
        summary = customer_service.summarize_credit(profile.credit_reports)
        info = profile.customer_info
        rows.append(
            CustomerSummary(
                customer_id=profile.customer_id,
                full_name=info.full_name,
                email=info.email,
                phone_number=info.phone_number,
                average_score=summary.average_score if summary else None,
                risk_level=summary.risk_level if summary else None,
                total_balance=profile.financial_summary.total_balance,
                verification_id=profile.verification_id,
                last_updated=profile.last_updated,
            )
        )
    return CustomerListResponse(data=rows, pagination=Pagination.build(page, limit, total))


@router.get(
    "/{customer_id}",
    response_model=CustomerProfileResponse,
    dependencies=[Depends(_can_read)],
)
async def get_customer(
    customer_id: str,
    store: InMemoryStore = Depends(get_store),
) -> CustomerProfileResponse:
    """Full profile: credit, accounts, cash-flow summary, and risk indicators."""
    profile = _get_profile_or_404(store, customer_id)
    return CustomerProfileResponse(
        customer_id=profile.customer_id,
        customer_info=mask_customer_info(profile.customer_info),
        credit=_credit_response(profile),
        bank_accounts=[a.model_dump() for a in profile.bank_accounts],
        financial_summary=profile.financial_summary.model_dump(),
        risk_indicators=profile.risk_indicators.model_dump(),
        verification_id=profile.verification_id,
        last_updated=profile.last_updated,
    )


@router.get(
    "/{customer_id}/credit-summary",
    response_model=CreditReportResponse,
    dependencies=[Depends(_can_read)],
)
async def get_credit_summary(
    customer_id: str,
    store: InMemoryStore = Depends(get_store),
) -> CreditReportResponse:
    """Tri-bureau reports and the combined summary."""
    return _credit_response(_get_profile_or_404(store, customer_id))


@router.get(
    "/{customer_id}/transactions",
    response_model=TransactionListResponse,
    dependencies=[Depends(_can_read)],
)
async def list_transactions(
    customer_id: str,
    store: InMemoryStore = Depends(get_store),
    search: str = "",
    account_id: str | None = None,
    type_filter: TransactionType | None = Query(default=None, alias="type"),
    status_filter: TransactionStatus | None = Query(default=None, alias="status"),
    category: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> TransactionListResponse:
    _get_profile_or_404(store, customer_id)
    filters = TransactionFilters(
        search=search,
        account_id=account_id,
        type=type_filter,
        status=status_filter,
        category=category,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )
    items, total = customer_service.list_transactions(store, customer_id, filters)
    return TransactionListResponse(
        data=[TransactionView.model_validate(t) for t in items],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "/{customer_id}/income",
    response_model=IncomeAnalysis,
    dependencies=[Depends(_can_read)],
)
async def get_income(
    customer_id: str,
    store: InMemoryStore = Depends(get_store),
) -> IncomeAnalysis:
    _get_profile_or_404(store, customer_id)
    return customer_service.income_analysis(store.get_transactions(customer_id))


@router.get(
    "/{customer_id}/spending",
    response_model=SpendingAnalysis,
    dependencies=[Depends(_can_read)],
)
async def get_spending(
    customer_id: str,
    store: InMemoryStore = Depends(get_store),
) -> SpendingAnalysis:
    _get_profile_or_404(store, customer_id)
    return customer_service.spending_analysis(store.get_transactions(customer_id))


@router.get(
    "/{customer_id}/notes",
    response_model=list[NoteView],
    dependencies=[Depends(_can_read)],
)
async def list_notes(
    customer_id: str,
    store: InMemoryStore = Depends(get_store),
) -> list[NoteView]:
    _get_profile_or_404(store, customer_id)
    return [NoteView.model_validate(n) for n in customer_service.list_notes(store, customer_id)]


@router.post(
    "/{customer_id}/notes",
    response_model=NoteView,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(_can_read)],
)
async def add_note(
    customer_id: str,
    body: NoteCreate,
    user: CurrentUser,
    store: InMemoryStore = Depends(get_store),
) -> NoteView:
    """Any staff member who can see a customer can annotate it."""
    _get_profile_or_404(store, customer_id)
    note = customer_service.add_note(store, customer_id, body.content, user.user_id)
    return NoteView.model_validate(note)


@router.get(
    "/{customer_id}/flags",
    response_model=list[FlagView],
    dependencies=[Depends(_can_read)],
)
async def list_flags(
    customer_id: str,
    store: InMemoryStore = Depends(get_store),
) -> list[FlagView]:
    _get_profile_or_404(store, customer_id)
    return [FlagView.model_validate(f) for f in customer_service.list_flags(store, customer_id)]


@router.post(
    "/{customer_id}/flags",
    response_model=FlagView,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(_can_update)],
)
async def flag_account(
    customer_id: str,
    body: FlagCreate,
    user: CurrentUser,
    store: InMemoryStore = Depends(get_store),
) -> FlagView:
    """Flag an account for review. Requires customer update permission."""
    _get_profile_or_404(store, customer_id)
    flag = customer_service.flag_account(store, customer_id, body.type, body.reason, user.user_id)
    return FlagView.model_validate(flag)
