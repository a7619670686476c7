# This project was developed with assistance from AI tools.
"""Borrower verification wizard routes.

No staff authentication: the verification token in the path is the
credential, and every step re-validates it.
"""

import logging

from db import InMemoryStore, get_store
from db.enums import BorrowerStep
from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..schemas.borrower import (
    AuditAck,
    AuditEventRequest,
    CompletionResponse,
    ConnectedAccountView,
    ConnectionCallbackRequest,
    ConnectionCallbackResponse,
    ConnectionInitResponse,
    ConnectRequest,
    ConsentRequest,
    CustomerInfoField,
    CustomerInfoFormResponse,
    CustomerInfoResult,
    CustomerInfoSubmission,
    ErrorStateResponse,
    SessionStateResponse,
    StepResponse,
    TokenValidationResponse,
)
from ..services import borrower_flow as flow
from ..services.aggregators import AggregatorError
from ..services.audit import write_audit_event
from ..services.borrower_flow import (
    ConsentRequiredError,
    FieldValidationError,
    StepOrderError,
    TokenError,
)
from ..services.customer_info import (
    get_default_field_value,
    get_field_display_name,
    get_field_placeholder,
    get_required_customer_info_fields,
    mask_customer_info,
)
from ..services.errors import build_error_state, error_path, step_path

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_http_error(exc: TokenError) -> HTTPException:
    code = status.HTTP_410_GONE if exc.reason == "expired" else status.HTTP_404_NOT_FOUND
    return HTTPException(status_code=code, detail=str(exc))


def _conflict(exc: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get("/errors/{kind}", response_model=ErrorStateResponse)
async def get_error_state(kind: str, token: str | None = None) -> ErrorStateResponse:
    """Copy, retry target, and support contacts for the error page.

    Unrecognized kinds render the generic ``unknown`` error.
    """
    return build_error_state(kind, token)


@router.get("/{token}/validate", response_model=TokenValidationResponse)
async def validate(
    token: str,
    store: InMemoryStore = Depends(get_store),
) -> TokenValidationResponse:
    """Check a verification link. Invalid links get a 200 with ``valid=false``."""
    result = flow.validate_token(store, token)
    if not result.valid:
        kind = flow.error_kind_for_token_error(result.error)
        return TokenValidationResponse(
            valid=False,
            error=result.error,
            error_kind=kind,
            redirect=error_path(token, kind),
        )

    info = result.customer_info
    next_step = flow.next_step_after_welcome(info)
    return TokenValidationResponse(
        valid=True,
        customer_info=mask_customer_info(info),
        bank_name=result.bank_name,
        missing_fields=get_required_customer_info_fields(info),
        next_step=next_step,
        redirect=step_path(token, next_step),
    )


@router.post("/{token}/start", response_model=StepResponse)
async def start(
    token: str,
    store: InMemoryStore = Depends(get_store),
) -> StepResponse:
    """Leave the welcome page for customer info or consent."""
    try:
        return flow.start(store, token)
    except TokenError as e:
        raise _token_http_error(e) from e


@router.get("/{token}/session", response_model=SessionStateResponse)
async def get_session(
    token: str,
    store: InMemoryStore = Depends(get_store),
) -> SessionStateResponse:
    try:
        session = flow.get_session_state(store, token)
    except TokenError as e:
        raise _token_http_error(e) from e
    return SessionStateResponse(
        current_step=session.current_step,
        consent_given=session.consent_given,
        declined=session.declined,
        connected_accounts=[
            ConnectedAccountView.model_validate(a) for a in session.connected_accounts
        ],
        completed=session.completion is not None,
    )


@router.get("/{token}/customer-info", response_model=CustomerInfoFormResponse)
async def get_customer_info_form(
    token: str,
    store: InMemoryStore = Depends(get_store),
) -> CustomerInfoFormResponse:
    """The personal fields still missing, with labels and defaults."""
    try:
        verification, missing = flow.get_missing_fields(store, token)
    except TokenError as e:
        raise _token_http_error(e) from e
    return CustomerInfoFormResponse(
        full_name=verification.customer_info.full_name,
        bank_name=verification.bank_name,
        fields=[
            CustomerInfoField(
                field=field,
                label=get_field_display_name(field),
                placeholder=get_field_placeholder(field),
                default_value=get_default_field_value(field),
            )
            for field in missing
        ],
    )


@router.post("/{token}/customer-info", response_model=CustomerInfoResult)
async def submit_customer_info(
    token: str,
    body: CustomerInfoSubmission,
    response: Response,
    store: InMemoryStore = Depends(get_store),
) -> CustomerInfoResult:
    """Save the missing fields. Per-field errors come back with a 422."""
    try:
        step = flow.submit_customer_info(store, token, body.model_dump())
    except TokenError as e:
        raise _token_http_error(e) from e
    except FieldValidationError as e:
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        return CustomerInfoResult(success=False, errors=e.errors)
    return CustomerInfoResult(success=True, next_step=step.next_step, redirect=step.redirect)


@router.post("/{token}/consent", response_model=StepResponse)
async def submit_consent(
    token: str,
    body: ConsentRequest,
    store: InMemoryStore = Depends(get_store),
) -> StepResponse:
    categories = body.model_dump(exclude={"agree_to_terms"})
    try:
        return flow.submit_consent(store, token, categories, body.agree_to_terms)
    except TokenError as e:
        raise _token_http_error(e) from e
    except StepOrderError as e:
        raise _conflict(e) from e
    except ConsentRequiredError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e


@router.post("/{token}/consent/decline", response_model=StepResponse)
async def decline_consent(
    token: str,
    store: InMemoryStore = Depends(get_store),
) -> StepResponse:
    """Refuse data sharing. Routes to the ``consent_declined`` page."""
    try:
        return flow.decline_consent(store, token)
    except TokenError as e:
        raise _token_http_error(e) from e
    except StepOrderError as e:
        raise _conflict(e) from e


@router.post("/{token}/connect", response_model=ConnectionInitResponse)
async def connect(
    token: str,
    body: ConnectRequest,
    store: InMemoryStore = Depends(get_store),
) -> ConnectionInitResponse:
    """Start a bank connection with Stripe or Teller."""
    try:
        return await flow.initiate_connection(store, token, body.provider)
    except TokenError as e:
        raise _token_http_error(e) from e
    except ConsentRequiredError as e:
        raise _conflict(e) from e
    except AggregatorError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e


@router.post("/{token}/connect/callback", response_model=ConnectionCallbackResponse)
async def connect_callback(
    token: str,
    body: ConnectionCallbackRequest,
    store: InMemoryStore = Depends(get_store),
) -> ConnectionCallbackResponse:
    """Result reported by the aggregator widget."""
    try:
        if not body.success:
            step = flow.record_connection_failure(store, token, body.provider, body.error)
            session = store.get_borrower_session(token)
        else:
            session = flow.record_connection(store, token, body.provider, body.accounts)
            step = flow.step_response(token, BorrowerStep.COMPLETE)
    except TokenError as e:
        raise _token_http_error(e) from e
    except (ConsentRequiredError, StepOrderError) as e:
        raise _conflict(e) from e

    accounts = [ConnectedAccountView.model_validate(a) for a in session.connected_accounts]
    return ConnectionCallbackResponse(
        connected_accounts=accounts,
        connected_accounts_count=len(accounts),
        next_step=step.next_step,
        redirect=step.redirect,
        error_kind=step.error_kind,
    )


@router.post("/{token}/complete", response_model=CompletionResponse)
async def complete(
    token: str,
    store: InMemoryStore = Depends(get_store),
) -> CompletionResponse:
    """Finish the verification. Repeat calls return the first completion."""
    try:
        verification, details = flow.complete(store, token)
    except TokenError as e:
        raise _token_http_error(e) from e
    except (ConsentRequiredError, StepOrderError) as e:
        raise _conflict(e) from e
    return CompletionResponse(
        timestamp=details.timestamp,
        connected_accounts_count=details.connected_accounts_count,
        customer_name=verification.customer_info.full_name,
        bank_name=verification.bank_name,
        redirect=step_path(token, BorrowerStep.COMPLETE),
    )


@router.post("/{token}/audit", response_model=AuditAck)
async def record_audit_event(
    token: str,
    body: AuditEventRequest,
    store: InMemoryStore = Depends(get_store),
) -> AuditAck:
    """Browser-side audit event. Never fails the caller."""
    event_data = dict(body.details or {})
    if body.timestamp is not None:
        event_data["client_timestamp"] = body.timestamp.isoformat()
    try:
        write_audit_event(
            store,
            event_type=body.event_type,
            token=token,
            path=body.path,
            event_data=event_data or None,
        )
    except Exception:
        logger.warning("Failed to record audit event for token %s", token, exc_info=True)
        return AuditAck(accepted=False)
    return AuditAck(accepted=True)
