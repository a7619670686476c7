# This project was developed with assistance from AI tools.
"""Customer financial profiles.

Read-only views over aggregated customer data plus the two things staff can
write: notes and account flags. Credit summaries and income/spending
breakdowns are derived on read.
"""

import logging
from collections import defaultdict
from datetime import UTC, datetime

from db import (
    CreditBureauReport,
    CreditSummary,
    CustomerFinancialProfile,
    CustomerFlag,
    CustomerNote,
    InMemoryStore,
    Transaction,
    utcnow,
)
from db.enums import RiskLevel, TransactionType

from ..schemas.customer import (
    IncomeAnalysis,
    IncomeSource,
    MonthlyAmount,
    SpendingAnalysis,
    SpendingCategory,
    TransactionFilters,
)

logger = logging.getLogger(__name__)

# (minimum score, grade), highest first.
_GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = ((740, "A"), (670, "B"), (580, "C"), (500, "D"))
_LOW_RISK_MIN_SCORE = 700
_MEDIUM_RISK_MIN_SCORE = 620
_MAJOR_VARIANCE_POINTS = 30

_TRANSFER_CATEGORY = "Transfers"


def score_grade(score: int) -> str:
    for minimum, grade in _GRADE_THRESHOLDS:
        if score >= minimum:
            return grade
    return "F"


def risk_level_for_score(score: int) -> RiskLevel:
    if score >= _LOW_RISK_MIN_SCORE:
        return RiskLevel.LOW
    if score >= _MEDIUM_RISK_MIN_SCORE:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def summarize_credit(reports: dict[str, CreditBureauReport]) -> CreditSummary | None:
    """Combine tri-bureau reports into one summary. None when there are no reports."""
    if not reports:
        return None

    scores = {bureau: report.score for bureau, report in reports.items()}
    average = round(sum(scores.values()) / len(scores))
    variance = max(scores.values()) - min(scores.values())

    discrepancies = []
    if variance > _MAJOR_VARIANCE_POINTS:
        discrepancies.append(f"Large score variance: {variance} points between bureaus")
    late_counts = {r.payment_history.recent_late_payments for r in reports.values()}
    if len(late_counts) > 1:
        discrepancies.append("Payment history discrepancies found between bureaus")

    return CreditSummary(
        average_score=average,
        score_variance=variance,
        overall_grade=score_grade(average),
        risk_level=risk_level_for_score(average),
        primary_bureau=max(scores, key=scores.get),
        major_discrepancies=discrepancies,
    )


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


def list_customers(
    store: InMemoryStore,
    search: str = "",
    risk_level: RiskLevel | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[CustomerFinancialProfile], int]:
    """Search by name or email; optionally filter on derived risk level."""
    term = search.strip().lower()
    matches = []
    for profile in store.customers.values():
        info = profile.customer_info
        if term and term not in info.full_name.lower() and term not in info.email.lower():
            continue
        if risk_level is not None:
            summary = summarize_credit(profile.credit_reports)
            if summary is None or summary.risk_level != risk_level:
                continue
        matches.append(profile)

    matches.sort(key=lambda p: p.last_updated, reverse=True)
    offset = (page - 1) * limit
    return matches[offset : offset + limit], len(matches)


def get_customer_profile(store: InMemoryStore, customer_id: str) -> CustomerFinancialProfile | None:
    return store.get_customer(customer_id)


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _matches(txn: Transaction, filters: TransactionFilters) -> bool:
    if filters.search:
        term = filters.search.strip().lower()
        merchant = (txn.merchant_name or "").lower()
        if term not in txn.description.lower() and term not in merchant:
            return False
    if filters.account_id and txn.account_id != filters.account_id:
        return False
    if filters.type is not None and txn.type != filters.type:
        return False
    if filters.status is not None and txn.status != filters.status:
        return False
    if filters.category:
        wanted = filters.category.lower()
        if not any(c.lower() == wanted for c in txn.category):
            return False
    start = _as_utc(filters.start_date)
    end = _as_utc(filters.end_date)
    if start is not None and txn.date < start:
        return False
    if end is not None and txn.date > end:
        return False
    return True


def list_transactions(
    store: InMemoryStore, customer_id: str, filters: TransactionFilters
) -> tuple[list[Transaction], int]:
    """Filtered transactions for a customer, newest first."""
    matches = [t for t in store.get_transactions(customer_id) if _matches(t, filters)]
    matches.sort(key=lambda t: t.date, reverse=True)
    offset = (filters.page - 1) * filters.limit
    return matches[offset : offset + filters.limit], len(matches)


def _month_key(value: datetime) -> str:
    return value.strftime("%Y-%m")


def _monthly(totals: dict[str, float]) -> list[MonthlyAmount]:
    return [MonthlyAmount(month=m, amount=round(a, 2)) for m, a in sorted(totals.items())]


def _is_transfer(txn: Transaction) -> bool:
    return _TRANSFER_CATEGORY in txn.category


def income_analysis(transactions: list[Transaction]) -> IncomeAnalysis:
    """Group incoming money by source. Internal transfers are not income."""
    credits = [
        t for t in transactions if t.type == TransactionType.CREDIT and not _is_transfer(t)
    ]
    by_source: dict[str, list[Transaction]] = defaultdict(list)
    by_month: dict[str, float] = defaultdict(float)
    for txn in credits:
        by_source[txn.merchant_name or txn.description].append(txn)
        by_month[_month_key(txn.date)] += abs(txn.amount)

    sources = []
    for source, txns in by_source.items():
        total = sum(abs(t.amount) for t in txns)
        latest = max(txns, key=lambda t: t.date)
        sources.append(
            IncomeSource(
                source=source,
                total=round(total, 2),
                count=len(txns),
                average_amount=round(total / len(txns), 2),
                last_amount=abs(latest.amount),
                last_date=latest.date,
            )
        )
    sources.sort(key=lambda s: s.total, reverse=True)

    total_income = sum(s.total for s in sources)
    return IncomeAnalysis(
        total_income=round(total_income, 2),
        monthly_average=round(total_income / len(by_month), 2) if by_month else 0.0,
        sources=sources,
        monthly=_monthly(by_month),
    )


def spending_analysis(transactions: list[Transaction]) -> SpendingAnalysis:
    """Break outgoing money down by top-level category."""
    debits = [t for t in transactions if t.type == TransactionType.DEBIT and not _is_transfer(t)]
    by_category: dict[str, list[float]] = defaultdict(list)
    by_month: dict[str, float] = defaultdict(float)
    for txn in debits:
        category = txn.category[0] if txn.category else "Uncategorized"
        by_category[category].append(abs(txn.amount))
        by_month[_month_key(txn.date)] += abs(txn.amount)

    total = sum(sum(amounts) for amounts in by_category.values())
    categories = [
        SpendingCategory(
            category=category,
            amount=round(sum(amounts), 2),
            percentage=round(sum(amounts) / total * 100, 2) if total else 0.0,
            transaction_count=len(amounts),
        )
        for category, amounts in by_category.items()
    ]
    categories.sort(key=lambda c: c.amount, reverse=True)
    return SpendingAnalysis(
        total_spending=round(total, 2),
        monthly_average=round(total / len(by_month), 2) if by_month else 0.0,
        categories=categories,
        monthly=_monthly(by_month),
    )


# ---------------------------------------------------------------------------
# Notes and flags
# ---------------------------------------------------------------------------


def add_note(store: InMemoryStore, customer_id: str, content: str, agent_id: str) -> CustomerNote:
    note = CustomerNote(
        id=store.next_id("note"),
        customer_id=customer_id,
        content=content.strip(),
        agent_id=agent_id,
        created_at=utcnow(),
    )
    store.notes.append(note)
    return note


def list_notes(store: InMemoryStore, customer_id: str) -> list[CustomerNote]:
    return sorted(
        (n for n in store.notes if n.customer_id == customer_id),
        key=lambda n: n.created_at,
        reverse=True,
    )


def flag_account(
    store: InMemoryStore, customer_id: str, flag_type: str, reason: str, agent_id: str
) -> CustomerFlag:
    flag = CustomerFlag(
        id=store.next_id("flag"),
        customer_id=customer_id,
        type=flag_type,
        reason=reason.strip(),
        agent_id=agent_id,
        created_at=utcnow(),
    )
    store.flags.append(flag)
    logger.info("Customer %s flagged (%s) by %s", customer_id, flag_type, agent_id)
    return flag


def list_flags(store: InMemoryStore, customer_id: str) -> list[CustomerFlag]:
    return sorted(
        (f for f in store.flags if f.customer_id == customer_id),
        key=lambda f: f.created_at,
        reverse=True,
    )
