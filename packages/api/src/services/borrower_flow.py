# This project was developed with assistance from AI tools.
"""Borrower verification wizard.

Drives a borrower through welcome -> customer info (only when personal
fields are missing) -> consent -> bank connection -> completion. Every step
re-validates the token; the per-token ``BorrowerSession`` in the store is
the only state carried between steps.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Literal

from db import (
    BorrowerSession,
    CompletionDetails,
    ConnectedAccount,
    ConsentRecord,
    CustomerInfo,
    InMemoryStore,
    VerificationRequest,
    utcnow,
)
from db.enums import AggregatorProvider, AuditEventType, BorrowerStep, ErrorKind, VerificationStatus
from pydantic import BaseModel

from ..schemas.borrower import ConnectedAccountPayload, ConnectionInitResponse, StepResponse
from .aggregators import AggregatorClient, AggregatorError, get_aggregator
from .audit import write_audit_event
from .customer_info import get_required_customer_info_fields, validate_customer_info
from .errors import error_path, step_path
from .verification import refresh_expiry

logger = logging.getLogger(__name__)

CONSENT_CATEGORIES: tuple[str, ...] = ("account_details", "balances", "transactions", "identity")
CONSENT_REQUIRED_MESSAGE = "Please review and agree to all data sharing terms to continue."

TokenErrorReason = Literal["invalid", "expired"]


class TokenError(ValueError):
    """Token is unknown, cancelled, or past its expiry."""

    def __init__(self, reason: TokenErrorReason) -> None:
        super().__init__(f"Verification token is {reason}")
        self.reason = reason

    @property
    def kind(self) -> ErrorKind:
        return error_kind_for_token_error(self.reason)


class ConsentRequiredError(ValueError):
    """A step that needs recorded consent was attempted without it."""

    pass


class StepOrderError(ValueError):
    """A step was attempted before its prerequisites were met."""

    pass


class FieldValidationError(ValueError):
    """One or more submitted personal fields failed validation."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


class TokenValidation(BaseModel):
    valid: bool
    verification: VerificationRequest | None = None
    error: TokenErrorReason | None = None

    @property
    def customer_info(self) -> CustomerInfo | None:
        return self.verification.customer_info if self.verification else None

    @property
    def bank_name(self) -> str | None:
        return self.verification.bank_name if self.verification else None


def error_kind_for_token_error(error: str | None) -> ErrorKind:
    """Map a token validation error to the error page kind."""
    if error == "invalid":
        return ErrorKind.INVALID_TOKEN
    if error == "expired":
        return ErrorKind.EXPIRED_TOKEN
    if error == "network":
        return ErrorKind.NETWORK_ERROR
    return ErrorKind.UNKNOWN


def step_response(token: str, step: BorrowerStep) -> StepResponse:
    return StepResponse(next_step=step, redirect=step_path(token, step))


def error_response(token: str, kind: ErrorKind) -> StepResponse:
    return StepResponse(next_step="error", redirect=error_path(token, kind), error_kind=kind)


# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------


def validate_token(
    store: InMemoryStore, token: str | None, now: datetime | None = None
) -> TokenValidation:
    """Check a borrower token.

    Unknown, empty, cancelled, or failed tokens are ``invalid``; tokens past
    their expiry are ``expired``. The first successful validation of a
    pending or sent verification marks the borrower as started.
    """
    if not token or not token.strip():
        return TokenValidation(valid=False, error="invalid")

    verification = store.find_verification_by_token(token)
    if verification is None or verification.timeline.cancelled_at is not None:
        return TokenValidation(valid=False, error="invalid")

    now = now or utcnow()
    refresh_expiry(verification, now)
    if verification.status == VerificationStatus.EXPIRED:
        return TokenValidation(valid=False, error="expired")
    if verification.status == VerificationStatus.FAILED:
        return TokenValidation(valid=False, error="invalid")

    if verification.status in (VerificationStatus.PENDING, VerificationStatus.SENT):
        verification.status = VerificationStatus.IN_PROGRESS
        verification.timeline.customer_started_at = now
        logger.info("Borrower started verification %s", verification.id)
    verification.last_activity = now
    return TokenValidation(valid=True, verification=verification)


def _require_valid(store: InMemoryStore, token: str) -> VerificationRequest:
    result = validate_token(store, token)
    if not result.valid:
        raise TokenError(result.error or "invalid")
    return result.verification


def _require_unfinished(verification: VerificationRequest, session: BorrowerSession) -> None:
    if session.completion is not None or verification.status == VerificationStatus.COMPLETED:
        raise StepOrderError("Verification is already completed")


def next_step_after_welcome(info: CustomerInfo) -> BorrowerStep:
    if get_required_customer_info_fields(info):
        return BorrowerStep.CUSTOMER_INFO
    return BorrowerStep.CONSENT


def start(store: InMemoryStore, token: str) -> StepResponse:
    """Leave the welcome page."""
    verification = _require_valid(store, token)
    step = next_step_after_welcome(verification.customer_info)
    store.get_borrower_session(token).current_step = step
    return step_response(token, step)


def get_session_state(store: InMemoryStore, token: str) -> BorrowerSession:
    _require_valid(store, token)
    return store.get_borrower_session(token)


# ---------------------------------------------------------------------------
# Customer info
# ---------------------------------------------------------------------------


def get_missing_fields(store: InMemoryStore, token: str) -> tuple[VerificationRequest, list[str]]:
    verification = _require_valid(store, token)
    return verification, get_required_customer_info_fields(verification.customer_info)


def submit_customer_info(
    store: InMemoryStore, token: str, submitted: dict[str, str | None]
) -> StepResponse:
    """Validate and save the missing personal fields, then move to consent.

    Only fields that are still missing are read from ``submitted``.
    Raises FieldValidationError with per-field messages on bad input.
    """
    verification = _require_valid(store, token)
    missing = get_required_customer_info_fields(verification.customer_info)
    values, errors = validate_customer_info(missing, submitted)
    if errors:
        raise FieldValidationError(errors)

    for field, value in values.items():
        setattr(verification.customer_info, field, value)
    verification.last_activity = utcnow()
    store.get_borrower_session(token).current_step = BorrowerStep.CONSENT
    write_audit_event(
        store,
        event_type=AuditEventType.ACTION,
        token=token,
        path=step_path(token, BorrowerStep.CUSTOMER_INFO),
        event_data={"action": "customer_info_submitted", "fields": sorted(values)},
    )
    return step_response(token, BorrowerStep.CONSENT)


# ---------------------------------------------------------------------------
# Consent
# ---------------------------------------------------------------------------


def submit_consent(
    store: InMemoryStore,
    token: str,
    categories: dict[str, bool],
    agree_to_terms: bool,
) -> StepResponse:
    """Record consent to every data category and the terms; move to connect.

    Raises StepOrderError once the verification is completed.
    """
    verification = _require_valid(store, token)
    session = store.get_borrower_session(token)
    _require_unfinished(verification, session)
    if not agree_to_terms or not all(categories.get(c) for c in CONSENT_CATEGORIES):
        raise ConsentRequiredError(CONSENT_REQUIRED_MESSAGE)

    now = utcnow()
    session.consent = ConsentRecord(
        categories={c: True for c in CONSENT_CATEGORIES},
        agree_to_terms=True,
        recorded_at=now,
    )
    session.consent_given = True
    session.current_step = BorrowerStep.CONNECT
    verification.last_activity = now
    write_audit_event(
        store,
        event_type=AuditEventType.CONSENT_CHANGE,
        token=token,
        path=step_path(token, BorrowerStep.CONSENT),
        event_data={"consent_given": True, "categories": list(CONSENT_CATEGORIES)},
    )
    return step_response(token, BorrowerStep.CONNECT)


def decline_consent(store: InMemoryStore, token: str) -> StepResponse:
    """Borrower refuses to share data. Ends the verification as failed.

    A completed verification cannot be declined (StepOrderError).
    """
    session = store.borrower_sessions.get(token)
    if session is not None and session.declined:
        return error_response(token, ErrorKind.CONSENT_DECLINED)

    verification = _require_valid(store, token)
    session = store.get_borrower_session(token)
    _require_unfinished(verification, session)
    session.declined = True
    session.consent_given = False
    session.consent = None

    now = utcnow()
    verification.status = VerificationStatus.FAILED
    verification.last_activity = now
    write_audit_event(
        store,
        event_type=AuditEventType.CONSENT_CHANGE,
        token=token,
        path=step_path(token, BorrowerStep.CONSENT),
        event_data={"consent_given": False, "declined": True},
    )
    logger.info("Borrower declined consent for verification %s", verification.id)
    return error_response(token, ErrorKind.CONSENT_DECLINED)


def _require_consent(session: BorrowerSession) -> None:
    if not session.consent_given:
        raise ConsentRequiredError("Consent is required before connecting a bank account")


# ---------------------------------------------------------------------------
# Bank connection
# ---------------------------------------------------------------------------


async def initiate_connection(
    store: InMemoryStore,
    token: str,
    provider: AggregatorProvider,
    client: AggregatorClient | None = None,
) -> ConnectionInitResponse:
    """Start a bank connection with the chosen aggregator.

    Raises AggregatorError when the provider cannot start a session.
    """
    verification = _require_valid(store, token)
    session = store.get_borrower_session(token)
    _require_consent(session)

    client = client or get_aggregator(provider)
    path = step_path(token, BorrowerStep.CONNECT)
    write_audit_event(
        store,
        event_type=AuditEventType.CONNECTION_ATTEMPT,
        token=token,
        path=path,
        event_data={"provider": provider.value},
    )
    try:
        result = await client.initiate(token, verification)
    except AggregatorError as exc:
        session.connection_error = str(exc)
        write_audit_event(
            store,
            event_type=AuditEventType.CONNECTION_FAILURE,
            token=token,
            path=path,
            event_data={"provider": provider.value, "error": str(exc)},
        )
        raise

    session.connection_error = None
    if result.client_secret:
        session.stripe_client_secret = result.client_secret
    if result.connection_url:
        session.teller_connection_url = result.connection_url
    return result


def record_connection(
    store: InMemoryStore,
    token: str,
    provider: AggregatorProvider,
    accounts: list[ConnectedAccountPayload],
) -> BorrowerSession:
    """Save accounts the aggregator reported as connected."""
    verification = _require_valid(store, token)
    session = store.get_borrower_session(token)
    _require_unfinished(verification, session)
    _require_consent(session)
    if not accounts:
        raise StepOrderError("At least one bank account must be connected")

    known = {a.id for a in session.connected_accounts}
    for account in accounts:
        if account.id in known:
            continue
        session.connected_accounts.append(
            ConnectedAccount(
                id=account.id, name=account.name, last4=account.last4, provider=provider.value
            )
        )
        known.add(account.id)

    now = utcnow()
    session.connection_error = None
    verification.connected_accounts = len(session.connected_accounts)
    if verification.timeline.bank_connected_at is None:
        verification.timeline.bank_connected_at = now
    verification.last_activity = now
    write_audit_event(
        store,
        event_type=AuditEventType.CONNECTION_SUCCESS,
        token=token,
        path=step_path(token, BorrowerStep.CONNECT),
        event_data={"provider": provider.value, "accounts": len(accounts)},
    )
    return session


def record_connection_failure(
    store: InMemoryStore,
    token: str,
    provider: AggregatorProvider,
    error: str | None,
) -> StepResponse:
    """Aggregator widget reported a failure; route to the retryable error page."""
    _require_valid(store, token)
    session = store.get_borrower_session(token)
    session.connection_error = error or "Bank connection failed"
    write_audit_event(
        store,
        event_type=AuditEventType.CONNECTION_FAILURE,
        token=token,
        path=step_path(token, BorrowerStep.CONNECT),
        event_data={"provider": provider.value, "error": session.connection_error},
    )
    return error_response(token, ErrorKind.CONNECTION_FAILED)


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


def _session_completion_details(session: BorrowerSession, now: datetime) -> CompletionDetails:
    return CompletionDetails(
        timestamp=now, connected_accounts_count=len(session.connected_accounts)
    )


def complete(
    store: InMemoryStore,
    token: str,
    details_fetcher: Callable[[BorrowerSession, datetime], CompletionDetails] | None = None,
) -> tuple[VerificationRequest, CompletionDetails]:
    """Finish the verification.

    Requires consent and at least one connected account. Calling it again
    returns the original completion. If the completion details cannot be
    fetched, a summary built from the session is used instead.
    """
    verification = _require_valid(store, token)
    session = store.get_borrower_session(token)
    if session.completion is not None:
        return verification, session.completion

    _require_consent(session)
    if not session.connected_accounts:
        raise StepOrderError("Connect at least one bank account before completing")

    now = utcnow()
    fetcher = details_fetcher or _session_completion_details
    try:
        details = fetcher(session, now)
    except (LookupError, ValueError, RuntimeError):
        logger.warning(
            "Completion details unavailable for %s, using session summary",
            verification.id,
            exc_info=True,
        )
        details = CompletionDetails(
            timestamp=now,
            connected_accounts_count=max(len(session.connected_accounts), 1),
        )

    verification.status = VerificationStatus.COMPLETED
    verification.timeline.completed_at = now
    verification.connected_accounts = len(session.connected_accounts)
    verification.last_activity = now
    session.completion = details
    session.current_step = BorrowerStep.COMPLETE
    write_audit_event(
        store,
        event_type=AuditEventType.ACTION,
        token=token,
        path=step_path(token, BorrowerStep.COMPLETE),
        event_data={
            "action": "verification_completed",
            "connected_accounts": details.connected_accounts_count,
        },
    )
    logger.info("Verification %s completed", verification.id)
    return verification, details
