# This project was developed with assistance from AI tools.
"""Verification request management for institution staff.

Create, list, and act on verification requests. Expiry is evaluated
lazily: any open request whose ``expires_at`` has passed is moved to
``expired`` the next time it is read.
"""

import logging
import secrets
from datetime import datetime, timedelta

from db import (
    CustomerInfo,
    InMemoryStore,
    VerificationRequest,
    VerificationSettings,
    VerificationTimeline,
    utcnow,
)
from db.enums import VerificationStatus
from pydantic import ValidationError

from ..core.config import settings
from ..schemas.verification import (
    BulkFailure,
    VerificationCreate,
    VerificationFilters,
    VerificationResponse,
)
from .customer_info import get_required_customer_info_fields, mask_customer_info
from .notifications import NotificationService
from .status import get_status_badge

logger = logging.getLogger(__name__)


class InvalidTransitionError(ValueError):
    """Raised when a verification status transition is not allowed."""

    pass


class VerificationActionError(ValueError):
    """Raised when an admin action does not apply to the verification's state."""

    pass


_OPEN_STATUSES = VerificationStatus.open_statuses()
_TERMINAL_STATUSES = VerificationStatus.terminal_statuses()


def generate_token() -> str:
    return secrets.token_urlsafe(18)


def build_verification_link(token: str) -> str:
    return f"{settings.VERIFY_BASE_URL.rstrip('/')}/verify/{token}"


def refresh_expiry(verification: VerificationRequest, now: datetime | None = None) -> bool:
    """Move an open verification past its deadline to ``expired``.

    Returns True if the status changed.
    """
    now = now or utcnow()
    if verification.status in _OPEN_STATUSES and verification.timeline.expires_at <= now:
        verification.status = VerificationStatus.EXPIRED
        logger.info("Verification %s expired", verification.id)
        return True
    return False


def _check_transition(verification: VerificationRequest, new_status: VerificationStatus) -> None:
    current = verification.status
    allowed = VerificationStatus.valid_transitions().get(current, frozenset())
    if new_status not in allowed:
        raise InvalidTransitionError(
            f"Cannot transition from '{current.value}' to '{new_status.value}'. "
            f"Allowed: {sorted(s.value for s in allowed) if allowed else 'none (terminal status)'}."
        )


def build_verification_response(verification: VerificationRequest) -> VerificationResponse:
    return VerificationResponse(
        id=verification.id,
        customer_info=mask_customer_info(verification.customer_info),
        settings=verification.settings.model_dump(),
        status=verification.status,
        status_badge=get_status_badge(verification.status),
        timeline=verification.timeline.model_dump(),
        verification_link=verification.verification_link,
        verification_token=verification.verification_token,
        created_by=verification.created_by,
        bank_name=verification.bank_name,
        customer_id=verification.customer_id,
        campaign_id=verification.campaign_id,
        connected_accounts=verification.connected_accounts,
        attempts=verification.attempts,
        last_activity=verification.last_activity,
        missing_fields=get_required_customer_info_fields(verification.customer_info),
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def _matches_search(verification: VerificationRequest, term: str) -> bool:
    info = verification.customer_info
    haystack = (info.full_name, info.email, info.phone_number, verification.id)
    return any(term in (value or "").lower() for value in haystack)


def list_verifications(
    store: InMemoryStore,
    filters: VerificationFilters,
    now: datetime | None = None,
) -> tuple[list[VerificationRequest], int]:
    """Return one page of verifications matching ``filters`` plus the total count.

    Newest first. ``total`` counts all matches, not just the page.
    """
    now = now or utcnow()
    term = filters.search.strip().lower()
    agent = filters.agent.strip().lower() if filters.agent else None

    matches = []
    for verification in store.iter_verifications():
        refresh_expiry(verification, now)
        if term and not _matches_search(verification, term):
            continue
        if filters.status is not None and verification.status != filters.status:
            continue
        if agent and verification.created_by.lower() != agent:
            continue
        matches.append(verification)

    matches.sort(key=lambda v: v.timeline.created_at, reverse=True)
    offset = (filters.page - 1) * filters.limit
    return matches[offset : offset + filters.limit], len(matches)


def get_verification(
    store: InMemoryStore, verification_id: str, now: datetime | None = None
) -> VerificationRequest | None:
    verification = store.get_verification(verification_id)
    if verification is not None:
        refresh_expiry(verification, now)
    return verification


def get_filters(store: InMemoryStore, user_id: str) -> VerificationFilters:
    return VerificationFilters.model_validate(store.filter_state.get(user_id, {}))


def update_filters(store: InMemoryStore, user_id: str, **changes) -> VerificationFilters:
    filters = get_filters(store, user_id).apply(**changes)
    store.filter_state[user_id] = filters.model_dump()
    return filters


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


def dispatch_verification(
    verification: VerificationRequest,
    notifier: NotificationService,
    now: datetime | None = None,
) -> None:
    """Mark a verification as sent and queue its link for delivery."""
    now = now or utcnow()
    verification.status = VerificationStatus.SENT
    verification.timeline.sent_at = now
    verification.last_activity = now
    notifier.send_verification_link(verification)


def create_verification(
    store: InMemoryStore,
    data: VerificationCreate,
    created_by: str,
    notifier: NotificationService,
    campaign_id: str | None = None,
) -> VerificationRequest:
    """Create a verification request and send the borrower their link."""
    now = utcnow()
    token = generate_token()
    verification = VerificationRequest(
        id=store.next_id("ver"),
        customer_info=CustomerInfo(**data.customer_info.model_dump()),
        settings=VerificationSettings(**data.settings.model_dump()),
        status=VerificationStatus.PENDING,
        timeline=VerificationTimeline(
            created_at=now,
            expires_at=now + timedelta(days=data.settings.expiration_days),
        ),
        verification_link=build_verification_link(token),
        verification_token=token,
        created_by=created_by,
        bank_name=data.bank_name,
        customer_id=data.customer_id,
        campaign_id=campaign_id,
    )
    store.add_verification(verification)
    dispatch_verification(verification, notifier, now)
    logger.info("Verification %s created by %s", verification.id, created_by)
    return verification


def create_bulk_verifications(
    store: InMemoryStore,
    rows: list[dict],
    created_by: str,
    notifier: NotificationService,
) -> tuple[list[VerificationRequest], list[BulkFailure]]:
    """Create one verification per row; invalid rows are reported, not raised."""
    successful: list[VerificationRequest] = []
    failed: list[BulkFailure] = []
    for index, row in enumerate(rows):
        try:
            data = VerificationCreate.model_validate(row)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            failed.append(BulkFailure(index=index, error=f"{location}: {first['msg']}", data=row))
            continue
        successful.append(create_verification(store, data, created_by, notifier))

    if failed:
        logger.warning("Bulk create: %d of %d rows rejected", len(failed), len(rows))
    return successful, failed


# ---------------------------------------------------------------------------
# Admin actions
# ---------------------------------------------------------------------------


def update_status(
    store: InMemoryStore,
    verification_id: str,
    new_status: VerificationStatus,
) -> VerificationRequest | None:
    """Set a verification's status if the transition is allowed.

    Returns None if the verification is not found.
    Raises InvalidTransitionError if the transition is not allowed.
    """
    verification = get_verification(store, verification_id)
    if verification is None:
        return None

    _check_transition(verification, new_status)
    now = utcnow()
    verification.status = new_status
    verification.last_activity = now
    if new_status == VerificationStatus.COMPLETED:
        verification.timeline.completed_at = now
    elif new_status == VerificationStatus.SENT:
        verification.timeline.sent_at = now
    return verification


def resend(
    store: InMemoryStore,
    verification_id: str,
    notifier: NotificationService,
) -> VerificationRequest | None:
    """Send the link again.

    Completed verifications cannot be resent. A borrower already in the
    wizard keeps ``in_progress``; every other status goes back to ``sent``,
    with a fresh expiry window if the old one has lapsed.
    """
    verification = get_verification(store, verification_id)
    if verification is None:
        return None
    if verification.status in _TERMINAL_STATUSES:
        raise VerificationActionError("Completed verifications cannot be resent")

    now = utcnow()
    verification.attempts += 1
    verification.timeline.cancelled_at = None
    if verification.timeline.expires_at <= now:
        verification.timeline.expires_at = now + timedelta(
            days=verification.settings.expiration_days
        )
    if verification.status == VerificationStatus.IN_PROGRESS:
        verification.timeline.sent_at = now
        verification.last_activity = now
        notifier.send_verification_link(verification)
    else:
        dispatch_verification(verification, notifier, now)
    logger.info("Verification %s resent (attempt %d)", verification.id, verification.attempts)
    return verification


def extend(
    store: InMemoryStore,
    verification_id: str,
    days: int,
) -> VerificationRequest | None:
    """Push the expiry date out by ``days``; expired links become usable again."""
    if not 1 <= days <= settings.MAX_EXPIRATION_DAYS:
        raise ValueError(f"Extension must be between 1 and {settings.MAX_EXPIRATION_DAYS} days")

    verification = get_verification(store, verification_id)
    if verification is None:
        return None
    if verification.status in _TERMINAL_STATUSES | {VerificationStatus.FAILED}:
        raise VerificationActionError(
            f"Cannot extend a verification with status '{verification.status.value}'"
        )

    now = utcnow()
    base = max(verification.timeline.expires_at, now)
    verification.timeline.expires_at = base + timedelta(days=days)
    verification.last_activity = now
    if verification.status == VerificationStatus.EXPIRED:
        verification.status = VerificationStatus.SENT
    return verification


def cancel(store: InMemoryStore, verification_id: str) -> VerificationRequest | None:
    """Cancel a verification. Its link stops validating immediately."""
    verification = get_verification(store, verification_id)
    if verification is None:
        return None

    _check_transition(verification, VerificationStatus.FAILED)
    now = utcnow()
    verification.status = VerificationStatus.FAILED
    verification.timeline.cancelled_at = now
    verification.last_activity = now
    logger.info("Verification %s cancelled", verification.id)
    return verification
