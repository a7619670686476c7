# This project was developed with assistance from AI tools.
"""Verification link dispatch.

Link sends are debounced per verification so a burst of create/resend
actions produces a single message. Delivery itself is delegated to an
optional webhook; without one the dispatch is only logged.
"""

import logging
from collections import deque

import httpx
from db import SendMethod, VerificationRequest, utcnow

from ..core.config import settings
from ..core.debounce import Debouncer

logger = logging.getLogger(__name__)


def _recipients(verification: VerificationRequest) -> list[str]:
    info = verification.customer_info
    method = verification.settings.send_method
    if method == SendMethod.SMS:
        return [info.phone_number]
    if method == SendMethod.BOTH:
        return [info.email, info.phone_number]
    return [info.email]


class NotificationService:
    """Debounced sender for borrower verification links."""

    def __init__(
        self,
        debounce_seconds: float | None = None,
        webhook_url: str | None = None,
        history_limit: int | None = None,
    ) -> None:
        delay = settings.NOTIFY_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds
        self.webhook_url = webhook_url if webhook_url is not None else settings.NOTIFY_WEBHOOK_URL
        self._debouncer = Debouncer(delay)
        limit = settings.NOTIFY_HISTORY_LIMIT if history_limit is None else history_limit
        # Most recent dispatches only.
        self.history: deque[dict] = deque(maxlen=limit)

    def send_verification_link(self, verification: VerificationRequest) -> None:
        """Queue a link dispatch; a later call for the same verification wins."""
        message = {
            "verification_id": verification.id,
            "to": _recipients(verification),
            "method": verification.settings.send_method.value,
            "link": verification.verification_link,
            "customer_name": verification.customer_info.full_name,
        }
        self._debouncer.call(verification.id, self._dispatch, message)

    def pending(self) -> list[str]:
        return self._debouncer.pending()

    async def _dispatch(self, message: dict) -> None:
        message = {**message, "dispatched_at": utcnow().isoformat()}
        self.history.append(message)
        logger.info(
            "Verification link dispatched: verification=%s method=%s",
            message["verification_id"],
            message["method"],
        )
        if not self.webhook_url:
            return
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                response = await client.post(self.webhook_url, json=message)
                response.raise_for_status()
        except httpx.HTTPError:
            logger.warning(
                "Notification webhook failed for verification %s",
                message["verification_id"],
                exc_info=True,
            )

    def shutdown(self) -> None:
        cancelled = self._debouncer.cancel_all()
        if cancelled:
            logger.warning("Dropped %d pending verification link dispatches", cancelled)


_service: NotificationService | None = None


def get_notification_service() -> NotificationService:
    """Return the process-wide notification service (FastAPI dependency)."""
    global _service  # noqa: PLW0603
    if _service is None:
        _service = NotificationService()
    return _service


def shutdown_notification_service() -> None:
    global _service  # noqa: PLW0603
    if _service is not None:
        _service.shutdown()
        _service = None


def log_notification_status() -> None:
    """Log where verification links are delivered. Call at startup."""
    if settings.NOTIFY_WEBHOOK_URL:
        logger.warning(
            "Link notifications: WEBHOOK (url=%s, debounce=%.1fs)",
            settings.NOTIFY_WEBHOOK_URL,
            settings.NOTIFY_DEBOUNCE_SECONDS,
        )
    else:
        logger.warning("Link notifications: LOG ONLY (NOTIFY_WEBHOOK_URL not set)")
