# This project was developed with assistance from AI tools.
"""Dashboard statistics derived from the verification records."""

from datetime import datetime, timedelta

from db import InMemoryStore, VerificationRequest, utcnow
from db.enums import VerificationStatus

from ..schemas.dashboard import ActivityItem, DashboardStats
from .verification import refresh_expiry

_WEEK = timedelta(days=7)
_EXPIRING_WINDOW = timedelta(hours=24)


def _refreshed(store: InMemoryStore, now: datetime) -> list[VerificationRequest]:
    verifications = list(store.iter_verifications())
    for verification in verifications:
        refresh_expiry(verification, now)
    return verifications


def get_dashboard_stats(store: InMemoryStore, now: datetime | None = None) -> DashboardStats:
    """Headline counts for the admin dashboard.

    ``success_rate`` is completed over everything that was sent, as a
    percentage. ``avg_completion_time`` is hours from send to completion.
    """
    now = now or utcnow()
    week_ago = now - _WEEK
    verifications = _refreshed(store, now)

    distribution = {status.value: 0 for status in VerificationStatus}
    for v in verifications:
        distribution[v.status.value] += 1

    sent = [v for v in verifications if v.timeline.sent_at is not None]
    completed = [v for v in verifications if v.status == VerificationStatus.COMPLETED]

    durations = [
        (v.timeline.completed_at - (v.timeline.sent_at or v.timeline.created_at)).total_seconds()
        for v in completed
        if v.timeline.completed_at is not None
    ]
    avg_hours = round(sum(durations) / len(durations) / 3600, 1) if durations else 0.0

    return DashboardStats(
        sent_waiting=distribution["sent"] + distribution["in_progress"],
        completed_ready=distribution["completed"],
        week_sent=sum(1 for v in sent if v.timeline.sent_at >= week_ago),
        week_completed=sum(
            1 for v in completed if v.timeline.completed_at and v.timeline.completed_at >= week_ago
        ),
        expired_failed=distribution["expired"] + distribution["failed"],
        success_rate=round(len(completed) / len(sent) * 100, 1) if sent else 0.0,
        avg_completion_time=avg_hours,
        total=len(verifications),
        status_distribution=distribution,
    )


def get_recent_activity(
    store: InMemoryStore, limit: int = 10, now: datetime | None = None
) -> list[ActivityItem]:
    """Sends, completions, and links expiring within a day, newest first."""
    now = now or utcnow()
    items: list[ActivityItem] = []
    for v in _refreshed(store, now):
        name = v.customer_info.full_name
        if v.timeline.sent_at is not None:
            items.append(
                ActivityItem(
                    id=f"{v.id}-sent",
                    type="sent",
                    verification_id=v.id,
                    customer_name=name,
                    message=f"Verification sent to {name}",
                    timestamp=v.timeline.sent_at,
                )
            )
        if v.timeline.completed_at is not None:
            items.append(
                ActivityItem(
                    id=f"{v.id}-completed",
                    type="completed",
                    verification_id=v.id,
                    customer_name=name,
                    message=f"{name} completed verification",
                    timestamp=v.timeline.completed_at,
                )
            )
        expires_at = v.timeline.expires_at
        expiring_soon = now < expires_at <= now + _EXPIRING_WINDOW
        if v.status in VerificationStatus.open_statuses() and expiring_soon:
            items.append(
                ActivityItem(
                    id=f"{v.id}-expiring",
                    type="expiring",
                    verification_id=v.id,
                    customer_name=name,
                    message=f"Verification for {name} expires within 24 hours",
                    timestamp=expires_at,
                )
            )

    items.sort(key=lambda item: item.timestamp, reverse=True)
    return items[:limit]
