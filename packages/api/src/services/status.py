# This project was developed with assistance from AI tools.
"""Verification status presentation.

Maps each verification status to the badge the admin UI renders for it.
"""

from db.enums import VerificationStatus

from ..schemas.status import StatusBadge, StatusBadgeItem

_OUTLINE = "outline"
_DESTRUCTIVE = "destructive"

STATUS_BADGES: dict[str, StatusBadge] = {
    VerificationStatus.PENDING.value: StatusBadge(
        label="Pending",
        variant=_OUTLINE,
        color="bg-yellow-50 text-yellow-700 border-yellow-200",
    ),
    VerificationStatus.SENT.value: StatusBadge(
        label="Sent",
        variant=_OUTLINE,
        color="bg-blue-50 text-blue-700 border-blue-200",
    ),
    VerificationStatus.IN_PROGRESS.value: StatusBadge(
        label="In Progress",
        variant=_OUTLINE,
        color="bg-orange-50 text-orange-700 border-orange-200",
        pulse=True,
    ),
    VerificationStatus.COMPLETED.value: StatusBadge(
        label="Completed",
        variant=_OUTLINE,
        color="bg-green-50 text-green-700 border-green-200",
    ),
    VerificationStatus.EXPIRED.value: StatusBadge(
        label="Expired",
        variant=_OUTLINE,
        color="bg-red-50 text-red-700 border-red-200",
    ),
    VerificationStatus.FAILED.value: StatusBadge(
        label="Failed",
        variant=_DESTRUCTIVE,
        color="bg-red-100 text-red-800 border-red-300",
    ),
}

UNKNOWN_BADGE = StatusBadge(
    label="Unknown",
    variant=_OUTLINE,
    color="bg-gray-50 text-gray-700 border-gray-200",
)


def get_status_badge(status: str | VerificationStatus | None) -> StatusBadge:
    """Return the badge for a status; unrecognized values get the Unknown badge."""
    if isinstance(status, VerificationStatus):
        status = status.value
    return STATUS_BADGES.get(status or "", UNKNOWN_BADGE)


def list_status_badges() -> list[StatusBadgeItem]:
    return [
        StatusBadgeItem(status=value, **badge.model_dump())
        for value, badge in STATUS_BADGES.items()
    ]
