# This project was developed with assistance from AI tools.
"""Verification status badge schemas."""

from pydantic import BaseModel


class StatusBadge(BaseModel):
    """Display attributes for a verification status."""

    label: str
    variant: str
    color: str
    pulse: bool = False


class StatusBadgeItem(StatusBadge):
    status: str
