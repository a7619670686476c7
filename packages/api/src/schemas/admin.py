# This project was developed with assistance from AI tools.
"""Pydantic response models for admin endpoints."""

from datetime import datetime

from pydantic import BaseModel


class AuditEventItem(BaseModel):
    """Single audit event in a query response."""

    id: int
    timestamp: datetime
    event_type: str
    token: str | None = None
    path: str | None = None
    event_data: dict | None = None


class AuditEventsResponse(BaseModel):
    """Response for GET /api/admin/audit."""

    token: str
    count: int
    events: list[AuditEventItem]


class AuditChainVerifyResponse(BaseModel):
    """Response for GET /api/admin/audit/verify."""

    status: str
    events_checked: int
    first_break_id: int | None = None


class SeedResponse(BaseModel):
    """Response for POST /api/admin/seed."""

    status: str
    seeded_at: str | None = None
    config_hash: str | None = None
    users: int | None = None
    verifications: int | None = None
    customers: int | None = None
    transactions: int | None = None
    campaigns: int | None = None


class SeedStatusResponse(BaseModel):
    """Response for GET /api/admin/seed/status."""

    seeded: bool
    seeded_at: str | None = None
    config_hash: str | None = None
    summary: dict | None = None
