# This project was developed with assistance from AI tools.
"""Admin endpoints for demo data seeding and audit trail queries."""

from db import InMemoryStore, get_store
from db.enums import UserRole
from fastapi import APIRouter, Depends, Query, status

from ..middleware.auth import require_roles
from ..schemas.admin import (
    AuditChainVerifyResponse,
    AuditEventItem,
    AuditEventsResponse,
    SeedResponse,
    SeedStatusResponse,
)
from ..services.audit import get_events_by_token, verify_audit_chain
from ..services.seed.seeder import get_seed_status, seed_demo_data

router = APIRouter()


@router.post(
    "/seed",
    response_model=SeedResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def seed_data(
    force: bool = False,
    store: InMemoryStore = Depends(get_store),
) -> SeedResponse:
    """Seed demo data. Pass force=true to re-seed.

    Simulated for demonstration purposes -- not real customer data.
    """
    result = seed_demo_data(store, force=force)
    return SeedResponse(**result)


@router.get(
    "/seed/status",
    response_model=SeedStatusResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def seed_status(
    store: InMemoryStore = Depends(get_store),
) -> SeedStatusResponse:
    """Check if demo data has been seeded."""
    return SeedStatusResponse(**get_seed_status(store))


@router.get(
    "/audit",
    response_model=AuditEventsResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.SUPERVISOR))],
)
async def get_audit_events(
    token: str = Query(..., min_length=1, description="Borrower verification token"),
    store: InMemoryStore = Depends(get_store),
) -> AuditEventsResponse:
    """Borrower audit trail for one verification token, oldest first."""
    events = get_events_by_token(store, token)
    return AuditEventsResponse(
        token=token,
        count=len(events),
        events=[
            AuditEventItem(
                id=e.id,
                timestamp=e.timestamp,
                event_type=e.event_type.value,
                token=e.token,
                path=e.path,
                event_data=e.event_data,
            )
            for e in events
        ],
    )


@router.get(
    "/audit/verify",
    response_model=AuditChainVerifyResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def verify_audit(
    store: InMemoryStore = Depends(get_store),
) -> AuditChainVerifyResponse:
    """Verify audit trail hash chain integrity."""
    return AuditChainVerifyResponse(**verify_audit_chain(store))
