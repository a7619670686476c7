# This project was developed with assistance from AI tools.
"""Admin dashboard routes."""

from db import InMemoryStore, get_store
from db.enums import PermissionAction, PermissionResource
from fastapi import APIRouter, Depends, Query

from ..middleware.auth import require_permission
from ..schemas.dashboard import ActivityResponse, DashboardStats
from ..services.dashboard import get_dashboard_stats, get_recent_activity

router = APIRouter()

_can_read = require_permission(PermissionResource.VERIFICATIONS, PermissionAction.READ)


@router.get("/stats", response_model=DashboardStats, dependencies=[Depends(_can_read)])
async def stats(store: InMemoryStore = Depends(get_store)) -> DashboardStats:
    """Headline verification counts, computed from the current records."""
    return get_dashboard_stats(store)


@router.get("/activity", response_model=ActivityResponse, dependencies=[Depends(_can_read)])
async def activity(
    store: InMemoryStore = Depends(get_store),
    limit: int = Query(default=10, ge=1, le=50),
) -> ActivityResponse:
    return ActivityResponse(data=get_recent_activity(store, limit=limit))
