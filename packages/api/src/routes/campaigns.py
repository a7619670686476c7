# This project was developed with assistance from AI tools.
"""Campaign management routes for institution staff."""

from db import InMemoryStore, get_store
from db.enums import PermissionAction, PermissionResource
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..core.config import settings
from ..middleware.auth import require_permission
from ..schemas import Pagination
from ..schemas.campaign import (
    CampaignCreate,
    CampaignListResponse,
    CampaignResponse,
    CampaignUpdate,
)
from ..services import campaign as campaign_service
from ..services.campaign import build_campaign_response

router = APIRouter()

_SETTINGS = PermissionResource.SETTINGS
_can_read = require_permission(_SETTINGS, PermissionAction.READ)
_can_create = require_permission(_SETTINGS, PermissionAction.CREATE)
_can_update = require_permission(_SETTINGS, PermissionAction.UPDATE)
_can_delete = require_permission(_SETTINGS, PermissionAction.DELETE)


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Campaign not found",
    )


@router.get("/", response_model=CampaignListResponse, dependencies=[Depends(_can_read)])
async def list_campaigns(
    store: InMemoryStore = Depends(get_store),
    search: str = "",
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> CampaignListResponse:
    campaigns, total = campaign_service.list_campaigns(store, search=search, page=page, limit=limit)
    return CampaignListResponse(
        data=[build_campaign_response(c) for c in campaigns],
        pagination=Pagination.build(page, limit, total),
    )


@router.post(
    "/",
    response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(_can_create)],
)
async def create_campaign(
    body: CampaignCreate,
    store: InMemoryStore = Depends(get_store),
) -> CampaignResponse:
    """Create a campaign with a fresh public id. Branding defaults to the institution."""
    campaign = campaign_service.create_campaign(store, body, settings.INSTITUTION_NAME)
    return build_campaign_response(campaign)


@router.get(
    "/{campaign_id}",
    response_model=CampaignResponse,
    dependencies=[Depends(_can_read)],
)
async def get_campaign(
    campaign_id: str,
    store: InMemoryStore = Depends(get_store),
) -> CampaignResponse:
    campaign = campaign_service.get_campaign(store, campaign_id)
    if campaign is None:
        raise _not_found()
    return build_campaign_response(campaign)


@router.patch(
    "/{campaign_id}",
    response_model=CampaignResponse,
    dependencies=[Depends(_can_update)],
)
async def update_campaign(
    campaign_id: str,
    body: CampaignUpdate,
    store: InMemoryStore = Depends(get_store),
) -> CampaignResponse:
    campaign = campaign_service.update_campaign(store, campaign_id, body)
    if campaign is None:
        raise _not_found()
    return build_campaign_response(campaign)


@router.delete(
    "/{campaign_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(_can_delete)],
)
async def delete_campaign(
    campaign_id: str,
    store: InMemoryStore = Depends(get_store),
) -> None:
    if not campaign_service.delete_campaign(store, campaign_id):
        raise _not_found()
