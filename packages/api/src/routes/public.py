# This project was developed with assistance from AI tools.
"""Public API routes -- no authentication required."""

from db import InMemoryStore, get_store
from fastapi import APIRouter, Depends, HTTPException, status

from ..schemas.campaign import (
    CampaignRegistration,
    PublicCampaignResponse,
    RegistrationResponse,
)
from ..services import campaign as campaign_service
from ..services.campaign import CampaignInactiveError
from ..services.notifications import NotificationService, get_notification_service

router = APIRouter()


def _campaign_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Campaign not found",
    )


@router.get("/campaigns/{public_id}", response_model=PublicCampaignResponse)
async def get_public_campaign(
    public_id: str,
    store: InMemoryStore = Depends(get_store),
) -> PublicCampaignResponse:
    """Campaign landing page. Only active campaigns are visible."""
    campaign = campaign_service.view_public_campaign(store, public_id)
    if campaign is None:
        raise _campaign_not_found()
    return PublicCampaignResponse(
        public_id=campaign.public_id,
        name=campaign.name,
        description=campaign.description,
        country=campaign.country,
        status=campaign.status,
        branding=campaign.branding.model_dump(),
    )


@router.post(
    "/campaigns/{public_id}/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    public_id: str,
    body: CampaignRegistration,
    store: InMemoryStore = Depends(get_store),
    notifier: NotificationService = Depends(get_notification_service),
) -> RegistrationResponse:
    """Self-registration: emails the visitor a verification link."""
    try:
        verification = campaign_service.register(store, public_id, body, notifier)
    except CampaignInactiveError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    if verification is None:
        raise _campaign_not_found()
    return RegistrationResponse(
        email=verification.customer_info.email,
        message="We've sent you a secure link to continue your verification",
        redirect=f"/verify/public/{public_id}/email-sent",
    )
