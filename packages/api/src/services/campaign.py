# This project was developed with assistance from AI tools.
"""Self-registration campaigns.

Staff publish a campaign under a numeric public id; anyone with the link can
register, which creates a verification request and emails them the link.
"""

import logging
import secrets

from db import Campaign, CampaignBranding, InMemoryStore, VerificationRequest, utcnow
from db.enums import CampaignStatus

from ..core.config import settings
from ..schemas.campaign import (
    CampaignAnalytics,
    CampaignCreate,
    CampaignRegistration,
    CampaignResponse,
    CampaignUpdate,
)
from ..schemas.verification import (
    CustomerInfoPayload,
    VerificationCreate,
    VerificationSettingsPayload,
)
from .notifications import NotificationService
from .verification import create_verification

logger = logging.getLogger(__name__)

CAMPAIGN_SYSTEM_USER = "campaign"
_PUBLIC_ID_DIGITS = 10


class CampaignInactiveError(ValueError):
    """Registration attempted on a paused or completed campaign."""

    pass


def _new_public_id(store: InMemoryStore) -> str:
    taken = {c.public_id for c in store.campaigns.values()}
    while True:
        candidate = "".join(secrets.choice("0123456789") for _ in range(_PUBLIC_ID_DIGITS))
        if candidate not in taken:
            return candidate


def public_link(campaign: Campaign) -> str:
    return f"{settings.VERIFY_BASE_URL.rstrip('/')}/verify/public/{campaign.public_id}"


def build_campaign_response(campaign: Campaign) -> CampaignResponse:
    rate = round(campaign.conversions / campaign.clicks * 100, 1) if campaign.clicks else 0.0
    return CampaignResponse(
        id=campaign.id,
        public_id=campaign.public_id,
        name=campaign.name,
        description=campaign.description,
        country=campaign.country,
        status=campaign.status,
        public_link=public_link(campaign),
        branding=campaign.branding.model_dump(),
        created_at=campaign.created_at,
        analytics=CampaignAnalytics(
            clicks=campaign.clicks,
            conversions=campaign.conversions,
            conversion_rate=rate,
        ),
    )


def list_campaigns(
    store: InMemoryStore, search: str = "", page: int = 1, limit: int = 20
) -> tuple[list[Campaign], int]:
    term = search.strip().lower()
    matches = [
        c
        for c in store.campaigns.values()
        if not term or term in c.name.lower() or term in c.description.lower()
    ]
    matches.sort(key=lambda c: c.created_at, reverse=True)
    offset = (page - 1) * limit
    return matches[offset : offset + limit], len(matches)


def get_campaign(store: InMemoryStore, campaign_id: str) -> Campaign | None:
    return store.campaigns.get(campaign_id)


def get_campaign_by_public_id(store: InMemoryStore, public_id: str) -> Campaign | None:
    for campaign in store.campaigns.values():
        if campaign.public_id == public_id:
            return campaign
    return None


def create_campaign(store: InMemoryStore, data: CampaignCreate, bank_name: str) -> Campaign:
    branding = (
        CampaignBranding(**data.branding.model_dump())
        if data.branding
        else CampaignBranding(bank_name=bank_name)
    )
    campaign = Campaign(
        id=store.next_id("camp"),
        public_id=_new_public_id(store),
        name=data.name.strip(),
        description=data.description,
        country=data.country.upper(),
        status=data.status,
        branding=branding,
        created_at=utcnow(),
    )
    store.campaigns[campaign.id] = campaign
    logger.info("Campaign %s created (public id %s)", campaign.id, campaign.public_id)
    return campaign


def update_campaign(
    store: InMemoryStore, campaign_id: str, data: CampaignUpdate
) -> Campaign | None:
    campaign = get_campaign(store, campaign_id)
    if campaign is None:
        return None
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "branding":
            if value is not None:
                campaign.branding = CampaignBranding(**value)
            continue
        if value is None:
            continue
        if field == "country":
            value = value.upper()
        setattr(campaign, field, value)
    return campaign


def delete_campaign(store: InMemoryStore, campaign_id: str) -> bool:
    return store.campaigns.pop(campaign_id, None) is not None


def view_public_campaign(store: InMemoryStore, public_id: str) -> Campaign | None:
    """Landing page lookup. Counts as a click; only active campaigns are shown."""
    campaign = get_campaign_by_public_id(store, public_id)
    if campaign is None or campaign.status != CampaignStatus.ACTIVE:
        return None
    campaign.clicks += 1
    return campaign


def register(
    store: InMemoryStore,
    public_id: str,
    data: CampaignRegistration,
    notifier: NotificationService,
) -> VerificationRequest | None:
    """Create a verification for a self-registered visitor.

    Returns None if the campaign does not exist.
    Raises CampaignInactiveError if it is not accepting registrations.
    """
    campaign = get_campaign_by_public_id(store, public_id)
    if campaign is None:
        return None
    if campaign.status != CampaignStatus.ACTIVE:
        raise CampaignInactiveError("Campaign is not active")

    request = VerificationCreate(
        customer_info=CustomerInfoPayload(
            full_name=f"{data.first_name} {data.last_name}",
            email=data.email,
        ),
        settings=VerificationSettingsPayload(
            expiration_days=settings.DEFAULT_EXPIRATION_DAYS,
            include_reminders=settings.ENABLE_REMINDERS,
        ),
        bank_name=campaign.branding.bank_name,
    )
    verification = create_verification(
        store, request, CAMPAIGN_SYSTEM_USER, notifier, campaign_id=campaign.id
    )
    campaign.conversions += 1
    return verification
