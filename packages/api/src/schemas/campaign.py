# This project was developed with assistance from AI tools.
"""Campaign schemas (admin CRUD and public registration)."""

from datetime import datetime

from db.enums import CampaignStatus
from pydantic import BaseModel, Field, field_validator

from ..services.validation import validate_email
from . import Pagination


class BrandingPayload(BaseModel):
    bank_name: str = Field(min_length=1)
    primary_color: str = Field(default="#1e40af", pattern=r"^#[0-9a-fA-F]{6}$")
    secondary_color: str = Field(default="#f1f5f9", pattern=r"^#[0-9a-fA-F]{6}$")
    logo: str = ""
    font_family: str = "Inter"


class CampaignCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    country: str = Field(default="US", min_length=2, max_length=2)
    status: CampaignStatus = CampaignStatus.ACTIVE
    branding: BrandingPayload | None = None


class CampaignUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    country: str | None = Field(default=None, min_length=2, max_length=2)
    status: CampaignStatus | None = None
    branding: BrandingPayload | None = None


class CampaignAnalytics(BaseModel):
    clicks: int
    conversions: int
    conversion_rate: float


class CampaignResponse(BaseModel):
    id: str
    public_id: str
    name: str
    description: str
    country: str
    status: CampaignStatus
    public_link: str
    branding: BrandingPayload
    created_at: datetime
    analytics: CampaignAnalytics


class CampaignListResponse(BaseModel):
    data: list[CampaignResponse]
    pagination: Pagination


class PublicCampaignResponse(BaseModel):
    """What an anonymous visitor sees on a campaign landing page."""

    public_id: str
    name: str
    description: str
    country: str
    status: CampaignStatus
    branding: BrandingPayload


class CampaignRegistration(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str

    @field_validator("first_name", "last_name")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        ok, _, normalized = validate_email(value)
        if not ok:
            raise ValueError("Please enter a valid email address")
        return normalized


class RegistrationResponse(BaseModel):
    success: bool = True
    email: str
    message: str
    redirect: str
