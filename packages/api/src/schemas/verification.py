# This project was developed with assistance from AI tools.
"""Verification request schemas for the admin API."""

from datetime import datetime

from db.enums import SendMethod, VerificationStatus
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.validation import validate_email
from . import Pagination
from .status import StatusBadge


class CustomerInfoPayload(BaseModel):
    """Customer details entered by staff when sending a verification."""

    full_name: str = Field(min_length=1, max_length=200)
    email: str
    phone_number: str = ""
    date_of_birth: str | None = None
    nationality: str | None = None
    identification_number: str | None = None
    residing_country: str | None = None
    street: str | None = None
    zipcode: str | None = None
    social_security_number: str | None = None
    state: str | None = None
    city: str | None = None

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        ok, message, normalized = validate_email(value)
        if not ok:
            raise ValueError(message)
        return normalized

    @field_validator("full_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Full name is required")
        return value


class VerificationSettingsPayload(BaseModel):
    expiration_days: int = Field(default=7, ge=1, le=30)
    send_method: SendMethod = SendMethod.EMAIL
    include_reminders: bool = True
    agent_notes: str | None = Field(default=None, max_length=1000)


class VerificationCreate(BaseModel):
    customer_info: CustomerInfoPayload
    settings: VerificationSettingsPayload = Field(default_factory=VerificationSettingsPayload)
    bank_name: str | None = None
    customer_id: str | None = None


class BulkVerificationCreate(BaseModel):
    """Raw rows are validated one by one so a bad row does not sink the batch."""

    verifications: list[dict] = Field(min_length=1, max_length=500)


class CustomerInfoView(BaseModel):
    """Customer info as shown to staff, sensitive identifiers masked."""

    full_name: str
    email: str
    phone_number: str = ""
    date_of_birth: str | None = None
    nationality: str | None = None
    identification_number: str | None = None
    residing_country: str | None = None
    street: str | None = None
    zipcode: str | None = None
    social_security_number: str | None = None
    state: str | None = None
    city: str | None = None


class VerificationSettingsView(BaseModel):
    expiration_days: int
    send_method: SendMethod
    include_reminders: bool
    agent_notes: str | None = None


class VerificationTimelineView(BaseModel):
    created_at: datetime
    expires_at: datetime
    sent_at: datetime | None = None
    customer_started_at: datetime | None = None
    bank_connected_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None


class VerificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_info: CustomerInfoView
    settings: VerificationSettingsView
    status: VerificationStatus
    status_badge: StatusBadge
    timeline: VerificationTimelineView
    verification_link: str
    verification_token: str
    created_by: str
    bank_name: str | None = None
    customer_id: str | None = None
    campaign_id: str | None = None
    connected_accounts: int = 0
    attempts: int = 0
    last_activity: datetime | None = None
    missing_fields: list[str] = Field(default_factory=list)


class VerificationListResponse(BaseModel):
    data: list[VerificationResponse]
    pagination: Pagination


class BulkFailure(BaseModel):
    index: int
    error: str
    data: dict


class BulkCreateResponse(BaseModel):
    successful: list[VerificationResponse]
    failed: list[BulkFailure]


class StatusUpdateRequest(BaseModel):
    status: VerificationStatus


class ExtendRequest(BaseModel):
    days: int = Field(default=7, ge=1)


class ActionResponse(BaseModel):
    """Outcome of a resend / extend / cancel / status action."""

    success: bool = True
    message: str
    verification: VerificationResponse


class VerificationFilters(BaseModel):
    """List filter state for the verifications table."""

    model_config = ConfigDict(frozen=True)

    search: str = ""
    status: VerificationStatus | None = None
    agent: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    def apply(self, **changes) -> "VerificationFilters":
        """Return new filters with ``changes`` applied.

        Changing any field other than ``page`` sends the list back to page 1.
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown filter field(s): {', '.join(sorted(unknown))}")
        filters_changed = any(
            name != "page" and getattr(self, name) != value for name, value in changes.items()
        )
        merged = {**self.model_dump(), **changes}
        if filters_changed:
            merged["page"] = 1
        return type(self).model_validate(merged)


_NULLABLE_FILTERS = frozenset({"status", "agent"})


class FiltersPatch(BaseModel):
    """Partial filter update; omitted fields keep their current value."""

    search: str | None = None
    status: VerificationStatus | None = None
    agent: str | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1, le=100)

    def changes(self) -> dict:
        """Fields the caller sent. ``null`` clears status/agent and is ignored elsewhere."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None or name in _NULLABLE_FILTERS
        }
