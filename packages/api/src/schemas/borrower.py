# This project was developed with assistance from AI tools.
"""Borrower wizard request/response schemas."""

from datetime import datetime
from typing import Literal

from db.enums import AggregatorProvider, AuditEventType, BorrowerStep, ErrorKind
from pydantic import BaseModel, ConfigDict, Field

from .verification import CustomerInfoView


class StepResponse(BaseModel):
    """Where the wizard goes next after a step."""

    next_step: BorrowerStep | Literal["error"]
    redirect: str
    error_kind: ErrorKind | None = None


class TokenValidationResponse(BaseModel):
    valid: bool
    customer_info: CustomerInfoView | None = None
    bank_name: str | None = None
    error: Literal["invalid", "expired"] | None = None
    error_kind: ErrorKind | None = None
    missing_fields: list[str] = Field(default_factory=list)
    next_step: BorrowerStep | None = None
    redirect: str | None = None


class CustomerInfoField(BaseModel):
    """One personal field the borrower still has to supply."""

    field: str
    label: str
    placeholder: str
    default_value: str = ""


class CustomerInfoFormResponse(BaseModel):
    full_name: str
    bank_name: str | None = None
    fields: list[CustomerInfoField]


class CustomerInfoSubmission(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date_of_birth: str | None = None
    nationality: str | None = None
    identification_number: str | None = None
    residing_country: str | None = None
    street: str | None = None
    zipcode: str | None = None
    social_security_number: str | None = None
    state: str | None = None
    city: str | None = None


class CustomerInfoResult(BaseModel):
    success: bool
    errors: dict[str, str] = Field(default_factory=dict)
    next_step: BorrowerStep | None = None
    redirect: str | None = None


class ConsentRequest(BaseModel):
    account_details: bool = False
    balances: bool = False
    transactions: bool = False
    identity: bool = False
    agree_to_terms: bool = False


class ConnectRequest(BaseModel):
    provider: AggregatorProvider


class ConnectionInitResponse(BaseModel):
    """Client secret (Stripe) or redirect URL (Teller) for the browser."""

    provider: AggregatorProvider
    client_secret: str | None = None
    connection_url: str | None = None


class ConnectedAccountPayload(BaseModel):
    id: str = Field(min_length=1)
    name: str
    last4: str = Field(min_length=1, max_length=4)


class ConnectionCallbackRequest(BaseModel):
    provider: AggregatorProvider
    success: bool = True
    accounts: list[ConnectedAccountPayload] = Field(default_factory=list)
    error: str | None = None


class ConnectedAccountView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    last4: str
    provider: str | None = None


class SessionStateResponse(BaseModel):
    current_step: BorrowerStep
    consent_given: bool
    declined: bool
    connected_accounts: list[ConnectedAccountView]
    completed: bool


class ConnectionCallbackResponse(BaseModel):
    connected_accounts: list[ConnectedAccountView]
    connected_accounts_count: int
    next_step: BorrowerStep | Literal["error"]
    redirect: str
    error_kind: ErrorKind | None = None


class CompletionResponse(BaseModel):
    timestamp: datetime
    connected_accounts_count: int
    customer_name: str
    bank_name: str | None = None
    redirect: str


class ErrorStateResponse(BaseModel):
    """Everything the borrower error page renders."""

    kind: ErrorKind
    icon: str
    title: str
    message: str
    retryable: bool
    redirect: str | None = None
    retry_path: str | None = None
    support_email: str
    support_phone: str


class AuditEventRequest(BaseModel):
    event_type: AuditEventType
    path: str | None = None
    details: dict | None = None
    timestamp: datetime | None = None


class AuditAck(BaseModel):
    accepted: bool
