# This project was developed with assistance from AI tools.
"""
Bank verification platform -- domain records

Verification requests, borrower wizard sessions, customer financial
profiles, campaigns, and the borrower audit trail. Records are mutable
Pydantic models held by ``InMemoryStore``; nothing is persisted.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import (
    AccountType,
    AuditEventType,
    BorrowerStep,
    CampaignStatus,
    PermissionAction,
    PermissionResource,
    RiskLevel,
    SendMethod,
    TransactionStatus,
    TransactionType,
    UserRole,
    VerificationStatus,
)


class _Record(BaseModel):
    model_config = ConfigDict(validate_assignment=False)


# ---------------------------------------------------------------------------
# Staff users
# ---------------------------------------------------------------------------


class Permission(_Record):
    resource: PermissionResource
    actions: list[PermissionAction]


class User(_Record):
    """Institution staff member able to sign in to the admin API."""

    id: str
    email: str
    name: str
    role: UserRole
    password_hash: str
    is_active: bool = True
    last_login: datetime | None = None


# ---------------------------------------------------------------------------
# Verification requests
# ---------------------------------------------------------------------------


class CustomerInfo(_Record):
    """Customer snapshot captured when a verification is created.

    Personal fields left as None are collected by the borrower wizard.
    """

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


class VerificationSettings(_Record):
    expiration_days: int = 7
    send_method: SendMethod = SendMethod.EMAIL
    include_reminders: bool = True
    agent_notes: str | None = None


class VerificationTimeline(_Record):
    created_at: datetime
    expires_at: datetime
    sent_at: datetime | None = None
    customer_started_at: datetime | None = None
    bank_connected_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None


class VerificationRequest(_Record):
    """Admin-initiated record tracking a customer through the borrower wizard."""

    id: str
    customer_info: CustomerInfo
    settings: VerificationSettings
    status: VerificationStatus = VerificationStatus.PENDING
    timeline: VerificationTimeline
    verification_link: str
    verification_token: str
    created_by: str
    bank_name: str | None = None
    customer_id: str | None = None
    campaign_id: str | None = None
    connected_accounts: int = 0
    attempts: int = 0
    last_activity: datetime | None = None


# ---------------------------------------------------------------------------
# Borrower wizard session
# ---------------------------------------------------------------------------


class ConnectedAccount(_Record):
    id: str
    name: str
    last4: str
    provider: str | None = None


class ConsentRecord(_Record):
    categories: dict[str, bool]
    agree_to_terms: bool
    recorded_at: datetime


class CompletionDetails(_Record):
    timestamp: datetime
    connected_accounts_count: int


class BorrowerSession(_Record):
    """Per-token wizard state. Lives only as long as the process."""

    token: str
    current_step: BorrowerStep = BorrowerStep.WELCOME
    consent_given: bool = False
    consent: ConsentRecord | None = None
    declined: bool = False
    connected_accounts: list[ConnectedAccount] = Field(default_factory=list)
    stripe_client_secret: str | None = None
    teller_connection_url: str | None = None
    connection_error: str | None = None
    completion: CompletionDetails | None = None


# ---------------------------------------------------------------------------
# Customer financial profile
# ---------------------------------------------------------------------------


class Transaction(_Record):
    id: str
    account_id: str
    amount: float
    date: datetime
    description: str
    category: list[str] = Field(default_factory=list)
    type: TransactionType
    status: TransactionStatus = TransactionStatus.POSTED
    merchant_name: str | None = None
    subcategory: str | None = None


class BankAccount(_Record):
    account_id: str
    bank_name: str
    account_type: AccountType
    account_number: str
    balance: float
    currency: str = "USD"
    opened_date: str
    available_balance: float | None = None
    routing_number: str | None = None
    monthly_balances: list[dict] = Field(default_factory=list)


class CreditUtilization(_Record):
    total_credit: float
    used_credit: float
    utilization_percentage: float


class PaymentHistory(_Record):
    on_time_percentage: float
    recent_late_payments: int


class CreditBureauReport(_Record):
    score: int
    grade: str
    last_updated: str
    utilization: CreditUtilization
    payment_history: PaymentHistory


class CreditSummary(_Record):
    average_score: int
    score_variance: int
    overall_grade: str
    risk_level: RiskLevel
    primary_bureau: str
    major_discrepancies: list[str] = Field(default_factory=list)


class FinancialSummary(_Record):
    total_balance: float = 0
    monthly_income: float = 0
    monthly_expenses: float = 0
    net_cash_flow: float = 0
    account_age: int = 0
    overdraft_count: int = 0


class RiskIndicators(_Record):
    irregular_income_pattern: bool = False
    high_overdraft_frequency: bool = False
    gambling_activity: bool = False
    cryptocurrency_activity: bool = False
    large_unexplained_deposits: bool = False


class CustomerFinancialProfile(_Record):
    """Read-only aggregated snapshot of a verified customer."""

    customer_id: str
    customer_info: CustomerInfo
    credit_reports: dict[str, CreditBureauReport] = Field(default_factory=dict)
    bank_accounts: list[BankAccount] = Field(default_factory=list)
    financial_summary: FinancialSummary = Field(default_factory=FinancialSummary)
    risk_indicators: RiskIndicators = Field(default_factory=RiskIndicators)
    last_updated: datetime
    verification_id: str | None = None


class CustomerNote(_Record):
    id: str
    customer_id: str
    content: str
    agent_id: str
    created_at: datetime


class CustomerFlag(_Record):
    id: str
    customer_id: str
    type: str
    reason: str
    agent_id: str
    created_at: datetime


# ---------------------------------------------------------------------------
# Campaigns
# ---------------------------------------------------------------------------


class CampaignBranding(_Record):
    bank_name: str
    primary_color: str = "#1e40af"
    secondary_color: str = "#f1f5f9"
    logo: str = ""
    font_family: str = "Inter"


class Campaign(_Record):
    """Public self-registration entry point that creates verifications."""

    id: str
    public_id: str
    name: str
    description: str = ""
    country: str = "US"
    status: CampaignStatus = CampaignStatus.ACTIVE
    branding: CampaignBranding
    created_at: datetime
    clicks: int = 0
    conversions: int = 0


# ---------------------------------------------------------------------------
# Audit trail
# ---------------------------------------------------------------------------


class AuditEvent(_Record):
    """Append-only borrower audit entry with hash chain linkage."""

    id: int
    event_type: AuditEventType
    timestamp: datetime
    token: str | None = None
    path: str | None = None
    event_data: dict | None = None
    prev_hash: str
