# This project was developed with assistance from AI tools.
"""
Domain enums for the bank account verification lifecycle.

Shared domain types used by both the in-memory store (db package)
and Pydantic schemas (api package).
"""

import enum


class VerificationStatus(str, enum.Enum):
    PENDING = "pending"
    SENT = "sent"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    EXPIRED = "expired"
    FAILED = "failed"

    @classmethod
    def terminal_statuses(cls) -> frozenset["VerificationStatus"]:
        """Statuses no admin action can move a verification out of."""
        return frozenset({cls.COMPLETED})

    @classmethod
    def open_statuses(cls) -> frozenset["VerificationStatus"]:
        """Statuses where the borrower link is still usable."""
        return frozenset({cls.PENDING, cls.SENT, cls.IN_PROGRESS})

    @classmethod
    def valid_transitions(cls) -> dict["VerificationStatus", frozenset["VerificationStatus"]]:
        """Allowed status transitions for a verification request."""
        return {
            cls.PENDING: frozenset({cls.SENT, cls.IN_PROGRESS, cls.EXPIRED, cls.FAILED}),
            cls.SENT: frozenset({cls.SENT, cls.IN_PROGRESS, cls.EXPIRED, cls.FAILED}),
            cls.IN_PROGRESS: frozenset({cls.COMPLETED, cls.EXPIRED, cls.FAILED}),
            cls.EXPIRED: frozenset({cls.SENT}),
            cls.FAILED: frozenset({cls.SENT}),
            cls.COMPLETED: frozenset(),
        }


class SendMethod(str, enum.Enum):
    EMAIL = "email"
    SMS = "sms"
    BOTH = "both"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    AGENT = "agent"
    SUPERVISOR = "supervisor"


class PermissionResource(str, enum.Enum):
    VERIFICATIONS = "verifications"
    CUSTOMERS = "customers"
    REPORTS = "reports"
    SETTINGS = "settings"


class PermissionAction(str, enum.Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class AggregatorProvider(str, enum.Enum):
    STRIPE = "stripe"
    TELLER = "teller"


class BorrowerStep(str, enum.Enum):
    WELCOME = "welcome"
    CUSTOMER_INFO = "customer_info"
    CONSENT = "consent"
    CONNECT = "connect"
    COMPLETE = "complete"

    @property
    def path_segment(self) -> str:
        """URL segment under ``/verify/{token}`` for this step."""
        if self is BorrowerStep.WELCOME:
            return ""
        return self.value.replace("_", "-")


class ErrorKind(str, enum.Enum):
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    NETWORK_ERROR = "network_error"
    CONNECTION_FAILED = "connection_failed"
    CONSENT_FAILED = "consent_failed"
    CONSENT_DECLINED = "consent_declined"
    COMPLETION_FAILED = "completion_failed"
    UNKNOWN = "unknown"


class AuditEventType(str, enum.Enum):
    PAGE_VIEW = "page_view"
    ACTION = "action"
    ERROR = "error"
    CONSENT_CHANGE = "consent_change"
    CONNECTION_ATTEMPT = "connection_attempt"
    CONNECTION_SUCCESS = "connection_success"
    CONNECTION_FAILURE = "connection_failure"


class CampaignStatus(str, enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class AccountType(str, enum.Enum):
    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"
    INVESTMENT = "investment"


class TransactionType(str, enum.Enum):
    DEBIT = "debit"
    CREDIT = "credit"


class TransactionStatus(str, enum.Enum):
    PENDING = "pending"
    POSTED = "posted"


class CreditBureau(str, enum.Enum):
    EQUIFAX = "equifax"
    EXPERIAN = "experian"
    TRANSUNION = "transunion"


class RiskLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
