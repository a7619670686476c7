# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .enums import (
    AccountType,
    AggregatorProvider,
    AuditEventType,
    BorrowerStep,
    CampaignStatus,
    CreditBureau,
    ErrorKind,
    PermissionAction,
    PermissionResource,
    RiskLevel,
    SendMethod,
    TransactionStatus,
    TransactionType,
    UserRole,
    VerificationStatus,
)
from .models import (
    AuditEvent,
    BankAccount,
    BorrowerSession,
    Campaign,
    CampaignBranding,
    CompletionDetails,
    ConnectedAccount,
    ConsentRecord,
    CreditBureauReport,
    CreditSummary,
    CustomerFinancialProfile,
    CustomerFlag,
    CustomerInfo,
    CustomerNote,
    FinancialSummary,
    Permission,
    RiskIndicators,
    Transaction,
    User,
    VerificationRequest,
    VerificationSettings,
    VerificationTimeline,
)
from .store import InMemoryStore, get_store, reset_store, utcnow

__all__ = [
    "InMemoryStore",
    "get_store",
    "reset_store",
    "utcnow",
    "__version__",
    # Enums
    "AccountType",
    "AggregatorProvider",
    "AuditEventType",
    "BorrowerStep",
    "CampaignStatus",
    "CreditBureau",
    "ErrorKind",
    "PermissionAction",
    "PermissionResource",
    "RiskLevel",
    "SendMethod",
    "TransactionStatus",
    "TransactionType",
    "UserRole",
    "VerificationStatus",
    # Records
    "AuditEvent",
    "BankAccount",
    "BorrowerSession",
    "Campaign",
    "CampaignBranding",
    "CompletionDetails",
    "ConnectedAccount",
    "ConsentRecord",
    "CreditBureauReport",
    "CreditSummary",
    "CustomerFinancialProfile",
    "CustomerFlag",
    "CustomerInfo",
    "CustomerNote",
    "FinancialSummary",
    "Permission",
    "RiskIndicators",
    "Transaction",
    "User",
    "VerificationRequest",
    "VerificationSettings",
    "VerificationTimeline",
]
