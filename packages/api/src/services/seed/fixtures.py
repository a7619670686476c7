# This project was developed with assistance from AI tools.
"""
Demo fixture data for the verification platform.

All fixture data is defined as Python dicts so enums can be referenced directly.
Timestamps are offsets from the moment of seeding (negative is in the past),
so statuses like "expires in 16 hours" stay true whenever the seed runs.

Simulated for demonstration purposes -- not real customer data.
"""

import hashlib
import json
from datetime import timedelta

from db.enums import (
    AccountType,
    CampaignStatus,
    SendMethod,
    TransactionStatus,
    TransactionType,
    UserRole,
    VerificationStatus,
)


def _hours(n: float) -> timedelta:
    return timedelta(hours=n)


def _days(n: float) -> timedelta:
    return timedelta(days=n)


def _minutes(n: float) -> timedelta:
    return timedelta(minutes=n)


DEMO_PASSWORD = "password123"

# ---------------------------------------------------------------------------
# Staff users
# ---------------------------------------------------------------------------

ADMIN_ID = "usr_admin"
AGENT1_ID = "usr_agent1"
AGENT2_ID = "usr_agent2"
SUPERVISOR_ID = "usr_supervisor"

USERS: list[dict] = [
    {"id": ADMIN_ID, "email": "admin@example.com", "name": "Admin User", "role": UserRole.ADMIN},
    {"id": AGENT1_ID, "email": "agent1@example.com", "name": "Alex Rivera", "role": UserRole.AGENT},
    {"id": AGENT2_ID, "email": "agent2@example.com", "name": "Priya Shah", "role": UserRole.AGENT},
    {
        "id": SUPERVISOR_ID,
        "email": "supervisor@example.com",
        "name": "Morgan Lee",
        "role": UserRole.SUPERVISOR,
    },
]

# ---------------------------------------------------------------------------
# Verification requests
# ---------------------------------------------------------------------------
# The last three are borrower demo links: one needing every personal field,
# one needing some, and one already past its deadline.

SFCU_TOKEN = "sfcu_2024_ajohnson"
VALID_TOKEN = "valid-token"
EXPIRED_TOKEN = "expired-token"

VERIFICATIONS: list[dict] = [
    {
        "id": "ver_001",
        "token": "abc123",
        "customer_info": {
            "full_name": "John Smith",
            "email": "john.smith@example.com",
            "phone_number": "+1 (555) 123-4567",
        },
        "settings": {
            "expiration_days": 7,
            "send_method": SendMethod.EMAIL,
            "include_reminders": True,
            "agent_notes": "High priority customer - needs quick turnaround",
        },
        "status": VerificationStatus.COMPLETED,
        "timeline": {
            "created_at": -_days(3),
            "sent_at": -_days(3) + _minutes(5),
            "customer_started_at": -_days(2),
            "bank_connected_at": -_days(2) + _minutes(30),
            "completed_at": -_days(2) + _minutes(45),
            "expires_at": _days(4),
        },
        "created_by": "admin@example.com",
        "customer_id": "cust_001",
        "connected_accounts": 2,
        "attempts": 1,
        "last_activity": -_days(2) + _minutes(45),
    },
    {
        "id": "ver_002",
        "token": "def456",
        "customer_info": {
            "full_name": "Sarah Johnson",
            "email": "sarah.johnson@example.com",
            "phone_number": "+1 (555) 987-6543",
        },
        "settings": {
            "expiration_days": 7,
            "send_method": SendMethod.BOTH,
            "include_reminders": True,
            "agent_notes": "Customer requested SMS notifications",
        },
        "status": VerificationStatus.IN_PROGRESS,
        "timeline": {
            "created_at": -_days(1),
            "sent_at": -_days(1) + _minutes(2),
            "customer_started_at": -_hours(4),
            "expires_at": _days(6),
        },
        "created_by": "admin@example.com",
        "customer_id": "cust_002_high_risk",
        "connected_accounts": 1,
        "attempts": 1,
        "last_activity": -_hours(4),
    },
    {
        "id": "ver_003",
        "token": "ghi789",
        "customer_info": {
            "full_name": "Mike Davis",
            "email": "mike.davis@example.com",
            "phone_number": "+1 (555) 456-7890",
        },
        "settings": {
            "expiration_days": 3,
            "send_method": SendMethod.EMAIL,
            "include_reminders": False,
            "agent_notes": "Urgent verification for loan application",
        },
        "status": VerificationStatus.SENT,
        "timeline": {
            "created_at": -_hours(8),
            "sent_at": -_hours(8) + _minutes(1),
            "expires_at": _hours(16),
        },
        "created_by": "admin@example.com",
        "customer_id": "cust_003",
        "connected_accounts": 0,
        "attempts": 0,
    },
    {
        "id": "ver_004",
        "token": "jkl012",
        "customer_info": {
            "full_name": "Emily Wilson",
            "email": "emily.wilson@example.com",
            "phone_number": "+1 (555) 321-0987",
        },
        "settings": {
            "expiration_days": 7,
            "send_method": SendMethod.SMS,
            "include_reminders": True,
        },
        "status": VerificationStatus.EXPIRED,
        "timeline": {
            "created_at": -_days(10),
            "sent_at": -_days(10) + _minutes(3),
            "expires_at": -_days(3),
        },
        "created_by": "admin@example.com",
        "connected_accounts": 0,
        "attempts": 0,
    },
    {
        "id": "ver_005",
        "token": "mno345",
        "customer_info": {
            "full_name": "Robert Brown",
            "email": "robert.brown@example.com",
            "phone_number": "+1 (555) 654-3210",
        },
        "settings": {
            "expiration_days": 14,
            "send_method": SendMethod.EMAIL,
            "include_reminders": True,
            "agent_notes": "VIP customer - priority handling required",
        },
        "status": VerificationStatus.PENDING,
        "timeline": {
            "created_at": -_minutes(30),
            "expires_at": _days(13) + _minutes(30),
        },
        "created_by": "admin@example.com",
        "connected_accounts": 0,
        "attempts": 0,
    },
    {
        "id": "ver_006",
        "token": "pqr678",
        "customer_info": {
            "full_name": "Lisa Anderson",
            "email": "lisa.anderson@example.com",
            "phone_number": "+1 (555) 789-0123",
        },
        "settings": {
            "expiration_days": 7,
            "send_method": SendMethod.BOTH,
            "include_reminders": True,
            "agent_notes": "Customer prefers morning communications",
        },
        "status": VerificationStatus.FAILED,
        "timeline": {
            "created_at": -_days(5),
            "sent_at": -_days(5) + _minutes(10),
            "customer_started_at": -_days(4),
            "expires_at": _days(2),
        },
        "created_by": "admin@example.com",
        "connected_accounts": 0,
        "attempts": 3,
        "last_activity": -_days(4) + _minutes(15),
    },
    {
        "id": "ver_007",
        "token": "stu901",
        "customer_info": {
            "full_name": "David Thompson",
            "email": "david.thompson@example.com",
            "phone_number": "+1 (555) 234-5678",
        },
        "settings": {
            "expiration_days": 5,
            "send_method": SendMethod.EMAIL,
            "include_reminders": True,
            "agent_notes": "Follow up required - customer had technical issues",
        },
        "status": VerificationStatus.IN_PROGRESS,
        "timeline": {
            "created_at": -_hours(12),
            "sent_at": -_hours(12) + _minutes(5),
            "customer_started_at": -_hours(2),
            "expires_at": _days(4) + _hours(12),
        },
        "created_by": "agent1@example.com",
        "connected_accounts": 0,
        "attempts": 1,
        "last_activity": -_hours(2),
    },
    {
        "id": "ver_008",
        "token": "vwx234",
        "customer_info": {
            "full_name": "Jennifer Martinez",
            "email": "jennifer.martinez@example.com",
            "phone_number": "+1 (555) 345-6789",
        },
        "settings": {
            "expiration_days": 10,
            "send_method": SendMethod.SMS,
            "include_reminders": False,
            "agent_notes": "Customer requested no email communications",
        },
        "status": VerificationStatus.COMPLETED,
        "timeline": {
            "created_at": -_days(6),
            "sent_at": -_days(6) + _minutes(2),
            "customer_started_at": -_days(5),
            "bank_connected_at": -_days(5) + _minutes(45),
            "completed_at": -_days(5) + _minutes(60),
            "expires_at": _days(4),
        },
        "created_by": "agent2@example.com",
        "connected_accounts": 3,
        "attempts": 1,
        "last_activity": -_days(5) + _minutes(60),
    },
    {
        "id": "ver_sfcu_ajohnson",
        "token": SFCU_TOKEN,
        "customer_info": {
            "full_name": "Amanda Johnson",
            "email": "amanda.johnson@gmail.com",
            "phone_number": "+1 (555) 456-7890",
        },
        "settings": {"expiration_days": 7, "send_method": SendMethod.EMAIL},
        "status": VerificationStatus.SENT,
        "timeline": {
            "created_at": -_hours(1),
            "sent_at": -_hours(1),
            "expires_at": _days(7),
        },
        "created_by": "admin@example.com",
        "bank_name": "SpringFin Credit Union",
    },
    {
        "id": "ver_demo_valid",
        "token": VALID_TOKEN,
        "customer_info": {
            "full_name": "John Doe",
            "email": "john.doe@example.com",
            "phone_number": "+1 (555) 123-4567",
            "nationality": "Georgian",
            "identification_number": "01234567890",
            "residing_country": "United States",
        },
        "settings": {"expiration_days": 7, "send_method": SendMethod.EMAIL},
        "status": VerificationStatus.SENT,
        "timeline": {
            "created_at": -_hours(2),
            "sent_at": -_hours(2),
            "expires_at": _days(7),
        },
        "created_by": "admin@example.com",
        "bank_name": "Demo Bank Inc.",
    },
    {
        "id": "ver_demo_expired",
        "token": EXPIRED_TOKEN,
        "customer_info": {
            "full_name": "Jane Expired",
            "email": "jane.expired@example.com",
            "phone_number": "+1 (555) 000-1111",
        },
        "settings": {"expiration_days": 7, "send_method": SendMethod.EMAIL},
        "status": VerificationStatus.SENT,
        "timeline": {
            "created_at": -_days(8),
            "sent_at": -_days(8),
            "expires_at": -_days(1),
        },
        "created_by": "admin@example.com",
        "bank_name": "Demo Bank Inc.",
    },
]

# ---------------------------------------------------------------------------
# Customer financial profiles
# ---------------------------------------------------------------------------


def _bureau(score, grade, updated, total, used, pct, on_time, late) -> dict:
    return {
        "score": score,
        "grade": grade,
        "last_updated": updated,
        "utilization": {
            "total_credit": total,
            "used_credit": used,
            "utilization_percentage": pct,
        },
        "payment_history": {"on_time_percentage": on_time, "recent_late_payments": late},
    }


CUSTOMERS: list[dict] = [
    {
        "customer_id": "cust_001",
        "customer_info": {
            "full_name": "Alice Wonderland",
            "email": "alice.wonder@example.com",
            "phone_number": "+15551234567",
        },
        "credit_reports": {
            "equifax": _bureau(745, "A", "2024-01-15", 25000, 3200, 12.8, 98, 0),
            "experian": _bureau(752, "A", "2024-01-12", 26500, 3400, 12.8, 98, 0),
            "transunion": _bureau(738, "B", "2024-01-10", 25000, 3100, 12.4, 96, 1),
        },
        "bank_accounts": [
            {
                "account_id": "acc_chk_1",
                "bank_name": "Chase",
                "account_type": AccountType.CHECKING,
                "account_number": "xxxx1234",
                "balance": 5230.50,
                "opened_years_ago": 3,
            },
            {
                "account_id": "acc_sav_1",
                "bank_name": "Bank of America",
                "account_type": AccountType.SAVINGS,
                "account_number": "xxxx5678",
                "balance": 15780.22,
                "opened_years_ago": 5,
            },
            {
                "account_id": "acc_crd_1",
                "bank_name": "Capital One",
                "account_type": AccountType.CREDIT,
                "account_number": "xxxx9012",
                "balance": -1250.75,
                "opened_years_ago": 2,
            },
        ],
        "financial_summary": {
            "total_balance": 19759.97,
            "monthly_income": 6500,
            "monthly_expenses": 4200,
            "net_cash_flow": 2300,
            "account_age": 5,
            "overdraft_count": 1,
        },
        "risk_indicators": {"cryptocurrency_activity": True},
        "verification_id": "ver_001",
        "updated_ago": _days(1),
    },
    {
        "customer_id": "cust_002_high_risk",
        "customer_info": {
            "full_name": "Bob The Builder",
            "email": "bob.builder@example.com",
            "phone_number": "+15557654321",
        },
        "credit_reports": {
            "equifax": _bureau(620, "C", "2024-01-14", 15000, 12500, 83.3, 78, 3),
            "experian": _bureau(595, "D", "2024-01-11", 16000, 13200, 82.5, 72, 4),
            "transunion": _bureau(648, "C", "2024-01-09", 15500, 12800, 82.6, 81, 2),
        },
        "bank_accounts": [
            {
                "account_id": "acc_chk_b1",
                "bank_name": "Wells Fargo",
                "account_type": AccountType.CHECKING,
                "account_number": "xxxx4321",
                "balance": 5200.10,
                "opened_years_ago": 1,
            },
        ],
        "financial_summary": {
            "total_balance": 5200.10,
            "monthly_income": 3100,
            "monthly_expenses": 3450,
            "net_cash_flow": -350,
            "account_age": 1,
            "overdraft_count": 5,
        },
        "risk_indicators": {"irregular_income_pattern": True, "high_overdraft_frequency": True},
        "verification_id": "ver_002",
        "updated_ago": _days(2),
    },
    {
        "customer_id": "cust_003",
        "customer_info": {
            "full_name": "Charlie Chaplin",
            "email": "charlie.chaplin@example.com",
            "phone_number": "+15551112222",
        },
        "credit_reports": {
            "equifax": _bureau(810, "A", "2024-01-13", 150000, 120000, 80, 95, 0),
            "experian": _bureau(820, "A", "2024-01-10", 150000, 120000, 80, 95, 0),
            "transunion": _bureau(800, "A", "2024-01-08", 150000, 120000, 80, 95, 0),
        },
        "bank_accounts": [
            {
                "account_id": "acc_chk_c1",
                "bank_name": "Citibank",
                "account_type": AccountType.CHECKING,
                "account_number": "xxxx2468",
                "balance": 150000.00,
                "opened_years_ago": 12,
            },
        ],
        "financial_summary": {
            "total_balance": 150000.00,
            "monthly_income": 18000,
            "monthly_expenses": 9500,
            "net_cash_flow": 8500,
            "account_age": 12,
            "overdraft_count": 0,
        },
        "risk_indicators": {},
        "verification_id": "ver_003",
        "updated_ago": _days(3),
    },
]

# ---------------------------------------------------------------------------
# Transactions, keyed by customer
# ---------------------------------------------------------------------------


def _txn(
    txn_id, account_id, amount, days_ago, description, category, status=TransactionStatus.POSTED
):
    return {
        "id": txn_id,
        "account_id": account_id,
        "amount": amount,
        "ago": _days(days_ago),
        "description": description,
        "category": category,
        "type": TransactionType.CREDIT if amount > 0 else TransactionType.DEBIT,
        "status": status,
    }


TRANSACTIONS: dict[str, list[dict]] = {
    "cust_001": [
        _txn("txn_1", "acc_chk_1", -54.20, 1, "Grocery Store Purchase", ["Groceries"]),
        _txn("txn_2", "acc_chk_1", 6500.00, 2, "Salary - Acme Corp", ["Income", "Salary"]),
        _txn("txn_3", "acc_crd_1", -85.00, 3, "Netflix Subscription", ["Entertainment"]),
        _txn("txn_4", "acc_sav_1", -200.00, 4, "Transfer to Checking", ["Transfers"]),
        _txn("txn_5", "acc_chk_1", 200.00, 4, "Transfer from Savings", ["Transfers"]),
        _txn(
            "txn_6", "acc_chk_1", -120.00, 5, "Restaurant - The Italian Place",
            ["Food & Dining", "Restaurants"],
        ),
        _txn("txn_7", "acc_crd_1", -30.50, 6, "Coffee Shop", ["Food & Dining", "Coffee"]),
        _txn("txn_8", "acc_chk_1", -70.00, 7, "AT&T Internet Bill", ["Utilities", "Internet"]),
        _txn("txn_9", "acc_chk_1", -1500.00, 8, "Rent Payment", ["Housing", "Rent"]),
        _txn(
            "txn_10", "acc_crd_1", -250.00, 9, "Amazon Purchase", ["Shopping"],
            status=TransactionStatus.PENDING,
        ),
    ],
    "cust_002_high_risk": [
        _txn("txn_b1", "acc_chk_b1", 1800.00, 3, "Cash Deposit", ["Income", "Deposit"]),
        _txn("txn_b2", "acc_chk_b1", -35.00, 5, "Overdraft Fee", ["Bank Fees"]),
        _txn("txn_b3", "acc_chk_b1", -1350.00, 6, "Rent Payment", ["Housing", "Rent"]),
        _txn(
            "txn_b4", "acc_chk_b1", 1300.00, 20, "Contract Work - BuildCo", ["Income", "Contract"]
        ),
        _txn("txn_b5", "acc_chk_b1", -35.00, 22, "Overdraft Fee", ["Bank Fees"]),
    ],
    "cust_003": [
        _txn("txn_c1", "acc_chk_c1", 18000.00, 2, "Salary - Studio Pictures", ["Income", "Salary"]),
        _txn("txn_c2", "acc_chk_c1", -4200.00, 4, "Mortgage Payment", ["Housing", "Mortgage"]),
        _txn("txn_c3", "acc_chk_c1", -640.00, 6, "Travel - Airline Tickets", ["Travel"]),
    ],
}

# ---------------------------------------------------------------------------
# Campaigns
# ---------------------------------------------------------------------------

_BRANDING = {
    "bank_name": "SpringFin Credit Union",
    "primary_color": "#1e40af",
    "secondary_color": "#f1f5f9",
    "logo": "",
    "font_family": "Inter",
}

CAMPAIGNS: list[dict] = [
    {
        "id": "camp_001",
        "public_id": "1247856390",
        "name": "Facebook Community Group",
        "description": "Targeting local Facebook community groups for loan applications",
        "status": CampaignStatus.ACTIVE,
        "created_at": "2024-01-15T00:00:00+00:00",
        "clicks": 156,
        "conversions": 42,
    },
    {
        "id": "camp_002",
        "public_id": "9384756210",
        "name": "Email Newsletter Q1",
        "description": "Monthly newsletter campaign for Q1 2024",
        "status": CampaignStatus.ACTIVE,
        "created_at": "2024-01-01T00:00:00+00:00",
        "clicks": 89,
        "conversions": 31,
    },
    {
        "id": "camp_003",
        "public_id": "5672891043",
        "name": "Website Banner",
        "description": "Main website banner for home loan promotions",
        "status": CampaignStatus.PAUSED,
        "created_at": "2023-12-20T00:00:00+00:00",
        "clicks": 234,
        "conversions": 67,
    },
]
for _campaign in CAMPAIGNS:
    _campaign["branding"] = dict(_BRANDING)


def compute_config_hash() -> str:
    """Compute a SHA-256 hash of the fixture data for idempotency checks."""
    content = json.dumps(
        {
            "user_ids": [u["id"] for u in USERS],
            "verification_ids": [v["id"] for v in VERIFICATIONS],
            "customer_ids": [c["customer_id"] for c in CUSTOMERS],
            "transaction_count": sum(len(t) for t in TRANSACTIONS.values()),
            "campaign_ids": [c["id"] for c in CAMPAIGNS],
        },
        sort_keys=True,
    )
    return hashlib.sha256(content.encode()).hexdigest()
