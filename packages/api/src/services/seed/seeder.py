# This project was developed with assistance from AI tools.
"""Demo data seeding service.

Seeds the store with staff users, verification requests in every status,
borrower demo links, customer financial profiles, transactions, and
campaigns so the admin dashboard and borrower wizard have data to explore
immediately after startup.

Simulated for demonstration purposes -- not real customer data.
"""

import logging
from datetime import datetime, timedelta

from db import (
    BankAccount,
    Campaign,
    CustomerFinancialProfile,
    InMemoryStore,
    Transaction,
    User,
    VerificationRequest,
    utcnow,
)

from ...core.auth import hash_password
from ..audit import write_audit_event
from ..verification import build_verification_link
from .fixtures import (
    CAMPAIGNS,
    CUSTOMERS,
    DEMO_PASSWORD,
    TRANSACTIONS,
    USERS,
    VERIFICATIONS,
    compute_config_hash,
)

logger = logging.getLogger(__name__)


def _resolve(offset: timedelta | None, now: datetime) -> datetime | None:
    return now + offset if offset is not None else None


def _build_verification(data: dict, now: datetime) -> VerificationRequest:
    timeline = {key: _resolve(offset, now) for key, offset in data["timeline"].items()}
    return VerificationRequest(
        id=data["id"],
        customer_info=data["customer_info"],
        settings=data["settings"],
        status=data["status"],
        timeline=timeline,
        verification_link=build_verification_link(data["token"]),
        verification_token=data["token"],
        created_by=data["created_by"],
        bank_name=data.get("bank_name"),
        customer_id=data.get("customer_id"),
        connected_accounts=data.get("connected_accounts", 0),
        attempts=data.get("attempts", 0),
        last_activity=_resolve(data.get("last_activity"), now),
    )


def _build_customer(data: dict, now: datetime) -> CustomerFinancialProfile:
    accounts = []
    for account in data["bank_accounts"]:
        opened = now - timedelta(days=365 * account["opened_years_ago"])
        accounts.append(
            BankAccount(
                account_id=account["account_id"],
                bank_name=account["bank_name"],
                account_type=account["account_type"],
                account_number=account["account_number"],
                balance=account["balance"],
                available_balance=account["balance"],
                opened_date=opened.date().isoformat(),
            )
        )
    return CustomerFinancialProfile(
        customer_id=data["customer_id"],
        customer_info=data["customer_info"],
        credit_reports=data["credit_reports"],
        bank_accounts=accounts,
        financial_summary=data["financial_summary"],
        risk_indicators=data["risk_indicators"],
        last_updated=now - data["updated_ago"],
        verification_id=data.get("verification_id"),
    )


def _build_transaction(data: dict, now: datetime) -> Transaction:
    fields = {k: v for k, v in data.items() if k != "ago"}
    return Transaction(date=now - data["ago"], **fields)


def _summary() -> dict:
    return {
        "users": len(USERS),
        "verifications": len(VERIFICATIONS),
        "customers": len(CUSTOMERS),
        "transactions": sum(len(rows) for rows in TRANSACTIONS.values()),
        "campaigns": len(CAMPAIGNS),
    }


def seed_demo_data(store: InMemoryStore, force: bool = False) -> dict:
    """Seed demo data. Returns summary dict.

    Args:
        store: Store to populate.
        force: If True, clear and re-seed even if already seeded.

    Returns:
        Summary dict with counts of seeded records, or an
        ``already_seeded`` marker when nothing was done.
    """
    if store.seeded_at is not None and not force:
        return {
            "status": "already_seeded",
            "seeded_at": store.seeded_at.isoformat(),
            "config_hash": compute_config_hash(),
        }

    if store.seeded_at is not None and force:
        store.clear()

    now = utcnow()
    password_hash = hash_password(DEMO_PASSWORD)

    for user in USERS:
        store.users[user["id"]] = User(password_hash=password_hash, **user)

    for data in VERIFICATIONS:
        store.add_verification(_build_verification(data, now))

    for data in CUSTOMERS:
        profile = _build_customer(data, now)
        store.customers[profile.customer_id] = profile

    for customer_id, rows in TRANSACTIONS.items():
        store.transactions[customer_id] = [_build_transaction(row, now) for row in rows]

    for data in CAMPAIGNS:
        campaign = Campaign.model_validate(data)
        store.campaigns[campaign.id] = campaign

    summary = _summary()
    config_hash = compute_config_hash()
    store.seeded_at = now

    write_audit_event(
        store,
        event_type="action",
        event_data={"action": "demo_data_seeded", **summary},
    )
    logger.info("Demo data seeded: %s", summary)

    return {
        "status": "seeded",
        "seeded_at": now.isoformat(),
        "config_hash": config_hash,
        **summary,
    }


def get_seed_status(store: InMemoryStore) -> dict:
    """Check if demo data has been seeded."""
    if store.seeded_at is None:
        return {"seeded": False}
    return {
        "seeded": True,
        "seeded_at": store.seeded_at.isoformat(),
        "config_hash": compute_config_hash(),
        "summary": _summary(),
    }
