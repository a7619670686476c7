# This project was developed with assistance from AI tools.
"""Tests for demo data seeding service and admin endpoints."""

import pytest
from db import InMemoryStore, get_store
from db.enums import UserRole, VerificationStatus
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.core.auth import permissions_for, verify_password
from src.middleware.auth import get_current_user
from src.routes.admin import router
from src.schemas.auth import UserContext
from src.services.seed.fixtures import (
    CAMPAIGNS,
    CUSTOMERS,
    DEMO_PASSWORD,
    TRANSACTIONS,
    USERS,
    VERIFICATIONS,
    compute_config_hash,
)
from src.services.seed.seeder import get_seed_status, seed_demo_data

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _user(role: UserRole) -> UserContext:
    return UserContext(
        user_id=f"usr_{role.value}",
        role=role,
        email=f"{role.value}@example.com",
        name=role.value.title(),
        permissions=permissions_for(role),
    )


def _make_app(store: InMemoryStore, role: UserRole = UserRole.ADMIN) -> FastAPI:
    """Build a test app with admin routes and mocked auth."""
    app = FastAPI()
    app.include_router(router, prefix="/api/admin")
    app.dependency_overrides[get_current_user] = lambda: _user(role)
    app.dependency_overrides[get_store] = lambda: store
    return app


# ---------------------------------------------------------------------------
# Fixture data
# ---------------------------------------------------------------------------


def test_fixture_ids_unique():
    assert len({v["id"] for v in VERIFICATIONS}) == len(VERIFICATIONS)
    assert len({v["token"] for v in VERIFICATIONS}) == len(VERIFICATIONS)
    assert len({c["public_id"] for c in CAMPAIGNS}) == len(CAMPAIGNS)


def test_transactions_belong_to_known_customers():
    customer_ids = {c["customer_id"] for c in CUSTOMERS}
    assert set(TRANSACTIONS) <= customer_ids


def test_config_hash_is_stable():
    assert compute_config_hash() == compute_config_hash()
    assert len(compute_config_hash()) == 64


# ---------------------------------------------------------------------------
# Service layer
# ---------------------------------------------------------------------------


def test_seed_populates_store(store):
    result = seed_demo_data(store)

    assert result["status"] == "seeded"
    assert result["users"] == len(USERS)
    assert result["verifications"] == 11
    assert result["customers"] == 3
    assert result["transactions"] == 18
    assert result["campaigns"] == 3
    assert store.seeded_at is not None
    assert store.find_verification_by_token("valid-token").id == "ver_demo_valid"


def test_seeded_passwords_verify(store):
    seed_demo_data(store)
    admin = store.users["usr_admin"]
    assert verify_password(DEMO_PASSWORD, admin.password_hash)


def test_seed_relative_timestamps(store):
    seed_demo_data(store)
    v = store.get_verification("ver_003")
    assert v.status == VerificationStatus.SENT
    assert v.timeline.expires_at > store.seeded_at


def test_seed_is_idempotent(store):
    seed_demo_data(store)
    again = seed_demo_data(store)
    assert again["status"] == "already_seeded"
    assert again["config_hash"] == compute_config_hash()
    assert len(store.verifications) == 11


def test_force_reseed_discards_changes(store):
    seed_demo_data(store)
    store.verifications.pop("ver_001")

    result = seed_demo_data(store, force=True)
    assert result["status"] == "seeded"
    assert "ver_001" in store.verifications


def test_seed_writes_audit_event(store):
    seed_demo_data(store)
    assert store.audit_events[-1].event_data["action"] == "demo_data_seeded"


def test_status_before_and_after(store):
    assert get_seed_status(store) == {"seeded": False}
    seed_demo_data(store)
    status = get_seed_status(store)
    assert status["seeded"] is True
    assert status["summary"]["campaigns"] == 3


# ---------------------------------------------------------------------------
# Admin endpoints
# ---------------------------------------------------------------------------


def test_seed_endpoint(store):
    client = TestClient(_make_app(store))

    resp = client.post("/api/admin/seed")
    assert resp.status_code == 200
    assert resp.json()["status"] == "seeded"

    resp = client.post("/api/admin/seed")
    assert resp.json()["status"] == "already_seeded"

    resp = client.post("/api/admin/seed", params={"force": "true"})
    assert resp.json()["status"] == "seeded"


def test_seed_status_endpoint(store):
    client = TestClient(_make_app(store))
    assert client.get("/api/admin/seed/status").json()["seeded"] is False
    client.post("/api/admin/seed")
    body = client.get("/api/admin/seed/status").json()
    assert body["seeded"] is True
    assert body["config_hash"] == compute_config_hash()


@pytest.mark.parametrize("role", [UserRole.AGENT, UserRole.SUPERVISOR])
def test_seed_endpoint_admin_only(store, role):
    resp = TestClient(_make_app(store, role)).post("/api/admin/seed")
    assert resp.status_code == 403
    assert store.seeded_at is None
