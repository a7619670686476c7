# This project was developed with assistance from AI tools.
"""Tests for RBAC enforcement across staff routes."""

import pytest
from db import get_store
from db.enums import UserRole
from fastapi.testclient import TestClient

from src.core.auth import permissions_for
from src.main import app
from src.middleware.auth import get_current_user
from src.schemas.auth import UserContext
from src.services.notifications import get_notification_service


def _user(role: UserRole) -> UserContext:
    return UserContext(
        user_id=f"usr_{role.value}",
        role=role,
        email=f"{role.value}@example.com",
        name=role.value.title(),
        permissions=permissions_for(role),
    )


@pytest.fixture
def as_role(seeded_store, notifier):
    """Return a factory building a TestClient authenticated as a given role."""

    def _make(role: UserRole) -> TestClient:
        app.dependency_overrides[get_current_user] = lambda: _user(role)
        app.dependency_overrides[get_store] = lambda: seeded_store
        app.dependency_overrides[get_notification_service] = lambda: notifier
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


_NEW_VERIFICATION = {"customer_info": {"full_name": "Eka T", "email": "eka@example.com"}}
_FLAG = {"type": "manual_review", "reason": "Income does not match stated employer"}
_CAMPAIGN = {"name": "Autumn drive"}

# (method, path, json, expected status for admin / supervisor / agent)
_MATRIX = [
    ("GET", "/api/verifications/", None, (200, 200, 200)),
    ("POST", "/api/verifications/", _NEW_VERIFICATION, (201, 403, 201)),
    ("POST", "/api/verifications/ver_003/cancel", None, (200, 200, 200)),
    ("GET", "/api/dashboard/stats", None, (200, 200, 200)),
    ("GET", "/api/customers/", None, (200, 200, 200)),
    ("GET", "/api/customers/cust_001", None, (200, 200, 200)),
    ("POST", "/api/customers/cust_001/flags", _FLAG, (201, 201, 403)),
    ("GET", "/api/campaigns/", None, (200, 200, 403)),
    ("POST", "/api/campaigns/", _CAMPAIGN, (201, 403, 403)),
    ("DELETE", "/api/campaigns/camp_003", None, (204, 403, 403)),
    ("GET", "/api/admin/seed/status", None, (200, 403, 403)),
    ("GET", "/api/admin/audit?token=abc123", None, (200, 200, 403)),
]
_ROLES = (UserRole.ADMIN, UserRole.SUPERVISOR, UserRole.AGENT)


@pytest.mark.parametrize("role", _ROLES)
@pytest.mark.parametrize("method,path,body,expected", _MATRIX)
def test_permission_matrix(as_role, role, method, path, body, expected):
    client = as_role(role)
    resp = client.request(method, path, json=body)
    assert resp.status_code == expected[_ROLES.index(role)], resp.text


def test_forbidden_is_problem_details(as_role):
    resp = as_role(UserRole.AGENT).get("/api/campaigns/")
    assert resp.status_code == 403
    body = resp.json()
    assert body["title"] == "Forbidden"
    assert body["detail"] == "Insufficient permissions"


def test_agent_customer_view_masks_identifiers(as_role, seeded_store):
    seeded_store.get_customer("cust_001").customer_info.social_security_number = "123-45-6789"
    resp = as_role(UserRole.AGENT).get("/api/customers/cust_001")
    assert resp.status_code == 200
    assert resp.json()["customer_info"]["social_security_number"] == "XXX-XX-6789"
