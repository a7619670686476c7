# This project was developed with assistance from AI tools.
"""Tests for the borrower audit trail and its hash chain."""

import pytest
from db import InMemoryStore, get_store
from db.config import store_settings
from db.enums import AuditEventType, UserRole
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.core.auth import permissions_for
from src.middleware.auth import get_current_user
from src.routes.admin import router
from src.schemas.auth import UserContext
from src.services.audit import (
    GENESIS,
    get_audit_chain_length,
    get_events_by_token,
    verify_audit_chain,
    write_audit_event,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _user(role: UserRole) -> UserContext:
    return UserContext(
        user_id=f"usr_{role.value}",
        role=role,
        email=f"{role.value}@example.com",
        name=role.value.title(),
        permissions=permissions_for(role),
    )


def _write(store, n, token="tok-1"):
    for i in range(n):
        write_audit_event(
            store,
            event_type=AuditEventType.PAGE_VIEW,
            token=token,
            path=f"/verify/{token}",
            event_data={"i": i},
        )


# ---------------------------------------------------------------------------
# Service layer tests
# ---------------------------------------------------------------------------


def test_first_event_links_to_genesis(store):
    event = write_audit_event(store, event_type="page_view", token="tok-1")
    assert event.id == 1
    assert event.prev_hash == GENESIS
    assert event.event_type == AuditEventType.PAGE_VIEW


def test_events_are_chained(store):
    _write(store, 3)
    first, second, third = store.audit_events
    assert second.prev_hash not in (GENESIS, third.prev_hash)
    assert verify_audit_chain(store) == {"status": "OK", "events_checked": 3}


def test_empty_chain_is_ok(store):
    assert verify_audit_chain(store) == {"status": "OK", "events_checked": 0}


def test_tampering_is_detected(store):
    _write(store, 4)
    store.audit_events[1].event_data = {"i": 999}

    result = verify_audit_chain(store)
    assert result["status"] == "TAMPERED"
    assert result["first_break_id"] == 3
    assert result["events_checked"] == 3


def test_trimmed_chain_still_verifies(store, monkeypatch):
    monkeypatch.setattr(store_settings, "MAX_AUDIT_EVENTS", 3)
    _write(store, 5)

    assert get_audit_chain_length(store) == 3
    assert [e.id for e in store.audit_events] == [3, 4, 5]
    assert verify_audit_chain(store)["status"] == "OK"


def test_events_by_token(store):
    _write(store, 2, token="tok-a")
    _write(store, 1, token="tok-b")
    events = get_events_by_token(store, "tok-a")
    assert [e.event_data["i"] for e in events] == [0, 1]
    assert get_events_by_token(store, "missing") == []


# ---------------------------------------------------------------------------
# Admin route tests
# ---------------------------------------------------------------------------


@pytest.fixture
def audit_app():
    store = InMemoryStore()
    _write(store, 2, token="tok-a")
    app = FastAPI()
    app.include_router(router, prefix="/api/admin")
    app.dependency_overrides[get_store] = lambda: store
    return app


def _client(app, role):
    app.dependency_overrides[get_current_user] = lambda: _user(role)
    return TestClient(app)


@pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.SUPERVISOR])
def test_audit_query_allowed(audit_app, role):
    resp = _client(audit_app, role).get("/api/admin/audit", params={"token": "tok-a"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token"] == "tok-a"
    assert body["count"] == 2
    assert body["events"][0]["event_type"] == "page_view"


def test_audit_query_forbidden_for_agent(audit_app):
    resp = _client(audit_app, UserRole.AGENT).get("/api/admin/audit", params={"token": "tok-a"})
    assert resp.status_code == 403


def test_audit_query_requires_token(audit_app):
    resp = _client(audit_app, UserRole.ADMIN).get("/api/admin/audit")
    assert resp.status_code == 422


def test_audit_verify_admin_only(audit_app):
    ok = _client(audit_app, UserRole.ADMIN).get("/api/admin/audit/verify")
    assert ok.status_code == 200
    assert ok.json()["status"] == "OK"
    assert ok.json()["events_checked"] == 2

    denied = _client(audit_app, UserRole.SUPERVISOR).get("/api/admin/audit/verify")
    assert denied.status_code == 403
