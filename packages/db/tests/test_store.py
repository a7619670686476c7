# This project was developed with assistance from AI tools.
"""Tests for the in-process store and its record types."""

from datetime import timedelta

import pytest
from db import (
    BorrowerSession,
    CustomerInfo,
    InMemoryStore,
    VerificationRequest,
    VerificationSettings,
    VerificationTimeline,
    get_store,
    reset_store,
    utcnow,
)
from db.config import StoreSettings
from db.enums import BorrowerStep, VerificationStatus


def _verification(vid: str, token: str) -> VerificationRequest:
    now = utcnow()
    return VerificationRequest(
        id=vid,
        customer_info=CustomerInfo(full_name="Test Person", email="test@example.com"),
        settings=VerificationSettings(),
        timeline=VerificationTimeline(created_at=now, expires_at=now + timedelta(days=7)),
        verification_link=f"http://localhost/verify/{token}",
        verification_token=token,
        created_by="admin@example.com",
    )


@pytest.fixture
def store():
    return InMemoryStore()


def test_add_and_lookup_verification(store):
    v = store.add_verification(_verification("ver_a", "tok-a"))
    assert store.get_verification("ver_a") is v
    assert store.find_verification_by_token("tok-a") is v
    assert store.get_verification("ver_b") is None
    assert store.find_verification_by_token("tok-b") is None


def test_iteration_tolerates_inserts(store):
    store.add_verification(_verification("ver_a", "tok-a"))
    seen = []
    for v in store.iter_verifications():
        seen.append(v.id)
        store.add_verification(_verification("ver_b", "tok-b"))
    assert seen == ["ver_a"]
    assert len(store.verifications) == 2


def test_next_id_is_prefixed_and_unique():
    ids = {InMemoryStore.next_id("ver") for _ in range(50)}
    assert len(ids) == 50
    assert all(i.startswith("ver_") for i in ids)


def test_borrower_session_created_once(store):
    session = store.get_borrower_session("tok-a")
    assert isinstance(session, BorrowerSession)
    assert session.current_step == BorrowerStep.WELCOME
    session.consent_given = True
    assert store.get_borrower_session("tok-a").consent_given is True

    store.drop_borrower_session("tok-a")
    store.drop_borrower_session("never-existed")
    assert store.get_borrower_session("tok-a").consent_given is False


def test_missing_customer_data(store):
    assert store.get_customer("cust_x") is None
    assert store.get_transactions("cust_x") == []


def test_clear_drops_everything(store):
    store.add_verification(_verification("ver_a", "tok-a"))
    store.revoked_tokens.add("jti")
    store.filter_state["usr"] = {"search": "x"}
    store.seeded_at = utcnow()

    store.clear()

    assert store.verifications == {}
    assert store.revoked_tokens == set()
    assert store.filter_state == {}
    assert store.seeded_at is None


def test_get_store_is_a_singleton():
    first = reset_store()
    assert get_store() is first
    assert get_store() is first
    assert reset_store() is not first


def test_utcnow_is_timezone_aware():
    assert utcnow().tzinfo is not None


def test_status_groups():
    assert VerificationStatus.COMPLETED in VerificationStatus.terminal_statuses()
    assert VerificationStatus.EXPIRED not in VerificationStatus.open_statuses()
    for status, allowed in VerificationStatus.valid_transitions().items():
        assert status not in VerificationStatus.terminal_statuses() or not allowed


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("SEED_DEMO_DATA", "false")
    monkeypatch.setenv("MAX_AUDIT_EVENTS", "25")
    cfg = StoreSettings()
    assert cfg.SEED_DEMO_DATA is False
    assert cfg.MAX_AUDIT_EVENTS == 25
