# This project was developed with assistance from AI tools.
"""Tests for verification request management."""

from datetime import timedelta

import pytest
from db import utcnow
from db.enums import VerificationStatus

from src.schemas.verification import FiltersPatch, VerificationCreate, VerificationFilters
from src.services import verification as svc
from src.services.verification import InvalidTransitionError, VerificationActionError


def _create(store, notifier, **info):
    data = VerificationCreate.model_validate(
        {
            "customer_info": {
                "full_name": "Nino Beridze",
                "email": "nino@example.com",
                "phone_number": "+1 (555) 222-3333",
                **info,
            },
            "settings": {"expiration_days": 5},
        }
    )
    return svc.create_verification(store, data, "agent1@example.com", notifier)


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


def test_create_sends_link(store, notifier):
    before = utcnow()
    v = _create(store, notifier)

    assert v.status == VerificationStatus.SENT
    assert v.timeline.sent_at is not None
    assert v.verification_link.endswith(f"/verify/{v.verification_token}")
    assert before + timedelta(days=5) <= v.timeline.expires_at <= utcnow() + timedelta(days=5)
    assert store.get_verification(v.id) is v
    notifier.send_verification_link.assert_called_once_with(v)


def test_tokens_are_unique(store, notifier):
    tokens = {_create(store, notifier).verification_token for _ in range(20)}
    assert len(tokens) == 20


def test_bulk_reports_bad_rows_without_failing_batch(store, notifier):
    rows = [
        {"customer_info": {"full_name": "Good Row", "email": "good@example.com"}},
        {"customer_info": {"full_name": "Bad Row", "email": "nope"}},
        {"settings": {"expiration_days": 3}},
    ]
    successful, failed = svc.create_bulk_verifications(store, rows, "admin@example.com", notifier)

    assert [v.customer_info.full_name for v in successful] == ["Good Row"]
    assert [f.index for f in failed] == [1, 2]
    assert failed[0].error.startswith("customer_info.email")
    assert failed[0].data == rows[1]
    assert failed[1].error.startswith("customer_info")
    assert notifier.send_verification_link.call_count == 1


# ---------------------------------------------------------------------------
# Listing and filters
# ---------------------------------------------------------------------------


def test_list_newest_first_with_total(seeded_store):
    items, total = svc.list_verifications(seeded_store, VerificationFilters(limit=100))
    assert total == len(seeded_store.verifications)
    created = [v.timeline.created_at for v in items]
    assert created == sorted(created, reverse=True)


def test_list_search_matches_name_email_phone_and_id(seeded_store):
    by_name, _ = svc.list_verifications(seeded_store, VerificationFilters(search="MARTINEZ"))
    assert [v.id for v in by_name] == ["ver_008"]

    by_phone, _ = svc.list_verifications(seeded_store, VerificationFilters(search="654-3210"))
    assert [v.id for v in by_phone] == ["ver_005"]

    _, total = svc.list_verifications(seeded_store, VerificationFilters(search="ver_00"))
    assert total == 8


def test_list_status_and_agent_filters(seeded_store):
    done, total = svc.list_verifications(
        seeded_store, VerificationFilters(status=VerificationStatus.COMPLETED)
    )
    assert total == 2
    assert {v.id for v in done} == {"ver_001", "ver_008"}

    mine, _ = svc.list_verifications(seeded_store, VerificationFilters(agent="AGENT1@example.com"))
    assert [v.id for v in mine] == ["ver_007"]


def test_list_pagination(seeded_store):
    total_records = len(seeded_store.verifications)
    page, total = svc.list_verifications(seeded_store, VerificationFilters(page=3, limit=5))
    assert total == total_records
    assert len(page) == total_records - 10


def test_lazy_expiry_on_read(seeded_store):
    v = svc.get_verification(seeded_store, "ver_demo_expired")
    assert v.status == VerificationStatus.EXPIRED


def test_filters_reset_page_when_filter_changes():
    filters = VerificationFilters(page=4)
    assert filters.apply(search="smith").page == 1
    assert filters.apply(page=2).page == 2
    assert filters.apply(search="", page=7).page == 7


def test_filters_page_reset_wins_over_explicit_page():
    filters = VerificationFilters(page=4)
    changed = filters.apply(status=VerificationStatus.SENT, page=3)
    assert changed.status == VerificationStatus.SENT
    assert changed.page == 1


def test_filters_reject_unknown_fields():
    with pytest.raises(ValueError, match="Unknown filter field"):
        VerificationFilters().apply(sort="name")


def test_filter_state_is_per_user(store):
    svc.update_filters(store, "usr_a", search="smith", page=3)
    svc.update_filters(store, "usr_a", page=3)
    assert svc.get_filters(store, "usr_a").search == "smith"
    assert svc.get_filters(store, "usr_a").page == 3
    assert svc.get_filters(store, "usr_b") == VerificationFilters()


def test_filters_patch_drops_null_paging_keeps_null_status():
    blank_paging = FiltersPatch.model_validate({"page": None, "limit": None, "search": None})
    assert blank_paging.changes() == {}
    assert FiltersPatch.model_validate({"status": None, "agent": None}).changes() == {
        "status": None,
        "agent": None,
    }
    assert FiltersPatch.model_validate({"page": 2}).changes() == {"page": 2}


# ---------------------------------------------------------------------------
# Status transitions
# ---------------------------------------------------------------------------


def test_update_status_completed_sets_timestamp(seeded_store):
    v = svc.update_status(seeded_store, "ver_002", VerificationStatus.COMPLETED)
    assert v.status == VerificationStatus.COMPLETED
    assert v.timeline.completed_at is not None


def test_update_status_rejects_invalid_transition(seeded_store):
    with pytest.raises(InvalidTransitionError, match="terminal"):
        svc.update_status(seeded_store, "ver_001", VerificationStatus.SENT)


def test_update_status_not_found(store):
    assert svc.update_status(store, "ver_missing", VerificationStatus.SENT) is None


# ---------------------------------------------------------------------------
# Resend / extend / cancel
# ---------------------------------------------------------------------------


def test_resend_expired_reopens_with_fresh_window(seeded_store, notifier):
    v = svc.resend(seeded_store, "ver_004", notifier)
    assert v.status == VerificationStatus.SENT
    assert v.attempts == 1
    assert v.timeline.expires_at > utcnow()
    notifier.send_verification_link.assert_called_once_with(v)


def test_resend_in_progress_keeps_status(seeded_store, notifier):
    v = svc.resend(seeded_store, "ver_007", notifier)
    assert v.status == VerificationStatus.IN_PROGRESS
    assert v.attempts == 2
    notifier.send_verification_link.assert_called_once()


def test_resend_completed_rejected(seeded_store, notifier):
    with pytest.raises(VerificationActionError):
        svc.resend(seeded_store, "ver_001", notifier)
    notifier.send_verification_link.assert_not_called()


def test_extend_moves_expired_back_to_sent(seeded_store):
    v = svc.extend(seeded_store, "ver_004", 3)
    assert v.status == VerificationStatus.SENT
    now = utcnow()
    assert now + timedelta(days=2, hours=23) < v.timeline.expires_at <= now + timedelta(days=3)


def test_extend_open_adds_to_current_expiry(seeded_store):
    v = seeded_store.get_verification("ver_005")
    original = v.timeline.expires_at
    svc.extend(seeded_store, "ver_005", 2)
    assert v.timeline.expires_at == original + timedelta(days=2)


@pytest.mark.parametrize("days", [0, 31])
def test_extend_days_out_of_range(seeded_store, days):
    with pytest.raises(ValueError, match="between 1 and 30"):
        svc.extend(seeded_store, "ver_005", days)


@pytest.mark.parametrize("verification_id", ["ver_001", "ver_006"])
def test_extend_rejected_for_completed_and_failed(seeded_store, verification_id):
    with pytest.raises(VerificationActionError):
        svc.extend(seeded_store, verification_id, 5)


def test_cancel_marks_failed(seeded_store):
    v = svc.cancel(seeded_store, "ver_003")
    assert v.status == VerificationStatus.FAILED
    assert v.timeline.cancelled_at is not None


def test_cancel_completed_rejected(seeded_store):
    with pytest.raises(InvalidTransitionError):
        svc.cancel(seeded_store, "ver_008")


def test_response_masks_and_lists_missing_fields(store, notifier):
    v = _create(store, notifier, social_security_number="123-45-6789")
    response = svc.build_verification_response(v)
    assert response.customer_info.social_security_number == "XXX-XX-6789"
    assert "social_security_number" not in response.missing_fields
    assert response.missing_fields[0] == "date_of_birth"
    assert response.status_badge.label == "Sent"
