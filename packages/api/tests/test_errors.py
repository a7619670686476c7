# This project was developed with assistance from AI tools.
"""Tests for the borrower error catalog."""

import pytest
from db.enums import ErrorKind

from src.core.config import settings
from src.schemas.error import ErrorResponse
from src.services.errors import (
    ERROR_DETAILS,
    build_error_state,
    error_path,
    get_error_details,
    resolve_error_kind,
)


def test_every_kind_has_details():
    assert set(ERROR_DETAILS) == set(ErrorKind)


@pytest.mark.parametrize(
    "kind,retryable",
    [
        (ErrorKind.INVALID_TOKEN, False),
        (ErrorKind.EXPIRED_TOKEN, False),
        (ErrorKind.CONSENT_DECLINED, False),
        (ErrorKind.NETWORK_ERROR, True),
        (ErrorKind.CONNECTION_FAILED, True),
        (ErrorKind.CONSENT_FAILED, True),
        (ErrorKind.COMPLETION_FAILED, True),
        (ErrorKind.UNKNOWN, True),
    ],
)
def test_retryability(kind, retryable):
    assert get_error_details(kind).retryable is retryable


@pytest.mark.parametrize("value", ["bogus", "", None])
def test_unrecognized_kind_is_unknown(value):
    assert resolve_error_kind(value) == ErrorKind.UNKNOWN
    assert get_error_details(value).title == "An Unexpected Error Occurred"


def test_expired_details():
    details = get_error_details("expired_token")
    assert details.icon == "Clock"
    assert details.title == "Verification Link Expired"


def test_non_retryable_state_redirects_home():
    state = build_error_state(ErrorKind.CONSENT_DECLINED, token="abc")
    assert state.redirect == "/"
    assert state.retry_path is None
    assert state.support_email == settings.SUPPORT_EMAIL


def test_retryable_state_points_at_step():
    assert build_error_state("connection_failed", "abc").retry_path == "/verify/abc/connect"
    assert build_error_state("consent_failed", "abc").retry_path == "/verify/abc/consent"
    assert build_error_state("network_error", "abc").retry_path == "/verify/abc"


def test_retryable_state_without_token_has_no_path():
    state = build_error_state("network_error")
    assert state.retry_path is None
    assert state.redirect is None


def test_error_path():
    assert error_path("abc", ErrorKind.EXPIRED_TOKEN) == "/verify/abc/error?type=expired_token"


def test_problem_details_title_follows_status():
    gone = ErrorResponse.for_status(410, "Link expired", "req-1", "/api/verify/x/start")
    assert gone.title == "Gone"
    assert gone.type == "about:blank"
    assert gone.instance == "/api/verify/x/start"
    assert ErrorResponse.for_status(418, "teapot", "req-2").title == "Error"
