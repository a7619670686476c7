# This project was developed with assistance from AI tools.
"""Tests for field-level validation helpers."""

from datetime import date

import pytest

from src.services.validation import (
    validate_dob,
    validate_email,
    validate_field,
    validate_identification_number,
    validate_phone,
    validate_ssn,
    validate_zipcode,
)

_TODAY = date(2025, 6, 15)


# ---------------------------------------------------------------------------
# SSN
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("raw", ["123-45-6789", "123456789", "123 45 6789"])
def test_ssn_accepts_and_normalizes(raw):
    ok, msg, normalized = validate_ssn(raw)
    assert ok is True
    assert msg == ""
    assert normalized == "123-45-6789"


@pytest.mark.parametrize("raw", ["12-345-6789", "1234567", "abc-de-fghi", ""])
def test_ssn_rejects_bad_format(raw):
    ok, msg, normalized = validate_ssn(raw)
    assert ok is False
    assert msg == "Invalid Social Security Number format"
    assert normalized is None


# ---------------------------------------------------------------------------
# Date of birth
# ---------------------------------------------------------------------------


def test_dob_accepts_slash_and_dash_formats():
    assert validate_dob("01/15/1990", today=_TODAY) == (True, "", "01/15/1990")
    assert validate_dob("01-15-1990", today=_TODAY) == (True, "", "01/15/1990")


def test_dob_rejects_iso_format():
    ok, msg, _ = validate_dob("1990-01-15", today=_TODAY)
    assert ok is False
    assert msg == "Invalid date format. Use MM/DD/YYYY"


def test_dob_rejects_impossible_calendar_date():
    ok, msg, _ = validate_dob("02/30/1990", today=_TODAY)
    assert ok is False
    assert "Invalid date format" in msg


def test_dob_rejects_future_date():
    ok, msg, _ = validate_dob("01/01/2030", today=_TODAY)
    assert ok is False
    assert msg == "Date of birth cannot be in the future"


def test_dob_requires_adult():
    ok, msg, _ = validate_dob("06/16/2007", today=_TODAY)
    assert ok is False
    assert msg == "Must be at least 18 years old"


def test_dob_eighteenth_birthday_is_accepted():
    ok, _, _ = validate_dob("06/15/2007", today=_TODAY)
    assert ok is True


# ---------------------------------------------------------------------------
# Other fields
# ---------------------------------------------------------------------------


def test_identification_number_min_length():
    assert validate_identification_number("1234")[0] is False
    assert validate_identification_number(" 12345 ") == (True, "", "12345")


@pytest.mark.parametrize(
    "raw,ok", [("12345", True), ("12345-6789", True), ("1234", False), ("ABCDE", False)]
)
def test_zipcode(raw, ok):
    assert validate_zipcode(raw)[0] is ok


def test_email_normalized_lowercase():
    assert validate_email(" John.Doe@Example.COM ") == (True, "", "john.doe@example.com")
    assert validate_email("not-an-email")[0] is False


def test_phone_min_length():
    assert validate_phone("555-1234")[0] is False
    assert validate_phone("+1 (555) 123-4567")[0] is True


def test_validate_field_passes_through_fields_without_validator():
    assert validate_field("city", "  Tbilisi ") == (True, "", "Tbilisi")


def test_validate_field_dispatches_by_name():
    ok, msg, _ = validate_field("zipcode", "abc")
    assert ok is False
    assert "zipcode" in msg.lower()
