# This project was developed with assistance from AI tools.
"""Field-level validation for customer and staff input.

Pure functions that validate and normalize individual field values.
Each returns ``(is_valid, error_message, normalized_value)``.
"""

import re
from collections.abc import Callable
from datetime import date, datetime

_DOB_PATTERN = re.compile(r"(0[1-9]|1[0-2])[/\-](0[1-9]|[12]\d|3[01])[/\-](19|20)\d{2}")
_SSN_PATTERN = re.compile(r"\d{3}-?\d{2}-?\d{4}")
_ZIPCODE_PATTERN = re.compile(r"\d{5}(-\d{4})?")
_EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")

MIN_AGE_YEARS = 18
MIN_ID_NUMBER_LENGTH = 5
MIN_PHONE_LENGTH = 10


def validate_ssn(value: str) -> tuple[bool, str, str | None]:
    """Validate and normalize SSN to XXX-XX-XXXX format."""
    compact = re.sub(r"\s", "", value)
    if not _SSN_PATTERN.fullmatch(compact):
        return False, "Invalid Social Security Number format", None
    digits = compact.replace("-", "")
    return True, "", f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"


def validate_dob(value: str, today: date | None = None) -> tuple[bool, str, str | None]:
    """Validate a MM/DD/YYYY (or MM-DD-YYYY) date of birth for an adult."""
    value = value.strip()
    if not _DOB_PATTERN.fullmatch(value):
        return False, "Invalid date format. Use MM/DD/YYYY", None
    try:
        parsed = datetime.strptime(value.replace("-", "/"), "%m/%d/%Y").date()
    except ValueError:
        return False, "Invalid date format. Use MM/DD/YYYY", None

    today = today or date.today()
    if parsed > today:
        return False, "Date of birth cannot be in the future", None
    age = today.year - parsed.year - ((today.month, today.day) < (parsed.month, parsed.day))
    if age < MIN_AGE_YEARS:
        return False, "Must be at least 18 years old", None
    return True, "", parsed.strftime("%m/%d/%Y")


def validate_identification_number(value: str) -> tuple[bool, str, str | None]:
    value = value.strip()
    if len(value) < MIN_ID_NUMBER_LENGTH:
        return False, "Identification number must be at least 5 characters", None
    return True, "", value


def validate_zipcode(value: str) -> tuple[bool, str, str | None]:
    """US zipcode, 5 digits or ZIP+4."""
    value = value.strip()
    if not _ZIPCODE_PATTERN.fullmatch(value):
        return False, "Invalid zipcode format. Use 12345 or 12345-6789", None
    return True, "", value


def validate_email(value: str) -> tuple[bool, str, str | None]:
    """Basic email format validation."""
    value = value.strip().lower()
    if not _EMAIL_PATTERN.fullmatch(value):
        return False, "Valid email is required", None
    return True, "", value


def validate_phone(value: str) -> tuple[bool, str, str | None]:
    value = value.strip()
    if len(value) < MIN_PHONE_LENGTH:
        return False, "Valid phone number is required", None
    return True, "", value


_VALIDATORS: dict[str, Callable] = {
    "social_security_number": validate_ssn,
    "date_of_birth": validate_dob,
    "identification_number": validate_identification_number,
    "zipcode": validate_zipcode,
    "email": validate_email,
    "phone_number": validate_phone,
}


def validate_field(field_name: str, value: str) -> tuple[bool, str, str | None]:
    """Validate a single field by name.

    Returns (is_valid, error_message, normalized_value).
    Fields without a dedicated validator pass through stripped.
    """
    validator = _VALIDATORS.get(field_name)
    if validator is None:
        return True, "", value.strip() if isinstance(value, str) else value
    return validator(str(value))
