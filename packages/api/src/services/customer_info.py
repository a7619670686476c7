# This project was developed with assistance from AI tools.
"""Customer personal-information rules for the borrower wizard.

Decides which personal fields still have to be collected from the
borrower, validates submitted values, and masks sensitive values for
display.
"""

from db import CustomerInfo

from .validation import validate_field

# Order is the order fields are presented and reported as missing.
REQUIRED_CUSTOMER_INFO_FIELDS: tuple[str, ...] = (
    "date_of_birth",
    "nationality",
    "identification_number",
    "residing_country",
    "street",
    "zipcode",
    "social_security_number",
    "state",
    "city",
)

FIELD_DISPLAY_NAMES: dict[str, str] = {
    "date_of_birth": "Date of Birth",
    "nationality": "Nationality",
    "identification_number": "Identification Number",
    "residing_country": "Residing Country",
    "street": "Street Address",
    "zipcode": "Zipcode",
    "social_security_number": "Social Security Number",
    "state": "State",
    "city": "City",
}

FIELD_PLACEHOLDERS: dict[str, str] = {
    "date_of_birth": "MM/DD/YYYY",
    "nationality": "e.g., Georgian",
    "identification_number": "Georgian ID number",
    "residing_country": "e.g., United States",
    "street": "e.g., 123 Main Street",
    "zipcode": "e.g., 12345",
    "social_security_number": "XXX-XX-XXXX",
    "state": "e.g., California",
    "city": "e.g., San Francisco",
}

# Prefilled values offered on the admin send form.
_DEFAULT_FIELD_VALUES: dict[str, str] = {
    "nationality": "Georgian",
    "residing_country": "United States",
}


def _value_of(info: CustomerInfo | dict, field: str) -> str | None:
    if isinstance(info, dict):
        return info.get(field)
    return getattr(info, field, None)


def get_required_customer_info_fields(info: CustomerInfo | dict) -> list[str]:
    """Return the personal fields that are absent or blank, in canonical order."""
    missing = []
    for field in REQUIRED_CUSTOMER_INFO_FIELDS:
        value = _value_of(info, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


def requires_customer_info_collection(info: CustomerInfo | dict) -> bool:
    return len(get_required_customer_info_fields(info)) > 0


def is_customer_info_complete(info: CustomerInfo | dict) -> bool:
    return not requires_customer_info_collection(info)


def get_field_display_name(field: str) -> str:
    return FIELD_DISPLAY_NAMES.get(field, field)


def get_field_placeholder(field: str) -> str:
    return FIELD_PLACEHOLDERS.get(field, f"Enter your {get_field_display_name(field).lower()}")


def get_default_field_value(field: str) -> str:
    return _DEFAULT_FIELD_VALUES.get(field, "")


def validate_customer_info_field(field: str, value: str | None) -> tuple[bool, str, str | None]:
    """Validate one personal field; blank values are always rejected."""
    if value is None or not str(value).strip():
        return False, f"{get_field_display_name(field)} is required", None
    return validate_field(field, str(value))


def validate_customer_info(
    fields: list[str], submitted: dict[str, str | None]
) -> tuple[dict[str, str], dict[str, str]]:
    """Validate the requested fields of a submission.

    Returns (normalized_values, errors) keyed by field name. Fields not in
    ``fields`` are ignored.
    """
    values: dict[str, str] = {}
    errors: dict[str, str] = {}
    for field in fields:
        ok, message, normalized = validate_customer_info_field(field, submitted.get(field))
        if ok:
            values[field] = normalized
        else:
            errors[field] = message
    return values, errors


def format_field_for_display(field: str, value: str | None) -> str:
    """Render a personal field for display, masking sensitive values."""
    if not value:
        return "Not provided"
    if field == "social_security_number":
        return f"XXX-XX-{value[-4:]}" if len(value) >= 4 else "XXX-XX-XXXX"
    if field == "identification_number":
        return f"•••••{value[-4:]}" if len(value) >= 4 else value
    return value


_MASKED_FIELDS = ("social_security_number", "identification_number")


def mask_customer_info(info: CustomerInfo) -> dict:
    """Dump customer info with sensitive identifiers masked; empty values stay None."""
    data = info.model_dump()
    for field in _MASKED_FIELDS:
        if data.get(field):
            data[field] = format_field_for_display(field, data[field])
    return data
