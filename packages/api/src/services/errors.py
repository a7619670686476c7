# This project was developed with assistance from AI tools.
"""Borrower-facing error catalog.

Every failure the wizard can surface maps to a fixed icon, title, message
and retryability. Non-retryable errors send the borrower home; retryable
ones point back at the step to try again.
"""

from db.enums import BorrowerStep, ErrorKind
from pydantic import BaseModel

from ..core.config import settings
from ..schemas.borrower import ErrorStateResponse


class ErrorDetail(BaseModel):
    icon: str
    title: str
    message: str
    retryable: bool


ERROR_DETAILS: dict[ErrorKind, ErrorDetail] = {
    ErrorKind.INVALID_TOKEN: ErrorDetail(
        icon="AlertTriangle",
        title="Invalid Verification Link",
        message=(
            "The verification link you used is invalid or has already been used. "
            "Please check the link or request a new one."
        ),
        retryable=False,
    ),
    ErrorKind.EXPIRED_TOKEN: ErrorDetail(
        icon="Clock",
        title="Verification Link Expired",
        message=(
            "This verification link has expired. "
            "Please request a new one from your financial institution."
        ),
        retryable=False,
    ),
    ErrorKind.NETWORK_ERROR: ErrorDetail(
        icon="WifiOff",
        title="Network Connection Lost",
        message=(
            "We couldn't connect to our servers. "
            "Please check your internet connection and try again."
        ),
        retryable=True,
    ),
    ErrorKind.CONNECTION_FAILED: ErrorDetail(
        icon="AlertTriangle",
        title="Bank Connection Failed",
        message=(
            "We were unable to connect to your bank. "
            "Please try again or select a different bank."
        ),
        retryable=True,
    ),
    ErrorKind.CONSENT_FAILED: ErrorDetail(
        icon="AlertTriangle",
        title="Consent Submission Failed",
        message="There was an issue submitting your consent. Please try again.",
        retryable=True,
    ),
    ErrorKind.CONSENT_DECLINED: ErrorDetail(
        icon="XCircle",
        title="Verification Cannot Continue",
        message=(
            "You have declined to share the required information. "
            "The verification process cannot be completed without your consent."
        ),
        retryable=False,
    ),
    ErrorKind.COMPLETION_FAILED: ErrorDetail(
        icon="AlertTriangle",
        title="Verification Completion Failed",
        message=(
            "We encountered an error while finalizing your verification. "
            "Please try again or contact support."
        ),
        retryable=True,
    ),
    ErrorKind.UNKNOWN: ErrorDetail(
        icon="AlertTriangle",
        title="An Unexpected Error Occurred",
        message=(
            "We're sorry, something went wrong. "
            "Please try again later or contact support for assistance."
        ),
        retryable=True,
    ),
}

# Step a retryable error sends the borrower back to.
_RETRY_STEPS: dict[ErrorKind, BorrowerStep] = {
    ErrorKind.CONNECTION_FAILED: BorrowerStep.CONNECT,
    ErrorKind.CONSENT_FAILED: BorrowerStep.CONSENT,
    ErrorKind.COMPLETION_FAILED: BorrowerStep.COMPLETE,
}


def resolve_error_kind(kind: str | ErrorKind | None) -> ErrorKind:
    """Coerce any value to a known kind; unrecognized values become ``unknown``."""
    if isinstance(kind, ErrorKind):
        return kind
    try:
        return ErrorKind(kind)
    except ValueError:
        return ErrorKind.UNKNOWN


def get_error_details(kind: str | ErrorKind | None) -> ErrorDetail:
    return ERROR_DETAILS[resolve_error_kind(kind)]


def step_path(token: str, step: BorrowerStep) -> str:
    segment = step.path_segment
    return f"/verify/{token}/{segment}" if segment else f"/verify/{token}"


def error_path(token: str, kind: ErrorKind) -> str:
    return f"/verify/{token}/error?type={kind.value}"


def build_error_state(kind: str | ErrorKind | None, token: str | None = None) -> ErrorStateResponse:
    resolved = resolve_error_kind(kind)
    details = ERROR_DETAILS[resolved]
    redirect = None
    retry_path = None
    if not details.retryable:
        redirect = "/"
    elif token:
        retry_path = step_path(token, _RETRY_STEPS.get(resolved, BorrowerStep.WELCOME))
    return ErrorStateResponse(
        kind=resolved,
        redirect=redirect,
        retry_path=retry_path,
        support_email=settings.SUPPORT_EMAIL,
        support_phone=settings.SUPPORT_PHONE,
        **details.model_dump(),
    )
