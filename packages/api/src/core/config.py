# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
Group related settings together; each group becomes a section future PRs extend.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[4]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "Bank Verification Platform"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # -- Institution --
    INSTITUTION_NAME: str = Field(
        default="SpringFin Credit Union",
        description="Bank name used for campaign branding when none is given.",
    )

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:3000"]

    # -- Borrower links --
    VERIFY_BASE_URL: str = Field(
        default="https://verify.example.com",
        description="Public origin the borrower wizard is served from.",
    )

    # -- Auth --
    AUTH_DISABLED: bool = Field(
        default=False,
        description="Bypass token validation. Set True for tests and local dev.",
    )
    JWT_SECRET: str = Field(
        default="dev-only-secret-change-me",
        description="HMAC secret for staff session tokens.",
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_TTL_HOURS: int = 24

    # -- Verification defaults --
    DEFAULT_EXPIRATION_DAYS: int = 7
    MAX_EXPIRATION_DAYS: int = 30
    DEFAULT_EXTENSION_DAYS: int = 7
    ENABLE_REMINDERS: bool = True

    # -- Notifications --
    NOTIFY_DEBOUNCE_SECONDS: float = Field(
        default=2.0,
        description="Quiet period before a verification link is (re)sent.",
    )
    NOTIFY_WEBHOOK_URL: str | None = Field(
        default=None,
        description="When set, link dispatches are POSTed here for delivery.",
    )
    NOTIFY_HISTORY_LIMIT: int = Field(
        default=200,
        ge=1,
        description="Dispatched messages kept in memory for inspection.",
    )

    # -- Aggregators (Stripe / Teller) --
    AGGREGATOR_MOCK: bool = Field(
        default=True,
        description="Return canned client secrets / connect URLs instead of calling providers.",
    )
    AGGREGATOR_TIMEOUT_SECONDS: float = 10.0
    STRIPE_API_BASE: str = "https://api.stripe.com"
    STRIPE_SECRET_KEY: str | None = None
    TELLER_CONNECT_URL: str = "https://teller.io/connect"
    TELLER_APPLICATION_ID: str | None = None

    # -- Support contacts shown on borrower error pages --
    SUPPORT_EMAIL: str = "support@example.com"
    SUPPORT_PHONE: str = "1-800-BANK-HELP"


settings = Settings()
