# This project was developed with assistance from AI tools.
"""Store configuration via pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """In-memory store settings -- reads from environment variables."""

    model_config = SettingsConfigDict(extra="ignore")

    SEED_DEMO_DATA: bool = True
    MAX_AUDIT_EVENTS: int = 10_000


store_settings = StoreSettings()
