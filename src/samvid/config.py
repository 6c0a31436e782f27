"""Engine configuration using Pydantic settings."""

from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (``SAMVID_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="SAMVID_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    # Optional YAML file overriding the default banking vocabulary
    VOCABULARY_FILE: str | None = None

    # Starting balance the ledger summary adds income to / subtracts spend from
    OPENING_BALANCE: Decimal = Decimal("10000")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
