"""
Configuration Management for the Spending Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing in the store itself needs configuration; these settings
cover where data lives on disk and the thresholds used by the
input validator.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPENDING_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_path: Path = Field(
        default=Path.home() / ".spending_tracker" / "store.json",
        description="JSON file holding all persisted keys"
    )
    write_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed write is attempted"
    )

    @field_validator('data_path')
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        """Allow '~' in the configured path."""
        return v.expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Validation thresholds
    max_amount: float = Field(
        default=1000000.0,
        gt=0,
        description="Amounts above this are flagged as suspicious (warning only)"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
