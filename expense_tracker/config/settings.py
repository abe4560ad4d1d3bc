"""
Configuration Management for the Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location, key names and report thresholds are validated
once at startup instead of being scattered as constants.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Device-local persistence configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["memory", "file"] = Field(
        default="file",
        description="Which key-value backend to persist to"
    )
    data_dir: Path = Field(
        default=Path.home() / ".expense_tracker",
        description="Directory holding one JSON file per key (file backend only)"
    )

    # Keys within the store
    expenses_key: str = Field(
        default="expenses",
        min_length=1,
        description="Key holding the serialized expense collection"
    )
    budgets_key: str = Field(
        default="budgets",
        min_length=1,
        description="Key holding the serialized budget mapping"
    )

    write_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per write before a backend error is surfaced"
    )

    @field_validator('budgets_key')
    @classmethod
    def validate_distinct_keys(cls, v: str, info: ValidationInfo) -> str:
        """Expenses and budgets must not overwrite each other."""
        if v == info.data.get('expenses_key'):
            raise ValueError("budgets_key must differ from expenses_key")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    currency: str = Field(
        default="INR",
        min_length=1,
        max_length=8,
        description="Currency label attached to reports (amounts are currency-agnostic)"
    )
    budget_warning_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Utilization at which a category is flagged as a warning"
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


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
