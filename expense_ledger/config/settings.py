"""
Configuration Management for Expense Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Tunable constants (default currency, the budget warning threshold,
how many recent expenses the dashboard shows) live in one place
instead of being repeated at every call site.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expense_ledger.catalog.currency import DEFAULT_CURRENCY_SYMBOL


class LedgerSettings(BaseSettings):
    """Ledger behaviour settings."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_currency_symbol: str = Field(
        default=DEFAULT_CURRENCY_SYMBOL,
        min_length=1,
        description="Currency symbol used until the user picks one"
    )
    budget_warning_percentage: float = Field(
        default=75.0,
        ge=0.0,
        le=100.0,
        description="Spent percentage at which a budget is flagged as near its limit"
    )
    recent_expenses_limit: int = Field(
        default=5,
        ge=1,
        description="Number of recent expenses shown on the dashboard"
    )
    storage_key_prefix: str = Field(
        default="",
        description="Namespace prepended to every store key (e.g. '@myApp:')"
    )


class StorageSettings(BaseSettings):
    """Key-value store backend configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["memory", "json_file"] = Field(
        default="json_file",
        description="Which key-value store implementation to use"
    )
    path: str = Field(
        default="ledger_store.json",
        description="File used by the json_file backend"
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Path must not be blank."""
        if not v.strip():
            raise ValueError("Storage path cannot be blank")
        return v.strip()


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

    # Note: These are loaded lazily to allow partial configuration

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()


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
    {setting_name}_error entries describing any failure.
    """
    results = {}

    settings = get_settings()

    for name in ("ledger", "storage"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
