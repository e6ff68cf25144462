"""
Configuration Management for Voucher Ledger

Uses pydantic-settings for type-safe configuration from environment
variables (prefix LEDGER_) and an optional .env file.

DESIGN DECISION: Statutory thresholds are NOT configuration.
The E-Way Bill limit lives in code next to the rule that uses it;
only display, logging and sanity-check knobs are configurable here.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
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

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )
    log_format: str = Field(
        default="json",
        pattern="^(json|console)$",
        description="Render logs as JSON lines or for a human console"
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        description="Currency symbol used in formatted amounts"
    )
    amount_display_places: int = Field(
        default=2,
        ge=0,
        le=4,
        description="Decimal places shown for amounts"
    )

    # Validation thresholds
    max_voucher_amount_inr: float = Field(
        default=10000000.0,
        description="Voucher total above which validation warns (sanity check)"
    )
    future_date_tolerance_days: int = Field(
        default=7,
        description="How many days in the future a voucher date can be"
    )

    # Numbering
    voucher_number_start: int = Field(
        default=100,
        ge=0,
        description="Offset added to the voucher count when numbering"
    )

    @field_validator('log_level')
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
