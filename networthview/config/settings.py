"""
Configuration Management for NetworthView

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Settings are read by the validation and reporting layers only. The
calculation package receives thresholds as plain arguments so it stays
free of configuration imports.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from NETWORTHVIEW_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="NETWORTHVIEW_",
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
        description="Log at DEBUG regardless of log_level"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level for the structured logger"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON (False renders human-readable console output)"
    )

    # Display
    currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO currency code used when formatting amounts"
    )

    # Reporting thresholds
    at_risk_threshold_percent: float = Field(
        default=80.0,
        ge=0.0,
        le=100.0,
        description="Budget progress at which a budget is flagged as at risk"
    )
    top_categories_limit: int = Field(
        default=5,
        ge=1,
        description="Number of categories shown in top-category lists"
    )
    time_series_months: int = Field(
        default=6,
        ge=1,
        le=60,
        description="Default number of months in the income/expense time series"
    )

    # Validation
    future_date_tolerance_days: int = Field(
        default=0,
        ge=0,
        description="How many days in the future a transaction date can be"
    )
    enforce_category_type_match: bool = Field(
        default=False,
        description=(
            "Reject transactions whose type differs from their category's type. "
            "When False the mismatch is only reported as a warning."
        )
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return v.upper()

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return AppSettings()
