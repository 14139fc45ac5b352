"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: str = Field(
        default="",
        description="Supabase project URL"
    )
    supabase_key: str = Field(
        default="",
        description="Supabase anon/public key"
    )

    # ===================
    # INVENTORY THRESHOLDS
    # ===================
    low_stock_threshold: int = Field(
        default=5,
        ge=1,
        le=1000,
        description="Stock strictly below this (and above 0) is Low Stock"
    )
    aging_days_threshold: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Products listed longer than this are aging inventory"
    )
    high_margin_threshold: int = Field(
        default=40,
        ge=0,
        le=100,
        description="Margin percent at or above this raises a high-profit alert"
    )

    # ===================
    # ANALYTICS WINDOWS
    # ===================
    default_lookback_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Trailing window for KPIs, trends and forecasts"
    )
    dashboard_trend_days: int = Field(
        default=7,
        ge=1,
        le=90,
        description="Trailing window for the dashboard sales chart"
    )
    plan_expiry_notice_days: int = Field(
        default=7,
        ge=1,
        le=60,
        description="Days ahead of plan end that trigger an expiry notice"
    )
    ranking_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Entries per ranking list"
    )

    # ===================
    # DASHBOARD
    # ===================
    default_upload_limit: int = Field(
        default=10,
        ge=1,
        description="Upload limit for suppliers without a plan"
    )
    activity_feed_source_limit: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Rows fetched per activity source"
    )
    activity_low_stock_quantity: int = Field(
        default=2,
        ge=0,
        description="Stock at or below this appears in the activity feed"
    )

    # ===================
    # CACHE
    # ===================
    analytics_cache_ttl_seconds: int = Field(
        default=0,
        ge=0,
        le=3600,
        description="Seconds to reuse computed analytics (0 disables the cache)"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def supabase_configured(self) -> bool:
        """Check if Supabase credentials are present."""
        return bool(self.supabase_url and self.supabase_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
