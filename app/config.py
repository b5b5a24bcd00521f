# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret used when a token carries no JWKS key id"
    )

    STORAGE_LOGO_BUCKET: str = Field(
        default="restaurant-icons",
        description="Storage bucket holding business logos and item images"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, error details in 5xx responses)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Image Proxy
    # -------------------------------------------------------------------------

    IMAGE_PROXY_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        le=60,
        description="Timeout for fetching an upstream image"
    )

    IMAGE_PROXY_CACHE_SECONDS: int = Field(
        default=86400,
        ge=0,
        description="max-age written into the proxied Cache-Control header"
    )

    IMAGE_PROXY_MAX_BYTES: int = Field(
        default=5 * 1024 * 1024,
        ge=1,
        description="Largest upstream body the proxy will relay"
    )

    IMAGE_PROXY_ALLOWED_HOSTS: str = Field(
        default="",
        description="Comma-separated upstream hosts the proxy may fetch from (empty = any)"
    )

    # -------------------------------------------------------------------------
    # Domain Defaults
    # -------------------------------------------------------------------------

    DEFAULT_CURRENCY: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="Currency used when a business profile has none"
    )

    LOW_STOCK_DEFAULT_THRESHOLD: float = Field(
        default=5,
        ge=0,
        description="Reorder threshold for items without reorder_point/minimum_stock_level"
    )

    EXPIRY_WARNING_DAYS: int = Field(
        default=7,
        ge=1,
        le=365,
        description="Default look-ahead window for soon-to-expire items"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def image_proxy_allowed_hosts_list(self) -> list[str]:
        """Parse IMAGE_PROXY_ALLOWED_HOSTS into lowercase host names."""
        return [
            host.strip().lower()
            for host in self.IMAGE_PROXY_ALLOWED_HOSTS.split(",")
            if host.strip()
        ]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
