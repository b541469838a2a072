# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.DATABASE_URL)
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

    All settings are accessed via the global `settings` instance, or via
    the AppContext built at startup (see app/context.py).
    """

    # -------------------------------------------------------------------------
    # Database
    # -------------------------------------------------------------------------

    DATABASE_URL: str = Field(
        default="sqlite:///./portfolio.db",
        description="SQLAlchemy database URL (e.g., postgresql+psycopg://user:pw@host/db)"
    )

    DATABASE_CONNECT_TIMEOUT: int = Field(
        default=10,
        ge=1,
        le=120,
        description="Seconds to wait when opening a database connection"
    )

    DATABASE_ECHO: bool = Field(
        default=False,
        description="Log every SQL statement (very verbose)"
    )

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    SESSION_COOKIE_NAME: str = Field(
        default="portfolio_session",
        min_length=1,
        description="Name of the HTTP-only cookie carrying the session token"
    )

    SESSION_COOKIE_SECURE: bool | None = Field(
        default=None,
        description="Send the session cookie over HTTPS only (default: on in production)"
    )

    SESSION_COOKIE_SAMESITE: Literal["lax", "strict", "none"] = Field(
        default="lax",
        description="SameSite attribute of the session cookie"
    )

    SESSION_TTL_DAYS: int = Field(
        default=7,
        ge=1,
        le=90,
        description="Session lifetime in days, counted from login (not sliding)"
    )

    BCRYPT_ROUNDS: int = Field(
        default=12,
        ge=4,
        le=16,
        description="bcrypt cost factor for admin password hashes"
    )

    ADMIN_SETUP_ENABLED: bool = Field(
        default=True,
        description="Allow POST /admin/setup while no admin user exists"
    )

    # -------------------------------------------------------------------------
    # Image Storage (Supabase Storage)
    # -------------------------------------------------------------------------
    # Optional - image upload answers 502 when storage is not configured

    SUPABASE_URL: str | None = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str | None = Field(
        default=None,
        description="Supabase service_role key used for storage uploads"
    )

    STORAGE_BUCKET: str = Field(
        default="portfolio-images",
        description="Public bucket that receives uploaded images"
    )

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum image upload size in MB"
    )

    ALLOWED_IMAGE_EXTENSIONS: str = Field(
        default=".jpg,.jpeg,.png,.gif,.webp",
        description="Allowed image extensions (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Outbound HTTP (link previews)
    # -------------------------------------------------------------------------

    OUTBOUND_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="Timeout for outbound requests made by /fetch-url"
    )

    FETCH_URL_MAX_BYTES: int = Field(
        default=1024 * 1024,
        ge=1024,
        description="Maximum number of bytes read from a link preview target"
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
        description="Enable debug mode (verbose logging)"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:5173, https://me.dev" -> ["http://localhost:5173", "https://me.dev"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def allowed_image_extensions_list(self) -> list[str]:
        """Example: ".png, .JPG" -> [".png", ".jpg"]"""
        return [ext.strip().lower() for ext in self.ALLOWED_IMAGE_EXTENSIONS.split(",") if ext.strip()]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def session_ttl_seconds(self) -> int:
        return self.SESSION_TTL_DAYS * 24 * 60 * 60

    @property
    def storage_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_KEY)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def session_cookie_secure(self) -> bool:
        if self.SESSION_COOKIE_SECURE is not None:
            return self.SESSION_COOKIE_SECURE
        return self.is_production


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
