# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SEAL_MODE)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are read once at startup and never mutated afterwards.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models.seal import SealMode

DEFAULT_RESERVED_USERNAMES = (
    "admin,administrator,api,auth,dashboard,health,help,login,logout,"
    "me,profile,root,seals,settings,signup,support,system,theirbio,users"
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

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

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------
    # No default secret: without one, logins and protected routes fail closed.

    JWT_SECRET: str | None = Field(
        default=None,
        min_length=16,
        description="Secret key for signing session tokens"
    )

    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="HMAC algorithm for session tokens"
    )

    TOKEN_TTL_DAYS: int = Field(
        default=7,
        ge=1,
        le=365,
        description="Session token lifetime in days"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    RESERVED_USERNAMES: str = Field(
        default=DEFAULT_RESERVED_USERNAMES,
        description="Usernames that cannot be registered (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Seals
    # -------------------------------------------------------------------------

    SEAL_MODE: SealMode = Field(
        default=SealMode.AUTHORIZED,
        description="authorized (company-only, pending) or open (public demo, verified)"
    )

    DEMO_ISSUER_ID: str = Field(
        default="demo_company",
        description="Issuer id recorded on seals created in open mode"
    )

    DEMO_ISSUER_NAME: str = Field(
        default="Demo Company",
        description="Issuer name recorded on seals created in open mode"
    )

    DEMO_ISSUER_AVATAR_URL: str = Field(
        default="https://api.dicebear.com/8.x/icons/svg?seed=demo",
        description="Issuer avatar recorded on seals created in open mode"
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    STORAGE_BACKEND: Literal["memory", "supabase"] = Field(
        default="memory",
        description="Where user records live"
    )

    SUPABASE_URL: str | None = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str | None = Field(
        default=None,
        description="Supabase service_role key (bypasses RLS)"
    )

    SEED_DEMO_USERS: bool = Field(
        default=False,
        description="Populate the in-memory store with demo profiles"
    )

    USER_LIST_LIMIT: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum profiles returned by GET /api/users"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat empty values as unset (JWT_SECRET="" means no secret)
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://theirbio.app" -> ["http://localhost:3000", "https://theirbio.app"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def reserved_usernames(self) -> frozenset[str]:
        """Lower-cased reserved names."""
        return frozenset(
            name.strip().lower() for name in self.RESERVED_USERNAMES.split(",") if name.strip()
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
