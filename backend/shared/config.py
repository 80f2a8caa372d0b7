"""
Centralized configuration for the dashboard backend.

All settings are loaded from environment variables with sensible defaults.
Provider keys are optional: a missing key only disables the widget that
needs it.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Dashboard API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # User store (Supabase)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    # Direct Postgres URL, only used by run_migrations.py
    database_url: str = ""

    # Session tokens
    token_secret: str = ""
    token_ttl_hours: int = 12
    cookie_name: str = "token"
    cookie_secure: bool = False
    cookie_samesite: str = "lax"

    # Third-party providers
    openweather_api_key: str = ""
    newsdata_api_key: str = ""
    geoapify_api_key: str = ""
    github_pat: str = ""
    http_timeout: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
