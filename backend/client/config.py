"""
Configuration for the dashboard client.

Loaded from DASHBOARD_* environment variables so the client and server can
share one .env file without colliding.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    base_url: str = "http://localhost:8000"
    request_timeout: float = 10.0

    # Widget defaults
    default_city: str = "London"
    default_country: str = "us"

    # Cache policy, in seconds (None = never stale for the same key)
    weather_stale_time: Optional[float] = None
    news_stale_time: Optional[float] = 5 * 60
    trending_stale_time: Optional[float] = 15 * 60
    retry: int = 1
    retry_delay: float = 1.0

    # Position reported by the terminal client's fixed position source
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    geolocation_timeout: float = 10.0


@lru_cache
def get_client_settings() -> ClientSettings:
    """
    Get cached client settings instance.
    """
    return ClientSettings()
