"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from unittest.mock import MagicMock

import jwt  # PyJWT

# The app must be imported before any module routes (api <-> routes cycle)
from api import app  # noqa: F401
from api.dependencies import reset_container
from shared.config import get_settings
from shared.database import reset_client_cache
from client.config import ClientSettings


# Test signing secret (only for testing)
TEST_TOKEN_SECRET = "test-secret-key-for-testing-only-0123456789"


def create_test_token(
    user_id: str = "user-123",
    username: str = "alice",
    expired: bool = False,
    secret: str = TEST_TOKEN_SECRET,
) -> str:
    """
    Create a session token the way the token service does.

    Args:
        user_id: User ID to include in the token
        username: Username to include in the token
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        Encoded token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=12)
    payload = {
        "id": user_id,
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def create_user_row(
    user_id: str = "user-123",
    username: str = "alice",
    email: str = "alice@example.com",
    password: str = "$2b$10$hashhashhashhashhashhu",
    **fields: Any,
) -> dict[str, Any]:
    """A row of the users table as the store returns it."""
    now = datetime.now(timezone.utc).isoformat()
    row = {
        "id": user_id,
        "username": username,
        "email": email,
        "password": password,
        "github": None,
        "website": None,
        "bio": None,
        "location": None,
        "phone": None,
        "theme": "dark",
        "is_verified": False,
        "is_admin": False,
        "created_at": now,
        "updated_at": now,
    }
    row.update(fields)
    return row


def create_supabase_mock(rows: Optional[list[dict]] = None) -> MagicMock:
    """
    Supabase client mock whose query chains end in execute() -> rows.

    Every builder method returns the same table mock, so assertions can be
    made on e.g. `db.table.return_value.eq.call_args`.
    """
    db = MagicMock()
    table = db.table.return_value
    for method in ("select", "insert", "update", "eq", "limit"):
        getattr(table, method).return_value = table
    table.execute.return_value = MagicMock(data=rows or [])
    return db


def create_weather_payload(name: str, days: int = 6) -> dict[str, Any]:
    """A /weather response body with `days` of 3-hourly forecast entries."""
    start = datetime(2026, 5, 1, tzinfo=timezone.utc)
    entries = [
        {"dt": int((start + timedelta(hours=3 * i)).timestamp()), "main": {"temp": 10 + i}}
        for i in range(days * 8)
    ]
    return {
        "current": {"name": name, "main": {"temp": 12}},
        "forecast": {"list": entries, "city": {"timezone": 0}},
        "location": {"name": name, "coord": {"lat": 1.0, "lon": 2.0}, "country": "GB"},
    }


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Fresh settings, container and database client for every test."""
    monkeypatch.setenv("TOKEN_SECRET", TEST_TOKEN_SECRET)
    get_settings.cache_clear()
    reset_container()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_container()
    reset_client_cache()


@pytest.fixture
def auth_token() -> str:
    """A valid session token for user-123 / alice."""
    return create_test_token()


@pytest.fixture
def client_settings() -> ClientSettings:
    """Client settings without retry back-off."""
    return ClientSettings(retry_delay=0)
