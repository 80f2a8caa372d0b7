"""Tests for the session token service."""

import pytest
from datetime import datetime, timedelta, timezone

import jwt

from modules.auth.interfaces import ITokenService
from modules.auth.tokens import TokenService
from modules.auth.exceptions import TokenConfigurationError

from tests.conftest import TEST_TOKEN_SECRET, create_test_token


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(clock) -> TokenService:
    return TokenService(secret=TEST_TOKEN_SECRET, clock=clock)


class TestIssue:
    def test_implements_interface(self, service):
        assert isinstance(service, ITokenService)

    def test_payload_contents(self, service, clock):
        token = service.issue("user-1", "alice")

        claims = jwt.decode(token, TEST_TOKEN_SECRET, algorithms=["HS256"], options={"verify_exp": False, "verify_iat": False})
        assert claims["id"] == "user-1"
        assert claims["username"] == "alice"
        assert claims["iat"] == int(clock.now.timestamp())
        assert claims["exp"] - claims["iat"] == 12 * 3600

    def test_requires_secret(self, clock):
        service = TokenService(secret="", clock=clock)
        with pytest.raises(TokenConfigurationError):
            service.issue("user-1", "alice")


class TestVerify:
    def test_round_trip(self, service):
        payload = service.verify(service.issue("user-1", "alice"))

        assert payload is not None
        assert payload.id == "user-1"
        assert payload.username == "alice"

    def test_valid_until_just_before_expiry(self, service, clock):
        token = service.issue("user-1", "alice")

        clock.advance(timedelta(hours=11, minutes=59, seconds=59))
        assert service.verify(token) is not None

    def test_expires_after_12_hours(self, service, clock):
        token = service.issue("user-1", "alice")

        clock.advance(timedelta(hours=12))
        assert service.verify(token) is None

    def test_wrong_secret(self, service):
        token = create_test_token(secret="another-secret-of-sufficient-length-xyz")
        assert service.verify(token) is None

    @pytest.mark.parametrize("token", ["", None, "not-a-token", "a.b.c"])
    def test_malformed(self, service, token):
        assert service.verify(token) is None

    def test_unsigned_token(self, service):
        token = jwt.encode({"id": "u", "username": "x", "iat": 0, "exp": 2**31}, "", algorithm="none")
        assert service.verify(token) is None

    def test_missing_claims(self, service):
        token = jwt.encode({"id": "user-1", "username": "alice"}, TEST_TOKEN_SECRET, algorithm="HS256")
        assert service.verify(token) is None

    def test_no_secret_configured(self, clock):
        token = TokenService(secret=TEST_TOKEN_SECRET, clock=clock).issue("user-1", "alice")
        assert TokenService(secret="", clock=clock).verify(token) is None

    def test_expires_at(self, service, clock):
        payload = service.verify(service.issue("user-1", "alice"))
        assert payload.expires_at == clock.now + timedelta(hours=12)
