"""
HTTP client for the dashboard API.

Wraps an httpx.AsyncClient whose cookie jar holds the session cookie, the
way a browser would. Error responses are raised as ApiError carrying the
server's message from the {"error": ...} envelope.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An API call failed, either with an error response or in transport."""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code

    @property
    def is_client_error(self) -> bool:
        """4xx responses are not worth retrying."""
        return 400 <= self.status_code < 500

    def __repr__(self) -> str:
        return f"ApiError({self.status_code}, {self.message!r})"


class DashboardApi:
    """
    Async client for the /api endpoints.

    Usage:
        async with DashboardApi("http://localhost:8000") as api:
            await api.login("alice", "secret")
            profile = await api.get_profile()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "DashboardApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(0, f"Network error: {e}") from e

        if response.status_code >= 400:
            message, code = _error_details(response)
            raise ApiError(response.status_code, message, code)
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned a non-JSON body")
            raise ApiError(response.status_code, "Invalid response from server") from e

    # Account

    async def login(self, username: str, password: str) -> dict[str, Any]:
        """POST /users/login. The session cookie lands in the jar."""
        return await self._request(
            "POST", "/api/users/login",
            json={"username": username, "password": password},
        )

    async def signup(self, username: str, email: str, password: str) -> dict[str, Any]:
        return await self._request(
            "POST", "/api/users/signup",
            json={"username": username, "email": email, "password": password},
        )

    async def logout(self) -> dict[str, Any]:
        return await self._request("POST", "/api/users/logout")

    async def get_profile(self) -> dict[str, Any]:
        """The signed-in user's profile (the "data" field of the response)."""
        body = await self._request("GET", "/api/users/profile")
        return body["data"]

    async def update_profile(self, changes: dict[str, Any]) -> dict[str, Any]:
        body = await self._request("PUT", "/api/users/profile", json=changes)
        return body["data"]

    # Widgets

    async def geocode(self, lat: float, lon: float) -> str:
        """Country code for coordinates."""
        body = await self._request(
            "GET", "/api/users/geocode", params={"lat": lat, "lon": lon}
        )
        return body["countryCode"]

    async def weather(
        self,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
        city: Optional[str] = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"city": city} if city else {"lat": lat, "lon": lon}
        return await self._request("GET", "/api/users/weather", params=params)

    async def news(self, country: str) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/users/news", params={"country": country})

    async def trending(self) -> dict[str, Any]:
        return await self._request("GET", "/api/github/trending")


def _error_details(response: httpx.Response) -> tuple[str, Optional[str]]:
    """Message and code from the error envelope, with HTTP fallbacks."""
    fallback = response.reason_phrase or f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback, None
    if not isinstance(body, dict):
        return fallback, None
    return str(body.get("error") or fallback), body.get("code")
