"""
HTTP clients for the third-party data providers.

- OpenWeatherClient: current weather and 5-day/3-hour forecast
- GeoapifyClient: reverse geocoding to a country code
- NewsDataClient: latest headlines by country
- GitHubClient: most-starred repositories

Each client opens a short-lived httpx.AsyncClient per call. Tests inject an
httpx transport instead of patching the network.
"""

import logging
from typing import Any, Optional

import httpx

from .exceptions import MissingApiKeyError, ProviderRequestError

logger = logging.getLogger(__name__)


class ProviderClient:
    """
    Base class for provider clients.

    Subclasses set NAME and build URLs; this class owns the HTTP call and
    the translation of transport/status errors into ProviderRequestError.
    """

    NAME = "provider"

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key or ""
        self._timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if the provider API key is configured."""
        return bool(self._api_key)

    def _require_key(self) -> str:
        if not self._api_key:
            raise MissingApiKeyError(self.NAME)
        return self._api_key

    async def _get_json(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        failure_message: str = "Upstream request failed",
    ) -> Any:
        """GET a URL and decode its JSON body."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params, headers=headers)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"{self.NAME} returned {e.response.status_code} for {url}"
            )
            raise ProviderRequestError(self.NAME, failure_message, str(e)) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"{self.NAME} request to {url} failed: {e}")
            raise ProviderRequestError(self.NAME, failure_message, str(e)) from e


class OpenWeatherClient(ProviderClient):
    """OpenWeather current conditions and forecast, metric units."""

    NAME = "OpenWeather"
    BASE_URL = "https://api.openweathermap.org/data/2.5"
    FAILURE = "Failed to fetch weather data"

    def _params(self, location: dict[str, str]) -> dict[str, str]:
        return {**location, "appid": self._require_key(), "units": "metric"}

    async def current(self, location: dict[str, str]) -> dict[str, Any]:
        """
        Current conditions.

        Args:
            location: Either {"lat", "lon"} or {"q": city}
        """
        return await self._get_json(
            f"{self.BASE_URL}/weather",
            params=self._params(location),
            failure_message=self.FAILURE,
        )

    async def forecast(self, location: dict[str, str]) -> dict[str, Any]:
        """5-day forecast at 3-hour granularity."""
        return await self._get_json(
            f"{self.BASE_URL}/forecast",
            params=self._params(location),
            failure_message=self.FAILURE,
        )


class GeoapifyClient(ProviderClient):
    """Geoapify reverse geocoding."""

    NAME = "Geoapify"
    URL = "https://api.geoapify.com/v1/geocode/reverse"

    async def country_code(self, lat: str, lon: str) -> Optional[str]:
        """Upper-case country code at the coordinates, or None."""
        data = await self._get_json(
            self.URL,
            params={"lat": lat, "lon": lon, "apiKey": self._require_key()},
            failure_message="Failed to fetch country",
        )
        features = data.get("features") or []
        if not features:
            return None
        code = (features[0].get("properties") or {}).get("country_code")
        return code.upper() if code else None


class NewsDataClient(ProviderClient):
    """NewsData.io latest headlines."""

    NAME = "NewsData"
    URL = "https://newsdata.io/api/1/latest"
    FAILURE = "Failed to fetch news"
    # Fetch a few more than we show so de-duplication can still fill the list
    PAGE_SIZE = 10

    async def latest(self, country: str) -> list[dict[str, Any]]:
        """Latest articles for a country code."""
        data = await self._get_json(
            self.URL,
            params={
                "apikey": self._require_key(),
                "size": self.PAGE_SIZE,
                "country": country.lower(),
            },
            failure_message=self.FAILURE,
        )
        if data.get("status") != "success":
            logger.error(f"NewsData API error: {data}")
            raise ProviderRequestError(self.NAME, self.FAILURE, str(data.get("results")))
        return data.get("results") or []


class GitHubClient(ProviderClient):
    """GitHub repository search, used for the trending widget."""

    NAME = "GitHub"
    URL = "https://api.github.com/search/repositories"
    QUERY = "stars:>50000"
    PER_PAGE = 6

    @property
    def is_configured(self) -> bool:
        # Search works unauthenticated, just with a lower rate limit
        return True

    async def most_starred(self) -> dict[str, Any]:
        """Top repositories by star count, in the upstream search shape."""
        headers = {"Accept": "application/vnd.github+json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        return await self._get_json(
            self.URL,
            params={
                "q": self.QUERY,
                "sort": "stars",
                "order": "desc",
                "per_page": self.PER_PAGE,
            },
            headers=headers,
            failure_message="Failed to fetch trending repositories",
        )
