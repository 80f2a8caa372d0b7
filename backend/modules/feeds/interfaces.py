"""
Feeds module interface.

Read-only access to the third-party widgets' data. Nothing here mutates
server state.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import GeocodeResult, TrendingRepos, WeatherReport


@runtime_checkable
class IFeedsService(Protocol):
    """
    Interface for the dashboard's third-party data.
    """

    async def get_weather(
        self,
        lat: Optional[str] = None,
        lon: Optional[str] = None,
        city: Optional[str] = None,
    ) -> WeatherReport:
        """
        Current weather and forecast, by coordinates or city.

        A non-blank city wins over coordinates.

        Raises:
            MissingCoordinatesError: If neither a full lat/lon pair nor a city is given
            MissingApiKeyError: If the weather API key is not configured
            ProviderRequestError: If the upstream call fails
        """
        ...

    async def get_country_code(self, lat: Optional[str], lon: Optional[str]) -> GeocodeResult:
        """
        Reverse-geocode coordinates to a country code.

        Raises:
            MissingCoordinatesError: If lat or lon is missing
            CountryNotFoundError: If no country is found
        """
        ...

    async def get_news(self, country: Optional[str] = None) -> list[dict[str, Any]]:
        """
        Latest de-duplicated headlines for a country (default "us"), at most 5.
        """
        ...

    async def get_trending(self) -> TrendingRepos:
        """
        Most-starred repositories.
        """
        ...
