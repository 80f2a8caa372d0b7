"""
Feeds service implementation.

Fronts the weather, geocoding, news and GitHub providers. Each method is
independent: a missing key or upstream failure only fails that call.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from shared.config import get_settings

from .interfaces import IFeedsService
from .models import GeocodeResult, TrendingRepos, WeatherLocation, WeatherReport
from .providers import GeoapifyClient, GitHubClient, NewsDataClient, OpenWeatherClient
from .transforms import dedupe_articles, NEWS_LIMIT
from .exceptions import CountryNotFoundError, MissingCoordinatesError

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = "us"


class FeedsService(IFeedsService):
    """
    Aggregates the third-party providers behind the dashboard widgets.
    """

    def __init__(
        self,
        weather: OpenWeatherClient,
        geocoder: GeoapifyClient,
        news: NewsDataClient,
        github: GitHubClient,
    ):
        self._weather = weather
        self._geocoder = geocoder
        self._news = news
        self._github = github

    @classmethod
    def from_settings(
        cls,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "FeedsService":
        """Build the service from the application settings."""
        settings = get_settings()
        timeout = settings.http_timeout
        return cls(
            weather=OpenWeatherClient(settings.openweather_api_key, timeout, transport),
            geocoder=GeoapifyClient(settings.geoapify_api_key, timeout, transport),
            news=NewsDataClient(settings.newsdata_api_key, timeout, transport),
            github=GitHubClient(settings.github_pat, timeout, transport),
        )

    async def get_weather(
        self,
        lat: Optional[str] = None,
        lon: Optional[str] = None,
        city: Optional[str] = None,
    ) -> WeatherReport:
        """Fetch current conditions and forecast in parallel."""
        if city and city.strip():
            location = {"q": city.strip()}
        elif lat and lon:
            location = {"lat": lat, "lon": lon}
        else:
            raise MissingCoordinatesError("Missing coordinates or city")

        current, forecast = await asyncio.gather(
            self._weather.current(location),
            self._weather.forecast(location),
        )

        return WeatherReport(
            current=current,
            forecast=forecast,
            location=WeatherLocation(
                name=current.get("name", ""),
                coord=current.get("coord"),
                country=(current.get("sys") or {}).get("country"),
            ),
        )

    async def get_country_code(self, lat: Optional[str], lon: Optional[str]) -> GeocodeResult:
        """Reverse-geocode coordinates to an upper-case country code."""
        if not lat or not lon:
            raise MissingCoordinatesError()

        code = await self._geocoder.country_code(lat, lon)
        if not code:
            raise CountryNotFoundError(lat, lon)
        return GeocodeResult(countryCode=code)

    async def get_news(self, country: Optional[str] = None) -> list[dict[str, Any]]:
        """Latest headlines, syndication duplicates collapsed, capped at 5."""
        country = country or DEFAULT_COUNTRY
        articles = await self._news.latest(country)
        unique = dedupe_articles(articles, limit=NEWS_LIMIT)
        if len(unique) < len(articles):
            logger.debug(
                f"News for {country}: {len(articles)} fetched, {len(unique)} kept"
            )
        return unique

    async def get_trending(self) -> TrendingRepos:
        """Most-starred repositories from GitHub search."""
        data = await self._github.most_starred()
        return TrendingRepos(**data)
