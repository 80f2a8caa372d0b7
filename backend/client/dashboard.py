"""
Dashboard orchestration.

Locates the device, resolves its country, and loads the three widgets in
parallel. A failing widget only affects its own view.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

from .api import ApiError, DashboardApi
from .config import ClientSettings, get_client_settings
from .geolocation import GeolocationError, Location, PositionSource, WatchOptions, acquire
from .query import QueryCache
from .session import SessionStore, set_country_code
from .widgets import NewsUnit, NewsView, TrendingUnit, TrendingView, WeatherUnit, WeatherView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard page shows, at one point in time."""

    user: Optional[dict[str, Any]]
    location: Optional[Location]
    location_error: Optional[str]
    country_code: Optional[str]
    weather: WeatherView
    news: NewsView
    trending: TrendingView


class Dashboard:
    """Wires the widget units to one API client, cache and session."""

    def __init__(
        self,
        api: DashboardApi,
        store: SessionStore,
        source: PositionSource,
        settings: Optional[ClientSettings] = None,
        cache: Optional[QueryCache] = None,
    ):
        self._api = api
        self._store = store
        self._source = source
        self.settings = settings or get_client_settings()
        self.cache = cache or QueryCache()

        self.weather = WeatherUnit(api, self.cache, self.settings)
        self.news = NewsUnit(api, self.cache, self.settings)
        self.trending = TrendingUnit(api, self.cache, self.settings)

        self.location: Optional[Location] = None
        self.location_error: Optional[str] = None

    async def locate(self) -> Optional[Location]:
        """Get the device position and point the weather unit at it."""
        try:
            location = await acquire(
                self._source, WatchOptions(timeout=self.settings.geolocation_timeout)
            )
        except GeolocationError as e:
            self.location_error = e.message
            self.weather.location_failed(e.message)
            return None

        self.location = location
        self.location_error = None
        self.weather.set_location(location.lat, location.lon)
        return location

    async def resolve_country(self, location: Optional[Location]) -> str:
        """
        Country code for the news widget.

        Uses the default country when there is no location or geocoding fails.
        """
        code = self.settings.default_country
        if location is not None:
            try:
                code = await self._api.geocode(location.lat, location.lon)
            except ApiError as e:
                logger.warning(f"Geocoding failed, using {code}: {e.message}")

        self._store.dispatch(set_country_code(code))
        self.news.country = code
        return code

    async def _load_news(self, location: Optional[Location]) -> None:
        await self.resolve_country(location)
        await self.news.load()

    async def load(self, city: Optional[str] = None) -> DashboardSnapshot:
        """
        Load every widget.

        Args:
            city: Show weather for this city instead of the device location
        """
        if city:
            self.weather.select_city(city)
        location = await self.locate()

        results = await asyncio.gather(
            self.weather.load(),
            self._load_news(location),
            self.trending.load(),
            return_exceptions=True,
        )
        for name, result in zip(("weather", "news", "trending"), results):
            if isinstance(result, Exception):
                logger.error(f"Loading {name} failed: {result}")

        return self.snapshot()

    async def refresh(self) -> DashboardSnapshot:
        """Refetch every widget regardless of cache freshness."""
        await asyncio.gather(
            self.weather.refresh(),
            self.news.refetch(),
            self.trending.refetch(),
            return_exceptions=True,
        )
        return self.snapshot()

    def snapshot(self) -> DashboardSnapshot:
        state = self._store.state
        return DashboardSnapshot(
            user=state.user if isinstance(state.user, dict) else None,
            location=self.location,
            location_error=self.location_error,
            country_code=state.country_code,
            weather=self.weather.view(),
            news=self.news.view(),
            trending=self.trending.view(),
        )
