"""
Dashboard widget units.

Each unit owns one kind of query (weather, news, trending), knows how to
build its cache key and fetcher, and turns the cached result into a view
snapshot with derived data. Units only read from the API.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from modules.feeds.transforms import (
    daily_forecast,
    dedupe_articles,
    forecast_timezone,
    hourly_forecast,
)

from .api import DashboardApi
from .config import ClientSettings, get_client_settings
from .query import QueryCache, QueryKey, QueryOptions, QueryState, QueryStatus

logger = logging.getLogger(__name__)


def query_options(settings: ClientSettings, stale_time: Optional[float]) -> QueryOptions:
    return QueryOptions(
        stale_time=stale_time,
        retry=settings.retry,
        retry_delay=settings.retry_delay,
    )


class QueryUnit:
    """Base for a widget backed by a single cache entry."""

    def __init__(self, api: DashboardApi, cache: QueryCache, options: QueryOptions):
        self._api = api
        self._cache = cache
        self.options = options

    @property
    def key(self) -> Optional[QueryKey]:
        """Cache key for the current inputs, or None while they are unresolved."""
        raise NotImplementedError

    async def _fetch(self) -> Any:
        raise NotImplementedError

    @property
    def state(self) -> QueryState:
        return self._cache.get_state(self.key)

    @property
    def loading(self) -> bool:
        return self.state.status == QueryStatus.LOADING

    async def load(self) -> QueryState:
        """Resolve the current key under the unit's caching policy."""
        return await self._cache.fetch(self.key, self._fetch, self.options)

    async def refetch(self) -> QueryState:
        """Manual retry/refresh of the current key."""
        return await self._cache.refetch(self.key, self._fetch, self.options)


@dataclass(frozen=True)
class WeatherView:
    current: Optional[dict[str, Any]] = None
    daily: list[dict[str, Any]] = field(default_factory=list)
    hourly: list[dict[str, Any]] = field(default_factory=list)
    location: Optional[dict[str, Any]] = None
    loading: bool = False
    error: Optional[str] = None
    location_error: Optional[str] = None
    city: Optional[str] = None
    is_fallback: bool = False


class WeatherUnit(QueryUnit):
    """
    Weather for the device location, or for a searched city.

    A searched city wins over coordinates. When the location cannot be
    determined, or weather for it cannot be fetched, the unit falls back to
    the default city.
    """

    def __init__(
        self,
        api: DashboardApi,
        cache: QueryCache,
        settings: Optional[ClientSettings] = None,
    ):
        settings = settings or get_client_settings()
        super().__init__(
            api,
            cache,
            query_options(settings, settings.weather_stale_time),
        )
        self.default_city = settings.default_city
        self._coords: Optional[tuple[float, float]] = None
        self._city: Optional[str] = None
        self._location_error: Optional[str] = None
        self._is_fallback = False

    @property
    def key(self) -> Optional[QueryKey]:
        if self._city:
            return ("weather", "city", self._city)
        if self._coords is not None:
            lat, lon = self._coords
            return ("weather", "coords", lat, lon)
        return None

    async def _fetch(self) -> dict[str, Any]:
        if self._city:
            return await self._api.weather(city=self._city)
        lat, lon = self._coords
        return await self._api.weather(lat=lat, lon=lon)

    def set_location(self, lat: float, lon: float) -> None:
        self._coords = (lat, lon)
        self._location_error = None

    def location_failed(self, message: str) -> None:
        """Record a geolocation error and switch to the default city."""
        self._location_error = message
        if not self._city:
            self._use_fallback()

    def _use_fallback(self) -> None:
        logger.info(f"Falling back to weather for {self.default_city}")
        self._city = self.default_city
        self._is_fallback = True

    async def load(self) -> QueryState:
        state = await super().load()
        if state.status == QueryStatus.ERROR and not self._city and self._coords is not None:
            self._use_fallback()
            state = await super().load()
        return state

    def select_city(self, city: str) -> None:
        if not city or not city.strip():
            raise ValueError("City name is required")
        self._city = city.strip()
        self._is_fallback = False

    async def search(self, city: str) -> QueryState:
        """Switch to a city and load it."""
        self.select_city(city)
        return await self.load()

    async def refresh(self) -> QueryState:
        return await self.refetch()

    def view(self) -> WeatherView:
        state = self.state
        data = state.data or {}
        forecast = data.get("forecast") or {}
        entries = forecast.get("list") or []
        tz = forecast_timezone(forecast)

        return WeatherView(
            current=data.get("current"),
            daily=daily_forecast(entries, tz=tz) if entries else [],
            hourly=hourly_forecast(entries) if entries else [],
            location=data.get("location"),
            loading=state.status == QueryStatus.LOADING or (self.key is None and not self._location_error),
            error=state.error if state.status == QueryStatus.ERROR else None,
            location_error=self._location_error,
            city=self._city,
            is_fallback=self._is_fallback,
        )


@dataclass(frozen=True)
class NewsView:
    articles: list[dict[str, Any]] = field(default_factory=list)
    country: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None


class NewsUnit(QueryUnit):
    """Headlines for a country; idle until a country is known."""

    def __init__(
        self,
        api: DashboardApi,
        cache: QueryCache,
        settings: Optional[ClientSettings] = None,
        country: Optional[str] = None,
    ):
        settings = settings or get_client_settings()
        super().__init__(
            api,
            cache,
            query_options(settings, settings.news_stale_time),
        )
        self.country = country

    @property
    def key(self) -> Optional[QueryKey]:
        if not self.country:
            return None
        return ("news", self.country.lower())

    async def _fetch(self) -> list[dict[str, Any]]:
        return await self._api.news(self.country.lower())

    def view(self) -> NewsView:
        state = self.state
        return NewsView(
            articles=dedupe_articles(state.data or []),
            country=self.country,
            loading=state.status == QueryStatus.LOADING,
            error=state.error if state.status == QueryStatus.ERROR else None,
        )


@dataclass(frozen=True)
class TrendingView:
    repos: list[dict[str, Any]] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None


class TrendingUnit(QueryUnit):
    """Most-starred repositories."""

    KEY: QueryKey = ("github", "trending")

    def __init__(
        self,
        api: DashboardApi,
        cache: QueryCache,
        settings: Optional[ClientSettings] = None,
    ):
        settings = settings or get_client_settings()
        super().__init__(
            api,
            cache,
            query_options(settings, settings.trending_stale_time),
        )

    @property
    def key(self) -> QueryKey:
        return self.KEY

    async def _fetch(self) -> dict[str, Any]:
        return await self._api.trending()

    def view(self) -> TrendingView:
        state = self.state
        data = state.data or {}
        return TrendingView(
            repos=data.get("items") or [],
            loading=state.status == QueryStatus.LOADING,
            error=state.error if state.status == QueryStatus.ERROR else None,
        )
