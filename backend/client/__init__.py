"""
Dashboard client.

The application side of the dashboard: API client with a cookie jar,
session store, keyed query cache with widget units, geolocation and the
orchestrator that ties them together.
"""

from .api import ApiError, DashboardApi
from .config import ClientSettings, get_client_settings
from .dashboard import Dashboard, DashboardSnapshot
from .geolocation import (
    FixedPositionSource,
    GeolocationError,
    GeolocationWatcher,
    Location,
    PositionSource,
    UnavailablePositionSource,
    acquire,
)
from .query import QueryCache, QueryOptions, QueryState, QueryStatus
from .session import (
    UNCHECKED,
    LoadingStatus,
    SessionState,
    SessionStore,
    ViewDecision,
    guard_protected_view,
    rehydrate,
)
from .widgets import NewsUnit, TrendingUnit, WeatherUnit

__all__ = [
    # API
    "ApiError",
    "DashboardApi",
    # Config
    "ClientSettings",
    "get_client_settings",
    # Orchestration
    "Dashboard",
    "DashboardSnapshot",
    "QueryCache",
    "QueryOptions",
    "QueryState",
    "QueryStatus",
    "WeatherUnit",
    "NewsUnit",
    "TrendingUnit",
    # Geolocation
    "FixedPositionSource",
    "GeolocationError",
    "GeolocationWatcher",
    "Location",
    "PositionSource",
    "UnavailablePositionSource",
    "acquire",
    # Session
    "UNCHECKED",
    "LoadingStatus",
    "SessionState",
    "SessionStore",
    "ViewDecision",
    "guard_protected_view",
    "rehydrate",
]
