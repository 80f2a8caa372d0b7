"""
Feeds module.

Read-only third-party data for the dashboard widgets: weather, reverse
geocoding, news headlines and trending repositories.

Public API:
- IFeedsService: Interface for widget data
- transforms: Derived views (daily/hourly forecast, headline de-dup)
- Feeds exceptions: MissingApiKeyError, ProviderRequestError, etc.
"""

from .interfaces import IFeedsService
from .models import (
    Coordinates,
    WeatherLocation,
    WeatherReport,
    GeocodeResult,
    TrendingRepos,
)
from .exceptions import (
    MissingApiKeyError,
    ProviderRequestError,
    MissingCoordinatesError,
    CountryNotFoundError,
)

__all__ = [
    # Interface
    "IFeedsService",
    # Models
    "Coordinates",
    "WeatherLocation",
    "WeatherReport",
    "GeocodeResult",
    "TrendingRepos",
    # Exceptions
    "MissingApiKeyError",
    "ProviderRequestError",
    "MissingCoordinatesError",
    "CountryNotFoundError",
]
