"""
Feeds module data models.

Upstream payloads are passed through mostly as-is; these models pin down
the parts the dashboard relies on.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Latitude/longitude pair as reported by the weather provider."""

    lat: float
    lon: float


class WeatherLocation(BaseModel):
    """Where a weather report applies."""

    name: str = ""
    coord: Optional[Coordinates] = None
    country: Optional[str] = None


class WeatherReport(BaseModel):
    """Response of GET /weather: current conditions and 3-hour forecast."""

    current: dict[str, Any]
    forecast: dict[str, Any]
    location: WeatherLocation


class GeocodeResult(BaseModel):
    """Response of GET /geocode."""

    countryCode: str = Field(..., description="ISO 3166 alpha-2, upper case")


class TrendingRepos(BaseModel):
    """Response of GET /github/trending, in the upstream search shape."""

    model_config = {"extra": "allow"}

    items: list[dict[str, Any]] = Field(default_factory=list)
    total_count: int = 0
    incomplete_results: bool = False
