"""
Widget data endpoints.

Thin wrappers over IFeedsService. Weather, geocode and news live under the
users prefix; trending under the github prefix.
"""

from typing import Any, Optional
from fastapi import APIRouter, Depends, Query

from api.dependencies import get_feeds_service

from .interfaces import IFeedsService
from .models import GeocodeResult, TrendingRepos, WeatherReport

router = APIRouter()
github_router = APIRouter()


@router.get("/geocode", response_model=GeocodeResult)
async def geocode(
    lat: Optional[str] = Query(default=None),
    lon: Optional[str] = Query(default=None),
    service: IFeedsService = Depends(get_feeds_service),
) -> GeocodeResult:
    """
    Country code for a coordinate pair.
    """
    return await service.get_country_code(lat, lon)


@router.get("/weather", response_model=WeatherReport)
async def weather(
    lat: Optional[str] = Query(default=None),
    lon: Optional[str] = Query(default=None),
    city: Optional[str] = Query(default=None),
    service: IFeedsService = Depends(get_feeds_service),
) -> WeatherReport:
    """
    Current weather and 3-hour forecast by coordinates or city name.
    """
    return await service.get_weather(lat=lat, lon=lon, city=city)


@router.get("/news")
async def news(
    country: Optional[str] = Query(default=None),
    service: IFeedsService = Depends(get_feeds_service),
) -> list[dict[str, Any]]:
    """
    Latest headlines for a country (default "us"), de-duplicated, at most 5.
    """
    return await service.get_news(country)


@github_router.get("/trending", response_model=TrendingRepos)
async def trending(
    service: IFeedsService = Depends(get_feeds_service),
) -> TrendingRepos:
    """
    Most-starred GitHub repositories.
    """
    return await service.get_trending()
