"""Tests for the widget data endpoints."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_feeds_service
from modules.feeds.models import GeocodeResult, TrendingRepos, WeatherLocation, WeatherReport
from modules.feeds.exceptions import (
    CountryNotFoundError,
    MissingApiKeyError,
    MissingCoordinatesError,
    ProviderRequestError,
)


@pytest.fixture
def feeds() -> MagicMock:
    service = MagicMock()
    service.get_weather = AsyncMock()
    service.get_country_code = AsyncMock()
    service.get_news = AsyncMock(return_value=[])
    service.get_trending = AsyncMock()
    return service


@pytest.fixture
def client(feeds) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_feeds_service] = lambda: feeds
    return TestClient(app)


class TestGeocode:
    def test_success(self, client, feeds):
        feeds.get_country_code.return_value = GeocodeResult(countryCode="FR")

        response = client.get("/api/users/geocode", params={"lat": "48.85", "lon": "2.35"})

        assert response.status_code == 200
        assert response.json() == {"countryCode": "FR"}
        feeds.get_country_code.assert_awaited_once_with("48.85", "2.35")

    def test_not_found(self, client, feeds):
        feeds.get_country_code.side_effect = CountryNotFoundError("0", "0")

        response = client.get("/api/users/geocode", params={"lat": "0", "lon": "0"})

        assert response.status_code == 404
        assert response.json()["error"] == "Country not found"

    def test_missing_coordinates(self, client, feeds):
        feeds.get_country_code.side_effect = MissingCoordinatesError()

        response = client.get("/api/users/geocode")

        assert response.status_code == 400


class TestWeather:
    def test_by_city(self, client, feeds):
        feeds.get_weather.return_value = WeatherReport(
            current={"name": "London"},
            forecast={"list": []},
            location=WeatherLocation(name="London", country="GB"),
        )

        response = client.get("/api/users/weather", params={"city": "London"})

        assert response.status_code == 200
        body = response.json()
        assert body["location"]["name"] == "London"
        assert set(body) == {"current", "forecast", "location"}
        feeds.get_weather.assert_awaited_once_with(lat=None, lon=None, city="London")

    def test_missing_key_is_500(self, client, feeds):
        feeds.get_weather.side_effect = MissingApiKeyError("OpenWeather")

        response = client.get("/api/users/weather", params={"lat": "1", "lon": "2"})

        assert response.status_code == 500
        assert response.json() == {"error": "Missing OpenWeather API key", "code": "MISSING_API_KEY"}


class TestNews:
    def test_country_passed_through(self, client, feeds):
        feeds.get_news.return_value = [{"title": "Headline"}]

        response = client.get("/api/users/news", params={"country": "gb"})

        assert response.status_code == 200
        assert response.json() == [{"title": "Headline"}]
        feeds.get_news.assert_awaited_once_with("gb")

    def test_upstream_failure(self, client, feeds):
        feeds.get_news.side_effect = ProviderRequestError("NewsData", "Failed to fetch news")

        response = client.get("/api/users/news")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch news"


class TestTrending:
    def test_success(self, client, feeds):
        feeds.get_trending.return_value = TrendingRepos(
            items=[{"full_name": "a/b", "stargazers_count": 60000}],
            total_count=1,
        )

        response = client.get("/api/github/trending")

        assert response.status_code == 200
        assert response.json()["items"][0]["full_name"] == "a/b"
        assert response.json()["incomplete_results"] is False
