"""Tests for terminal rendering."""

import pytest
from rich.console import Console

from client.dashboard import DashboardSnapshot
from client.display import format_count, render_dashboard, render_news, render_trending, truncate
from client.widgets import NewsView, TrendingView, WeatherView


def render_text(renderable) -> str:
    console = Console(record=True, width=120)
    console.print(renderable)
    return console.export_text()


@pytest.mark.parametrize(
    "value, expected",
    [(None, "-"), (999, "999"), (1234, "1.2k"), (2_500_000, "2.5M")],
)
def test_format_count(value, expected):
    assert format_count(value) == expected


def test_truncate():
    assert truncate(None) == ""
    assert truncate("short", 10) == "short"
    assert truncate("a" * 20, 10) == "aaaaaaa..."


class TestRendering:
    def test_news_error(self):
        text = render_text(render_news(NewsView(articles=[], country="us", loading=False, error="Missing NewsData API key")))

        assert "News (US)" in text
        assert "Missing NewsData API key" in text

    def test_trending_rows(self):
        view = TrendingView(
            repos=[{"full_name": "octo/cat", "language": "Python", "stargazers_count": 1500, "forks_count": 12}],
            loading=False,
            error=None,
        )

        text = render_text(render_trending(view))

        assert "octo/cat" in text
        assert "1.5k" in text

    def test_dashboard(self):
        snapshot = DashboardSnapshot(
            user={"username": "alice"},
            location=None,
            location_error=None,
            country_code="us",
            weather=WeatherView(
                current={"main": {"temp": 12, "feels_like": 10, "humidity": 80}, "wind": {"speed": 3, "deg": 90}, "weather": [{"description": "light rain"}]},
                daily=[],
                hourly=[],
                location={"name": "London", "country": "GB"},
                loading=False,
                error=None,
                location_error=None,
                city="London",
                is_fallback=False,
            ),
            news=NewsView(articles=[{"title": "Headline", "source_id": "bbc"}], country="us", loading=False, error=None),
            trending=TrendingView(repos=[], loading=True, error=None),
        )

        text = render_text(render_dashboard(snapshot))

        assert "Welcome back, alice" in text
        assert "London, GB" in text
        assert "light rain" in text
        assert "Headline" in text
        assert "Loading repositories..." in text
