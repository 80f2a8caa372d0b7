"""Tests for forecast and headline transforms."""

import pytest
from datetime import datetime, timedelta, timezone

from modules.feeds.transforms import (
    daily_forecast,
    dedupe_articles,
    forecast_timezone,
    hourly_forecast,
    normalize_title,
    wind_direction,
)


def forecast_entries(start: datetime, days: int) -> list[dict]:
    """3-hour entries covering `days` days."""
    return [
        {"dt": int((start + timedelta(hours=3 * i)).timestamp()), "main": {"temp": i}}
        for i in range(days * 8)
    ]


class TestNews:
    def test_normalize_title(self):
        assert normalize_title("Fed Hikes Rates!") == "fedhikesrates"
        assert normalize_title("  fed hikes   rates ") == "fedhikesrates"
        assert normalize_title(None) == ""

    def test_syndicated_duplicates_collapse(self):
        articles = [
            {"article_id": "1", "title": "Fed Hikes Rates!"},
            {"article_id": "2", "title": "fed hikes rates"},
        ]

        result = dedupe_articles(articles)

        assert [a["article_id"] for a in result] == ["1"]

    def test_dedupe_before_cap(self):
        articles = [{"title": "Same story"}] * 3 + [{"title": f"Story {i}"} for i in range(6)]

        result = dedupe_articles(articles)

        assert len(result) == 5
        assert len({normalize_title(a["title"]) for a in result}) == 5

    def test_fewer_than_limit(self):
        assert len(dedupe_articles([{"title": "a"}, {"title": "b"}])) == 2


class TestForecast:
    def test_daily_one_per_date_max_five(self):
        start = datetime(2026, 5, 1, 0, 0, tzinfo=timezone.utc)
        entries = forecast_entries(start, days=7)

        daily = daily_forecast(entries)

        dates = [datetime.fromtimestamp(e["dt"], tz=timezone.utc).date() for e in daily]
        assert len(daily) == 5
        assert len(set(dates)) == 5
        assert dates == sorted(dates)
        assert daily[0] is entries[0]

    def test_daily_keeps_first_entry_of_each_date(self):
        start = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
        entries = forecast_entries(start, days=2)

        daily = daily_forecast(entries)

        # Day one starts at noon; day two at midnight
        assert datetime.fromtimestamp(daily[0]["dt"], tz=timezone.utc).hour == 12
        assert datetime.fromtimestamp(daily[1]["dt"], tz=timezone.utc).hour == 0

    def test_daily_sorts_unordered_input(self):
        start = datetime(2026, 5, 1, tzinfo=timezone.utc)
        entries = list(reversed(forecast_entries(start, days=3)))

        daily = daily_forecast(entries)

        assert [e["dt"] for e in daily] == sorted(e["dt"] for e in daily)

    def test_daily_uses_city_timezone(self):
        # 22:00 and 23:00 UTC fall on the next day at UTC+3
        first = datetime(2026, 5, 1, 22, 0, tzinfo=timezone.utc)
        entries = [
            {"dt": int(first.timestamp())},
            {"dt": int((first + timedelta(hours=1)).timestamp())},
        ]
        tz = forecast_timezone({"city": {"timezone": 3 * 3600}})

        assert len(daily_forecast(entries, tz=tz)) == 1
        assert len(daily_forecast(entries, tz=timezone.utc)) == 1
        assert len(daily_forecast(entries, tz=timezone(timedelta(hours=1, minutes=30)))) == 2

    def test_forecast_timezone_default(self):
        assert forecast_timezone({}) == timezone.utc

    def test_hourly_first_four(self):
        entries = forecast_entries(datetime(2026, 5, 1, tzinfo=timezone.utc), days=1)

        assert hourly_forecast(entries) == entries[:4]
        assert hourly_forecast(entries[:2]) == entries[:2]


class TestWindDirection:
    @pytest.mark.parametrize("degrees,expected", [
        (0, "N"),
        (11.24, "N"),
        (11.25, "NNE"),
        (90, "E"),
        (180, "S"),
        (270, "W"),
        (348.75, "N"),
        (360, "N"),
    ])
    def test_compass_points(self, degrees, expected):
        assert wind_direction(degrees) == expected
