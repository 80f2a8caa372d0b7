"""
Derived views over provider payloads.

Pure functions shared by the API (news de-duplication before responding) and
the client widgets (forecast slicing, de-duplication of cached results).
"""

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

NEWS_LIMIT = 5
DAILY_FORECAST_DAYS = 5
# 4 x 3-hour entries, roughly the next 12 hours
HOURLY_FORECAST_ENTRIES = 4

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def normalize_title(title: str) -> str:
    """Lowercase a headline and strip everything but letters and digits."""
    return _NON_ALPHANUMERIC.sub("", (title or "").lower())


def dedupe_articles(
    articles: Iterable[dict[str, Any]],
    limit: int = NEWS_LIMIT,
) -> list[dict[str, Any]]:
    """
    Collapse syndicated duplicates, keeping the first article per title.

    De-duplication happens before the cap, so up to `limit` distinct
    headlines survive.
    """
    seen: set[str] = set()
    unique: list[dict[str, Any]] = []

    for article in articles:
        key = normalize_title(article.get("title", ""))
        if key in seen:
            continue
        seen.add(key)
        unique.append(article)
        if len(unique) >= limit:
            break

    return unique


def _entry_date(entry: dict[str, Any], tz: timezone) -> str:
    return datetime.fromtimestamp(entry["dt"], tz=tz).date().isoformat()


def forecast_timezone(forecast: dict[str, Any]) -> timezone:
    """Timezone of the forecast's city, from its UTC offset in seconds."""
    offset = (forecast.get("city") or {}).get("timezone") or 0
    return timezone(timedelta(seconds=offset))


def daily_forecast(
    entries: Iterable[dict[str, Any]],
    tz: timezone = timezone.utc,
    days: int = DAILY_FORECAST_DAYS,
) -> list[dict[str, Any]]:
    """
    One entry per calendar date: the first entry seen for that date.

    Args:
        entries: Raw 3-hour forecast entries, each with a unix `dt`
        tz: Timezone that defines calendar dates
        days: Maximum number of dates to return

    Returns:
        At most `days` entries in chronological order.
    """
    daily: list[dict[str, Any]] = []
    processed: set[str] = set()

    for entry in sorted(entries, key=lambda e: e["dt"]):
        date = _entry_date(entry, tz)
        if date in processed:
            continue
        processed.add(date)
        daily.append(entry)
        if len(daily) >= days:
            break

    return daily


def hourly_forecast(
    entries: Iterable[dict[str, Any]],
    count: int = HOURLY_FORECAST_ENTRIES,
) -> list[dict[str, Any]]:
    """The first `count` raw forecast entries."""
    return list(entries)[:count]


def wind_direction(degrees: float) -> str:
    """Map a wind bearing in degrees to one of 16 compass points."""
    index = math.floor(degrees / 22.5 + 0.5) % 16
    return COMPASS_POINTS[index]
