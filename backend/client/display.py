"""Rich terminal rendering for the dashboard widgets."""

from datetime import datetime, timezone
from typing import Any, Optional

from rich.columns import Columns
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from modules.feeds.transforms import wind_direction

from .dashboard import DashboardSnapshot
from .widgets import NewsView, TrendingView, WeatherView

console = Console()


def truncate(text: Optional[str], limit: int = 80) -> str:
    """Shorten text to `limit` characters, marking the cut with an ellipsis."""
    if not text:
        return ""
    return text if len(text) <= limit else text[: limit - 3] + "..."


def format_count(value: Optional[int]) -> str:
    """Compact star/fork counts: 1234 -> 1.2k, 2_500_000 -> 2.5M."""
    if value is None:
        return "-"
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}k"
    return str(value)


def _format_time(timestamp: int, fmt: str) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(fmt)


def _message_panel(title: str, message: str, style: str) -> Panel:
    return Panel(Text(message, style=style), title=title, border_style=style)


def render_weather(view: WeatherView) -> Panel:
    """Current conditions plus hourly and daily forecast tables."""
    title = "Weather"
    if view.error:
        return _message_panel(title, view.error, "red")
    if view.loading or not view.current:
        return _message_panel(title, "Loading weather...", "dim")

    current = view.current
    main = current.get("main") or {}
    wind = current.get("wind") or {}
    conditions = (current.get("weather") or [{}])[0].get("description", "")
    location = view.location or {}
    place = location.get("name") or view.city or ""
    if location.get("country"):
        place = f"{place}, {location['country']}"

    summary = Text()
    summary.append(f"{place}\n", style="bold")
    summary.append(f"{main.get('temp', '-')}°C ", style="bold cyan")
    summary.append(f"{conditions}\n")
    summary.append(
        f"Feels like {main.get('feels_like', '-')}°C · "
        f"Humidity {main.get('humidity', '-')}% · "
        f"Wind {wind.get('speed', '-')} m/s"
    )
    if wind.get("deg") is not None:
        summary.append(f" {wind_direction(wind['deg'])}")
    if view.is_fallback and view.location_error:
        summary.append(f"\n{view.location_error}", style="yellow")

    hourly = Table(title="Next hours", show_edge=False)
    hourly.add_column("Time")
    hourly.add_column("Temp", justify="right")
    for entry in view.hourly:
        hourly.add_row(
            _format_time(entry["dt"], "%H:%M"),
            f"{(entry.get('main') or {}).get('temp', '-')}°C",
        )

    daily = Table(title="5-day forecast", show_edge=False)
    daily.add_column("Day")
    daily.add_column("Temp", justify="right")
    daily.add_column("Conditions")
    for entry in view.daily:
        daily.add_row(
            _format_time(entry["dt"], "%a %d"),
            f"{(entry.get('main') or {}).get('temp', '-')}°C",
            (entry.get("weather") or [{}])[0].get("main", ""),
        )

    return Panel(Group(summary, Columns([hourly, daily])), title=title, border_style="blue")


def render_news(view: NewsView) -> Panel:
    title = f"News ({view.country.upper()})" if view.country else "News"
    if view.error:
        return _message_panel(title, view.error, "red")
    if view.loading:
        return _message_panel(title, "Loading news...", "dim")
    if not view.articles:
        return _message_panel(title, "No news available.", "dim")

    table = Table(show_header=False, show_edge=False, expand=True)
    table.add_column("Headline", ratio=3)
    table.add_column("Source", ratio=1, style="dim")
    for article in view.articles:
        table.add_row(
            truncate(article.get("title"), 90),
            article.get("source_name") or article.get("source_id") or "",
        )
    return Panel(table, title=title, border_style="blue")


def render_trending(view: TrendingView) -> Panel:
    title = "Trending on GitHub"
    if view.error:
        return _message_panel(title, view.error, "red")
    if view.loading:
        return _message_panel(title, "Loading repositories...", "dim")

    table = Table(show_edge=False, expand=True)
    table.add_column("Repository", style="cyan")
    table.add_column("Language")
    table.add_column("Stars", justify="right")
    table.add_column("Forks", justify="right")
    for repo in view.repos:
        table.add_row(
            repo.get("full_name", ""),
            repo.get("language") or "-",
            format_count(repo.get("stargazers_count")),
            format_count(repo.get("forks_count")),
        )
    return Panel(table, title=title, border_style="blue")


def render_header(user: Optional[dict[str, Any]]) -> Text:
    if not user:
        return Text("Dashboard", style="bold")
    return Text(f"Welcome back, {user.get('username', '')}", style="bold")


def render_dashboard(snapshot: DashboardSnapshot) -> RenderableType:
    """The whole dashboard as a single renderable."""
    return Group(
        render_header(snapshot.user),
        render_weather(snapshot.weather),
        render_news(snapshot.news),
        render_trending(snapshot.trending),
    )


def print_dashboard(snapshot: DashboardSnapshot) -> None:
    console.print(render_dashboard(snapshot))
