#!/usr/bin/env python
"""
Personal dashboard in the terminal.

Signs in against a running dashboard API, then shows weather, news and
trending repositories.

Usage:
    python run_dashboard.py --username alice
    python run_dashboard.py --username alice --city Paris
    python run_dashboard.py --username alice --lat 48.85 --lon 2.35
"""

import argparse
import asyncio
import getpass
import logging
import sys
from typing import Optional

from client.api import ApiError, DashboardApi
from client.config import ClientSettings, get_client_settings
from client.dashboard import Dashboard
from client.display import console, print_dashboard
from client.geolocation import FixedPositionSource, PositionSource, UnavailablePositionSource
from client.session import SessionStore, ViewDecision, guard_protected_view, login, rehydrate


def position_source(lat: Optional[float], lon: Optional[float]) -> PositionSource:
    """Fixed coordinates when both are known, otherwise no geolocation."""
    if lat is not None and lon is not None:
        return FixedPositionSource(lat, lon)
    return UnavailablePositionSource()


async def run(args: argparse.Namespace, settings: ClientSettings) -> int:
    """Sign in and render the dashboard once. Returns the exit code."""
    async with DashboardApi(args.base_url or settings.base_url, settings.request_timeout) as api:
        store = SessionStore()
        await rehydrate(store, api)

        if guard_protected_view(store.state) != ViewDecision.RENDER:
            if not args.username:
                console.print("[red]Error:[/red] Not signed in. Pass --username to log in.")
                return 1
            password = args.password or getpass.getpass("Password: ")
            try:
                await login(store, api, args.username, password)
            except ApiError as e:
                console.print(f"[red]Login failed:[/red] {e.message}")
                return 1

        lat = args.lat if args.lat is not None else settings.latitude
        lon = args.lon if args.lon is not None else settings.longitude
        dashboard = Dashboard(api, store, position_source(lat, lon), settings)

        with console.status("Loading dashboard..."):
            snapshot = await dashboard.load(city=args.city)

        print_dashboard(snapshot)
        return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Show the personal dashboard in the terminal")
    parser.add_argument("--base-url", help="Dashboard API URL (default: DASHBOARD_BASE_URL)")
    parser.add_argument("--username", "-u", help="Username to log in with")
    parser.add_argument("--password", "-p", help="Password (prompted if omitted)")
    parser.add_argument("--city", help="Show weather for this city")
    parser.add_argument("--lat", type=float, help="Latitude of the current position")
    parser.add_argument("--lon", type=float, help="Longitude of the current position")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = get_client_settings()
    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
