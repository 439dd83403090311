"""CLI: probe the weather service, then look up one or more cities."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from rich.console import Console

from .client import WeatherServiceClient
from .config import Settings, load_settings
from .controller import SearchController
from .exceptions import ConfigError
from .health import HealthProber
from .log_setup import setup_logger
from .state import Error, normalize_city_input
from .ui import render_health, render_session


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse weather lookup CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Look up current weather for cities via the weather service."
    )
    parser.add_argument("cities", nargs="*", help="City names to search, in order.")
    parser.add_argument(
        "--quick",
        action="append",
        default=[],
        metavar="CITY",
        help="Search a quick-pick city by name (repeatable).",
    )
    parser.add_argument(
        "--units",
        choices=["metric", "imperial"],
        default=None,
        help="Override WEATHER_UNITS for display.",
    )
    parser.add_argument(
        "--skip-health",
        action="store_true",
        help="Skip the startup health probe.",
    )
    return parser.parse_args(argv)


def _match_quick_city(quick_cities: Sequence[str], name: str) -> str | None:
    wanted = name.strip().lower()
    for city in quick_cities:
        if city.lower() == wanted:
            return city
    return None


async def _run(
    args: argparse.Namespace,
    settings: Settings,
    logger: logging.Logger,
    console: Console,
) -> int:
    units = args.units or settings.weather_units
    failures = 0

    async with WeatherServiceClient(settings=settings, logger=logger) as client:
        if not args.skip_health:
            status = await HealthProber(client, logger).probe()
            console.print(render_health(status))

        controller = SearchController(client, logger, quick_cities=settings.quick_cities)
        if not args.cities and not args.quick:
            console.print("Quick search: " + ", ".join(controller.quick_cities))
            return 0

        for raw_city in args.cities:
            if normalize_city_input(raw_city) is None:
                continue
            session = await controller.search(raw_city)
            console.print(render_session(session, units))
            if isinstance(session.request, Error):
                failures += 1

        for name in args.quick:
            city = _match_quick_city(controller.quick_cities, name)
            if city is None:
                logger.error("Unknown quick-pick city: %s", name)
                failures += 1
                continue
            controller.quick_search(city)
            session = await controller.wait_pending()
            console.print(render_session(session, units))
            if isinstance(session.request, Error):
                failures += 1

    return 4 if failures else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the weather lookup flow."""
    args = parse_args(argv)
    console = Console()

    try:
        settings = load_settings()
    except ConfigError as exc:
        setup_logger().error("Configuration failure: %s", exc)
        return 2

    logger = setup_logger(settings.log_level)
    logger.info("Weather lookup startup: %s", settings.safe_summary())
    return asyncio.run(_run(args, settings, logger, console))


if __name__ == "__main__":
    sys.exit(main())
