"""Command line access to the weather services.

Prints JSON on stdout. Exit codes: 0 success, 1 not found, 2 invalid input,
3 upstream failure, 4 cancelled/timed out, 5 configuration error.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict, is_dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional, TextIO

from .config import ConfigurationError, ProviderSettings, Services, build_services
from .domain import available_health_conditions, available_occupations
from .providers.base import RequestCancelled, UpstreamError

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2
EXIT_UPSTREAM = 3
EXIT_CANCELLED = 4
EXIT_CONFIG = 5

logger = logging.getLogger(__name__)


class CommandError(Exception):
    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weather-insights", description="Weather summaries and insights")
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("current", "forecast"):
        cmd = sub.add_parser(name, help=f"{name} weather by city or coordinates")
        cmd.add_argument("--city", type=str, help="City name or City,CountryCode")
        cmd.add_argument("--lat", type=float, help="Latitude")
        cmd.add_argument("--lon", type=float, help="Longitude")
        if name == "forecast":
            cmd.add_argument("--days", type=int, default=3, help="Number of forecast days (1-3)")

    for name, help_text in (
        ("summary", "Combined current, forecast and astronomy for today"),
        ("travel", "Travel/comfort score"),
        ("explain", "Travel score explanation"),
        ("advice", "Umbrella, heat, UV and air-quality advice"),
        ("insight", "Daily insight with best/worst outdoor windows"),
    ):
        sub.add_parser(name, help=help_text).add_argument("city")

    occupation = sub.add_parser("occupation", help="Occupation suitability for today")
    occupation.add_argument("occupation")
    occupation.add_argument("city")
    sub.add_parser("occupations", help="List supported occupations")

    health = sub.add_parser("health", help="Health-condition risk for today")
    health.add_argument("condition", help=", ".join(available_health_conditions()))
    health.add_argument("city")

    sub.add_parser("timezone", help="Time zone for a location").add_argument("query")
    astronomy = sub.add_parser("astronomy", help="Sun and moon times")
    astronomy.add_argument("query")
    astronomy.add_argument("--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD, defaults to today")
    sub.add_parser("ip", help="Geolocate an IP address").add_argument("ip")
    sub.add_parser("search", help="Search locations by name").add_argument("query")
    return parser


def _location(options: argparse.Namespace) -> Dict[str, Any]:
    if options.city:
        return {"city": options.city}
    if options.lat is None or options.lon is None:
        raise CommandError("--lat and --lon are required unless --city is given", EXIT_INVALID)
    return {"lat": options.lat, "lon": options.lon}


def _run(services: Services, options: argparse.Namespace) -> Any:
    command = options.command
    if command == "current":
        where = _location(options)
        if "city" in where:
            return services.weather.get_current_by_city(where["city"])
        return services.weather.get_current_by_coordinates(where["lat"], where["lon"])
    if command == "forecast":
        where = _location(options)
        days = max(1, min(options.days, 3))
        if "city" in where:
            return services.weather.get_forecast_by_city(where["city"], days)
        return services.weather.get_forecast_by_coordinates(where["lat"], where["lon"], days)

    handlers: Dict[str, Callable[[], Any]] = {
        "summary": lambda: services.summary.get_today_summary(options.city),
        "travel": lambda: services.travel.get_travel_score(options.city),
        "explain": lambda: services.travel.explain_travel_score(options.city),
        "advice": lambda: services.advice.get_advice(options.city),
        "insight": lambda: services.summary.get_daily_insight(options.city),
        "occupation": lambda: services.occupation.get_occupation_insight(options.city, options.occupation),
        "occupations": available_occupations,
        "health": lambda: services.health.get_health_insight(options.city, options.condition),
        "timezone": lambda: services.weather.get_time_zone(options.query),
        "astronomy": lambda: services.weather.get_astronomy(
            options.query, options.date or services.summary.today()
        ),
        "ip": lambda: services.weather.get_ip_lookup(options.ip),
        "search": lambda: list(services.weather.search_locations(options.query)),
    }
    return handlers[command]()


def _jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value


def main(
    argv: Optional[List[str]] = None,
    services: Optional[Services] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    logging.basicConfig(level=os.environ.get("WEATHER_INSIGHTS_LOG_LEVEL", "WARNING").upper())

    options = build_parser().parse_args(argv)
    try:
        if services is None:
            services = build_services(ProviderSettings.from_env())
        result = _run(services, options)
        if result is None:
            raise CommandError("No weather data found for the requested location", EXIT_NOT_FOUND)
    except CommandError as exc:
        stderr.write(f"{exc}\n")
        return exc.exit_code
    except ConfigurationError as exc:
        stderr.write(f"{exc}\n")
        return EXIT_CONFIG
    except ValueError as exc:
        stderr.write(f"{exc}\n")
        return EXIT_INVALID
    except RequestCancelled as exc:
        logger.info("Request cancelled: %s", exc)
        stderr.write("The request was cancelled.\n")
        return EXIT_CANCELLED
    except UpstreamError as exc:
        logger.error("Upstream failure: %s", exc)
        stderr.write("Error calling external weather service.\n")
        return EXIT_UPSTREAM

    stdout.write(json.dumps(_jsonable(result), default=str, ensure_ascii=False))
    stdout.write("\n")
    return EXIT_OK


__all__ = ["build_parser", "main"]
