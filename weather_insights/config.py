"""Settings and service wiring."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import requests

from .cache import TTLCache
from .providers.base import RequestConfig
from .providers.weatherapi import WeatherApiProvider
from .services.advice import WeatherAdviceService
from .services.health import HealthInsightService
from .services.occupation import OccupationInsightService
from .services.summary import TodaySummaryService
from .services.travel import TravelScoreService
from .services.weather import WeatherService


class ConfigurationError(RuntimeError):
    """Raised when required settings are missing or malformed."""


def env(name: str, default: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    source = os.environ if environ is None else environ
    value = source.get(name, default)
    if value is None or value == "":
        raise ConfigurationError(f"Environment variable {name} is required")
    return value


def _float(name: str, raw: Optional[str]) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


@dataclass
class ProviderSettings:
    api_key: str
    base_url: str = WeatherApiProvider.base_url
    timeout: float = 10.0
    summary_timeout: Optional[float] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProviderSettings":
        source = os.environ if environ is None else environ
        timeout = _float("WEATHERAPI_TIMEOUT", source.get("WEATHERAPI_TIMEOUT"))
        return cls(
            api_key=env("WEATHERAPI_KEY", environ=source),
            base_url=source.get("WEATHERAPI_BASE_URL") or WeatherApiProvider.base_url,
            timeout=timeout if timeout is not None else 10.0,
            summary_timeout=_float("WEATHER_SUMMARY_TIMEOUT", source.get("WEATHER_SUMMARY_TIMEOUT")),
        )


@dataclass
class Services:
    weather: WeatherService
    summary: TodaySummaryService
    travel: TravelScoreService
    occupation: OccupationInsightService
    health: HealthInsightService
    advice: WeatherAdviceService


def build_services(
    settings: ProviderSettings,
    session: Optional[requests.Session] = None,
    cache: Optional[TTLCache] = None,
) -> Services:
    provider = WeatherApiProvider(
        api_key=settings.api_key,
        base_url=settings.base_url,
        session=session,
        request_config=RequestConfig(timeout=settings.timeout),
    )
    weather = WeatherService(provider, cache=cache)
    summary = TodaySummaryService(weather, timeout=settings.summary_timeout)
    return Services(
        weather=weather,
        summary=summary,
        travel=TravelScoreService(summary),
        occupation=OccupationInsightService(summary),
        health=HealthInsightService(summary),
        advice=WeatherAdviceService(summary),
    )


__all__ = ["ConfigurationError", "ProviderSettings", "Services", "build_services", "env"]
