"""Cached weather summaries and rule-based insights on top of WeatherAPI.com."""
from __future__ import annotations

from .config import ConfigurationError, ProviderSettings, Services, build_services
from .domain import HealthCondition, OccupationType
from .entities import TodaySummary

__all__ = [
    "ConfigurationError",
    "HealthCondition",
    "OccupationType",
    "ProviderSettings",
    "Services",
    "TodaySummary",
    "build_services",
]
