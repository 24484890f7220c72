from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Tuple

from ..cache import TTLCache
from ..entities import AstronomySnapshot, Forecast, IpLocation, Location, TimeZoneInfo, WeatherSnapshot


class WeatherService:
    """Provider access with an expiring cache in front of current and forecast lookups.

    Time zone, astronomy, IP lookup and search always go to the provider.
    Empty results are returned as ``None`` and never cached; provider errors
    propagate unchanged.
    """

    CURRENT_TTL = 60
    FORECAST_TTL = 10 * 60

    def __init__(
        self,
        provider: Any,
        cache: Optional[TTLCache] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.cache = cache if cache is not None else TTLCache()
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def get_current_by_city(self, city: str) -> Optional[WeatherSnapshot]:
        city = _require(city, "city")
        return self._cached(
            self._cache_key("current", city_key(city)),
            self.CURRENT_TTL,
            lambda: self.provider.current(city),
        )

    def get_current_by_coordinates(self, latitude: float, longitude: float) -> Optional[WeatherSnapshot]:
        location = format_coordinates(latitude, longitude)
        return self._cached(
            self._cache_key("current", location, coords=True),
            self.CURRENT_TTL,
            lambda: self.provider.current(location),
        )

    def get_forecast_by_city(self, city: str, days: int) -> Optional[Forecast]:
        city = _require(city, "city")
        _require_days(days)
        return self._cached(
            self._cache_key("forecast", city_key(city), days=days),
            self.FORECAST_TTL,
            lambda: self.provider.forecast(city, days),
        )

    def get_forecast_by_coordinates(self, latitude: float, longitude: float, days: int) -> Optional[Forecast]:
        _require_days(days)
        location = format_coordinates(latitude, longitude)
        return self._cached(
            self._cache_key("forecast", location, days=days, coords=True),
            self.FORECAST_TTL,
            lambda: self.provider.forecast(location, days),
        )

    def get_time_zone(self, query: str) -> Optional[TimeZoneInfo]:
        return self.provider.time_zone(_require(query, "query"))

    def get_astronomy(self, query: str, on: date) -> Optional[AstronomySnapshot]:
        return self.provider.astronomy(_require(query, "query"), on)

    def get_ip_lookup(self, ip: str) -> Optional[IpLocation]:
        return self.provider.ip_lookup(_require(ip, "ip"))

    def search_locations(self, query: str) -> Tuple[Location, ...]:
        return tuple(self.provider.search(_require(query, "query")) or ())

    # Helpers ------------------------------------------------------------
    def _cached(self, key: str, ttl: float, fetch) -> Any:
        result = self.cache.get_or_fetch(key, fetch, ttl)
        if result is None:
            self._log.info("No provider data for %s", key)
        return result

    def _cache_key(self, kind: str, location: str, days: Optional[int] = None, coords: bool = False) -> str:
        scope = "coords" if coords else "city"
        if days is not None:
            return f"{kind}:{scope}:{location}:days:{days}"
        return f"{kind}:{scope}:{location}"


def city_key(city: str) -> str:
    return city.strip().lower()


def format_coordinates(latitude: float, longitude: float) -> str:
    """Render coordinates as ``lat,lon`` with ``.`` as the decimal separator."""
    return f"{float(latitude)!r},{float(longitude)!r}"


def _require(value: str, name: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{name} cannot be empty")
    return str(value).strip()


def _require_days(days: int) -> None:
    if days < 1:
        raise ValueError("days must be at least 1")


__all__ = ["WeatherService", "city_key", "format_coordinates"]
