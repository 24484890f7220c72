from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple


@dataclass(frozen=True)
class AirQuality:
    """Pollutant concentrations in µg/m³ plus the two index scales.

    Any field may be missing; callers treat a missing value as neutral
    rather than as zero.
    """

    co: Optional[float] = None
    o3: Optional[float] = None
    no2: Optional[float] = None
    so2: Optional[float] = None
    pm2_5: Optional[float] = None
    pm10: Optional[float] = None
    us_epa_index: Optional[int] = None
    gb_defra_index: Optional[int] = None


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions for a location."""

    city: str
    region: str
    country: str
    local_time: str
    description: str
    temperature_c: float
    temperature_f: float
    feels_like_c: float
    feels_like_f: float
    humidity: int
    pressure_mb: float
    pressure_in: float
    cloud: int
    uv: float
    wind_kph: float
    wind_mph: float
    wind_degree: int
    wind_direction: str
    gust_kph: float
    gust_mph: float
    visibility_km: float
    visibility_miles: float
    is_day: bool
    air_quality: Optional[AirQuality] = None


@dataclass(frozen=True)
class DailyForecast:
    date: str
    max_temp_c: float
    min_temp_c: float
    avg_temp_c: float
    max_temp_f: float
    min_temp_f: float
    avg_temp_f: float
    total_precip_mm: float
    total_precip_in: float
    chance_of_rain: int
    chance_of_snow: int
    max_wind_kph: float
    max_wind_mph: float
    uv: float
    avg_visibility_km: float
    avg_visibility_miles: float
    avg_humidity: int
    condition: str
    air_quality: Optional[AirQuality] = None


@dataclass(frozen=True)
class Forecast:
    city: str
    region: str
    country: str
    days: Tuple[DailyForecast, ...]


@dataclass(frozen=True)
class AstronomySnapshot:
    city: str
    region: str
    country: str
    date: date
    sunrise: str
    sunset: str
    moonrise: str
    moonset: str
    moon_phase: str
    moon_illumination: int
    is_sun_up: bool
    is_moon_up: bool


@dataclass(frozen=True)
class TimeZoneInfo:
    name: str
    region: str
    country: str
    lat: float
    lon: float
    local_time: str
    gmt_offset_hours: Optional[float] = None


@dataclass(frozen=True)
class IpLocation:
    ip: str
    city: str
    region: str
    country: str
    lat: float
    lon: float
    timezone_id: str
    local_time: str
    isp: str


@dataclass(frozen=True)
class Location:
    """A single hit from the free-text location search."""

    id: int
    name: str
    region: str
    country: str
    lat: float
    lon: float
    url: str


@dataclass(frozen=True)
class TodaySummary:
    """Current conditions, today's forecast and today's astronomy for one city.

    Only ever built when all three parts were fetched successfully.
    """

    current: WeatherSnapshot
    forecast_today: DailyForecast
    astronomy: AstronomySnapshot

    @property
    def air_quality(self) -> Optional[AirQuality]:
        return self.current.air_quality or self.forecast_today.air_quality


__all__ = [
    "AirQuality",
    "AstronomySnapshot",
    "DailyForecast",
    "Forecast",
    "IpLocation",
    "Location",
    "TimeZoneInfo",
    "TodaySummary",
    "WeatherSnapshot",
]
