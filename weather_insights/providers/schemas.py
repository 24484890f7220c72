"""Pydantic models for the WeatherAPI.com JSON payloads.

Only the fields we map are declared; everything else is ignored. A payload
that fails validation is reported by the provider as an upstream error.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LocationModel(_Payload):
    name: str = ""
    region: str = ""
    country: str = ""
    lat: float = 0.0
    lon: float = 0.0
    tz_id: str = ""
    localtime: str = ""


class ConditionModel(_Payload):
    text: str = ""
    icon: str = ""
    code: int = 0


class AirQualityModel(_Payload):
    co: Optional[float] = None
    o3: Optional[float] = None
    no2: Optional[float] = None
    so2: Optional[float] = None
    pm2_5: Optional[float] = None
    pm10: Optional[float] = None
    us_epa_index: Optional[int] = Field(default=None, alias="us-epa-index")
    gb_defra_index: Optional[int] = Field(default=None, alias="gb-defra-index")


class CurrentModel(_Payload):
    temp_c: float
    temp_f: float
    feelslike_c: float
    feelslike_f: float
    humidity: int = 0
    pressure_mb: float = 0.0
    pressure_in: float = 0.0
    cloud: int = 0
    uv: float = 0.0
    wind_kph: float = 0.0
    wind_mph: float = 0.0
    wind_degree: int = 0
    wind_dir: str = ""
    gust_kph: float = 0.0
    gust_mph: float = 0.0
    vis_km: float = 0.0
    vis_miles: float = 0.0
    is_day: int = 0
    condition: Optional[ConditionModel] = None
    air_quality: Optional[AirQualityModel] = None


class CurrentResponse(_Payload):
    location: Optional[LocationModel] = None
    current: CurrentModel


class DayModel(_Payload):
    maxtemp_c: float
    mintemp_c: float
    avgtemp_c: float = 0.0
    maxtemp_f: float = 0.0
    mintemp_f: float = 0.0
    avgtemp_f: float = 0.0
    maxwind_kph: float = 0.0
    maxwind_mph: float = 0.0
    totalprecip_mm: float = 0.0
    totalprecip_in: float = 0.0
    daily_chance_of_rain: int = 0
    daily_chance_of_snow: int = 0
    avgvis_km: float = 0.0
    avgvis_miles: float = 0.0
    avghumidity: int = 0
    uv: float = 0.0
    condition: Optional[ConditionModel] = None
    air_quality: Optional[AirQualityModel] = None


class ForecastDayModel(_Payload):
    date: str
    day: DayModel


class ForecastBlock(_Payload):
    forecastday: List[ForecastDayModel] = Field(default_factory=list)


class ForecastResponse(_Payload):
    location: Optional[LocationModel] = None
    forecast: Optional[ForecastBlock] = None


class TimeZoneResponse(_Payload):
    location: Optional[LocationModel] = None


class AstroModel(_Payload):
    sunrise: str = ""
    sunset: str = ""
    moonrise: str = ""
    moonset: str = ""
    moon_phase: str = ""
    moon_illumination: int = 0
    is_moon_up: int = 0
    is_sun_up: int = 0


class AstronomyBlock(_Payload):
    astro: Optional[AstroModel] = None


class AstronomyResponse(_Payload):
    location: Optional[LocationModel] = None
    astronomy: Optional[AstronomyBlock] = None


class IpLookupResponse(_Payload):
    ip: str = ""
    city: str = ""
    region: str = ""
    country: str = Field(default="", validation_alias=AliasChoices("country_name", "country"))
    lat: float = 0.0
    lon: float = 0.0
    tz_id: str = ""
    localtime: str = ""
    isp: str = ""


class SearchLocationModel(_Payload):
    id: int = 0
    name: str = ""
    region: str = ""
    country: str = ""
    lat: float = 0.0
    lon: float = 0.0
    url: str = ""


SearchResponse = TypeAdapter(List[SearchLocationModel])


__all__ = [
    "AirQualityModel",
    "AstronomyResponse",
    "CurrentResponse",
    "ForecastResponse",
    "IpLookupResponse",
    "LocationModel",
    "SearchLocationModel",
    "SearchResponse",
    "TimeZoneResponse",
]
