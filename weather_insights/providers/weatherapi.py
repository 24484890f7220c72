"""WeatherAPI.com provider."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional, Tuple, Type, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ValidationError

from .base import UpstreamError, WeatherProvider
from .schemas import (
    AirQualityModel,
    AstronomyResponse,
    CurrentResponse,
    ForecastResponse,
    IpLookupResponse,
    LocationModel,
    SearchResponse,
    TimeZoneResponse,
)
from ..entities import (
    AirQuality,
    AstronomySnapshot,
    DailyForecast,
    Forecast,
    IpLocation,
    Location,
    TimeZoneInfo,
    WeatherSnapshot,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

NO_DESCRIPTION = "No description"


class WeatherApiProvider(WeatherProvider):
    """Maps the WeatherAPI.com endpoints onto our entities.

    Every method returns ``None`` (or an empty tuple for search) when the
    provider answers 400/404, and raises :class:`UpstreamError` for anything
    else that is not a usable success.
    """

    base_url = "https://api.weatherapi.com/v1/"

    def __init__(self, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def current(self, query: str) -> Optional[WeatherSnapshot]:
        data = self._get("current.json", q=query, aqi="yes")
        if data is None:
            return None
        payload = self._parse(CurrentResponse, data)
        loc = payload.location or LocationModel()
        cur = payload.current
        return WeatherSnapshot(
            city=loc.name,
            region=loc.region,
            country=loc.country,
            local_time=loc.localtime,
            description=cur.condition.text if cur.condition and cur.condition.text else NO_DESCRIPTION,
            temperature_c=cur.temp_c,
            temperature_f=cur.temp_f,
            feels_like_c=cur.feelslike_c,
            feels_like_f=cur.feelslike_f,
            humidity=cur.humidity,
            pressure_mb=cur.pressure_mb,
            pressure_in=cur.pressure_in,
            cloud=cur.cloud,
            uv=cur.uv,
            wind_kph=cur.wind_kph,
            wind_mph=cur.wind_mph,
            wind_degree=cur.wind_degree,
            wind_direction=cur.wind_dir,
            gust_kph=cur.gust_kph,
            gust_mph=cur.gust_mph,
            visibility_km=cur.vis_km,
            visibility_miles=cur.vis_miles,
            is_day=cur.is_day == 1,
            air_quality=_map_air_quality(cur.air_quality),
        )

    def forecast(self, query: str, days: int) -> Optional[Forecast]:
        data = self._get("forecast.json", q=query, days=days, aqi="yes", alerts="no")
        if data is None:
            return None
        payload = self._parse(ForecastResponse, data)
        if payload.forecast is None or not payload.forecast.forecastday:
            self._log.info("Forecast for %s came back without days", query)
            return None
        loc = payload.location or LocationModel()
        result = []
        for item in payload.forecast.forecastday:
            d = item.day
            result.append(
                DailyForecast(
                    date=item.date,
                    max_temp_c=d.maxtemp_c,
                    min_temp_c=d.mintemp_c,
                    avg_temp_c=d.avgtemp_c,
                    max_temp_f=d.maxtemp_f,
                    min_temp_f=d.mintemp_f,
                    avg_temp_f=d.avgtemp_f,
                    total_precip_mm=d.totalprecip_mm,
                    total_precip_in=d.totalprecip_in,
                    chance_of_rain=d.daily_chance_of_rain,
                    chance_of_snow=d.daily_chance_of_snow,
                    max_wind_kph=d.maxwind_kph,
                    max_wind_mph=d.maxwind_mph,
                    uv=d.uv,
                    avg_visibility_km=d.avgvis_km,
                    avg_visibility_miles=d.avgvis_miles,
                    avg_humidity=d.avghumidity,
                    condition=d.condition.text if d.condition and d.condition.text else NO_DESCRIPTION,
                    air_quality=_map_air_quality(d.air_quality),
                )
            )
        return Forecast(city=loc.name, region=loc.region, country=loc.country, days=tuple(result))

    def time_zone(self, query: str) -> Optional[TimeZoneInfo]:
        data = self._get("timezone.json", q=query)
        if data is None:
            return None
        payload = self._parse(TimeZoneResponse, data)
        if payload.location is None:
            return None
        loc = payload.location
        return TimeZoneInfo(
            name=loc.tz_id,
            region=loc.region,
            country=loc.country,
            lat=loc.lat,
            lon=loc.lon,
            local_time=loc.localtime,
            gmt_offset_hours=_utc_offset_hours(loc.tz_id),
        )

    def astronomy(self, query: str, on: date) -> Optional[AstronomySnapshot]:
        data = self._get("astronomy.json", q=query, dt=on.isoformat())
        if data is None:
            return None
        payload = self._parse(AstronomyResponse, data)
        if payload.location is None or payload.astronomy is None or payload.astronomy.astro is None:
            return None
        loc = payload.location
        astro = payload.astronomy.astro
        return AstronomySnapshot(
            city=loc.name,
            region=loc.region,
            country=loc.country,
            date=on,
            sunrise=astro.sunrise,
            sunset=astro.sunset,
            moonrise=astro.moonrise,
            moonset=astro.moonset,
            moon_phase=astro.moon_phase,
            moon_illumination=astro.moon_illumination,
            is_sun_up=astro.is_sun_up == 1,
            is_moon_up=astro.is_moon_up == 1,
        )

    def ip_lookup(self, ip: str) -> Optional[IpLocation]:
        data = self._get("ip.json", q=ip)
        if data is None:
            return None
        payload = self._parse(IpLookupResponse, data)
        return IpLocation(
            ip=payload.ip,
            city=payload.city,
            region=payload.region,
            country=payload.country,
            lat=payload.lat,
            lon=payload.lon,
            timezone_id=payload.tz_id,
            local_time=payload.localtime,
            isp=payload.isp,
        )

    def search(self, query: str) -> Tuple[Location, ...]:
        data = self._get("search.json", q=query)
        if not data:
            return ()
        try:
            hits = SearchResponse.validate_python(data)
        except ValidationError as exc:
            self._log.error("Malformed search payload", exc_info=exc)
            raise UpstreamError("invalid search payload") from exc
        return tuple(
            Location(id=h.id, name=h.name, region=h.region, country=h.country, lat=h.lat, lon=h.lon, url=h.url)
            for h in hits
        )

    # helpers ------------------------------------------------------------
    def _get(self, endpoint: str, **params: Any) -> Optional[Any]:
        params["key"] = self.api_key
        response = self._request("GET", self._url(endpoint), params=params)
        if response is None:
            return None
        return self._json(response)

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{endpoint}"

    def _parse(self, model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            self._log.error("Malformed %s payload", model.__name__, exc_info=exc)
            raise UpstreamError(f"invalid {model.__name__} payload") from exc


def _map_air_quality(src: Optional[AirQualityModel]) -> Optional[AirQuality]:
    if src is None:
        return None
    return AirQuality(
        co=src.co,
        o3=src.o3,
        no2=src.no2,
        so2=src.so2,
        pm2_5=src.pm2_5,
        pm10=src.pm10,
        us_epa_index=src.us_epa_index,
        gb_defra_index=src.gb_defra_index,
    )


def _utc_offset_hours(tz_id: str) -> Optional[float]:
    if not tz_id:
        return None
    try:
        zone = ZoneInfo(tz_id)
    except (ZoneInfoNotFoundError, ValueError):
        return None
    offset = datetime.now(timezone.utc).astimezone(zone).utcoffset()
    if offset is None:
        return None
    return offset.total_seconds() / 3600


__all__ = ["WeatherApiProvider"]
