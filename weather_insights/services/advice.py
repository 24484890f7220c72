"""Umbrella, heat, UV and air-quality advisories."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..entities import AirQuality, TodaySummary

HEAT_NOTE = "Stay hydrated and avoid outdoor activity during peak afternoon hours."
UV_NOTE = "Use sunscreen and wear sunglasses if going out in the afternoon."
SHOWER_NOTE = "Weather is otherwise comfortable; just be prepared for a possible shower."


@dataclass(frozen=True)
class WeatherAdvice:
    chance_of_rain: int
    total_precip_mm: float
    should_carry_umbrella: bool
    umbrella_reason: str
    heat_warning: bool
    uv_warning: bool
    air_quality_warning: bool
    air_quality_index: Optional[int]
    air_quality_notes: str
    notes: str


def umbrella_advice(chance_of_rain: int, total_precip_mm: float) -> Tuple[bool, str]:
    if chance_of_rain >= 60 or total_precip_mm >= 2:
        return True, f"Chance of rain is {chance_of_rain}% with {total_precip_mm:.1f}mm precipitation expected."
    if chance_of_rain >= 30:
        return True, f"Moderate chance of rain today ({chance_of_rain}%). A compact umbrella is recommended."
    return False, f"Low chance of rain today ({chance_of_rain}%). Umbrella is optional."


def air_quality_advice(aq: Optional[AirQuality]) -> Tuple[bool, str]:
    """Return ``(warning, notes)``; no data means no warning and no notes."""
    if aq is None:
        return False, ""

    warning = False
    parts = []
    epa = aq.us_epa_index
    if epa is not None and epa >= 4:
        warning = True
        parts.append(
            f"Air quality is poor (US EPA index {epa}). Limit outdoor exertion and consider wearing a mask."
        )
    elif epa == 3:
        parts.append(
            f"Air quality is moderate/unhealthy for sensitive groups (US EPA index {epa}). "
            "Sensitive people should take precautions."
        )
    elif epa is not None:
        parts.append(f"Air quality is acceptable (US EPA index {epa}).")

    if aq.pm2_5 is not None and aq.pm2_5 > 35:
        warning = True
        parts.append(f"PM2.5 is {aq.pm2_5:.1f} µg/m³ which is elevated.")

    return warning, " ".join(parts)


def build_advice(summary: TodaySummary) -> WeatherAdvice:
    current = summary.current
    today = summary.forecast_today
    aq = summary.air_quality

    umbrella, reason = umbrella_advice(today.chance_of_rain, today.total_precip_mm)
    heat = current.temperature_c >= 35 or current.feels_like_c >= 37
    uv = current.uv >= 8
    aq_warning, aq_notes = air_quality_advice(aq)

    notes = []
    if heat:
        notes.append(HEAT_NOTE)
    if uv:
        notes.append(UV_NOTE)
    if aq_notes:
        notes.append(aq_notes)
    if umbrella and not (heat or uv or aq_warning):
        notes.append(SHOWER_NOTE)

    return WeatherAdvice(
        chance_of_rain=today.chance_of_rain,
        total_precip_mm=today.total_precip_mm,
        should_carry_umbrella=umbrella,
        umbrella_reason=reason,
        heat_warning=heat,
        uv_warning=uv,
        air_quality_warning=aq_warning,
        air_quality_index=aq.us_epa_index if aq is not None else None,
        air_quality_notes=aq_notes,
        notes=" ".join(notes).strip(),
    )


class WeatherAdviceService:
    def __init__(self, summary_service) -> None:
        self.summary_service = summary_service

    def get_advice(self, city: str) -> Optional[WeatherAdvice]:
        summary = self.summary_service.get_today_summary(city)
        if summary is None:
            return None
        return build_advice(summary)


__all__ = ["WeatherAdvice", "WeatherAdviceService", "air_quality_advice", "build_advice", "umbrella_advice"]
