from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from ..entities import AstronomySnapshot, DailyForecast, WeatherSnapshot

DEFAULT_BEST = "Morning (6:00–9:00)"
DEFAULT_WORST = "Afternoon (12:00–16:00)"
HEAT_WORST = "Midday to afternoon (12:00–17:00)"
RAIN_WORST = "Late afternoon to evening (15:00–19:00)"
UV_WORST = "Late morning to afternoon (11:00–16:00)"

_SUNRISE_FORMATS = ("%I:%M %p", "%H:%M")


def parse_hour(value: Optional[str]) -> Optional[int]:
    """Hour of a provider time string such as ``06:40 AM``, or ``None``."""
    if not value or not value.strip():
        return None
    text = value.strip().upper()
    for fmt in _SUNRISE_FORMATS:
        try:
            return datetime.strptime(text, fmt).hour
        except ValueError:
            continue
    return None


def calculate_windows(
    current: WeatherSnapshot,
    forecast: DailyForecast,
    astronomy: AstronomySnapshot,
) -> Tuple[str, str]:
    """Return the ``(best, worst)`` outdoor windows for the day.

    Worst-window overrides run heat, rain, then UV; a later match replaces
    an earlier one.
    """
    best = DEFAULT_BEST
    worst = DEFAULT_WORST

    sunrise_hour = parse_hour(astronomy.sunrise)
    if sunrise_hour is not None:
        start = max(sunrise_hour + 1, 6)
        best = f"Morning ({start}:00–{start + 3}:00)"

    if current.feels_like_c >= 35 or forecast.max_temp_c >= 35:
        worst = HEAT_WORST
    if forecast.chance_of_rain >= 60:
        worst = RAIN_WORST
    if current.uv >= 9:
        worst = UV_WORST

    return best, worst


__all__ = ["DEFAULT_BEST", "DEFAULT_WORST", "calculate_windows", "parse_hour"]
