"""Composes current conditions, today's forecast and astronomy into one summary."""
from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional, Tuple

from ..entities import TodaySummary
from ..providers.base import RequestCancelled, UpstreamError
from .advice import build_advice
from .time_window import calculate_windows
from .travel import score_travel


class SummaryUnavailable(UpstreamError):
    """Raised when one of the summary fetches failed upstream."""


@dataclass(frozen=True)
class DailyInsight:
    city: str
    summary: str
    confidence: str
    reasons: Tuple[str, ...]
    best_outdoor_time: str
    worst_outdoor_time: str
    recommendation: str


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class TodaySummaryService:
    """All-or-nothing composition of the three per-city lookups.

    The lookups are independent and run concurrently. An empty result from
    any of them yields ``None``. An upstream failure cancels whatever is
    still queued and surfaces as :class:`SummaryUnavailable`; cancellation
    (including ``timeout`` expiring) surfaces as :class:`RequestCancelled`.
    """

    def __init__(
        self,
        weather_service,
        today: Callable[[], date] = _utc_today,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.weather_service = weather_service
        self.today = today
        self.timeout = timeout
        self._log = logger or logging.getLogger(self.__class__.__name__)

    def get_today_summary(self, city: str) -> Optional[TodaySummary]:
        if city is None or not city.strip():
            raise ValueError("city cannot be empty")

        pool = ThreadPoolExecutor(max_workers=3, thread_name_prefix="today-summary")
        try:
            current_f = pool.submit(self.weather_service.get_current_by_city, city)
            forecast_f = pool.submit(self.weather_service.get_forecast_by_city, city, 1)
            astronomy_f = pool.submit(self.weather_service.get_astronomy, city, self.today())
            futures = (current_f, forecast_f, astronomy_f)

            done, pending = wait(futures, timeout=self.timeout, return_when=FIRST_EXCEPTION)
            failed = [f for f in futures if f in done and f.exception() is not None]
            if failed or pending:
                for future in pending:
                    future.cancel()
            if failed:
                self._raise(city, failed[0].exception())
            if pending:
                self._log.warning("Summary for %s timed out after %ss", city, self.timeout)
                raise RequestCancelled(f"summary for {city!r} timed out")

            current = current_f.result()
            forecast = forecast_f.result()
            astronomy = astronomy_f.result()
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        if current is None or forecast is None or astronomy is None or not forecast.days:
            self._log.info(
                "Summary for %s incomplete (current=%s forecast=%s astronomy=%s)",
                city,
                current is not None,
                forecast is not None,
                astronomy is not None,
            )
            return None

        return TodaySummary(current=current, forecast_today=forecast.days[0], astronomy=astronomy)

    def get_daily_insight(self, city: str) -> Optional[DailyInsight]:
        summary = self.get_today_summary(city)
        if summary is None:
            return None
        return build_daily_insight(summary)

    def _raise(self, city: str, exc: BaseException) -> None:
        if isinstance(exc, RequestCancelled):
            self._log.info("Summary for %s cancelled: %s", city, exc)
            raise exc
        if isinstance(exc, UpstreamError):
            self._log.error("Summary for %s unavailable: %s", city, exc)
            raise SummaryUnavailable(f"summary for {city!r} unavailable", status_code=exc.status_code) from exc
        raise exc


def build_daily_insight(summary: TodaySummary) -> DailyInsight:
    current = summary.current
    today = summary.forecast_today
    aq = summary.air_quality

    score = score_travel(summary)
    advice = build_advice(summary)
    best, worst = calculate_windows(current, today, summary.astronomy)

    reasons = [
        f"Feels like {current.feels_like_c:.0f}°C with {current.description.lower()}.",
        f"{today.chance_of_rain}% chance of rain with {today.total_precip_mm:.1f}mm expected.",
    ]
    if current.uv >= 8:
        reasons.append(f"Very high UV index ({current.uv:g}).")
    elif current.uv >= 6:
        reasons.append(f"High UV index ({current.uv:g}).")
    else:
        reasons.append(f"UV index is low to moderate ({current.uv:g}).")
    if aq is not None and aq.us_epa_index is not None:
        reasons.append(f"US EPA air-quality index is {aq.us_epa_index}.")
    elif aq is None:
        reasons.append("Air-quality data is unavailable.")

    return DailyInsight(
        city=current.city,
        summary=(
            f"{score.comfort_label} day in {current.city}: {today.condition.lower()}, "
            f"{today.min_temp_c:.0f}–{today.max_temp_c:.0f}°C."
        ),
        confidence="High" if aq is not None else "Medium",
        reasons=tuple(reasons),
        best_outdoor_time=best,
        worst_outdoor_time=worst,
        recommendation=advice.notes or "Conditions look comfortable for outdoor plans.",
    )


__all__ = ["DailyInsight", "SummaryUnavailable", "TodaySummaryService", "build_daily_insight"]
