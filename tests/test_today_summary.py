from __future__ import annotations

import threading
from datetime import date

import pytest
import responses

from weather_insights.cache import TTLCache
from weather_insights.config import ProviderSettings, build_services
from weather_insights.entities import Forecast
from weather_insights.providers.base import QuotaExceeded, RequestCancelled, UpstreamError
from weather_insights.services.summary import (
    SummaryUnavailable,
    TodaySummaryService,
    build_daily_insight,
)
from weather_insights.services.weather import WeatherService
from tests.factories import (
    BASE_URL,
    FakeProvider,
    air,
    make_astronomy,
    make_current,
    make_forecast,
    make_summary,
)
from tests.payloads import ASTRONOMY_PAYLOAD, CURRENT_PAYLOAD, FORECAST_PAYLOAD

TODAY = date(2025, 6, 1)


def build(provider, timeout=None):
    weather = WeatherService(provider, cache=TTLCache())
    return TodaySummaryService(weather, today=lambda: TODAY, timeout=timeout)


def test_summary_combines_the_three_lookups():
    provider = FakeProvider(current=make_current(), forecast=make_forecast(), astronomy=make_astronomy())

    summary = build(provider).get_today_summary("Delhi")

    assert summary.current.city == "Delhi"
    assert summary.forecast_today.date == "2025-06-01"
    assert summary.astronomy.sunrise == "05:24 AM"
    assert ("forecast", "Delhi", 1) in provider.queries
    assert ("astronomy", "Delhi", TODAY) in provider.queries


@pytest.mark.parametrize("missing", ["current", "forecast", "astronomy"])
def test_any_missing_part_yields_no_summary(missing):
    parts = {"current": make_current(), "forecast": make_forecast(), "astronomy": make_astronomy()}
    parts[missing] = None

    assert build(FakeProvider(**parts)).get_today_summary("Delhi") is None


def test_forecast_without_days_yields_no_summary():
    empty = Forecast(city="Delhi", region="Delhi", country="India", days=())
    provider = FakeProvider(current=make_current(), forecast=empty, astronomy=make_astronomy())

    assert build(provider).get_today_summary("Delhi") is None


def test_upstream_failure_becomes_summary_unavailable():
    provider = FakeProvider(
        current=make_current(),
        astronomy=make_astronomy(),
        errors={"forecast": QuotaExceeded("quota exceeded", status_code=429)},
    )

    with pytest.raises(SummaryUnavailable) as excinfo:
        build(provider).get_today_summary("Delhi")

    assert excinfo.value.status_code == 429
    assert isinstance(excinfo.value.__cause__, QuotaExceeded)
    assert isinstance(excinfo.value, UpstreamError)


def test_cancellation_propagates_unchanged():
    provider = FakeProvider(
        forecast=make_forecast(),
        astronomy=make_astronomy(),
        errors={"current": RequestCancelled("timeout")},
    )

    with pytest.raises(RequestCancelled) as excinfo:
        build(provider).get_today_summary("Delhi")
    assert not isinstance(excinfo.value, SummaryUnavailable)


def test_slow_lookup_times_out():
    release = threading.Event()

    class SlowProvider(FakeProvider):
        def astronomy(self, query, on):
            release.wait(5)
            return make_astronomy()

    provider = SlowProvider(current=make_current(), forecast=make_forecast())
    try:
        with pytest.raises(RequestCancelled):
            build(provider, timeout=0.05).get_today_summary("Delhi")
    finally:
        release.set()


def test_blank_city_is_rejected_before_fetching():
    provider = FakeProvider()
    with pytest.raises(ValueError):
        build(provider).get_today_summary("  ")
    assert provider.queries == []


def test_daily_insight_for_a_pleasant_day():
    summary = make_summary(current={"air_quality": air(us_epa_index=1)})

    insight = build_daily_insight(summary)

    assert insight.city == "Delhi"
    assert insight.confidence == "High"
    assert insight.summary.startswith("Excellent day in Delhi")
    assert "US EPA air-quality index is 1." in insight.reasons
    assert insight.best_outdoor_time == "Morning (6:00–9:00)"
    assert insight.recommendation == "Air quality is acceptable (US EPA index 1)."


def test_daily_insight_without_air_quality_has_medium_confidence():
    insight = build_daily_insight(make_summary())

    assert insight.confidence == "Medium"
    assert "Air-quality data is unavailable." in insight.reasons
    assert insight.recommendation == "Conditions look comfortable for outdoor plans."


def test_daily_insight_returns_none_when_summary_missing():
    provider = FakeProvider(current=None, forecast=make_forecast(), astronomy=make_astronomy())
    assert build(provider).get_daily_insight("Delhi") is None


@responses.activate
def test_summary_end_to_end_over_http():
    responses.add(responses.GET, f"{BASE_URL}/current.json", json=CURRENT_PAYLOAD)
    responses.add(responses.GET, f"{BASE_URL}/forecast.json", json=FORECAST_PAYLOAD)
    responses.add(responses.GET, f"{BASE_URL}/astronomy.json", json=ASTRONOMY_PAYLOAD)

    services = build_services(ProviderSettings(api_key="test-key", base_url=BASE_URL))
    services.summary.today = lambda: TODAY

    summary = services.summary.get_today_summary("Delhi")
    again = services.summary.get_today_summary("delhi")

    assert summary.current.feels_like_c == 38.5
    assert summary.forecast_today.max_temp_c == 39.0
    assert summary.astronomy.date == TODAY
    assert again.current is summary.current
    # astronomy is fetched live each time, the rest comes from the cache
    assert len(responses.calls) == 4
    assert summary.air_quality.us_epa_index == 4
