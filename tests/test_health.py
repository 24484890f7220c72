from __future__ import annotations

import pytest

from weather_insights.domain import HealthCondition, available_health_conditions
from weather_insights.services.health import PROFILES, HealthInsightService, evaluate_health
from tests.factories import StaticSummaryService, air, make_summary


def test_every_condition_has_a_profile():
    assert set(PROFILES) == set(HealthCondition)
    assert "Asthma" in available_health_conditions()


def test_asthma_with_poor_air():
    summary = make_summary(current={"air_quality": air(us_epa_index=4, pm2_5=40.0)})

    insight = evaluate_health(summary, HealthCondition.ASTHMA)

    assert insight.risk_score == 80
    assert insight.risk_level == "High"
    assert insight.triggers == ("Poor air quality (US EPA index 4).", "High PM2.5 levels (40.0 µg/m³).")
    assert insight.recommendations[0] == "Limit outdoor exposure and carry prescribed inhaler."
    assert insight.safe_time_window == "Early morning only"


def test_asthma_without_air_quality_stays_at_baseline():
    insight = evaluate_health(make_summary(), HealthCondition.ASTHMA)

    assert insight.risk_score == 30
    assert insight.risk_level == "Low"
    assert insight.triggers == ()


@pytest.mark.parametrize(
    "condition, current, score, level",
    [
        (HealthCondition.HEART_CONDITION, {"feels_like_c": 36.0, "uv": 8.0}, 75, "High"),
        (HealthCondition.HEART_CONDITION, {}, 35, "Low"),
        (HealthCondition.MIGRAINE, {"pressure_mb": 995.0}, 45, "Low"),
        (HealthCondition.HEAT_SENSITIVITY, {"feels_like_c": 39.0}, 80, "High"),
        (HealthCondition.COLD_SENSITIVITY, {"temperature_c": 5.0}, 50, "Moderate"),
        (HealthCondition.ELDERLY, {"temperature_c": 9.0}, 60, "Moderate"),
        (HealthCondition.ELDERLY, {"feels_like_c": 36.0}, 60, "Moderate"),
    ],
)
def test_condition_rules(condition, current, score, level):
    insight = evaluate_health(make_summary(current=current), condition)

    assert insight.risk_score == score
    assert insight.risk_level == level
    assert insight.health_condition == condition.value


def test_free_text_condition_names():
    assert HealthCondition.parse("heart condition") is HealthCondition.HEART_CONDITION
    assert HealthCondition.parse("heat_sensitivity") is HealthCondition.HEAT_SENSITIVITY
    assert evaluate_health(make_summary(), "migraine").health_condition == "Migraine"


def test_unknown_condition_is_rejected_before_fetching():
    summaries = StaticSummaryService(make_summary())

    with pytest.raises(ValueError):
        HealthInsightService(summaries).get_health_insight("Delhi", "Hay fever")
    assert summaries.cities == []


def test_service_passes_through_absence():
    service = HealthInsightService(StaticSummaryService(None))
    assert service.get_health_insight("Atlantis", HealthCondition.ASTHMA) is None
