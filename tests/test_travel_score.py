from __future__ import annotations

import pytest

from weather_insights.services.travel import (
    TravelScoreService,
    explain_factor,
    explain_travel_score,
    score_air_quality,
    score_rain,
    score_temperature,
    score_travel,
    score_uv,
)
from tests.factories import StaticSummaryService, air, make_summary


def test_hot_wet_hazy_day_scores_poor():
    summary = make_summary(
        current={"feels_like_c": 36.0, "uv": 9.0, "air_quality": air(pm2_5=40.0)},
        day={"chance_of_rain": 75, "total_precip_mm": 0.2},
    )

    score = score_travel(summary)

    assert (score.temperature_score, score.rain_score, score.uv_score, score.air_quality_score) == (10, 6, 10, 10)
    assert score.overall_score == 36
    assert score.comfort_label == "Poor"
    assert score.warnings[0].startswith("High temperatures expected")
    assert "PM2.5 is elevated at 40.0 µg/m³." in score.warnings
    assert score.summary.startswith("Conditions are not ideal for travel-focused outdoor plans. Key points: ")


def test_perfect_day_without_warnings():
    score = score_travel(make_summary(current={"air_quality": air(us_epa_index=1)}))

    assert score.overall_score == 100
    assert score.comfort_label == "Excellent"
    assert score.warnings == ()
    assert score.summary == "Excellent day for travelling and outdoor plans."


def test_missing_air_quality_is_neutral_not_zero():
    score = score_travel(make_summary())

    assert score.air_quality_score == 20
    assert score.overall_score == 95


@pytest.mark.parametrize(
    "feels_like, expected",
    [(25, 25), (22, 25), (28, 25), (20, 22), (30, 20), (16, 18), (33, 10), (12, 15), (9, 8)],
)
def test_temperature_bands(feels_like, expected):
    assert score_temperature(feels_like).value == expected


@pytest.mark.parametrize(
    "chance, precip, expected",
    [(5, 0.0, 25), (10, 0.6, 22), (30, 1.5, 22), (45, 3.0, 18), (45, 5.0, 12), (70, 10.0, 12), (90, 0.0, 6)],
)
def test_rain_bands(chance, precip, expected):
    assert score_rain(chance, precip).value == expected


@pytest.mark.parametrize("uv, expected", [(0, 25), (2, 25), (4, 22), (7, 16), (10, 10), (11, 6)])
def test_uv_bands(uv, expected):
    assert score_uv(uv).value == expected


def test_air_quality_index_table_and_pm25_caps():
    assert score_air_quality(None).value == 20
    assert score_air_quality(air(us_epa_index=2)).value == 22
    assert score_air_quality(air(us_epa_index=3)).value == 18
    assert score_air_quality(air(us_epa_index=6)).value == 2
    assert score_air_quality(air(us_epa_index=1, pm2_5=60.0)).value == 6

    moderate = score_air_quality(air(us_epa_index=4))
    assert moderate.value == 10
    assert len(moderate.findings) == 2


def test_sub_scores_never_increase_as_conditions_worsen():
    temps = [score_temperature(t).value for t in range(32, 45)]
    uvs = [score_uv(u).value for u in range(0, 13)]
    rains = [score_rain(c, 0.0).value for c in range(0, 101, 5)]

    for series in (temps, uvs, rains):
        assert all(a >= b for a, b in zip(series, series[1:]))


def test_score_is_deterministic():
    summary = make_summary(current={"feels_like_c": 30.0, "uv": 6.0})
    assert score_travel(summary) == score_travel(summary)


def test_explanation_is_built_from_factor_scores():
    score = score_travel(make_summary(current={"uv": 9.0}))

    explanation = explain_travel_score(score)

    assert explanation.overall_score == score.overall_score
    assert explanation.confidence == "High"
    assert explanation.breakdown["UV Index"] == "High UV exposure risk; avoid prolonged sun exposure."
    assert explanation.breakdown["Temperature"] == "Comfortable temperature range for most activities."
    assert explanation.explanation.startswith(f"Today's travel score is {score.overall_score}/100")


@pytest.mark.parametrize("value, band", [(25, 0), (22, 0), (18, 1), (15, 1), (14, 2)])
def test_explain_factor_bands(value, band):
    good, fair, poor = (
        "Low chance of rain with minimal disruption.",
        "Some chance of showers; minor inconvenience possible.",
        "High likelihood of rain affecting outdoor plans.",
    )
    assert explain_factor("Rain", value) == (good, fair, poor)[band]


def test_service_returns_none_without_summary():
    service = TravelScoreService(StaticSummaryService(None))
    assert service.get_travel_score("Atlantis") is None
    assert service.explain_travel_score("Atlantis") is None


def test_service_scores_the_requested_city():
    summaries = StaticSummaryService(make_summary())
    score = TravelScoreService(summaries).get_travel_score("Delhi")

    assert score.city == "Delhi"
    assert summaries.cities == ["Delhi"]
