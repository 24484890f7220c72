from __future__ import annotations

import pytest

from weather_insights.domain import OccupationType, available_occupations
from weather_insights.services.occupation import (
    PROFILES,
    OccupationInsightService,
    evaluate_occupation,
    resolve_profile,
)
from tests.factories import StaticSummaryService, air, make_summary


def test_every_occupation_has_a_profile():
    assert set(PROFILES) == set(OccupationType)
    assert len(available_occupations()) == 8


def test_farmer_on_a_stormy_hot_day():
    summary = make_summary(
        current={"feels_like_c": 40.0},
        day={"total_precip_mm": 6.0, "chance_of_rain": 80, "max_wind_kph": 20.0},
    )

    insight = evaluate_occupation(summary, OccupationType.FARMER)

    assert insight.suitability_score == 40
    assert insight.suitability_label == "Moderate"
    assert insight.opportunities == ("Rainfall may benefit soil moisture and crop hydration.",)
    assert insight.risks == (
        "High rain probability may damage flowering crops.",
        "Heat stress risk for farm workers and crops.",
        "High wind speeds may reduce spray effectiveness.",
    )
    assert insight.recommended_actions[0] == "Delay irrigation to conserve water resources."
    assert insight.recommended_actions[-1] == "Avoid pesticide spraying today."
    assert insight.best_time_window == "06:00 AM – 10:00 AM"


def test_farmer_on_a_calm_day_keeps_baseline():
    insight = evaluate_occupation(make_summary(), OccupationType.FARMER)

    assert insight.suitability_score == 85
    assert insight.suitability_label == "Excellent"
    assert insight.risks == ()


def test_delivery_in_fog_and_rain():
    insight = evaluate_occupation(
        make_summary(current={"visibility_km": 3.0}, day={"chance_of_rain": 60}),
        OccupationType.DELIVERY_EXECUTIVE,
    )

    assert insight.suitability_score == 45
    assert insight.risks == ("Low visibility increases accident risk.", "Wet roads may slow deliveries.")
    assert insight.opportunities == ("Comfortable weather supports efficient deliveries.",)


def test_office_worker_uses_forecast_air_quality_when_current_lacks_it():
    insight = evaluate_occupation(
        make_summary(day={"chance_of_rain": 50, "air_quality": air(us_epa_index=3)}),
        OccupationType.OFFICE_WORKER,
    )

    assert insight.suitability_score == 75
    assert insight.suitability_label == "Good"
    assert insight.opportunities == ("Weather conditions are generally suitable for daily office commute.",)
    assert len(insight.risks) == 2


def test_construction_worker_under_heat_rain_and_uv():
    insight = evaluate_occupation(
        make_summary(current={"feels_like_c": 37.0, "uv": 8.0}, day={"chance_of_rain": 60}),
        OccupationType.CONSTRUCTION_WORKER,
    )

    assert insight.suitability_score == 25
    assert insight.suitability_label == "Poor"
    assert len(insight.recommended_actions) == 3


def test_tourist_on_a_clear_day():
    insight = evaluate_occupation(make_summary(), OccupationType.TOURIST)

    assert insight.suitability_score == 90
    assert insight.opportunities == ("Weather is suitable for sightseeing and travel activities.",)


def test_athlete_in_heat():
    insight = evaluate_occupation(make_summary(current={"feels_like_c": 35.0, "uv": 8.0}), OccupationType.ATHLETE)

    assert insight.suitability_score == 55
    assert insight.suitability_label == "Moderate"
    assert insight.opportunities == ()


def test_student_with_poor_air_and_rain():
    insight = evaluate_occupation(
        make_summary(current={"air_quality": air(us_epa_index=4)}, day={"chance_of_rain": 60}),
        OccupationType.SCHOOL_STUDENT,
    )

    assert insight.suitability_score == 65


def test_vendor_on_a_dry_mild_day():
    insight = evaluate_occupation(make_summary(), OccupationType.OUTDOOR_VENDOR)

    assert insight.suitability_score == 75
    assert insight.opportunities == ("Dry, mild weather should bring steady street footfall.",)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("office worker", OccupationType.OFFICE_WORKER),
        ("OFFICE-WORKER", OccupationType.OFFICE_WORKER),
        ("DeliveryExecutive", OccupationType.DELIVERY_EXECUTIVE),
        ("traveler", OccupationType.TOURIST),
        ("construction", OccupationType.CONSTRUCTION_WORKER),
        ("school_student", OccupationType.SCHOOL_STUDENT),
    ],
)
def test_free_text_names_resolve(name, expected):
    assert OccupationType.parse(name) is expected
    assert resolve_profile(name) is PROFILES[expected]


def test_unknown_occupation_falls_back_to_generic_profile():
    insight = evaluate_occupation(make_summary(current={"feels_like_c": 45.0}), " Pilot ")

    assert OccupationType.parse("Pilot") is None
    assert insight.occupation == "Pilot"
    assert insight.suitability_score == 75
    assert insight.suitability_label == "Good"
    assert insight.best_time_window == "Daytime hours"
    assert insight.risks == ()


def test_service_passes_through_absence():
    service = OccupationInsightService(StaticSummaryService(None))
    assert service.get_occupation_insight("Atlantis", OccupationType.FARMER) is None
