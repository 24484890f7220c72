"""Occupation-specific suitability scoring."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from ..domain import OccupationType
from ..entities import TodaySummary
from .scoring import Finding, clamp, label_for, messages, total_adjustment

OPPORTUNITY = "opportunity"
RISK = "risk"
ACTION = "action"

SUITABILITY_LABELS = ((80, "Excellent"), (60, "Good"), (40, "Moderate"))

Rule = Callable[[TodaySummary], Iterable[Finding]]


@dataclass(frozen=True)
class OccupationInsight:
    city: str
    occupation: str
    suitability_score: int
    suitability_label: str
    opportunities: Tuple[str, ...]
    risks: Tuple[str, ...]
    recommended_actions: Tuple[str, ...]
    best_time_window: str


@dataclass(frozen=True)
class OccupationProfile:
    name: str
    baseline: int
    best_time_window: str
    standing_opportunities: Tuple[str, ...] = ()
    rules: Tuple[Rule, ...] = ()

    def evaluate(self, summary: TodaySummary) -> OccupationInsight:
        findings = tuple(f for rule in self.rules for f in rule(summary))
        score = clamp(self.baseline + total_adjustment(findings))
        return OccupationInsight(
            city=summary.current.city,
            occupation=self.name,
            suitability_score=score,
            suitability_label=label_for(score, SUITABILITY_LABELS, "Poor"),
            opportunities=self.standing_opportunities + messages(findings, OPPORTUNITY),
            risks=messages(findings, RISK),
            recommended_actions=messages(findings, ACTION),
            best_time_window=self.best_time_window,
        )


def _penalty(adjustment: int, risk: str, action: str) -> Tuple[Finding, ...]:
    return (Finding(RISK, risk, adjustment), Finding(ACTION, action))


def _epa_index(summary: TodaySummary) -> Optional[int]:
    aq = summary.air_quality
    return aq.us_epa_index if aq is not None else None


# Farmer -------------------------------------------------------------------
def _farmer_rainfall(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.total_precip_mm >= 5:
        return (
            Finding(OPPORTUNITY, "Rainfall may benefit soil moisture and crop hydration."),
            Finding(ACTION, "Delay irrigation to conserve water resources."),
        )
    return ()


def _farmer_rain_chance(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.chance_of_rain > 70:
        return _penalty(
            -15,
            "High rain probability may damage flowering crops.",
            "Ensure field drainage and protect sensitive crops.",
        )
    return ()


def _farmer_heat(s: TodaySummary) -> Iterable[Finding]:
    if s.current.feels_like_c > 38:
        return _penalty(
            -20,
            "Heat stress risk for farm workers and crops.",
            "Schedule farm work before 10 AM or after 4 PM.",
        )
    return ()


def _farmer_wind(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.max_wind_kph > 18:
        return _penalty(
            -10,
            "High wind speeds may reduce spray effectiveness.",
            "Avoid pesticide spraying today.",
        )
    return ()


# Delivery -----------------------------------------------------------------
def _delivery_visibility(s: TodaySummary) -> Iterable[Finding]:
    if s.current.visibility_km < 4:
        return _penalty(
            -20,
            "Low visibility increases accident risk.",
            "Reduce speed and allow extra delivery time.",
        )
    return ()


def _delivery_rain(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.chance_of_rain > 50:
        return _penalty(-15, "Wet roads may slow deliveries.", "Use waterproof packaging.")
    return ()


def _delivery_comfort(s: TodaySummary) -> Iterable[Finding]:
    if s.current.uv < 5 and s.current.feels_like_c < 32:
        return (Finding(OPPORTUNITY, "Comfortable weather supports efficient deliveries."),)
    return ()


# Office worker ------------------------------------------------------------
def _office_rain(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.chance_of_rain > 40:
        return _penalty(-5, "Rain during peak commute hours.", "Carry an umbrella or rain jacket.")
    return ()


def _office_air(s: TodaySummary) -> Iterable[Finding]:
    epa = _epa_index(s)
    if epa is not None and epa >= 3:
        return _penalty(
            -5,
            "Air quality may cause discomfort during commute.",
            "Avoid long outdoor exposure during peak traffic hours.",
        )
    return ()


# Construction -------------------------------------------------------------
def _construction_heat(s: TodaySummary) -> Iterable[Finding]:
    if s.current.feels_like_c > 36:
        return _penalty(
            -20,
            "High heat stress risk for outdoor labor.",
            "Schedule heavy work early morning and ensure hydration breaks.",
        )
    return ()


def _construction_rain(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.chance_of_rain > 50:
        return _penalty(
            -15,
            "Rain may disrupt outdoor construction work.",
            "Prepare protective covers and adjust schedules.",
        )
    return ()


def _construction_uv(s: TodaySummary) -> Iterable[Finding]:
    if s.current.uv >= 8:
        return _penalty(-10, "Very high UV exposure.", "Use protective clothing, helmets, and sunscreen.")
    return ()


# Tourist ------------------------------------------------------------------
def _tourist_uv(s: TodaySummary) -> Iterable[Finding]:
    if s.current.uv > 7:
        return _penalty(-5, "High UV exposure during outdoor sightseeing.", "Use sunscreen, hats, and sunglasses.")
    return ()


def _tourist_rain(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.chance_of_rain > 40:
        return _penalty(
            -10,
            "Possible rain interruptions during travel.",
            "Plan indoor attractions or keep rain gear ready.",
        )
    return ()


# Outdoor vendor -----------------------------------------------------------
def _vendor_heat(s: TodaySummary) -> Iterable[Finding]:
    if s.current.feels_like_c > 35:
        return _penalty(
            -15,
            "Heat may reduce footfall and spoil perishable stock.",
            "Set up shade, keep drinking water at hand and protect perishables.",
        )
    return ()


def _vendor_rain(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.chance_of_rain > 40:
        return _penalty(
            -10,
            "Rain may keep customers away and damage goods.",
            "Bring waterproof covers and plan a sheltered spot.",
        )
    return ()


def _vendor_clear_day(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.chance_of_rain <= 20 and s.current.feels_like_c <= 32:
        return (Finding(OPPORTUNITY, "Dry, mild weather should bring steady street footfall."),)
    return ()


# Athlete ------------------------------------------------------------------
def _athlete_uv(s: TodaySummary) -> Iterable[Finding]:
    if s.current.uv > 7:
        return _penalty(
            -10,
            "High UV exposure during outdoor training.",
            "Train outside peak sun hours and use sweat-resistant sunscreen.",
        )
    return ()


def _athlete_heat(s: TodaySummary) -> Iterable[Finding]:
    if s.current.feels_like_c > 34:
        return _penalty(
            -15,
            "Heat increases the risk of exhaustion and dehydration.",
            "Shorten intense sessions and schedule regular hydration breaks.",
        )
    return ()


def _athlete_cool_morning(s: TodaySummary) -> Iterable[Finding]:
    if 10 <= s.current.feels_like_c <= 24:
        return (Finding(OPPORTUNITY, "Cool temperatures suit endurance training."),)
    return ()


# School student -----------------------------------------------------------
def _student_rain(s: TodaySummary) -> Iterable[Finding]:
    if s.forecast_today.chance_of_rain > 50:
        return _penalty(
            -10,
            "Rain may disrupt the school commute and outdoor activities.",
            "Pack a raincoat and allow extra travel time.",
        )
    return ()


def _student_air(s: TodaySummary) -> Iterable[Finding]:
    epa = _epa_index(s)
    if epa is not None and epa >= 3:
        return _penalty(
            -10,
            "Air quality may affect outdoor play and sports.",
            "Prefer indoor activities during breaks.",
        )
    return ()


PROFILES: Dict[OccupationType, OccupationProfile] = {
    OccupationType.FARMER: OccupationProfile(
        name=OccupationType.FARMER.value,
        baseline=85,
        best_time_window="06:00 AM – 10:00 AM",
        rules=(_farmer_rainfall, _farmer_rain_chance, _farmer_heat, _farmer_wind),
    ),
    OccupationType.OFFICE_WORKER: OccupationProfile(
        name=OccupationType.OFFICE_WORKER.value,
        baseline=85,
        best_time_window="Morning commute hours",
        standing_opportunities=("Weather conditions are generally suitable for daily office commute.",),
        rules=(_office_rain, _office_air),
    ),
    OccupationType.DELIVERY_EXECUTIVE: OccupationProfile(
        name=OccupationType.DELIVERY_EXECUTIVE.value,
        baseline=80,
        best_time_window="09:00 AM – 12:00 PM",
        rules=(_delivery_visibility, _delivery_rain, _delivery_comfort),
    ),
    OccupationType.CONSTRUCTION_WORKER: OccupationProfile(
        name=OccupationType.CONSTRUCTION_WORKER.value,
        baseline=70,
        best_time_window="Early morning (6–10 AM)",
        standing_opportunities=("Conditions allow for planned construction activities with precautions.",),
        rules=(_construction_heat, _construction_rain, _construction_uv),
    ),
    OccupationType.TOURIST: OccupationProfile(
        name=OccupationType.TOURIST.value,
        baseline=90,
        best_time_window="Late morning to early evening",
        standing_opportunities=("Weather is suitable for sightseeing and travel activities.",),
        rules=(_tourist_uv, _tourist_rain),
    ),
    OccupationType.OUTDOOR_VENDOR: OccupationProfile(
        name=OccupationType.OUTDOOR_VENDOR.value,
        baseline=75,
        best_time_window="Late afternoon to evening",
        rules=(_vendor_heat, _vendor_rain, _vendor_clear_day),
    ),
    OccupationType.ATHLETE: OccupationProfile(
        name=OccupationType.ATHLETE.value,
        baseline=80,
        best_time_window="Early morning (5–8 AM)",
        rules=(_athlete_uv, _athlete_heat, _athlete_cool_morning),
    ),
    OccupationType.SCHOOL_STUDENT: OccupationProfile(
        name=OccupationType.SCHOOL_STUDENT.value,
        baseline=85,
        best_time_window="School hours (8 AM – 2 PM)",
        rules=(_student_rain, _student_air),
    ),
}


def generic_profile(name: str) -> OccupationProfile:
    return OccupationProfile(
        name=name,
        baseline=75,
        best_time_window="Daytime hours",
        standing_opportunities=("General weather conditions are acceptable for routine activities.",),
    )


def resolve_profile(occupation: Union[OccupationType, str]) -> OccupationProfile:
    if isinstance(occupation, OccupationType):
        return PROFILES[occupation]
    parsed = OccupationType.parse(occupation)
    if parsed is None:
        return generic_profile(occupation.strip())
    return PROFILES[parsed]


def evaluate_occupation(summary: TodaySummary, occupation: Union[OccupationType, str]) -> OccupationInsight:
    return resolve_profile(occupation).evaluate(summary)


class OccupationInsightService:
    def __init__(self, summary_service) -> None:
        self.summary_service = summary_service

    def get_occupation_insight(
        self, city: str, occupation: Union[OccupationType, str]
    ) -> Optional[OccupationInsight]:
        summary = self.summary_service.get_today_summary(city)
        if summary is None:
            return None
        return evaluate_occupation(summary, occupation)


__all__ = [
    "OccupationInsight",
    "OccupationInsightService",
    "OccupationProfile",
    "PROFILES",
    "evaluate_occupation",
    "generic_profile",
    "resolve_profile",
]
