"""Health-condition risk scoring. Higher scores mean more risk."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from ..domain import HealthCondition
from ..entities import TodaySummary
from .scoring import Finding, clamp, label_for, messages, total_adjustment

TRIGGER = "trigger"
RECOMMENDATION = "recommendation"

RISK_LEVELS = ((75, "High"), (50, "Moderate"))

Rule = Callable[[TodaySummary], Iterable[Finding]]


@dataclass(frozen=True)
class HealthInsight:
    city: str
    health_condition: str
    risk_score: int
    risk_level: str
    triggers: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    safe_time_window: str


@dataclass(frozen=True)
class HealthProfile:
    condition: HealthCondition
    baseline: int
    safe_time_window: str
    rules: Tuple[Rule, ...]

    def evaluate(self, summary: TodaySummary) -> HealthInsight:
        findings = tuple(f for rule in self.rules for f in rule(summary))
        risk = clamp(self.baseline + total_adjustment(findings))
        return HealthInsight(
            city=summary.current.city,
            health_condition=self.condition.value,
            risk_score=risk,
            risk_level=label_for(risk, RISK_LEVELS, "Low"),
            triggers=messages(findings, TRIGGER),
            recommendations=messages(findings, RECOMMENDATION),
            safe_time_window=self.safe_time_window,
        )


def _trigger(adjustment: int, trigger: str, recommendation: str) -> Tuple[Finding, ...]:
    return (Finding(TRIGGER, trigger, adjustment), Finding(RECOMMENDATION, recommendation))


def _asthma_epa(s: TodaySummary) -> Iterable[Finding]:
    aq = s.air_quality
    if aq is not None and aq.us_epa_index is not None and aq.us_epa_index >= 3:
        return _trigger(
            30,
            f"Poor air quality (US EPA index {aq.us_epa_index}).",
            "Limit outdoor exposure and carry prescribed inhaler.",
        )
    return ()


def _asthma_pm25(s: TodaySummary) -> Iterable[Finding]:
    aq = s.air_quality
    if aq is not None and aq.pm2_5 is not None and aq.pm2_5 > 35:
        return _trigger(
            20,
            f"High PM2.5 levels ({aq.pm2_5:.1f} µg/m³).",
            "Avoid outdoor exercise and use a mask if needed.",
        )
    return ()


def _heart_heat(s: TodaySummary) -> Iterable[Finding]:
    if s.current.feels_like_c > 35:
        return _trigger(30, "High heat stress.", "Avoid strenuous activity and stay hydrated.")
    return ()


def _heart_uv(s: TodaySummary) -> Iterable[Finding]:
    if s.current.uv > 7:
        return _trigger(10, "High UV exposure.", "Avoid midday sun exposure.")
    return ()


def _migraine_pressure(s: TodaySummary) -> Iterable[Finding]:
    if s.current.pressure_mb < 1000:
        return _trigger(20, "Low atmospheric pressure.", "Minimize screen exposure and rest in dim environments.")
    return ()


def _extreme_heat(s: TodaySummary) -> Iterable[Finding]:
    if s.current.feels_like_c > 38:
        return _trigger(40, "Extreme heat conditions.", "Stay indoors during peak hours and hydrate frequently.")
    return ()


def _cold_exposure(s: TodaySummary) -> Iterable[Finding]:
    if s.current.temperature_c < 8:
        return _trigger(30, "Cold temperature exposure.", "Wear layered clothing and limit prolonged exposure.")
    return ()


def _temperature_extremes(s: TodaySummary) -> Iterable[Finding]:
    if s.current.feels_like_c > 35 or s.current.temperature_c < 10:
        return _trigger(25, "Temperature extremes.", "Ensure temperature-controlled environments.")
    return ()


PROFILES: Dict[HealthCondition, HealthProfile] = {
    HealthCondition.ASTHMA: HealthProfile(HealthCondition.ASTHMA, 30, "Early morning only", (_asthma_epa, _asthma_pm25)),
    HealthCondition.HEART_CONDITION: HealthProfile(
        HealthCondition.HEART_CONDITION, 35, "Morning or evening", (_heart_heat, _heart_uv)
    ),
    HealthCondition.MIGRAINE: HealthProfile(HealthCondition.MIGRAINE, 25, "Late morning", (_migraine_pressure,)),
    HealthCondition.HEAT_SENSITIVITY: HealthProfile(HealthCondition.HEAT_SENSITIVITY, 40, "Before 9 AM", (_extreme_heat,)),
    HealthCondition.COLD_SENSITIVITY: HealthProfile(HealthCondition.COLD_SENSITIVITY, 20, "Midday", (_cold_exposure,)),
    HealthCondition.ELDERLY: HealthProfile(HealthCondition.ELDERLY, 35, "Late morning", (_temperature_extremes,)),
}


def evaluate_health(summary: TodaySummary, condition: Union[HealthCondition, str]) -> HealthInsight:
    if not isinstance(condition, HealthCondition):
        condition = HealthCondition.parse(condition)
    return PROFILES[condition].evaluate(summary)


class HealthInsightService:
    def __init__(self, summary_service) -> None:
        self.summary_service = summary_service

    def get_health_insight(self, city: str, condition: Union[HealthCondition, str]) -> Optional[HealthInsight]:
        if not isinstance(condition, HealthCondition):
            condition = HealthCondition.parse(condition)
        summary = self.summary_service.get_today_summary(city)
        if summary is None:
            return None
        return evaluate_health(summary, condition)


__all__ = ["HealthInsight", "HealthInsightService", "HealthProfile", "PROFILES", "evaluate_health"]
