"""Travel/comfort score: four 0-25 factors summed into a 0-100 score."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..entities import AirQuality, TodaySummary
from .scoring import Finding, SubScore, clamp, label_for, messages

WARNING = "warning"

COMFORT_LABELS = ((80, "Excellent"), (60, "Good"), (40, "OK"))

AIR_QUALITY_MISSING_SCORE = 20
EPA_INDEX_SCORES = {1: 25, 2: 22, 3: 18, 4: 10, 5: 6, 6: 2}

SUMMARY_BY_LABEL = {
    "Excellent": "Excellent day for travelling and outdoor plans.",
    "Good": "Overall good conditions for travelling with only minor considerations.",
    "OK": "Conditions are acceptable, but review the notes before planning full-day outdoor activities.",
    "Poor": "Conditions are not ideal for travel-focused outdoor plans.",
}


@dataclass(frozen=True)
class TravelScore:
    city: str
    region: str
    country: str
    overall_score: int
    comfort_label: str
    summary: str
    temperature_score: int
    rain_score: int
    uv_score: int
    air_quality_score: int
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TravelScoreExplanation:
    city: str
    overall_score: int
    comfort_label: str
    explanation: str
    confidence: str = "High"
    breakdown: Dict[str, str] = field(default_factory=dict)


def _warn(value: int, message: str) -> SubScore:
    return SubScore(value, (Finding(WARNING, message),))


def score_temperature(feels_like_c: float) -> SubScore:
    if 22 <= feels_like_c <= 28:
        return SubScore(25)
    if 18 <= feels_like_c < 22:
        return SubScore(22)
    if 28 < feels_like_c <= 32:
        return _warn(20, "It may feel a bit warm; plan lighter clothing.")
    if 15 <= feels_like_c < 18:
        return SubScore(18)
    if feels_like_c > 32:
        return _warn(10, "High temperatures expected; stay hydrated and avoid peak afternoon outdoor activity.")
    if feels_like_c < 10:
        return _warn(8, "Weather is quite cool; carry warm clothing.")
    return _warn(15, "Slightly cool conditions; a light jacket may be needed.")


def score_rain(chance_of_rain: int, total_precip_mm: float) -> SubScore:
    if chance_of_rain <= 10 and total_precip_mm < 0.5:
        return SubScore(25)
    if chance_of_rain <= 30 and total_precip_mm < 2:
        return SubScore(22)
    if chance_of_rain <= 50 and total_precip_mm < 4:
        return _warn(18, "There is a chance of light showers; consider carrying a compact umbrella.")
    if chance_of_rain <= 70:
        return _warn(12, "Rain is likely; plan indoor alternatives or carry rain protection.")
    return _warn(6, "High risk of rain or heavy showers; outdoor plans may be disrupted.")


def score_uv(uv: float) -> SubScore:
    if uv <= 2:
        return SubScore(25)
    if uv <= 5:
        return SubScore(22)
    if uv <= 7:
        return _warn(16, "High UV index; use sunscreen and wear a hat/sunglasses.")
    if uv <= 10:
        return _warn(10, "Very high UV index; avoid midday sun and use strong sun protection.")
    return _warn(6, "Extreme UV index; minimise direct sun exposure.")


def score_air_quality(aq: Optional[AirQuality]) -> SubScore:
    if aq is None:
        return SubScore(AIR_QUALITY_MISSING_SCORE)

    score = AIR_QUALITY_MISSING_SCORE
    findings = []
    epa = aq.us_epa_index
    if epa is not None and epa >= 1:
        score = EPA_INDEX_SCORES.get(epa, AIR_QUALITY_MISSING_SCORE)
        if epa >= 3:
            findings.append(
                Finding(
                    WARNING,
                    f"Air quality is not ideal (US EPA index {epa}). Sensitive individuals should take extra care.",
                )
            )
        if epa >= 4:
            findings.append(Finding(WARNING, "Poor air quality; consider limiting outdoor exertion and using a mask."))

    pm25 = aq.pm2_5
    if pm25 is not None and pm25 > 35:
        findings.append(Finding(WARNING, f"PM2.5 is elevated at {pm25:.1f} µg/m³."))
        score = min(score, 10)
    if pm25 is not None and pm25 > 55:
        findings.append(Finding(WARNING, "Very high fine particulate levels; outdoor activity is not recommended."))
        score = min(score, 6)

    return SubScore(clamp(score, 0, 25), tuple(findings))


def score_travel(summary: TodaySummary) -> TravelScore:
    current = summary.current
    today = summary.forecast_today

    parts = (
        score_temperature(current.feels_like_c),
        score_rain(today.chance_of_rain, today.total_precip_mm),
        score_uv(current.uv),
        score_air_quality(summary.air_quality),
    )
    temperature, rain, uv, air = parts
    overall = clamp(sum(p.value for p in parts))
    label = label_for(overall, COMFORT_LABELS, "Poor")
    warnings = messages((f for p in parts for f in p.findings), WARNING)

    return TravelScore(
        city=current.city,
        region=current.region,
        country=current.country,
        overall_score=overall,
        comfort_label=label,
        summary=_summary_text(label, warnings),
        temperature_score=temperature.value,
        rain_score=rain.value,
        uv_score=uv.value,
        air_quality_score=air.value,
        warnings=warnings,
    )


def _summary_text(label: str, warnings: Tuple[str, ...]) -> str:
    base = SUMMARY_BY_LABEL.get(label, "Conditions vary; review warnings before planning your day.")
    if not warnings:
        return base
    return f"{base} Key points: {' '.join(warnings)}"


# Explanations are rebuilt from the stored factor scores, not the raw weather.
_EXPLANATIONS = {
    "Temperature": (
        "Comfortable temperature range for most activities.",
        "Slightly warm or cool but generally manageable.",
        "Temperature may feel uncomfortable for prolonged outdoor activity.",
    ),
    "Rain": (
        "Low chance of rain with minimal disruption.",
        "Some chance of showers; minor inconvenience possible.",
        "High likelihood of rain affecting outdoor plans.",
    ),
    "UV Index": (
        "Low to moderate UV levels.",
        "Elevated UV; sun protection recommended.",
        "High UV exposure risk; avoid prolonged sun exposure.",
    ),
    "Air Quality": (
        "Air quality is good and suitable for outdoor activities.",
        "Moderate air quality; sensitive individuals should be cautious.",
        "Poor air quality; outdoor exertion is not recommended.",
    ),
}


def explain_factor(factor: str, score: int) -> str:
    good, fair, poor = _EXPLANATIONS[factor]
    if score >= 22:
        return good
    if score >= 15:
        return fair
    return poor


def explain_travel_score(score: TravelScore) -> TravelScoreExplanation:
    breakdown = {
        "Temperature": explain_factor("Temperature", score.temperature_score),
        "Rain": explain_factor("Rain", score.rain_score),
        "UV Index": explain_factor("UV Index", score.uv_score),
        "Air Quality": explain_factor("Air Quality", score.air_quality_score),
    }
    return TravelScoreExplanation(
        city=score.city,
        overall_score=score.overall_score,
        comfort_label=score.comfort_label,
        breakdown=breakdown,
        explanation=(
            f"Today's travel score is {score.overall_score}/100 ({score.comfort_label}). "
            "Weather conditions are assessed based on temperature, rain probability, UV exposure, and air quality."
        ),
    )


class TravelScoreService:
    def __init__(self, summary_service) -> None:
        self.summary_service = summary_service

    def get_travel_score(self, city: str) -> Optional[TravelScore]:
        summary = self.summary_service.get_today_summary(city)
        if summary is None:
            return None
        return score_travel(summary)

    def explain_travel_score(self, city: str) -> Optional[TravelScoreExplanation]:
        score = self.get_travel_score(city)
        if score is None:
            return None
        return explain_travel_score(score)


__all__ = [
    "TravelScore",
    "TravelScoreExplanation",
    "TravelScoreService",
    "explain_factor",
    "explain_travel_score",
    "score_air_quality",
    "score_rain",
    "score_temperature",
    "score_travel",
    "score_uv",
]
