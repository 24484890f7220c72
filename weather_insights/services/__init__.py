from .advice import WeatherAdvice, WeatherAdviceService, build_advice
from .health import HealthInsight, HealthInsightService, evaluate_health
from .occupation import OccupationInsight, OccupationInsightService, evaluate_occupation
from .summary import DailyInsight, SummaryUnavailable, TodaySummaryService, build_daily_insight
from .time_window import calculate_windows
from .travel import TravelScore, TravelScoreExplanation, TravelScoreService, explain_travel_score, score_travel
from .weather import WeatherService

__all__ = [
    "DailyInsight",
    "HealthInsight",
    "HealthInsightService",
    "OccupationInsight",
    "OccupationInsightService",
    "SummaryUnavailable",
    "TodaySummaryService",
    "TravelScore",
    "TravelScoreExplanation",
    "TravelScoreService",
    "WeatherAdvice",
    "WeatherAdviceService",
    "WeatherService",
    "build_advice",
    "build_daily_insight",
    "calculate_windows",
    "evaluate_health",
    "evaluate_occupation",
    "explain_travel_score",
    "score_travel",
]
