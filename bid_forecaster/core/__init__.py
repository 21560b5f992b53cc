"""Core data models and interfaces."""

from bid_forecaster.core.models import (
    # Errors
    InvalidInputError,
    # Enums
    Phase,
    Confidence,
    Trend,
    DemandLevel,
    # Data classes
    HistoricalObservation,
    ProfessorSignal,
    CourseContext,
    ForecastFactor,
    ProbabilityPoint,
    ForecastResult,
    CompleteForecast,
    ForecastSummary,
    # Abstract interfaces
    HistorySource,
    ForecastEngine,
)

__all__ = [
    "InvalidInputError",
    "Phase",
    "Confidence",
    "Trend",
    "DemandLevel",
    "HistoricalObservation",
    "ProfessorSignal",
    "CourseContext",
    "ForecastFactor",
    "ProbabilityPoint",
    "ForecastResult",
    "CompleteForecast",
    "ForecastSummary",
    "HistorySource",
    "ForecastEngine",
]
