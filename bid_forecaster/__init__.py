"""
Course Bid Forecaster - Clearing price forecasts for course bidding.

Turns sparse multi-term clearing price history into per-phase price
forecasts, risk-tiered bid recommendations and win probability curves.
"""

__version__ = "0.1.0"

from bid_forecaster.core import (
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
)

from bid_forecaster.config import (
    ForecastConfig,
    DEFAULT_CONFIG,
)

from bid_forecaster.engine import (
    BidForecaster,
    generate_forecast,
    summarize_forecast,
    probability_for_bid,
    bid_for_target_probability,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "InvalidInputError",
    # Enums
    "Phase",
    "Confidence",
    "Trend",
    "DemandLevel",
    # Data classes
    "HistoricalObservation",
    "ProfessorSignal",
    "CourseContext",
    "ForecastFactor",
    "ProbabilityPoint",
    "ForecastResult",
    "CompleteForecast",
    "ForecastSummary",
    # Config
    "ForecastConfig",
    "DEFAULT_CONFIG",
    # Engine
    "BidForecaster",
    "generate_forecast",
    "summarize_forecast",
    "probability_for_bid",
    "bid_for_target_probability",
]
