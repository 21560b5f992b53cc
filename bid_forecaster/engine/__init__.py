"""
Forecasting engine for the Course Bid Forecaster.

Contains the numeric primitives, the per-phase statistical model and the
orchestrator that produces a CompleteForecast.
"""

from bid_forecaster.engine.special_functions import (
    erf,
    log_gamma,
    log_beta,
    incomplete_beta,
    student_t_cdf,
    normal_cdf,
    lognormal_cdf,
)
from bid_forecaster.engine.statistics import (
    WeightedStatistics,
    weighted_statistics,
)
from bid_forecaster.engine.time_weight import (
    TimeWeightModel,
    TermWeight,
    parse_term,
    term_for_date,
)
from bid_forecaster.engine.trend import (
    TrendDetector,
    TrendResult,
    detect_trend,
)
from bid_forecaster.engine.adjustments import (
    AdjustmentEngine,
    Adjustment,
    AdjustmentSummary,
    DemandPressure,
    parse_start_hour,
)
from bid_forecaster.engine.bids import (
    BidRecommender,
    BidRecommendation,
    round_points,
)
from bid_forecaster.engine.win_probability import (
    WinProbabilityCurve,
    probability_for_bid,
    bid_for_target_probability,
)
from bid_forecaster.engine.phase_relationship import (
    PhaseRelationshipEstimator,
    PhaseRatio,
    CrossPhaseRatio,
    insufficient_result,
)
from bid_forecaster.engine.strategy import StrategyAdvisor
from bid_forecaster.engine.forecaster import (
    BidForecaster,
    generate_forecast,
    summarize_forecast,
)

__all__ = [
    # Special functions
    "erf",
    "log_gamma",
    "log_beta",
    "incomplete_beta",
    "student_t_cdf",
    "normal_cdf",
    "lognormal_cdf",
    # Statistics
    "WeightedStatistics",
    "weighted_statistics",
    # Time weighting
    "TimeWeightModel",
    "TermWeight",
    "parse_term",
    "term_for_date",
    # Trend
    "TrendDetector",
    "TrendResult",
    "detect_trend",
    # Adjustments
    "AdjustmentEngine",
    "Adjustment",
    "AdjustmentSummary",
    "DemandPressure",
    "parse_start_hour",
    # Bids
    "BidRecommender",
    "BidRecommendation",
    "round_points",
    # Win probability
    "WinProbabilityCurve",
    "probability_for_bid",
    "bid_for_target_probability",
    # Phase relationships
    "PhaseRelationshipEstimator",
    "PhaseRatio",
    "CrossPhaseRatio",
    "insufficient_result",
    # Orchestration
    "StrategyAdvisor",
    "BidForecaster",
    "generate_forecast",
    "summarize_forecast",
]
