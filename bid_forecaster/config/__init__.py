"""Configuration module for the Course Bid Forecaster."""

from bid_forecaster.config.model import (
    ForecastConfig,
    ConfidenceThresholds,
    TrendConfig,
    RatingConfig,
    DemandConfig,
    TimeSlotConfig,
    CampusConfig,
    PhaseRatioDefaults,
    UncertaintyConfig,
    CurveConfig,
    StrategyConfig,
    DEFAULT_CONFIG,
)

from bid_forecaster.config.settings import (
    # Time Weighting
    TIME_DECAY_FACTOR,
    INFLATION_RATE,
    MAX_AGE_YEARS,
    # Confidence
    MIN_DATA_HIGH_CONFIDENCE,
    MIN_DATA_MEDIUM_CONFIDENCE,
    MIN_DATA_LOW_CONFIDENCE,
    # Trend
    TREND_SIGNIFICANCE_LEVEL,
    TREND_MIN_RELATIVE_SLOPE,
    # Adjustments
    RATING_IMPACT_SCALE,
    # Logging
    LOG_LEVEL,
    LOG_FORMAT,
)

__all__ = [
    # Model configuration
    "ForecastConfig",
    "ConfidenceThresholds",
    "TrendConfig",
    "RatingConfig",
    "DemandConfig",
    "TimeSlotConfig",
    "CampusConfig",
    "PhaseRatioDefaults",
    "UncertaintyConfig",
    "CurveConfig",
    "StrategyConfig",
    "DEFAULT_CONFIG",
    # Time Weighting
    "TIME_DECAY_FACTOR",
    "INFLATION_RATE",
    "MAX_AGE_YEARS",
    # Confidence
    "MIN_DATA_HIGH_CONFIDENCE",
    "MIN_DATA_MEDIUM_CONFIDENCE",
    "MIN_DATA_LOW_CONFIDENCE",
    # Trend
    "TREND_SIGNIFICANCE_LEVEL",
    "TREND_MIN_RELATIVE_SLOPE",
    # Adjustments
    "RATING_IMPACT_SCALE",
    # Logging
    "LOG_LEVEL",
    "LOG_FORMAT",
]
