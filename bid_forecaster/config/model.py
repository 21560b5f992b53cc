"""
Model configuration for the Course Bid Forecaster.

Every engine component receives a ForecastConfig; nothing reads tunables from
module state at call time. Build variants with dataclasses.replace().
"""

from dataclasses import dataclass, field

from bid_forecaster.config.settings import (
    TIME_DECAY_FACTOR,
    INFLATION_RATE,
    MAX_AGE_YEARS,
    MIN_DATA_HIGH_CONFIDENCE,
    MIN_DATA_MEDIUM_CONFIDENCE,
    MIN_DATA_LOW_CONFIDENCE,
    TREND_SIGNIFICANCE_LEVEL,
    TREND_MIN_RELATIVE_SLOPE,
    RATING_IMPACT_SCALE,
)


@dataclass(frozen=True)
class ConfidenceThresholds:
    """Minimum observation counts for each confidence tier."""
    high: int = MIN_DATA_HIGH_CONFIDENCE
    medium: int = MIN_DATA_MEDIUM_CONFIDENCE
    low: int = MIN_DATA_LOW_CONFIDENCE


@dataclass(frozen=True)
class TrendConfig:
    """Trend detection and trend adjustment parameters."""
    min_points: int = 3
    significance_level: float = TREND_SIGNIFICANCE_LEVEL  # two-tailed p-value cutoff
    min_relative_slope: float = TREND_MIN_RELATIVE_SLOPE  # slope / mean price
    full_strength_slope: float = 0.5    # relative slope that maps to strength 1.0
    rising_impact: float = 0.10         # up to +10% for a strong rising trend
    falling_impact: float = 0.08        # up to -8% for a strong falling trend
    degenerate_variance: float = 1e-4   # x-variance below this is treated as zero


@dataclass(frozen=True)
class RatingConfig:
    """Professor rating sigmoid and description tiers (1-6 scale)."""
    impact_scale: float = RATING_IMPACT_SCALE
    midpoint: float = 5.0
    width: float = 1.5
    star: float = 5.5
    above_average: float = 5.0
    average: float = 4.5


@dataclass(frozen=True)
class DemandConfig:
    """Bids-per-seat demand pressure parameters."""
    center_ratio: float = 2.0
    width: float = 1.5
    impact: float = 0.20     # multiplier = 1 + (pressure - 0.5) * impact
    very_high: float = 3.0
    high: float = 2.0
    moderate: float = 1.5


@dataclass(frozen=True)
class TimeSlotConfig:
    """Multipliers by meeting start hour (24h clock)."""
    early_morning_before: int = 9
    morning_before: int = 13
    afternoon_before: int = 17
    early_morning: float = 0.90   # 8:30 AM - less popular
    morning: float = 1.0          # baseline
    afternoon: float = 1.05       # slightly more popular
    evening: float = 0.95         # 6:30 PM+ - less popular


@dataclass(frozen=True)
class CampusConfig:
    """Campus multiplier, keyed by substring match on the campus name."""
    secondary_campus: str = "chicago"
    secondary_multiplier: float = 0.95
    default_multiplier: float = 1.0


@dataclass(frozen=True)
class PhaseRatioDefaults:
    """Fallback price ratios of each phase relative to phase 1."""
    phase2: float = 1.15    # P2 typically ~15% higher than P1 for hot courses
    phase3: float = 0.85    # P3 typically ~15% lower (combined pool)
    phase4: float = 0.70    # PWYB typically ~30% lower
    min_shared_terms: int = 2
    cross_phase_safety: float = 1.15   # extra safe-bid margin on derived phases


@dataclass(frozen=True)
class UncertaintyConfig:
    """Safe-bid margin scaling by data scarcity and volatility."""
    base_margin: float = 0.15
    scarcity_penalty: float = 0.10     # per missing point below the high threshold
    volatility_share: float = 0.30
    min_margin: float = 0.05
    max_margin: float = 0.50


@dataclass(frozen=True)
class CurveConfig:
    """Win probability curve construction."""
    low_fraction: float = 0.5
    high_fraction: float = 1.5
    points: int = 40
    partial_credit_band: float = 0.05   # bids within 5% below a price get half credit
    shrinkage_points: int = 10          # full empirical trust at this many points
    empirical_points: int = 6           # blend weight reaches 1 at this many points
    min_std_fraction: float = 0.15
    no_data_std_fraction: float = 0.20


@dataclass(frozen=True)
class StrategyConfig:
    """Thresholds used when writing strategy notes."""
    high_demand: float = 0.7
    strong_trend: float = 0.5
    phase2_premium: float = 1.2
    phase3_discount: float = 0.8
    phase4_discount: float = 0.6
    star_rating: float = 5.5
    high_volatility: float = 0.4


@dataclass(frozen=True)
class ForecastConfig:
    """Complete, immutable parameter set for the forecasting engine."""
    time_decay_factor: float = TIME_DECAY_FACTOR
    inflation_rate: float = INFLATION_RATE
    max_age_years: float = MAX_AGE_YEARS
    confidence: ConfidenceThresholds = field(default_factory=ConfidenceThresholds)
    trend: TrendConfig = field(default_factory=TrendConfig)
    rating: RatingConfig = field(default_factory=RatingConfig)
    demand: DemandConfig = field(default_factory=DemandConfig)
    time_slots: TimeSlotConfig = field(default_factory=TimeSlotConfig)
    campus: CampusConfig = field(default_factory=CampusConfig)
    phase_ratios: PhaseRatioDefaults = field(default_factory=PhaseRatioDefaults)
    uncertainty: UncertaintyConfig = field(default_factory=UncertaintyConfig)
    curve: CurveConfig = field(default_factory=CurveConfig)
    strategy: StrategyConfig = field(default_factory=StrategyConfig)


DEFAULT_CONFIG = ForecastConfig()
