"""
Adjustment Engine

Independent multiplicative adjustments to the weighted mean price:
- Trend (from the TrendDetector)
- Professor rating (tanh sigmoid centered at 5.0 on the 1-6 scale)
- Demand pressure (logistic sigmoid of bids per seat, centered at 2.0)
- Time slot (meeting start hour buckets)
- Campus (substring match on the campus name)

The multipliers compose by product into a single total multiplier.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from bid_forecaster.config import ForecastConfig, DEFAULT_CONFIG
from bid_forecaster.core import ForecastFactor, HistoricalObservation, Trend
from bid_forecaster.engine.trend import TrendResult

logger = logging.getLogger(__name__)

_MEETING_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)", re.IGNORECASE)


@dataclass(frozen=True)
class Adjustment:
    """A single named price multiplier."""
    name: str
    multiplier: float
    description: str

    @property
    def is_neutral(self) -> bool:
        return self.multiplier == 1.0

    def to_factor(self, base_price: float) -> ForecastFactor:
        return ForecastFactor(
            name=self.name,
            impact=(self.multiplier - 1.0) * base_price,
            description=self.description,
        )


@dataclass(frozen=True)
class DemandPressure:
    """Demand pressure derived from bids per seat."""
    pressure: float                 # 0-1, 0.5 when unknown
    average_ratio: Optional[float]  # Weighted bids per seat, None when unknown
    adjustment: Adjustment

    @property
    def has_data(self) -> bool:
        return self.average_ratio is not None


@dataclass
class AdjustmentSummary:
    """All adjustments applied to one phase."""
    adjustments: List[Adjustment] = field(default_factory=list)
    demand: Optional[DemandPressure] = None

    @property
    def total_multiplier(self) -> float:
        return math.prod(a.multiplier for a in self.adjustments)

    def factors(self, base_price: float) -> List[ForecastFactor]:
        """ForecastFactors for every adjustment that moved the price."""
        return [a.to_factor(base_price) for a in self.adjustments if not a.is_neutral]


def parse_start_hour(meeting_time: Optional[str]) -> Optional[int]:
    """
    Extract the 24h start hour from a pattern like "Tue 8:30AM - 11:30AM".

    Returns:
        Hour 0-23, or None if no H:MM AM/PM time is present
    """
    if not meeting_time:
        return None
    match = _MEETING_TIME_PATTERN.search(meeting_time)
    if not match:
        return None

    hours = int(match.group(1))
    is_pm = match.group(3).upper() == "PM"
    if is_pm and hours != 12:
        hours += 12
    if not is_pm and hours == 12:
        hours = 0
    return hours


class AdjustmentEngine:
    """Computes the covariate multipliers for a phase forecast."""

    def __init__(self, config: ForecastConfig = DEFAULT_CONFIG):
        self.config = config

    def trend_adjustment(self, trend: TrendResult) -> Adjustment:
        cfg = self.config.trend
        pct = f"{trend.strength * 100:.0f}%"
        if trend.trend is Trend.RISING:
            return Adjustment(
                "Rising Trend",
                1.0 + cfg.rising_impact * trend.strength,
                f"Prices trending upward (strength: {pct})",
            )
        if trend.trend is Trend.FALLING:
            return Adjustment(
                "Falling Trend",
                1.0 - cfg.falling_impact * trend.strength,
                f"Prices trending downward (strength: {pct})",
            )
        return Adjustment("Trend", 1.0, "No significant trend")

    def rating_adjustment(self, rating: Optional[float]) -> Adjustment:
        """
        Professor rating impact: 1 + scale * tanh((rating - 5.0) / 1.5).

        A missing or zero rating is neutral.
        """
        if not rating:
            return Adjustment("Professor Rating", 1.0, "No rating data")

        cfg = self.config.rating
        multiplier = 1.0 + cfg.impact_scale * math.tanh((rating - cfg.midpoint) / cfg.width)

        if rating >= cfg.star:
            description = f"Star professor ({rating:.1f}) - high demand expected"
        elif rating >= cfg.above_average:
            description = f"Above average rating ({rating:.1f}) - moderate demand boost"
        elif rating >= cfg.average:
            description = f"Average rating ({rating:.1f}) - typical demand"
        else:
            description = f"Below average rating ({rating:.1f}) - potentially lower demand"

        return Adjustment("Professor Rating", multiplier, description)

    def demand_pressure(
        self,
        observations: Sequence[HistoricalObservation],
        weights: Sequence[float],
    ) -> DemandPressure:
        """
        Weighted bids-per-seat ratio mapped through a logistic curve.

        Only observations reporting both seats and bids count. Without any,
        pressure is 0.5 and the multiplier is neutral.
        """
        cfg = self.config.demand
        weighted_ratio = 0.0
        total_weight = 0.0
        for obs, weight in zip(observations, weights):
            ratio = obs.demand_ratio
            if ratio is not None:
                weighted_ratio += ratio * weight
                total_weight += weight

        if total_weight <= 0:
            neutral = Adjustment("Demand Pressure", 1.0, "No demand data available")
            return DemandPressure(pressure=0.5, average_ratio=None, adjustment=neutral)

        avg_ratio = weighted_ratio / total_weight
        pressure = 1.0 / (1.0 + math.exp(-(avg_ratio - cfg.center_ratio) / cfg.width))

        if avg_ratio >= cfg.very_high:
            description = f"Very high demand ({avg_ratio:.1f} bids/seat)"
        elif avg_ratio >= cfg.high:
            description = f"High demand ({avg_ratio:.1f} bids/seat)"
        elif avg_ratio >= cfg.moderate:
            description = f"Moderate demand ({avg_ratio:.1f} bids/seat)"
        else:
            description = f"Low demand ({avg_ratio:.1f} bids/seat)"

        multiplier = 1.0 + (pressure - 0.5) * cfg.impact
        return DemandPressure(
            pressure=pressure,
            average_ratio=avg_ratio,
            adjustment=Adjustment("Demand Pressure", multiplier, description),
        )

    def time_slot_adjustment(self, meeting_time: Optional[str]) -> Adjustment:
        cfg = self.config.time_slots
        hour = parse_start_hour(meeting_time)
        if hour is None:
            return Adjustment("Time Slot", 1.0, "No meeting time")

        if hour < cfg.early_morning_before:
            multiplier = cfg.early_morning
        elif hour < cfg.morning_before:
            multiplier = cfg.morning
        elif hour < cfg.afternoon_before:
            multiplier = cfg.afternoon
        else:
            multiplier = cfg.evening

        description = "Less popular time slot" if multiplier < 1 else "Popular time slot"
        return Adjustment("Time Slot", multiplier, description)

    def campus_adjustment(self, campus: Optional[str]) -> Adjustment:
        cfg = self.config.campus
        if campus and cfg.secondary_campus in campus.lower():
            return Adjustment(
                "Campus Location",
                cfg.secondary_multiplier,
                f"{campus} campus typically has lower demand",
            )
        return Adjustment("Campus Location", cfg.default_multiplier, "Primary campus")

    def combine(
        self,
        trend: TrendResult,
        observations: Sequence[HistoricalObservation],
        weights: Sequence[float],
        rating: Optional[float] = None,
        meeting_time: Optional[str] = None,
        campus: Optional[str] = None,
    ) -> AdjustmentSummary:
        """
        Compute every adjustment for one phase.

        Returns:
            AdjustmentSummary whose total_multiplier is the product of all five
        """
        demand = self.demand_pressure(observations, weights)
        summary = AdjustmentSummary(
            adjustments=[
                self.trend_adjustment(trend),
                self.rating_adjustment(rating),
                demand.adjustment,
                self.time_slot_adjustment(meeting_time),
                self.campus_adjustment(campus),
            ],
            demand=demand,
        )
        logger.debug(f"Total adjustment multiplier: {summary.total_multiplier:.3f}")
        return summary
