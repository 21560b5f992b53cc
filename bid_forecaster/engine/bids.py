"""
Bid Recommender

Turns an expected clearing price into three bid tiers. The spread between
them widens with data scarcity and price volatility.
"""

import math
from dataclasses import dataclass

from bid_forecaster.config import ForecastConfig, DEFAULT_CONFIG
from bid_forecaster.core import Confidence


def round_points(value: float) -> int:
    """Round half up to whole bid points."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class BidRecommendation:
    """Three risk tiers of bid around the expected price."""
    safe_bid: int
    aggressive_bid: int
    minimum_bid: int
    uncertainty_margin: float
    confidence: Confidence


class BidRecommender:
    """
    Uncertainty-adjusted bid tiers.

    margin = base + scarcity_penalty * max(0, high_threshold - n)
                  + volatility_share * volatility
    clamped to [min_margin, max_margin], then:
        safe       = E * (1 + margin)
        aggressive = E
        minimum    = E * (1 - margin / 2)
    """

    def __init__(self, config: ForecastConfig = DEFAULT_CONFIG):
        self.config = config

    def confidence_for(self, data_points: int) -> Confidence:
        thresholds = self.config.confidence
        if data_points >= thresholds.high:
            return Confidence.HIGH
        if data_points >= thresholds.medium:
            return Confidence.MEDIUM
        if data_points >= thresholds.low:
            return Confidence.LOW
        return Confidence.INSUFFICIENT

    def uncertainty_margin(self, data_points: int, volatility: float) -> float:
        cfg = self.config.uncertainty
        shortfall = max(0, self.config.confidence.high - data_points)

        margin = cfg.base_margin
        margin += shortfall * cfg.scarcity_penalty
        margin += max(0.0, volatility) * cfg.volatility_share

        return max(cfg.min_margin, min(cfg.max_margin, margin))

    def recommend(self, expected_price: float, data_points: int, volatility: float) -> BidRecommendation:
        """
        Recommend bids for an expected clearing price.

        Args:
            expected_price: Adjusted expected clearing price (>= 0)
            data_points: Number of observations behind the estimate
            volatility: Coefficient of variation of the observed prices

        Returns:
            BidRecommendation with minimum <= aggressive <= safe
        """
        expected_price = max(0.0, expected_price)
        margin = self.uncertainty_margin(data_points, volatility)

        return BidRecommendation(
            safe_bid=round_points(expected_price * (1.0 + margin)),
            aggressive_bid=round_points(expected_price),
            minimum_bid=round_points(expected_price * (1.0 - margin / 2.0)),
            uncertainty_margin=margin,
            confidence=self.confidence_for(data_points),
        )
