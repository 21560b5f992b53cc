"""
Win Probability Curve

P(win | bid) blends two estimators:
- Empirical (conformal style): weighted share of historical clearing prices
  the bid would have beaten, with half credit just below a price, shrunk
  toward 50% when history is short
- Parametric: log-normal CDF around the expected price

The empirical share of the blend grows with the number of observations.
"""

import logging
from typing import List, Optional, Sequence

from bid_forecaster.config import ForecastConfig, DEFAULT_CONFIG
from bid_forecaster.core import ProbabilityPoint
from bid_forecaster.engine.bids import round_points
from bid_forecaster.engine.special_functions import lognormal_cdf

logger = logging.getLogger(__name__)


class WinProbabilityCurve:
    """Builds bid -> win probability curves."""

    def __init__(self, config: ForecastConfig = DEFAULT_CONFIG):
        self.config = config.curve

    def empirical_probability(self, bid: float, prices: Sequence[float], weights: Sequence[float]) -> float:
        """Weighted fraction of prices beaten, shrunk toward 0.5 for small samples."""
        total_weight = sum(weights)
        if not prices or total_weight <= 0:
            return 0.5

        band = 1.0 - self.config.partial_credit_band
        weight_beaten = 0.0
        for price, weight in zip(prices, weights):
            if bid >= price:
                weight_beaten += weight
            elif bid >= price * band:
                # Partial credit for being close
                weight_beaten += weight * 0.5

        empirical = weight_beaten / total_weight
        shrinkage = min(1.0, len(prices) / self.config.shrinkage_points)
        return shrinkage * empirical + (1.0 - shrinkage) * 0.5

    def probability(
        self,
        bid: float,
        prices: Sequence[float],
        weights: Sequence[float],
        expected_price: float,
        std_dev: float,
    ) -> int:
        """
        Win probability for one bid.

        Args:
            bid: Candidate bid
            prices: Adjusted historical clearing prices
            weights: Weights parallel to prices
            expected_price: Forecast clearing price
            std_dev: Effective standard deviation of the clearing price

        Returns:
            Probability as a whole percentage (0-100)
        """
        if bid <= 0:
            return 0

        n = len(prices)
        if n == 0:
            if expected_price <= 0:
                return 50
            sigma = max(std_dev, expected_price * self.config.no_data_std_fraction)
            return round_points(lognormal_cdf(bid, expected_price, sigma) * 100)

        empirical = self.empirical_probability(bid, prices, weights)
        sigma = max(std_dev, expected_price * self.config.min_std_fraction)
        parametric = lognormal_cdf(bid, expected_price, sigma)

        empirical_weight = min(1.0, n / self.config.empirical_points)
        blended = empirical_weight * empirical + (1.0 - empirical_weight) * parametric
        return round_points(blended * 100)

    def build(
        self,
        prices: Sequence[float],
        weights: Sequence[float],
        expected_price: float,
        std_dev: float,
    ) -> List[ProbabilityPoint]:
        """
        Sample the curve from low_fraction to high_fraction of the expected price.

        Returns:
            Points ordered by bid; empty when expected_price <= 0
        """
        if expected_price <= 0:
            return []

        min_bid = max(0, round_points(expected_price * self.config.low_fraction))
        max_bid = round_points(expected_price * self.config.high_fraction)
        step = max(1, round_points((max_bid - min_bid) / self.config.points))

        return [
            ProbabilityPoint(bid=bid, probability=self.probability(bid, prices, weights, expected_price, std_dev))
            for bid in range(min_bid, max_bid + 1, step)
        ]


# =============================================================================
# CURVE QUERIES
# =============================================================================


def probability_for_bid(bid: float, curve: Optional[Sequence[ProbabilityPoint]]) -> int:
    """
    Win probability for a bid, interpolated from a curve.

    Args:
        bid: The bid amount to evaluate
        curve: Probability curve from a ForecastResult

    Returns:
        Win probability 0-100; 50 without a curve, 0 for non-positive bids,
        the boundary value outside the curve's bid range
    """
    if not curve:
        return 50
    if bid <= 0:
        return 0

    if bid <= curve[0].bid:
        return curve[0].probability
    if bid >= curve[-1].bid:
        return curve[-1].probability

    for lower, upper in zip(curve, curve[1:]):
        if lower.bid <= bid <= upper.bid:
            if upper.bid == lower.bid:
                return lower.probability
            ratio = (bid - lower.bid) / (upper.bid - lower.bid)
            return round_points(lower.probability + ratio * (upper.probability - lower.probability))

    return curve[-1].probability


def bid_for_target_probability(target_probability: float, curve: Optional[Sequence[ProbabilityPoint]]) -> int:
    """
    Smallest bid reaching a target win probability, interpolated from a curve.

    Args:
        target_probability: Desired win probability (clamped to 0-100)
        curve: Probability curve from a ForecastResult

    Returns:
        Bid amount; 0 without a curve, the boundary bid outside the curve's range
    """
    if not curve:
        return 0

    target = max(0.0, min(100.0, target_probability))

    for lower, upper in zip(curve, curve[1:]):
        if lower.probability <= target <= upper.probability:
            prob_range = upper.probability - lower.probability
            if prob_range == 0:
                return lower.bid
            ratio = (target - lower.probability) / prob_range
            return round_points(lower.bid + ratio * (upper.bid - lower.bid))

    if target <= curve[0].probability:
        return curve[0].bid
    return curve[-1].bid
