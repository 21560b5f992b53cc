"""
Trend Detector

Weighted linear regression of clearing price on (normalized) term, with a
t-test on the slope. A trend is only reported when it is both statistically
significant and large relative to the mean price.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from bid_forecaster.config import ForecastConfig, DEFAULT_CONFIG
from bid_forecaster.core import InvalidInputError, Trend
from bid_forecaster.engine.special_functions import student_t_cdf

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrendResult:
    """Outcome of a trend test."""
    trend: Trend
    strength: float                 # 0-1
    p_value: float = 1.0
    is_significant: bool = False
    slope: float = 0.0              # Price change across the observed span
    relative_slope: float = 0.0     # slope / weighted mean price
    degrees_of_freedom: float = 0.0


UNKNOWN_TREND = TrendResult(trend=Trend.UNKNOWN, strength=0.0)
FLAT_TREND = TrendResult(trend=Trend.STABLE, strength=0.0)


class TrendDetector:
    """
    Detects rising/falling clearing prices.

    Regression details:
    - x is the term ordinal rescaled to [0, 1], so the slope is the price
      change across the whole observed span
    - effective sample size (sum w)^2 / sum w^2 sets the degrees of freedom,
      which accounts for uneven decay weights
    - the two-tailed p-value comes from Student's t
    """

    def __init__(self, config: ForecastConfig = DEFAULT_CONFIG):
        self.config = config.trend

    def detect(
        self,
        prices: Sequence[float],
        terms: Sequence[float],
        weights: Sequence[float],
    ) -> TrendResult:
        """
        Test a weighted price series for a trend.

        Args:
            prices: Clearing prices
            terms: Term ordinals, parallel to prices
            weights: Non-negative weights, parallel to prices

        Returns:
            TrendResult; UNKNOWN below min_points, STABLE for degenerate input
        """
        y = np.asarray(prices, dtype=float)
        x_raw = np.asarray(terms, dtype=float)
        w = np.asarray(weights, dtype=float)

        if not (y.shape == x_raw.shape == w.shape):
            raise InvalidInputError("prices, terms and weights must have the same length")

        if y.size < self.config.min_points:
            return UNKNOWN_TREND

        # Constant prices have no trend whatever the weights
        if np.ptp(y) == 0:
            return FLAT_TREND

        total_weight = w.sum()
        if total_weight <= 0:
            w = np.ones_like(y)
            total_weight = w.sum()

        # Normalize x to [0, 1] for numerical stability
        term_range = np.ptp(x_raw) or 1.0
        x = (x_raw - x_raw.min()) / term_range

        mean_x = np.dot(w, x) / total_weight
        mean_y = np.dot(w, y) / total_weight
        sum_wxx_centered = np.dot(w, (x - mean_x) ** 2)

        if abs(sum_wxx_centered / total_weight) < self.config.degenerate_variance:
            logger.debug("Degenerate term variance, reporting stable trend")
            return FLAT_TREND

        slope = np.dot(w, (x - mean_x) * (y - mean_y)) / sum_wxx_centered
        intercept = mean_y - slope * mean_x

        residuals = y - (intercept + slope * x)
        sum_squared_residuals = np.dot(w, residuals ** 2)

        effective_n = total_weight ** 2 / np.dot(w, w)
        df = max(1.0, effective_n - 2.0)

        mse = sum_squared_residuals / df
        se_slope = math.sqrt(mse / sum_wxx_centered)

        if se_slope > 0:
            t_stat = abs(slope) / se_slope
        else:
            # Perfect fit: any non-zero slope is certain
            t_stat = math.inf if slope != 0 else 0.0

        p_value = 2.0 * (1.0 - student_t_cdf(t_stat, df)) if t_stat > 0 else 1.0
        p_value = min(1.0, max(0.0, p_value))
        is_significant = p_value < self.config.significance_level

        relative_slope = slope / mean_y if mean_y > 0 else 0.0

        if is_significant and relative_slope > self.config.min_relative_slope:
            trend = Trend.RISING
        elif is_significant and relative_slope < -self.config.min_relative_slope:
            trend = Trend.FALLING
        else:
            trend = Trend.STABLE

        strength = min(abs(relative_slope) / self.config.full_strength_slope, 1.0)

        logger.debug(
            f"Trend {trend.value}: slope={slope:.2f} ({relative_slope:+.1%}), "
            f"t={t_stat:.2f}, df={df:.1f}, p={p_value:.3f}"
        )

        return TrendResult(
            trend=trend,
            strength=float(strength),
            p_value=float(p_value),
            is_significant=bool(is_significant),
            slope=float(slope),
            relative_slope=float(relative_slope),
            degrees_of_freedom=float(df),
        )


def detect_trend(
    prices: Sequence[float],
    terms: Sequence[float],
    weights: Sequence[float],
    config: ForecastConfig = DEFAULT_CONFIG,
) -> TrendResult:
    """Convenience function to run a TrendDetector with the given config."""
    return TrendDetector(config).detect(prices, terms, weights)
