"""
Weighted Statistics

Mean, standard deviation and percentiles over a value series where each
value carries a (not necessarily normalized) weight.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from bid_forecaster.core import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeightedStatistics:
    """
    Summary statistics of a weighted series.

    Values are kept sorted together with their cumulative normalized weight
    so that percentile() is a single search.
    """
    mean: float
    std_dev: float
    count: int
    sorted_values: np.ndarray
    cumulative_weights: np.ndarray

    @classmethod
    def from_series(cls, values: Sequence[float], weights: Sequence[float]) -> "WeightedStatistics":
        """
        Compute statistics for parallel value/weight sequences.

        An empty series yields zeros and a percentile() that returns 0.
        If every weight is zero the values are weighted equally.

        Raises:
            InvalidInputError: On length mismatch or negative weights
        """
        values_arr = np.asarray(values, dtype=float)
        weights_arr = np.asarray(weights, dtype=float)

        if values_arr.shape != weights_arr.shape:
            raise InvalidInputError(
                f"values and weights differ in length ({values_arr.size} vs {weights_arr.size})"
            )
        if np.any(weights_arr < 0):
            raise InvalidInputError("weights must be non-negative")

        if values_arr.size == 0:
            return cls(0.0, 0.0, 0, np.empty(0), np.empty(0))

        total_weight = weights_arr.sum()
        if total_weight <= 0:
            logger.debug("All weights are zero, falling back to equal weights")
            weights_arr = np.ones_like(values_arr)
            total_weight = weights_arr.sum()

        normalized = weights_arr / total_weight
        mean = float(np.dot(normalized, values_arr))
        variance = float(np.dot(normalized, (values_arr - mean) ** 2))

        order = np.argsort(values_arr, kind="stable")
        return cls(
            mean=mean,
            std_dev=float(np.sqrt(variance)),
            count=int(values_arr.size),
            sorted_values=values_arr[order],
            cumulative_weights=np.cumsum(normalized[order]),
        )

    @property
    def variance(self) -> float:
        """Return variance (std_dev squared)."""
        return self.std_dev ** 2

    @property
    def median(self) -> float:
        return self.percentile(0.5)

    @property
    def coefficient_of_variation(self) -> float:
        """Std dev relative to the mean (0 when the mean is not positive)."""
        return self.std_dev / self.mean if self.mean > 0 else 0.0

    def percentile(self, p: float) -> float:
        """
        First value whose cumulative normalized weight reaches p.

        Args:
            p: Fraction in [0, 1]; values past the total weight clamp to the max

        Returns:
            The weighted percentile, or 0 for an empty series
        """
        if self.count == 0:
            return 0.0
        index = int(np.searchsorted(self.cumulative_weights, p, side="left"))
        if index >= self.count:
            return float(self.sorted_values[-1])
        return float(self.sorted_values[index])


def weighted_statistics(values: Sequence[float], weights: Sequence[float]) -> WeightedStatistics:
    """Convenience wrapper around WeightedStatistics.from_series."""
    return WeightedStatistics.from_series(values, weights)
