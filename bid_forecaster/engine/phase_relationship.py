"""
Phase Relationship Estimator

Fills a phase that has no direct history by scaling the forecast of a
direct phase (1 or 2) by a phase-to-phase price ratio.

Every phase is first priced relative to phase 1: the median same-term
ratio when at least min_shared_terms terms cleared in both phases, the
configured default otherwise. A target/base ratio is then the quotient of
the two phase-1 ratios, so a phase-2 base can still use observed data.

Derivation is one level deep: the base must be a directly computed result.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np

from bid_forecaster.config import ForecastConfig, DEFAULT_CONFIG
from bid_forecaster.core import (
    Confidence,
    ForecastFactor,
    ForecastResult,
    HistoricalObservation,
    Phase,
    Trend,
)
from bid_forecaster.engine.bids import round_points
from bid_forecaster.engine.win_probability import WinProbabilityCurve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseRatio:
    """Price ratio of one phase to phase 1 and where it came from."""
    phase: Phase
    ratio: float
    shared_terms: int
    from_data: bool

    @property
    def provenance(self) -> str:
        if self.from_data:
            return f"from {self.shared_terms} shared terms"
        return "default estimate"

    def describe(self) -> str:
        return f"{self.phase.label}/{Phase.PHASE_1.label} {self.provenance}"


@dataclass(frozen=True)
class CrossPhaseRatio:
    """Target/base ratio built from the two phase-1 ratios."""
    target: PhaseRatio
    base: PhaseRatio

    @property
    def ratio(self) -> float:
        return self.target.ratio / self.base.ratio

    @property
    def from_data(self) -> bool:
        return self.target.from_data or self.base.from_data

    @property
    def provenance(self) -> str:
        legs = [leg for leg in (self.target, self.base) if leg.phase is not Phase.PHASE_1]
        return "; ".join(leg.describe() for leg in legs)


def insufficient_result(phase: Phase) -> ForecastResult:
    """All-zero result for a phase that cannot be estimated."""
    return ForecastResult(
        phase=phase,
        expected_price=0,
        safe_bid=0,
        aggressive_bid=0,
        minimum_bid=0,
        confidence=Confidence.INSUFFICIENT,
        data_points=0,
        trend=Trend.UNKNOWN,
        factors=[ForecastFactor(
            name="No Data",
            impact=0.0,
            description="No historical data available for this course/professor combination",
        )],
    )


class PhaseRelationshipEstimator:
    """Derives forecasts for phases without their own history."""

    def __init__(self, config: ForecastConfig = DEFAULT_CONFIG):
        self.config = config
        self.curve = WinProbabilityCurve(config)

    def default_ratio(self, phase: Phase) -> float:
        """Configured price ratio of a phase to phase 1."""
        defaults = self.config.phase_ratios
        relative_to_phase1 = {
            Phase.PHASE_1: 1.0,
            Phase.PHASE_2: defaults.phase2,
            Phase.PHASE_3: defaults.phase3,
            Phase.PHASE_4: defaults.phase4,
        }
        return relative_to_phase1[phase]

    @staticmethod
    def observed_ratios(
        observations: Sequence[HistoricalObservation],
        target: Phase,
        base: Phase,
    ) -> List[float]:
        """
        Same-term price ratios target/base from raw clearing prices.

        Duplicate term+phase entries are averaged; zero prices are ignored.
        """
        prices_by_term: Dict[str, Dict[Phase, List[float]]] = defaultdict(lambda: defaultdict(list))
        for obs in observations:
            if obs.clearing_price > 0:
                prices_by_term[obs.term][obs.phase].append(obs.clearing_price)

        ratios = []
        for phases in prices_by_term.values():
            if phases.get(target) and phases.get(base):
                ratios.append(float(np.mean(phases[target])) / float(np.mean(phases[base])))
        return ratios

    def phase1_ratio(
        self,
        observations: Sequence[HistoricalObservation],
        phase: Phase,
    ) -> PhaseRatio:
        """Median observed ratio to phase 1, falling back to the default on thin data."""
        if phase is Phase.PHASE_1:
            return PhaseRatio(phase, 1.0, 0, False)
        ratios = self.observed_ratios(observations, phase, Phase.PHASE_1)
        if len(ratios) >= self.config.phase_ratios.min_shared_terms:
            return PhaseRatio(phase, float(np.median(ratios)), len(ratios), True)
        return PhaseRatio(phase, self.default_ratio(phase), len(ratios), False)

    def ratio(
        self,
        observations: Sequence[HistoricalObservation],
        target: Phase,
        base: Phase,
    ) -> CrossPhaseRatio:
        """Target/base price ratio, each side resolved against phase 1."""
        return CrossPhaseRatio(
            target=self.phase1_ratio(observations, target),
            base=self.phase1_ratio(observations, base),
        )

    @staticmethod
    def select_base(observations: Sequence[HistoricalObservation]) -> Phase:
        """Direct phase with the most observations (phase 1 on ties)."""
        phase1 = sum(1 for obs in observations if obs.phase is Phase.PHASE_1)
        phase2 = sum(1 for obs in observations if obs.phase is Phase.PHASE_2)
        return Phase.PHASE_1 if phase1 >= phase2 else Phase.PHASE_2

    def derive(
        self,
        target: Phase,
        base_result: ForecastResult,
        observations: Sequence[HistoricalObservation],
    ) -> ForecastResult:
        """
        Scale a directly computed base forecast onto the target phase.

        Args:
            target: Phase to estimate
            base_result: Non-derived forecast of a direct phase
            observations: All observations of the course (for ratios)

        Returns:
            Derived ForecastResult, or an insufficient result when the base
            has no data
        """
        if base_result.is_derived:
            raise ValueError("Phase estimates must be derived from a directly computed phase")

        if not base_result.has_data:
            logger.warning(f"No base data to estimate {target.label}")
            return insufficient_result(target)

        phase_ratio = self.ratio(observations, target, base_result.phase)
        multiplier = phase_ratio.ratio
        safety = self.config.phase_ratios.cross_phase_safety

        expected_price = round_points(base_result.expected_price * multiplier)
        factors = list(base_result.factors)
        factors.append(ForecastFactor(
            name="Cross-Phase Estimate",
            impact=(multiplier - 1.0) * base_result.expected_price,
            description=(
                f"{target.label}/{base_result.phase.label} ratio: "
                f"{multiplier:.2f}x ({phase_ratio.provenance})"
            ),
        ))

        logger.info(
            f"Estimated {target.label} from {base_result.phase.label}: "
            f"ratio={multiplier:.2f} ({phase_ratio.provenance}), expected={expected_price}"
        )

        return ForecastResult(
            phase=target,
            expected_price=expected_price,
            safe_bid=round_points(base_result.safe_bid * multiplier * safety),
            aggressive_bid=round_points(base_result.aggressive_bid * multiplier),
            minimum_bid=round_points(base_result.minimum_bid * multiplier),
            confidence=base_result.confidence.degraded(),
            data_points=base_result.data_points,
            trend=base_result.trend,
            trend_strength=base_result.trend_strength,
            trend_significant=base_result.trend_significant,
            trend_p_value=base_result.trend_p_value,
            volatility=base_result.volatility,
            demand_pressure=base_result.demand_pressure,
            uncertainty_margin=base_result.uncertainty_margin,
            factors=factors,
            probability_curve=self.curve.build([], [], expected_price, expected_price * base_result.volatility),
            source_phase=base_result.phase,
        )
