"""
Bid Forecaster

Orchestrates the pipeline for one course:
Observations -> time weighting -> weighted stats + trend -> adjustments
-> expected price -> bid tiers + win probability curve -> ForecastResult

Phases with their own history are forecast directly. Empty phases are then
derived from the richer of phase 1 and phase 2.
"""

import logging
from datetime import date
from typing import Dict, Optional, Sequence

from bid_forecaster.config import ForecastConfig, DEFAULT_CONFIG
from bid_forecaster.core import (
    CompleteForecast,
    CourseContext,
    DemandLevel,
    ForecastEngine,
    ForecastFactor,
    ForecastResult,
    ForecastSummary,
    HistoricalObservation,
    Phase,
    Trend,
)
from bid_forecaster.engine.adjustments import AdjustmentEngine
from bid_forecaster.engine.bids import BidRecommender, round_points
from bid_forecaster.engine.phase_relationship import PhaseRelationshipEstimator, insufficient_result
from bid_forecaster.engine.statistics import WeightedStatistics
from bid_forecaster.engine.strategy import StrategyAdvisor
from bid_forecaster.engine.time_weight import TimeWeightModel
from bid_forecaster.engine.trend import TrendDetector
from bid_forecaster.engine.win_probability import WinProbabilityCurve

logger = logging.getLogger(__name__)


class BidForecaster(ForecastEngine):
    """
    Implementation of the Forecast Engine.

    Stateless apart from its configuration; one instance can forecast any
    number of courses.
    """

    def __init__(self, config: ForecastConfig = DEFAULT_CONFIG):
        self.config = config
        self.time_weights = TimeWeightModel(config)
        self.trend_detector = TrendDetector(config)
        self.adjustments = AdjustmentEngine(config)
        self.recommender = BidRecommender(config)
        self.curve = WinProbabilityCurve(config)
        self.phase_estimator = PhaseRelationshipEstimator(config)
        self.advisor = StrategyAdvisor(config)

    def forecast_phase(
        self,
        phase: Phase,
        observations: Sequence[HistoricalObservation],
        context: CourseContext,
        reference_index: int,
    ) -> ForecastResult:
        """
        Forecast a phase from its own observations.

        Args:
            phase: Phase being forecast
            observations: Observations of that phase (at least one)
            context: Course covariates (rating, meeting time, campus)
            reference_index: Term ordinal treated as "now"

        Returns:
            Directly computed ForecastResult
        """
        if not observations:
            raise ValueError(f"No observations for {phase.label}; derive it instead")

        term_weights = self.time_weights.weigh_series([obs.term for obs in observations], reference_index)
        prices = [obs.clearing_price * tw.inflation_factor for obs, tw in zip(observations, term_weights)]
        weights = [tw.decay_weight for tw in term_weights]

        stats = WeightedStatistics.from_series(prices, weights)

        # Only terms that can be placed in time take part in the regression
        dated = [i for i, tw in enumerate(term_weights) if tw.is_parsed]
        trend = self.trend_detector.detect(
            [prices[i] for i in dated],
            [term_weights[i].term_index for i in dated],
            [weights[i] for i in dated],
        )

        summary = self.adjustments.combine(
            trend,
            observations,
            weights,
            rating=context.rating,
            meeting_time=context.meeting_time,
            campus=context.campus,
        )
        total_multiplier = summary.total_multiplier
        base_price = stats.mean

        expected_price = round_points(base_price * total_multiplier)
        volatility = stats.coefficient_of_variation
        bids = self.recommender.recommend(expected_price, len(prices), volatility)

        curve = self.curve.build(
            [p * total_multiplier for p in prices],
            weights,
            expected_price,
            stats.std_dev * total_multiplier,
        )

        factors = summary.factors(base_price)
        if trend.is_significant and trend.trend is not Trend.STABLE:
            factors.append(ForecastFactor(
                name="Trend Significance",
                impact=0.0,
                description=f"Trend is statistically significant (p={trend.p_value:.3f})",
            ))

        logger.info(
            f"{phase.label}: {len(prices)} observations, mean={base_price:.1f}, "
            f"multiplier={total_multiplier:.3f}, expected={expected_price}, trend={trend.trend.value}"
        )

        return ForecastResult(
            phase=phase,
            expected_price=expected_price,
            safe_bid=bids.safe_bid,
            aggressive_bid=bids.aggressive_bid,
            minimum_bid=bids.minimum_bid,
            confidence=bids.confidence,
            data_points=len(prices),
            trend=trend.trend,
            trend_strength=trend.strength,
            trend_significant=trend.is_significant,
            trend_p_value=trend.p_value,
            volatility=volatility,
            demand_pressure=summary.demand.pressure,
            uncertainty_margin=bids.uncertainty_margin,
            factors=factors,
            probability_curve=curve,
        )

    def forecast(
        self,
        context: CourseContext,
        reference_term: Optional[str] = None,
        today: Optional[date] = None,
    ) -> CompleteForecast:
        """
        Forecast all four phases for a course.

        Args:
            context: Course history and covariates
            reference_term: Term treated as "now" (e.g. "Fall 2025")
            today: Date used to derive "now" when no reference term is given

        Returns:
            CompleteForecast; never raises for sparse or missing data
        """
        reference_index = self.time_weights.reference_index(reference_term, today)

        # A zero clearing price means the price was not reported
        priced = [obs for obs in context.observations if obs.clearing_price > 0]

        direct: Dict[Phase, ForecastResult] = {}
        for phase in Phase:
            observations = [obs for obs in priced if obs.phase is phase]
            if observations:
                direct[phase] = self.forecast_phase(phase, observations, context, reference_index)

        base_phase = self.phase_estimator.select_base(priced)
        base_result = direct.get(base_phase)

        forecasts: Dict[Phase, ForecastResult] = {}
        for phase in Phase:
            if phase in direct:
                forecasts[phase] = direct[phase]
            elif base_result is None:
                forecasts[phase] = insufficient_result(phase)
            else:
                forecasts[phase] = self.phase_estimator.derive(phase, base_result, context.observations)

        if not direct:
            logger.warning(f"No historical data for {context.course_id or 'course'} / {context.professor or 'professor'}")

        return CompleteForecast(
            course_id=context.course_id,
            professor=context.professor,
            forecasts=forecasts,
            overall_recommendation=self.advisor.recommendation(forecasts),
            strategy_notes=self.advisor.notes(forecasts, context.rating),
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def generate_forecast(
    context: CourseContext,
    config: ForecastConfig = DEFAULT_CONFIG,
    reference_term: Optional[str] = None,
) -> CompleteForecast:
    """
    Convenience function to forecast a course with the given config.

    Args:
        context: Course history and covariates
        config: Model configuration (default: DEFAULT_CONFIG)
        reference_term: Term treated as "now"

    Returns:
        CompleteForecast for all four phases
    """
    return BidForecaster(config).forecast(context, reference_term=reference_term)


def summarize_forecast(forecast: CompleteForecast) -> ForecastSummary:
    """Condense a CompleteForecast into per-phase safe bids and headline signals."""
    phase1 = forecast.phase1
    return ForecastSummary(
        safe_bids={phase: result.safe_bid for phase, result in forecast.forecasts.items()},
        confidence=phase1.confidence,
        trend=phase1.trend,
        demand_level=DemandLevel.from_pressure(phase1.demand_pressure),
        strategy_notes=list(forecast.strategy_notes),
        phase1_curve=list(phase1.probability_curve),
        phase2_curve=list(forecast.phase2.probability_curve),
    )
