"""
Tests for cross-phase estimation.
"""

import pytest

from bid_forecaster.config import DEFAULT_CONFIG
from bid_forecaster.core import (
    Confidence,
    ForecastFactor,
    ForecastResult,
    HistoricalObservation,
    Phase,
    Trend,
)
from bid_forecaster.engine.phase_relationship import (
    PhaseRelationshipEstimator,
    insufficient_result,
)


def make_obs(term, phase, price):
    """Helper to create an observation."""
    return HistoricalObservation(term=term, phase=phase, clearing_price=price)


def make_base_result(**overrides):
    """Helper to create a directly computed phase 1 result."""
    defaults = dict(
        phase=Phase.PHASE_1,
        expected_price=300,
        safe_bid=345,
        aggressive_bid=300,
        minimum_bid=278,
        confidence=Confidence.HIGH,
        data_points=6,
        trend=Trend.STABLE,
        volatility=0.1,
        uncertainty_margin=0.15,
        factors=[ForecastFactor("Professor Rating", 12.0, "Above average rating (5.3)")],
    )
    defaults.update(overrides)
    return ForecastResult(**defaults)


class TestRatios:
    """Tests for observed and default phase ratios."""

    def setup_method(self):
        self.estimator = PhaseRelationshipEstimator(DEFAULT_CONFIG)
        self.defaults = DEFAULT_CONFIG.phase_ratios

    def test_default_ratio_relative_to_phase1(self):
        assert self.estimator.default_ratio(Phase.PHASE_1) == 1.0
        assert self.estimator.default_ratio(Phase.PHASE_2) == pytest.approx(self.defaults.phase2)
        assert self.estimator.default_ratio(Phase.PHASE_4) == pytest.approx(self.defaults.phase4)

    def test_default_ratio_from_phase2(self):
        assert self.estimator.ratio([], Phase.PHASE_1, Phase.PHASE_2).ratio == pytest.approx(
            1.0 / self.defaults.phase2
        )
        assert self.estimator.ratio([], Phase.PHASE_3, Phase.PHASE_2).ratio == pytest.approx(
            self.defaults.phase3 / self.defaults.phase2
        )

    def test_observed_ratios(self):
        observations = [
            make_obs("Fall 2023", Phase.PHASE_1, 100),
            make_obs("Fall 2023", Phase.PHASE_2, 120),
            make_obs("Winter 2024", Phase.PHASE_1, 200),
            make_obs("Winter 2024", Phase.PHASE_2, 220),
            make_obs("Spring 2024", Phase.PHASE_1, 150),
        ]
        ratios = self.estimator.observed_ratios(observations, Phase.PHASE_2, Phase.PHASE_1)
        assert sorted(ratios) == pytest.approx([1.1, 1.2])

    def test_duplicates_are_averaged(self):
        observations = [
            make_obs("Fall 2023", Phase.PHASE_1, 100),
            make_obs("Fall 2023", Phase.PHASE_1, 300),
            make_obs("Fall 2023", Phase.PHASE_3, 100),
        ]
        ratios = self.estimator.observed_ratios(observations, Phase.PHASE_3, Phase.PHASE_1)
        assert ratios == pytest.approx([0.5])

    def test_zero_prices_ignored(self):
        observations = [
            make_obs("Fall 2023", Phase.PHASE_1, 0),
            make_obs("Fall 2023", Phase.PHASE_2, 120),
        ]
        assert self.estimator.observed_ratios(observations, Phase.PHASE_2, Phase.PHASE_1) == []

    def test_median_from_data(self):
        observations = [
            make_obs("Fall 2023", Phase.PHASE_1, 100),
            make_obs("Fall 2023", Phase.PHASE_3, 80),
            make_obs("Winter 2024", Phase.PHASE_1, 100),
            make_obs("Winter 2024", Phase.PHASE_3, 90),
        ]
        ratio = self.estimator.ratio(observations, Phase.PHASE_3, Phase.PHASE_1)
        assert ratio.from_data
        assert ratio.target.shared_terms == 2
        assert ratio.ratio == pytest.approx(0.85)
        assert ratio.provenance == "Phase 3/Phase 1 from 2 shared terms"

    def test_single_shared_term_uses_default(self):
        observations = [
            make_obs("Fall 2023", Phase.PHASE_1, 100),
            make_obs("Fall 2023", Phase.PHASE_3, 50),
        ]
        ratio = self.estimator.ratio(observations, Phase.PHASE_3, Phase.PHASE_1)
        assert not ratio.from_data
        assert ratio.ratio == pytest.approx(self.defaults.phase3)
        assert ratio.provenance == "Phase 3/Phase 1 default estimate"

    def test_phase2_base_uses_observed_phase1_ratio(self):
        # Phase 2 clears at twice phase 1; phase 3 has no history of its own
        observations = [
            make_obs("Fall 2023", Phase.PHASE_1, 100),
            make_obs("Fall 2023", Phase.PHASE_2, 200),
            make_obs("Winter 2024", Phase.PHASE_1, 100),
            make_obs("Winter 2024", Phase.PHASE_2, 200),
            make_obs("Spring 2024", Phase.PHASE_2, 200),
        ]
        ratio = self.estimator.ratio(observations, Phase.PHASE_3, Phase.PHASE_2)
        assert ratio.from_data
        assert not ratio.target.from_data
        assert ratio.base.from_data
        assert ratio.base.ratio == pytest.approx(2.0)
        assert ratio.ratio == pytest.approx(self.defaults.phase3 / 2.0)
        assert ratio.provenance == (
            "Phase 3/Phase 1 default estimate; Phase 2/Phase 1 from 2 shared terms"
        )

    def test_both_sides_observed(self):
        observations = [
            make_obs("Fall 2023", Phase.PHASE_1, 100),
            make_obs("Fall 2023", Phase.PHASE_2, 150),
            make_obs("Fall 2023", Phase.PHASE_4, 60),
            make_obs("Winter 2024", Phase.PHASE_1, 100),
            make_obs("Winter 2024", Phase.PHASE_2, 150),
            make_obs("Winter 2024", Phase.PHASE_4, 60),
        ]
        ratio = self.estimator.ratio(observations, Phase.PHASE_4, Phase.PHASE_2)
        assert ratio.target.from_data and ratio.base.from_data
        assert ratio.ratio == pytest.approx(0.6 / 1.5)


class TestSelectBase:
    """Tests for choosing the base phase."""

    def test_richer_phase_wins(self):
        observations = [
            make_obs("Fall 2023", Phase.PHASE_1, 100),
            make_obs("Fall 2023", Phase.PHASE_2, 120),
            make_obs("Fall 2024", Phase.PHASE_2, 130),
        ]
        assert PhaseRelationshipEstimator.select_base(observations) == Phase.PHASE_2

    def test_tie_prefers_phase1(self):
        observations = [
            make_obs("Fall 2023", Phase.PHASE_1, 100),
            make_obs("Fall 2023", Phase.PHASE_2, 120),
        ]
        assert PhaseRelationshipEstimator.select_base(observations) == Phase.PHASE_1

    def test_no_data_prefers_phase1(self):
        assert PhaseRelationshipEstimator.select_base([]) == Phase.PHASE_1


class TestDerive:
    """Tests for deriving a phase from a base forecast."""

    def setup_method(self):
        self.estimator = PhaseRelationshipEstimator(DEFAULT_CONFIG)
        self.defaults = DEFAULT_CONFIG.phase_ratios

    def test_default_ratio_scaling(self):
        base = make_base_result()
        derived = self.estimator.derive(Phase.PHASE_3, base, [])
        ratio = self.defaults.phase3

        assert derived.phase == Phase.PHASE_3
        assert derived.source_phase == Phase.PHASE_1
        assert derived.is_derived
        assert derived.expected_price == round(300 * ratio)
        assert derived.aggressive_bid == round(300 * ratio)
        assert derived.minimum_bid == round(278 * ratio)
        assert derived.safe_bid == round(345 * ratio * self.defaults.cross_phase_safety)

    def test_confidence_is_degraded(self):
        derived = self.estimator.derive(Phase.PHASE_2, make_base_result(), [])
        assert derived.confidence == Confidence.MEDIUM

        derived_low = self.estimator.derive(Phase.PHASE_2, make_base_result(confidence=Confidence.MEDIUM), [])
        assert derived_low.confidence == Confidence.LOW

    def test_keeps_base_signals(self):
        base = make_base_result(trend=Trend.RISING, trend_strength=0.4, data_points=7)
        derived = self.estimator.derive(Phase.PHASE_4, base, [])
        assert derived.trend == Trend.RISING
        assert derived.trend_strength == 0.4
        assert derived.data_points == 7

    def test_factors_record_derivation(self):
        derived = self.estimator.derive(Phase.PHASE_2, make_base_result(), [])
        assert derived.factors[0].name == "Professor Rating"
        assert derived.factors[-1].name == "Cross-Phase Estimate"
        assert "default estimate" in derived.factors[-1].description

    def test_parametric_curve(self):
        derived = self.estimator.derive(Phase.PHASE_2, make_base_result(), [])
        probabilities = [p.probability for p in derived.probability_curve]
        assert derived.probability_curve
        assert probabilities == sorted(probabilities)

    def test_base_without_data(self):
        derived = self.estimator.derive(Phase.PHASE_2, insufficient_result(Phase.PHASE_1), [])
        assert derived.confidence == Confidence.INSUFFICIENT
        assert derived.expected_price == 0
        assert not derived.is_derived

    def test_derived_base_rejected(self):
        base = make_base_result(source_phase=Phase.PHASE_2)
        with pytest.raises(ValueError):
            self.estimator.derive(Phase.PHASE_3, base, [])


class TestInsufficientResult:
    """Tests for the empty result."""

    def test_all_zero(self):
        result = insufficient_result(Phase.PHASE_4)
        assert result.phase == Phase.PHASE_4
        assert (result.expected_price, result.safe_bid, result.aggressive_bid, result.minimum_bid) == (0, 0, 0, 0)
        assert result.confidence == Confidence.INSUFFICIENT
        assert result.trend == Trend.UNKNOWN
        assert result.factors[0].name == "No Data"
        assert result.probability_curve == []
        assert not result.has_data
