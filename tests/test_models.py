"""
Tests for the core data models.
"""

import math

import pytest

from bid_forecaster.core import (
    Confidence,
    CourseContext,
    DemandLevel,
    ForecastResult,
    HistoricalObservation,
    InvalidInputError,
    Phase,
    ProfessorSignal,
)


class TestPhase:
    """Tests for phase label parsing."""

    @pytest.mark.parametrize("label,phase", [
        ("1", Phase.PHASE_1),
        ("Phase 2", Phase.PHASE_2),
        ("round 3", Phase.PHASE_3),
        ("PWYB", Phase.PHASE_4),
        ("Pay What You Bid", Phase.PHASE_4),
        ("Add/Drop", Phase.PHASE_4),
        (" 4 ", Phase.PHASE_4),
        (Phase.PHASE_2, Phase.PHASE_2),
    ])
    def test_from_label(self, label, phase):
        assert Phase.from_label(label) == phase

    @pytest.mark.parametrize("label", ["Year-Long", "Unknown", "5"])
    def test_unknown_label(self, label):
        with pytest.raises(InvalidInputError):
            Phase.from_label(label)

    def test_labels(self):
        assert Phase.PHASE_1.label == "Phase 1"
        assert Phase.PHASE_4.label == "PWYB"

    def test_direct_phases(self):
        assert [p for p in Phase if p.is_direct] == [Phase.PHASE_1, Phase.PHASE_2]


class TestConfidence:
    """Tests for confidence degradation."""

    def test_degraded(self):
        assert Confidence.HIGH.degraded() == Confidence.MEDIUM
        assert Confidence.MEDIUM.degraded() == Confidence.LOW
        assert Confidence.LOW.degraded() == Confidence.LOW
        assert Confidence.INSUFFICIENT.degraded() == Confidence.INSUFFICIENT


class TestDemandLevel:
    """Tests for demand buckets."""

    @pytest.mark.parametrize("pressure,level", [
        (0.9, DemandLevel.VERY_HIGH),
        (0.7, DemandLevel.HIGH),
        (0.5, DemandLevel.MODERATE),
        (0.2, DemandLevel.LOW),
    ])
    def test_from_pressure(self, pressure, level):
        assert DemandLevel.from_pressure(pressure) == level


class TestHistoricalObservation:
    """Tests for observation validation."""

    def test_phase_label_is_normalized(self):
        obs = HistoricalObservation(term="Fall 2024", phase="PWYB", clearing_price=50)
        assert obs.phase is Phase.PHASE_4

    def test_invalid_error_is_value_error(self):
        assert issubclass(InvalidInputError, ValueError)

    @pytest.mark.parametrize("kwargs", [
        {"clearing_price": -1},
        {"clearing_price": math.nan},
        {"clearing_price": 10, "seats_available": -2},
        {"clearing_price": 10, "bids_placed": -5},
    ])
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(InvalidInputError):
            HistoricalObservation(term="Fall 2024", phase=Phase.PHASE_1, **kwargs)

    def test_zero_price_allowed(self):
        obs = HistoricalObservation(term="Fall 2024", phase=Phase.PHASE_1, clearing_price=0)
        assert obs.clearing_price == 0

    def test_demand_ratio(self):
        obs = HistoricalObservation("Fall 2024", Phase.PHASE_1, 100, seats_available=20, bids_placed=50)
        assert obs.demand_ratio == pytest.approx(2.5)

    def test_demand_ratio_unreported(self):
        assert HistoricalObservation("Fall 2024", Phase.PHASE_1, 100, seats_available=20).demand_ratio is None


class TestProfessorSignal:
    """Tests for rating validation."""

    def test_unrated(self):
        assert not ProfessorSignal(rating=0).is_rated

    @pytest.mark.parametrize("rating", [0.5, 6.5, math.nan])
    def test_out_of_range(self, rating):
        with pytest.raises(InvalidInputError):
            ProfessorSignal(rating=rating)


class TestCourseContext:
    """Tests for the course context container."""

    def test_observations_become_tuple(self):
        obs = HistoricalObservation("Fall 2024", Phase.PHASE_1, 100)
        context = CourseContext(course_id="X", professor="Y", observations=[obs])
        assert context.observations == (obs,)

    def test_rejects_foreign_objects(self):
        with pytest.raises(InvalidInputError):
            CourseContext(course_id="X", professor="Y", observations=[{"price": 100}])

    def test_for_phase(self):
        p1 = HistoricalObservation("Fall 2024", Phase.PHASE_1, 100)
        p2 = HistoricalObservation("Fall 2024", Phase.PHASE_2, 130)
        context = CourseContext(course_id="X", professor="Y", observations=[p1, p2])
        assert context.for_phase(Phase.PHASE_2) == [p2]
        assert context.for_phase(Phase.PHASE_3) == []

    def test_rating(self):
        context = CourseContext(course_id="X", professor="Y", professor_signal=ProfessorSignal(rating=5.4))
        assert context.rating == 5.4
        assert CourseContext(course_id="X", professor="Y").rating is None


class TestForecastResult:
    """Tests for result helpers."""

    def test_has_data(self):
        result = ForecastResult(Phase.PHASE_1, 120, 140, 120, 110, Confidence.LOW, 1)
        assert result.has_data
        assert not result.is_derived

    def test_derived(self):
        result = ForecastResult(Phase.PHASE_3, 90, 100, 90, 80, Confidence.LOW, 3, source_phase=Phase.PHASE_1)
        assert result.is_derived
