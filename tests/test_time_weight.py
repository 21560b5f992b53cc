"""
Tests for term parsing, recency decay and inflation.
"""

import math
from dataclasses import replace
from datetime import date

import pytest

from bid_forecaster.config import DEFAULT_CONFIG
from bid_forecaster.engine.time_weight import (
    TimeWeightModel,
    UNPARSED_TERM,
    parse_term,
    term_for_date,
)


# =============================================================================
# TERM PARSING TESTS
# =============================================================================


class TestParseTerm:
    """Tests for term token parsing."""

    def test_fall(self):
        assert parse_term("Fall 2024") == 2024 * 4 + 3

    def test_case_insensitive(self):
        assert parse_term("spring 2023") == 2023 * 4 + 1

    def test_embedded_token(self):
        assert parse_term("Term: Winter 2022 (Kellogg)") == 2022 * 4

    def test_seasons_are_ordered(self):
        terms = ["Winter 2024", "Spring 2024", "Summer 2024", "Fall 2024", "Winter 2025"]
        ordinals = [parse_term(t) for t in terms]
        assert ordinals == sorted(ordinals)
        assert len(set(ordinals)) == len(ordinals)

    @pytest.mark.parametrize("term", ["TBD", "", None, "Fall2024", "2024 Fall"])
    def test_unparsable(self, term):
        assert parse_term(term) == UNPARSED_TERM


class TestTermForDate:
    """Tests for mapping dates to terms."""

    @pytest.mark.parametrize("month,season", [(2, 0), (3, 0), (5, 1), (7, 2), (8, 2), (10, 3), (12, 3)])
    def test_month_to_season(self, month, season):
        assert term_for_date(date(2025, month, 1)) == 2025 * 4 + season


# =============================================================================
# TIME WEIGHT MODEL TESTS
# =============================================================================


class TestTimeWeightModel:
    """Tests for decay weights and inflation factors."""

    def setup_method(self):
        self.config = DEFAULT_CONFIG
        self.model = TimeWeightModel(self.config)
        self.reference = parse_term("Fall 2025")

    def test_current_term(self):
        weight = self.model.weigh("Fall 2025", self.reference)
        assert weight.years_ago == 0.0
        assert weight.decay_weight == pytest.approx(1.0)
        assert weight.inflation_factor == pytest.approx(1.0)

    def test_one_year_ago(self):
        weight = self.model.weigh("Fall 2024", self.reference)
        assert weight.years_ago == pytest.approx(1.0)
        assert weight.decay_weight == pytest.approx(math.exp(-self.config.time_decay_factor))
        assert weight.inflation_factor == pytest.approx(1.0 + self.config.inflation_rate)

    def test_quarter_year_steps(self):
        weight = self.model.weigh("Spring 2025", self.reference)
        assert weight.years_ago == pytest.approx(0.5)

    def test_older_terms_weigh_less(self):
        recent = self.model.weigh("Spring 2025", self.reference)
        old = self.model.weigh("Spring 2021", self.reference)
        assert old.decay_weight < recent.decay_weight
        assert old.inflation_factor > recent.inflation_factor

    def test_future_term_counts_as_current(self):
        weight = self.model.weigh("Winter 2027", self.reference)
        assert weight.years_ago == 0.0
        assert weight.decay_weight == pytest.approx(1.0)

    def test_unparsed_term_is_oldest(self):
        weight = self.model.weigh("TBD", self.reference)
        assert not weight.is_parsed
        assert weight.years_ago == self.config.max_age_years
        assert weight.decay_weight == pytest.approx(
            math.exp(-self.config.time_decay_factor * self.config.max_age_years)
        )
        assert weight.inflation_factor == 1.0

    def test_no_decay(self):
        model = TimeWeightModel(replace(DEFAULT_CONFIG, time_decay_factor=0.0))
        assert model.weigh("Fall 2015", self.reference).decay_weight == 1.0

    def test_series_with_only_recent_terms(self):
        weights = self.model.weigh_series(["Fall 2024", "???"], self.reference)
        assert weights[0].years_ago == 1.0
        assert weights[1].years_ago == self.config.max_age_years

    def test_unparsed_never_outweighs_older_dated_term(self):
        weights = self.model.weigh_series(["Fall 2012", "???", "Spring 2025"], self.reference)
        dated_old, unparsed, recent = weights

        assert dated_old.years_ago == 13.0
        assert unparsed.years_ago == dated_old.years_ago
        assert unparsed.decay_weight <= dated_old.decay_weight
        assert unparsed.decay_weight < recent.decay_weight
        assert unparsed.inflation_factor == 1.0


class TestReferenceIndex:
    """Tests for resolving the current term."""

    def test_explicit_term(self):
        model = TimeWeightModel()
        assert model.reference_index("Spring 2026") == parse_term("Spring 2026")

    def test_falls_back_to_today(self):
        model = TimeWeightModel()
        today = date(2025, 10, 18)
        assert model.reference_index(None, today=today) == term_for_date(today)

    def test_unparsable_reference(self):
        model = TimeWeightModel()
        today = date(2025, 4, 2)
        assert model.reference_index("next term", today=today) == 2025 * 4 + 1
