"""
Tests for the special function approximations.
"""

import math

import pytest

from bid_forecaster.engine.special_functions import (
    erf,
    log_gamma,
    log_beta,
    incomplete_beta,
    student_t_cdf,
    normal_cdf,
    lognormal_cdf,
)


# =============================================================================
# ERROR FUNCTION TESTS
# =============================================================================


class TestErf:
    """Tests for the Abramowitz-Stegun error function."""

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 1.5, 2.0, 3.0])
    def test_matches_math_erf(self, x):
        assert abs(erf(x) - math.erf(x)) < 2e-7

    def test_odd_symmetry(self):
        assert erf(-0.7) == pytest.approx(-erf(0.7))

    def test_near_zero_at_origin(self):
        assert abs(erf(0.0)) < 1e-8

    def test_saturates(self):
        assert erf(10.0) == pytest.approx(1.0)
        assert erf(-10.0) == pytest.approx(-1.0)


# =============================================================================
# GAMMA / BETA TESTS
# =============================================================================


class TestLogGamma:
    """Tests for the Lanczos log-gamma."""

    @pytest.mark.parametrize("x", [0.3, 0.5, 1.0, 2.5, 10.0, 50.0])
    def test_matches_math_lgamma(self, x):
        assert abs(log_gamma(x) - math.lgamma(x)) < 1e-9

    def test_factorial(self):
        # Gamma(6) = 5! = 120
        assert math.exp(log_gamma(6.0)) == pytest.approx(120.0, rel=1e-10)

    def test_log_beta(self):
        # B(2, 3) = 1! 2! / 4! = 1/12
        assert math.exp(log_beta(2.0, 3.0)) == pytest.approx(1.0 / 12.0, rel=1e-10)


class TestIncompleteBeta:
    """Tests for the regularized incomplete beta."""

    def test_boundaries(self):
        assert incomplete_beta(0.0, 2.0, 3.0) == 0.0
        assert incomplete_beta(1.0, 2.0, 3.0) == 1.0

    def test_uniform_case(self):
        # I_x(1, 1) = x
        assert incomplete_beta(0.3, 1.0, 1.0) == pytest.approx(0.3, abs=1e-8)

    def test_power_case(self):
        # I_x(2, 1) = x^2
        assert incomplete_beta(0.6, 2.0, 1.0) == pytest.approx(0.36, abs=1e-8)

    def test_symmetry_relation(self):
        # I_x(a, b) = 1 - I_{1-x}(b, a)
        left = incomplete_beta(0.4, 2.5, 3.0)
        right = 1.0 - incomplete_beta(0.6, 3.0, 2.5)
        assert left == pytest.approx(right, abs=1e-8)

    def test_arcsine_case(self):
        # I_x(1/2, 1/2) = (2/pi) asin(sqrt(x))
        expected = 2.0 / math.pi * math.asin(math.sqrt(0.2))
        assert incomplete_beta(0.2, 0.5, 0.5) == pytest.approx(expected, abs=1e-8)


# =============================================================================
# DISTRIBUTION TESTS
# =============================================================================


class TestStudentT:
    """Tests for the Student's t CDF."""

    def test_center(self):
        assert student_t_cdf(0.0, 5.0) == pytest.approx(0.5)

    def test_cauchy_case(self):
        # df = 1 is the Cauchy distribution
        expected = 0.5 + math.atan(2.0) / math.pi
        assert student_t_cdf(2.0, 1.0) == pytest.approx(expected, abs=1e-6)

    def test_two_degrees_of_freedom(self):
        t = 1.5
        expected = 0.5 + t / (2.0 * math.sqrt(2.0 + t * t))
        assert student_t_cdf(t, 2.0) == pytest.approx(expected, abs=1e-6)

    def test_symmetry(self):
        assert student_t_cdf(-1.3, 4.0) == pytest.approx(1.0 - student_t_cdf(1.3, 4.0), abs=1e-9)

    def test_large_df_is_normal(self):
        assert student_t_cdf(1.96, 100.0) == pytest.approx(0.975, abs=1e-3)

    def test_heavier_tails_than_normal(self):
        assert student_t_cdf(2.0, 3.0) < student_t_cdf(2.0, 100.0)

    def test_infinite_statistic(self):
        assert student_t_cdf(math.inf, 1.0) == 1.0
        assert student_t_cdf(-math.inf, 1.0) == 0.0


class TestNormalCdf:
    """Tests for the normal CDF."""

    def test_at_mean(self):
        assert normal_cdf(50.0, 50.0, 5.0) == pytest.approx(0.5, abs=1e-8)

    def test_one_sigma(self):
        assert normal_cdf(55.0, 50.0, 5.0) == pytest.approx(0.8413, abs=1e-4)

    def test_degenerate(self):
        assert normal_cdf(49.0, 50.0, 0.0) == 0.0
        assert normal_cdf(50.0, 50.0, 0.0) == 1.0


class TestLognormalCdf:
    """Tests for the moment-matched log-normal CDF."""

    def test_non_positive_inputs(self):
        assert lognormal_cdf(0.0, 100.0, 20.0) == 0.0
        assert lognormal_cdf(-5.0, 100.0, 20.0) == 0.0
        assert lognormal_cdf(50.0, 0.0, 20.0) == 0.0

    def test_median_is_half(self):
        # Median of the moment-matched log-normal is mean / sqrt(1 + cv^2)
        mean, std = 100.0, 20.0
        median = mean / math.sqrt(1.0 + (std / mean) ** 2)
        assert lognormal_cdf(median, mean, std) == pytest.approx(0.5, abs=1e-6)

    def test_mean_above_median(self):
        assert lognormal_cdf(100.0, 100.0, 20.0) > 0.5

    def test_monotonic(self):
        values = [lognormal_cdf(x, 100.0, 30.0) for x in range(10, 300, 10)]
        assert values == sorted(values)
