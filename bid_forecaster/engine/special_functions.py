"""
Special Functions

Numeric approximations used by the statistics in the engine:
- Error function (Abramowitz & Stegun 7.1.26, absolute error <= 1.5e-7)
- Log-gamma (Lanczos, g=7, ~15 significant digits)
- Regularized incomplete beta (continued fraction, modified Lentz)
- Student's t, normal and log-normal CDFs built on the above

Nothing here knows about courses or bids.
"""

import math

# Abramowitz & Stegun 7.1.26 coefficients
_ERF_P = 0.3275911
_ERF_A = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)

# Lanczos coefficients for g = 7, n = 9
_LANCZOS_G = 7
_LANCZOS_COEFFICIENTS = (
    0.99999999999980993,
    676.5203681218851,
    -1259.1392167224028,
    771.32342877765313,
    -176.61502916214059,
    12.507343278686905,
    -0.13857109526572012,
    9.9843695780195716e-6,
    1.5056327351493116e-7,
)

BETA_CF_MAX_ITERATIONS = 100
BETA_CF_EPSILON = 1e-10     # convergence tolerance
BETA_CF_FLOOR = 1e-30       # keeps Lentz denominators away from zero

# Above this many degrees of freedom the t distribution is treated as normal
T_NORMAL_LIMIT_DF = 30


def erf(x: float) -> float:
    """
    Error function approximation (Abramowitz and Stegun 7.1.26).

    Odd-symmetric; maximum absolute error 1.5e-7.
    """
    sign = 1.0 if x >= 0 else -1.0
    x = abs(x)

    t = 1.0 / (1.0 + _ERF_P * x)
    a1, a2, a3, a4, a5 = _ERF_A
    poly = ((((a5 * t + a4) * t + a3) * t + a2) * t + a1) * t
    return sign * (1.0 - poly * math.exp(-x * x))


def log_gamma(x: float) -> float:
    """
    Natural log of the gamma function (Lanczos approximation).

    Uses the reflection formula below 0.5. Defined for x > 0.
    """
    if x < 0.5:
        return math.log(math.pi / math.sin(math.pi * x)) - log_gamma(1.0 - x)

    x -= 1.0
    a = _LANCZOS_COEFFICIENTS[0]
    for i in range(1, _LANCZOS_G + 2):
        a += _LANCZOS_COEFFICIENTS[i] / (x + i)
    t = x + _LANCZOS_G + 0.5
    return 0.5 * math.log(2.0 * math.pi) + (x + 0.5) * math.log(t) - t + math.log(a)


def log_beta(a: float, b: float) -> float:
    """Natural log of the beta function B(a, b)."""
    return log_gamma(a) + log_gamma(b) - log_gamma(a + b)


def _beta_continued_fraction(x: float, a: float, b: float) -> float:
    """Continued fraction for the incomplete beta, evaluated with modified Lentz."""
    qab = a + b
    qap = a + 1.0
    qam = a - 1.0

    c = 1.0
    d = 1.0 - qab * x / qap
    if abs(d) < BETA_CF_FLOOR:
        d = BETA_CF_FLOOR
    d = 1.0 / d
    h = d

    for m in range(1, BETA_CF_MAX_ITERATIONS + 1):
        m2 = 2 * m

        # Even step
        aa = m * (b - m) * x / ((qam + m2) * (a + m2))
        d = 1.0 + aa * d
        if abs(d) < BETA_CF_FLOOR:
            d = BETA_CF_FLOOR
        c = 1.0 + aa / c
        if abs(c) < BETA_CF_FLOOR:
            c = BETA_CF_FLOOR
        d = 1.0 / d
        h *= d * c

        # Odd step
        aa = -(a + m) * (qab + m) * x / ((a + m2) * (qap + m2))
        d = 1.0 + aa * d
        if abs(d) < BETA_CF_FLOOR:
            d = BETA_CF_FLOOR
        c = 1.0 + aa / c
        if abs(c) < BETA_CF_FLOOR:
            c = BETA_CF_FLOOR
        d = 1.0 / d
        delta = d * c
        h *= delta

        if abs(delta - 1.0) < BETA_CF_EPSILON:
            break

    return h


def incomplete_beta(x: float, a: float, b: float) -> float:
    """
    Regularized incomplete beta function I_x(a, b).

    Args:
        x: Upper integration limit in [0, 1]
        a: First shape parameter (> 0)
        b: Second shape parameter (> 0)

    Returns:
        I_x(a, b) in [0, 1]
    """
    if x <= 0.0:
        return 0.0
    if x >= 1.0:
        return 1.0

    # Prefactor x^a (1-x)^b / B(a, b)
    front = math.exp(a * math.log(x) + b * math.log(1.0 - x) - log_beta(a, b))

    # The continued fraction converges fastest on this side of the mean
    if x < (a + 1.0) / (a + b + 2.0):
        return front * _beta_continued_fraction(x, a, b) / a
    return 1.0 - front * _beta_continued_fraction(1.0 - x, b, a) / b


def student_t_cdf(t: float, df: float) -> float:
    """
    Cumulative distribution function of Student's t.

    Uses the exact incomplete beta relation for small df and the normal
    limit above T_NORMAL_LIMIT_DF degrees of freedom.

    Args:
        t: The t statistic
        df: Degrees of freedom (> 0, need not be an integer)

    Returns:
        P(T <= t)
    """
    if math.isinf(t):
        return 1.0 if t > 0 else 0.0

    if df > T_NORMAL_LIMIT_DF:
        return 0.5 * (1.0 + erf(t / math.sqrt(2.0)))

    x = df / (df + t * t)
    tail = 0.5 * incomplete_beta(x, df / 2.0, 0.5)
    return 1.0 - tail if t >= 0 else tail


def normal_cdf(x: float, mean: float, std_dev: float) -> float:
    """
    Cumulative distribution function of a normal distribution.

    Args:
        x: The value to evaluate
        mean: Distribution mean
        std_dev: Distribution standard deviation

    Returns:
        Probability that a random variable is less than or equal to x
    """
    if std_dev <= 0:
        # Degenerate case: all probability mass at mean
        return 1.0 if x >= mean else 0.0

    z = (x - mean) / std_dev
    return 0.5 * (1.0 + erf(z / math.sqrt(2.0)))


def lognormal_cdf(x: float, mean: float, std_dev: float) -> float:
    """
    Log-normal CDF parameterised by the mean and std dev of the variable itself.

    The (mean, std_dev) pair is moment-matched to log-space (mu, sigma):
        sigma^2 = ln(1 + std_dev^2 / mean^2)
        mu      = ln(mean) - sigma^2 / 2
    """
    if x <= 0 or mean <= 0:
        return 0.0
    if std_dev <= 0:
        return 1.0 if x >= mean else 0.0

    sigma_sq = math.log(1.0 + (std_dev * std_dev) / (mean * mean))
    sigma = math.sqrt(sigma_sq)
    mu = math.log(mean) - 0.5 * sigma_sq

    z = (math.log(x) - mu) / (sigma * math.sqrt(2.0))
    return 0.5 * (1.0 + erf(z))
