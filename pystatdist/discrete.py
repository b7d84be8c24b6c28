"""Discrete distributions on consecutive integers.

Cumulative probabilities are expressed through the regularized incomplete
beta and gamma functions, which give both tails directly. Binomial and
Poisson probabilities use the saddle-point expansion of Loader (2000).
Unbounded supports end at ``INT_MAX``.
"""

import math
import operator

import numpy as np

from .base import DiscreteDistribution
from .exceptions import (
    INVALID_NON_ZERO_PROBABILITY,
    INVALID_RANGE_LOW_GT_HIGH,
    NEGATIVE,
    NOT_STRICTLY_POSITIVE,
    TOO_LARGE,
    DistributionError,
)
from .special import (
    log_gamma,
    regularized_beta,
    regularized_beta_complement,
    regularized_gamma_p,
    regularized_gamma_q,
)
from .utils import HALF_LOG_TWO_PI, INT_MAX, check_probability, require_strictly_positive

__all__ = [
    "BinomialDistribution",
    "PoissonDistribution",
    "GeometricDistribution",
    "PascalDistribution",
    "UniformDiscreteDistribution",
    "HypergeometricDistribution",
    "ZipfDistribution",
]


def _check_non_zero_probability(p: float) -> float:
    if not 0 < p <= 1:
        raise DistributionError(INVALID_NON_ZERO_PROBABILITY, p)
    return float(p)


# Stirling error log(z!) - log(sqrt(2 pi z) (z/e)**z) for z = 0..15
_STIRLING_ERRORS = (
    0.0,
    0.0810614667953272582196702,
    0.0413406959554092940938221,
    0.02767792568499833914878929,
    0.02079067210376509311152277,
    0.01664469118982119216319487,
    0.01387612882307074799874573,
    0.01189670994589177009505572,
    0.010411265261972096497478567,
    0.009255462182712732917728637,
    0.008330563433362871256469318,
    0.007573675487951840794972024,
    0.006942840107209529865664152,
    0.006408994188004207068439631,
    0.005951370112758847735624416,
    0.005554733551962801371038690,
)


def _stirling_error(z: int) -> float:
    if z < len(_STIRLING_ERRORS):
        return _STIRLING_ERRORS[z]
    z2 = float(z) * z
    return (
        0.083333333333333333333
        - (
            0.00277777777777777777778
            - (
                0.00079365079365079365079365
                - (0.000595238095238095238095238 - 0.0008417508417508417508417508 / z2) / z2
            )
            / z2
        )
        / z2
    ) / z


def _deviance_part(x: int, mu: float) -> float:
    r"""
    Deviance term $x \log(x/\mu) + \mu - x$.

    Close to ``mu`` the term is summed as a series in
    $v = (x - \mu) / (x + \mu)$, which avoids the cancellation of the
    direct form.
    """
    if abs(x - mu) < 0.1 * (x + mu):
        d = x - mu
        v = d / (x + mu)
        s1 = v * d
        s = math.nan
        ej = 2.0 * x * v
        v *= v
        j = 1
        while s1 != s:
            s = s1
            ej *= v
            s1 = s + ej / (2 * j + 1)
            j += 1
        return s1
    if x == 0:
        return mu
    return x * math.log(x / mu) + mu - x


def _log_binomial_probability(x: int, n: int, p: float, q: float) -> float:
    """Saddle-point expansion of the binomial log probability (Loader, 2000)."""
    if x == 0:
        if p < 0.1:
            return 0.0 - _deviance_part(n, n * q) - n * p
        if n == 0:
            return 0.0
        return n * math.log(q)
    if x == n:
        if q < 0.1:
            return 0.0 - _deviance_part(n, n * p) - n * q
        return n * math.log(p)
    nmx = n - x
    ret = (
        _stirling_error(n)
        - _stirling_error(x)
        - _stirling_error(nmx)
        - _deviance_part(x, n * p)
        - _deviance_part(nmx, n * q)
    )
    return ret - 0.5 * math.log(2 * math.pi * x * nmx / n)


def _log_poisson_probability(x: int, mean: float) -> float:
    """Saddle-point expansion of the Poisson log probability."""
    if x == 0:
        return -mean
    return (
        -_stirling_error(x) - _deviance_part(x, mean) - HALF_LOG_TWO_PI - 0.5 * math.log(x)
    )


class BinomialDistribution(DiscreteDistribution):
    r"""Binomial Distribution

    Number of successes in ``n`` independent trials with success
    probability ``p``.

    $$
    P(X \le k) = 1 - I_p(k + 1, n - k)
    $$

    The support collapses to ``{0}`` when ``p == 0`` and to ``{n}`` when
    ``p == 1``.
    """

    _params = ("n", "p")

    def __init__(self, n: int, p: float):
        n = operator.index(n)
        if n < 0:
            raise DistributionError(NEGATIVE, n)
        check_probability(p)
        self._n = n
        self._p = float(p)

    @property
    def n(self) -> int:
        return self._n

    @property
    def p(self) -> float:
        return self._p

    @property
    def lower(self):
        return 0 if self._p < 1 else self._n

    @property
    def upper(self):
        return self._n if self._p > 0 else 0

    def _logpmf(self, k):
        return _log_binomial_probability(k, self._n, self._p, 1.0 - self._p)

    def _pmf(self, k):
        return math.exp(self._logpmf(k))

    def _cdf(self, k):
        return regularized_beta_complement(self._p, k + 1, self._n - k)

    def _sf(self, k):
        return regularized_beta(self._p, k + 1, self._n - k)

    def mean(self):
        return self._n * self._p

    def var(self):
        return self._n * self._p * (1 - self._p)


class PoissonDistribution(DiscreteDistribution):
    """Poisson distribution with the given ``mean``."""

    _params = ("mean",)

    def __init__(self, mean: float):
        self._mean = float(require_strictly_positive(mean))

    @property
    def lower(self):
        return 0

    @property
    def upper(self):
        return INT_MAX

    def _logpmf(self, k):
        return _log_poisson_probability(k, self._mean)

    def _pmf(self, k):
        return math.exp(self._logpmf(k))

    def _cdf(self, k):
        return regularized_gamma_q(k + 1, self._mean)

    def _sf(self, k):
        return regularized_gamma_p(k + 1, self._mean)

    def mean(self):
        return self._mean

    def var(self):
        return self._mean


class GeometricDistribution(DiscreteDistribution):
    """
    Number of failures before the first success, with success probability ``p``.

    Quantiles have a closed form; the estimate is checked against the CDF and
    moved by one where rounding put it on the wrong side of a step.
    """

    _params = ("p",)

    def __init__(self, p: float):
        self._p = _check_non_zero_probability(p)
        self._log_p = math.log(self._p)
        self._log1m_p = math.log1p(-self._p) if self._p < 1 else -math.inf

    @property
    def p(self) -> float:
        return self._p

    @property
    def lower(self):
        return 0

    @property
    def upper(self):
        return INT_MAX if self._p < 1 else 0

    def _pmf(self, k):
        if k == 0:
            return self._p
        return math.exp(self._log1m_p * k) * self._p

    def _logpmf(self, k):
        if k == 0:
            return self._log_p
        return k * self._log1m_p + self._log_p

    def _cdf(self, k):
        return -math.expm1(self._log1m_p * (k + 1))

    def _sf(self, k):
        return math.exp(self._log1m_p * (k + 1))

    def _estimate(self, log_q):
        t = math.ceil(log_q / self._log1m_p - 1)
        return int(min(max(0, t), self.upper))

    def _ppf(self, p):
        k = self._estimate(math.log1p(-p))
        if self.cdf(k) < p:
            k += 1
        elif k > 0 and self.cdf(k - 1) >= p:
            k -= 1
        return k

    def _isf(self, q):
        k = self._estimate(math.log(q))
        if self.sf(k) > q:
            k += 1
        elif k > 0 and self.sf(k - 1) <= q:
            k -= 1
        return k

    def mean(self):
        return (1 - self._p) / self._p

    def var(self):
        return (1 - self._p) / (self._p * self._p)


class PascalDistribution(DiscreteDistribution):
    r"""Pascal (negative binomial) Distribution

    Number of failures before the ``r``-th success.

    $$
    P(X \le k) = I_p(r, k + 1)
    $$
    """

    _params = ("r", "p")

    def __init__(self, r: int, p: float):
        r = operator.index(r)
        if r <= 0:
            raise DistributionError(NOT_STRICTLY_POSITIVE, r)
        self._r = r
        self._p = _check_non_zero_probability(p)
        self._log_norm = r * math.log(self._p) - log_gamma(r)
        self._log1m_p = math.log1p(-self._p) if self._p < 1 else -math.inf

    @property
    def r(self) -> int:
        return self._r

    @property
    def p(self) -> float:
        return self._p

    @property
    def lower(self):
        return 0

    @property
    def upper(self):
        return INT_MAX if self._p < 1 else 0

    def _logpmf(self, k):
        if k == 0:
            return self._r * math.log(self._p)
        return (
            log_gamma(k + self._r)
            - log_gamma(k + 1)
            + self._log_norm
            + k * self._log1m_p
        )

    def _pmf(self, k):
        return math.exp(self._logpmf(k))

    def _cdf(self, k):
        return regularized_beta(self._p, self._r, k + 1)

    def _sf(self, k):
        return regularized_beta_complement(self._p, self._r, k + 1)

    def mean(self):
        return self._r * (1 - self._p) / self._p

    def var(self):
        return self._r * (1 - self._p) / (self._p * self._p)


class UniformDiscreteDistribution(DiscreteDistribution):
    """Uniform distribution on the integers ``lower..upper`` inclusive."""

    _params = ("lower", "upper")

    def __init__(self, lower: int, upper: int):
        lower = operator.index(lower)
        upper = operator.index(upper)
        if lower > upper:
            raise DistributionError(INVALID_RANGE_LOW_GT_HIGH, lower, upper)
        self._lower = lower
        self._upper = upper
        # Number of support points
        self._count = float(upper - lower + 1)

    @property
    def lower(self):
        return self._lower

    @property
    def upper(self):
        return self._upper

    def _pmf(self, k):
        return 1.0 / self._count

    def _cdf(self, k):
        return (k - self._lower + 1) / self._count

    def _sf(self, k):
        return (self._upper - k) / self._count

    def mean(self):
        return 0.5 * (self._lower + self._upper)

    def var(self):
        n = self._count
        return (n * n - 1) / 12


class HypergeometricDistribution(DiscreteDistribution):
    r"""Hypergeometric Distribution

    Number of successes in a sample of ``sample_size`` draws without
    replacement from a population of ``population_size`` items holding
    ``number_of_successes`` successes.

    The probability is a ratio of three saddle-point binomial terms,
    evaluated in logs. Both tails are summed directly from their own end of
    the support.
    """

    _params = ("population_size", "number_of_successes", "sample_size")

    def __init__(self, population_size: int, number_of_successes: int, sample_size: int):
        n = operator.index(population_size)
        m = operator.index(number_of_successes)
        k = operator.index(sample_size)
        if n <= 0:
            raise DistributionError(NOT_STRICTLY_POSITIVE, n)
        if m < 0:
            raise DistributionError(NEGATIVE, m)
        if k < 0:
            raise DistributionError(NEGATIVE, k)
        if m > n:
            raise DistributionError(TOO_LARGE, m, n)
        if k > n:
            raise DistributionError(TOO_LARGE, k, n)
        self._population_size = n
        self._number_of_successes = m
        self._sample_size = k
        self._p = k / n
        self._q = (n - k) / n
        self._log_norm = _log_binomial_probability(k, n, self._p, self._q)

    @property
    def population_size(self) -> int:
        return self._population_size

    @property
    def number_of_successes(self) -> int:
        return self._number_of_successes

    @property
    def sample_size(self) -> int:
        return self._sample_size

    @property
    def lower(self):
        return max(0, self._number_of_successes + self._sample_size - self._population_size)

    @property
    def upper(self):
        return min(self._number_of_successes, self._sample_size)

    def _logpmf(self, x):
        n, m, k = self._population_size, self._number_of_successes, self._sample_size
        p, q = self._p, self._q
        return (
            _log_binomial_probability(x, m, p, q)
            + _log_binomial_probability(k - x, n - m, p, q)
            - self._log_norm
        )

    def _pmf(self, x):
        return math.exp(self._logpmf(x))

    def _cdf(self, x):
        return math.fsum(self._pmf(i) for i in range(self.lower, x + 1))

    def _sf(self, x):
        return math.fsum(self._pmf(i) for i in range(x + 1, self.upper + 1))

    def mean(self):
        return self._sample_size * (self._number_of_successes / self._population_size)

    def var(self):
        n = float(self._population_size)
        if n == 1:
            return 0.0
        m = float(self._number_of_successes)
        k = float(self._sample_size)
        return (k * m * (n - k) * (n - m)) / (n * n * (n - 1))


def _generalized_harmonic(start: int, stop: int, exponent: float) -> float:
    r"""Sum $\sum_{k=start}^{stop} k^{-s}$; 0 for an empty range."""
    if stop < start:
        return 0.0
    k = np.arange(start, stop + 1, dtype=float)
    return float(np.sum(k ** -exponent))


class ZipfDistribution(DiscreteDistribution):
    r"""Zipf Distribution

    $$
    P(X = k) = \frac{k^{-s}}{H_{N,s}}, \quad k = 1, \dots, N
    $$

    where $H_{N,s}$ is the generalized harmonic number. The survival
    function sums the upper terms directly rather than subtracting the CDF
    from one.
    """

    _params = ("number_of_elements", "exponent")

    def __init__(self, number_of_elements: int, exponent: float):
        n = operator.index(number_of_elements)
        if n <= 0:
            raise DistributionError(NOT_STRICTLY_POSITIVE, n)
        if not exponent >= 0:
            raise DistributionError(NEGATIVE, exponent)
        self._number_of_elements = n
        self._exponent = float(exponent)
        self._harmonic = _generalized_harmonic(1, n, self._exponent)
        self._log_harmonic = math.log(self._harmonic)

    @property
    def number_of_elements(self) -> int:
        return self._number_of_elements

    @property
    def exponent(self) -> float:
        return self._exponent

    @property
    def lower(self):
        return 1

    @property
    def upper(self):
        return self._number_of_elements

    def _pmf(self, k):
        return k ** -self._exponent / self._harmonic

    def _logpmf(self, k):
        return -math.log(k) * self._exponent - self._log_harmonic

    def _cdf(self, k):
        return _generalized_harmonic(1, k, self._exponent) / self._harmonic

    def _sf(self, k):
        return _generalized_harmonic(k + 1, self._number_of_elements, self._exponent) / (
            self._harmonic
        )

    def mean(self):
        n, s = self._number_of_elements, self._exponent
        return _generalized_harmonic(1, n, s - 1) / self._harmonic

    def var(self):
        n, s = self._number_of_elements, self._exponent
        h1 = _generalized_harmonic(1, n, s - 1) / self._harmonic
        h2 = _generalized_harmonic(1, n, s - 2) / self._harmonic
        return max(0.0, h2 - h1 * h1)
