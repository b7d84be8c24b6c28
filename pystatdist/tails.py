"""Tail-accurate evaluation of cumulative and survival probabilities.

A value close to 1 carries no information about its complement: if
``cdf(x)`` is within a few ULP of 1 then ``1 - cdf(x)`` has no correct digits.
The helpers here route each request through whichever primitive returns the
smaller of the two complementary values, and subtract from 1 only when the
result is at least one half.
"""

import math
from typing import Callable

from .exceptions import INVALID_RANGE_LOW_GT_HIGH, DistributionError
from .special import erf_difference, erfc
from .utils import safe_log

__all__ = [
    "NORMAL_TAIL_CUTOFF",
    "TailEvaluator",
    "range_probability",
    "log_cdf",
    "log_sf",
    "normal_cdf",
    "normal_sf",
    "normal_probability",
]

# Standardised distance beyond which the normal CDF is exactly 0 or 1.
NORMAL_TAIL_CUTOFF = 40.0

_ROOT_HALF = 0.7071067811865476


class TailEvaluator:
    """
    Combine two one-sided tail functions into an accurate CDF/SF pair.

    Parameters
    ----------
    lower_tail : callable
        Returns ``P(X <= x)``; only required to be accurate for ``x <= pivot``.
    upper_tail : callable
        Returns ``P(X > x)``; only required to be accurate for ``x >= pivot``.
    pivot : float
        Point where both tails equal one half (typically the median).

    Notes
    -----
    Above the pivot the CDF is ``1 - upper_tail(x)``, which is at least 0.5,
    so the subtraction loses no relative precision. The same holds for the
    survival function below the pivot.
    """

    def __init__(
        self,
        lower_tail: Callable[[float], float],
        upper_tail: Callable[[float], float],
        pivot: float,
    ):
        self.lower_tail = lower_tail
        self.upper_tail = upper_tail
        self.pivot = pivot

    def cdf(self, x: float) -> float:
        if x <= self.pivot:
            return self.lower_tail(x)
        return 1.0 - self.upper_tail(x)

    def sf(self, x: float) -> float:
        if x >= self.pivot:
            return self.upper_tail(x)
        return 1.0 - self.lower_tail(x)

    def logcdf(self, x: float) -> float:
        if x <= self.pivot:
            return safe_log(self.lower_tail(x))
        return math.log1p(-self.upper_tail(x))

    def logsf(self, x: float) -> float:
        if x >= self.pivot:
            return safe_log(self.upper_tail(x))
        return math.log1p(-self.lower_tail(x))


def range_probability(
    cdf: Callable[[float], float],
    sf: Callable[[float], float],
    median: float,
    x0: float,
    x1: float,
) -> float:
    """
    Probability ``P(x0 < X <= x1)``.

    In the upper half of the distribution the difference of survival
    probabilities is used, which keeps precision when both CDF values are
    close to 1.

    Raises
    ------
    DistributionError
        If ``x0 > x1``.
    """
    if x0 > x1:
        raise DistributionError(INVALID_RANGE_LOW_GT_HIGH, x0, x1)
    if x0 == x1:
        return 0.0
    if x0 >= median:
        return sf(x0) - sf(x1)
    return cdf(x1) - cdf(x0)


def log_cdf(cdf: Callable[[float], float], sf: Callable[[float], float], x: float) -> float:
    """``log(cdf(x))``, via ``log1p(-sf(x))`` when the CDF exceeds one half."""
    p = cdf(x)
    if p > 0.5:
        return math.log1p(-sf(x))
    return safe_log(p)


def log_sf(cdf: Callable[[float], float], sf: Callable[[float], float], x: float) -> float:
    """``log(sf(x))``, via ``log1p(-cdf(x))`` when the SF exceeds one half."""
    q = sf(x)
    if q > 0.5:
        return math.log1p(-cdf(x))
    return safe_log(q)


def normal_cdf(z: float) -> float:
    """Standard normal CDF, exact 0/1 beyond ``NORMAL_TAIL_CUTOFF``."""
    if z < -NORMAL_TAIL_CUTOFF:
        return 0.0
    if z > NORMAL_TAIL_CUTOFF:
        return 1.0
    return 0.5 * erfc(-z * _ROOT_HALF)


def normal_sf(z: float) -> float:
    """Standard normal survival function, exact 0/1 beyond ``NORMAL_TAIL_CUTOFF``."""
    if z > NORMAL_TAIL_CUTOFF:
        return 0.0
    if z < -NORMAL_TAIL_CUTOFF:
        return 1.0
    return 0.5 * erfc(z * _ROOT_HALF)


def normal_probability(z0: float, z1: float) -> float:
    """Standard normal mass between ``z0`` and ``z1`` (``z0 <= z1``)."""
    return 0.5 * erf_difference(z0 * _ROOT_HALF, z1 * _ROOT_HALF)
