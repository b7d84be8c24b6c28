"""Generic inversion of monotone distribution functions.

Distributions without a closed-form quantile fall back to these searches.
The continuous search bisects in the ordered integer representation of
doubles (see :mod:`pystatdist.precision`), so any finite bracket is reduced to
two adjacent doubles in at most 64 halvings regardless of its width. The
result is the smallest double satisfying the target, which places quantiles
at the infimum of any plateau or step.
"""

import logging
import math
from typing import Callable

from .exceptions import DistributionStateError
from .precision import from_ordered_int, ordered_int
from .utils import DBL_MAX, INT_MIN, check_probability, is_finite_strictly_positive

__all__ = ["inverse_continuous", "inverse_discrete"]

logger = logging.getLogger(__name__)


def _checked(value: float) -> float:
    if math.isnan(value):
        raise DistributionStateError(
            "Distribution function returned NaN during inversion; the implementation is invalid."
        )
    return value


def _targets(p: float, complement: bool):
    """Return ``(p, q)`` with ``q = 1 - p`` formed once from the caller's argument."""
    check_probability(p)
    # Adding 0.0 maps -0.0 to 0.0
    if complement:
        q = p + 0.0
        return 1.0 - q, q
    p = p + 0.0
    return p, 1.0 - p


def _predicates(cdf, sf, p, q, complement):
    """Build ``satisfied(x)`` (monotone in ``x``) and its strict variant."""
    if complement:

        def satisfied(x):
            return _checked(sf(x)) <= q

        def exceeded(x):
            return _checked(sf(x)) < q

    else:

        def satisfied(x):
            return _checked(cdf(x)) >= p

        def exceeded(x):
            return _checked(cdf(x)) > p

    return satisfied, exceeded


def _chebyshev_sd(mean: float, variance: float) -> float:
    """Standard deviation usable for a Chebyshev bracket, else NaN."""
    if not math.isfinite(mean) or not variance > 0:
        return math.nan
    sd = math.sqrt(variance)
    return sd if is_finite_strictly_positive(sd) else math.nan


def _expand(satisfied, anchor: float, direction: float, want: bool) -> float:
    """Step away from ``anchor`` doubling the distance until ``satisfied(x) == want``.

    Returns ``direction * DBL_MAX`` if the target is never reached within the
    finite doubles.
    """
    x = anchor
    step = max(1.0, abs(anchor))
    while satisfied(x) != want:
        if abs(x) >= DBL_MAX:
            return x
        x = anchor + direction * step
        if not math.isfinite(x):
            x = math.copysign(DBL_MAX, direction)
        step *= 2
    return x


def _bisect(satisfied, lo: float, hi: float) -> float:
    """Smallest double in ``(lo, hi]`` with ``satisfied``; ``hi`` must satisfy, ``lo`` not."""
    a = ordered_int(lo)
    b = ordered_int(hi)
    while b - a > 1:
        m = (a + b) // 2
        if satisfied(from_ordered_int(m)):
            b = m
        else:
            a = m
    return from_ordered_int(b)


def inverse_continuous(
    cdf: Callable[[float], float],
    sf: Callable[[float], float],
    lower: float,
    upper: float,
    p: float,
    complement: bool = False,
    mean: float = math.nan,
    variance: float = math.nan,
) -> float:
    r"""
    Invert a continuous distribution function by bracketing and bisection.

    Parameters
    ----------
    cdf, sf : callable
        Forward cumulative and survival functions. Only the one matching the
        request is evaluated.
    lower, upper : float
        Support bounds, possibly infinite.
    p : float
        Target cumulative probability, or survival probability when
        ``complement`` is True.
    complement : bool
        Solve ``sf(x) <= p`` instead of ``cdf(x) >= p``.
    mean, variance : float
        Moments of the distribution. When both are finite (and the variance
        positive) the one-sided Chebyshev inequality seeds the bracket:

        $$ \mu - \sigma\sqrt{q/p} \le x \le \mu + \sigma\sqrt{p/q} $$

    Returns
    -------
    float
        The smallest ``x`` with ``cdf(x) >= p`` (``sf(x) <= p`` for the
        complement). ``lower`` is returned for a zero cumulative target and
        ``upper`` for a zero survival target.

    Raises
    ------
    DistributionError
        If ``p`` is not in ``[0, 1]``.
    DistributionStateError
        If the forward function returns NaN.
    """
    p, q = _targets(p, complement)
    if p == 0:
        return lower
    if q == 0:
        return upper

    satisfied, exceeded = _predicates(cdf, sf, p, q, complement)

    if math.isfinite(lower) and satisfied(lower):
        return lower

    sd = _chebyshev_sd(mean, variance)
    lo = lower
    hi = upper

    if lo == -math.inf:
        start = mean - sd * math.sqrt(q / p)
        if not math.isfinite(start):
            logger.debug(
                "Chebyshev lower bound unavailable (mean=%s, variance=%s); expanding",
                mean,
                variance,
            )
            start = min(-1.0, hi)
        lo = _expand(satisfied, start, -1.0, False)
        if lo == -DBL_MAX and satisfied(lo):
            # Quantile lies below the finite doubles unless met exactly here
            return lo if not exceeded(lo) else lower

    if hi == math.inf:
        start = mean + sd * math.sqrt(p / q)
        if not math.isfinite(start):
            logger.debug(
                "Chebyshev upper bound unavailable (mean=%s, variance=%s); expanding",
                mean,
                variance,
            )
            start = max(1.0, lo)
        if start <= lo:
            start = lo
        hi = _expand(satisfied, start, 1.0, True)
        if hi == DBL_MAX and not satisfied(hi):
            return upper

    logger.debug("Bisecting [%s, %s] for p=%s q=%s complement=%s", lo, hi, p, q, complement)
    return _bisect(satisfied, lo, hi)


def inverse_discrete(
    cdf: Callable[[int], float],
    sf: Callable[[int], float],
    lower: int,
    upper: int,
    p: float,
    complement: bool = False,
    mean: float = math.nan,
    variance: float = math.nan,
) -> int:
    """
    Invert a discrete distribution function by integer bisection.

    Parameters mirror :func:`inverse_continuous`; the bounds are integers and
    an unbounded support is declared with ``INT_MIN``/``INT_MAX``.

    Returns
    -------
    int
        The smallest support point ``k`` with ``cdf(k) >= p`` (``sf(k) <= p``
        for the complement).
    """
    p, q = _targets(p, complement)
    if p == 0:
        return lower
    if q == 0:
        return upper

    satisfied, _ = _predicates(cdf, sf, p, q, complement)

    if lower == INT_MIN:
        if satisfied(lower):
            return lower
        lo = lower
    else:
        # cdf(lower - 1) == 0 < p
        lo = lower - 1
    hi = upper

    sd = _chebyshev_sd(mean, variance)
    if not math.isnan(sd):
        t = mean - sd * math.sqrt(q / p)
        if t > lo:
            candidate = int(math.ceil(t)) - 1
            if lo < candidate < hi and not satisfied(candidate):
                lo = candidate
        t = mean + sd * math.sqrt(p / q)
        if t < hi:
            candidate = int(math.ceil(t)) - 1
            if lo < candidate < hi and satisfied(candidate):
                hi = candidate
    else:
        logger.debug(
            "Chebyshev bracket unavailable (mean=%s, variance=%s); searching [%s, %s]",
            mean,
            variance,
            lo,
            hi,
        )

    while lo + 1 < hi:
        mid = (lo + hi) // 2
        if satisfied(mid):
            hi = mid
        else:
            lo = mid
    return hi
