r"""Cancellation-safe moments for distributions with fragile closed forms.

Truncated normal
----------------
For the standard normal truncated to $[a, b]$ with $Z = \Phi(b) - \Phi(a)$:

$$ m_1 = \frac{\phi(a) - \phi(b)}{Z}, \qquad
   m_2 = 1 - \frac{b\phi(b) - a\phi(a)}{Z} $$

Evaluated naively these overflow, underflow or cancel once the window moves
into a tail. The functions below reduce to $|a| \le |b|$ by symmetry, factor
the common exponential out of numerator and denominator, and use the scaled
complementary error function for windows entirely above zero.
"""

import math
from typing import Tuple

from .special import erf, erf_difference, erfcx, gamma_ratio_half
from .utils import ROOT_PI_DIV_TWO, ROOT_TWO, ROOT_TWO_DIV_PI, clip

__all__ = [
    "MAX_X",
    "NAKAGAMI_ASYMPTOTIC_SHAPE",
    "moment1",
    "moment2",
    "variance",
    "truncated_normal_moments",
    "nakagami_moments",
    "folded_normal_moments",
]

# Standardised bound beyond which the normal tail is treated as untruncated.
MAX_X = 40.0

# Shape above which the Nakagami variance uses its asymptotic series.
NAKAGAMI_ASYMPTOTIC_SHAPE = 1e3

# Folded normal: |mu| / (sigma * sqrt(2)) above which the mean is formed as
# |mu| plus a small correction.
_FOLDED_SHIFT = 1.0


def moment1(a: float, b: float) -> float:
    """
    First moment of the standard normal truncated to ``[a, b]``.

    The result always lies in ``[a, b]`` and satisfies
    ``moment1(a, b) == -moment1(-b, -a)``.
    """
    if a == b:
        return a
    if abs(a) > abs(b):
        # Subtract from zero to avoid generating -0.0
        return 0.0 - moment1(-b, -a)

    # Here |a| <= |b|, a < b, 0 < b
    if a <= -MAX_X:
        # No truncation
        return 0.0
    if b >= MAX_X:
        # One-sided truncation
        return clip(ROOT_TWO_DIV_PI / erfcx(a / ROOT_TWO), a, b)

    # exp(-b*b/2) - exp(-a*a/2) == expm1(-dx) * exp(-a*a/2)
    dx = 0.5 * (b + a) * (b - a)
    if a <= 0:
        # Opposite signs
        m = (
            ROOT_TWO_DIV_PI
            * -math.expm1(-dx)
            * math.exp(-0.5 * a * a)
            / erf_difference(a / ROOT_TWO, b / ROOT_TWO)
        )
    else:
        z = math.exp(-dx) * erfcx(b / ROOT_TWO) - erfcx(a / ROOT_TWO)
        if z == 0:
            # a and b are large and very close
            return (a + b) * 0.5
        m = ROOT_TWO_DIV_PI * math.expm1(-dx) / z

    return clip(m, a, b)


def moment2(a: float, b: float) -> float:
    """
    Raw second moment of the standard normal truncated to ``[a, b]``.

    Notes
    -----
    When ``b - a`` is tiny the numerator falls below 1 ULP of the
    denominator and the result degrades towards the nearer of ``a*a`` or
    ``b*b``; the variance in that regime is not resolvable.
    """
    if a == b:
        return a * a
    if abs(a) > abs(b):
        return moment2(-b, -a)

    if a <= -MAX_X:
        return 1.0
    if b >= MAX_X:
        # One-sided truncation; tends to a*a as a -> inf
        return 1.0 + ROOT_TWO_DIV_PI * a / erfcx(a / ROOT_TWO)

    if a <= 0:
        ea = ROOT_PI_DIV_TWO * erf(a / ROOT_TWO)
        eb = ROOT_PI_DIV_TWO * erf(b / ROOT_TWO)
        fa = ea - a * math.exp(-0.5 * a * a)
        fb = eb - b * math.exp(-0.5 * b * b)
        # fb <= fa only for a tiny range around 0
        m = (fb - fa) / (eb - ea)
        return clip(m, 0.0, 1.0)

    dx = 0.5 * (b + a) * (b - a)
    ex = math.exp(-dx)
    ea = ROOT_PI_DIV_TWO * erfcx(a / ROOT_TWO)
    eb = ROOT_PI_DIV_TWO * erfcx(b / ROOT_TWO)
    fa = ea + a
    fb = eb + b
    m = (fa - fb * ex) / (ea - eb * ex)
    return clip(m, a * a, b * b)


def variance(a: float, b: float) -> float:
    """
    Variance of the standard normal truncated to ``[a, b]``.

    Never negative. Windows so narrow that the variance is below the
    resolution of ``m2 - m1**2`` return 0.
    """
    if a == b:
        return 0.0

    m1 = moment1(a, b)
    m2 = math.sqrt(moment2(a, b))
    # m2 - m1*m1 rearranged as (x - y)(x + y)
    v = (m2 - m1) * (m2 + m1)

    if v >= 1:
        # Extreme tails can overshoot (e.g. infinite m2). Only an effectively
        # untruncated window has unit variance.
        return 1.0 if a < -1 and b > 1 else 0.0
    if v <= 0:
        return 0.0
    return v


def truncated_normal_moments(
    mu: float, sigma: float, lower: float, upper: float
) -> Tuple[float, float]:
    """Mean and variance of ``N(mu, sigma**2)`` truncated to ``[lower, upper]``."""
    a = (lower - mu) / sigma
    b = (upper - mu) / sigma
    mean = mu + sigma * moment1(a, b)
    var = sigma * sigma * variance(a, b)
    return mean, var


def nakagami_moments(mu: float, omega: float) -> Tuple[float, float]:
    r"""
    Mean and variance of the Nakagami distribution.

    $$ E[X] = \sqrt{\Omega/\mu}\,\frac{\Gamma(\mu + 1/2)}{\Gamma(\mu)},
       \qquad \mathrm{Var}[X] = \Omega\,(1 - r), \quad
       r = \frac{\Gamma(\mu + 1/2)^2}{\mu\,\Gamma(\mu)^2} $$

    For large ``mu`` the factor ``1 - r`` cancels; its asymptotic series in
    ``t = 1/mu`` is used instead:
    $t/4 - t^2/32 - t^3/128 + 5t^4/2048$.
    """
    if mu >= NAKAGAMI_ASYMPTOTIC_SHAPE:
        t = 1.0 / mu
        v = t * (0.25 - t * (1.0 / 32 + t * (1.0 / 128 - t * 5.0 / 2048)))
        return math.sqrt(omega * (1.0 - v)), omega * v

    ratio = gamma_ratio_half(mu)
    mean = math.sqrt(omega / mu) * ratio
    v = max(0.0, 1.0 - ratio * ratio / mu)
    return mean, omega * v


def folded_normal_moments(mu: float, sigma: float) -> Tuple[float, float]:
    r"""
    Mean and variance of ``|X|`` for ``X ~ N(mu, sigma**2)``.

    $$ E|X| = \sigma\sqrt{2/\pi}\,e^{-a^2} + \mu\,\mathrm{erf}(a),
       \qquad a = \frac{\mu}{\sigma\sqrt{2}} $$

    Far from the fold the mean is ``|mu| + d`` with a tiny positive ``d``;
    the variance ``sigma**2 - d (2|mu| + d)`` then avoids the cancellation in
    ``mu**2 + sigma**2 - mean**2``.
    """
    m = abs(mu)
    a = m / (sigma * ROOT_TWO)
    if a > _FOLDED_SHIFT:
        d = math.exp(-a * a) * (sigma * ROOT_TWO_DIV_PI - m * erfcx(a))
        mean = m + d
        var = sigma * sigma - d * (2 * m + d)
    else:
        mean = sigma * ROOT_TWO_DIV_PI * math.exp(-a * a) + m * erf(a)
        var = m * m + sigma * sigma - mean * mean
    return mean, max(0.0, var)
