"""Floating-point helpers: ordered bit representations and extended precision.

The ordered integer of a double maps the IEEE-754 bit pattern onto a signed
integer so that adjacent doubles differ by one and ordering is preserved.
``+0.0`` and ``-0.0`` both map to 0.
"""

import math

import numpy as np

__all__ = [
    "ordered_int",
    "from_ordered_int",
    "ulp_distance",
    "exp_mhxx",
    "sqrt2xx",
]

_SIGN_BIT = 1 << 63
_ABS_MASK = _SIGN_BIT - 1

# 2^27 + 1: splits a 53-bit mantissa into two 26-bit halves (Dekker, 1971).
_MULTIPLIER = 1.0 + 2.0**27
_BIG = 2.0**500
_SMALL = 2.0**-500
_SCALE_UP = 2.0**600
_SCALE_DOWN = 2.0**-600

# exp(-0.5 * x * x) underflows to zero beyond this value of x * x.
_EXP_MHXX_UNDERFLOW = 1491.0


def _bits(x: float) -> int:
    return int(np.array(x, dtype=np.float64).view(np.int64))


def ordered_int(x: float) -> int:
    """Map a double onto an integer preserving order; adjacent doubles differ by 1."""
    bits = _bits(x)
    if bits >= 0:
        return bits
    return -(bits & _ABS_MASK)


def from_ordered_int(i: int) -> float:
    """Inverse of :func:`ordered_int`. Zero maps to ``+0.0``."""
    bits = i if i >= 0 else (-i) | _SIGN_BIT
    return float(np.array(bits, dtype=np.uint64).view(np.float64))


def ulp_distance(a: float, b: float) -> float:
    """Number of representable doubles between ``a`` and ``b``; ``inf`` for NaN."""
    if math.isnan(a) or math.isnan(b):
        return math.inf
    return abs(ordered_int(a) - ordered_int(b))


def _high_part(value: float) -> float:
    c = _MULTIPLIER * value
    return c - (c - value)


def _product_low(hx: float, lx: float, hy: float, ly: float, xy: float) -> float:
    # Low part of the exact product (hx + lx) * (hy + ly) given xy = fl(x * y).
    return lx * ly - (((xy - hx * hy) - lx * hy) - hx * ly)


def exp_mhxx(x: float) -> float:
    r"""Compute $\exp(-x^2/2)$ compensating the rounding error in $x^2$.

    For large ``|x|`` the rounding error of ``x * x`` is magnified by the
    exponential; the low part of the square is folded back in as a correction
    factor.
    """
    z = x * x
    if z >= _EXP_MHXX_UNDERFLOW:
        return 0.0
    if z <= 0.5:
        # The error in z is below 1 ulp of the result
        return math.exp(-0.5 * z)
    hx = _high_part(x)
    lx = x - hx
    zz = _product_low(hx, lx, hx, lx, z)
    return math.exp(-0.5 * z) * math.exp(-0.5 * zz)


def _compute_sqrt2aa(a: float) -> float:
    ha = _high_part(a)
    la = a - ha

    x = 2 * a * a
    xx = _product_low(ha, la, 2 * ha, 2 * la, x)

    c = math.sqrt(x)
    if xx == 0:
        # a has a short mantissa (including 0 and powers of 2)
        return c

    # Dekker's double-length square root correction
    hc = _high_part(c)
    lc = c - hc
    u = c * c
    uu = _product_low(hc, lc, hc, lc, u)
    cc = (x - u - uu + xx) * 0.5 / c
    return c + cc


def sqrt2xx(x: float) -> float:
    r"""Compute $\sqrt{2 x^2}$ with the square formed in extended precision.

    Used to build ``sigma * sqrt(2)`` scale factors without the two roundings
    of ``sigma * math.sqrt(2)``.
    """
    if x > _BIG:
        if x == math.inf:
            return math.inf
        return _compute_sqrt2aa(x * _SCALE_DOWN) * _SCALE_UP
    if x < _SMALL:
        return _compute_sqrt2aa(x * _SCALE_UP) * _SCALE_DOWN
    return _compute_sqrt2aa(x)
