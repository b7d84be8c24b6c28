"""Composable floating-point equality predicates.

A tolerance is a value, not a flag, so strategies can be combined::

    >>> tol = absolute(1e-9) | relative(1e-15)
    >>> tol.test(1.0, 1.0 + 1e-12)
    True
    >>> str(tol)
    '(abs=1e-09 || rel=1e-15)'

``&`` and ``|`` short-circuit left to right; ``~`` negates.
"""

import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .precision import ulp_distance

__all__ = [
    "DoubleTolerance",
    "exact",
    "absolute",
    "relative",
    "ulps",
    "assert_close",
]


class DoubleTolerance(ABC):
    """Binary predicate deciding whether two doubles are equal within a tolerance."""

    @abstractmethod
    def test(self, expected: float, actual: float) -> bool:
        """Whether ``actual`` equals ``expected`` within this tolerance."""

    def __call__(self, expected: float, actual: float) -> bool:
        return self.test(expected, actual)

    def and_(self, other: "DoubleTolerance") -> "DoubleTolerance":
        return _AndTolerance(self, other)

    def or_(self, other: "DoubleTolerance") -> "DoubleTolerance":
        return _OrTolerance(self, other)

    def negate(self) -> "DoubleTolerance":
        return _NegateTolerance(self)

    __and__ = and_
    __or__ = or_
    __invert__ = negate

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self}>"


class _PredicateTolerance(DoubleTolerance):
    def __init__(self, predicate, description: str):
        self._predicate = predicate
        self._description = description

    def test(self, expected: float, actual: float) -> bool:
        return bool(self._predicate(float(expected), float(actual)))

    def __str__(self) -> str:
        return self._description


class _AndTolerance(DoubleTolerance):
    def __init__(self, first: DoubleTolerance, second: DoubleTolerance):
        self.first = _require_tolerance(first)
        self.second = _require_tolerance(second)

    def test(self, expected: float, actual: float) -> bool:
        return self.first.test(expected, actual) and self.second.test(expected, actual)

    def __str__(self) -> str:
        return f"({self.first} && {self.second})"


class _OrTolerance(DoubleTolerance):
    def __init__(self, first: DoubleTolerance, second: DoubleTolerance):
        self.first = _require_tolerance(first)
        self.second = _require_tolerance(second)

    def test(self, expected: float, actual: float) -> bool:
        return self.first.test(expected, actual) or self.second.test(expected, actual)

    def __str__(self) -> str:
        return f"({self.first} || {self.second})"


class _NegateTolerance(DoubleTolerance):
    def __init__(self, tolerance: DoubleTolerance):
        self.tolerance = _require_tolerance(tolerance)

    def test(self, expected: float, actual: float) -> bool:
        return not self.tolerance.test(expected, actual)

    def negate(self) -> DoubleTolerance:
        return self.tolerance

    __invert__ = negate

    def __str__(self) -> str:
        return f"!({self.tolerance})"


def _require_tolerance(tolerance) -> DoubleTolerance:
    if not isinstance(tolerance, DoubleTolerance):
        raise TypeError(f"Expected a DoubleTolerance, got {type(tolerance).__name__}.")
    return tolerance


def _check_epsilon(eps: float) -> float:
    if not (math.isfinite(eps) and eps >= 0):
        raise ValueError(f"Invalid epsilon value: {eps}")
    return float(eps)


def _bit_equal(a: float, b: float) -> bool:
    return np.array(a, dtype=np.float64).tobytes() == np.array(b, dtype=np.float64).tobytes()


def exact() -> DoubleTolerance:
    """Bitwise equality: ``0.0`` and ``-0.0`` differ, NaN equals the same NaN."""
    return _EXACT


_EXACT = _PredicateTolerance(_bit_equal, "exact")


def ulps(max_ulps: int) -> DoubleTolerance:
    """Equal when at most ``max_ulps`` representable doubles apart.

    ``ulps(0)`` is numeric equality (``0.0 == -0.0``). NaN never compares equal.
    """
    if isinstance(max_ulps, bool) or not isinstance(max_ulps, (int, np.integer)) or max_ulps < 0:
        raise ValueError(f"Invalid ULP count: {max_ulps}")
    n = int(max_ulps)
    return _PredicateTolerance(lambda a, b: ulp_distance(a, b) <= n, f"ulp={n}")


def absolute(eps: float) -> DoubleTolerance:
    """Equal when ``|a - b| <= eps`` (or within 1 ULP, which covers equal infinities)."""
    eps = _check_epsilon(eps)

    def predicate(a, b):
        return ulp_distance(a, b) <= 1 or abs(a - b) <= eps

    return _PredicateTolerance(predicate, f"abs={eps!r}")


def relative(eps: float) -> DoubleTolerance:
    """Equal when ``|a - b| <= eps * max(|a|, |b|)`` (or within 1 ULP)."""
    eps = _check_epsilon(eps)

    def predicate(a, b):
        if ulp_distance(a, b) <= 1:
            return True
        if math.isinf(a) or math.isinf(b):
            return False
        return abs(a - b) <= eps * max(abs(a), abs(b))

    return _PredicateTolerance(predicate, f"rel={eps!r}")


def assert_close(
    expected: float,
    actual: float,
    tolerance: DoubleTolerance,
    msg: Optional[str] = None,
) -> None:
    """Raise ``AssertionError`` if ``tolerance`` rejects the pair."""
    if not tolerance.test(expected, actual):
        prefix = f"{msg}: " if msg else ""
        raise AssertionError(
            f"{prefix}expected {expected!r} but was {actual!r} ({tolerance})"
        )
