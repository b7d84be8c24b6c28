import math
from typing import Optional, Union

import numpy as np

from .exceptions import (
    INVALID_PROBABILITY,
    INVALID_RANGE_LOW_GTE_HIGH,
    NOT_STRICTLY_POSITIVE,
    OUT_OF_RANGE,
    DistributionError,
)

# Declared bounds of an unbounded discrete support.
INT_MIN = int(np.iinfo(np.int32).min)
INT_MAX = int(np.iinfo(np.int32).max)

# Largest finite double.
DBL_MAX = float(np.finfo(float).max)
LOG_DBL_MAX = math.log(DBL_MAX)

ROOT_TWO = 1.4142135623730951
ROOT_TWO_DIV_PI = 0.7978845608028654
ROOT_PI_DIV_TWO = 1.2533141373155003
SQRT_TWO_PI = 2.5066282746310002
LN_TWO = 0.6931471805599453
LN_PI = 1.1447298858494002
HALF_LOG_TWO_PI = 0.9189385332046728


def check_probability(p: float) -> None:
    """Raise :class:`DistributionError` unless ``0 <= p <= 1``.

    NaN is rejected. ``-0.0`` compares equal to zero and is accepted.
    """
    if 0 <= p <= 1:
        return
    raise DistributionError(INVALID_PROBABILITY, p)


def is_finite_strictly_positive(x: float) -> bool:
    return 0 < x < math.inf


def require_strictly_positive(x: float) -> float:
    """Return ``x`` or raise if it is not ``> 0`` (NaN included)."""
    if not x > 0:
        raise DistributionError(NOT_STRICTLY_POSITIVE, x)
    return x


def require_range(lower: float, upper: float) -> None:
    """Raise unless ``lower < upper``."""
    if not lower < upper:
        raise DistributionError(INVALID_RANGE_LOW_GTE_HIGH, lower, upper)


def require_in_range(x: float, lower: float, upper: float) -> float:
    if not lower <= x <= upper:
        raise DistributionError(OUT_OF_RANGE, x, lower, upper)
    return x


def clip(x: float, lower: float, upper: float) -> float:
    """Clip ``x`` to ``[lower, upper]``; NaN is returned unchanged."""
    if x < lower:
        return lower
    if x > upper:
        return upper
    return x


def safe_log(x: float) -> float:
    """Natural logarithm with ``log(0) == -inf``."""
    if x > 0:
        return math.log(x)
    if x == 0:
        return -math.inf
    return math.nan


def safe_exp(x: float) -> float:
    """Exponential with overflow mapped to ``inf``."""
    if x > LOG_DBL_MAX:
        return math.inf
    return math.exp(x)


def init_rng(
    random_state: Optional[Union[int, np.random.Generator, np.random.RandomState]] = None,
) -> np.random.Generator:
    """
    Normalize the ``random_state`` argument to a NumPy ``Generator``.

    Accepts integers, ``RandomState`` instances, ``Generator`` objects, or
    ``None`` (in which case a fresh, OS-seeded generator is created).
    """
    if isinstance(random_state, np.random.Generator):
        return random_state

    if isinstance(random_state, np.random.RandomState):
        seed = random_state.randint(0, 2**32, dtype=np.int64)
        return np.random.default_rng(seed)

    try:
        return np.random.default_rng(random_state)
    except TypeError as err:
        raise TypeError(
            "random_state must be None, an int seed, RandomState, or Generator."
        ) from err
