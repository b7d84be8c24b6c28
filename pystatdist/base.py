"""Abstract interfaces shared by every distribution.

Public methods own the support contract and argument checks; subclasses
implement the private ``_pdf``/``_cdf``/``_sf``/``_ppf`` hooks, which are
only called with arguments inside the support (and probabilities strictly
inside ``(0, 1)`` for the inverse hooks).
"""

import math
import operator
from abc import ABC, abstractmethod
from functools import cached_property
from typing import Optional, Tuple, Union

import numpy as np

from .inversion import inverse_continuous, inverse_discrete
from .tails import log_cdf, log_sf, range_probability
from .utils import check_probability, init_rng, safe_log

__all__ = ["ContinuousDistribution", "DiscreteDistribution"]

RandomState = Optional[Union[int, np.random.Generator, np.random.RandomState]]


class _Distribution(ABC):
    # Constructor argument names; each value is stored as ``_<name>``.
    _params: Tuple[str, ...] = ()

    @property
    @abstractmethod
    def lower(self):
        """Lower bound of the support (possibly infinite)."""

    @property
    @abstractmethod
    def upper(self):
        """Upper bound of the support (possibly infinite)."""

    @abstractmethod
    def mean(self) -> float:
        """Mean; NaN when undefined, ``inf`` when unbounded."""

    @abstractmethod
    def var(self) -> float:
        """Variance; NaN when undefined, ``inf`` when unbounded."""

    def std(self) -> float:
        return math.sqrt(self.var())

    def support(self) -> tuple:
        return self.lower, self.upper

    def is_support_connected(self) -> bool:
        return True

    @cached_property
    def _median_value(self):
        return self.ppf(0.5)

    def median(self):
        """Median, computed once with ``ppf(0.5)`` and cached."""
        return self._median_value

    def probability(self, x0, x1) -> float:
        """
        Probability ``P(x0 < X <= x1)``.

        Raises
        ------
        DistributionError
            If ``x0 > x1``.
        """
        return range_probability(self.cdf, self.sf, self.median(), x0, x1)

    def ppf(self, p: float):
        """
        Percent-point function: the smallest ``x`` with ``cdf(x) >= p``.

        ``ppf(0)`` is the lower support bound and ``ppf(1)`` the upper one.
        """
        check_probability(p)
        if p == 0:
            return self.lower
        if p == 1:
            return self.upper
        return self._ppf(p)

    def isf(self, q: float):
        """
        Inverse survival function: the smallest ``x`` with ``sf(x) <= q``.

        The survival probability is used directly, without forming ``1 - q``,
        so small upper-tail probabilities keep their precision.
        """
        check_probability(q)
        if q == 0:
            return self.upper
        if q == 1:
            return self.lower
        return self._isf(q)

    @abstractmethod
    def _ppf(self, p):
        ...

    @abstractmethod
    def _isf(self, q):
        ...

    def _draw(self, u):
        return self.ppf(u)

    def rvs(self, size=None, random_state: RandomState = None):
        """
        Draw random variates by inverse-transform sampling.

        Parameters
        ----------
        size : int or tuple of ints, optional
            Output shape. ``None`` (default) returns a scalar.
        random_state : int, np.random.Generator, np.random.RandomState or None
            Source of uniform deviates.

        Returns
        -------
        samples : float, int or ndarray
        """
        rng = init_rng(random_state)
        u = rng.uniform(0.0, 1.0, size=size)
        if size is None:
            return self._draw(float(u))
        flat = [self._draw(float(v)) for v in np.ravel(u)]
        return np.asarray(flat, dtype=self._sample_dtype).reshape(np.shape(u))

    def __repr__(self) -> str:
        args = ", ".join(f"{name}={getattr(self, '_' + name)!r}" for name in self._params)
        return f"{self.__class__.__name__}({args})"


class ContinuousDistribution(_Distribution):
    """
    Base class for univariate continuous distributions.

    Subclasses provide ``lower``/``upper``, ``mean``/``var`` and the hooks
    ``_pdf`` and ``_cdf``. Everything else has a default: ``_sf`` is
    ``1 - _cdf``, the log functions choose the smaller complementary value,
    and the inverse functions use :func:`~pystatdist.inversion.inverse_continuous`
    seeded with the moments.
    """

    _sample_dtype = float

    @abstractmethod
    def _pdf(self, x: float) -> float:
        ...

    @abstractmethod
    def _cdf(self, x: float) -> float:
        ...

    def _logpdf(self, x: float) -> float:
        return safe_log(self._pdf(x))

    def _sf(self, x: float) -> float:
        return 1.0 - self._cdf(x)

    def _logcdf(self, x: float) -> float:
        return log_cdf(self._cdf, self._sf, x)

    def _logsf(self, x: float) -> float:
        return log_sf(self._cdf, self._sf, x)

    def _ppf(self, p: float) -> float:
        return inverse_continuous(
            self.cdf, self.sf, self.lower, self.upper, p,
            mean=self.mean(), variance=self.var(),
        )

    def _isf(self, q: float) -> float:
        return inverse_continuous(
            self.cdf, self.sf, self.lower, self.upper, q, complement=True,
            mean=self.mean(), variance=self.var(),
        )

    def _outside(self, x: float) -> bool:
        return x < self.lower or x > self.upper

    def pdf(self, x: float) -> float:
        """Probability density; exactly 0 outside the support."""
        x = float(x)
        if self._outside(x):
            return 0.0
        return self._pdf(x)

    def logpdf(self, x: float) -> float:
        x = float(x)
        if self._outside(x):
            return -math.inf
        return self._logpdf(x)

    def cdf(self, x: float) -> float:
        """``P(X <= x)``; exactly 0 below and 1 above the support."""
        x = float(x)
        if x <= self.lower:
            return 0.0
        if x >= self.upper:
            return 1.0
        return self._cdf(x)

    def sf(self, x: float) -> float:
        """``P(X > x)``; exactly 1 below and 0 above the support."""
        x = float(x)
        if x <= self.lower:
            return 1.0
        if x >= self.upper:
            return 0.0
        return self._sf(x)

    def logcdf(self, x: float) -> float:
        x = float(x)
        if x <= self.lower:
            return -math.inf
        if x >= self.upper:
            return 0.0
        return self._logcdf(x)

    def logsf(self, x: float) -> float:
        x = float(x)
        if x <= self.lower:
            return 0.0
        if x >= self.upper:
            return -math.inf
        return self._logsf(x)


class DiscreteDistribution(_Distribution):
    """
    Base class for distributions on a set of consecutive integers.

    Unbounded supports are declared with ``INT_MIN``/``INT_MAX``. Arguments
    must be integral (Python or NumPy integers).
    """

    _sample_dtype = np.int64

    @abstractmethod
    def _pmf(self, k: int) -> float:
        ...

    @abstractmethod
    def _cdf(self, k: int) -> float:
        ...

    def _logpmf(self, k: int) -> float:
        return safe_log(self._pmf(k))

    def _sf(self, k: int) -> float:
        return 1.0 - self._cdf(k)

    def _logcdf(self, k: int) -> float:
        return log_cdf(self._cdf, self._sf, k)

    def _logsf(self, k: int) -> float:
        return log_sf(self._cdf, self._sf, k)

    def _ppf(self, p: float) -> int:
        return inverse_discrete(
            self.cdf, self.sf, self.lower, self.upper, p,
            mean=self.mean(), variance=self.var(),
        )

    def _isf(self, q: float) -> int:
        return inverse_discrete(
            self.cdf, self.sf, self.lower, self.upper, q, complement=True,
            mean=self.mean(), variance=self.var(),
        )

    def pmf(self, k: int) -> float:
        """``P(X == k)``; exactly 0 outside the support."""
        k = operator.index(k)
        if k < self.lower or k > self.upper:
            return 0.0
        return self._pmf(k)

    def logpmf(self, k: int) -> float:
        k = operator.index(k)
        if k < self.lower or k > self.upper:
            return -math.inf
        return self._logpmf(k)

    def cdf(self, k: int) -> float:
        k = operator.index(k)
        if k < self.lower:
            return 0.0
        if k >= self.upper:
            return 1.0
        return self._cdf(k)

    def sf(self, k: int) -> float:
        k = operator.index(k)
        if k < self.lower:
            return 1.0
        if k >= self.upper:
            return 0.0
        return self._sf(k)

    def logcdf(self, k: int) -> float:
        k = operator.index(k)
        if k < self.lower:
            return -math.inf
        if k >= self.upper:
            return 0.0
        return self._logcdf(k)

    def logsf(self, k: int) -> float:
        k = operator.index(k)
        if k < self.lower:
            return 0.0
        if k >= self.upper:
            return -math.inf
        return self._logsf(k)

    def probability(self, x0: int, x1: int) -> float:
        """``P(x0 < X <= x1)``; a single point mass when ``x1 == x0 + 1``."""
        if x0 < x1 and x0 + 1 == x1:
            return self.pmf(x1)
        return super().probability(x0, x1)
