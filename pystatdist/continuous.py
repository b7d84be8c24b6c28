"""Continuous distributions.

Each class validates its parameters on construction and implements the
private hooks of :class:`~pystatdist.base.ContinuousDistribution`. Quantiles
use closed forms where they exist; the remaining distributions fall back to
the generic search in :mod:`pystatdist.inversion`.
"""

import math
import warnings

from .base import ContinuousDistribution
from .exceptions import (
    INVALID_RANGE_LOW_GT_HIGH,
    NO_PROBABILITY_MASS,
    TOO_LARGE,
    TOO_SMALL,
    DistributionError,
)
from .moments import folded_normal_moments, nakagami_moments, truncated_normal_moments
from .precision import exp_mhxx, sqrt2xx
from .special import (
    erf,
    erf_difference,
    erfc,
    erfcinv,
    erfcx,
    erfinv,
    expit,
    gamma,
    gamma_ratio_half,
    inverse_normal_cdf,
    inverse_regularized_beta,
    inverse_regularized_beta_complement,
    inverse_regularized_gamma_p,
    inverse_regularized_gamma_q,
    log_beta,
    log_expit,
    log_gamma,
    log_normal_cdf,
    logit,
    regularized_beta,
    regularized_beta_complement,
    regularized_gamma_p,
    regularized_gamma_q,
    xlog1py,
    xlogy,
)
from .tails import TailEvaluator, normal_cdf, normal_probability, normal_sf
from .utils import (
    HALF_LOG_TWO_PI,
    LN_PI,
    LN_TWO,
    ROOT_TWO,
    ROOT_TWO_DIV_PI,
    SQRT_TWO_PI,
    clip,
    require_in_range,
    require_range,
    require_strictly_positive,
    safe_exp,
)

__all__ = [
    "NormalDistribution",
    "LogNormalDistribution",
    "TruncatedNormalDistribution",
    "FoldedNormalDistribution",
    "BetaDistribution",
    "GammaDistribution",
    "ChiSquaredDistribution",
    "ExponentialDistribution",
    "TDistribution",
    "FDistribution",
    "WeibullDistribution",
    "ParetoDistribution",
    "NakagamiDistribution",
    "LogisticDistribution",
    "LogUniformDistribution",
    "TriangularDistribution",
    "TrapezoidalDistribution",
    "UniformContinuousDistribution",
    "CauchyDistribution",
    "LogCauchyDistribution",
    "LaplaceDistribution",
    "GumbelDistribution",
    "LevyDistribution",
]

EULER = 0.5772156649015329
PI_SQUARED_OVER_SIX = math.pi * math.pi / 6


def _check_range(x0, x1):
    if x0 > x1:
        raise DistributionError(INVALID_RANGE_LOW_GT_HIGH, x0, x1)


class _Unbounded:
    """Mixin for distributions supported on the whole real line."""

    @property
    def lower(self):
        return -math.inf

    @property
    def upper(self):
        return math.inf


class _PositiveHalfLine:
    """Mixin for distributions supported on ``[0, inf)``."""

    @property
    def lower(self):
        return 0.0

    @property
    def upper(self):
        return math.inf


class NormalDistribution(_Unbounded, ContinuousDistribution):
    r"""Normal (Gaussian) Distribution

    $$
    f(x) = \frac{1}{\sigma\sqrt{2\pi}} e^{-\frac{1}{2}\left(\frac{x-\mu}{\sigma}\right)^2}
    $$

    Parameters
    ----------
    mean : float
        Location ``mu``.
    sd : float
        Standard deviation, ``sd > 0``.
    """

    _params = ("mean", "sd")

    def __init__(self, mean: float = 0.0, sd: float = 1.0):
        self._mean = float(mean)
        self._sd = float(require_strictly_positive(sd))
        self._log_sd_half_log_2pi = math.log(self._sd) + HALF_LOG_TWO_PI

    @property
    def sd(self) -> float:
        return self._sd

    def _z(self, x):
        return (x - self._mean) / self._sd

    def _pdf(self, x):
        return exp_mhxx(self._z(x)) / (self._sd * SQRT_TWO_PI)

    def _logpdf(self, x):
        z = self._z(x)
        return -0.5 * z * z - self._log_sd_half_log_2pi

    def _cdf(self, x):
        return normal_cdf(self._z(x))

    def _sf(self, x):
        return normal_sf(self._z(x))

    def _logcdf(self, x):
        return log_normal_cdf(self._z(x))

    def _logsf(self, x):
        return log_normal_cdf(-self._z(x))

    def _ppf(self, p):
        return self._mean + self._sd * inverse_normal_cdf(p)

    def _isf(self, q):
        return self._mean - self._sd * inverse_normal_cdf(q)

    def probability(self, x0, x1):
        _check_range(x0, x1)
        return normal_probability(self._z(x0), self._z(x1))

    def mean(self):
        return self._mean

    def var(self):
        return self._sd * self._sd

    def median(self):
        return self._mean


class LogNormalDistribution(_PositiveHalfLine, ContinuousDistribution):
    r"""Log-normal Distribution

    ``log(X)`` is normal with location ``mu`` and scale ``sigma``.
    """

    _params = ("mu", "sigma")

    def __init__(self, mu: float = 0.0, sigma: float = 1.0):
        self._mu = float(mu)
        self._sigma = float(require_strictly_positive(sigma))
        self._log_sigma_half_log_2pi = math.log(self._sigma) + HALF_LOG_TWO_PI

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def sigma(self) -> float:
        return self._sigma

    def _z(self, x):
        return (math.log(x) - self._mu) / self._sigma

    def _pdf(self, x):
        if x <= 0:
            return 0.0
        return exp_mhxx(self._z(x)) / (self._sigma * SQRT_TWO_PI * x)

    def _logpdf(self, x):
        if x <= 0:
            return -math.inf
        log_x = math.log(x)
        z = (log_x - self._mu) / self._sigma
        return -0.5 * z * z - log_x - self._log_sigma_half_log_2pi

    def _cdf(self, x):
        return normal_cdf(self._z(x))

    def _sf(self, x):
        return normal_sf(self._z(x))

    def _logcdf(self, x):
        return log_normal_cdf(self._z(x))

    def _logsf(self, x):
        return log_normal_cdf(-self._z(x))

    def _ppf(self, p):
        return safe_exp(self._mu + self._sigma * inverse_normal_cdf(p))

    def _isf(self, q):
        return safe_exp(self._mu - self._sigma * inverse_normal_cdf(q))

    def probability(self, x0, x1):
        _check_range(x0, x1)
        if x0 <= 0:
            return self.cdf(x1)
        return normal_probability(self._z(x0), self._z(x1))

    def mean(self):
        s2 = self._sigma * self._sigma
        return math.exp(self._mu + 0.5 * s2)

    def var(self):
        s2 = self._sigma * self._sigma
        return math.expm1(s2) * math.exp(2 * self._mu + s2)

    def median(self):
        return math.exp(self._mu)


class TruncatedNormalDistribution(ContinuousDistribution):
    r"""Truncated Normal Distribution

    A normal distribution ``N(mean, sd**2)`` conditioned on
    ``lower <= X <= upper``.

    Notes
    -----
    With standardised bounds $a$, $b$ the truncated mass is evaluated in one
    of three forms. When $a \ge 0$ every tail probability is expressed relative
    to $\frac{1}{2}e^{-a^2/2}$ using the scaled complementary error function,
    so windows far into the upper tail neither underflow nor cancel. The
    mirrored form is used when $b \le 0$. Windows straddling the mean use
    :func:`~pystatdist.special.erf_difference` directly.

    The moments come from :func:`~pystatdist.moments.truncated_normal_moments`.
    If the variance of a very narrow window cannot be resolved it is reported
    as 0 and a ``RuntimeWarning`` is issued.
    """

    _params = ("mean", "sd", "lower", "upper")

    def __init__(self, mean: float, sd: float, lower: float, upper: float):
        require_strictly_positive(sd)
        require_range(lower, upper)
        self._mean = float(mean)
        self._sd = float(sd)
        self._lower = float(lower)
        self._upper = float(upper)

        a = (self._lower - self._mean) / self._sd
        b = (self._upper - self._mean) / self._sd
        self._a = a
        self._b = b
        if a >= 0:
            self._form = "upper"
            self._mass = erfcx(a / ROOT_TWO) - self._upper_scaled(b)
        elif b <= 0:
            self._form = "lower"
            self._mass = erfcx(-b / ROOT_TWO) - self._lower_scaled(a)
        else:
            self._form = "central"
            self._mass = normal_probability(a, b)
        if not self._mass > 0:
            raise DistributionError(NO_PROBABILITY_MASS, lower, upper)

        self._tmean, self._tvar = truncated_normal_moments(
            self._mean, self._sd, self._lower, self._upper
        )
        if self._tvar == 0:
            warnings.warn(
                f"Variance of the normal truncated to [{lower}, {upper}] is "
                "below the resolution of double precision and is reported as 0.",
                RuntimeWarning,
                stacklevel=2,
            )

    @property
    def parent_mean(self) -> float:
        return self._mean

    @property
    def parent_sd(self) -> float:
        return self._sd

    @property
    def lower(self):
        return self._lower

    @property
    def upper(self):
        return self._upper

    def _upper_scaled(self, z):
        # sf(z) / (0.5 * exp(-a*a/2)) for z >= a >= 0
        if z == math.inf:
            return 0.0
        a = self._a
        return erfcx(z / ROOT_TWO) * math.exp(-0.5 * (z - a) * (z + a))

    def _lower_scaled(self, z):
        # cdf(z) / (0.5 * exp(-b*b/2)) for z <= b <= 0
        if z == -math.inf:
            return 0.0
        b = self._b
        return erfcx(-z / ROOT_TWO) * math.exp(-0.5 * (z - b) * (z + b))

    def _z(self, x):
        return (x - self._mean) / self._sd

    def _pdf(self, x):
        z = self._z(x)
        if self._form == "upper":
            a = self._a
            return ROOT_TWO_DIV_PI * math.exp(-0.5 * (z - a) * (z + a)) / (self._sd * self._mass)
        if self._form == "lower":
            b = self._b
            return ROOT_TWO_DIV_PI * math.exp(-0.5 * (z - b) * (z + b)) / (self._sd * self._mass)
        return exp_mhxx(z) / (SQRT_TWO_PI * self._sd * self._mass)

    def _cdf(self, x):
        z = self._z(x)
        if self._form == "upper":
            return (erfcx(self._a / ROOT_TWO) - self._upper_scaled(z)) / self._mass
        if self._form == "lower":
            return (self._lower_scaled(z) - self._lower_scaled(self._a)) / self._mass
        return normal_probability(self._a, z) / self._mass

    def _sf(self, x):
        z = self._z(x)
        if self._form == "upper":
            return (self._upper_scaled(z) - self._upper_scaled(self._b)) / self._mass
        if self._form == "lower":
            return (erfcx(-self._b / ROOT_TWO) - self._lower_scaled(z)) / self._mass
        return normal_probability(z, self._b) / self._mass

    def mean(self):
        return self._tmean

    def var(self):
        return self._tvar


class FoldedNormalDistribution(_PositiveHalfLine, ContinuousDistribution):
    r"""Folded Normal Distribution

    Distribution of ``|X|`` for ``X ~ N(mu, sigma**2)``. With ``mu == 0``
    this is the half-normal distribution, whose quantiles have a closed form.
    """

    _params = ("mu", "sigma")

    def __init__(self, mu: float, sigma: float):
        self._mu = float(mu)
        self._sigma = float(require_strictly_positive(sigma))
        self._sigma_sqrt2 = sqrt2xx(self._sigma)
        self._mean_var = folded_normal_moments(self._mu, self._sigma)

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def sigma(self) -> float:
        return self._sigma

    def _pdf(self, x):
        vm = (x - self._mu) / self._sigma
        vp = (x + self._mu) / self._sigma
        return (exp_mhxx(vm) + exp_mhxx(vp)) / (self._sigma * SQRT_TWO_PI)

    def _cdf(self, x):
        # Phi((x - m) / sigma) - Phi((-x - m) / sigma)
        m = abs(self._mu)
        s = self._sigma_sqrt2
        return 0.5 * erf_difference((m - x) / s, (x + m) / s)

    def _sf(self, x):
        s = self._sigma_sqrt2
        return 0.5 * (erfc((x - self._mu) / s) + erfc((x + self._mu) / s))

    def _ppf(self, p):
        if self._mu == 0:
            # Adding 0.0 maps -0.0 to 0.0
            return 0.0 + self._sigma_sqrt2 * erfinv(p)
        return super()._ppf(p)

    def _isf(self, q):
        if self._mu == 0:
            return self._sigma_sqrt2 * erfcinv(q)
        return super()._isf(q)

    def probability(self, x0, x1):
        _check_range(x0, x1)
        if x0 <= 0:
            return self.cdf(x1)
        s = self._sigma_sqrt2
        mu = self._mu
        return 0.5 * (
            erf_difference((x0 - mu) / s, (x1 - mu) / s)
            + erf_difference((x0 + mu) / s, (x1 + mu) / s)
        )

    def mean(self):
        return self._mean_var[0]

    def var(self):
        return self._mean_var[1]


class BetaDistribution(ContinuousDistribution):
    r"""Beta Distribution

    $$
    f(x) = \frac{x^{\alpha-1}(1-x)^{\beta-1}}{B(\alpha, \beta)}, \quad x \in [0, 1]
    $$
    """

    _params = ("alpha", "beta")

    def __init__(self, alpha: float, beta: float):
        self._alpha = float(require_strictly_positive(alpha))
        self._beta = float(require_strictly_positive(beta))
        self._log_beta = log_beta(self._alpha, self._beta)

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def beta(self) -> float:
        return self._beta

    @property
    def lower(self):
        return 0.0

    @property
    def upper(self):
        return 1.0

    def _logpdf(self, x):
        return (
            xlogy(self._alpha - 1, x)
            + xlog1py(self._beta - 1, -x)
            - self._log_beta
        )

    def _pdf(self, x):
        return math.exp(self._logpdf(x))

    def _cdf(self, x):
        return regularized_beta(x, self._alpha, self._beta)

    def _sf(self, x):
        return regularized_beta_complement(x, self._alpha, self._beta)

    def _ppf(self, p):
        return inverse_regularized_beta(p, self._alpha, self._beta)

    def _isf(self, q):
        return inverse_regularized_beta_complement(q, self._alpha, self._beta)

    def mean(self):
        return self._alpha / (self._alpha + self._beta)

    def var(self):
        a, b = self._alpha, self._beta
        ab = a + b
        return a * b / (ab * ab * (ab + 1))


class GammaDistribution(_PositiveHalfLine, ContinuousDistribution):
    r"""Gamma Distribution

    $$
    f(x) = \frac{x^{k-1} e^{-x/\theta}}{\Gamma(k)\,\theta^k}
    $$

    Parameters
    ----------
    shape : float
        ``k > 0``.
    scale : float
        ``theta > 0``.
    """

    _params = ("shape", "scale")

    def __init__(self, shape: float, scale: float = 1.0):
        self._shape = float(require_strictly_positive(shape))
        self._scale = float(require_strictly_positive(scale))
        self._log_norm = log_gamma(self._shape) + self._shape * math.log(self._scale)

    @property
    def shape(self) -> float:
        return self._shape

    @property
    def scale(self) -> float:
        return self._scale

    def _logpdf(self, x):
        return xlogy(self._shape - 1, x) - x / self._scale - self._log_norm

    def _pdf(self, x):
        return math.exp(self._logpdf(x))

    def _cdf(self, x):
        return regularized_gamma_p(self._shape, x / self._scale)

    def _sf(self, x):
        return regularized_gamma_q(self._shape, x / self._scale)

    def _ppf(self, p):
        return self._scale * inverse_regularized_gamma_p(self._shape, p)

    def _isf(self, q):
        return self._scale * inverse_regularized_gamma_q(self._shape, q)

    def mean(self):
        return self._shape * self._scale

    def var(self):
        return self._shape * self._scale * self._scale


class ChiSquaredDistribution(GammaDistribution):
    """Chi-squared distribution with ``dof`` degrees of freedom (``Gamma(dof/2, 2)``)."""

    _params = ("dof",)

    def __init__(self, dof: float):
        self._dof = float(require_strictly_positive(dof))
        super().__init__(self._dof / 2, 2.0)

    @property
    def dof(self) -> float:
        return self._dof


class ExponentialDistribution(_PositiveHalfLine, ContinuousDistribution):
    """Exponential distribution parameterised by its mean."""

    _params = ("mean",)

    def __init__(self, mean: float = 1.0):
        self._mean = float(require_strictly_positive(mean))
        self._log_mean = math.log(self._mean)

    def _pdf(self, x):
        return math.exp(-x / self._mean) / self._mean

    def _logpdf(self, x):
        return -x / self._mean - self._log_mean

    def _cdf(self, x):
        return -math.expm1(-x / self._mean)

    def _sf(self, x):
        return math.exp(-x / self._mean)

    def _logsf(self, x):
        return -x / self._mean

    def _ppf(self, p):
        return -self._mean * math.log1p(-p)

    def _isf(self, q):
        return -self._mean * math.log(q)

    def mean(self):
        return self._mean

    def var(self):
        return self._mean * self._mean

    def median(self):
        return self._mean * LN_TWO


class TDistribution(_Unbounded, ContinuousDistribution):
    r"""Student's t Distribution

    Both tails are evaluated from the same incomplete beta expression,

    $$
    P(T > |t|) = \tfrac{1}{2} I_{\nu/(\nu + t^2)}(\nu/2, 1/2),
    $$

    combined by a :class:`~pystatdist.tails.TailEvaluator` pivoting at 0.
    The mean is NaN for ``dof <= 1``; the variance is infinite for
    ``1 < dof <= 2`` and NaN for ``dof <= 1``.
    """

    _params = ("dof",)

    def __init__(self, dof: float):
        v = float(require_strictly_positive(dof))
        self._dof = v
        if math.isinf(v):
            # Limiting normal distribution
            self._log_factor = -HALF_LOG_TWO_PI
            self._tails = TailEvaluator(normal_cdf, normal_sf, 0.0)
        else:
            self._log_factor = math.log(gamma_ratio_half(0.5 * v)) - 0.5 * (
                math.log(v) + LN_PI
            )
            self._tails = TailEvaluator(self._tail_below, self._tail_above, 0.0)

    @property
    def dof(self) -> float:
        return self._dof

    def _tail(self, x):
        v = self._dof
        xx = x * x
        if xx < v:
            # Near the centre the complement keeps the small offset from 1/2
            return 0.5 * regularized_beta_complement(xx / (v + xx), 0.5, 0.5 * v)
        return 0.5 * regularized_beta(v / (v + xx), 0.5 * v, 0.5)

    def _tail_below(self, x):
        return self._tail(x)

    def _tail_above(self, x):
        return self._tail(x)

    def _logpdf(self, x):
        v = self._dof
        if math.isinf(v):
            return self._log_factor - 0.5 * x * x
        return self._log_factor - 0.5 * (v + 1) * math.log1p(x * x / v)

    def _pdf(self, x):
        return math.exp(self._logpdf(x))

    def _cdf(self, x):
        return self._tails.cdf(x)

    def _sf(self, x):
        return self._tails.sf(x)

    def _logcdf(self, x):
        return self._tails.logcdf(x)

    def _logsf(self, x):
        return self._tails.logsf(x)

    def mean(self):
        return 0.0 if self._dof > 1 else math.nan

    def var(self):
        v = self._dof
        if math.isinf(v):
            return 1.0
        if v > 2:
            return v / (v - 2)
        if v > 1:
            return math.inf
        return math.nan

    def median(self):
        return 0.0


class FDistribution(_PositiveHalfLine, ContinuousDistribution):
    """Fisher-Snedecor F distribution with ``d1`` and ``d2`` degrees of freedom."""

    _params = ("d1", "d2")

    def __init__(self, d1: float, d2: float):
        self._d1 = float(require_strictly_positive(d1))
        self._d2 = float(require_strictly_positive(d2))
        n, m = self._d1, self._d2
        self._log_norm = (
            0.5 * n * math.log(n) + 0.5 * m * math.log(m) - log_beta(0.5 * n, 0.5 * m)
        )

    @property
    def d1(self) -> float:
        return self._d1

    @property
    def d2(self) -> float:
        return self._d2

    def _density_at_zero(self):
        if self._d1 < 2:
            return math.inf
        return 1.0 if self._d1 == 2 else 0.0

    def _logpdf(self, x):
        if x == 0:
            return math.log(self._density_at_zero()) if self._d1 <= 2 else -math.inf
        n, m = self._d1, self._d2
        return self._log_norm + (0.5 * n - 1) * math.log(x) - 0.5 * (n + m) * math.log(n * x + m)

    def _pdf(self, x):
        if x == 0:
            return self._density_at_zero()
        return math.exp(self._logpdf(x))

    def _cdf(self, x):
        n, m = self._d1, self._d2
        nx = n * x
        if nx > m:
            return regularized_beta_complement(m / (m + nx), 0.5 * m, 0.5 * n)
        return regularized_beta(nx / (m + nx), 0.5 * n, 0.5 * m)

    def _sf(self, x):
        n, m = self._d1, self._d2
        nx = n * x
        if nx > m:
            return regularized_beta(m / (m + nx), 0.5 * m, 0.5 * n)
        return regularized_beta_complement(nx / (m + nx), 0.5 * n, 0.5 * m)

    def mean(self):
        m = self._d2
        return m / (m - 2) if m > 2 else math.nan

    def var(self):
        n, m = self._d1, self._d2
        if m <= 4:
            return math.nan
        return (2 * m * m * (n + m - 2)) / (n * (m - 2) * (m - 2) * (m - 4))


class WeibullDistribution(_PositiveHalfLine, ContinuousDistribution):
    """Weibull distribution with ``shape`` (k) and ``scale`` (lambda)."""

    _params = ("shape", "scale")

    def __init__(self, shape: float, scale: float = 1.0):
        self._shape = float(require_strictly_positive(shape))
        self._scale = float(require_strictly_positive(scale))

    @property
    def shape(self) -> float:
        return self._shape

    @property
    def scale(self) -> float:
        return self._scale

    def _pdf(self, x):
        k, lam = self._shape, self._scale
        if x == 0:
            if k < 1:
                return math.inf
            return 1.0 / lam if k == 1 else 0.0
        t = x / lam
        tk1 = t ** (k - 1)
        return (k / lam) * tk1 * math.exp(-tk1 * t)

    def _logpdf(self, x):
        k, lam = self._shape, self._scale
        if x == 0:
            return math.log(self._pdf(x)) if k <= 1 else -math.inf
        t = x / lam
        return math.log(k / lam) + (k - 1) * math.log(t) - t**k

    def _cdf(self, x):
        return -math.expm1(-((x / self._scale) ** self._shape))

    def _sf(self, x):
        return math.exp(-((x / self._scale) ** self._shape))

    def _logsf(self, x):
        return -((x / self._scale) ** self._shape)

    def _ppf(self, p):
        return self._scale * (-math.log1p(-p)) ** (1 / self._shape)

    def _isf(self, q):
        return self._scale * (-math.log(q)) ** (1 / self._shape)

    def mean(self):
        return self._scale * gamma(1 + 1 / self._shape)

    def var(self):
        m = self.mean()
        return self._scale * self._scale * gamma(1 + 2 / self._shape) - m * m


class ParetoDistribution(ContinuousDistribution):
    r"""Pareto Distribution

    $$
    F(x) = 1 - \left(\frac{x_m}{x}\right)^\alpha, \quad x \ge x_m
    $$

    The mean is infinite for ``shape <= 1`` and the variance for ``shape <= 2``.
    """

    _params = ("scale", "shape")

    def __init__(self, scale: float, shape: float):
        self._scale = float(require_strictly_positive(scale))
        self._shape = float(require_strictly_positive(shape))
        self._log_shape_div_scale = math.log(self._shape / self._scale)

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def shape(self) -> float:
        return self._shape

    @property
    def lower(self):
        return self._scale

    @property
    def upper(self):
        return math.inf

    def _logpdf(self, x):
        return self._log_shape_div_scale - (self._shape + 1) * math.log(x / self._scale)

    def _pdf(self, x):
        return math.exp(self._logpdf(x))

    def _logsf(self, x):
        return self._shape * math.log(self._scale / x)

    def _cdf(self, x):
        return -math.expm1(self._logsf(x))

    def _sf(self, x):
        return math.exp(self._logsf(x))

    def _ppf(self, p):
        return self._scale * math.exp(-math.log1p(-p) / self._shape)

    def _isf(self, q):
        return self._scale * math.exp(-math.log(q) / self._shape)

    def mean(self):
        a = self._shape
        if a <= 1:
            return math.inf
        return a * self._scale / (a - 1)

    def var(self):
        a = self._shape
        if a <= 2:
            return math.inf
        s = self._scale
        return s * s * a / ((a - 1) * (a - 1) * (a - 2))


class NakagamiDistribution(_PositiveHalfLine, ContinuousDistribution):
    """
    Nakagami distribution with shape ``mu`` and spread ``omega``.

    Moments come from :func:`~pystatdist.moments.nakagami_moments`;
    quantiles use the generic search.
    """

    _params = ("mu", "omega")

    def __init__(self, mu: float, omega: float):
        self._mu = float(require_strictly_positive(mu))
        self._omega = float(require_strictly_positive(omega))
        mu, omega = self._mu, self._omega
        self._log_norm = LN_TWO + mu * math.log(mu / omega) - log_gamma(mu)
        self._mean_var = nakagami_moments(mu, omega)

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def omega(self) -> float:
        return self._omega

    def _logpdf(self, x):
        mu = self._mu
        return self._log_norm + xlogy(2 * mu - 1, x) - mu * x * x / self._omega

    def _pdf(self, x):
        return math.exp(self._logpdf(x))

    def _cdf(self, x):
        return regularized_gamma_p(self._mu, self._mu * x * x / self._omega)

    def _sf(self, x):
        return regularized_gamma_q(self._mu, self._mu * x * x / self._omega)

    def mean(self):
        return self._mean_var[0]

    def var(self):
        return self._mean_var[1]


class LogisticDistribution(_Unbounded, ContinuousDistribution):
    """Logistic distribution with location ``mu`` and scale ``s``."""

    _params = ("mu", "s")

    def __init__(self, mu: float = 0.0, s: float = 1.0):
        self._mu = float(mu)
        self._s = float(require_strictly_positive(s))
        self._log_s = math.log(self._s)

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def s(self) -> float:
        return self._s

    def _z(self, x):
        return (x - self._mu) / self._s

    def _pdf(self, x):
        e = math.exp(-abs(self._z(x)))
        return e / (self._s * (1 + e) * (1 + e))

    def _logpdf(self, x):
        z = abs(self._z(x))
        return -z - 2 * math.log1p(math.exp(-z)) - self._log_s

    def _cdf(self, x):
        return expit(self._z(x))

    def _sf(self, x):
        return expit(-self._z(x))

    def _logcdf(self, x):
        return log_expit(self._z(x))

    def _logsf(self, x):
        return log_expit(-self._z(x))

    def _ppf(self, p):
        return self._mu + self._s * logit(p)

    def _isf(self, q):
        return self._mu - self._s * logit(q)

    def mean(self):
        return self._mu

    def var(self):
        t = math.pi * self._s
        return t * t / 3

    def median(self):
        return self._mu


class LogUniformDistribution(ContinuousDistribution):
    """Reciprocal distribution: ``log(X)`` is uniform on ``[log(a), log(b)]``."""

    _params = ("a", "b")

    def __init__(self, a: float, b: float):
        require_strictly_positive(a)
        require_range(a, b)
        self._a = float(a)
        self._b = float(b)
        self._log_a = math.log(self._a)
        self._log_b = math.log(self._b)
        self._log_ratio = self._log_b - self._log_a

    @property
    def lower(self):
        return self._a

    @property
    def upper(self):
        return self._b

    def _pdf(self, x):
        return 1.0 / (x * self._log_ratio)

    def _logpdf(self, x):
        return -math.log(x) - math.log(self._log_ratio)

    def _cdf(self, x):
        return (math.log(x) - self._log_a) / self._log_ratio

    def _sf(self, x):
        return (self._log_b - math.log(x)) / self._log_ratio

    def _ppf(self, p):
        return clip(math.exp(self._log_a + p * self._log_ratio), self._a, self._b)

    def _isf(self, q):
        return clip(math.exp(self._log_b - q * self._log_ratio), self._a, self._b)

    def mean(self):
        return (self._b - self._a) / self._log_ratio

    def var(self):
        a, b = self._a, self._b
        m = self.mean()
        return (b - a) * (b + a) / (2 * self._log_ratio) - m * m


class TriangularDistribution(ContinuousDistribution):
    """Triangular distribution on ``[a, b]`` with mode ``c``."""

    _params = ("a", "c", "b")

    def __init__(self, a: float, c: float, b: float):
        require_range(a, b)
        require_in_range(c, a, b)
        self._a = float(a)
        self._c = float(c)
        self._b = float(b)
        self._width = self._b - self._a
        # Mass below the mode
        self._p_mode = (self._c - self._a) / self._width

    @property
    def mode(self) -> float:
        return self._c

    @property
    def lower(self):
        return self._a

    @property
    def upper(self):
        return self._b

    def _pdf(self, x):
        a, b, c, w = self._a, self._b, self._c, self._width
        if x < c:
            return 2 * (x - a) / (w * (c - a))
        if x == c:
            return 2 / w
        return 2 * (b - x) / (w * (b - c))

    def _cdf(self, x):
        a, b, c, w = self._a, self._b, self._c, self._width
        if x < c:
            return (x - a) * (x - a) / (w * (c - a))
        if x == c:
            return self._p_mode
        return 1 - (b - x) * (b - x) / (w * (b - c))

    def _sf(self, x):
        a, b, c, w = self._a, self._b, self._c, self._width
        if x < c:
            return 1 - (x - a) * (x - a) / (w * (c - a))
        if x == c:
            return (b - c) / w
        return (b - x) * (b - x) / (w * (b - c))

    def _ppf(self, p):
        a, b, c, w = self._a, self._b, self._c, self._width
        if p < self._p_mode:
            return a + math.sqrt(p * w * (c - a))
        return b - math.sqrt((1 - p) * w * (b - c))

    def _isf(self, q):
        a, b, c, w = self._a, self._b, self._c, self._width
        if q > (b - c) / w:
            return a + math.sqrt((1 - q) * w * (c - a))
        return b - math.sqrt(q * w * (b - c))

    def mean(self):
        return (self._a + self._b + self._c) / 3

    def var(self):
        a, b, c = self._a, self._b, self._c
        return (a * a + b * b + c * c - a * b - a * c - b * c) / 18


class TrapezoidalDistribution(ContinuousDistribution):
    r"""Trapezoidal Distribution

    Density rising linearly on ``[a, b]``, constant on ``[b, c]`` and
    falling linearly on ``[c, d]``. The triangular (``b == c``) and uniform
    (``a == b`` and ``c == d``) distributions are special cases.

    $$
    F(x) = \frac{(x - a)^2}{(b - a)(d + c - a - b)}, \quad a \le x < b
    $$
    """

    _params = ("a", "b", "c", "d")

    def __init__(self, a: float, b: float, c: float, d: float):
        require_range(a, d)
        if b < a:
            raise DistributionError(TOO_SMALL, b, a)
        if c < b:
            raise DistributionError(TOO_SMALL, c, b)
        if c > d:
            raise DistributionError(TOO_LARGE, c, d)
        self._a = float(a)
        self._b = float(b)
        self._c = float(c)
        self._d = float(d)
        self._divisor = (self._d - self._a) + (self._c - self._b)
        self._bma = self._b - self._a
        self._dmc = self._d - self._c
        self._cdf_b = self._bma / self._divisor
        self._sf_c = self._dmc / self._divisor

    @property
    def b(self) -> float:
        return self._b

    @property
    def c(self) -> float:
        return self._c

    @property
    def lower(self):
        return self._a

    @property
    def upper(self):
        return self._d

    def _pdf(self, x):
        if x < self._b:
            return 2 * ((x - self._a) / self._bma) / self._divisor
        if x <= self._c:
            return 2 / self._divisor
        return 2 * ((self._d - x) / self._dmc) / self._divisor

    def _cdf(self, x):
        a, b, c, d = self._a, self._b, self._c, self._d
        if x < b:
            return (x - a) * (x - a) / self._bma / self._divisor
        if x < c:
            return (2 * x - b - a) / self._divisor
        return 1 - (d - x) * (d - x) / self._dmc / self._divisor

    def _sf(self, x):
        a, b, c, d = self._a, self._b, self._c, self._d
        if x < b:
            return 1 - (x - a) * (x - a) / self._bma / self._divisor
        if x < c:
            return (d + c - 2 * x) / self._divisor
        return (d - x) * (d - x) / self._dmc / self._divisor

    def _ppf(self, p):
        a, b, d = self._a, self._b, self._d
        if p < self._cdf_b:
            x = a + math.sqrt(p * self._divisor * self._bma)
        elif p < 1 - self._sf_c:
            x = 0.5 * (p * self._divisor + a + b)
        else:
            x = d - math.sqrt((1 - p) * self._divisor * self._dmc)
        return clip(x, a, d)

    def _isf(self, q):
        a, c, d = self._a, self._c, self._d
        if q > 1 - self._cdf_b:
            x = a + math.sqrt((1 - q) * self._divisor * self._bma)
        elif q > self._sf_c:
            x = 0.5 * (d + c - q * self._divisor)
        else:
            x = d - math.sqrt(q * self._divisor * self._dmc)
        return clip(x, a, d)

    def _moment(self, k):
        # Raw moment of the trapezoid rescaled to [0, 1]
        scale = self._d - self._a
        b = self._bma / scale
        c = (self._c - self._a) / scale
        if c == 1:
            t1 = k + 2
        elif c == 0:
            t1 = 1.0
        else:
            t1 = math.expm1((k + 2) * math.log(c)) / (c - 1)
        t2 = b ** (k + 1)
        return 2 * ((t1 - t2) / (c - b + 1) / ((k + 1) * (k + 2)))

    def mean(self):
        return self._moment(1) * (self._d - self._a) + self._a

    def var(self):
        scale = self._d - self._a
        m1 = self._moment(1)
        return (self._moment(2) - m1 * m1) * scale * scale


class UniformContinuousDistribution(ContinuousDistribution):
    """Uniform distribution on ``[lower, upper]``."""

    _params = ("lower", "upper")

    def __init__(self, lower: float = 0.0, upper: float = 1.0):
        require_range(lower, upper)
        self._lower = float(lower)
        self._upper = float(upper)
        self._width = self._upper - self._lower

    @property
    def lower(self):
        return self._lower

    @property
    def upper(self):
        return self._upper

    def _pdf(self, x):
        return 1.0 / self._width

    def _cdf(self, x):
        return (x - self._lower) / self._width

    def _sf(self, x):
        return (self._upper - x) / self._width

    def _ppf(self, p):
        return clip(p * self._upper + (1 - p) * self._lower, self._lower, self._upper)

    def _isf(self, q):
        return clip(q * self._lower + (1 - q) * self._upper, self._lower, self._upper)

    def mean(self):
        return 0.5 * (self._lower + self._upper)

    def var(self):
        return self._width * self._width / 12


class CauchyDistribution(_Unbounded, ContinuousDistribution):
    """
    Cauchy distribution with location ``median`` and ``scale``.

    The CDF is written with ``atan2`` so that neither tail cancels against
    one half. Mean and variance are undefined (NaN).
    """

    _params = ("median", "scale")

    def __init__(self, median: float = 0.0, scale: float = 1.0):
        self._median = float(median)
        self._scale = float(require_strictly_positive(scale))

    @property
    def scale(self) -> float:
        return self._scale

    def _z(self, x):
        return (x - self._median) / self._scale

    def _pdf(self, x):
        z = self._z(x)
        return 1.0 / (math.pi * self._scale * (1 + z * z))

    def _logpdf(self, x):
        z = self._z(x)
        return -math.log(math.pi * self._scale) - math.log1p(z * z)

    def _cdf(self, x):
        return math.atan2(1.0, -self._z(x)) / math.pi

    def _sf(self, x):
        return math.atan2(1.0, self._z(x)) / math.pi

    def _ppf(self, p):
        if p == 0.5:
            return self._median
        if p > 0.5:
            return self._median + self._scale / math.tan(math.pi * (1 - p))
        return self._median - self._scale / math.tan(math.pi * p)

    def _isf(self, q):
        if q == 0.5:
            return self._median
        if q > 0.5:
            return self._median - self._scale / math.tan(math.pi * (1 - q))
        return self._median + self._scale / math.tan(math.pi * q)

    def mean(self):
        return math.nan

    def var(self):
        return math.nan

    def median(self):
        return self._median


class LogCauchyDistribution(_PositiveHalfLine, ContinuousDistribution):
    """
    Distribution of ``exp(Y)`` for Cauchy ``Y`` with location ``mu`` and
    scale ``sigma``.

    Every positive moment is infinite.
    """

    _params = ("mu", "sigma")

    def __init__(self, mu: float = 0.0, sigma: float = 1.0):
        self._mu = float(mu)
        self._sigma = float(require_strictly_positive(sigma))

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def sigma(self) -> float:
        return self._sigma

    def _z(self, x):
        return (math.log(x) - self._mu) / self._sigma

    def _pdf(self, x):
        if x <= 0:
            return 0.0
        z = self._z(x)
        return 1.0 / (math.pi * self._sigma * x * (1 + z * z))

    def _logpdf(self, x):
        if x <= 0:
            return -math.inf
        z = self._z(x)
        return -math.log(math.pi * self._sigma) - math.log(x) - math.log1p(z * z)

    def _cdf(self, x):
        return math.atan2(1.0, -self._z(x)) / math.pi

    def _sf(self, x):
        return math.atan2(1.0, self._z(x)) / math.pi

    def _quantile(self, z):
        return safe_exp(self._mu + self._sigma * z)

    def _ppf(self, p):
        if p == 0.5:
            return self.median()
        if p > 0.5:
            return self._quantile(1.0 / math.tan(math.pi * (1 - p)))
        return self._quantile(-1.0 / math.tan(math.pi * p))

    def _isf(self, q):
        if q == 0.5:
            return self.median()
        if q > 0.5:
            return self._quantile(-1.0 / math.tan(math.pi * (1 - q)))
        return self._quantile(1.0 / math.tan(math.pi * q))

    def mean(self):
        return math.inf

    def var(self):
        return math.inf

    def median(self):
        return safe_exp(self._mu)


class LaplaceDistribution(_Unbounded, ContinuousDistribution):
    """Laplace (double exponential) distribution with location ``mu`` and scale ``beta``."""

    _params = ("mu", "beta")

    def __init__(self, mu: float = 0.0, beta: float = 1.0):
        self._mu = float(mu)
        self._beta = float(require_strictly_positive(beta))
        self._log_2beta = math.log(2 * self._beta)
        self._tails = TailEvaluator(self._tail_below, self._tail_above, self._mu)

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def beta(self) -> float:
        return self._beta

    def _tail_below(self, x):
        return 0.5 * math.exp((x - self._mu) / self._beta)

    def _tail_above(self, x):
        return 0.5 * math.exp((self._mu - x) / self._beta)

    def _pdf(self, x):
        return math.exp(-abs(x - self._mu) / self._beta) / (2 * self._beta)

    def _logpdf(self, x):
        return -abs(x - self._mu) / self._beta - self._log_2beta

    def _cdf(self, x):
        return self._tails.cdf(x)

    def _sf(self, x):
        return self._tails.sf(x)

    def _logcdf(self, x):
        return self._tails.logcdf(x)

    def _logsf(self, x):
        return self._tails.logsf(x)

    def _ppf(self, p):
        t = -math.log(2 * (1 - p)) if p > 0.5 else math.log(2 * p)
        return self._mu + self._beta * t

    def _isf(self, q):
        t = math.log(2 * (1 - q)) if q > 0.5 else -math.log(2 * q)
        return self._mu + self._beta * t

    def mean(self):
        return self._mu

    def var(self):
        return 2 * self._beta * self._beta

    def median(self):
        return self._mu


class GumbelDistribution(_Unbounded, ContinuousDistribution):
    """Gumbel (type I extreme value) distribution with location ``mu`` and scale ``beta``."""

    _params = ("mu", "beta")

    def __init__(self, mu: float = 0.0, beta: float = 1.0):
        self._mu = float(mu)
        self._beta = float(require_strictly_positive(beta))

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def beta(self) -> float:
        return self._beta

    def _z(self, x):
        return (x - self._mu) / self._beta

    def _pdf(self, x):
        z = self._z(x)
        return math.exp(-z - math.exp(-z)) / self._beta

    def _logpdf(self, x):
        z = self._z(x)
        return -z - math.exp(-z) - math.log(self._beta)

    def _cdf(self, x):
        return math.exp(-math.exp(-self._z(x)))

    def _sf(self, x):
        return -math.expm1(-math.exp(-self._z(x)))

    def _logcdf(self, x):
        return -math.exp(-self._z(x))

    def _ppf(self, p):
        return self._mu - self._beta * math.log(-math.log(p))

    def _isf(self, q):
        return self._mu - self._beta * math.log(-math.log1p(-q))

    def mean(self):
        return self._mu + EULER * self._beta

    def var(self):
        return PI_SQUARED_OVER_SIX * self._beta * self._beta

    def median(self):
        return self._mu - self._beta * math.log(LN_TWO)


class LevyDistribution(ContinuousDistribution):
    """
    Levy distribution with location ``mu`` and scale ``c``.

    Support is ``[mu, inf)``; mean and variance are infinite.
    """

    _params = ("mu", "c")

    def __init__(self, mu: float = 0.0, c: float = 1.0):
        self._mu = float(mu)
        self._c = float(require_strictly_positive(c))
        self._half_c = 0.5 * self._c

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def c(self) -> float:
        return self._c

    @property
    def lower(self):
        return self._mu

    @property
    def upper(self):
        return math.inf

    def _pdf(self, x):
        if x <= self._mu:
            return 0.0
        delta = x - self._mu
        f = self._half_c / delta
        return math.sqrt(f / math.pi) * math.exp(-f) / delta

    def _logpdf(self, x):
        if x <= self._mu:
            return -math.inf
        delta = x - self._mu
        f = self._half_c / delta
        return 0.5 * math.log(f / math.pi) - f - math.log(delta)

    def _cdf(self, x):
        return erfc(math.sqrt(self._half_c / (x - self._mu)))

    def _sf(self, x):
        return erf(math.sqrt(self._half_c / (x - self._mu)))

    def _ppf(self, p):
        t = erfcinv(p)
        return self._mu + self._half_c / (t * t)

    def _isf(self, q):
        t = erfinv(q)
        return self._mu + self._half_c / (t * t)

    def mean(self):
        return math.inf

    def var(self):
        return math.inf
