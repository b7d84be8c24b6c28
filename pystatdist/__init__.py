from importlib import metadata as _metadata

from .base import ContinuousDistribution, DiscreteDistribution
from .continuous import (
    BetaDistribution,
    CauchyDistribution,
    ChiSquaredDistribution,
    ExponentialDistribution,
    FDistribution,
    FoldedNormalDistribution,
    GammaDistribution,
    GumbelDistribution,
    LaplaceDistribution,
    LevyDistribution,
    LogCauchyDistribution,
    LogisticDistribution,
    LogNormalDistribution,
    LogUniformDistribution,
    NakagamiDistribution,
    NormalDistribution,
    ParetoDistribution,
    TDistribution,
    TrapezoidalDistribution,
    TriangularDistribution,
    TruncatedNormalDistribution,
    UniformContinuousDistribution,
    WeibullDistribution,
)
from .discrete import (
    BinomialDistribution,
    GeometricDistribution,
    HypergeometricDistribution,
    PascalDistribution,
    PoissonDistribution,
    UniformDiscreteDistribution,
    ZipfDistribution,
)
from .exceptions import DistributionError, DistributionStateError

try:  # Prefer installed package metadata
    __version__ = _metadata.version("pystatdist")
except _metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.0.0"

__all__ = [
    "ContinuousDistribution",
    "DiscreteDistribution",
    "DistributionError",
    "DistributionStateError",
    "BetaDistribution",
    "CauchyDistribution",
    "ChiSquaredDistribution",
    "ExponentialDistribution",
    "FDistribution",
    "FoldedNormalDistribution",
    "GammaDistribution",
    "GumbelDistribution",
    "LaplaceDistribution",
    "LevyDistribution",
    "LogCauchyDistribution",
    "LogisticDistribution",
    "LogNormalDistribution",
    "LogUniformDistribution",
    "NakagamiDistribution",
    "NormalDistribution",
    "ParetoDistribution",
    "TDistribution",
    "TrapezoidalDistribution",
    "TriangularDistribution",
    "TruncatedNormalDistribution",
    "UniformContinuousDistribution",
    "WeibullDistribution",
    "BinomialDistribution",
    "GeometricDistribution",
    "HypergeometricDistribution",
    "PascalDistribution",
    "PoissonDistribution",
    "UniformDiscreteDistribution",
    "ZipfDistribution",
    "__version__",
]
