INVALID_PROBABILITY = "Not a probability: {} is out of range [0, 1]"
INVALID_NON_ZERO_PROBABILITY = "Not a non-zero probability: {} is out of range (0, 1]"
INVALID_RANGE_LOW_GT_HIGH = "Lower bound {} > upper bound {}"
INVALID_RANGE_LOW_GTE_HIGH = "Lower bound {} >= upper bound {}"
NOT_STRICTLY_POSITIVE = "Number {} is not greater than 0"
NOT_STRICTLY_POSITIVE_FINITE = "Number {} is not greater than 0 and finite"
NEGATIVE = "Number {} is negative"
OUT_OF_RANGE = "Number {} is out of range [{}, {}]"
TOO_SMALL = "{} < {}"
TOO_LARGE = "{} > {}"
NO_PROBABILITY_MASS = "Interval [{}, {}] has no probability mass"


class DistributionError(ValueError):
    """Raised for arguments outside the domain of a distribution or operation."""

    def __init__(self, template: str, *args):
        super().__init__(template.format(*args))


class DistributionStateError(RuntimeError):
    """Raised when a distribution's forward function returns NaN during a search.

    This signals a defect in the distribution, not a numerical edge case.
    """
