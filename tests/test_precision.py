import math

import numpy as np
import pytest
from scipy import special

from pystatdist.precision import exp_mhxx, from_ordered_int, ordered_int, sqrt2xx, ulp_distance
from pystatdist.special import ERF_HALF_POINT, erf, erf_difference, gamma_ratio_half
from pystatdist.utils import DBL_MAX, check_probability, clip, safe_log
from pystatdist.exceptions import DistributionError


def test_ordered_int_is_monotone_and_adjacent():
    values = [-DBL_MAX, -1.0, -5e-324, 0.0, 5e-324, 1.0, DBL_MAX, math.inf]
    ints = [ordered_int(v) for v in values]
    assert ints == sorted(ints)
    assert ordered_int(-0.0) == ordered_int(0.0) == 0
    assert ordered_int(np.nextafter(1.0, 2.0)) - ordered_int(1.0) == 1
    assert ordered_int(5e-324) == 1
    assert ordered_int(-5e-324) == -1


@pytest.mark.parametrize("x", [0.0, 1.0, -1.0, 2.5e-310, -3.75, 1e300, -DBL_MAX, math.inf])
def test_from_ordered_int_roundtrip(x):
    assert from_ordered_int(ordered_int(x)) == x


def test_from_ordered_int_zero_is_positive():
    assert math.copysign(1.0, from_ordered_int(ordered_int(-0.0))) == 1.0


def test_ulp_distance():
    assert ulp_distance(1.0, 1.0) == 0
    assert ulp_distance(1.0, np.nextafter(1.0, 0.0)) == 1
    assert ulp_distance(-0.0, 0.0) == 0
    assert ulp_distance(math.nan, 1.0) == math.inf


@pytest.mark.parametrize("x", [0.0, 0.3, 1.0, 5.5, 20.0, 37.5, -12.25])
def test_exp_mhxx(x):
    expected = math.exp(-0.5 * x * x)
    np.testing.assert_allclose(exp_mhxx(x), expected, rtol=1e-13)


def test_exp_mhxx_underflow():
    assert exp_mhxx(60.0) == 0.0
    assert exp_mhxx(-math.inf) == 0.0


@pytest.mark.parametrize("x", [1.0, 0.1, 3.0, 1.2345e-200, 7.5e250, 1e-305])
def test_sqrt2xx(x):
    np.testing.assert_allclose(sqrt2xx(x), x * math.sqrt(2.0), rtol=5e-16)


def test_sqrt2xx_extremes():
    assert sqrt2xx(0.0) == 0.0
    assert sqrt2xx(math.inf) == math.inf
    # sqrt(2) * DBL_MAX overflows
    assert sqrt2xx(DBL_MAX) == math.inf


def test_erf_difference_matches_direct_difference():
    for x1, x2 in [(-0.3, 0.4), (-2.0, 1.0), (0.1, 0.2)]:
        np.testing.assert_allclose(erf_difference(x1, x2), erf(x2) - erf(x1), rtol=1e-14)


def test_erf_difference_in_the_tails():
    # erf(6) and erf(7) are both 1.0 in double precision
    expected = special.erfc(6.0) - special.erfc(7.0)
    assert erf(7.0) - erf(6.0) == 0.0
    np.testing.assert_allclose(erf_difference(6.0, 7.0), expected, rtol=1e-14)
    np.testing.assert_allclose(erf_difference(-7.0, -6.0), expected, rtol=1e-14)
    assert erf_difference(7.0, 6.0) == -erf_difference(6.0, 7.0)


def test_erf_half_point():
    np.testing.assert_allclose(erf(ERF_HALF_POINT), 0.5, rtol=1e-15)


def test_gamma_ratio_half():
    for a in [0.5, 1.0, 3.25, 50.0]:
        expected = math.exp(math.lgamma(a + 0.5) - math.lgamma(a))
        np.testing.assert_allclose(gamma_ratio_half(a), expected, rtol=1e-12)


def test_check_probability():
    for p in [0.0, -0.0, 0.5, 1.0]:
        check_probability(p)
    for p in [-0.1, 1.1, math.nan]:
        with pytest.raises(DistributionError, match="Not a probability"):
            check_probability(p)


def test_clip_and_safe_log():
    assert clip(-1.0, 0.0, 1.0) == 0.0
    assert clip(2.0, 0.0, 1.0) == 1.0
    assert math.isnan(clip(math.nan, 0.0, 1.0))
    assert safe_log(0.0) == -math.inf
    assert safe_log(math.e) == 1.0
    assert math.isnan(safe_log(-1.0))
