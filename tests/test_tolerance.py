import math

import numpy as np
import pytest

from pystatdist.tolerance import DoubleTolerance, absolute, assert_close, exact, relative, ulps


def test_absolute():
    tol = absolute(1e-3)
    assert tol.test(1.0, 1.0005)
    assert tol(1.0, 0.9995)
    assert not tol.test(1.0, 1.002)
    # Equal infinities pass through the ULP shortcut
    assert tol.test(math.inf, math.inf)
    assert not tol.test(math.inf, -math.inf)
    assert not tol.test(math.nan, math.nan)
    assert str(tol) == "abs=0.001"


def test_relative():
    tol = relative(1e-10)
    assert tol.test(1e20, 1e20 * (1 + 5e-11))
    assert not tol.test(1e-20, 2e-20)
    assert tol.test(0.0, -0.0)
    assert not tol.test(math.inf, 1e308)
    assert tol.test(math.inf, math.inf)
    assert str(tol) == "rel=1e-10"


def test_ulps():
    x = 1.0
    assert ulps(0).test(0.0, -0.0)
    assert ulps(1).test(x, np.nextafter(x, 2.0))
    assert not ulps(1).test(x, np.nextafter(np.nextafter(x, 2.0), 2.0))
    assert ulps(2).test(x, np.nextafter(np.nextafter(x, 0.0), 0.0))
    # The smallest subnormals either side of zero are 2 apart
    assert ulps(2).test(-5e-324, 5e-324)
    assert not ulps(2**62).test(math.nan, math.nan)
    assert str(ulps(3)) == "ulp=3"


def test_exact():
    tol = exact()
    assert tol.test(1.25, 1.25)
    assert not tol.test(0.0, -0.0)
    assert tol.test(math.nan, math.nan)
    assert not tol.test(1.0, np.nextafter(1.0, 2.0))
    assert str(tol) == "exact"


@pytest.mark.parametrize("bad", [-1e-3, math.nan, math.inf])
def test_invalid_epsilon(bad):
    with pytest.raises(ValueError, match="epsilon"):
        absolute(bad)
    with pytest.raises(ValueError, match="epsilon"):
        relative(bad)


@pytest.mark.parametrize("bad", [-1, 1.5, True])
def test_invalid_ulps(bad):
    with pytest.raises(ValueError, match="ULP"):
        ulps(bad)


def test_combinators():
    tol = absolute(1e-9) | relative(1e-15)
    assert str(tol) == "(abs=1e-09 || rel=1e-15)"
    assert tol.test(1e-12, 2e-12)
    assert tol.test(1e30, 1e30 * (1 + 1e-16))
    assert not tol.test(1.0, 1.1)

    both = absolute(1.0).and_(relative(0.5))
    assert str(both) == "(abs=1.0 && rel=0.5)"
    assert both.test(2.0, 2.5)
    assert not both.test(0.1, 0.9)

    either = absolute(1e-3).or_(ulps(4))
    assert either.test(1e10, np.nextafter(1e10, 2e10))


def test_combinators_short_circuit():
    calls = []

    class Recording(DoubleTolerance):
        def test(self, expected, actual):
            calls.append((expected, actual))
            return True

        def __str__(self):
            return "recording"

    (absolute(1.0) | Recording()).test(1.0, 1.5)
    assert calls == []
    (absolute(0.0) & Recording()).test(1.0, 1.5)
    assert calls == []
    (absolute(1.0) & Recording()).test(1.0, 1.5)
    assert calls == [(1.0, 1.5)]


def test_negate():
    tol = ulps(2)
    neg = ~tol
    assert str(neg) == "!(ulp=2)"
    assert neg.test(1.0, 2.0)
    assert not neg.test(1.0, 1.0)
    assert neg.negate() is tol
    assert ~neg is tol


def test_combinator_rejects_non_tolerance():
    with pytest.raises(TypeError, match="DoubleTolerance"):
        absolute(1.0) & 0.5


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        DoubleTolerance()


def test_assert_close():
    assert_close(1.0, 1.0 + 1e-17, ulps(1))
    with pytest.raises(AssertionError, match=r"density: expected 1\.0 but was 2\.0 \(abs=0\.1\)"):
        assert_close(1.0, 2.0, absolute(0.1), msg="density")
