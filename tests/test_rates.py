"""
Unit tests for rates and compounding conventions.
"""

import math
import numpy as np
import pytest

from termfit import DomainError
from termfit.conventions import Continuous, Periodic, convention_from_frequency
from termfit.rates import (
    Rate,
    continuous,
    periodic,
    as_rate,
    rate,
    approx_equal,
    convert,
    discount,
    accumulation,
    forward,
)


class TestConventions:
    """Tests for compounding conventions."""

    def test_periodic_equality(self):
        assert Periodic(2) == Periodic(2.0)
        assert Periodic(2) != Periodic(4)
        assert Continuous() == Continuous()
        assert Continuous() != Periodic(1)

    @pytest.mark.parametrize("frequency", [0, -1, math.inf, float("nan")])
    def test_invalid_frequency(self, frequency):
        with pytest.raises(DomainError):
            Periodic(frequency)

    def test_from_frequency(self):
        assert convention_from_frequency(math.inf) == Continuous()
        assert convention_from_frequency(12) == Periodic(12)
        assert convention_from_frequency(Continuous()) == Continuous()


class TestRateTypes:
    """Tests for Rate construction and accessors."""

    def test_rate_value(self):
        rs = [Rate(v, Continuous()) for v in [0.1, 0.02]]
        assert rs[0] == Rate(0.1, Continuous())
        assert rate(rs[0]) == 0.1

    def test_constructors(self):
        assert continuous(0.05) == Rate(0.05, Continuous())
        assert periodic(0.02, 2) == Rate(0.02, Periodic(2))
        assert Rate(0.02, 2) == Rate(0.02, Periodic(2))
        assert Rate(0.02, math.inf) == Rate(0.02, Continuous())

    def test_default_convention_is_annual(self):
        assert Rate(0.03).convention == Periodic(1)
        assert as_rate(0.03) == Rate(0.03, Periodic(1))
        assert rate(0.03) == 0.03

    def test_rate_is_immutable(self):
        r = continuous(0.05)
        with pytest.raises(AttributeError):
            r.value = 0.06

    def test_rate_spread(self):
        r = periodic(0.02, 2) + 0.01
        assert r.convention == Periodic(2)
        assert abs(r.value - 0.03) < 1e-15

        assert (continuous(0.05) - continuous(0.01)).isclose(continuous(0.04))

        with pytest.raises(DomainError):
            continuous(0.05) + periodic(0.01, 2)


class TestConversions:
    """Tests for conversions between conventions."""

    def test_periodic_to_continuous(self):
        m = Rate(0.1, Periodic(2))
        c = convert(Continuous(), m)
        assert c.convention == Continuous()
        assert abs(c.value - 0.09758) < 1e-5

    def test_continuous_identity(self):
        c = Rate(0.09758, Continuous())
        assert convert(Continuous(), c) == c
        assert convert(Continuous(), c) is c

    def test_continuous_to_periodic(self):
        c = Rate(0.09758, Continuous())
        assert abs(convert(Periodic(2), c).value - 0.1) < 1e-5

    def test_periodic_to_periodic(self):
        m = Rate(0.1, Periodic(2))
        q = convert(Periodic(4), m)
        assert q.convention == Periodic(4)
        assert abs(q.value - 0.09878030638383972) < 1e-5

    def test_convert_accepts_frequency(self):
        m = Rate(0.1, Periodic(2))
        assert convert(math.inf, m).convention == Continuous()
        assert convert(4, m).convention == Periodic(4)

    @pytest.mark.parametrize("r", [
        Rate(0.05, Continuous()),
        Rate(-0.01, Continuous()),
        Rate(0.1, Periodic(2)),
        Rate(0.03, Periodic(12)),
        Rate(0.035, Periodic(1)),
    ])
    @pytest.mark.parametrize("target", [Continuous(), Periodic(1), Periodic(2), Periodic(365)])
    def test_round_trip(self, r, target):
        """Converting there and back recovers the rate."""
        back = convert(r.convention, convert(target, r))
        assert back.isclose(r)

    @pytest.mark.parametrize("target", [Continuous(), Periodic(1), Periodic(4)])
    def test_conversion_preserves_discount(self, target):
        r = Rate(0.07, Periodic(2))
        converted = convert(target, r)
        for t in [0.5, 1.0, 7.3, 30.0]:
            assert abs(discount(converted, t) - discount(r, t)) < 1e-12

    def test_rate_below_floor(self):
        with pytest.raises(DomainError):
            convert(Continuous(), Rate(-2.5, Periodic(2)))
        with pytest.raises(DomainError):
            convert(Periodic(4), Rate(-1.0, Periodic(1)))


class TestRateEquality:
    """Exact versus approximate equality."""

    def test_equality(self):
        a = periodic(0.02, 2)
        b = periodic(0.03, 2)
        c = continuous(0.02)

        assert a == a
        assert a != b
        assert not a.isclose(b)
        assert a.isclose(a)
        assert not a.isclose(c)

    def test_tiny_difference(self):
        a = periodic(0.02, 2)
        b = periodic(0.02 + 1e-10, 2)
        assert a != b
        assert a.isclose(b)
        assert approx_equal(a, b)

    def test_convention_mismatch_never_equal(self):
        p = periodic(0.02, 2)
        c = convert(Continuous(), p)
        assert c != p
        assert not approx_equal(c, p)
        # same discount factor nonetheless
        assert abs(discount(c, 3.0) - discount(p, 3.0)) < 1e-14


class TestDiscountAccumulation:
    """Tests for discount and accumulation factors."""

    t = 2.46

    def test_discount(self):
        assert abs(discount(0.035, self.t) - (1 + 0.035) ** (-self.t)) < 1e-12
        assert abs(discount(periodic(0.02, 2), self.t) - (1 + 0.02 / 2) ** (-self.t * 2)) < 1e-12
        assert abs(discount(continuous(0.03), self.t) - np.exp(-0.03 * self.t)) < 1e-12

    def test_accumulation(self):
        assert abs(accumulation(0.035, self.t) - (1 + 0.035) ** self.t) < 1e-12
        assert abs(accumulation(periodic(0.02, 2), self.t) - (1 + 0.02 / 2) ** (self.t * 2)) < 1e-12
        assert abs(accumulation(continuous(0.03), self.t) - np.exp(0.03 * self.t)) < 1e-12

    @pytest.mark.parametrize("r", [0.035, periodic(0.02, 2), continuous(0.03), continuous(-0.01)])
    @pytest.mark.parametrize("t", [0.0, 0.25, 2.46, 30.0])
    def test_duality(self, r, t):
        assert discount(r, t) * accumulation(r, t) == pytest.approx(1.0, abs=1e-15)

    def test_zero_horizon(self):
        assert discount(continuous(0.05), 0.0) == 1.0
        assert accumulation(periodic(0.05, 2), 0.0) == 1.0

    def test_array_horizons(self):
        times = np.array([1.0, 2.0, 3.0])
        dfs = discount(continuous(0.05), times)
        np.testing.assert_allclose(dfs, np.exp(-0.05 * times))


class TestIntervals:
    """Tests for the interval forms."""

    def test_rate_over_interval(self):
        start = -0.45
        end = 3.4
        r = 0.15

        assert abs(discount(r, start, end) - discount(r, end - start)) < 1e-12
        assert abs(accumulation(r, start, end) - accumulation(r, end - start)) < 1e-12

    def test_negative_interval_inverts(self):
        r = continuous(0.04)
        assert abs(discount(r, 3.0, 1.0) - accumulation(r, 2.0)) < 1e-12

    def test_forward_on_flat_rate(self):
        f = forward(continuous(0.04), 1.0, 3.0)
        assert f.convention == Continuous()
        assert abs(f.value - 0.04) < 1e-12

    def test_forward_same_point(self):
        with pytest.raises(DomainError):
            forward(continuous(0.04), 1.0, 1.0)
