"""
Unit tests for instruments and quotes.
"""

import numpy as np
import pandas as pd
import pytest

from termfit.curves import Constant, NelsonSiegel
from termfit.instruments import (
    Cashflow,
    ZeroCouponBond,
    FixedBond,
    Quote,
    present_value,
    maturity,
    quotes_from_zero_rates,
    quotes_from_frame,
)
from termfit.rates import continuous, periodic


class TestCashflows:
    """Tests for instrument cashflow schedules."""

    def test_zero_coupon(self):
        zcb = ZeroCouponBond(5.0, face=100.0)
        assert zcb.cashflows() == [Cashflow(100.0, 5.0)]

    def test_fixed_bond_schedule(self):
        bond = FixedBond(coupon=0.04, maturity=2.0, frequency=2, face=100.0)
        flows = bond.cashflows()

        assert [cf.time for cf in flows] == [0.5, 1.0, 1.5, 2.0]
        assert [cf.amount for cf in flows] == [2.0, 2.0, 2.0, 102.0]

    def test_short_first_period(self):
        bond = FixedBond(coupon=0.06, maturity=1.25, frequency=2)
        times = [cf.time for cf in bond.cashflows()]
        assert times == pytest.approx([0.25, 0.75, 1.25])


class TestPresentValue:
    """Tests for the default pricer."""

    def test_zero_coupon_pv(self):
        model = Constant(continuous(0.03))
        pv = present_value(model, ZeroCouponBond(10.0, face=100.0))
        assert abs(pv - 100.0 * np.exp(-0.3)) < 1e-10

    def test_par_bond(self):
        """A bond paying the curve's own semi-annual rate prices at par."""
        model = Constant(periodic(0.05, 2))
        pv = present_value(model, FixedBond(coupon=0.05, maturity=10.0, frequency=2, face=100.0))
        assert abs(pv - 100.0) < 1e-9

    def test_custom_instrument(self):
        class Perpetuity:
            maturity = 100.0

            def present_value(self, model):
                return 1.0 / model.zero_rate(1.0).value

        pv = present_value(Constant(continuous(0.04)), Perpetuity())
        assert abs(pv - 25.0) < 1e-12


class TestQuotes:
    """Tests for quote construction."""

    def test_maturity(self):
        q = Quote(ZeroCouponBond(7.0), 0.8)
        assert q.maturity == 7.0
        assert maturity(q) == 7.0

    def test_quotes_from_zero_rates(self):
        quotes = quotes_from_zero_rates([1.0, 2.0], [0.03, periodic(0.04, 2)])
        assert abs(quotes[0].price - np.exp(-0.03)) < 1e-15
        assert abs(quotes[1].price - 1.02 ** -4) < 1e-15

    def test_quotes_from_zero_rates_reprice_model(self):
        ns = NelsonSiegel(2.0, 0.05, -0.02, 0.01)
        ts = [1.0, 5.0, 10.0]
        quotes = quotes_from_zero_rates(ts, [ns.zero_rate(t) for t in ts])
        for q in quotes:
            assert abs(present_value(ns, q.instrument) - q.price) < 1e-14

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            quotes_from_zero_rates([1.0, 2.0], [0.03])

    def test_quotes_from_frame(self):
        df = pd.DataFrame({
            "Maturity": [5.0, 1.0, 2.0],
            "Price": [98.5, 95.0, 99.0],
            "Coupon": [0.03, 0.0, np.nan],
        })
        quotes = quotes_from_frame(df, face=100.0)

        assert [q.maturity for q in quotes] == [1.0, 2.0, 5.0]
        assert isinstance(quotes[0].instrument, ZeroCouponBond)
        assert isinstance(quotes[1].instrument, ZeroCouponBond)
        assert quotes[2].instrument == FixedBond(0.03, 5.0, 2, 100.0)
        assert quotes[2].price == 98.5

    def test_quotes_from_frame_missing_columns(self):
        with pytest.raises(ValueError):
            quotes_from_frame(pd.DataFrame({"maturity": [1.0]}))

    def test_quotes_from_frame_missing_frequency(self):
        df = pd.DataFrame({
            "maturity": [2.0, 3.0],
            "price": [1.01, 0.99],
            "coupon": [0.04, 0.03],
            "frequency": [1, np.nan],
        })
        quotes = quotes_from_frame(df)

        assert quotes[0].instrument == FixedBond(0.04, 2.0, 1, 1.0)
        assert quotes[1].instrument == FixedBond(0.03, 3.0, 2, 1.0)
