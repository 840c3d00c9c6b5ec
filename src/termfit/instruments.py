"""
Instruments, quotes and the default present-value function.

Calibration treats instruments as opaque: it only needs
`present_value(model, instrument)` and `maturity(quote)`. The bonds here
are the plain cashflow instruments used to calibrate zero curves.

Conventions:
- Times are year fractions from the valuation date
- Prices are per unit of `face` (use face=100 for per-100 quotes)
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np
import pandas as pd

from .conventions import Continuous
from .rates import Rate, discount


@dataclass(frozen=True)
class Cashflow:
    """A single amount paid at time `time`."""
    amount: float
    time: float

    @property
    def maturity(self) -> float:
        return self.time

    def cashflows(self) -> List["Cashflow"]:
        return [self]


@dataclass(frozen=True)
class ZeroCouponBond:
    """
    Zero-coupon bond paying `face` at maturity.

    Pricing: PV = face * P(0,T)
    """
    maturity: float
    face: float = 1.0

    def cashflows(self) -> List[Cashflow]:
        return [Cashflow(self.face, self.maturity)]


@dataclass(frozen=True)
class FixedBond:
    """
    Fixed coupon bond.

    Pays face * coupon / frequency every 1/frequency years, counting back
    from maturity, plus face at maturity.

    Attributes:
        coupon: Annual coupon rate (decimal)
        maturity: Time to maturity in years
        frequency: Coupons per year
        face: Face value
    """
    coupon: float
    maturity: float
    frequency: int = 2
    face: float = 1.0

    def cashflows(self) -> List[Cashflow]:
        period = 1.0 / self.frequency
        coupon_payment = self.face * self.coupon / self.frequency

        times = []
        t = self.maturity
        while t > 1e-9:
            times.append(t)
            t -= period
        times.reverse()

        flows = [Cashflow(coupon_payment, t) for t in times[:-1]]
        flows.append(Cashflow(coupon_payment + self.face, self.maturity))
        return flows


def present_value(model, instrument) -> float:
    """
    Present value of an instrument under a curve model.

    Instruments either expose `cashflows()` or their own
    `present_value(model)`.
    """
    if hasattr(instrument, "present_value"):
        return float(instrument.present_value(model))
    return float(sum(cf.amount * discount(model, cf.time) for cf in instrument.cashflows()))


@dataclass(frozen=True)
class Quote:
    """
    An observed market price for an instrument.

    Attributes:
        instrument: Anything priced by present_value()
        price: Observed price
    """
    instrument: Any
    price: float

    @property
    def maturity(self) -> float:
        return float(self.instrument.maturity)


def maturity(quote: Quote) -> float:
    """Maturity of a quote's instrument (years)."""
    return quote.maturity


def quotes_from_zero_rates(
    maturities: Sequence[float],
    rates: Sequence,
    face: float = 1.0
) -> List[Quote]:
    """
    Zero-coupon quotes consistent with observed zero rates.

    Bare reals are read as continuously compounded rates.

    Args:
        maturities: Maturities in years
        rates: Zero rates (Rate or float)
        face: Face value of each bond

    Returns:
        Quotes in the order given
    """
    if len(maturities) != len(rates):
        raise ValueError("Maturities and rates must have same length")

    quotes = []
    for t, r in zip(maturities, rates):
        if not isinstance(r, Rate):
            r = Rate(float(r), Continuous())
        quotes.append(Quote(ZeroCouponBond(float(t), face), face * float(discount(r, t))))
    return quotes


def quotes_from_frame(df: pd.DataFrame, face: Optional[float] = None) -> List[Quote]:
    """
    Build bond quotes from a table.

    Expected columns: maturity, price; optional coupon, frequency, face.
    Rows without a coupon (or with a zero coupon) become zero-coupon bonds.
    Quotes are returned sorted by maturity.

    Args:
        df: Quote table
        face: Face value overriding the table's face column

    Returns:
        List of Quote objects
    """
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = {"maturity", "price"} - set(df.columns)
    if missing:
        raise ValueError(f"Quote table missing columns: {sorted(missing)}")

    if "coupon" not in df.columns:
        df["coupon"] = 0.0
    if "frequency" not in df.columns:
        df["frequency"] = 2
    if face is not None or "face" not in df.columns:
        df["face"] = 1.0 if face is None else face

    df["coupon"] = df["coupon"].fillna(0.0)
    df["frequency"] = df["frequency"].fillna(2)
    df = df.sort_values("maturity", kind="mergesort")

    quotes = []
    for _, row in df.iterrows():
        t = float(row["maturity"])
        if np.isclose(row["coupon"], 0.0):
            instrument = ZeroCouponBond(t, float(row["face"]))
        else:
            instrument = FixedBond(
                coupon=float(row["coupon"]),
                maturity=t,
                frequency=int(row["frequency"]),
                face=float(row["face"]),
            )
        quotes.append(Quote(instrument, float(row["price"])))

    return quotes


__all__ = [
    "Cashflow",
    "ZeroCouponBond",
    "FixedBond",
    "Quote",
    "present_value",
    "maturity",
    "quotes_from_zero_rates",
    "quotes_from_frame",
]
