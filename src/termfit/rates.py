"""
Interest rate value type and discounting arithmetic.

A Rate is a scalar tagged with its compounding convention. Rates convert
between conventions while preserving the discount factor at every horizon:

    Continuous c -> Periodic(m):  p = m * (exp(c/m) - 1)
    Periodic(m) p -> Continuous:  c = m * ln(1 + p/m)

A bare real used where a Rate is expected is read as an annual effective
rate, i.e. Rate(x, Periodic(1)).

The discount/accumulation functions also accept any curve model (an object
with zero_rate() and discount()), so `discount(model, t)` and
`discount(rate, t)` read the same at call sites.
"""

from dataclasses import dataclass
from typing import Union
import math

import numpy as np

from .conventions import (
    Continuous,
    Periodic,
    CompoundingConvention,
    convention_from_frequency,
)
from .errors import DomainError


@dataclass(frozen=True)
class Rate:
    """
    An interest rate with its compounding convention.

    Attributes:
        value: Rate in decimal (0.05 = 5%)
        convention: Continuous() or Periodic(m); a number is read as a
            compounding frequency (math.inf meaning continuous)
    """
    value: float
    convention: CompoundingConvention = Periodic(1)

    def __post_init__(self):
        if not isinstance(self.convention, (Continuous, Periodic)):
            object.__setattr__(
                self, "convention", convention_from_frequency(self.convention)
            )

    def isclose(self, other: "Rate", rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        """Values within tolerance and identical conventions."""
        other = as_rate(other)
        if self.convention != other.convention:
            return False
        return bool(np.isclose(self.value, other.value, rtol=rtol, atol=atol))

    def __add__(self, other):
        return Rate(self.value + _spread(self, other), self.convention)

    def __sub__(self, other):
        return Rate(self.value - _spread(self, other), self.convention)

    def __float__(self) -> float:
        return float(self.value)

    def __repr__(self) -> str:
        return f"Rate({self.value!r}, {self.convention!r})"


RateLike = Union[Rate, float]


def _spread(r: Rate, other) -> float:
    if isinstance(other, Rate):
        if other.convention != r.convention:
            raise DomainError(
                f"Cannot combine rates with conventions {r.convention} and {other.convention}"
            )
        return other.value
    return float(other)


def continuous(value: float) -> Rate:
    """Continuously compounded rate."""
    return Rate(value, Continuous())


def periodic(value: float, frequency: float) -> Rate:
    """Rate compounded `frequency` times per year."""
    return Rate(value, Periodic(frequency))


def as_rate(r: RateLike) -> Rate:
    """Coerce a bare real to an annual effective Rate."""
    if isinstance(r, Rate):
        return r
    return Rate(float(r), Periodic(1))


def rate(r: RateLike) -> float:
    """Numeric value of a rate."""
    return as_rate(r).value


def approx_equal(a: RateLike, b: RateLike, rtol: float = 1e-5, atol: float = 1e-8) -> bool:
    """Approximate equality: values within tolerance, same convention."""
    return as_rate(a).isclose(b, rtol=rtol, atol=atol)


def convert(target, r: RateLike) -> Rate:
    """
    Convert a rate to an equivalent rate under another convention.

    Args:
        target: Target convention (or a compounding frequency)
        r: Rate to convert

    Returns:
        Rate with the same discount factor at every horizon. Converting to
        the rate's own convention returns it unchanged.

    Raises:
        DomainError: if 1 + p/m <= 0 for a periodic source rate
    """
    r = as_rate(r)
    target = convention_from_frequency(target)

    if r.convention == target:
        return r

    if isinstance(r.convention, Periodic):
        m = r.convention.frequency
        if 1.0 + r.value / m <= 0:
            raise DomainError(
                f"Rate {r.value} is below the floor {-m} for {r.convention}"
            )
        c = m * math.log1p(r.value / m)
        if isinstance(target, Continuous):
            return Rate(c, target)
        return convert(target, Rate(c, Continuous()))

    # Continuous -> Periodic
    m = target.frequency
    return Rate(m * math.expm1(r.value / m), target)


def _is_model(obj) -> bool:
    return not isinstance(obj, (Rate, int, float)) and hasattr(obj, "zero_rate")


def accumulation(r, t, to=None):
    """
    Accumulation factor over horizon t (or over the interval [t, to]).

    Periodic(m): (1 + p/m)^(m*t); Continuous: exp(c*t).
    """
    if to is not None:
        if _is_model(r):
            return r.discount(t) / r.discount(to)
        return accumulation(r, to - t)

    if _is_model(r):
        return r.accumulation(t)

    r = as_rate(r)
    if isinstance(r.convention, Continuous):
        return np.exp(r.value * np.asarray(t, dtype=float))

    m = r.convention.frequency
    base = 1.0 + r.value / m
    if base <= 0:
        raise DomainError(f"Rate {r.value} is below the floor {-m} for {r.convention}")
    return np.power(base, m * np.asarray(t, dtype=float))


def discount(r, t, to=None):
    """
    Discount factor over horizon t (or over the interval [t, to]).

    Always 1 / accumulation(r, t) for rates; for curve models the interval
    form is the forward discount factor P(0,to) / P(0,t).
    """
    if to is not None:
        if _is_model(r):
            return r.discount(to) / r.discount(t)
        return discount(r, to - t)

    if _is_model(r):
        return r.discount(t)

    return 1.0 / accumulation(r, t)


def forward(model, t1: float, t2: float) -> Rate:
    """
    Continuously compounded forward rate between t1 and t2.

    Args:
        model: Curve model or Rate
        t1: Start time (years)
        t2: End time (years)
    """
    if t2 == t1:
        raise DomainError("Forward rate needs t2 != t1")
    df = discount(model, t1, t2)
    return Rate(float(-np.log(df) / (t2 - t1)), Continuous())


__all__ = [
    "Rate",
    "RateLike",
    "continuous",
    "periodic",
    "as_rate",
    "rate",
    "approx_equal",
    "convert",
    "accumulation",
    "discount",
    "forward",
]
