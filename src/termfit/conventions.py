"""
Compounding conventions for interest rates.

Supported conventions:
- Continuous: discount factor exp(-r*t)
- Periodic(m): discount factor (1 + r/m)^(-m*t), m compounding periods per year
"""

from dataclasses import dataclass
from typing import Union
import math

from .errors import DomainError


@dataclass(frozen=True)
class Continuous:
    """Continuous compounding."""

    def __repr__(self) -> str:
        return "Continuous()"


@dataclass(frozen=True)
class Periodic:
    """
    Periodic compounding.

    Attributes:
        frequency: Compounding periods per year (strictly positive, finite)
    """
    frequency: float

    def __post_init__(self):
        if not math.isfinite(self.frequency) or self.frequency <= 0:
            raise DomainError(
                f"Compounding frequency must be positive and finite, got {self.frequency}"
            )

    def __repr__(self) -> str:
        return f"Periodic({self.frequency:g})"


CompoundingConvention = Union[Continuous, Periodic]


def convention_from_frequency(frequency: float) -> CompoundingConvention:
    """
    Map a compounding frequency to a convention.

    An infinite frequency is the continuous limit of periodic compounding.

    Args:
        frequency: Periods per year, or math.inf

    Returns:
        Continuous() or Periodic(frequency)
    """
    if isinstance(frequency, (Continuous, Periodic)):
        return frequency
    if frequency == math.inf:
        return Continuous()
    return Periodic(frequency)


__all__ = [
    "Continuous",
    "Periodic",
    "CompoundingConvention",
    "convention_from_frequency",
]
