"""
Flat (constant rate) yield model.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from ..conventions import Continuous
from ..rates import Rate, as_rate, convert, discount
from .base import YieldModel

if TYPE_CHECKING:
    from ..fitting.parameters import Tunable


@dataclass(frozen=True)
class Constant(YieldModel):
    """
    Single-rate curve: every horizon discounts at the same rate.

    Attributes:
        rate: The flat rate (a bare real is an annual effective rate)
    """
    rate: Rate = field(default_factory=lambda: Rate(0.0))

    def __post_init__(self):
        object.__setattr__(self, "rate", as_rate(self.rate))

    def zero_rate(self, t: float) -> Rate:
        return convert(Continuous(), self.rate)

    def discount(self, t: float) -> float:
        return discount(self.rate, t)

    def default_parameters(self) -> List["Tunable"]:
        from ..fitting.parameters import Tunable

        return [
            Tunable(
                name="rate",
                getter=lambda m: m.rate.value,
                setter=lambda m, v: Constant(Rate(float(v), m.rate.convention)),
                lower=-1.0,
                upper=1.0,
            )
        ]


__all__ = [
    "Constant",
]
