"""
Fit method selectors.

- Loss(fn): minimise sum(fn(model_price - quoted_price)) over the quotes
- Bootstrap(): build a piecewise curve one maturity at a time
"""

from dataclasses import dataclass, field
from typing import Callable, Union


def squared_error(x: float) -> float:
    """Default loss: x^2."""
    return x * x


@dataclass(frozen=True)
class Loss:
    """
    Global loss-minimisation fit.

    Attributes:
        fn: Per-quote loss applied to (model price - quoted price)
    """
    fn: Callable[[float], float] = field(default=squared_error)


@dataclass(frozen=True)
class Bootstrap:
    """Sequential bootstrap of a piecewise discount curve."""


FitMethod = Union[Loss, Bootstrap]


__all__ = [
    "Loss",
    "Bootstrap",
    "FitMethod",
    "squared_error",
]
