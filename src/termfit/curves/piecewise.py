"""
Piecewise discount curve built from (time, discount factor) nodes.

The curve is the target of bootstrap calibration. Between nodes the
curve is interpolated by one of the interpolators in .interpolation:

- "linear", "cubic_spline": on continuously compounded zero rates,
  flat beyond the first and last node
- "log_linear": on discount factors in log space, anchored at P(0,0) = 1

Conventions:
    - Times are year fractions, strictly increasing and positive
    - Discount factor at t <= 0 is 1.0
    - Instances are frozen snapshots; "modifying" returns a new curve
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Sequence, Tuple

import numpy as np

from ..conventions import Continuous
from ..errors import DomainError
from ..rates import Rate
from .base import YieldModel
from .interpolation import create_interpolator

if TYPE_CHECKING:
    from ..fitting.parameters import Tunable


LAST_DF_BOUNDS = (1e-8, 1.5)


@dataclass(frozen=True)
class PiecewiseCurve(YieldModel):
    """
    Discount curve interpolated between calibrated nodes.

    An empty curve is valid as a template (it only carries the
    interpolation choice) but cannot be evaluated.

    Attributes:
        times: Node times in years
        discount_factors: Discount factor at each node
        interpolation: Interpolation method name
    """
    times: Tuple[float, ...] = ()
    discount_factors: Tuple[float, ...] = ()
    interpolation: str = "cubic_spline"
    _interpolator: Any = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        times = tuple(float(t) for t in self.times)
        dfs = tuple(float(d) for d in self.discount_factors)
        object.__setattr__(self, "times", times)
        object.__setattr__(self, "discount_factors", dfs)

        if len(times) != len(dfs):
            raise DomainError("Times and discount factors must have same length")
        if any(t <= 0 for t in times):
            raise DomainError(f"Node times must be positive: {times}")
        if any(b <= a for a, b in zip(times, times[1:])):
            raise DomainError(f"Node times must be strictly increasing: {times}")
        if any(not (np.isfinite(d) and d > 0) for d in dfs):
            raise DomainError(f"Discount factors must be positive: {dfs}")

        # validates the method name even for templates
        interpolator = create_interpolator(self.interpolation)
        if self.interpolation_space == "discount" and times:
            interpolator.fit((0.0,) + times, (1.0,) + dfs)
        elif len(times) >= 2:
            interpolator.fit(times, self._node_zero_rates())
        else:
            interpolator = None
        object.__setattr__(self, "_interpolator", interpolator)

    @property
    def interpolation_space(self) -> str:
        """Space the interpolator works in: discount factors or zero rates."""
        method = self.interpolation.lower().replace("-", "_").replace(" ", "_")
        if method in ("log_linear", "loglinear"):
            return "discount"
        return "zero_rate"

    def _node_zero_rates(self) -> np.ndarray:
        return -np.log(np.array(self.discount_factors)) / np.array(self.times)

    def _ensure_nodes(self) -> None:
        if not self.times:
            raise DomainError("Cannot evaluate a curve without nodes")

    def discount(self, t: float) -> float:
        """
        Get discount factor P(0,t).

        Args:
            t: Year fraction

        Returns:
            Discount factor
        """
        if t <= 0:
            return 1.0
        self._ensure_nodes()

        if self.interpolation_space == "discount":
            return self._interpolator.interpolate(t)

        if self._interpolator is None:
            # single node: flat at its zero rate
            zr = float(self._node_zero_rates()[0])
        else:
            zr = self._interpolator.interpolate(t)
        return float(np.exp(-zr * t))

    def zero_rate(self, t: float) -> Rate:
        """Continuously compounded zero rate; short-end limit at t <= 0."""
        self._ensure_nodes()
        if t <= 0:
            return Rate(float(self._node_zero_rates()[0]), Continuous())
        return Rate(float(-np.log(self.discount(t)) / t), Continuous())

    def nodes(self) -> List[Tuple[float, float]]:
        """All (time, discount_factor) nodes."""
        return list(zip(self.times, self.discount_factors))

    def with_nodes(self, times: Sequence[float], discount_factors: Sequence[float]) -> "PiecewiseCurve":
        """New curve with the same interpolation over other nodes."""
        return PiecewiseCurve(tuple(times), tuple(discount_factors), self.interpolation)

    def with_discount_factor(self, index: int, value: float) -> "PiecewiseCurve":
        """New curve with one node's discount factor replaced."""
        self._ensure_nodes()
        dfs = list(self.discount_factors)
        dfs[index] = float(value)
        return self.with_nodes(self.times, dfs)

    def with_last_discount_factor(self, value: float) -> "PiecewiseCurve":
        """New curve with the final node's discount factor replaced."""
        return self.with_discount_factor(-1, value)

    def default_parameters(self) -> List["Tunable"]:
        from ..fitting.parameters import Tunable

        return [
            Tunable(
                name="discount_factors[-1]",
                getter=lambda m: m.discount_factors[-1],
                setter=lambda m, v: m.with_last_discount_factor(v),
                lower=LAST_DF_BOUNDS[0],
                upper=LAST_DF_BOUNDS[1],
            )
        ]

    def __repr__(self) -> str:
        return (f"PiecewiseCurve(nodes={len(self.times)}, "
                f"method={self.interpolation})")


__all__ = [
    "PiecewiseCurve",
]
