"""
Tunable parameter descriptors.

A fit only sees a list of Tunable descriptors: how to read a value from a
model, how to write one back (returning a new model), and the admissible
bounds. Models are never mutated; setters return fresh instances.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, List, Sequence, Tuple

import numpy as np

from ..errors import OptimizationFailure


@dataclass(frozen=True)
class Tunable:
    """
    A free variable of a calibration.

    Attributes:
        name: Label used in logs and diagnostics
        getter: model -> current value
        setter: (model, value) -> new model
        lower: Lower bound
        upper: Upper bound
    """
    name: str
    getter: Callable[[Any], float]
    setter: Callable[[Any, float], Any]
    lower: float
    upper: float

    @property
    def bounds(self) -> Tuple[float, float]:
        return (self.lower, self.upper)

    def with_bounds(self, lower: float, upper: float) -> "Tunable":
        """Same accessor, different range."""
        return replace(self, lower=lower, upper=upper)


def parameter(name: str, lower: float, upper: float) -> Tunable:
    """
    Tunable over a named dataclass field.

    The setter goes through dataclasses.replace, so the model's own
    validation runs on every candidate.
    """
    return Tunable(
        name=name,
        getter=lambda m: getattr(m, name),
        setter=lambda m, v: replace(m, **{name: float(v)}),
        lower=lower,
        upper=upper,
    )


def default_parameters(model) -> List[Tunable]:
    """Default tunable parameters declared by the model."""
    return list(model.default_parameters())


def check_bounds(parameters: Sequence[Tunable]) -> List[Tuple[float, float]]:
    """
    Validate and collect bounds.

    Raises:
        OptimizationFailure: no parameters, or contradictory/non-finite bounds
    """
    if not parameters:
        raise OptimizationFailure("No tunable parameters given")

    bounds = []
    for p in parameters:
        if not (np.isfinite(p.lower) and np.isfinite(p.upper)):
            raise OptimizationFailure(f"Bounds for {p.name} must be finite: {p.bounds}")
        if p.lower > p.upper:
            raise OptimizationFailure(
                f"Contradictory bounds for {p.name}: lower {p.lower} > upper {p.upper}"
            )
        bounds.append(p.bounds)
    return bounds


def read_values(model, parameters: Sequence[Tunable]) -> np.ndarray:
    """Current parameter vector of a model."""
    return np.array([p.getter(model) for p in parameters], dtype=np.float64)


def write_values(model, parameters: Sequence[Tunable], values: Sequence[float]):
    """New model with the parameter vector written through the setters."""
    for p, v in zip(parameters, values):
        model = p.setter(model, v)
    return model


__all__ = [
    "Tunable",
    "parameter",
    "default_parameters",
    "check_bounds",
    "read_values",
    "write_values",
]
