"""
Nelson-Siegel and Nelson-Siegel-Svensson parametric yield curve models.

Both models give the continuously compounded zero rate as a combination of
level, slope and curvature loadings:

    y(t) = β₀ + β₁ * [(1-e^(-t/τ₁))/(t/τ₁)]
              + β₂ * [(1-e^(-t/τ₁))/(t/τ₁) - e^(-t/τ₁)]
              + β₃ * [(1-e^(-t/τ₂))/(t/τ₂) - e^(-t/τ₂)]     (Svensson only)

Parameters:
    β₀: Long-term level (asymptotic rate)
    β₁: Short-term component (slope); y(0+) = β₀ + β₁
    β₂: Medium-term hump (curvature 1)
    β₃: Second hump (curvature 2) - Svensson extension
    τ₁: Decay for first hump
    τ₂: Decay for second hump

References:
    Nelson, C.R. & Siegel, A.F. (1987). Parsimonious Modeling of Yield Curves.
    Svensson, L.E.O. (1994). Estimating and Interpreting Forward Interest Rates.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

import numpy as np

from ..conventions import Continuous
from ..errors import DomainError
from ..rates import Rate, discount
from .base import YieldModel

if TYPE_CHECKING:
    from ..fitting.parameters import Tunable


_EPS = np.finfo(float).eps

TAU_BOUNDS = (0.01, 30.0)
BETA_BOUNDS = (-1.0, 1.0)


def _loadings(t: float, tau: float) -> Tuple[float, float]:
    """
    Slope and curvature factor loadings for decay tau.

    Returns:
        ((1-e^(-x))/x, (1-e^(-x))/x - e^(-x)) with x = t/tau
    """
    x = t / tau
    decay = np.exp(-x)
    slope = -np.expm1(-x) / x
    return slope, slope - decay


def _horizon(t: float) -> float:
    # zero rate is undefined for t = 0
    if t == 0:
        return t + _EPS
    return t


@dataclass(frozen=True)
class NelsonSiegel(YieldModel):
    """
    Nelson-Siegel (1987) yield curve.

    NelsonSiegel() is flat at the long-term level β₀ = 1.0.

    Raises:
        DomainError: if tau1 <= 0
    """
    tau1: float = 1.0
    beta0: float = 1.0
    beta1: float = 0.0
    beta2: float = 0.0

    def __post_init__(self):
        if not self.tau1 > 0:
            raise DomainError(f"Wrong tau parameter ranges (must be positive): tau1={self.tau1}")

    def zero_rate(self, t: float) -> Rate:
        t = _horizon(t)
        slope, curvature = _loadings(t, self.tau1)
        y = self.beta0 + self.beta1 * slope + self.beta2 * curvature
        return Rate(float(y), Continuous())

    def discount(self, t: float) -> float:
        return discount(self.zero_rate(t), t)

    def instantaneous_forward(self, t: float) -> float:
        """
        Instantaneous forward rate.

        f(t) = β₀ + β₁*e^(-t/τ₁) + β₂*(t/τ₁)*e^(-t/τ₁)
        """
        x = t / self.tau1
        decay = np.exp(-x)
        return float(self.beta0 + self.beta1 * decay + self.beta2 * x * decay)

    def default_parameters(self) -> List["Tunable"]:
        from ..fitting.parameters import parameter

        return [
            parameter("tau1", *TAU_BOUNDS),
            parameter("beta0", *BETA_BOUNDS),
            parameter("beta1", *BETA_BOUNDS),
            parameter("beta2", *BETA_BOUNDS),
        ]

    def __repr__(self) -> str:
        return (f"NelsonSiegel(τ₁={self.tau1:.4f}, β₀={self.beta0:.4f}, "
                f"β₁={self.beta1:.4f}, β₂={self.beta2:.4f})")


@dataclass(frozen=True)
class NelsonSiegelSvensson(YieldModel):
    """
    Nelson-Siegel-Svensson (1994) yield curve.

    NelsonSiegelSvensson() is flat at zero with both decays at 1.0.

    Raises:
        DomainError: if tau1 <= 0 or tau2 <= 0
    """
    tau1: float = 1.0
    tau2: float = 1.0
    beta0: float = 0.0
    beta1: float = 0.0
    beta2: float = 0.0
    beta3: float = 0.0

    def __post_init__(self):
        if not (self.tau1 > 0 and self.tau2 > 0):
            raise DomainError(
                f"Wrong tau parameter ranges (must be positive): "
                f"tau1={self.tau1}, tau2={self.tau2}"
            )

    def zero_rate(self, t: float) -> Rate:
        t = _horizon(t)
        slope1, curvature1 = _loadings(t, self.tau1)
        _, curvature2 = _loadings(t, self.tau2)

        y = (self.beta0 +
             self.beta1 * slope1 +
             self.beta2 * curvature1 +
             self.beta3 * curvature2)
        return Rate(float(y), Continuous())

    def discount(self, t: float) -> float:
        return discount(self.zero_rate(t), t)

    def instantaneous_forward(self, t: float) -> float:
        """
        Instantaneous forward rate.

        f(t) = β₀ + β₁*e^(-t/τ₁) + β₂*(t/τ₁)*e^(-t/τ₁) + β₃*(t/τ₂)*e^(-t/τ₂)
        """
        x1 = t / self.tau1
        x2 = t / self.tau2
        exp1 = np.exp(-x1)
        exp2 = np.exp(-x2)
        return float(self.beta0 +
                     self.beta1 * exp1 +
                     self.beta2 * x1 * exp1 +
                     self.beta3 * x2 * exp2)

    def default_parameters(self) -> List["Tunable"]:
        from ..fitting.parameters import parameter

        return [
            parameter("tau1", *TAU_BOUNDS),
            parameter("tau2", *TAU_BOUNDS),
            parameter("beta0", *BETA_BOUNDS),
            parameter("beta1", *BETA_BOUNDS),
            parameter("beta2", *BETA_BOUNDS),
            parameter("beta3", *BETA_BOUNDS),
        ]

    def __repr__(self) -> str:
        return (f"NelsonSiegelSvensson(τ₁={self.tau1:.4f}, τ₂={self.tau2:.4f}, "
                f"β₀={self.beta0:.4f}, β₁={self.beta1:.4f}, "
                f"β₂={self.beta2:.4f}, β₃={self.beta3:.4f})")


__all__ = [
    "NelsonSiegel",
    "NelsonSiegelSvensson",
]
