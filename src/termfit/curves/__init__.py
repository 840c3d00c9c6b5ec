"""
Curves package - term-structure models.

Provides:
- YieldModel: Common interface (zero_rate, discount, forward)
- Constant: Flat rate model
- NelsonSiegel, NelsonSiegelSvensson: Parametric curves
- PiecewiseCurve: Interpolated discount curve (bootstrap target)
"""

from .base import YieldModel
from .constant import Constant
from .nss import NelsonSiegel, NelsonSiegelSvensson
from .piecewise import PiecewiseCurve
from .interpolation import (
    Interpolator,
    LinearInterpolator,
    CubicSplineInterpolator,
    LogLinearInterpolator,
    create_interpolator,
)

__all__ = [
    "YieldModel",
    "Constant",
    "NelsonSiegel",
    "NelsonSiegelSvensson",
    "PiecewiseCurve",
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "LogLinearInterpolator",
    "create_interpolator",
]
