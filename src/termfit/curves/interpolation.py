"""
Interpolation methods for piecewise curves.

Provides:
- LinearInterpolator: Linear interpolation, flat extrapolation
- CubicSplineInterpolator: Natural cubic spline, flat extrapolation
- LogLinearInterpolator: Linear in log(value), for discount factors

All interpolators take year fractions as x-coordinates. Knots must be
strictly increasing; the piecewise curve guarantees this.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
from scipy.interpolate import CubicSpline


class Interpolator(ABC):
    """Abstract base class for curve interpolation."""

    def __init__(self):
        self.times: Optional[np.ndarray] = None
        self.values: Optional[np.ndarray] = None

    def fit(self, times, values) -> "Interpolator":
        """
        Fit the interpolator to knot points.

        Args:
            times: Year fractions, strictly increasing
            values: Knot values

        Returns:
            self, for chaining
        """
        times = np.asarray(times, dtype=np.float64)
        values = np.asarray(values, dtype=np.float64)

        if len(times) != len(values):
            raise ValueError("Times and values must have same length")
        if len(times) < 2:
            raise ValueError("Need at least 2 points for interpolation")
        if np.any(np.diff(times) <= 0):
            raise ValueError("Times must be strictly increasing")

        self.times = times
        self.values = values
        self._build()
        return self

    def _build(self) -> None:
        pass

    def _ensure_fitted(self) -> None:
        if self.times is None:
            raise RuntimeError("Interpolator not fitted")

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolated value at t."""
        pass

    def __call__(self, t: float) -> float:
        return self.interpolate(t)


class LinearInterpolator(Interpolator):
    """Linear interpolation between knots, flat beyond the boundaries."""

    def interpolate(self, t: float) -> float:
        self._ensure_fitted()
        return float(np.interp(t, self.times, self.values))


class CubicSplineInterpolator(Interpolator):
    """
    Natural cubic spline (second derivative zero at both ends).

    Two knots degenerate to a straight line. Extrapolation is flat.
    """

    def _build(self) -> None:
        self._spline = None
        if len(self.times) > 2:
            self._spline = CubicSpline(self.times, self.values, bc_type="natural")

    def interpolate(self, t: float) -> float:
        self._ensure_fitted()
        if t <= self.times[0]:
            return float(self.values[0])
        if t >= self.times[-1]:
            return float(self.values[-1])
        if self._spline is None:
            return float(np.interp(t, self.times, self.values))
        return float(self._spline(t))


class LogLinearInterpolator(Interpolator):
    """
    Log-linear interpolation of positive values.

    On discount factors this gives piecewise constant forward rates.
    Extrapolates linearly in log space past the last knot.
    """

    def _build(self) -> None:
        if np.any(self.values <= 0):
            raise ValueError("Log-linear interpolation needs positive values")
        self._log_values = np.log(self.values)

    def interpolate(self, t: float) -> float:
        self._ensure_fitted()
        if t <= self.times[0]:
            return float(self.values[0])
        if t >= self.times[-1]:
            slope = ((self._log_values[-1] - self._log_values[-2]) /
                     (self.times[-1] - self.times[-2]))
            return float(np.exp(self._log_values[-1] + slope * (t - self.times[-1])))
        return float(np.exp(np.interp(t, self.times, self._log_values)))


def create_interpolator(method: str) -> Interpolator:
    """
    Factory function to create an interpolator by name.

    Args:
        method: One of "linear", "cubic_spline", "log_linear"

    Returns:
        Interpolator instance
    """
    method = method.lower().replace("-", "_").replace(" ", "_")

    if method in ("linear", "lin"):
        return LinearInterpolator()
    elif method in ("cubic_spline", "cubic", "spline"):
        return CubicSplineInterpolator()
    elif method in ("log_linear", "loglinear"):
        return LogLinearInterpolator()
    else:
        raise ValueError(f"Unknown interpolation method: {method}")


__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "LogLinearInterpolator",
    "create_interpolator",
]
