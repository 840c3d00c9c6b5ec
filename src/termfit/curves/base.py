"""
Common interface for term-structure models.

Every model maps a time horizon (in years) to a continuously compounded
zero rate and a discount factor. Calibration only relies on this interface
plus `default_parameters()`, so a new curve family plugs into the fit
engine without changes there.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..rates import Rate, forward

if TYPE_CHECKING:
    from ..fitting.parameters import Tunable


DEFAULT_TENORS = [0.25, 0.5, 1, 2, 3, 5, 7, 10, 15, 20, 30]


class YieldModel(ABC):
    """Abstract base class for yield curve models."""

    @abstractmethod
    def zero_rate(self, t: float) -> Rate:
        """
        Continuously compounded zero rate at horizon t.

        Args:
            t: Time in years

        Returns:
            Rate with Continuous() convention
        """
        pass

    @abstractmethod
    def discount(self, t: float) -> float:
        """Discount factor P(0,t)."""
        pass

    @abstractmethod
    def default_parameters(self) -> List["Tunable"]:
        """Tunable parameters used when a fit is not given explicit parameters."""
        pass

    def accumulation(self, t: float) -> float:
        """Accumulation factor 1 / P(0,t)."""
        return 1.0 / self.discount(t)

    def forward(self, t1: float, t2: float) -> Rate:
        """Continuously compounded forward rate between t1 and t2."""
        return forward(self, t1, t2)

    def curve_table(self, tenors: Optional[Sequence[float]] = None) -> pd.DataFrame:
        """
        Sample the curve for reporting or plotting.

        Args:
            tenors: Times to sample (default: standard set)

        Returns:
            DataFrame with columns time, zero_rate, discount_factor, forward
        """
        if tenors is None:
            tenors = DEFAULT_TENORS
        times = np.asarray(tenors, dtype=float)

        rows = []
        prev = 0.0
        for t in times:
            rows.append({
                "time": t,
                "zero_rate": self.zero_rate(t).value,
                "discount_factor": float(self.discount(t)),
                "forward": self.forward(prev, t).value if t != prev else np.nan,
            })
            prev = t

        return pd.DataFrame(rows, columns=["time", "zero_rate", "discount_factor", "forward"])


__all__ = [
    "YieldModel",
    "DEFAULT_TENORS",
]
