"""
Optimizer configuration for calibration.

FitConfig collects the settings handed to the global optimizer. The
reference preset matches the standard calibration setup: differential
evolution for 300 generations with a fixed seed, so repeated fits of the
same inputs give the same curve.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class FitConfig:
    """
    Settings for the differential-evolution optimizer.

    Attributes:
        maxiter: Maximum number of generations
        popsize: Population multiplier (members = popsize * n_parameters)
        tol: Relative convergence tolerance on population energies
        atol: Absolute convergence tolerance
        mutation: Differential weight, or (min, max) for dithering
        recombination: Crossover probability
        seed: Random seed; None for a fresh generator each run
        polish: Finish with a bounded L-BFGS-B local search
        workers: Parallel objective evaluations (1 = serial, -1 = all cores)
    """
    maxiter: int = 300
    popsize: int = 15
    tol: float = 0.0
    atol: float = 0.0
    mutation: Union[float, Tuple[float, float]] = (0.5, 1.0)
    recombination: float = 0.7
    seed: Optional[int] = 42
    polish: bool = True
    workers: int = 1

    def __post_init__(self):
        if self.maxiter < 1:
            raise ValueError(f"maxiter must be at least 1, got {self.maxiter}")
        if self.popsize < 1:
            raise ValueError(f"popsize must be at least 1, got {self.popsize}")
        if not 0 <= self.recombination <= 1:
            raise ValueError(f"recombination must be in [0, 1], got {self.recombination}")

    @classmethod
    def reference(cls) -> "FitConfig":
        """Standard global calibration settings."""
        return cls()

    @classmethod
    def bootstrap(cls) -> "FitConfig":
        """Settings for one-dimensional bootstrap solves."""
        return cls(
            maxiter=300,
            popsize=10,
            tol=0.0,
            atol=0.0,
            seed=42,
            polish=True,
        )


__all__ = [
    "FitConfig",
]
