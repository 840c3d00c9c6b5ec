"""
Optimizers used by calibration.

The fit engine only needs something that minimises a scalar objective over
a box. DifferentialEvolution wraps scipy's global, derivative-free solver;
any Optimizer subclass (for example a deterministic stub in tests) can be
passed in its place.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple
import logging

import numpy as np
from scipy.optimize import differential_evolution

from ..config import FitConfig

logger = logging.getLogger(__name__)

Objective = Callable[[np.ndarray], float]


@dataclass
class OptimizationResult:
    """Best point found by an optimizer."""
    x: np.ndarray
    fun: float
    success: bool
    nit: int = 0
    nfev: int = 0
    message: str = ""


class Optimizer(ABC):
    """Minimises an objective over per-dimension bounds."""

    @abstractmethod
    def minimize(
        self,
        objective: Objective,
        bounds: Sequence[Tuple[float, float]],
        x0: Optional[np.ndarray] = None
    ) -> OptimizationResult:
        """
        Minimise objective within bounds.

        Args:
            objective: Maps a parameter vector to a scalar
            bounds: (lower, upper) per dimension
            x0: Optional starting point

        Returns:
            OptimizationResult with the best point found
        """
        pass


class DifferentialEvolution(Optimizer):
    """
    Differential evolution (scipy.optimize.differential_evolution).

    Population-based and derivative-free, so it copes with the multimodal
    objectives produced by decay parameters. Deterministic for a fixed
    seed, including when objective evaluations run on worker threads.
    """

    def __init__(self, config: Optional[FitConfig] = None):
        self.config = config or FitConfig.reference()

    def minimize(
        self,
        objective: Objective,
        bounds: Sequence[Tuple[float, float]],
        x0: Optional[np.ndarray] = None
    ) -> OptimizationResult:
        cfg = self.config
        bounds = [(float(lo), float(hi)) for lo, hi in bounds]

        if x0 is not None:
            lower = np.array([b[0] for b in bounds])
            upper = np.array([b[1] for b in bounds])
            x0 = np.clip(np.asarray(x0, dtype=np.float64), lower, upper)

        kwargs = dict(
            maxiter=cfg.maxiter,
            popsize=cfg.popsize,
            tol=cfg.tol,
            atol=cfg.atol,
            mutation=cfg.mutation,
            recombination=cfg.recombination,
            seed=cfg.seed,
            polish=cfg.polish,
            x0=x0,
        )

        logger.debug(
            "differential_evolution: %d parameters, maxiter=%d, popsize=%d, workers=%d",
            len(bounds), cfg.maxiter, cfg.popsize, cfg.workers
        )

        if cfg.workers == 1:
            result = differential_evolution(objective, bounds, **kwargs)
        else:
            max_workers = None if cfg.workers == -1 else cfg.workers
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                result = differential_evolution(
                    objective, bounds, workers=pool.map, updating="deferred", **kwargs
                )

        return OptimizationResult(
            x=np.atleast_1d(np.asarray(result.x, dtype=np.float64)),
            fun=float(result.fun),
            success=bool(result.success),
            nit=int(getattr(result, "nit", 0)),
            nfev=int(getattr(result, "nfev", 0)),
            message=str(result.message),
        )


__all__ = [
    "Objective",
    "OptimizationResult",
    "Optimizer",
    "DifferentialEvolution",
]
