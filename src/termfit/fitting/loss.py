"""
Loss-minimisation calibration.

Fits the tunable parameters of a model so that

    J(θ) = Σ_q loss(PV(model(θ), q.instrument) - q.price)

is minimal, using a global derivative-free optimizer over bounded
parameters. Candidates that violate the model's own domain (e.g. a
non-positive decay) are infeasible and score +inf.
"""

from typing import Callable, Optional, Sequence, Tuple
import logging

import numpy as np

from ..config import FitConfig
from ..errors import DomainError, OptimizationFailure, PreconditionViolation
from ..instruments import Quote, present_value
from .methods import Loss
from .optimizer import DifferentialEvolution, OptimizationResult, Optimizer
from .parameters import (
    Tunable,
    check_bounds,
    default_parameters,
    read_values,
    write_values,
)

logger = logging.getLogger(__name__)

Pricer = Callable[[object, object], float]


def loss_objective(
    model0,
    quotes: Sequence[Quote],
    method: Loss,
    parameters: Sequence[Tunable],
    pricer: Pricer = present_value
) -> Callable[[np.ndarray], float]:
    """
    Build the scalar objective J(θ) for a set of quotes.

    Args:
        model0: Seed model the parameter vector is written into
        quotes: Calibration targets
        method: Loss method holding the per-quote loss function
        parameters: Tunable descriptors, in θ order
        pricer: present_value(model, instrument) collaborator

    Returns:
        Callable mapping θ to the summed loss (+inf when infeasible)
    """
    def objective(theta: np.ndarray) -> float:
        try:
            model = write_values(model0, parameters, theta)
            total = 0.0
            for q in quotes:
                total += method.fn(pricer(model, q.instrument) - q.price)
        except DomainError:
            return np.inf

        total = float(total)
        if not np.isfinite(total):
            return np.inf
        return total

    return objective


def minimize_loss(
    model0,
    quotes: Sequence[Quote],
    method: Optional[Loss] = None,
    parameters: Optional[Sequence[Tunable]] = None,
    optimizer: Optional[Optimizer] = None,
    config: Optional[FitConfig] = None,
    pricer: Pricer = present_value
) -> Tuple[object, OptimizationResult]:
    """
    Run a loss fit and return the calibrated model with optimizer output.

    Raises:
        PreconditionViolation: no quotes
        OptimizationFailure: bad bounds, or no finite objective value found
    """
    quotes = list(quotes)
    if not quotes:
        raise PreconditionViolation("Cannot fit a model to an empty quote set")

    method = method or Loss()
    parameters = list(parameters) if parameters is not None else default_parameters(model0)
    bounds = check_bounds(parameters)
    optimizer = optimizer or DifferentialEvolution(config)

    objective = loss_objective(model0, quotes, method, parameters, pricer)

    try:
        x0 = read_values(model0, parameters)
    except (AttributeError, IndexError, TypeError):
        x0 = None
    if x0 is not None and not np.all(np.isfinite(x0)):
        x0 = None

    result = optimizer.minimize(objective, bounds, x0=x0)

    if not np.isfinite(result.fun):
        raise OptimizationFailure(
            f"No feasible parameters found for {type(model0).__name__}: {result.message}"
        )

    model = write_values(model0, parameters, result.x)

    logger.debug(
        "Loss fit of %s on %d quotes: J=%.3e after %d iterations (%s)",
        type(model0).__name__, len(quotes), result.fun, result.nit, result.message
    )

    return model, result


def fit_loss(
    model0,
    quotes: Sequence[Quote],
    method: Optional[Loss] = None,
    parameters: Optional[Sequence[Tunable]] = None,
    optimizer: Optional[Optimizer] = None,
    config: Optional[FitConfig] = None,
    pricer: Pricer = present_value
):
    """
    Calibrate a model to quotes by loss minimisation.

    Args:
        model0: Seed model; never modified
        quotes: Calibration targets
        method: Loss method (default squared error)
        parameters: Tunable parameters (default: the model's own)
        optimizer: Optimizer (default DifferentialEvolution)
        config: Optimizer settings when no optimizer is given
        pricer: present_value(model, instrument) collaborator

    Returns:
        New model instance with the optimised parameters
    """
    model, _ = minimize_loss(model0, quotes, method, parameters, optimizer, config, pricer)
    return model


__all__ = [
    "Pricer",
    "loss_objective",
    "minimize_loss",
    "fit_loss",
]
