"""
Calibration entry points.

    fit(model0, quotes)                          squared-error loss fit
    fit(model0, quotes, Loss(abs))               custom loss
    fit(PiecewiseCurve(), quotes, Bootstrap())   sequential bootstrap

calibrate() runs the same fits and also reports repricing diagnostics.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import logging

import numpy as np

from ..config import FitConfig
from ..errors import PreconditionViolation
from ..instruments import Quote, present_value
from .bootstrap import fit_bootstrap
from .loss import Pricer, minimize_loss
from .methods import Bootstrap, FitMethod, Loss
from .optimizer import Optimizer
from .parameters import Tunable

logger = logging.getLogger(__name__)


@dataclass
class FitResult:
    """
    Result of a calibration.

    Attributes:
        model: Calibrated model
        repricing_errors: Model price minus quoted price, per quote
        objective: Final loss value (None for bootstrap)
        message: Optimizer message or bootstrap summary
    """
    model: object
    repricing_errors: List[float] = field(default_factory=list)
    objective: Optional[float] = None
    message: str = ""

    @property
    def max_abs_error(self) -> float:
        if not self.repricing_errors:
            return 0.0
        return float(np.max(np.abs(self.repricing_errors)))


def repricing_errors(
    model,
    quotes: Sequence[Quote],
    pricer: Pricer = present_value
) -> List[float]:
    """Model price minus quoted price for each quote."""
    return [float(pricer(model, q.instrument) - q.price) for q in quotes]


def calibrate(
    model0,
    quotes: Sequence[Quote],
    method: Optional[FitMethod] = None,
    parameters: Optional[Sequence[Tunable]] = None,
    optimizer: Optional[Optimizer] = None,
    config: Optional[FitConfig] = None,
    pricer: Pricer = present_value
) -> FitResult:
    """
    Calibrate a model and report how well it reprices the quotes.

    Args:
        model0: Seed model (or PiecewiseCurve template for Bootstrap)
        quotes: Calibration targets
        method: Loss(...) (default squared error) or Bootstrap()
        parameters: Tunable parameters for loss fits (default: the model's own)
        optimizer: Optimizer (default DifferentialEvolution)
        config: Optimizer settings when no optimizer is given
        pricer: present_value(model, instrument) collaborator

    Returns:
        FitResult
    """
    quotes = list(quotes)
    method = method if method is not None else Loss()

    if isinstance(method, Bootstrap):
        model = fit_bootstrap(model0, quotes, optimizer, config, pricer)
        errors = repricing_errors(model, quotes, pricer)
        return FitResult(
            model=model,
            repricing_errors=errors,
            message=f"Bootstrapped {len(quotes)} quotes",
        )

    if isinstance(method, Loss):
        model, result = minimize_loss(
            model0, quotes, method, parameters, optimizer, config, pricer
        )
        errors = repricing_errors(model, quotes, pricer)
        logger.info(
            "Fitted %s to %d quotes: J=%.3e, max |error|=%.3e",
            type(model).__name__, len(quotes), result.fun,
            max(abs(e) for e in errors)
        )
        return FitResult(
            model=model,
            repricing_errors=errors,
            objective=result.fun,
            message=result.message,
        )

    raise PreconditionViolation(f"Unknown fit method: {method!r}")


def fit(
    model0,
    quotes: Sequence[Quote],
    method: Optional[FitMethod] = None,
    parameters: Optional[Sequence[Tunable]] = None,
    optimizer: Optional[Optimizer] = None,
    config: Optional[FitConfig] = None,
    pricer: Pricer = present_value
):
    """
    Calibrate a model to quotes.

    Returns:
        The calibrated model (a new instance; model0 is never modified)
    """
    return calibrate(model0, quotes, method, parameters, optimizer, config, pricer).model


__all__ = [
    "FitResult",
    "repricing_errors",
    "calibrate",
    "fit",
]
