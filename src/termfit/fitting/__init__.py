"""
Fit package - calibration of curve models to market quotes.

Provides:
- fit / calibrate: entry points dispatching on the fit method
- Loss, Bootstrap: fit method selectors
- Tunable: free-parameter descriptors with bounds
- DifferentialEvolution: default global optimizer
"""

from .methods import Loss, Bootstrap, FitMethod, squared_error
from .parameters import Tunable, parameter, default_parameters
from .optimizer import Optimizer, OptimizationResult, DifferentialEvolution
from .loss import fit_loss, minimize_loss, loss_objective
from .bootstrap import fit_bootstrap, check_bootstrap_quotes
from .engine import FitResult, calibrate, fit, repricing_errors

__all__ = [
    "Loss",
    "Bootstrap",
    "FitMethod",
    "squared_error",
    "Tunable",
    "parameter",
    "default_parameters",
    "Optimizer",
    "OptimizationResult",
    "DifferentialEvolution",
    "fit_loss",
    "minimize_loss",
    "loss_objective",
    "fit_bootstrap",
    "check_bootstrap_quotes",
    "FitResult",
    "calibrate",
    "fit",
    "repricing_errors",
]
