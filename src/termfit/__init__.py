"""
termfit: term-structure fitting

A small library for:
- Representing interest rates under continuous or periodic compounding
- Parametric yield curves (Nelson-Siegel, Nelson-Siegel-Svensson)
- Calibrating curves to market prices by global loss minimisation
- Bootstrapping piecewise discount curves maturity by maturity

Scope: single-curve zero/discount curves; no multi-curve, credit or
inflation variants.
"""

__version__ = "0.1.0"

# Core modules
from .errors import TermfitError, DomainError, OptimizationFailure, PreconditionViolation
from .conventions import Continuous, Periodic, convention_from_frequency
from .rates import (
    Rate,
    continuous,
    periodic,
    as_rate,
    rate,
    approx_equal,
    convert,
    discount,
    accumulation,
    forward,
)
from .config import FitConfig

# Curves
from .curves import (
    YieldModel,
    Constant,
    NelsonSiegel,
    NelsonSiegelSvensson,
    PiecewiseCurve,
)

# Instruments
from .instruments import (
    Cashflow,
    ZeroCouponBond,
    FixedBond,
    Quote,
    present_value,
    maturity,
    quotes_from_zero_rates,
    quotes_from_frame,
)

# Calibration
from .fitting import (
    Loss,
    Bootstrap,
    Tunable,
    parameter,
    DifferentialEvolution,
    FitResult,
    calibrate,
    fit,
    repricing_errors,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "TermfitError",
    "DomainError",
    "OptimizationFailure",
    "PreconditionViolation",
    # Rates
    "Continuous",
    "Periodic",
    "convention_from_frequency",
    "Rate",
    "continuous",
    "periodic",
    "as_rate",
    "rate",
    "approx_equal",
    "convert",
    "discount",
    "accumulation",
    "forward",
    "FitConfig",
    # Curves
    "YieldModel",
    "Constant",
    "NelsonSiegel",
    "NelsonSiegelSvensson",
    "PiecewiseCurve",
    # Instruments
    "Cashflow",
    "ZeroCouponBond",
    "FixedBond",
    "Quote",
    "present_value",
    "maturity",
    "quotes_from_zero_rates",
    "quotes_from_frame",
    # Calibration
    "Loss",
    "Bootstrap",
    "Tunable",
    "parameter",
    "DifferentialEvolution",
    "FitResult",
    "calibrate",
    "fit",
    "repricing_errors",
]
