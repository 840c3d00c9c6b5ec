"""
Exception taxonomy for termfit.

- DomainError: invalid model construction or rate conversion
- OptimizationFailure: the optimizer found no finite, feasible point
- PreconditionViolation: bad inputs to a fit (empty or unsorted quotes)
"""


class TermfitError(Exception):
    """Base class for all termfit errors."""


class DomainError(TermfitError, ValueError):
    """Raised when a parameter or rate lies outside its admissible domain."""


class OptimizationFailure(TermfitError, RuntimeError):
    """Raised when calibration cannot produce a finite objective value."""


class PreconditionViolation(TermfitError, ValueError):
    """Raised when fit inputs break a documented precondition."""


__all__ = [
    "TermfitError",
    "DomainError",
    "OptimizationFailure",
    "PreconditionViolation",
]
