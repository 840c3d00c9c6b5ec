"""
Sequential bootstrap of a piecewise discount curve.

Builds the curve one maturity at a time:
1. Check quotes are non-empty and sorted by strictly increasing maturity
2. Solve the first discount factor with a flat-rate fit to the first quote
3. For each later quote, append its maturity and solve only the newest
   discount factor, all earlier nodes held fixed
4. Verify repricing; while any quote misses, re-solve every node in turn
   with the others held fixed
5. Return the frozen curve

With "log_linear" or "linear" interpolation later nodes never move the
curve before the previous node, so step 3 already reprices every quote.
A cubic spline is not local: a new node shifts the curve between earlier
nodes, and coupon instruments only reprice after the sweeps of step 4.
"""

from typing import List, Optional, Sequence
import logging

from scipy.optimize import brentq

from ..config import FitConfig
from ..errors import OptimizationFailure, PreconditionViolation
from ..instruments import Quote, maturity, present_value
from ..curves.constant import Constant
from ..curves.piecewise import LAST_DF_BOUNDS, PiecewiseCurve
from .methods import Loss
from .optimizer import DifferentialEvolution, Optimizer
from .loss import Pricer, fit_loss

logger = logging.getLogger(__name__)

MAX_SWEEPS = 100


def check_bootstrap_quotes(quotes: Sequence[Quote]) -> List[float]:
    """
    Validate bootstrap inputs.

    Returns:
        Quote maturities in order

    Raises:
        PreconditionViolation: empty quotes, non-positive or unsorted maturities
    """
    if not quotes:
        raise PreconditionViolation("Bootstrap needs at least one quote")

    times = [maturity(q) for q in quotes]
    if times[0] <= 0:
        raise PreconditionViolation(f"Quote maturities must be positive, got {times[0]}")
    for i in range(1, len(times)):
        if times[i] <= times[i - 1]:
            raise PreconditionViolation(
                f"Quotes must be sorted by strictly increasing maturity: "
                f"quote {i} matures at {times[i]} after {times[i - 1]}"
            )
    return times


def _misses(curve: PiecewiseCurve, quotes: Sequence[Quote], pricer: Pricer, tolerance: float) -> List[int]:
    """Indices of quotes the curve does not reprice within tolerance."""
    return [
        i for i, q in enumerate(quotes)
        if abs(pricer(curve, q.instrument) - q.price) > tolerance * max(1.0, abs(q.price))
    ]


def _solve_node(curve: PiecewiseCurve, index: int, quote: Quote, pricer: Pricer) -> PiecewiseCurve:
    """
    Re-solve one node so that its quote reprices, all other nodes fixed.

    The bracket is widened around the current factor until the repricing
    error changes sign, then refined with Brent's method.
    """
    def error(df: float) -> float:
        return pricer(curve.with_discount_factor(index, df), quote.instrument) - quote.price

    df0 = curve.discount_factors[index]
    if error(df0) == 0.0:
        return curve

    width = 1e-8
    while width <= 0.5:
        lower = max(LAST_DF_BOUNDS[0], df0 * (1.0 - width))
        upper = min(LAST_DF_BOUNDS[1], df0 * (1.0 + width))
        if error(lower) * error(upper) <= 0.0:
            df = brentq(error, lower, upper, xtol=1e-15)
            return curve.with_discount_factor(index, df)
        width *= 10.0

    raise OptimizationFailure(
        f"Could not bracket discount factor for node {index} at t={curve.times[index]}"
    )


def _sweep(curve: PiecewiseCurve, quotes: Sequence[Quote], pricer: Pricer, tolerance: float) -> PiecewiseCurve:
    """Gauss-Seidel sweeps over all nodes until every quote reprices."""
    for sweep in range(MAX_SWEEPS):
        missed = _misses(curve, quotes, pricer, tolerance)
        if not missed:
            if sweep:
                logger.debug("Bootstrap repricing converged after %d sweeps", sweep)
            return curve
        for i, q in enumerate(quotes):
            curve = _solve_node(curve, i, q, pricer)

    missed = _misses(curve, quotes, pricer, tolerance)
    if missed:
        raise OptimizationFailure(
            f"Bootstrap left {len(missed)} quotes outside tolerance {tolerance:.1e} "
            f"after {MAX_SWEEPS} sweeps"
        )
    return curve


def fit_bootstrap(
    template: Optional[PiecewiseCurve],
    quotes: Sequence[Quote],
    optimizer: Optional[Optimizer] = None,
    config: Optional[FitConfig] = None,
    pricer: Pricer = present_value,
    tolerance: float = 1e-10
) -> PiecewiseCurve:
    """
    Bootstrap a piecewise curve through the quotes.

    Args:
        template: Curve whose interpolation method is used (nodes ignored);
            None for the default cubic spline
        quotes: Quotes sorted by increasing maturity
        optimizer: Optimizer for each one-dimensional solve
        config: Optimizer settings when no optimizer is given
        pricer: present_value(model, instrument) collaborator
        tolerance: Repricing tolerance, relative to max(1, |price|)

    Returns:
        PiecewiseCurve with one node per quote, repricing every quote

    Raises:
        PreconditionViolation: template is not a PiecewiseCurve, or bad quotes
        OptimizationFailure: quotes cannot all be repriced within tolerance
    """
    if template is not None and not isinstance(template, PiecewiseCurve):
        raise PreconditionViolation(
            f"Bootstrap needs a PiecewiseCurve template, got {type(template).__name__}"
        )

    quotes = list(quotes)
    maturities = check_bootstrap_quotes(quotes)

    interpolation = template.interpolation if template is not None else "cubic_spline"
    optimizer = optimizer or DifferentialEvolution(config or FitConfig.bootstrap())
    squared = Loss()

    times = [maturities[0]]
    discount_vector = [0.0]

    first = fit_loss(Constant(), quotes[:1], squared, optimizer=optimizer, pricer=pricer)
    discount_vector[0] = float(first.discount(times[0]))
    logger.debug("Bootstrap node 0: t=%.4f df=%.10f", times[0], discount_vector[0])

    for i in range(1, len(quotes)):
        times.append(maturities[i])
        # placeholder, seeded with the previous node
        discount_vector.append(discount_vector[-1])

        curve = PiecewiseCurve(tuple(times), tuple(discount_vector), interpolation)
        solved = fit_loss(
            curve,
            quotes[i:i + 1],
            squared,
            parameters=curve.default_parameters(),
            optimizer=optimizer,
            pricer=pricer,
        )
        discount_vector[i] = solved.discount_factors[-1]
        logger.debug("Bootstrap node %d: t=%.4f df=%.10f", i, times[i], discount_vector[i])

    result = PiecewiseCurve(tuple(times), tuple(discount_vector), interpolation)
    result = _sweep(result, quotes, pricer, tolerance)
    logger.info("Bootstrapped %d nodes (%s interpolation)", len(times), interpolation)
    return result


__all__ = [
    "check_bootstrap_quotes",
    "fit_bootstrap",
]
