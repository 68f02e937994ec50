"""Line-search primitives following Nocedal & Wright.

``more_thuente_step`` brackets a step satisfying the sufficient-decrease and
curvature (Wolfe) conditions by doubling the step until it overshoots and
bisecting afterwards. ``backtracking_armijo`` enforces sufficient decrease
only.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from ..logging import get_logger
from .core import FAILED_STEP, Array, LineSearchResult, Objective, Oracle
from .utils import check_same_shape, directional_derivative, is_finite

logger = get_logger(__name__)


def backtracking_armijo(
    f: Objective,
    x: Array,
    p: Array,
    grad_fx: Array,
    alpha0: float = 1.0,
    rho: float = 0.5,
    c: float = 1e-4,
    max_iter: int = 50,
    fx: Optional[float] = None,
) -> tuple[float, int]:
    """Classic Armijo backtracking line search.

    Returns ``(alpha, nfev)``. ``alpha`` is ``FAILED_STEP`` when no trial
    step satisfied sufficient decrease within ``max_iter`` contractions.
    Pass ``fx`` to reuse an already known ``f(x)``.
    """
    if not (0 < c < 1):
        raise ValueError("Armijo constant c must lie in (0, 1)")
    if not (0 < rho < 1):
        raise ValueError("rho must lie in (0, 1)")
    x = np.asarray(x, dtype=float)
    p = np.asarray(p, dtype=float)
    alpha = float(alpha0)
    nfev = 0
    if fx is None:
        fx = f(x)
        nfev += 1
    grad_dot = directional_derivative(grad_fx, p)
    for _ in range(max_iter):
        candidate = x + alpha * p
        f_new = f(candidate)
        nfev += 1
        # NaN never compares true, so non-finite trial values keep contracting
        if f_new <= fx + c * alpha * grad_dot:
            return alpha, nfev
        alpha *= rho
    return FAILED_STEP, nfev


def more_thuente_step(
    x: Array,
    delta_x: Array,
    oracle: Oracle,
    old_energy: float,
    old_grad: Array,
    starting_step_size: float,
    *,
    c1: float = 1e-4,
    c2: float = 0.9,
    max_iterations: int = 20,
    max_step_size: Optional[float] = 10.0,
    min_step_size: float = 1e-10,
    log: Optional[logging.Logger] = None,
) -> LineSearchResult:
    """Bounded-interval Wolfe search along ``x + t * delta_x``.

    The bracket ``[low, high]`` starts at ``[0, max_step_size]``. A trial
    step violating sufficient decrease becomes the new ``high``; one
    violating the curvature condition becomes the new ``low``. Until the
    first overshoot the step doubles (clamped to ``max_step_size``),
    afterwards it bisects the bracket. Equality in either condition counts
    as satisfied.

    ``delta_x`` must be a descent direction (``old_grad . delta_x < 0``);
    this is not checked and a non-descent direction ends in failure.

    Parameters
    ----------
    x, delta_x:
        Current point and search direction, same shape.
    oracle:
        Provides ``value`` and ``gradient`` along the ray.
    old_energy, old_grad:
        Objective value and gradient at ``x``.
    starting_step_size:
        First trial step, positive.
    c1, c2:
        Sufficient-decrease and curvature coefficients.
    max_iterations:
        Maximum number of trial steps. Zero always fails.
    max_step_size:
        Upper bound of the bracket; ``None`` for unbounded.
    min_step_size:
        Steps at or below this floor are reported as failures.
    log:
        Logger for diagnostics, defaults to this module's logger.

    Returns
    -------
    LineSearchResult
        ``success`` is True only when both conditions hold at the returned
        step and the step lies strictly inside ``(min_step_size, high)``.
    """
    log = log or logger
    x = np.asarray(x, dtype=float)
    delta_x = np.asarray(delta_x, dtype=float)
    check_same_shape(x, delta_x)
    if not is_finite(old_energy) or not is_finite(old_grad):
        log.warning("More-Thuente line search got a non-finite energy or gradient at x")
        return LineSearchResult.failure("Non-finite energy or gradient at the current point.")
    bound = math.inf if max_step_size is None else float(max_step_size)
    slope = directional_derivative(old_grad, delta_x)
    decrease_slope = c1 * slope
    curvature_target = c2 * slope

    step_size = float(starting_step_size)
    low = 0.0
    high = bound
    energy = FAILED_STEP
    nit = 0
    nfev = 0
    njev = 0
    satisfied = False
    bracketed = False

    for i in range(max_iterations):
        new_x = x + step_size * delta_x
        energy = oracle.value(new_x)
        nfev += 1
        nit += 1
        if not is_finite(energy):
            log.warning(
                "More-Thuente line search hit a non-finite energy at step_size=%g", step_size
            )
            return LineSearchResult.failure(
                "Non-finite energy at trial step.", nit, nfev, njev, low=low, high=high
            )

        if energy > old_energy + step_size * decrease_slope:
            high = step_size
            bracketed = True
        else:
            grad = oracle.gradient(new_x)
            njev += 1
            if not is_finite(grad):
                log.warning(
                    "More-Thuente line search hit a non-finite gradient at step_size=%g",
                    step_size,
                )
                return LineSearchResult.failure(
                    "Non-finite gradient at trial step.", nit, nfev, njev, low=low, high=high
                )
            if directional_derivative(grad, delta_x) < curvature_target:
                low = step_size
            else:
                satisfied = True
                log.debug("Iteration %d: step_size = %g, energy = %g", i, step_size, energy)
                break

        # an overshoot at max_step_size must bisect too
        if bracketed:
            step_size = 0.5 * (low + high)
        else:
            step_size = min(2.0 * step_size, bound)

        log.debug("Iteration %d: step_size = %g, energy = %g", i, step_size, energy)

    if not satisfied or step_size <= min_step_size or step_size >= high:
        log.warning(
            "More-Thuente line search failed to find a valid step size. step_size=%g, high=%g",
            step_size,
            high,
        )
        if not satisfied:
            message = "Maximum iterations reached without satisfying the Wolfe conditions."
        else:
            message = "Step size left the bracket (%g, %g)." % (min_step_size, high)
        return LineSearchResult.failure(message, nit, nfev, njev, low=low, high=high)

    return LineSearchResult(
        step_size=step_size,
        success=True,
        message="Wolfe conditions satisfied.",
        nit=nit,
        nfev=nfev,
        njev=njev,
        energy=float(energy),
        low=low,
        high=high,
    )


__all__ = ["backtracking_armijo", "more_thuente_step"]
