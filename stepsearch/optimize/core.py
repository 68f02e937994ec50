"""Core interfaces shared by the line-search strategies."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, runtime_checkable

import numpy as np

from .utils import approx_grad

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]

# Step size returned when no acceptable step was found.
FAILED_STEP = float("nan")


def is_failed_step(step_size: float) -> bool:
    """Return True if ``step_size`` is the failure sentinel."""
    return math.isnan(step_size)


@runtime_checkable
class Oracle(Protocol):
    """Objective evaluated along a search ray.

    Line searches only ever call ``value`` and ``gradient``; whatever
    caching an implementation does is invisible to them.
    """

    def value(self, x: Array) -> float:
        ...

    def gradient(self, x: Array) -> Array:
        ...


class FunctionOracle:
    """Oracle backed by plain NumPy callables.

    Args:
        fun: Objective ``f(x) -> float``.
        grad: Gradient ``g(x) -> array``. When omitted, central differences
            of ``fun`` are used and their evaluations are counted in
            ``nfev``.
        cache: Remember the most recent point so repeated queries at the
            same point do not re-evaluate ``fun``/``grad``.
    """

    def __init__(
        self, fun: Objective, grad: Optional[Gradient] = None, cache: bool = True
    ) -> None:
        self.fun = fun
        self.grad = grad
        self.cache = cache
        self.nfev = 0
        self.njev = 0
        self._value_at: Optional[tuple[Array, float]] = None
        self._grad_at: Optional[tuple[Array, Array]] = None

    def value(self, x: Array) -> float:
        x = np.asarray(x, dtype=float)
        if self.cache and self._value_at is not None and np.array_equal(self._value_at[0], x):
            return self._value_at[1]
        fx = float(self.fun(x))
        self.nfev += 1
        if self.cache:
            self._value_at = (x.copy(), fx)
        return fx

    def gradient(self, x: Array) -> Array:
        x = np.asarray(x, dtype=float)
        if self.cache and self._grad_at is not None and np.array_equal(self._grad_at[0], x):
            return self._grad_at[1].copy()
        if self.grad is not None:
            g = np.asarray(self.grad(x), dtype=float)
            self.njev += 1
        else:
            g, evals = approx_grad(self.fun, x, return_evals=True)
            self.nfev += int(evals)
        if self.cache:
            self._grad_at = (x.copy(), g.copy())
        return g

    def reset_counters(self) -> None:
        self.nfev = 0
        self.njev = 0

    def __repr__(self) -> str:
        return (
            f"FunctionOracle(fun={getattr(self.fun, '__name__', self.fun)!r}, "
            f"grad={'analytic' if self.grad is not None else 'finite-difference'}, "
            f"cache={self.cache})"
        )


@dataclass
class LineSearchResult:
    """Outcome of one line-search call.

    ``step_size`` is ``FAILED_STEP`` (NaN) whenever ``success`` is False.
    ``low`` and ``high`` hold the final bracket; ``high`` is ``inf`` for an
    unbounded search that never overshot.
    """

    step_size: float
    success: bool
    message: str
    nit: int
    nfev: int
    njev: int
    energy: float = FAILED_STEP
    low: float = 0.0
    high: float = math.inf

    @classmethod
    def failure(cls, message: str, nit: int = 0, nfev: int = 0, njev: int = 0, **kwargs) -> "LineSearchResult":
        return cls(
            step_size=FAILED_STEP,
            success=False,
            message=message,
            nit=nit,
            nfev=nfev,
            njev=njev,
            **kwargs,
        )


__all__ = [
    "Array",
    "FAILED_STEP",
    "FunctionOracle",
    "Gradient",
    "LineSearchResult",
    "Objective",
    "Oracle",
    "is_failed_step",
]
