"""Numeric helpers shared by the oracles and line searches.

Pure NumPy implementations, deterministic and free of SciPy.
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]


def approx_grad(
    fun: Objective, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    return_evals:
        Also return the number of objective evaluations spent.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    evals = 0
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei.flat[i] = eps
        fx_plus = fun(x + ei)
        fx_minus = fun(x - ei)
        evals += 2
        grad.flat[i] = (fx_plus - fx_minus) / (2.0 * eps)
    if return_evals:
        return grad, evals
    return grad


def directional_derivative(grad: Array, direction: Array) -> float:
    """Return ``grad . direction`` as a Python float."""
    return float(np.dot(np.ravel(grad), np.ravel(direction)))


def is_finite(value: float | Array) -> bool:
    """True when a scalar or every entry of an array is finite."""
    if np.ndim(value) == 0:
        return math.isfinite(float(value))
    return bool(np.all(np.isfinite(value)))


def check_same_shape(x: Array, delta_x: Array) -> None:
    """Raise ValueError unless point and direction have the same shape."""
    if np.shape(x) != np.shape(delta_x):
        raise ValueError(
            f"Direction shape {np.shape(delta_x)} does not match point shape {np.shape(x)}."
        )


__all__ = [
    "Array",
    "Objective",
    "approx_grad",
    "check_same_shape",
    "directional_derivative",
    "is_finite",
]
