"""Step-size selection for descent-based optimizers.

Example
-------
>>> import numpy as np
>>> from stepsearch.optimize import FunctionOracle, LineSearchConfig, create_line_search
>>> def rosen(x):
...     return (1 - x[0])**2 + 100 * (x[1] - x[0]**2)**2
>>> def rosen_grad(x):
...     return np.array([
...         -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
...         200 * (x[1] - x[0] ** 2),
...     ])
>>> oracle = FunctionOracle(rosen, rosen_grad)
>>> strategy = create_line_search(LineSearchConfig(method="MoreThuente"))
>>> x = np.array([-1.2, 1.0])
>>> result = strategy.search(x, -rosen_grad(x), oracle)
>>> result.success
True
"""

from .config import ArmijoConfig, LineSearchConfig, MoreThuenteConfig
from .core import FAILED_STEP, FunctionOracle, LineSearchResult, Oracle, is_failed_step
from .line_search import backtracking_armijo, more_thuente_step
from .strategies import (
    BacktrackingArmijo,
    LineSearch,
    MoreThuente,
    available_methods,
    create_line_search,
    search_with_fallback,
)
from .utils import approx_grad, directional_derivative, is_finite

__all__ = [
    "ArmijoConfig",
    "BacktrackingArmijo",
    "FAILED_STEP",
    "FunctionOracle",
    "LineSearch",
    "LineSearchConfig",
    "LineSearchResult",
    "MoreThuente",
    "MoreThuenteConfig",
    "Oracle",
    "approx_grad",
    "available_methods",
    "backtracking_armijo",
    "create_line_search",
    "directional_derivative",
    "is_failed_step",
    "is_finite",
    "more_thuente_step",
    "search_with_fallback",
]
