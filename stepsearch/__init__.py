"""stepsearch - step-size selection for descent-based nonlinear optimizers."""

__version__ = "0.1.0"

from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    FAILED_STEP,
    ArmijoConfig,
    BacktrackingArmijo,
    FunctionOracle,
    LineSearch,
    LineSearchConfig,
    LineSearchResult,
    MoreThuente,
    MoreThuenteConfig,
    Oracle,
    available_methods,
    backtracking_armijo,
    create_line_search,
    is_failed_step,
    more_thuente_step,
    search_with_fallback,
)

__all__ = [
    "__version__",
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
    "available_methods",
    "backtracking_armijo",
    "configure_logging",
    "create_line_search",
    "get_logger",
    "is_failed_step",
    "more_thuente_step",
    "search_with_fallback",
    "set_log_level",
]
