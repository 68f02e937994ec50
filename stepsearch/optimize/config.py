"""Configuration for line-search strategies."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class MoreThuenteConfig:
    """
    Parameters of the bounded-interval Wolfe search.

    Coefficients are not range-checked; keeping ``0 < c1 < c2 < 1`` is up to
    the caller.

    Args:
        c1: Sufficient-decrease coefficient.
        c2: Curvature coefficient.
        max_iterations: Maximum number of trial steps.
        max_step_size: Upper bound on the step size. ``None`` or ``inf``
            leaves the step unbounded.
    """

    c1: float = 1e-4
    c2: float = 0.9
    max_iterations: int = 20
    max_step_size: Optional[float] = 10.0

    @property
    def step_bound(self) -> float:
        """``max_step_size`` with ``None`` mapped to ``inf``."""
        return math.inf if self.max_step_size is None else float(self.max_step_size)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "MoreThuenteConfig":
        defaults = cls()
        return cls(
            c1=float(params.get("c1", defaults.c1)),
            c2=float(params.get("c2", defaults.c2)),
            max_iterations=int(params.get("max_iterations", defaults.max_iterations)),
            max_step_size=_optional_float(params.get("max_step_size", defaults.max_step_size)),
        )


@dataclass(frozen=True)
class ArmijoConfig:
    """
    Parameters of the sufficient-decrease-only backtracking search.

    Args:
        c: Armijo constant in (0, 1).
        rho: Contraction factor applied after each rejected step, in (0, 1).
        max_iterations: Maximum number of trial steps.
    """

    c: float = 1e-4
    rho: float = 0.5
    max_iterations: int = 50

    def __post_init__(self) -> None:
        if not (0 < self.c < 1):
            raise ValueError("Armijo constant c must lie in (0, 1)")
        if not (0 < self.rho < 1):
            raise ValueError("rho must lie in (0, 1)")

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ArmijoConfig":
        defaults = cls()
        return cls(
            c=float(params.get("c", defaults.c)),
            rho=float(params.get("rho", defaults.rho)),
            max_iterations=int(params.get("max_iterations", defaults.max_iterations)),
        )


@dataclass(frozen=True)
class LineSearchConfig:
    """
    Configuration for creating a line-search strategy.

    Args:
        method: Strategy name, see ``available_methods()``.
        min_step_size: Numerical floor; a step at or below it is a failure.
        default_init_step_size: Starting step size of every search.
        nan_free_max_iterations: How many times the starting step may be
            halved while the objective is non-finite at the trial point.
        more_thuente: Parameters of the "MoreThuente" strategy.
        armijo: Parameters of the "Armijo" strategy.
    """

    method: str = "MoreThuente"
    min_step_size: float = 1e-10
    default_init_step_size: float = 1.0
    nan_free_max_iterations: int = 50
    more_thuente: MoreThuenteConfig = field(default_factory=MoreThuenteConfig)
    armijo: ArmijoConfig = field(default_factory=ArmijoConfig)

    def __post_init__(self) -> None:
        if self.min_step_size <= 0.0:
            raise ValueError("min_step_size must be positive.")
        if self.default_init_step_size <= 0.0:
            raise ValueError("default_init_step_size must be positive.")
        if self.more_thuente.max_iterations < 0 or self.armijo.max_iterations < 0:
            raise ValueError("max_iterations must be non-negative.")
        if self.nan_free_max_iterations < 0:
            raise ValueError("nan_free_max_iterations must be non-negative.")

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]] = None) -> "LineSearchConfig":
        """
        Build a configuration from a nested mapping.

        Accepts either ``{"line_search": {...}}`` or the inner section
        itself. Unknown keys are ignored and missing keys take their
        defaults.

        Example:
            >>> cfg = LineSearchConfig.from_params(
            ...     {"line_search": {"method": "MoreThuente",
            ...                      "MoreThuente": {"c2": 0.5}}}
            ... )
            >>> cfg.more_thuente.c2
            0.5
        """
        params = dict(params or {})
        section = params.get("line_search", params)
        defaults = cls()
        return cls(
            method=str(section.get("method", defaults.method)),
            min_step_size=float(section.get("min_step_size", defaults.min_step_size)),
            default_init_step_size=float(
                section.get("default_init_step_size", defaults.default_init_step_size)
            ),
            nan_free_max_iterations=int(
                section.get("nan_free_max_iterations", defaults.nan_free_max_iterations)
            ),
            more_thuente=MoreThuenteConfig.from_params(section.get("MoreThuente", {})),
            armijo=ArmijoConfig.from_params(section.get("Armijo", {})),
        )


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


__all__ = ["ArmijoConfig", "LineSearchConfig", "MoreThuenteConfig"]
