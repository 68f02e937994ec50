"""Line-search strategies selectable by configuration.

Example
-------
>>> import numpy as np
>>> from stepsearch.optimize import FunctionOracle, create_line_search
>>> oracle = FunctionOracle(lambda x: float(x @ x), lambda x: 2 * x)
>>> strategy = create_line_search("MoreThuente")
>>> x = np.array([2.0])
>>> strategy.line_search(x, -oracle.gradient(x), oracle)
0.5
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional, Union

import numpy as np

from ..logging import get_logger
from .config import LineSearchConfig
from .core import FAILED_STEP, Array, LineSearchResult, Oracle, is_failed_step
from .line_search import backtracking_armijo, more_thuente_step
from .utils import check_same_shape, is_finite

logger = get_logger(__name__)


class LineSearch(ABC):
    """Common driver for all line-search strategies.

    A strategy only stores its immutable configuration, so one instance can
    serve any number of searches. Every search state lives inside a single
    call.
    """

    def __init__(self, config: Optional[LineSearchConfig] = None) -> None:
        self.config = config if config is not None else LineSearchConfig()

    @abstractmethod
    def name(self) -> str:
        """Human readable strategy name."""

    @abstractmethod
    def compute_descent_step_size(
        self,
        x: Array,
        delta_x: Array,
        oracle: Oracle,
        old_energy: float,
        old_grad: Array,
        starting_step_size: float,
    ) -> LineSearchResult:
        """Search for a step once the energy and gradient at ``x`` are known."""

    @property
    def minimum_allowed_step_size(self) -> float:
        return self.config.min_step_size

    def line_search(self, x: Array, delta_x: Array, oracle: Oracle) -> float:
        """Return a step size along ``delta_x``, or ``FAILED_STEP`` (NaN)."""
        return self.search(x, delta_x, oracle).step_size

    def search(self, x: Array, delta_x: Array, oracle: Oracle) -> LineSearchResult:
        """Run a full search from ``x`` and report the outcome."""
        x = np.asarray(x, dtype=float)
        delta_x = np.asarray(delta_x, dtype=float)
        check_same_shape(x, delta_x)

        old_energy = oracle.value(x)
        if not is_finite(old_energy):
            logger.warning("%s: energy at the current point is not finite", self.name())
            return LineSearchResult.failure("Non-finite energy at the current point.", nfev=1)
        old_grad = np.asarray(oracle.gradient(x), dtype=float)
        if not is_finite(old_grad):
            logger.warning("%s: gradient at the current point is not finite", self.name())
            return LineSearchResult.failure(
                "Non-finite gradient at the current point.", nfev=1, njev=1
            )

        starting_step_size, nan_free_fev = self.compute_nan_free_step_size(
            x, delta_x, oracle, self.config.default_init_step_size
        )
        if is_failed_step(starting_step_size):
            logger.warning("%s: no finite energy along the search direction", self.name())
            return LineSearchResult.failure(
                "Energy is not finite along the search direction.",
                nfev=1 + nan_free_fev,
                njev=1,
            )

        result = self.compute_descent_step_size(
            x, delta_x, oracle, old_energy, old_grad, starting_step_size
        )
        result.nfev += 1 + nan_free_fev
        result.njev += 1
        if result.success:
            logger.debug(
                "%s: step_size=%g after %d iterations", self.name(), result.step_size, result.nit
            )
        return result

    def compute_nan_free_step_size(
        self, x: Array, delta_x: Array, oracle: Oracle, step_size: float
    ) -> tuple[float, int]:
        """Halve ``step_size`` until the energy at the trial point is finite.

        Returns ``(step_size, nfev)``; the step is ``FAILED_STEP`` when it
        drops to the floor or the halving budget runs out.
        """
        nfev = 0
        for _ in range(self.config.nan_free_max_iterations + 1):
            energy = oracle.value(x + step_size * delta_x)
            nfev += 1
            if is_finite(energy):
                return step_size, nfev
            step_size *= 0.5
            if step_size <= self.minimum_allowed_step_size:
                break
        return FAILED_STEP, nfev

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config!r})"


class MoreThuente(LineSearch):
    """Bisection-expansion search for a step satisfying the Wolfe conditions."""

    def __init__(self, config: Optional[LineSearchConfig] = None) -> None:
        super().__init__(config)
        params = self.config.more_thuente
        logger.debug(
            "More-Thuente parameters: c1=%g, c2=%g, max_iterations=%d, max_step_size=%s",
            params.c1,
            params.c2,
            params.max_iterations,
            params.max_step_size,
        )

    def name(self) -> str:
        return "More-Thuente"

    def compute_descent_step_size(
        self,
        x: Array,
        delta_x: Array,
        oracle: Oracle,
        old_energy: float,
        old_grad: Array,
        starting_step_size: float,
    ) -> LineSearchResult:
        params = self.config.more_thuente
        return more_thuente_step(
            x,
            delta_x,
            oracle,
            old_energy,
            old_grad,
            starting_step_size,
            c1=params.c1,
            c2=params.c2,
            max_iterations=params.max_iterations,
            max_step_size=params.max_step_size,
            min_step_size=self.minimum_allowed_step_size,
            log=logger,
        )


class BacktrackingArmijo(LineSearch):
    """Sufficient-decrease-only search delegating to ``backtracking_armijo``."""

    def __init__(self, config: Optional[LineSearchConfig] = None) -> None:
        super().__init__(config)
        params = self.config.armijo
        logger.debug(
            "Armijo parameters: c=%g, rho=%g, max_iterations=%d",
            params.c,
            params.rho,
            params.max_iterations,
        )

    def name(self) -> str:
        return "Armijo"

    def compute_descent_step_size(
        self,
        x: Array,
        delta_x: Array,
        oracle: Oracle,
        old_energy: float,
        old_grad: Array,
        starting_step_size: float,
    ) -> LineSearchResult:
        params = self.config.armijo
        alpha, nfev = backtracking_armijo(
            oracle.value,
            x,
            delta_x,
            old_grad,
            alpha0=starting_step_size,
            rho=params.rho,
            c=params.c,
            max_iter=params.max_iterations,
            fx=old_energy,
        )
        if is_failed_step(alpha) or alpha <= self.minimum_allowed_step_size:
            logger.warning("Armijo line search failed to find a valid step size.")
            return LineSearchResult.failure(
                "No step satisfied sufficient decrease.", nit=nfev, nfev=nfev
            )
        return LineSearchResult(
            step_size=alpha,
            success=True,
            message="Sufficient decrease satisfied.",
            nit=nfev,
            nfev=nfev,
            njev=0,
        )


_METHODS: dict[str, type[LineSearch]] = {
    "MoreThuente": MoreThuente,
    "Armijo": BacktrackingArmijo,
}

_ALIASES = {
    "morethuente": "MoreThuente",
    "more-thuente": "MoreThuente",
    "armijo": "Armijo",
    "backtracking": "Armijo",
    "cppoptarmijo": "Armijo",
}


def available_methods() -> list[str]:
    """Names accepted by ``create_line_search``."""
    return sorted(_METHODS)


def create_line_search(
    config: Union[LineSearchConfig, Mapping[str, Any], str, None] = None,
) -> LineSearch:
    """
    Create a line-search strategy from a configuration.

    Args:
        config: A ``LineSearchConfig``, a nested parameter mapping accepted
            by ``LineSearchConfig.from_params``, a bare method name, or None
            for the default strategy.

    Returns:
        The configured strategy.

    Raises:
        ValueError: If the method name is not supported.
    """
    if config is None:
        config = LineSearchConfig()
    elif isinstance(config, str):
        config = LineSearchConfig(method=config)
    elif not isinstance(config, LineSearchConfig):
        config = LineSearchConfig.from_params(config)

    key = _ALIASES.get(config.method.lower())
    if key is None:
        raise ValueError(
            f"Unsupported line search '{config.method}'. "
            f"Supported names: {available_methods()}"
        )
    return _METHODS[key](config)


def search_with_fallback(
    strategies: Iterable[LineSearch], x: Array, delta_x: Array, oracle: Oracle
) -> LineSearchResult:
    """Try each strategy in turn and return the first successful result.

    When all strategies fail the last failure is returned.
    """
    result = None
    for strategy in strategies:
        result = strategy.search(x, delta_x, oracle)
        if result.success:
            return result
        logger.info("%s failed (%s), trying next strategy", strategy.name(), result.message)
    if result is None:
        raise ValueError("At least one strategy is required.")
    return result


__all__ = [
    "BacktrackingArmijo",
    "LineSearch",
    "MoreThuente",
    "available_methods",
    "create_line_search",
    "search_with_fallback",
]
