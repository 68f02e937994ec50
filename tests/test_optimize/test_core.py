import math

import numpy as np

from stepsearch.optimize import (
    FAILED_STEP,
    FunctionOracle,
    LineSearchResult,
    Oracle,
    is_failed_step,
)


def test_failed_step_sentinel():
    assert is_failed_step(FAILED_STEP)
    assert not is_failed_step(0.5)


def test_function_oracle_counts_evaluations():
    oracle = FunctionOracle(lambda x: float(x @ x), lambda x: 2 * x, cache=False)
    x = np.array([1.0, -1.0])
    assert oracle.value(x) == 2.0
    assert oracle.value(x) == 2.0
    assert np.allclose(oracle.gradient(x), [2.0, -2.0])
    assert oracle.nfev == 2
    assert oracle.njev == 1
    oracle.reset_counters()
    assert oracle.nfev == 0
    assert oracle.njev == 0


def test_function_oracle_cache_skips_repeated_point():
    calls = []

    def fun(x):
        calls.append(x.copy())
        return float(np.sum(x**2))

    oracle = FunctionOracle(fun, lambda x: 2 * x)
    x = np.array([0.5, 2.0])
    oracle.value(x)
    oracle.value(x.copy())
    oracle.value(x + 1.0)
    assert len(calls) == 2
    assert oracle.nfev == 2


def test_function_oracle_cached_gradient_is_not_aliased():
    oracle = FunctionOracle(lambda x: float(x @ x), lambda x: 2 * x)
    x = np.array([1.0])
    g = oracle.gradient(x)
    g[0] = 100.0
    assert oracle.gradient(x)[0] == 2.0
    assert oracle.njev == 1


def test_function_oracle_finite_difference_fallback():
    oracle = FunctionOracle(lambda x: float(x @ x))
    g = oracle.gradient(np.array([1.0, 3.0]))
    assert np.allclose(g, [2.0, 6.0], atol=1e-5)
    assert oracle.njev == 0
    assert oracle.nfev == 4


def test_function_oracle_satisfies_protocol():
    assert isinstance(FunctionOracle(lambda x: 0.0), Oracle)


def test_failure_result_defaults():
    result = LineSearchResult.failure("boom", nit=3, nfev=4)
    assert not result.success
    assert math.isnan(result.step_size)
    assert result.nit == 3
    assert result.nfev == 4
    assert result.njev == 0
    assert result.high == math.inf
