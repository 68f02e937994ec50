"""Pytest configuration and shared fixtures for stepsearch tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Oracles for a few objectives with known line minimizers
"""

import os

import numpy as np
import pytest
import torch

from stepsearch.optimize import FunctionOracle


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator()
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Set global random seeds for every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture
def square_oracle() -> FunctionOracle:
    """``f(x) = x . x`` with its analytic gradient."""
    return FunctionOracle(lambda x: float(x @ x), lambda x: 2 * x)
