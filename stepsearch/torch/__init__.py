"""PyTorch integration for stepsearch.

Wraps a differentiable torch function as an objective oracle, so line
searches can run on objectives whose gradients come from autograd.

Example:
    >>> import numpy as np
    >>> from stepsearch.optimize import create_line_search
    >>> from stepsearch.torch import TorchOracle
    >>> oracle = TorchOracle(lambda t: (t ** 2).sum())
    >>> x = np.array([2.0])
    >>> create_line_search().line_search(x, -oracle.gradient(x), oracle)
    0.5
"""

from stepsearch.torch.oracle import TorchOracle

__all__ = ["TorchOracle"]
