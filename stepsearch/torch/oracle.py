"""Autograd-backed objective oracle."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
import torch

TorchObjective = Callable[[torch.Tensor], torch.Tensor]


class TorchOracle:
    """
    Oracle whose gradient comes from PyTorch automatic differentiation.

    Points are exchanged as NumPy arrays so the oracle can be handed to any
    line-search strategy in place of a ``FunctionOracle``.

    Args:
        fn: Function of one tensor returning a scalar tensor. It must be
            differentiable with respect to its input.
        dtype: Floating dtype used for evaluation. Defaults to float64.
        device: Device used for evaluation. Defaults to the CPU.

    Example:
        >>> oracle = TorchOracle(lambda t: (t ** 2).sum())
        >>> oracle.gradient(np.array([1.0, -2.0]))
        array([ 2., -4.])
    """

    def __init__(
        self,
        fn: TorchObjective,
        dtype: torch.dtype = torch.float64,
        device: Optional[torch.device] = None,
    ) -> None:
        if not dtype.is_floating_point:
            raise ValueError(f"TorchOracle requires a floating dtype, got {dtype}.")
        self.fn = fn
        self.dtype = dtype
        self.device = device if device is not None else torch.device("cpu")
        self.nfev = 0
        self.njev = 0

    def _as_tensor(self, x: np.ndarray, requires_grad: bool = False) -> torch.Tensor:
        t = torch.as_tensor(np.asarray(x, dtype=float), dtype=self.dtype, device=self.device)
        if requires_grad:
            t = t.clone().requires_grad_(True)
        return t

    def _scalar(self, out: torch.Tensor) -> torch.Tensor:
        if out.numel() != 1:
            raise ValueError(
                f"Objective must return a scalar tensor, got shape {tuple(out.shape)}."
            )
        return out.reshape(())

    def _differentiate(self, x: np.ndarray) -> tuple[torch.Tensor, np.ndarray]:
        t = self._as_tensor(x, requires_grad=True)
        out = self._scalar(self.fn(t))
        if not out.requires_grad:
            # Objective does not depend on x
            return out, np.zeros(np.shape(x), dtype=float)
        (grad,) = torch.autograd.grad(out, t, allow_unused=True)
        if grad is None:
            return out, np.zeros(np.shape(x), dtype=float)
        return out, grad.detach().cpu().numpy().astype(float)

    def value(self, x: np.ndarray) -> float:
        with torch.no_grad():
            out = self._scalar(self.fn(self._as_tensor(x)))
        self.nfev += 1
        return float(out.item())

    def gradient(self, x: np.ndarray) -> np.ndarray:
        _, grad = self._differentiate(x)
        self.njev += 1
        return grad

    def value_and_gradient(self, x: np.ndarray) -> tuple[float, np.ndarray]:
        """Evaluate value and gradient with a single forward pass."""
        out, grad = self._differentiate(x)
        self.nfev += 1
        self.njev += 1
        return float(out.detach().item()), grad

    def reset_counters(self) -> None:
        self.nfev = 0
        self.njev = 0

    def __repr__(self) -> str:
        return f"TorchOracle(dtype={self.dtype}, device={self.device})"
