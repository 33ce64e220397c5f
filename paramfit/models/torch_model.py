"""Optimisable wrapper around a PyTorch module and a scalar loss."""

from __future__ import annotations

from typing import Callable, List

import numpy as np
import torch
from torch.nn.utils import parameters_to_vector, vector_to_parameters

Array = np.ndarray


class TorchModel:
    """
    Expose a ``torch.nn.Module`` through the flat-vector model contract.

    The parameter vector is the concatenation of ``module.parameters()`` in
    registration order. The objective is computed under ``torch.no_grad``;
    the gradient comes from autograd.

    Args:
        module: Module whose parameters are fitted.
        loss_fn: Callable returning a scalar loss tensor for the module.
    """

    def __init__(
        self,
        module: torch.nn.Module,
        loss_fn: Callable[[torch.nn.Module], torch.Tensor],
    ) -> None:
        self.module = module
        self.loss_fn = loss_fn
        params = self._parameters()
        if not params:
            raise ValueError("module has no parameters to fit")

    def _parameters(self) -> List[torch.nn.Parameter]:
        return list(self.module.parameters())

    def _loss(self) -> torch.Tensor:
        loss = self.loss_fn(self.module)
        if loss.ndim != 0:
            raise ValueError("loss_fn must return a scalar tensor.")
        return loss

    @property
    def num_parameters(self) -> int:
        return sum(p.numel() for p in self._parameters())

    def get_parameters_vector(self) -> Array:
        vec = parameters_to_vector(self._parameters()).detach().cpu()
        return vec.to(torch.float64).numpy().copy()

    def set_parameters_vector(self, params: Array) -> None:
        params = np.asarray(params, dtype=float)
        if params.ndim != 1 or params.size != self.num_parameters:
            raise ValueError(
                f"expected {self.num_parameters} parameters, got {params.size}"
            )
        ref = self._parameters()[0]
        vec = torch.as_tensor(params, dtype=ref.dtype, device=ref.device)
        with torch.no_grad():
            vector_to_parameters(vec, self._parameters())

    def objective(self) -> float:
        with torch.no_grad():
            return float(self._loss().item())

    def gradient(self) -> Array:
        self.module.zero_grad()
        self._loss().backward()
        grads = [
            p.grad.reshape(-1) if p.grad is not None else torch.zeros_like(p).reshape(-1)
            for p in self._parameters()
        ]
        return torch.cat(grads).detach().cpu().to(torch.float64).numpy().copy()


__all__ = ["TorchModel"]
