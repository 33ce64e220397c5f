"""Model backed by plain NumPy callables."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from ..optimize.utils import approx_grad, as_vector

Array = np.ndarray


class FunctionModel:
    """
    Optimisable model around an objective ``fun(x)`` and optional ``grad(x)``.

    Without ``grad`` the gradient is the central finite difference of ``fun``
    with perturbation ``eps``.

    Args:
        fun: Objective returning a scalar for a parameter vector.
        x0: Initial parameter vector.
        grad: Optional analytic gradient of ``fun``.
        eps: Finite-difference perturbation used when ``grad`` is None.
    """

    def __init__(
        self,
        fun: Callable[[Array], float],
        x0: Array,
        grad: Optional[Callable[[Array], Array]] = None,
        eps: float = 1.0e-6,
    ) -> None:
        self.fun = fun
        self.grad = grad
        self.eps = eps
        self._params = as_vector(x0, "x0")

    def get_parameters_vector(self) -> Array:
        return self._params.copy()

    def set_parameters_vector(self, params: Array) -> None:
        params = as_vector(params)
        if params.shape != self._params.shape:
            raise ValueError(
                f"expected {self._params.size} parameters, got {params.size}"
            )
        self._params = params

    def objective(self) -> float:
        return float(self.fun(self._params.copy()))

    def gradient(self) -> Array:
        if self.grad is None:
            return approx_grad(self.fun, self._params, eps=self.eps)
        return as_vector(self.grad(self._params.copy()), "gradient")


__all__ = ["FunctionModel"]
