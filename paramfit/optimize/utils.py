"""Finite-difference helpers shared by the gradient providers and models.

These are plain NumPy routines; every perturbed point is a fresh copy of the
base vector, so callers can keep the base vector for rollback.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]


def as_vector(x: Array, name: str = "params") -> Array:
    """Return ``x`` as a 1-D float64 array copy."""
    vec = np.array(x, dtype=float, copy=True)
    if vec.ndim != 1:
        raise ValueError(f"{name} must be a 1-D vector, got shape {vec.shape}")
    return vec


def central_difference(fun: Objective, x: Array, index: int, eps: float) -> float:
    """Central-difference estimate of ``d fun / d x[index]``."""
    if eps <= 0:
        raise ValueError("eps must be positive")
    x_plus = np.array(x, dtype=float, copy=True)
    x_plus[index] += eps
    fx_plus = fun(x_plus)
    x_minus = np.array(x, dtype=float, copy=True)
    x_minus[index] -= eps
    fx_minus = fun(x_minus)
    return (fx_plus - fx_minus) / (2.0 * eps)


def approx_grad(fun: Objective, x: Array, eps: float = 1e-6) -> Array:
    """Compute a central-difference gradient approximation.

    Args:
        fun: Objective returning a scalar for a parameter vector.
        x: Point at which the gradient is approximated.
        eps: Perturbation size; each entry costs two evaluations of ``fun``.

    Returns:
        Gradient estimate with the same length as ``x``.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = as_vector(x, "x")
    grad = np.zeros_like(x, dtype=float)
    for i in range(x.size):
        grad[i] = central_difference(fun, x, i, eps)
    return grad


__all__ = ["Array", "Objective", "approx_grad", "as_vector", "central_difference"]
