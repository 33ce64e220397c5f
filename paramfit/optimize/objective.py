"""Adapter turning a model into counted objective and gradient evaluations."""

from __future__ import annotations

from typing import Iterable, Optional, Union

import numpy as np

from .core import Array, LineFunction, Optimisable, TrainingConfig, TrainingStats
from .gradients import GradientProvider, make_gradient_provider
from .mask import OptimisationMask, apply_mask, extract_masked
from .utils import as_vector, central_difference

MaskLike = Union[OptimisationMask, Iterable[bool]]


class ObjectiveAdapter:
    """
    One training session over a model.

    The adapter owns the session's :class:`TrainingStats`; a fresh adapter
    starts with zeroed counters. Parameter vectors passed in and returned are
    reduced to the free entries when a mask is installed.

    Args:
        model: Object satisfying :class:`~paramfit.optimize.core.Optimisable`.
        mask: Optional optimisation mask over the model's full parameter vector.
        analytic_gradients: Use the model's gradient rather than finite differences.
        epsilon: Finite-difference perturbation.
    """

    def __init__(
        self,
        model: Optimisable,
        mask: Optional[MaskLike] = None,
        analytic_gradients: bool = True,
        epsilon: float = 1.0e-6,
    ) -> None:
        if epsilon <= 0:
            raise ValueError("epsilon must be positive")
        self.model = model
        self.epsilon = float(epsilon)
        self.stats = TrainingStats()
        self.gradient_provider: GradientProvider = make_gradient_provider(
            analytic_gradients
        )
        self._mask: Optional[OptimisationMask] = None
        if mask is not None:
            self.set_mask(mask)

    @classmethod
    def from_config(
        cls,
        model: Optimisable,
        config: TrainingConfig,
        mask: Optional[MaskLike] = None,
    ) -> "ObjectiveAdapter":
        return cls(
            model,
            mask=mask,
            analytic_gradients=config.analytic_gradients,
            epsilon=config.epsilon,
        )

    @property
    def mask(self) -> Optional[OptimisationMask]:
        return self._mask

    def set_mask(self, mask: Optional[MaskLike]) -> None:
        """Install (or with ``None`` remove) the optimisation mask."""
        if mask is None:
            self._mask = None
            return
        if not isinstance(mask, OptimisationMask):
            mask = OptimisationMask(mask)
        mask.check_length(self.full_size)
        self._mask = mask

    @property
    def full_size(self) -> int:
        return int(np.asarray(self.model.get_parameters_vector()).size)

    @property
    def num_parameters(self) -> int:
        """Length of the vectors the search algorithms work with."""
        if self._mask is None:
            return self.full_size
        return self._mask.free_count

    def snapshot(self) -> Array:
        """Copy of the model's full parameter vector."""
        return as_vector(self.model.get_parameters_vector())

    def restore_parameters(self, full: Array) -> None:
        """Reinstall a full vector previously taken with :meth:`snapshot`."""
        full = as_vector(full)
        if full.size != self.full_size:
            raise ValueError(
                f"expected {self.full_size} parameters, got {full.size}"
            )
        self.model.set_parameters_vector(full)

    def get_parameters(self) -> Array:
        return extract_masked(self.snapshot(), self._mask)

    def set_parameters(self, params: Array) -> None:
        full = apply_mask(self.snapshot(), self._mask, as_vector(params))
        self.model.set_parameters_vector(full)

    def evaluate(self, params: Array) -> float:
        """Install ``params`` and return the model's objective."""
        self.set_parameters(params)
        self.stats.function_evaluations += 1
        return float(self.model.objective())

    def model_gradient(self) -> Array:
        """Model's analytic gradient at the installed parameters, reduced by the mask."""
        grad = as_vector(self.model.gradient(), "gradient")
        return extract_masked(grad, self._mask)

    def gradient(self, params: Array) -> Array:
        return self.gradient_provider(self, params)

    def finite_difference_component(self, params: Array, index: int) -> float:
        """Central difference along free parameter ``index``; two counted evaluations."""
        return central_difference(self.evaluate, params, index, self.epsilon)

    def line_function(self, params: Array, direction: Array) -> LineFunction:
        """
        Scalar restriction ``phi(step) = f(params + step * direction)``.

        Each call restores the parameters that were installed in the model
        before it, so trial points never persist.
        """
        base = as_vector(params)
        direction = as_vector(direction, "direction")
        if base.size != direction.size:
            raise ValueError(
                f"direction has {direction.size} entries, params have {base.size}"
            )
        if base.size != self.num_parameters:
            raise ValueError(
                f"expected {self.num_parameters} parameters, got {base.size}"
            )

        def phi(step: float) -> float:
            saved = self.snapshot()
            try:
                return self.evaluate(base + step * direction)
            finally:
                self.restore_parameters(saved)

        return phi


__all__ = ["MaskLike", "ObjectiveAdapter"]
