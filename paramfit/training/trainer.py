"""Model trainer: configuration, masking and line minimisation over a model."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..logging import get_logger
from ..optimize.core import (
    Array,
    LineSearchResult,
    Optimisable,
    TrainingConfig,
    TrainingStats,
)
from ..optimize.gradients import GradientCheckReport, check_gradient
from ..optimize.line_search import line_minimise
from ..optimize.mask import OptimisationMask
from ..optimize.objective import MaskLike, ObjectiveAdapter
from ..optimize.utils import as_vector

logger = get_logger(__name__)


class ModelTrainer:
    """
    Shared machinery for gradient-based trainers of an optimisable model.

    Direction-search algorithms (steepest descent, conjugate gradients,
    quasi-Newton) are built on top of this class: they pick directions from
    :meth:`error_gradients` and call :meth:`line_minimise` along them.

    Evaluation counters belong to the current session (an
    :class:`ObjectiveAdapter`); :meth:`new_session` starts a fresh one, keeping
    the model's parameters and the installed mask.

    Args:
        model: Model to fit.
        config: Training configuration. Defaults to ``TrainingConfig()``.
        mask: Optional optimisation mask over the model's full parameter vector.
        algorithm_name: Name reported in the training summary.

    Attributes:
        model: The model being fitted.
        algorithm_name: Name reported in the training summary.
    """

    def __init__(
        self,
        model: Optimisable,
        config: Optional[TrainingConfig] = None,
        mask: Optional[MaskLike] = None,
        algorithm_name: str = "Line minimiser",
    ) -> None:
        self.model = model
        self.algorithm_name = algorithm_name
        self._config = config or TrainingConfig()
        self.session = ObjectiveAdapter.from_config(model, self._config, mask=mask)

    @property
    def config(self) -> TrainingConfig:
        return self._config

    @property
    def stats(self) -> TrainingStats:
        return self.session.stats

    @property
    def mask(self) -> Optional[OptimisationMask]:
        return self.session.mask

    def configure(self, **overrides) -> TrainingConfig:
        """
        Override configuration fields before the session starts evaluating.

        Raises:
            RuntimeError: If the current session already evaluated the model.
            ValueError: If an override is invalid.
        """
        if self.stats.started:
            raise RuntimeError(
                "configuration cannot change once evaluations have started; "
                "call new_session() first"
            )
        self._config = self._config.with_overrides(**overrides)
        self.session = ObjectiveAdapter.from_config(
            self.model, self._config, mask=self.session.mask
        )
        return self._config

    def new_session(self) -> ObjectiveAdapter:
        """Start a session with zeroed counters and the current mask."""
        self.session = ObjectiveAdapter.from_config(
            self.model, self._config, mask=self.session.mask
        )
        return self.session

    def set_mask(self, mask: MaskLike) -> None:
        """Restrict optimisation to the entries flagged ``True``."""
        self.session.set_mask(mask)

    def clear_mask(self) -> None:
        self.session.set_mask(None)

    def get_parameters(self) -> Array:
        return self.session.get_parameters()

    def set_parameters(self, params: Array) -> None:
        self.session.set_parameters(params)

    def error_function(self, params: Array) -> float:
        return self.session.evaluate(params)

    def error_gradients(self, params: Array) -> Array:
        return self.session.gradient(params)

    def line_minimise(
        self,
        direction: Array,
        params: Optional[Array] = None,
        fa: Optional[float] = None,
    ) -> LineSearchResult:
        """
        Minimise the objective along ``direction`` from ``params``.

        The model's parameters are left as they were before the call; the
        caller installs ``params + result.step * direction`` if it accepts
        the step.

        Args:
            direction: Search direction over the free parameters.
            params: Base point. Defaults to the model's current parameters.
            fa: Objective at the base point, if already known.

        Returns:
            Line-search result; ``status`` tells convergence apart from an
            exhausted iteration budget.
        """
        if params is None:
            params = self.get_parameters()
        params = as_vector(params)
        direction = as_vector(direction, "direction")
        if not np.any(direction):
            raise ValueError("search direction must be non-zero")
        phi = self.session.line_function(params, direction)
        result = line_minimise(
            phi,
            fa=fa,
            parameter_tolerance=self._config.line_minimiser_parameter_tolerance,
            max_iter=self._config.line_minimiser_iterations,
        )
        self.stats.function_value = result.fun
        if self._config.display:
            if result.converged:
                logger.info(
                    "Line minimiser converged: step %.6g, error %.6g (%d iterations)",
                    result.step,
                    result.fun,
                    result.nit,
                )
            else:
                logger.info(
                    "Line minimiser reached %d iterations: step %.6g, error %.6g",
                    result.nit,
                    result.step,
                    result.fun,
                )
        return result

    def check_gradient(self) -> GradientCheckReport:
        """Compare analytic and finite-difference gradients at the current parameters."""
        report = check_gradient(self.session)
        if self._config.display:
            logger.info("Gradient check\n%s", report.to_text())
        return report

    def prepare(self) -> Optional[GradientCheckReport]:
        """Run the checks requested by the configuration before a training run."""
        if not self._config.gradient_check:
            return None
        return self.check_gradient()

    def summary(self) -> str:
        """Text summary of the configuration and the session's statistics."""
        stats = self.stats
        lines = [
            "=" * 48,
            f"Training summary     : {self.algorithm_name}",
            "-" * 48,
            f"Error tolerance      : {self._config.error_tolerance:g}",
            f"Parameter tolerance  : {self._config.parameter_tolerance:g}",
            f"Function evaluations : {stats.function_evaluations}",
            f"Gradient evaluations : {stats.gradient_evaluations}",
            f"Function value       : {stats.function_value:g}",
            "=" * 48,
        ]
        text = "\n".join(lines)
        if self._config.display:
            logger.info("\n%s", text)
        return text


__all__ = ["ModelTrainer"]
