"""Core interfaces shared across the line-search routines."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Callable, Optional, Protocol

import numpy as np

Array = np.ndarray
LineFunction = Callable[[float], float]

PHI = 0.5 * (1.0 + math.sqrt(5.0))
CPHI = 2.0 - PHI
TOL = math.sqrt(sys.float_info.epsilon)
TINY = 1.0e-10
MAX_STEP = 10.0


class Optimisable(Protocol):
    """Capability contract a model must satisfy to be trained.

    The parameter vector is always the model's full vector; masking is
    applied on the trainer side.
    """

    def get_parameters_vector(self) -> Array:
        ...

    def set_parameters_vector(self, params: Array) -> None:
        ...

    def objective(self) -> float:
        ...

    def gradient(self) -> Array:
        ...


class LineSearchStatus(Enum):
    """Exit status of a line minimisation."""

    CONVERGED = "converged"
    MAX_ITER = "max_iter"


@dataclass(frozen=True)
class Bracket:
    """Three step lengths with ``f(mid) <= f(low)`` and ``f(mid) <= f(high)``."""

    low: float
    mid: float
    high: float

    @property
    def width(self) -> float:
        return self.high - self.low


@dataclass
class LineSearchResult:
    """
    Outcome of a one-dimensional minimisation along a search direction.

    Attributes:
        step: Best step length found along the direction.
        fun: Objective value at ``step``.
        status: Whether the tolerance test fired or the iteration budget ran out.
        nit: Number of refinement iterations performed.
        nfev: Objective evaluations used by bracketing and refinement.
        bracket: Initial bracket handed to the refinement stage.
    """

    step: float
    fun: float
    status: LineSearchStatus
    nit: int
    nfev: int
    bracket: Optional[Bracket] = None

    @property
    def converged(self) -> bool:
        return self.status is LineSearchStatus.CONVERGED


@dataclass
class TrainingStats:
    """Evaluation counters and last objective value for one training session."""

    function_evaluations: int = 0
    gradient_evaluations: int = 0
    function_value: float = 0.0

    @property
    def started(self) -> bool:
        return self.function_evaluations > 0 or self.gradient_evaluations > 0


@dataclass(frozen=True)
class TrainingConfig:
    """
    Tolerances and switches fixed for the duration of a training run.

    Args:
        error_tolerance: Objective tolerance used by direction-search algorithms.
        parameter_tolerance: Parameter tolerance used by direction-search algorithms.
        line_minimiser_iterations: Maximum refinement iterations per line search.
        line_minimiser_parameter_tolerance: Step tolerance for the line minimiser.
        epsilon: Perturbation used for central finite differences.
        display: Log progress, gradient checks and summaries at INFO level.
        gradient_check: Run a gradient check before training starts.
        analytic_gradients: Use the model's gradient instead of finite differences.
    """

    error_tolerance: float = 1.0e-6
    parameter_tolerance: float = 1.0e-4
    line_minimiser_iterations: int = 10
    line_minimiser_parameter_tolerance: float = 1.0e-4
    epsilon: float = 1.0e-6
    display: bool = True
    gradient_check: bool = True
    analytic_gradients: bool = True

    def __post_init__(self) -> None:
        for name in (
            "error_tolerance",
            "parameter_tolerance",
            "line_minimiser_parameter_tolerance",
            "epsilon",
        ):
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive")
        if int(self.line_minimiser_iterations) != self.line_minimiser_iterations:
            raise ValueError("line_minimiser_iterations must be an integer")
        if self.line_minimiser_iterations <= 0:
            raise ValueError("line_minimiser_iterations must be positive")

    def with_overrides(self, **overrides) -> "TrainingConfig":
        """Return a copy with the given fields replaced."""
        unknown = sorted(set(overrides) - {f.name for f in fields(self)})
        if unknown:
            raise ValueError(f"unknown configuration field(s): {', '.join(unknown)}")
        return replace(self, **overrides)


def sign(value: float) -> float:
    """Sign of ``value`` with zero mapped to ``+1``."""
    return -1.0 if value < 0.0 else 1.0


__all__ = [
    "Array",
    "Bracket",
    "CPHI",
    "LineFunction",
    "LineSearchResult",
    "LineSearchStatus",
    "MAX_STEP",
    "Optimisable",
    "PHI",
    "TINY",
    "TOL",
    "TrainingConfig",
    "TrainingStats",
    "sign",
]
