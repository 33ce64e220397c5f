"""paramfit - line-search core for gradient-based fitting of statistical models."""

__version__ = "0.1.0"

from .models import FunctionModel, TorchModel
from .optimize import (
    Bracket,
    GradientCheckReport,
    LineSearchResult,
    LineSearchStatus,
    ObjectiveAdapter,
    Optimisable,
    OptimisationMask,
    TrainingConfig,
    TrainingStats,
    bracket_minimum,
    brent_line_minimise,
    check_gradient,
    line_minimise,
)
from .training import ModelTrainer

__all__ = [
    "Bracket",
    "FunctionModel",
    "GradientCheckReport",
    "LineSearchResult",
    "LineSearchStatus",
    "ModelTrainer",
    "ObjectiveAdapter",
    "Optimisable",
    "OptimisationMask",
    "TorchModel",
    "TrainingConfig",
    "TrainingStats",
    "__version__",
    "bracket_minimum",
    "brent_line_minimise",
    "check_gradient",
    "line_minimise",
]
