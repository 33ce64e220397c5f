"""Line-search primitives for gradient-based model fitting.

Example
-------
>>> import numpy as np
>>> from paramfit.optimize import ObjectiveAdapter, line_minimise
>>> from paramfit.models import FunctionModel
>>> model = FunctionModel(lambda x: float((x[0] - 3.0) ** 2), np.array([0.0]))
>>> adapter = ObjectiveAdapter(model)
>>> phi = adapter.line_function(adapter.get_parameters(), np.array([1.0]))
>>> res = line_minimise(phi)
>>> round(res.step, 3)
3.0
"""

from .bracket import bracket_minimum
from .core import (
    CPHI,
    MAX_STEP,
    PHI,
    TINY,
    TOL,
    Bracket,
    LineSearchResult,
    LineSearchStatus,
    Optimisable,
    TrainingConfig,
    TrainingStats,
)
from .gradients import (
    AnalyticGradient,
    FiniteDifferenceGradient,
    GradientCheckEntry,
    GradientCheckReport,
    check_gradient,
    make_gradient_provider,
)
from .line_search import brent_line_minimise, line_minimise
from .mask import OptimisationMask, apply_mask, extract_masked
from .objective import ObjectiveAdapter
from .utils import approx_grad, central_difference

__all__ = [
    "AnalyticGradient",
    "Bracket",
    "CPHI",
    "FiniteDifferenceGradient",
    "GradientCheckEntry",
    "GradientCheckReport",
    "LineSearchResult",
    "LineSearchStatus",
    "MAX_STEP",
    "ObjectiveAdapter",
    "Optimisable",
    "OptimisationMask",
    "PHI",
    "TINY",
    "TOL",
    "TrainingConfig",
    "TrainingStats",
    "apply_mask",
    "approx_grad",
    "bracket_minimum",
    "brent_line_minimise",
    "central_difference",
    "check_gradient",
    "extract_masked",
    "line_minimise",
    "make_gradient_provider",
]
