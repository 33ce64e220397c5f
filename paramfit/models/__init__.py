"""Reference models implementing the optimisable contract."""

from .function_model import FunctionModel
from .torch_model import TorchModel

__all__ = ["FunctionModel", "TorchModel"]
