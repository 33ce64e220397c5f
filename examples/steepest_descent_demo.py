"""
Example: Steepest descent with Brent line minimisation

A minimal direction-search loop built on ``ModelTrainer``: the direction is
the negative gradient and every step length comes from ``line_minimise``.
The first example fits a NumPy Rosenbrock model, the second a small PyTorch
regression with its bias frozen by an optimisation mask.
"""

import logging

import numpy as np
import torch

from paramfit import FunctionModel, ModelTrainer, TorchModel, TrainingConfig
from paramfit.logging import configure_logging


def steepest_descent(trainer: ModelTrainer, iterations: int) -> np.ndarray:
    params = trainer.get_parameters()
    fx = trainer.error_function(params)
    for _ in range(iterations):
        direction = -trainer.error_gradients(params)
        if np.linalg.norm(direction) < trainer.config.error_tolerance:
            break
        result = trainer.line_minimise(direction, params=params, fa=fx)
        params = params + result.step * direction
        if abs(fx - result.fun) < trainer.config.error_tolerance:
            fx = result.fun
            break
        fx = result.fun
    trainer.set_parameters(params)
    return params


def example_rosenbrock():
    """Example: Rosenbrock valley with an analytic gradient."""
    print("=" * 60)
    print("Example 1: Rosenbrock function")
    print("=" * 60)

    def rosen(x):
        return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2

    def rosen_grad(x):
        return np.array(
            [
                -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
                200 * (x[1] - x[0] ** 2),
            ]
        )

    model = FunctionModel(rosen, np.array([-1.2, 1.0]), grad=rosen_grad)
    trainer = ModelTrainer(
        model,
        config=TrainingConfig(line_minimiser_iterations=50),
        algorithm_name="Steepest descent",
    )
    trainer.prepare()
    params = steepest_descent(trainer, iterations=200)
    print(f"Parameters: {params}")
    print(trainer.summary())
    print()


def example_masked_regression():
    """Example: Linear regression with the bias frozen."""
    print("=" * 60)
    print("Example 2: PyTorch regression, bias frozen")
    print("=" * 60)

    torch.manual_seed(0)
    inputs = torch.randn(50, 2, dtype=torch.float64)
    targets = inputs @ torch.tensor([[2.0], [-1.0]], dtype=torch.float64) + 0.5
    module = torch.nn.Linear(2, 1).double()

    def loss_fn(m):
        return torch.mean((m(inputs) - targets) ** 2)

    model = TorchModel(module, loss_fn)
    trainer = ModelTrainer(model, mask=[True, True, False], algorithm_name="Steepest descent")
    steepest_descent(trainer, iterations=50)
    print(f"Weights: {module.weight.detach().numpy().ravel()}")
    print(f"Bias (frozen): {module.bias.item():.4f}")
    print(trainer.summary())
    print()


if __name__ == "__main__":
    configure_logging(level=logging.INFO)
    example_rosenbrock()
    example_masked_regression()
