import numpy as np
import pytest

from paramfit.optimize.core import TrainingConfig, sign
from paramfit.optimize.utils import approx_grad, as_vector, central_difference


def test_approx_grad_matches_linear_function():
    def fun(x: np.ndarray) -> float:
        return float(3 * x[0] - 2 * x[1])

    grad = approx_grad(fun, np.array([0.2, -0.1]))
    assert np.allclose(grad, np.array([3.0, -2.0]), atol=1e-6)


def test_approx_grad_costs_two_evaluations_per_entry():
    calls = []

    def fun(x: np.ndarray) -> float:
        calls.append(x.copy())
        return float(x @ x)

    grad = approx_grad(fun, np.ones(4))
    assert len(calls) == 8
    assert np.allclose(grad, 2.0, atol=1e-6)


def test_approx_grad_invalid_eps():
    with pytest.raises(ValueError):
        approx_grad(lambda x: float(x[0]), np.array([0.0]), eps=0.0)


def test_central_difference_does_not_mutate_base():
    x = np.array([1.0, 2.0])
    seen = []

    def fun(v: np.ndarray) -> float:
        seen.append(v.copy())
        return float(v[1] ** 2)

    assert central_difference(fun, x, 1, 1e-3) == pytest.approx(4.0)
    assert np.array_equal(x, [1.0, 2.0])
    assert np.allclose(seen[0], [1.0, 2.001])
    assert np.allclose(seen[1], [1.0, 1.999])


def test_as_vector_rejects_matrices():
    with pytest.raises(ValueError):
        as_vector(np.zeros((2, 2)))


def test_sign_maps_zero_to_positive():
    assert sign(0.0) == 1.0
    assert sign(-0.0) == 1.0
    assert sign(-2.0) == -1.0


def test_training_config_defaults():
    config = TrainingConfig()
    assert config.error_tolerance == 1e-6
    assert config.parameter_tolerance == 1e-4
    assert config.line_minimiser_iterations == 10
    assert config.line_minimiser_parameter_tolerance == 1e-4
    assert config.epsilon == 1e-6
    assert config.display and config.gradient_check and config.analytic_gradients


def test_training_config_overrides_return_new_instance():
    config = TrainingConfig()
    updated = config.with_overrides(line_minimiser_iterations=50)
    assert updated.line_minimiser_iterations == 50
    assert config.line_minimiser_iterations == 10


@pytest.mark.parametrize(
    "kwargs",
    [
        {"epsilon": 0.0},
        {"parameter_tolerance": -1.0},
        {"line_minimiser_iterations": 0},
        {"line_minimiser_iterations": 2.5},
    ],
)
def test_training_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        TrainingConfig(**kwargs)


def test_training_config_rejects_unknown_override():
    with pytest.raises(ValueError, match="no_such_field"):
        TrainingConfig().with_overrides(no_such_field=1)
