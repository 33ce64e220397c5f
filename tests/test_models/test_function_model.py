import numpy as np
import pytest

from paramfit.models import FunctionModel


def test_parameters_are_copied():
    x0 = np.array([1.0, 2.0])
    model = FunctionModel(lambda x: float(x @ x), x0)
    x0[0] = 99.0
    vec = model.get_parameters_vector()
    vec[1] = -5.0
    assert np.array_equal(model.get_parameters_vector(), [1.0, 2.0])


def test_objective_and_analytic_gradient():
    model = FunctionModel(lambda x: float(x @ x), np.array([1.0, -2.0]), grad=lambda x: 2 * x)
    assert model.objective() == pytest.approx(5.0)
    assert np.allclose(model.gradient(), [2.0, -4.0])


def test_gradient_falls_back_to_finite_difference():
    model = FunctionModel(lambda x: float(np.sum(x**3)), np.array([1.0, 2.0]))
    assert np.allclose(model.gradient(), [3.0, 12.0], atol=1e-5)


def test_set_parameters_checks_shape():
    model = FunctionModel(lambda x: 0.0, np.zeros(3))
    with pytest.raises(ValueError):
        model.set_parameters_vector(np.zeros(2))
