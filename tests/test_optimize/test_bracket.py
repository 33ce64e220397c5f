import math

import numpy as np
import pytest

from paramfit.optimize.bracket import bracket_minimum
from paramfit.optimize.core import PHI, Bracket


def _assert_valid(bracket: Bracket, f) -> None:
    assert bracket.low < bracket.mid < bracket.high
    assert f(bracket.mid) <= f(bracket.low)
    assert f(bracket.mid) <= f(bracket.high)


@pytest.mark.parametrize(
    "f",
    [
        lambda t: (t - 3.0) ** 2,
        lambda t: (t - 0.5) ** 2,
        lambda t: (t - 7.0) ** 4,
        lambda t: math.exp(t) - 4.0 * t,
        lambda t: math.cosh(t - 20.0),
        lambda t: -math.exp(-((t - 45.0) ** 2) / 200.0),
    ],
    ids=["quadratic", "near-origin", "quartic", "exp-linear", "far-cosh", "far-gaussian"],
)
def test_bracket_encloses_minimum(f):
    bracket = bracket_minimum(f, f(0.0))
    _assert_valid(bracket, f)


def test_bracket_shrinks_when_first_step_goes_uphill():
    f = lambda t: (t - 3.0) ** 2
    bracket = bracket_minimum(f, f(0.0), 0.0, 10.0)
    _assert_valid(bracket, f)
    assert bracket.low == 0.0
    assert bracket.mid == pytest.approx(10.0 / PHI**2)
    assert bracket.high == pytest.approx(10.0 / PHI)


def test_bracket_contains_true_minimiser():
    f = lambda t: (t - 3.0) ** 2
    bracket = bracket_minimum(f, f(0.0))
    assert bracket.low <= 3.0 <= bracket.high


def test_bracket_normalised_for_negative_initial_step():
    f = lambda t: (t + 3.0) ** 2
    bracket = bracket_minimum(f, f(0.0), 0.0, -1.0)
    _assert_valid(bracket, f)
    assert bracket.low <= -3.0 <= bracket.high


def test_bracket_does_not_reevaluate_base_point():
    calls = []

    def f(t: float) -> float:
        calls.append(t)
        return (t - 3.0) ** 2

    bracket_minimum(f, 9.0)
    assert 0.0 not in calls


def test_bracket_flat_function_terminates():
    bracket = bracket_minimum(lambda t: 1.0, 1.0)
    assert bracket.low < bracket.high
    assert np.isfinite([bracket.low, bracket.mid, bracket.high]).all()
