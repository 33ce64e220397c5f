import math

import pytest

from paramfit.optimize.core import Bracket, LineSearchStatus
from paramfit.optimize.line_search import brent_line_minimise, line_minimise


def quadratic(t: float) -> float:
    return (t - 3.0) ** 2


def exp_linear(t: float) -> float:
    return math.exp(t) - 4.0 * t


def test_line_minimise_quadratic_finds_minimum():
    res = line_minimise(quadratic, fa=quadratic(0.0))
    assert abs(res.step - 3.0) <= 1e-4
    assert res.fun == pytest.approx(0.0, abs=1e-8)
    assert res.bracket is not None
    assert res.bracket.low <= res.step <= res.bracket.high


def test_line_minimise_converges_with_budget():
    res = line_minimise(exp_linear, fa=exp_linear(0.0), max_iter=100)
    assert res.status is LineSearchStatus.CONVERGED
    assert res.converged
    assert abs(res.step - math.log(4.0)) <= 1e-3
    assert res.fun == pytest.approx(exp_linear(math.log(4.0)), abs=1e-6)
    assert res.nit < 100


def test_line_minimise_reports_exhausted_budget():
    res = line_minimise(exp_linear, fa=exp_linear(0.0), max_iter=1)
    assert res.status is LineSearchStatus.MAX_ITER
    assert not res.converged
    assert res.nit == 1
    # best point is still returned
    assert res.fun <= exp_linear(res.bracket.mid)


def test_line_minimise_evaluates_base_when_value_missing():
    calls = []

    def f(t: float) -> float:
        calls.append(t)
        return quadratic(t)

    res = line_minimise(f)
    assert calls[0] == 0.0
    assert res.nfev == len(calls)


def test_line_minimise_counts_all_evaluations():
    calls = []

    def f(t: float) -> float:
        calls.append(t)
        return exp_linear(t)

    res = line_minimise(f, fa=exp_linear(0.0), max_iter=50)
    assert res.nfev == len(calls)
    assert 0.0 not in calls


def test_brent_refines_given_bracket():
    f = lambda t: (t - 2.5) ** 2 + 1.0
    res = brent_line_minimise(f, Bracket(0.0, 1.0, 4.0), max_iter=100)
    assert res.converged
    assert abs(res.step - 2.5) <= 4e-4
    assert res.fun == pytest.approx(1.0, abs=1e-6)


def test_brent_never_worse_than_bracket_mid():
    f = lambda t: math.cos(t)
    bracket = Bracket(2.0, 3.0, 4.5)
    res = brent_line_minimise(f, bracket, max_iter=3)
    assert res.fun <= f(bracket.mid)


def test_brent_looser_tolerance_stops_earlier():
    f = lambda t: (t - 2.5) ** 2
    tight = brent_line_minimise(f, Bracket(0.0, 1.0, 4.0), 1e-6, max_iter=200)
    loose = brent_line_minimise(f, Bracket(0.0, 1.0, 4.0), 1e-2, max_iter=200)
    assert loose.converged and tight.converged
    assert loose.nfev <= tight.nfev


def test_brent_invalid_arguments():
    with pytest.raises(ValueError):
        brent_line_minimise(quadratic, Bracket(0.0, 1.0, 4.0), parameter_tolerance=0.0)
    with pytest.raises(ValueError):
        brent_line_minimise(quadratic, Bracket(0.0, 1.0, 4.0), max_iter=0)
