"""Brent line minimisation along a fixed search direction.

Golden-section subdivision is combined with inverse parabolic interpolation
through the three best points seen so far. Parabolic steps are only accepted
when they land inside the bracket and are shorter than half the step taken
two iterations earlier.
"""

from __future__ import annotations

from typing import Optional

from ..logging import get_logger
from .bracket import bracket_minimum
from .core import (
    CPHI,
    TINY,
    TOL,
    Bracket,
    LineFunction,
    LineSearchResult,
    LineSearchStatus,
    sign,
)

logger = get_logger(__name__)


class _CountingLine:
    """Wraps a line function and counts its calls."""

    def __init__(self, phi: LineFunction) -> None:
        self.phi = phi
        self.nfev = 0

    def __call__(self, step: float) -> float:
        self.nfev += 1
        return self.phi(step)


def brent_line_minimise(
    phi: LineFunction,
    bracket: Bracket,
    parameter_tolerance: float = 1.0e-4,
    max_iter: int = 10,
) -> LineSearchResult:
    """
    Refine a bracketed minimum of ``phi``.

    Args:
        phi: Scalar function of the step length.
        bracket: Bracket around the minimum, e.g. from :func:`bracket_minimum`.
        parameter_tolerance: Absolute tolerance on the step length.
        max_iter: Maximum number of refinement iterations.

    Returns:
        The best step and its value. ``status`` is ``MAX_ITER`` when the
        iteration budget ran out before the tolerance test was met; the best
        point found is still returned in that case.
    """
    if parameter_tolerance <= 0:
        raise ValueError("parameter_tolerance must be positive")
    if max_iter <= 0:
        raise ValueError("max_iter must be positive")
    counted = _CountingLine(phi)
    br_min, br_max = bracket.low, bracket.high

    x = w = v = bracket.mid
    fx = counted(x)
    fw = fv = fx
    e = 0.0
    d = 0.0

    for n in range(1, max_iter + 1):
        xm = 0.5 * (br_min + br_max)
        tol1 = TOL * abs(x) + TINY

        if abs(x - xm) <= parameter_tolerance and (br_max - br_min) < 4 * parameter_tolerance:
            return LineSearchResult(
                step=x,
                fun=fx,
                status=LineSearchStatus.CONVERGED,
                nit=n - 1,
                nfev=counted.nfev,
                bracket=bracket,
            )

        golden = True
        if abs(e) > tol1:
            r = (fx - fv) * (x - w)
            q = (fx - fw) * (x - v)
            p = (x - v) * q - (x - w) * r
            q = 2.0 * (q - r)
            if q > 0.0:
                p = -p
            q = abs(q)

            if (
                abs(p) < abs(0.5 * q * e)
                and p > q * (br_min - x)
                and p < q * (br_max - x)
            ):
                golden = False
                e = d
                d = p / q
                u = x + d
                if (u - br_min) < 2 * tol1 or (br_max - u) < 2 * tol1:
                    d = sign(xm - x) * tol1

        if golden:
            e = (br_min - x) if x >= xm else (br_max - x)
            d = CPHI * e

        u = x + d if abs(d) >= tol1 else x + sign(d) * tol1
        fu = counted(u)

        if fu <= fx:
            if u >= x:
                br_min = x
            else:
                br_max = x
            v, w, x = w, x, u
            fv, fw, fx = fw, fx, fu
        else:
            if u < x:
                br_min = u
            else:
                br_max = u
            if fu <= fw or w == x:
                v, w = w, u
                fv, fw = fw, fu
            elif fu <= fv or v == x or v == w:
                v, fv = u, fu

        logger.debug("Line minimiser: cycle %d  error %.6g  step %.6g", n, fx, x)

    return LineSearchResult(
        step=x,
        fun=fx,
        status=LineSearchStatus.MAX_ITER,
        nit=max_iter,
        nfev=counted.nfev,
        bracket=bracket,
    )


def line_minimise(
    phi: LineFunction,
    fa: Optional[float] = None,
    parameter_tolerance: float = 1.0e-4,
    max_iter: int = 10,
    initial_step: float = 1.0,
) -> LineSearchResult:
    """
    Minimise ``phi`` over the step length, starting from step 0.

    Args:
        phi: Scalar function of the step length.
        fa: Value at step 0, if already known; evaluated otherwise.
        parameter_tolerance: Absolute tolerance on the step length.
        max_iter: Maximum number of refinement iterations.
        initial_step: First trial step used for bracketing.

    Returns:
        Result whose ``nfev`` covers bracketing and refinement.
    """
    counted = _CountingLine(phi)
    if fa is None:
        fa = counted(0.0)
    bracket = bracket_minimum(counted, fa, 0.0, initial_step)
    result = brent_line_minimise(
        counted, bracket, parameter_tolerance=parameter_tolerance, max_iter=max_iter
    )
    result.nfev = counted.nfev
    if result.converged:
        logger.debug("Line search converged after %d iterations", result.nit)
    else:
        logger.debug("Line search stopped after %d iterations without converging", result.nit)
    return result


__all__ = ["brent_line_minimise", "line_minimise"]
