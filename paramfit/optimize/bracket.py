"""Bracketing of a one-dimensional minimum by golden-ratio expansion.

The routine follows the classical ``mnbrak`` scheme: shrink towards the base
point while the first trial step goes uphill, otherwise grow the interval by
the golden ratio and try a parabolic jump through the last three points.

References:
    - Press et al., *Numerical Recipes*, section 10.1
    - Nabney, *Netlab: Algorithms for Pattern Recognition* (2002)
"""

from __future__ import annotations

from .core import MAX_STEP, PHI, TINY, Bracket, LineFunction, sign


def _parabolic_step(
    a: float, b: float, c: float, fa: float, fb: float, fc: float
) -> float:
    """Abscissa of the parabola's vertex through ``(a, fa), (b, fb), (c, fc)``."""
    r = (b - a) * (fb - fc)
    q = (b - c) * (fb - fa)
    denom = 2.0 * sign(q - r) * max(abs(q - r), TINY)
    return b - ((b - c) * q - (b - a) * r) / denom


def _normalized(low: float, mid: float, high: float) -> Bracket:
    if low > high:
        low, high = high, low
    return Bracket(low=low, mid=mid, high=high)


def bracket_minimum(
    phi: LineFunction,
    fa: float,
    a: float = 0.0,
    b: float = 1.0,
    max_step: float = MAX_STEP,
) -> Bracket:
    """
    Find three steps along a direction that enclose a local minimum.

    Args:
        phi: Scalar function of the step length.
        fa: Value of ``phi(a)``; not re-evaluated.
        a: Base step, normally 0.
        b: Initial trial step.
        max_step: Largest parabolic extrapolation, in multiples of the last
            interval.

    Returns:
        Bracket with ``low < high`` and ``phi(mid)`` no larger than the ends.
    """
    fb = phi(b)

    if fb > fa:
        # Uphill from the start: the minimum lies between a and b.
        c = b
        b = a + (c - a) / PHI
        fb = phi(b)
        while fb > fa:
            c = b
            b = a + (c - a) / PHI
            fb = phi(b)
        return _normalized(a, b, c)

    c = b + PHI * (b - a)
    fc = phi(c)

    while fb > fc:
        u = _parabolic_step(a, b, c, fa, fb, fc)
        ulimit = b + max_step * (c - b)

        if (b - u) * (u - c) > 0.0:
            # Vertex between b and c.
            fu = phi(u)
            if fu < fc:
                return _normalized(b, u, c)
            if fu > fb:
                return _normalized(a, b, u)
            u = c + PHI * (c - b)
            fu = phi(u)
        elif (c - u) * (u - ulimit) > 0.0:
            # Vertex between c and the extrapolation limit.
            fu = phi(u)
            if fu < fc:
                b, c = c, u
                fb, fc = fc, fu
                u = c + PHI * (c - b)
                fu = phi(u)
        elif (u - ulimit) * (ulimit - c) >= 0.0:
            u = ulimit
            fu = phi(u)
        else:
            u = c + PHI * (c - b)
            fu = phi(u)

        a, b, c = b, c, u
        fa, fb, fc = fb, fc, fu

    return _normalized(a, b, c)


__all__ = ["bracket_minimum"]
