"""
Bracketing the minimum of a univariate function.
"""

import math
import numba as nb

from .lib import GOLD, GLIMIT, TINY, select_kernel, local_functions


def bracket(ax, bx, f, args=(), diags=False):
    """
    Find three points that bracket a minimum, searching downhill from two seeds

    Starting from `ax` and `bx`, step in the downhill direction (as judged by
    `f` at the two seeds), magnifying each step by the golden ratio or
    jumping to the vertex of a parabola fit through the last three points,
    until the function turns upward.

    Parameters
    ----------
    ax, bx : float
        Distinct initial points. Their order does not matter.
    f : function
        Univariate function to be minimized, called as `f(x, *args)`.
    args : tuple
        Additional arguments, beyond the optimization argument, to be passed
        to `f`. Pass `()` when `f` is univariate.
    diags : bool, Default False
        If True, also return a dict of diagnostics.

    Returns
    -------
    a, b, c : float
        The bracketing triplet. `b` lies strictly between `a` and `c`, but
        `a` may be greater than `c` when the search proceeded leftward.
    fa, fb, fc : float
        `f` evaluated at `a`, `b`, and `c`, with `fb <= fa` and `fb < fc`.
    d : dict
        Only returned when `diags` is True.

        - "nfev" : int, number of evaluations of `f`

    Notes
    -----
    `ax == bx` is not checked and gives a degenerate search.

    There is no iteration limit. If `f` decreases without bound in the
    downhill direction, this function does not return.

    When `f` is a `@numba.njit`'ed function the search runs in compiled code.
    """
    kernel = select_kernel(bracket_kernel, f)
    ax, bx, cx, fa, fb, fc, nfev = kernel(float(ax), float(bx), f, args)

    if diags:
        return ax, bx, cx, fa, fb, fc, {"nfev": nfev}

    return ax, bx, cx, fa, fb, fc


@nb.njit
def bracket_kernel(ax, bx, f, args=()):
    """
    Bracket a minimum of `f`, searching downhill from `ax` and `bx`

    Compiled kernel of `bracket`, callable from other `@numba.njit`'ed code,
    in which case `f` must also be `@numba.njit`'ed. See `bracket` for the
    parameters. Returns the bracketing triplet and function values, as for
    `bracket`, followed by the number of evaluations of `f`.
    """

    fa = f(ax, *args)
    fb = f(bx, *args)

    # Go downhill from a to b
    if fb > fa:
        ax, bx = bx, ax
        fa, fb = fb, fa

    cx = bx + GOLD * (bx - ax)
    fc = f(cx, *args)
    nfev = 3

    while fb >= fc:
        # Vertex of the parabola through a, b, c
        r = (bx - ax) * (fb - fc)
        q = (bx - cx) * (fb - fa)
        u = bx - ((bx - cx) * q - (bx - ax) * r) / (
            2.0 * math.copysign(max(abs(q - r), TINY), q - r)
        )

        # Furthest point the parabola is trusted to extrapolate to
        ulim = bx + GLIMIT * (cx - bx)

        if (bx - u) * (u - cx) > 0.0:
            # u is between b and c
            fu = f(u, *args)
            nfev += 1
            if fu < fc:
                # Minimum between b and c
                ax, bx = bx, u
                fa, fb = fb, fu
                continue
            elif fu > fb:
                # Minimum between a and u
                cx = u
                fc = fu
                continue

            # The parabola was no help. Magnify.
            u = cx + GOLD * (cx - bx)
            fu = f(u, *args)
            nfev += 1

        elif (cx - u) * (u - ulim) > 0.0:
            # u is between c and its limit
            fu = f(u, *args)
            nfev += 1
            if fu < fc:
                bx, cx = cx, u
                fb, fc = fc, fu
                u = cx + GOLD * (cx - bx)
                fu = f(u, *args)
                nfev += 1

        elif (u - ulim) * (ulim - cx) >= 0.0:
            # u is at or beyond its limit
            u = ulim
            fu = f(u, *args)
            nfev += 1

        else:
            # u is on the wrong side of b. Magnify.
            u = cx + GOLD * (cx - bx)
            fu = f(u, *args)
            nfev += 1

        # Drop the oldest point
        ax, bx, cx = bx, cx, u
        fa, fb, fc = fb, fc, fu

    return ax, bx, cx, fa, fb, fc, nfev


__all__ = local_functions(locals(), __name__)
