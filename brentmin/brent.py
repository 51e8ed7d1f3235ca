"""
Brent's method for refining a bracketed minimum of a univariate function.
"""

import math
import warnings
import numba as nb
from time import time

from .lib import CGOLD, ZEPS, ConvergenceWarning, select_kernel, local_functions


def refine(ax, bx, cx, f, tol=1e-8, maxiter=100, args=(), diags=False):
    """
    Isolate a bracketed minimum of a univariate function by Brent's method

    Golden section steps, which always make progress, are interleaved with
    steps to the vertex of a parabola through the three best points found so
    far, which converge superlinearly near a smooth minimum.

    Parameters
    ----------
    ax, bx, cx : float
        A bracketing triplet: `bx` is between `ax` and `cx`, and `f(bx)` is no
        greater than `f(ax)` or `f(cx)`. See `bracket`.
    f : function
        Univariate function to be minimized, called as `f(x, *args)`.
    tol : float, Default 1e-8
        Fractional precision to which the minimum is located. The absolute
        precision is `tol * abs(x) + 1e-10`, so values of `tol` much below
        1e-11 bring no further improvement.
    maxiter : int, Default 100
        Maximum number of iterations, each evaluating `f` once.
    args : tuple, Default ()
        Additional arguments, beyond the optimization argument, to be passed
        to `f`.
    diags : bool, Default False
        If True, also return a dict of diagnostics.

    Returns
    -------
    x : float
        Location of the minimum.
    fx : float
        `f(x, *args)`.
    d : dict
        Only returned when `diags` is True.

        - "niter" : int, number of iterations performed
        - "nfev" : int, number of evaluations of `f`
        - "converged" : bool, whether the tolerance was met
        - "timer" : float, time in seconds spent

    Warns
    -----
    ConvergenceWarning
        If `maxiter` iterations pass without meeting the tolerance. The best
        point found is still returned.
    """
    x, fx, d = _refine(ax, bx, cx, f, tol, maxiter, args, 3)

    if diags:
        return x, fx, d

    return x, fx


def _refine(ax, bx, cx, f, tol, maxiter, args, stacklevel):
    # Pass stacklevel 3 from a public function to warn at its caller
    timer = time()
    kernel = select_kernel(brent_kernel, f)
    x, fx, niter, converged = kernel(
        float(ax), float(bx), float(cx), f, tol, maxiter, args
    )

    if not converged:
        warnings.warn(
            "Brent minimization exceeded maximum iterations",
            ConvergenceWarning,
            stacklevel,
        )

    d = {
        "niter": niter,
        "nfev": niter + 1,
        "converged": converged,
        "timer": time() - timer,
    }
    return x, fx, d


@nb.njit
def brent_kernel(ax, bx, cx, f, tol, maxiter, args=()):
    """
    Compiled kernel of `refine`

    Callable from other `@numba.njit`'ed code, in which case `f` must also be
    `@numba.njit`'ed. Parameters are as for `refine`.

    Returns
    -------
    x, fx : float
        Location of the minimum and the value of `f` there.
    niter : int
        Number of iterations performed.
    converged : bool
        False if `maxiter` iterations passed without meeting the tolerance.
        No warning is issued here.
    """

    # The interval [a, b] always contains the minimum
    a = min(ax, cx)
    b = max(ax, cx)

    # x: best point so far. w: second best. v: previous value of w.
    x = w = v = bx
    fx = fw = fv = f(x, *args)

    d = 0.0  # the last step
    e = 0.0  # the step before last

    niter = 0
    converged = False
    while niter < maxiter:
        xm = 0.5 * (a + b)
        tol1 = tol * abs(x) + ZEPS
        tol2 = 2.0 * tol1

        if abs(x - xm) <= tol2 - 0.5 * (b - a):
            converged = True
            break

        golden = True
        if abs(e) > tol1:
            # Fit a parabola through x, w, v; its vertex is at x + p / q
            r = (x - w) * (fx - fv)
            q = (x - v) * (fx - fw)
            p = (x - v) * q - (x - w) * r
            q = 2.0 * (q - r)
            if q > 0.0:
                p = -p
            q = abs(q)

            e_old = e
            e = d

            # Accept the parabolic step if it lands inside (a, b) and moves
            # less than half the step before last
            if abs(p) < abs(0.5 * q * e_old) and p > q * (a - x) and p < q * (b - x):
                golden = False
                d = p / q
                u = x + d
                # Don't evaluate f too close to a or b
                if u - a < tol2 or b - u < tol2:
                    d = math.copysign(tol1, xm - x)

        if golden:
            # Step into the larger of the two sub-intervals
            e = (a if x >= xm else b) - x
            d = CGOLD * e

        # Don't evaluate f too close to x
        u = x + (d if abs(d) >= tol1 else math.copysign(tol1, d))
        fu = f(u, *args)

        if fu <= fx:
            if u >= x:
                a = x
            else:
                b = x
            v, fv = w, fw
            w, fw = x, fx
            x, fx = u, fu
        else:
            if u < x:
                a = u
            else:
                b = u
            if fu <= fw or w == x:
                v, fv = w, fw
                w, fw = u, fu
            elif fu <= fv or v == x or v == w:
                v, fv = u, fu

        niter += 1

    return x, fx, niter, converged


__all__ = local_functions(locals(), __name__)
