"""
Functions for finding the zero of a univariate function.
"""

import math
import warnings
import numpy as np
import numba as nb

from .lib import eps, ConvergenceWarning, select_kernel, local_functions


def zero_guess(guess, lo, hi, f, tol=1e-8, maxiter=100, args=()):
    """
    Find a zero of a function within a given range, starting from a guess

    Parameters
    ----------
    guess : float
        Initial guess for a root.
    lo, hi : float
        Range within which to search, satisfying `lo <= guess <= hi`.
    f : function
        Continuous function of a single variable, called as `f(x, *args)`.
    tol : float, Default 1e-8
        Absolute tolerance for convergence.
    maxiter : int, Default 100
        Maximum number of iterations of Brent's method.
    args : tuple, Default ()
        Additional arguments, beyond the optimization argument, to be passed
        to `f`.

    Returns
    -------
    float
        Value of `x` where `f(x) ~ 0`, or nan if no sign change of `f` was
        found in `[lo, hi]`.
    """
    kernel = select_kernel(bounds_kernel, f)
    a, b = kernel(float(guess), float(lo), float(hi), f, args)
    if np.isnan(a):
        return np.nan
    return _zero(a, b, f, tol, maxiter, args, 3)


def zero(a, b, f, tol=1e-8, maxiter=100, args=()):
    """
    Find a zero of a univariate function within a given range

    This is a bracketed root-finding method, so `f(a)` and `f(b)` must differ
    in sign. If they do, a root is guaranteed to be found. Each iteration
    takes a step of inverse quadratic interpolation or of the secant method
    when that step is safe, and bisects otherwise.

    Parameters
    ----------
    a, b : float
        Range within which to search, satisfying `a <= b` and
        `f(a) * f(b) <= 0`.
    f : function
        Continuous function of a single variable, called as `f(x, *args)`.
    tol : float, Default 1e-8
        Absolute tolerance for convergence.
    maxiter : int, Default 100
        Maximum number of iterations, each evaluating `f` once.
    args : tuple, Default ()
        Additional arguments, beyond the optimization argument, to be passed
        to `f`.

    Returns
    -------
    float
        Value of `x` where `f(x) ~ 0`, or nan if `a > b`, either is nan, or
        `f` does not change sign between them.

    Warns
    -----
    ConvergenceWarning
        If `maxiter` iterations pass without meeting the tolerance. The best
        estimate is still returned.
    """
    return _zero(a, b, f, tol, maxiter, args, 3)


def _zero(a, b, f, tol, maxiter, args, stacklevel):
    # Pass stacklevel 3 from a public function to warn at its caller
    kernel = select_kernel(zero_kernel, f)
    x, niter, converged = kernel(float(a), float(b), f, tol, maxiter, args)
    if not converged:
        warnings.warn(
            "Brent root finding exceeded maximum iterations",
            ConvergenceWarning,
            stacklevel,
        )
    return x


@nb.njit
def zero_kernel(a, b, f, tol, maxiter, args=()):
    """
    Compiled kernel of `zero`

    Returns
    -------
    x : float
        The root, or nan for a bad search range.
    niter : int
        Number of iterations performed.
    converged : bool
        False only if `maxiter` iterations passed without meeting the
        tolerance.
    """

    if np.isnan(a) or np.isnan(b) or a > b:
        return np.nan, 0, True

    fa = f(a, *args)
    fb = f(b, *args)

    # No sign change in the search range
    if fa * fb > 0.0:
        return np.nan, 0, True

    # b is the best estimate, the root lies between b and c, and a is the
    # previous value of b
    c, fc = a, fa
    d = e = b - a

    niter = 0
    while True:
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol1 = 2.0 * eps * abs(b) + tol
        m = 0.5 * (c - b)

        if abs(m) <= tol1 or fb == 0.0:
            return b, niter, True

        if niter >= maxiter:
            return b, niter, False

        if abs(e) < tol1 or abs(fa) <= abs(fb):
            # Bisection
            d = e = m
        else:
            s = fb / fa
            if a == c:
                # Secant
                p = 2.0 * m * s
                q = 1.0 - s
            else:
                # Inverse quadratic interpolation
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * m * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)

            if p > 0.0:
                q = -q
            else:
                p = -p

            e_old = e
            e = d

            if 2.0 * p < 3.0 * m * q - abs(tol1 * q) and p < abs(0.5 * e_old * q):
                d = p / q
            else:
                d = e = m

        a, fa = b, fb
        b += d if abs(d) > tol1 else math.copysign(tol1, m)
        fb = f(b, *args)
        niter += 1

        if (fb > 0.0) == (fc > 0.0):
            # Keep the sign change between b and c
            c, fc = a, fa
            d = e = b - a


@nb.njit
def bounds_kernel(x, lo, hi, f, args=()):
    """
    Search for a range containing a sign change, expanding geometrically
    outwards from an initial guess.

    This is used as a first step in zero-finding, providing a small search
    range for Brent's method.

    Parameters
    ----------
    x : float
        Central point for starting the search
    lo, hi : float
        Lower and upper bounds, containing `x`, within which to search.
    f : function
        Continuous function of a single variable
    args : tuple
        Additional arguments beyond the optimization argument.

    Returns
    -------
    a, b : float
        Lower and upper bounds within which `f` changes sign, or nan, nan if
        no sign change was found. If `f` is zero at `lo` or `hi`, both are
        that bound.
    """

    flo = f(lo, *args)
    if flo == 0.0:
        return lo, lo

    fhi = f(hi, *args)
    if fhi == 0.0:
        return hi, hi

    x = min(max(x, lo), hi)

    # Initial distances to expand outward from x
    dxlo = (x - lo) / 50
    dxhi = (hi - x) / 50

    # When x is so close to a bound that the step underflows to 0, start from
    # that bound, else the search could not move.
    a = lo if dxlo == 0.0 else x
    b = hi if dxhi == 0.0 else x

    apos = (flo if a == lo else f(a, *args)) > 0.0
    if b == hi:
        bpos = fhi > 0.0
    elif b == a:
        bpos = apos
    else:
        bpos = f(b, *args) > 0.0

    if apos != bpos:
        return a, b

    while a > lo or b < hi:
        if a > lo:
            dxlo *= 1.414213562373095
            a = max(x - dxlo, lo)
            apos = (flo if a == lo else f(a, *args)) > 0.0
            if apos != bpos:
                return a, b

        if b < hi:
            dxhi *= 1.414213562373095
            b = min(x + dxhi, hi)
            bpos = (fhi if b == hi else f(b, *args)) > 0.0
            if apos != bpos:
                return a, b

    return np.nan, np.nan


__all__ = local_functions(locals(), __name__)
