"""
Minimize a univariate function near an initial guess.
"""

from time import time

from .bracketing import bracket
from .brent import _refine
from .lib import local_functions


def minimize(
    guess, scale, f, tol=1e-7, maxiter=100, args=(), diags=False, output=False
):
    """
    Find a local minimum of a univariate function, starting near a guess

    The minimum is first bracketed by searching downhill from
    `guess - scale` and `guess + scale`, then refined by Brent's method.

    Parameters
    ----------
    guess : float
        Initial guess for the location of the minimum.
    scale : float
        Non-zero scale over which `f` varies near `guess`. Sets the initial
        step of the bracket search.
    f : function
        Univariate function to be minimized, called as `f(x, *args)`.
    tol : float, Default 1e-7
        Fractional precision to which the minimum is located.
    maxiter : int, Default 100
        Maximum number of iterations of Brent's method.
    args : tuple, Default ()
        Additional arguments, beyond the optimization argument, to be passed
        to `f`.
    diags : bool, Default False
        If True, also return a dict of diagnostics: those of `refine`, with
        "nfev" counting the bracket search's evaluations too, and "bracket"
        holding the bracketing triplet `(a, b, c)`.
    output : bool, Default False
        If True, print a summary of the bracket and the minimum.

    Returns
    -------
    x : float
        Location of the minimum.
    fx : float
        `f(x, *args)`.
    d : dict
        Only returned when `diags` is True.

    Warns
    -----
    ConvergenceWarning
        If Brent's method exhausts `maxiter` iterations.

    Examples
    --------
    >>> import numpy as np
    >>> def sinc(x):
    ...     return np.sin(x) / x if x != 0.0 else 1.0
    >>> x, y = minimize(1.0, 1.0, sinc)
    >>> round(x, 6), round(y, 6)
    (4.493409, -0.217234)
    """
    timer = time()

    a, b, c, fa, fb, fc, db = bracket(guess - scale, guess + scale, f, args, True)

    x, fx, d = _refine(a, b, c, f, tol, maxiter, args, 3)

    if output:
        print(f" bracket  | {a: .8e} {b: .8e} {c: .8e}")
        print(
            f" minimum  | f({x:.15g}) = {fx:.15g}"
            f" after {d['niter']:d} iterations"
            + ("" if d["converged"] else " (not converged)")
        )

    if diags:
        d["nfev"] += db["nfev"]
        d["bracket"] = (a, b, c)
        d["timer"] = time() - timer
        return x, fx, d

    return x, fx


__all__ = local_functions(locals(), __name__)
