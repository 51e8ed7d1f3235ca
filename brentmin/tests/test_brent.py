import os
import warnings

import pytest

import numpy as np
import numba
from scipy import optimize
from brentmin import bracket, refine, ConvergenceWarning
from brentmin.brent import brent_kernel

tol = 1e-8

# x where tan(x) = x, i.e. the first minimum of sin(x) / x for x > 0
X_SINC = 4.493409457909064


@numba.njit
def sinc(x):
    if x == 0.0:
        return 1.0
    return np.sin(x) / x


@numba.njit
def quadratic(x):
    return (x - 1.3) ** 2 + 3.0


@numba.njit
def quartic(x):
    return x**4 - 3.0 * x**3 + 2.0


@numba.njit
def cosh_shift(x):
    return np.cosh(x - 0.7)


@numba.njit
def sinc_counted(x, count):
    count[0] += 1
    return sinc(x)


@pytest.mark.parametrize(
    "func,xmin",
    [(sinc, X_SINC), (quadratic, 1.3), (quartic, 2.25), (cosh_shift, 0.7)],
)
def test_refine(func, xmin):
    a, b, c, fa, fb, fc = bracket(1.0, 2.0, func)
    x, fx = refine(a, b, c, func, tol)
    # Near a smooth minimum, f is flat to machine precision over a distance
    # of about sqrt(eps) * |x|, so x cannot be located more precisely.
    assert abs(x - xmin) < 1e-6
    assert fx == func(x)


@pytest.mark.parametrize("func", [sinc, quadratic, quartic, cosh_shift])
def test_refine_vs_scipy(func):
    a, b, c, fa, fb, fc = bracket(1.0, 2.0, func)
    x, fx = refine(a, b, c, func, 1.48e-8)
    x_sp = optimize.brent(func.py_func, brack=(a, b, c), tol=1.48e-8)
    assert abs(x - x_sp) < 1e-6


def test_refine_reversed_triplet():
    # The triplet may run from right to left
    x1, fx1 = refine(1.0, 4.0, 8.0, sinc, tol)
    x2, fx2 = refine(8.0, 4.0, 1.0, sinc, tol)
    assert x1 == x2
    assert fx1 == fx2


def test_refine_converged_triplet():
    # A degenerate triplet at a converged minimum needs no further iterations
    x, fx = refine(1.0, 4.0, 8.0, sinc, tol)
    x2, fx2, d = refine(x, x, x, sinc, tol, diags=True)
    assert x2 == x
    assert fx2 == fx
    assert d["niter"] == 0
    assert d["nfev"] == 1
    assert d["converged"]


def test_refine_tolerance_floor():
    # Below about 1e-11, tol is swamped by the absolute floor of 1e-10
    x1, fx1 = refine(1.0, 4.0, 8.0, sinc, 1e-12)
    x2, fx2 = refine(1.0, 4.0, 8.0, sinc, 1e-15)
    assert abs(x1 - x2) < 1e-7
    assert abs(fx1 - fx2) < 1e-14


def test_refine_maxiter():
    count = np.zeros(1, dtype=np.int64)
    with pytest.warns(ConvergenceWarning, match="exceeded maximum iterations"):
        x, fx, d = refine(
            1.0, 4.0, 8.0, sinc_counted, tol, 3, (count,), diags=True
        )
    # One evaluation to start, then one per iteration
    assert count[0] == 3 + 1
    assert d["nfev"] == count[0]
    assert d["niter"] == 3
    assert not d["converged"]
    # The best point found is returned, and it is better than the start
    assert 1.0 < x < 8.0
    assert fx == sinc(x)
    assert fx <= sinc(4.0)


def test_refine_no_warning_when_converged():
    with warnings.catch_warnings():
        warnings.simplefilter("error", ConvergenceWarning)
        x, fx = refine(1.0, 4.0, 8.0, sinc, tol)
    assert abs(x - X_SINC) < 1e-6


def test_refine_python_function():
    # A plain Python function takes the uncompiled path
    xs = []

    def f(x):
        xs.append(x)
        return sinc(x)

    x, fx, d = refine(1.0, 4.0, 8.0, f, tol, diags=True)
    x_nb, fx_nb, d_nb = refine(1.0, 4.0, 8.0, sinc, tol, diags=True)
    assert x == pytest.approx(x_nb, abs=1e-7)
    assert d["nfev"] == len(xs)
    assert all(1.0 <= u <= 8.0 for u in xs)


def test_brent_kernel_from_njit():
    # The kernel is callable from compiled code
    @numba.njit
    def solve():
        return brent_kernel(1.0, 4.0, 8.0, sinc, 1e-8, 100, ())

    x, fx, niter, converged = solve()
    assert converged
    assert 0 < niter < 100
    assert abs(x - X_SINC) < 1e-6


def test_convergence_warning_is_runtime_warning():
    assert issubclass(ConvergenceWarning, RuntimeWarning)


def test_refine_warning_location():
    # The warning is attributed to the line that called refine
    with pytest.warns(ConvergenceWarning) as record:
        refine(1.0, 4.0, 8.0, sinc, tol, 2)
    w = record.pop(ConvergenceWarning)
    assert os.path.basename(w.filename) == os.path.basename(__file__)
