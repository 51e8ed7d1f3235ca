"""Constants and small helpers shared by the minimization and root finding routines"""

import numpy as np
from numba.extending import is_jitted


# Golden ratio, phi. Default magnification of successive intervals in the
# bracket search.
GOLD = (1.0 + np.sqrt(5.0)) / 2

# Largest magnification allowed for a parabolic extrapolation step
GLIMIT = 100.0

# Floor on the denominator of the parabolic extrapolation
TINY = 1e-20

# Fraction of the larger sub-interval taken by a golden section step, 2 - phi
CGOLD = 2.0 - GOLD

# Absolute floor on the tolerance, protecting against a minimum at exactly 0
ZEPS = 1e-10

eps = np.finfo(np.float64).eps


class ConvergenceWarning(RuntimeWarning):
    """Issued when an iterative solver stops at its iteration limit."""


def select_kernel(kernel, f):
    """
    Choose the compiled or the pure Python form of a numba kernel

    Parameters
    ----------
    kernel : numba.core.registry.CPUDispatcher
        A `@numba.njit`'ed algorithm that takes a function `f` as an argument.
    f : function
        The user's objective function.

    Returns
    -------
    function
        `kernel` itself when `f` is a `@numba.njit`'ed function, so the whole
        solve runs in compiled code; otherwise `kernel.py_func`, which accepts
        any Python callable.
    """
    return kernel if is_jitted(f) else kernel.py_func


def local_functions(v, name):
    """Names of public functions and classes defined in module `name`

    Use as `__all__ = local_functions(locals(), __name__)` at the bottom of a
    module, so that names imported into it (`np`, `nb`, ...) are not exported.
    """
    return [
        k
        for (k, f) in v.items()
        if callable(f)
        and not k.startswith("_")
        and getattr(f, "__module__", None) == name
    ]
