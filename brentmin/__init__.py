__version__ = "0.5.0"

import importlib as _importlib

from .lib import ConvergenceWarning
from .bracketing import bracket
from .brent import refine
from .minimize1d import minimize

# List of modules not explicitly imported above
modules = ["bracketing", "brent", "fzero", "lib", "minimize1d"]

__all__ = modules + [
    k for (k, v) in locals().items() if callable(v) and not k.startswith("_")
]  # all local, public functions


def __dir__():
    return __all__


# Lazy load of modules.
# Note only `fzero.py` is lazily loaded; all others get loaded implicitly by the
# above imports.
def __getattr__(name):
    if name in modules:
        return _importlib.import_module(f"brentmin.{name}")
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(f"Module 'brentmin' has no attribute '{name}'")
