"""Numba switch for the block-encoding and histogram kernels.

Set ORDINFO_DISABLE_NUMBA=1 before import to run them as plain Python.
"""

import os

import numba
from numba import njit

# Check if Numba should be disabled
ORDINFO_DISABLE_NUMBA = os.getenv("ORDINFO_DISABLE_NUMBA", "False").lower() in (
    "true",
    "1",
    "yes",
)


def conditional_njit(*args, **kwargs):
    """Compile the counting kernels with ``numba.njit`` unless JIT is switched off.

    Used bare (``@conditional_njit``) or with njit options
    (``@conditional_njit(cache=True)``). With ``ORDINFO_DISABLE_NUMBA`` set the
    kernels run as plain Python and give identical counts, only slower.
    """
    if not ORDINFO_DISABLE_NUMBA:
        return njit(*args, **kwargs)
    if len(args) == 1 and callable(args[0]) and not kwargs:
        return args[0]
    return lambda func: func


def is_jit_enabled():
    """True unless ORDINFO_DISABLE_NUMBA is set to true, 1 or yes."""
    return not ORDINFO_DISABLE_NUMBA


def jit_info():
    """Print information about JIT compilation status."""
    print(f"JIT disabled by environment: {ORDINFO_DISABLE_NUMBA}")
    print(f"JIT enabled: {is_jit_enabled()}")
    print(f"Numba version: {numba.__version__}")
