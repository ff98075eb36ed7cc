"""
Utility functions for ordinfo.

This module provides input validation, array coercion, column
normalisation and JIT compilation helpers.
"""

# Data manipulation utilities
from .data import (
    to_numpy_array,
    normalise_columns,
    check_positive,
    check_nonnegative,
    check_integer,
)

# JIT utilities
from .jit import (
    conditional_njit,
    is_jit_enabled,
    jit_info,
)

__all__ = [
    # Data
    "to_numpy_array",
    "normalise_columns",
    "check_positive",
    "check_nonnegative",
    "check_integer",
    # JIT
    "conditional_njit",
    "is_jit_enabled",
    "jit_info",
]
