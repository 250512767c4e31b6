"""
Field Arithmetic Module

Arithmetic over Z/MODZ. Scalars are plain ints in [0, MOD); arrays are
numpy integer arrays reduced elementwise. Every reduction in the matrix
engine goes through reduce().
"""

import numpy as np

from .constants import MOD


def add(a: int, b: int) -> int:
    return (a + b) % MOD


def mul(a: int, b: int) -> int:
    return (a * b) % MOD


def reduce(values) -> np.ndarray:
    """Reduce an array-like of integers (negatives included) into the field as int64."""
    return np.mod(np.asarray(values, dtype=np.int64), MOD)
