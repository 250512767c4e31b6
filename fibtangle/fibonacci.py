"""
Fibonacci Basis Module

Dimension handles and the Fibonacci word.

A matrix never stores its size directly: it stores a handle k whose
dimension is fib(k). The basis vectors of a space of handle k are the
Fibbinary numbers (bit strings with no two adjacent ones) enumerated in
order, and the Fibonacci word w[i] is the last bit of the i-th one
(A003849). The tensor product reads w to split the right operand's basis.
"""

import logging
from functools import lru_cache
from typing import List

import numpy as np

from .constants import BIFMAX
from .errors import ResourceLimitExceeded

logger = logging.getLogger(__name__)


class FibonacciTable:
    """
    Precomputed fib[0..max_handle] and the first fib(max_handle) word bits.

    Attributes:
        max_handle: largest handle the tables cover
        fib: Fibonacci numbers, fib[0] = 0, fib[1] = 1
        word: int8 array of Fibonacci word bits
    """

    def __init__(self, max_handle: int = BIFMAX):
        if max_handle < 4:
            raise ValueError(f"max_handle must be >= 4, got {max_handle}")
        self.max_handle = max_handle
        self.fib: List[int] = self._build_fib(max_handle)
        self.word: np.ndarray = self._build_word(max_handle, self.fib)
        self.word.setflags(write=False)
        logger.debug(f"Built Fibonacci tables up to handle {max_handle} "
                     f"({len(self.word)} word bits)")

    @staticmethod
    def _build_fib(max_handle: int) -> List[int]:
        fib = [0, 1]
        for _ in range(2, max_handle + 1):
            fib.append(fib[-1] + fib[-2])
        return fib

    @staticmethod
    def _build_word(max_handle: int, fib: List[int]) -> np.ndarray:
        """
        Self-similar construction: the first fib[i] bits are copied to
        offset fib[i+1], starting from w[0] = 0, w[1] = 1.
        """
        length = fib[max_handle]
        word = np.zeros(length, dtype=np.int8)
        word[1] = 1
        for i in range(2, max_handle - 1):
            start = fib[i + 1]
            word[start:start + fib[i]] = word[:fib[i]]
        return word

    def check_handle(self, k: int) -> int:
        """
        Validate a dimension handle.

        Raises:
            ResourceLimitExceeded: if k is outside [1, max_handle]
        """
        if not 1 <= k <= self.max_handle:
            raise ResourceLimitExceeded(
                f"handle {k} outside the supported range [1, {self.max_handle}]"
            )
        return k

    def dimension(self, k: int) -> int:
        """True basis size fib(k) of handle k."""
        return self.fib[self.check_handle(k)]

    def bit(self, i: int) -> int:
        """Fibonacci word bit w[i] (last bit of the i-th Fibbinary number)."""
        if not 0 <= i < len(self.word):
            raise ResourceLimitExceeded(
                f"word index {i} outside the precomputed range [0, {len(self.word)})"
            )
        return int(self.word[i])

    def bits(self, n: int) -> np.ndarray:
        """First n word bits as an array."""
        if n > len(self.word):
            raise ResourceLimitExceeded(
                f"{n} word bits requested, only {len(self.word)} precomputed"
            )
        return self.word[:n]

    def fibbinary(self, i: int) -> str:
        """
        The i-th basis label as a bit string (Zeckendorf representation).

        Useful for reading off which basis vector a matrix row stands for.
        """
        if i < 0:
            raise ValueError(f"basis index must be non-negative, got {i}")
        if i == 0:
            return "0"
        digits = []
        remaining = i
        started = False
        for k in range(len(self.fib) - 1, 1, -1):
            if self.fib[k] <= remaining:
                digits.append("1")
                remaining -= self.fib[k]
                started = True
            elif started:
                digits.append("0")
        if remaining:
            raise ResourceLimitExceeded(f"basis index {i} exceeds the table bound")
        return "".join(digits)


@lru_cache(maxsize=None)
def _shared_table(max_handle: int) -> FibonacciTable:
    return FibonacciTable(max_handle)


def get_table(max_handle: int = BIFMAX) -> FibonacciTable:
    """Process-wide table for the given bound, built once."""
    return _shared_table(max_handle)
