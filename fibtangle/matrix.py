"""
Matrix Engine Module

Dense matrices over Z/521Z whose row and column spaces are Fibonacci
spaces, and the two ways of composing them:

- multiply: vertical composition (one tangle line stacked under another)
- tensor: horizontal composition (one glyph placed beside another),
  the "Fibonacci tensor product"

A FibMatrix of handles (rows, cols) has shape (fib(rows), fib(cols)).
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .constants import EMPTY_HANDLE, HANDLE_OFFSET, MOD, SCALAR_HANDLE
from .errors import DimensionMismatch, ResourceLimitExceeded
from .fibonacci import FibonacciTable, get_table
from .field import reduce

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class FibMatrix:
    """
    A matrix paired with its row and column handles.

    Attributes:
        data: int64 array of shape (fib(rows), fib(cols)), entries in [0, MOD)
        rows: row handle
        cols: column handle
    """
    data: np.ndarray
    rows: int
    cols: int
    table: FibonacciTable = field(default_factory=get_table, repr=False)

    def __post_init__(self):
        try:
            self.data = reduce(self.data)
        except MemoryError as e:
            raise ResourceLimitExceeded(
                f"out of memory storing a {self.rows}x{self.cols} handle matrix"
            ) from e
        expected = (self.table.dimension(self.rows), self.table.dimension(self.cols))
        if self.data.size == expected[0] * expected[1] and self.data.ndim == 1:
            self.data = self.data.reshape(expected)
        if self.data.shape != expected:
            raise DimensionMismatch(
                f"data of shape {self.data.shape} does not fit handles "
                f"({self.rows}, {self.cols}) -> {expected}"
            )

    @property
    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    @property
    def handles(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def copy(self) -> "FibMatrix":
        """Independent snapshot (used for variable saves)."""
        return FibMatrix(self.data.copy(), self.rows, self.cols, self.table)

    def tolist(self):
        return self.data.tolist()

    def __matmul__(self, other: "FibMatrix") -> "FibMatrix":
        return multiply(self, other)

    def __add__(self, other: "FibMatrix") -> "FibMatrix":
        return add(self, other)

    def __eq__(self, other):
        if not isinstance(other, FibMatrix):
            return NotImplemented
        return self.handles == other.handles and bool(np.array_equal(self.data, other.data))

    __hash__ = None

    def __repr__(self):
        return f"FibMatrix(rows={self.rows}, cols={self.cols}, shape={self.shape})"


def _out_of_memory(op: str, a: "FibMatrix", b: "FibMatrix") -> ResourceLimitExceeded:
    return ResourceLimitExceeded(
        f"out of memory trying to {op} {a.rows}x{a.cols} and {b.rows}x{b.cols} handle matrices"
    )


# =============================================================================
# Seeds
# =============================================================================

def identity(handle: int, table: Optional[FibonacciTable] = None) -> FibMatrix:
    """Identity on the space of the given handle."""
    table = table or get_table()
    n = table.dimension(handle)
    return FibMatrix(np.eye(n, dtype=np.int64), handle, handle, table)


def empty_diagram(table: Optional[FibonacciTable] = None) -> FibMatrix:
    """
    The empty diagram: the 2x2 identity at handle 3.

    This is the accumulator reset value and the two-sided identity of the
    tensor product on well-formed diagrams.
    """
    return identity(EMPTY_HANDLE, table)


def scalar_identity(table: Optional[FibonacciTable] = None) -> FibMatrix:
    """The 1x1 matrix [1] at handle 1, the result of a tangle with no lines."""
    return identity(SCALAR_HANDLE, table)


# =============================================================================
# Vertical composition
# =============================================================================

def multiply(a: FibMatrix, b: FibMatrix) -> FibMatrix:
    """
    Matrix product a @ b modulo MOD.

    Raises:
        DimensionMismatch: if a.cols and b.rows are different handles
    """
    if a.cols != b.rows:
        raise DimensionMismatch(
            "tried to multiply matrices with mismatched dimensions "
            f"({a.rows}x{a.cols} by {b.rows}x{b.cols})"
        )
    # entries < MOD and inner size <= fib(20), so int64 never overflows
    try:
        product = reduce(a.data @ b.data)
    except MemoryError as e:
        raise _out_of_memory("multiply", a, b) from e
    return FibMatrix(product, a.rows, b.cols, a.table)


# =============================================================================
# Horizontal composition
# =============================================================================

def fused_indices(left_handle: int, right_handle: int,
                  table: Optional[FibonacciTable] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Enumerate the basis of the tensor of two spaces.

    For each left basis index i, the word bit w[i] selects which block of
    the right basis may follow it: [0, fib(k-1)) when w[i] = 0 and
    [fib(k-1), fib(k)) when w[i] = 1, where k is the right handle.

    Args:
        left_handle: handle of the left space
        right_handle: handle of the right space

    Returns:
        (left_idx, right_idx) arrays, one entry per combined basis vector,
        in order (outer: left index, inner: selected right indices)
    """
    table = table or get_table()
    n_left = table.dimension(left_handle)
    full = table.dimension(right_handle)
    split = table.fib[right_handle - 1]

    bits = table.bits(n_left).astype(bool)
    counts = np.where(bits, full - split, split)
    starts = np.where(bits, split, 0)

    total = int(counts.sum())
    left_idx = np.repeat(np.arange(n_left), counts)
    block_offsets = np.repeat(np.cumsum(counts) - counts, counts)
    right_idx = np.repeat(starts, counts) + (np.arange(total) - block_offsets)
    return left_idx, right_idx


def tensor_handle(k1: int, k2: int, table: Optional[FibonacciTable] = None) -> int:
    """
    Handle of the side-by-side composition of spaces k1 and k2.

    Raises:
        DimensionMismatch: if the combined handle falls below 1
        ResourceLimitExceeded: if it exceeds the table bound
    """
    table = table or get_table()
    k = k1 + k2 - HANDLE_OFFSET
    if k < 1:
        raise DimensionMismatch(f"handles {k1} and {k2} cannot be placed side by side")
    if k > table.max_handle:
        raise ResourceLimitExceeded(
            f"diagram too large: handle {k} exceeds the bound {table.max_handle}"
        )
    return k


def tensor(a: FibMatrix, b: FibMatrix) -> FibMatrix:
    """
    Fibonacci tensor product: b placed to the right of a.

    Entry ((ia, ib), (ja, jb)) is a[ia, ja] * b[ib, jb], where ib ranges
    over the block of b's rows selected by w[ia] and jb over the block of
    b's columns selected by w[ja].

    Raises:
        DimensionMismatch: if the enumerated basis disagrees with the
            declared output handle
        ResourceLimitExceeded: if the output handle exceeds the table bound
    """
    table = a.table
    rows = tensor_handle(a.rows, b.rows, table)
    cols = tensor_handle(a.cols, b.cols, table)

    row_a, row_b = fused_indices(a.rows, b.rows, table)
    col_a, col_b = fused_indices(a.cols, b.cols, table)
    if len(row_a) != table.dimension(rows) or len(col_a) != table.dimension(cols):
        raise DimensionMismatch(
            f"tensor of {a.rows}x{a.cols} and {b.rows}x{b.cols} enumerated a "
            f"{len(row_a)}x{len(col_a)} basis, expected handles {rows}x{cols}"
        )

    try:
        product = reduce(a.data[np.ix_(row_a, col_a)] * b.data[np.ix_(row_b, col_b)])
    except MemoryError as e:
        raise _out_of_memory("tensor", a, b) from e
    logger.debug(f"tensor {a.rows}x{a.cols} (x) {b.rows}x{b.cols} -> {rows}x{cols}")
    return FibMatrix(product, rows, cols, table)


# =============================================================================
# Elementwise
# =============================================================================

def _check_same_handles(a: FibMatrix, b: FibMatrix, op: str) -> None:
    if a.handles != b.handles:
        raise DimensionMismatch(
            f"tried to {op} matrices with mismatched dimensions "
            f"({a.rows}x{a.cols} and {b.rows}x{b.cols})"
        )


def add(a: FibMatrix, b: FibMatrix) -> FibMatrix:
    """Elementwise sum modulo MOD."""
    _check_same_handles(a, b, "add")
    return FibMatrix(reduce(a.data + b.data), a.rows, a.cols, a.table)


def scale(a: FibMatrix, c: int) -> FibMatrix:
    """Multiply every entry by the scalar c."""
    return FibMatrix(reduce(a.data * (c % MOD)), a.rows, a.cols, a.table)


def equals(a: FibMatrix, b: FibMatrix) -> bool:
    """
    True iff every entry matches.

    Raises:
        DimensionMismatch: if the handles differ
    """
    _check_same_handles(a, b, "compare")
    return bool(np.array_equal(a.data, b.data))
