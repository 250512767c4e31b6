"""
Matrix pretty printing.
"""

from typing import Optional

from .constants import MAX_PRINT_ENTRIES, PRINT_WIDTH
from .matrix import FibMatrix


def is_printable(matrix: FibMatrix, max_entries: int = MAX_PRINT_ENTRIES) -> bool:
    r, c = matrix.shape
    return r * c <= max_entries


def format_matrix(matrix: FibMatrix, max_entries: Optional[int] = None) -> str:
    """
    Render a matrix as bracketed rows of fixed-width entries.

    Matrices with more than max_entries entries are not rendered; a one
    line note is returned instead.
    """
    max_entries = MAX_PRINT_ENTRIES if max_entries is None else max_entries
    r, c = matrix.shape
    if not is_printable(matrix, max_entries):
        return f"{r} by {c} is too big to pretty print.\n"

    lines = []
    for row in matrix.data.tolist():
        cells = "".join(f"{value:{PRINT_WIDTH}d} " for value in row)
        lines.append(f"[ {cells}]")
    return "\n".join(lines) + "\n\n"
