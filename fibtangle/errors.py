"""
Evaluation errors.

Every condition that aborts a tangle evaluation derives from TangleError.
"""

from typing import Optional


class TangleError(Exception):
    """Base class for conditions that abort an evaluation."""


class DimensionMismatch(TangleError, ValueError):
    """Raised when matrix handles violate an algebraic precondition."""


class UnknownSymbol(TangleError, ValueError):
    """Raised for a glyph outside the recognised set or an empty variable slot."""

    def __init__(self, symbol: str, position: Optional[int] = None, reason: str = "unknown character"):
        self.symbol = symbol
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"{reason} {symbol!r}{where}")


class ResourceLimitExceeded(TangleError, RuntimeError):
    """Raised when a handle or word index exceeds the precomputed tables."""
