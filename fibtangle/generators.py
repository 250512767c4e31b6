"""
Generator Catalogue Module

The elementary diagrams a tangle is built from, as dense matrices over the
field, each tagged with its row and column handles.

Glyphs:
    | / \\ i   identity strand        4 x 4   (3x3 identity)
    %         positive crossing      5 x 5
    S         negative crossing      5 x 5
    u         cup                    5 x 3
    n         cap                    3 x 5
    h         merge                  4 x 5
    y         split                  5 x 4
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional

from .constants import MOD, PHI, PHI_INV, Q, QQ, QQQ, QQQQ
from .fibonacci import FibonacciTable, get_table
from .field import mul
from .matrix import FibMatrix


class Glyph(Enum):
    """The closed set of elementary diagrams."""
    IDENTITY = "identity"
    POSITIVE_CROSSING = "positive_crossing"
    NEGATIVE_CROSSING = "negative_crossing"
    CUP = "cup"
    CAP = "cap"
    MERGE = "merge"
    SPLIT = "split"


GLYPH_SYMBOLS: Dict[str, Glyph] = {
    "|": Glyph.IDENTITY,
    "/": Glyph.IDENTITY,
    "\\": Glyph.IDENTITY,
    "i": Glyph.IDENTITY,
    "%": Glyph.POSITIVE_CROSSING,
    "S": Glyph.NEGATIVE_CROSSING,
    "u": Glyph.CUP,
    "n": Glyph.CAP,
    "h": Glyph.MERGE,
    "y": Glyph.SPLIT,
}


@dataclass(frozen=True)
class Generator:
    """A catalogue entry: one elementary diagram and its handles."""
    glyph: Glyph
    rows: int
    cols: int
    entries: tuple

    def matrix(self, table: Optional[FibonacciTable] = None) -> FibMatrix:
        """A fresh FibMatrix holding this generator."""
        return FibMatrix(list(self.entries), self.rows, self.cols, table or get_table())


# Dense row-major entries
_IDENTITY = (1, 0, 0,
             0, 1, 0,
             0, 0, 1)

_CROSS = (MOD - PHI_INV, 0, MOD - QQ, 0, 0,
          0, QQQ, 0, 0, 0,
          mul(MOD - QQ, PHI_INV), 0, mul(QQQQ, PHI_INV), 0, 0,
          0, 0, 0, QQQ, 0,
          0, 0, 0, 0, MOD - Q)

_UNCROSS = (MOD - PHI_INV, 0, QQQ, 0, 0,
            0, MOD - QQ, 0, 0, 0,
            mul(QQQ, PHI_INV), 0, mul(MOD - Q, PHI_INV), 0, 0,
            0, 0, 0, MOD - QQ, 0,
            0, 0, 0, 0, QQQQ)

_CUP = (1, 0,
        0, 0,
        PHI_INV, 0,
        0, 0,
        0, 1)

_CAP = (1, 0, 1, 0, 0,
        0, 0, 0, 0, PHI)

_MERGE = (MOD - PHI_INV, 0, 1, 0, 0,
          0, 1, 0, 0, 0,
          0, 0, 0, 1, 0)

_SPLIT = (MOD - PHI_INV, 0, 0,
          0, 1, 0,
          PHI_INV, 0, 0,
          0, 0, 1,
          0, 0, 0)


CATALOGUE: Dict[Glyph, Generator] = {
    Glyph.IDENTITY: Generator(Glyph.IDENTITY, 4, 4, _IDENTITY),
    Glyph.POSITIVE_CROSSING: Generator(Glyph.POSITIVE_CROSSING, 5, 5, _CROSS),
    Glyph.NEGATIVE_CROSSING: Generator(Glyph.NEGATIVE_CROSSING, 5, 5, _UNCROSS),
    Glyph.CUP: Generator(Glyph.CUP, 5, 3, _CUP),
    Glyph.CAP: Generator(Glyph.CAP, 3, 5, _CAP),
    Glyph.MERGE: Generator(Glyph.MERGE, 4, 5, _MERGE),
    Glyph.SPLIT: Generator(Glyph.SPLIT, 5, 4, _SPLIT),
}


def lookup_symbol(symbol: str) -> Optional[Glyph]:
    """Glyph denoted by an input character, or None."""
    return GLYPH_SYMBOLS.get(symbol)


def symbols_for(glyph: Glyph) -> List[str]:
    """All input characters that denote the glyph."""
    return [s for s, g in GLYPH_SYMBOLS.items() if g is glyph]


@lru_cache(maxsize=None)
def _cached_matrix(glyph: Glyph, table: FibonacciTable) -> FibMatrix:
    return CATALOGUE[glyph].matrix(table)


def generator_matrix(glyph: Glyph, table: Optional[FibonacciTable] = None) -> FibMatrix:
    """
    Matrix of a catalogue generator.

    The returned matrix is shared and read-only; copy it before mutating.
    """
    matrix = _cached_matrix(glyph, table or get_table())
    matrix.data.setflags(write=False)
    return matrix
