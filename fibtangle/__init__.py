"""
Fibonacci Tangle - Anyon Braid Evaluator

Compiles an ascii picture of a tangle into the matrix a Fibonacci anyon
topological quantum computer would realise for it, over the field Z/521Z.
"""

__version__ = "0.1.0"

from .config import TangleConfig
from .errors import DimensionMismatch, ResourceLimitExceeded, TangleError, UnknownSymbol
from .fibonacci import FibonacciTable, get_table
from .generators import CATALOGUE, Generator, Glyph, generator_matrix
from .interpreter import TangleInterpreter, evaluate
from .matrix import (
    FibMatrix,
    add,
    empty_diagram,
    equals,
    identity,
    multiply,
    scalar_identity,
    tensor,
)
from .display import format_matrix

__all__ = [
    "TangleConfig",
    "TangleError",
    "DimensionMismatch",
    "UnknownSymbol",
    "ResourceLimitExceeded",
    "FibonacciTable",
    "get_table",
    "Glyph",
    "Generator",
    "CATALOGUE",
    "generator_matrix",
    "FibMatrix",
    "multiply",
    "tensor",
    "add",
    "equals",
    "identity",
    "empty_diagram",
    "scalar_identity",
    "TangleInterpreter",
    "evaluate",
    "format_matrix",
]
