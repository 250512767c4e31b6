"""
Tangle Interpreter Module

A single-pass register machine over the characters of a tangle picture.

Each glyph is placed to the right of the current line (tensor product into
the accumulator). Each line terminator stacks the finished line under the
lines before it (matrix product into the pending register). The sentinel
stops the scan and the pending register is the answer.

Example:
    >>> from fibtangle import evaluate
    >>> result = evaluate("%,S,.")   # a crossing, then its inverse
    >>> result.handles
    (5, 5)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional

from .config import TangleConfig
from .errors import TangleError, UnknownSymbol
from .fibonacci import FibonacciTable, get_table
from .generators import Glyph, generator_matrix, lookup_symbol
from .matrix import FibMatrix, empty_diagram, multiply, scalar_identity, tensor

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\r\n")


class TokenKind(Enum):
    GENERATOR = "generator"
    VARIABLE = "variable"
    ASSIGN = "assign"
    TERMINATOR = "terminator"
    SENTINEL = "sentinel"


@dataclass(frozen=True)
class Token:
    """One meaningful input character."""
    kind: TokenKind
    symbol: str
    position: int
    glyph: Optional[Glyph] = None


def tokenize(text: str, config: Optional[TangleConfig] = None) -> Iterator[Token]:
    """
    Classify the characters of a tangle, skipping whitespace.

    Generator glyphs take precedence over variable letters, so 'S' is
    always the negative crossing and 'u', 'n', 'h', 'y', 'i' are always
    generators.

    Raises:
        UnknownSymbol: on the first character outside the glyph set
    """
    config = config or TangleConfig()
    for position, ch in enumerate(text):
        if ch == config.sentinel:
            yield Token(TokenKind.SENTINEL, ch, position)
            return
        if ch in config.terminators:
            yield Token(TokenKind.TERMINATOR, ch, position)
            continue
        if ch in WHITESPACE:
            continue
        glyph = lookup_symbol(ch)
        if glyph is not None:
            yield Token(TokenKind.GENERATOR, ch, position, glyph)
        elif config.enable_variables and "a" <= ch <= "z":
            yield Token(TokenKind.VARIABLE, ch, position)
        elif config.enable_variables and "A" <= ch <= "Z":
            yield Token(TokenKind.ASSIGN, ch, position)
        else:
            raise UnknownSymbol(ch, position)


@dataclass
class Registers:
    """
    The register file of one evaluation.

    accumulator: the current line so far; None stands for the empty diagram
    pending: all completed lines composed; None until the first fold
    variables: saved snapshots keyed by lowercase letter
    """
    accumulator: Optional[FibMatrix] = None
    pending: Optional[FibMatrix] = None
    variables: Dict[str, FibMatrix] = field(default_factory=dict)
    lines_folded: int = 0

    def clear(self) -> None:
        self.accumulator = None
        self.pending = None
        self.variables.clear()
        self.lines_folded = 0


class TangleInterpreter:
    """
    Evaluates tangle pictures into matrices.

    Attributes:
        config: evaluation settings
        table: Fibonacci tables sized by config.max_handle
        registers: the register file, reset at the start of every run
    """

    def __init__(self, config: Optional[TangleConfig] = None):
        self.config = config or TangleConfig()
        self.table: FibonacciTable = get_table(self.config.max_handle)
        self.registers = Registers()

    def run(self, text: str) -> FibMatrix:
        """
        Evaluate a whole tangle.

        Returns:
            The pending register, or the scalar identity if no line was
            completed

        Raises:
            TangleError: DimensionMismatch, UnknownSymbol or
                ResourceLimitExceeded; the register file is cleared first
        """
        self.registers.clear()
        saw_sentinel = False
        try:
            for token in tokenize(text, self.config):
                if token.kind is TokenKind.SENTINEL:
                    saw_sentinel = True
                    break
                self.step(token)
        except TangleError:
            self.registers.clear()
            raise

        if not saw_sentinel:
            logger.warning(f"No {self.config.sentinel!r} sentinel found; evaluated to end of input")
        if self.registers.accumulator is not None:
            logger.warning("Discarding unterminated line at end of tangle")
            self.registers.accumulator = None

        result = self.result()
        logger.info(f"Evaluated {self.registers.lines_folded} line(s) "
                    f"into a {result.rows}x{result.cols} handle matrix")
        return result

    def step(self, token: Token) -> None:
        """Apply one token to the register file."""
        if token.kind is TokenKind.GENERATOR:
            self.place(generator_matrix(token.glyph, self.table))
        elif token.kind is TokenKind.VARIABLE:
            self.place(self.recall(token))
        elif token.kind is TokenKind.ASSIGN:
            self.save(token.symbol.lower())
        elif token.kind is TokenKind.TERMINATOR:
            self.fold()

    def place(self, matrix: FibMatrix) -> None:
        """Tensor a matrix into the accumulator (to the right of the line)."""
        current = self.registers.accumulator
        if current is None:
            current = empty_diagram(self.table)
        self.registers.accumulator = tensor(current, matrix)

    def fold(self) -> None:
        """Stack the finished line under the pending register."""
        regs = self.registers
        if regs.accumulator is None:
            logger.debug("Empty line; nothing to fold")
            return
        if regs.pending is None:
            regs.pending = regs.accumulator
        else:
            regs.pending = multiply(regs.pending, regs.accumulator)
        regs.accumulator = None
        regs.lines_folded += 1
        logger.debug(f"Folded line {regs.lines_folded}: pending is "
                     f"{regs.pending.rows}x{regs.pending.cols}")

    def recall(self, token: Token) -> FibMatrix:
        saved = self.registers.variables.get(token.symbol)
        if saved is None:
            raise UnknownSymbol(token.symbol, token.position, reason="unassigned variable")
        return saved

    def save(self, name: str) -> None:
        """Snapshot the pending register into a variable slot."""
        regs = self.registers
        if regs.pending is None:
            regs.variables[name] = empty_diagram(self.table)
        else:
            regs.variables[name] = regs.pending.copy()
        logger.debug(f"Saved {regs.variables[name]!r} into {name!r}")

    def result(self) -> FibMatrix:
        if self.registers.pending is None:
            return scalar_identity(self.table)
        return self.registers.pending


def evaluate(text: str, config: Optional[TangleConfig] = None) -> FibMatrix:
    """Evaluate a tangle with a fresh interpreter."""
    return TangleInterpreter(config).run(text)
