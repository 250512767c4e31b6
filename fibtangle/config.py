"""
Evaluator configuration.
"""

from dataclasses import dataclass
from typing import FrozenSet

from .constants import BIFMAX, MAX_PRINT_ENTRIES


@dataclass(frozen=True)
class TangleConfig:
    """
    Settings for one evaluation.

    - terminators: characters that end a tangle line
    - sentinel: character that ends the whole tangle
    - enable_variables: allow saving (A-Z) and reusing (a-z) results
    - max_handle: Fibonacci table bound
    - max_print_entries: matrices with more entries are not pretty printed
    """
    terminators: FrozenSet[str] = frozenset({",", "\n"})
    sentinel: str = "."
    enable_variables: bool = True
    max_handle: int = BIFMAX
    max_print_entries: int = MAX_PRINT_ENTRIES

    def __post_init__(self):
        """Validate configuration."""
        object.__setattr__(self, 'terminators', frozenset(self.terminators))
        if not self.terminators:
            raise ValueError("At least one line terminator is required")
        if any(len(t) != 1 for t in self.terminators):
            raise ValueError(f"Terminators must be single characters: {sorted(self.terminators)}")
        if len(self.sentinel) != 1:
            raise ValueError(f"Sentinel must be a single character, got {self.sentinel!r}")
        if self.sentinel in self.terminators:
            raise ValueError(f"Sentinel {self.sentinel!r} cannot also be a line terminator")
        if not (4 <= self.max_handle <= BIFMAX):
            raise ValueError(f"max_handle must satisfy 4 ≤ max_handle ≤ {BIFMAX}")
        if self.max_print_entries < 1:
            raise ValueError(f"max_print_entries must be >= 1")

    @classmethod
    def commas_only(cls, **kwargs) -> 'TangleConfig':
        """The variant where newlines are ignored and only commas end a line."""
        return cls(terminators=frozenset({","}), **kwargs)
