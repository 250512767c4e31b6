"""
Fibonacci Tangle Command Line Interface

Usage:
    python -m fibtangle [FILE] [options]

Reads a tangle picture (from FILE, or stdin) up to the line containing the
sentinel, evaluates it and prints the resulting matrix.

Examples:
    echo "|% , %| , |% , ." | python -m fibtangle
    python -m fibtangle braid.txt --commas-only
"""

import argparse
import logging
import sys
from typing import IO, List, Optional

from .config import TangleConfig
from .constants import BIFMAX
from .display import format_matrix
from .errors import TangleError
from .generators import Glyph, symbols_for
from .interpreter import evaluate

logger = logging.getLogger(__name__)


def read_tangle(stream: IO[str], sentinel: str = ".") -> str:
    """
    Accumulate lines until one contains the sentinel.

    Input that ends before the sentinel is returned as read.
    """
    lines: List[str] = []
    for line in stream:
        lines.append(line)
        if sentinel in line:
            break
    return "".join(lines)


def glyph_help() -> str:
    """One line per catalogue glyph listing the characters that denote it."""
    lines = ["Glyphs:"]
    for glyph in Glyph:
        symbols = " ".join(symbols_for(glyph))
        lines.append(f"  {symbols:<10} {glyph.value.replace('_', ' ')}")
    lines.append("  A-Z        save the result so far into a variable")
    lines.append("  a-z        place a saved variable")
    lines.append("  ,          new line (newline too, unless --commas-only)")
    lines.append("  .          end")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fibtangle",
        description="Evaluate an ascii tangle into the matrix a Fibonacci "
                    "anyon quantum computer would compute (mod 521).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=glyph_help(),
    )
    parser.add_argument('input', nargs='?', default=None,
                        help='File holding the tangle (default: stdin)')
    parser.add_argument('--commas-only', action='store_true',
                        help='Only commas end a line; newlines are ignored')
    parser.add_argument('--no-variables', action='store_true',
                        help='Reject A-Z / a-z variable glyphs')
    parser.add_argument('--max-handle', type=int, default=BIFMAX,
                        help=f'Largest Fibonacci handle (default: {BIFMAX})')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log each evaluation step to stderr')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        terminators = frozenset({","}) if args.commas_only else frozenset({",", "\n"})
        config = TangleConfig(
            terminators=terminators,
            enable_variables=not args.no_variables,
            max_handle=args.max_handle,
        )
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    if args.input:
        try:
            with open(args.input, encoding="utf-8") as f:
                text = read_tangle(f, config.sentinel)
        except OSError as e:
            print(f"ERROR: cannot read {args.input}: {e}")
            return 1
    else:
        text = read_tangle(sys.stdin, config.sentinel)

    try:
        result = evaluate(text, config)
    except TangleError as e:
        logger.debug("Evaluation aborted", exc_info=True)
        print(f"ERROR: {e}")
        return 1

    sys.stdout.write(format_matrix(result, config.max_print_entries))
    return 0


if __name__ == "__main__":
    sys.exit(main())
