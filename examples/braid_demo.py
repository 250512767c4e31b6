"""
Example: Evaluating Braids on Fibonacci Anyons

This example compiles a few small tangles and checks the relations the
Fibonacci theory guarantees.
"""

from fibtangle import TangleInterpreter, empty_diagram, evaluate, format_matrix, identity
from fibtangle.constants import PHI
from fibtangle.matrix import scale


def main():
    print("=" * 60)
    print("Fibonacci Tangle - Braid Evaluation Demo")
    print("=" * 60)
    print()

    # Example 1: a single crossing
    print("Example 1: Positive crossing  '%,.'")
    print("-" * 60)
    cross = evaluate("%,.")
    print(format_matrix(cross))

    # Example 2: a crossing followed by its inverse
    print("Example 2: Crossing then uncrossing  '%,S,.'")
    print("-" * 60)
    cancelled = evaluate("%,S,.")
    print(f"Equals the identity: {cancelled == identity(5)}")
    print()

    # Example 3: the braid relation on three strands
    print("Example 3: Braid relation  '%|,|%,%|,.' vs '|%,%|,|%,.'")
    print("-" * 60)
    left = evaluate("%|,|%,%|,.")
    right = evaluate("|%,%|,|%,.")
    print(f"Both sides agree: {left == right}  (handles {left.handles})")
    print()

    # Example 4: a closed loop
    print("Example 4: Closed loop  'n,u,.'")
    print("-" * 60)
    loop = evaluate("n,u,.")
    print(format_matrix(loop))
    print(f"Loop value: {loop.data[0, 0]} (phi = {PHI})")
    print(f"Equals phi times the empty diagram: {loop == scale(empty_diagram(), PHI)}")
    print()

    # Example 5: saving an intermediate result
    print("Example 5: Variables  '%|,B,b,b,.'")
    print("-" * 60)
    interp = TangleInterpreter()
    cubed = interp.run("%|,B,b,b,.")
    print(f"Saved slots: {sorted(interp.registers.variables)}")
    print(f"Result handles: {cubed.handles}")


if __name__ == "__main__":
    main()
