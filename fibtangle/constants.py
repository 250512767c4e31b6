# fibtangle/constants.py
"""
Fibonacci Tangle Constants

This module fixes the one anyon theory the evaluator supports:

LAYER 1: Field Constants
- MOD: prime modulus of the coefficient field Z/521Z
- Q: the braiding root, chosen so that Q^5 = -1 (mod MOD)
- PHI: the golden ratio in the field (PHI^2 = PHI + 1)

LAYER 2: Basis Constants
- BIFMAX: largest Fibonacci index (handle) the tables cover
- EMPTY_HANDLE / SCALAR_HANDLE: handles of the empty diagram and of the
  1x1 scalar seed

LAYER 3: Display Constants
- MAX_PRINT_ENTRIES: matrices with more entries are not pretty printed
"""


# =============================================================================
# LAYER 1: Field Constants
# =============================================================================

MOD = 521
Q = 5

QQ = (Q * Q) % MOD          # q^2 = 25
QQQ = (Q * QQ) % MOD        # q^3 = 125
QQQQ = (Q * QQQ) % MOD      # q^4 = 104
PHI = (Q + MOD - QQQQ) % MOD
PHI_INV = PHI - 1           # phi^-1 = phi - 1

assert pow(Q, 5, MOD) == MOD - 1, "Q must satisfy q^5 = -1"
assert (PHI * PHI) % MOD == (PHI + 1) % MOD, "PHI must satisfy phi^2 = phi + 1"
assert (PHI * PHI_INV) % MOD == 1, "PHI_INV must invert PHI"


# =============================================================================
# LAYER 2: Basis Constants
# =============================================================================

BIFMAX = 20              # largest Fibonacci index we'll ever use
EMPTY_HANDLE = 3         # empty diagram: dimension fib(3) = 2
SCALAR_HANDLE = 1        # pending seed: dimension fib(1) = 1
HANDLE_OFFSET = 3        # tensor rule: k1 + k2 - HANDLE_OFFSET


# =============================================================================
# LAYER 3: Display Constants
# =============================================================================

MAX_PRINT_ENTRIES = 1000
PRINT_WIDTH = 5
