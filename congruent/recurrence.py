from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Tuple


logger = logging.getLogger(__name__)

MASK32 = 0xFFFFFFFF


@dataclass(frozen=True)
class Recurrence:
    """Parameters of X_{n+1} = (a * X_n + c) mod m plus the output transform.

    The output of a step is ``(state >> shift) & MASK32``. Power-of-two moduli
    keep a non-zero increment; prime moduli use c = 0 (Lehmer / Park-Miller).
    """

    name: str
    modulus: int
    multiplier: int
    increment: int
    default_seed: int = 1
    shift: int = 0

    @property
    def period(self) -> int:
        # Full-period LCG visits every residue; a multiplicative generator
        # never reaches 0, and a^(m-1) == 1 for prime m.
        return self.modulus if self.increment else self.modulus - 1

    @property
    def output_min(self) -> int:
        # the state of a multiplicative generator is never 0
        return 1 if self.increment == 0 and self.shift == 0 else 0

    @property
    def output_max(self) -> int:
        return min((self.modulus - 1) >> self.shift, MASK32)

    def step(self, state: int) -> int:
        return (self.multiplier * state + self.increment) % self.modulus

    def output(self, state: int) -> int:
        return (state >> self.shift) & MASK32


LCG_63 = Recurrence(
    name="lcg",
    modulus=1 << 63,
    multiplier=3249286849523012805,
    increment=1,
    shift=30,
)

# minstd_rand parameters
PARK_MILLER_31 = Recurrence(
    name="park_miller",
    modulus=(1 << 31) - 1,
    multiplier=48271,
    increment=0,
)

PARK_MILLER_63 = Recurrence(
    name="park_miller_64",
    modulus=(1 << 63) - 25,
    multiplier=6458928179451363983,
    increment=0,
    shift=31,
)

SCHRAGE_31 = Recurrence(
    name="schrage",
    modulus=(1 << 31) - 1,
    multiplier=48271,
    increment=0,
)

SCHRAGE_Q = SCHRAGE_31.modulus // SCHRAGE_31.multiplier  # 44488
SCHRAGE_R = SCHRAGE_31.modulus % SCHRAGE_31.multiplier  # 3399


def schrage_mulmod(a: int, x: int, m: int, q: int, r: int) -> int:
    """Compute ``a * x mod m`` without forming the full product.

    Uses m = a*q + r, so that a*x mod m == a*(x % q) - r*(x // q), with m
    added back when the difference is negative. Valid for 0 <= x < m and
    r < q, which keeps both partial products below m.
    """
    hi = x // q
    lo = x - hi * q
    result = a * lo - r * hi
    if result < 0:
        result += m
    return result


def _addmod(u: int, v: int, m: int) -> int:
    # u, v < m; never forms a value at or above m
    if u >= m - v:
        return u - (m - v)
    return u + v


def narrow_mulmod(a: int, x: int, m: int) -> int:
    """``a * x mod m`` with every intermediate kept below ``m``.

    Schrage's factorisation when ``m % a < m // a``; shift-and-add otherwise.
    """
    a %= m
    x %= m
    if a == 0 or x == 0:
        return 0
    q, r = divmod(m, a)
    if r < q:
        return schrage_mulmod(a, x, m, q, r)

    result = 0
    while x:
        if x & 1:
            result = _addmod(result, a, m)
        a = _addmod(a, a, m)
        x >>= 1
    return result


def _wide_mulmod(a: int, x: int, m: int) -> int:
    return (a * x) % m


def normalize_skip(recurrence: Recurrence, n: int) -> int:
    """Fold a signed skip count into [0, period).

    Moving back k steps is the same as moving forward period - k steps.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError("skip count must be an int")
    return n % recurrence.period


def jump_coefficients(
    recurrence: Recurrence,
    n: int,
    mulmod: Callable[[int, int, int], int] = _wide_mulmod,
) -> Tuple[int, int]:
    """Return (A, C) such that n steps map X to (A * X + C) mod m.

    Binary exponentiation of the affine map (Brown, "Random Number
    Generation With Arbitrary Strides", 1994):
      A = a^n mod m
      C = c * (a^n - 1) / (a - 1) mod m
    Both are built from the low bit of n upwards. ``h`` holds a^(2^i) and
    ``f`` holds c * (1 + a + ... + a^(2^i - 1)), so doubling the step count
    turns f into f * (h + 1).
    """
    m = recurrence.modulus
    c = recurrence.increment
    k = normalize_skip(recurrence, n)

    A, h = 1, recurrence.multiplier % m
    C, f = 0, c % m
    rounds = 0
    while k > 0:
        if k & 1:
            A = mulmod(A, h, m)
            if c:
                C = (mulmod(C, h, m) + f) % m
        if c:
            f = mulmod(f, h + 1, m)
        h = mulmod(h, h, m)
        k >>= 1
        rounds += 1

    logger.debug("%s jump of %d steps took %d rounds", recurrence.name, n, rounds)
    return A, C


def jump(
    recurrence: Recurrence,
    state: int,
    n: int,
    mulmod: Callable[[int, int, int], int] = _wide_mulmod,
) -> int:
    """State reached from ``state`` after ``n`` steps (negative n goes back)."""
    A, C = jump_coefficients(recurrence, n, mulmod)
    return (mulmod(A, state, recurrence.modulus) + C) % recurrence.modulus
