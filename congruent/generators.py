from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import ClassVar, Dict, Optional, Type

from .recurrence import (
    LCG_63,
    MASK32,
    PARK_MILLER_31,
    PARK_MILLER_63,
    SCHRAGE_31,
    SCHRAGE_Q,
    SCHRAGE_R,
    Recurrence,
    jump,
    narrow_mulmod,
    schrage_mulmod,
)


logger = logging.getLogger(__name__)


def _check_u32(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int")
    if not (0 <= value <= MASK32):
        raise ValueError(f"{name} must be in [0, 2**32)")
    return value


@dataclass
class CongruentialGenerator:
    """Caller-owned state of one congruential generator.

    Subclasses pick a ``Recurrence``. Instances carry no hidden or shared
    state, so two instances never need coordination and ``copy.copy`` gives
    an independent stream at the same position.

    This is not cryptographically secure; the next value is fully predictable
    from the current state.
    """

    state: int = 0
    is_seeded: bool = False

    recurrence: ClassVar[Recurrence]

    def __post_init__(self) -> None:
        if self.is_seeded:
            self._legalize()

    def _legalize(self) -> None:
        self.state %= self.recurrence.modulus

    def seed(self, value: int) -> None:
        """Set the state from a 32-bit seed; 0 selects the default seed."""
        value = _check_u32("seed", value)
        if value == 0:
            value = self.recurrence.default_seed
        self.state = value
        self.is_seeded = True
        self._legalize()

    def _ensure_seeded(self) -> None:
        if not self.is_seeded:
            self.seed(0)

    def _advance(self) -> int:
        return self.recurrence.step(self.state)

    def next(self) -> int:
        """Advance one step and return the 32-bit output."""
        self._ensure_seeded()
        self.state = self._advance()
        return self.recurrence.output(self.state)

    def bounded(self, lower: int, upper: int) -> int:
        """Uniform integer in [min(lower, upper), max(lower, upper)].

        Draws are shifted to start at 0, and those at or above the largest
        multiple of the span that fits in the output range are rejected,
        removing the bias of a plain modulo.
        """
        lower = _check_u32("lower", lower)
        upper = _check_u32("upper", upper)
        if lower > upper:
            lower, upper = upper, lower

        offset = self.recurrence.output_min
        output_max = self.recurrence.output_max - offset
        span = upper - lower + 1
        if span > output_max:
            logger.debug(
                "%s: span %d clamped to output range %d",
                self.recurrence.name, span, output_max,
            )
            span = output_max

        threshold = output_max - output_max % span
        result = self.next() - offset
        while result >= threshold:
            result = self.next() - offset
        return lower + result % span

    def skip(self, n: int) -> int:
        """Jump ``n`` steps (backwards when negative) in O(log n) time.

        Leaves the generator exactly where ``n`` calls to ``next`` would and
        returns the output of that state.
        """
        self._ensure_seeded()
        self.state = self._jump(n)
        return self.recurrence.output(self.state)

    def _jump(self, n: int) -> int:
        return jump(self.recurrence, self.state, n)

    def random(self) -> float:
        """Float in [0, 1)."""
        return self.next() / (self.recurrence.output_max + 1)

    def substream(self, index: int, stride: int) -> "CongruentialGenerator":
        """Independent copy positioned ``index * stride`` steps ahead."""
        if index < 0 or stride <= 0:
            raise ValueError("index must be >= 0 and stride must be > 0")
        child = copy.copy(self)
        child.skip(index * stride)
        return child

    @classmethod
    def from_seed(cls, seed: int) -> "CongruentialGenerator":
        gen = cls()
        gen.seed(seed)
        return gen

    @classmethod
    def from_string(cls, seed_str: str) -> "CongruentialGenerator":
        # 31-multiplier string hash, folded to 32 bits
        h = 0
        for ch in seed_str:
            h = ((h << 5) - h + ord(ch)) & MASK32
        return cls.from_seed(h)


@dataclass
class LCG(CongruentialGenerator):
    """Power-of-two LCG, m = 2^63, c = 1. Returns bits 30..61 of the state,
    since the low bits of a power-of-two modulus have short periods."""

    recurrence: ClassVar[Recurrence] = LCG_63


@dataclass
class ParkMiller(CongruentialGenerator):
    """Minimal standard Lehmer generator (minstd_rand), m = 2^31 - 1."""

    recurrence: ClassVar[Recurrence] = PARK_MILLER_31

    def _legalize(self) -> None:
        # 0 is absorbing; seeds m and 2m fit in 32 bits and reduce to it
        super()._legalize()
        if self.state == 0:
            self.state = self.recurrence.default_seed


@dataclass
class ParkMiller64(ParkMiller):
    """Lehmer generator over the prime 2^63 - 25, returning the top 32 bits."""

    recurrence: ClassVar[Recurrence] = PARK_MILLER_63


@dataclass
class Schrage(ParkMiller):
    """The minstd recurrence evaluated with Schrage's method.

    Same sequence as ``ParkMiller``, but no product ever reaches 2^31, so the
    arithmetic maps onto 32-bit signed integers.
    """

    recurrence: ClassVar[Recurrence] = SCHRAGE_31

    def _advance(self) -> int:
        return schrage_mulmod(
            self.recurrence.multiplier,
            self.state,
            self.recurrence.modulus,
            SCHRAGE_Q,
            SCHRAGE_R,
        )

    def _jump(self, n: int) -> int:
        return jump(self.recurrence, self.state, n, mulmod=narrow_mulmod)


GENERATORS: Dict[str, Type[CongruentialGenerator]] = {
    "lcg": LCG,
    "park_miller": ParkMiller,
    "park_miller_64": ParkMiller64,
    "schrage": Schrage,
}


def make_generator(name: str, seed: Optional[int] = None) -> CongruentialGenerator:
    """Build a generator by variant name, seeded when ``seed`` is given."""
    try:
        cls = GENERATORS[name]
    except KeyError:
        raise ValueError(f"unknown generator {name!r}; expected one of {sorted(GENERATORS)}") from None
    return cls() if seed is None else cls.from_seed(seed)
