"""
Bounds layer for checked values.

Three pieces live here:

  IntKind    the primitive integer a clamp is stored as (u8, i32, ...).
             Python ints never overflow, so the machine width is explicit.
  Behavior   what happens when a result would leave the declared range.
  Limits     the inclusive [lower, upper] range a clamp enforces.

All three are immutable and validated when they are created, so a bad
declaration fails at class-definition time rather than on first use.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto

from checked_values.errors import (
    BehaviorPanic,
    ConfigurationInvalid,
    MachineOverflow,
    ParseFailed,
)

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Primitive integer kinds
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IntKind:
    """A fixed-width integer type, e.g. ``IntKind("u8", 8, signed=False)``."""

    name: str
    bits: int
    signed: bool

    def __post_init__(self):
        if self.bits <= 0:
            raise ValueError(f"bits must be positive, got {self.bits}")

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def check(self, value: int) -> int:
        """Return ``value`` unchanged, or raise MachineOverflow."""
        if not self.contains(value):
            raise MachineOverflow(value, self)
        return value

    def parse(self, text: str) -> int:
        """Parse optionally signed ASCII decimal digits, rejecting anything this
        kind cannot hold."""
        if not isinstance(text, str) or not _DECIMAL.fullmatch(text.strip()):
            raise ParseFailed(text, self)
        value = int(text.strip(), 10)
        if not self.contains(value):
            raise ParseFailed(text, self)
        return value

    def __str__(self) -> str:
        return self.name


U8 = IntKind("u8", 8, signed=False)
U16 = IntKind("u16", 16, signed=False)
U32 = IntKind("u32", 32, signed=False)
U64 = IntKind("u64", 64, signed=False)
U128 = IntKind("u128", 128, signed=False)
USIZE = IntKind("usize", 64, signed=False)
I8 = IntKind("i8", 8, signed=True)
I16 = IntKind("i16", 16, signed=True)
I32 = IntKind("i32", 32, signed=True)
I64 = IntKind("i64", 64, signed=True)
I128 = IntKind("i128", 128, signed=True)
ISIZE = IntKind("isize", 64, signed=True)

# Raw results are computed in this working width; anything outside it
# cannot be resolved meaningfully and always fails.
WIDE_MIN = I128.min
WIDE_MAX = U128.max


# ---------------------------------------------------------------------------
# Overflow behavior
# ---------------------------------------------------------------------------

class Behavior(Enum):
    """What to do when an arithmetic result would leave the declared range."""

    PANICKING = auto()   # Raise BehaviorPanic
    SATURATING = auto()  # Clamp to the violated bound

    def resolve_overflow(
        self, raw: int, upper: int, *, lower: int | None = None, op: str = "overflow"
    ) -> int:
        """Replacement for a result above ``upper``."""
        if self is Behavior.SATURATING:
            logger.debug("%s: saturating %d to upper bound %d", op, raw, upper)
            return upper
        raise BehaviorPanic(op, raw, upper if lower is None else lower, upper)

    def resolve_underflow(
        self, raw: int, lower: int, *, upper: int | None = None, op: str = "underflow"
    ) -> int:
        """Replacement for a result below ``lower``."""
        if self is Behavior.SATURATING:
            logger.debug("%s: saturating %d to lower bound %d", op, raw, lower)
            return lower
        raise BehaviorPanic(op, raw, lower, lower if upper is None else upper)

    def apply(self, raw: int, lower: int, upper: int, op: str = "arithmetic") -> int:
        """Bring a raw result into [lower, upper] according to this policy."""
        if raw > upper:
            return self.resolve_overflow(raw, upper, lower=lower, op=op)
        if raw < lower:
            return self.resolve_underflow(raw, lower, upper=upper, op=op)
        return raw


Panicking = Behavior.PANICKING
Saturating = Behavior.SATURATING


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Limits:
    """
    An inclusive range [lower, upper].

    Fixed for the lifetime of the clamp type that declares it.
    """

    lower: int
    upper: int

    def __post_init__(self):
        if self.lower > self.upper:
            raise ConfigurationInvalid(self.lower, self.upper)

    @classmethod
    def for_kind(
        cls, kind: IntKind, lower: int | None = None, upper: int | None = None
    ) -> Limits:
        """Limits over ``kind``, defaulting missing bounds to the kind's range."""
        lo = kind.min if lower is None else lower
        hi = kind.max if upper is None else upper
        for bound in (lo, hi):
            if not kind.contains(bound):
                raise ConfigurationInvalid(
                    lo, hi, f"bound {bound} does not fit in {kind}"
                )
        return cls(lo, hi)

    @property
    def width(self) -> int:
        """Total number of values in the range."""
        return self.upper - self.lower + 1

    def contains(self, value: int) -> bool:
        return self.lower <= value <= self.upper

    def clamp(self, value: int) -> int:
        return max(self.lower, min(self.upper, value))

    def default(self) -> int:
        """Zero when the range admits it, otherwise the lower bound."""
        return 0 if self.contains(0) else self.lower

    def __str__(self) -> str:
        return f"[{self.lower}, {self.upper}]"
