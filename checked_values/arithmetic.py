"""
Checked arithmetic engine shared by HardClamp and SoftClamp.

Each operation is a plain method that:
  1. Rejects operands the primitive kind cannot hold
  2. Performs the raw computation on Python ints
  3. Rejects results outside the 128-bit working width
  4. Applies the Behavior to bring the result into [lower, upper]

Division by zero and working-width overflow fail no matter which
Behavior is configured, since there is no bound to resolve them to.
"""

from __future__ import annotations

from dataclasses import dataclass

from checked_values.bounds import WIDE_MAX, WIDE_MIN, Behavior, IntKind, Limits
from checked_values.errors import DivideByZero, MachineOverflow


@dataclass(frozen=True)
class CheckedArithmetic:
    """
    Arithmetic over ``kind`` whose every result lands in [lower, upper]
    or raises.
    """

    kind: IntKind
    lower: int
    upper: int
    behavior: Behavior

    @classmethod
    def for_limits(
        cls, kind: IntKind, limits: Limits, behavior: Behavior
    ) -> CheckedArithmetic:
        return cls(kind, limits.lower, limits.upper, behavior)

    @classmethod
    def for_kind(cls, kind: IntKind, behavior: Behavior) -> CheckedArithmetic:
        """Engine that only resolves against the kind's own range."""
        return cls(kind, kind.min, kind.max, behavior)

    # -- internal helpers ---------------------------------------------------

    def _operands(self, *values: int) -> None:
        for v in values:
            self.kind.check(v)

    def _resolve(self, raw: int, op: str) -> int:
        if not WIDE_MIN <= raw <= WIDE_MAX:
            raise MachineOverflow(raw, self.kind)
        return self.behavior.apply(raw, self.lower, self.upper, op)

    def _shift_amount(self, b: int) -> int:
        if not 0 <= b < self.kind.bits:
            raise MachineOverflow(b, self.kind)
        return b

    # -- core operations ----------------------------------------------------

    def add(self, a: int, b: int) -> int:
        self._operands(a, b)
        return self._resolve(a + b, "add")

    def sub(self, a: int, b: int) -> int:
        self._operands(a, b)
        return self._resolve(a - b, "sub")

    def mul(self, a: int, b: int) -> int:
        self._operands(a, b)
        return self._resolve(a * b, "mul")

    def div(self, a: int, b: int) -> int:
        """Integer division truncating toward zero."""
        self._operands(a, b)
        if b == 0:
            raise DivideByZero()
        # Python's divmod rounds toward -inf; adjust when the
        # mathematical quotient is negative with a remainder.
        q, r = divmod(a, b)
        if r != 0 and (a < 0) != (b < 0):
            q += 1
        return self._resolve(q, "div")

    def rem(self, a: int, b: int) -> int:
        """Remainder whose sign follows the dividend."""
        self._operands(a, b)
        if b == 0:
            raise DivideByZero()
        r = abs(a) % abs(b)
        return self._resolve(-r if a < 0 else r, "rem")

    # -- bitwise ------------------------------------------------------------

    def and_(self, a: int, b: int) -> int:
        self._operands(a, b)
        return self._resolve(a & b, "and")

    def or_(self, a: int, b: int) -> int:
        self._operands(a, b)
        return self._resolve(a | b, "or")

    def xor(self, a: int, b: int) -> int:
        self._operands(a, b)
        return self._resolve(a ^ b, "xor")

    def lshift(self, a: int, b: int) -> int:
        self.kind.check(a)
        return self._resolve(a << self._shift_amount(b), "lshift")

    def rshift(self, a: int, b: int) -> int:
        self.kind.check(a)
        return self._resolve(a >> self._shift_amount(b), "rshift")

    # -- unary --------------------------------------------------------------

    def neg(self, a: int) -> int:
        self.kind.check(a)
        return self._resolve(-a, "neg")

    def invert(self, a: int) -> int:
        """Bitwise NOT within the kind's width."""
        self.kind.check(a)
        raw = ~a if self.kind.signed else a ^ self.kind.mask
        return self._resolve(raw, "invert")
