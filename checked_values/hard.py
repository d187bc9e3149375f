"""HardClamp: an integer that is always within its limits.

Outside an open guard, the value observable through ``get()`` always
satisfies ``lower <= value <= upper``.  Construction validates, arithmetic
resolves through the type's Behavior, and guard commits reject out-of-range
staged values.
"""

from __future__ import annotations

from checked_values.arithmetic import CheckedArithmetic
from checked_values.clamp import Clamp, _coerce_int
from checked_values.validator import LimitsValidator


class HardClamp(Clamp):
    """
    Integer clamp that enforces its limits everywhere.

    >>> Score = HardClamp[U8, Saturating, 0, 10]
    >>> s = Score(5)
    >>> s += 20
    >>> s.get()
    10
    """

    _family = "hard"

    def __init__(self, value: int) -> None:
        self._require_configured()
        value = self.kind.check(_coerce_int(value))
        self._value = self.validate(value)

    @classmethod
    def _make_engine(cls) -> CheckedArithmetic:
        return CheckedArithmetic.for_limits(cls.kind, cls.limits, cls.behavior)

    @classmethod
    def _make_validator(cls) -> LimitsValidator:
        return LimitsValidator(cls.limits)

    @classmethod
    def new_valid(cls, value: int) -> HardClamp:
        """Construct through the Behavior: Saturating clamps, Panicking raises."""
        cls._require_configured()
        value = cls.kind.check(_coerce_int(value))
        return cls._from_trusted(
            cls.behavior.apply(value, cls.lower, cls.upper, "new_valid")
        )

    @property
    def value(self) -> int:
        return self._value

    def set(self, value: int) -> None:
        """Replace the value, raising OutOfBounds (and keeping the old value) if invalid."""
        self._ensure_writable()
        self._value = self.validate(self.kind.check(_coerce_int(value)))
