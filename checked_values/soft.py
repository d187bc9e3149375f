"""SoftClamp: an integer that knows its limits but may drift outside them.

Only ``set`` enforces the limits.  Arithmetic resolves through the
Behavior against the primitive kind's range only, so results may leave
the limits and stay there until the next ``set``.  ``is_valid()`` reports
compliance on demand.
"""

from __future__ import annotations

from checked_values.arithmetic import CheckedArithmetic
from checked_values.clamp import Clamp, _coerce_int
from checked_values.validator import LimitsValidator, PredicateValidator


class SoftClamp(Clamp):
    """Integer clamp whose limits are advisory."""

    _family = "soft"

    def __init__(self, value: int) -> None:
        self._require_configured()
        self._value = self.kind.check(_coerce_int(value))

    @classmethod
    def _make_engine(cls) -> CheckedArithmetic:
        return CheckedArithmetic.for_kind(cls.kind, cls.behavior)

    @classmethod
    def _make_validator(cls) -> LimitsValidator:
        return LimitsValidator(cls.limits)

    def _guard_validator(self) -> PredicateValidator:
        # Soft commits accept anything the kind can hold.
        return PredicateValidator(
            lambda v: isinstance(v, int) and self.kind.contains(v),
            f"value does not fit in {self.kind}",
        )

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        self.set_unchecked(value)

    def set(self, value: int) -> None:
        """Store ``value`` after resolving it through the Behavior."""
        self._ensure_writable()
        value = self.kind.check(_coerce_int(value))
        self._value = self.behavior.apply(value, self.lower, self.upper, "set")

    def set_unchecked(self, value: int) -> None:
        self._ensure_writable()
        self._value = self.kind.check(_coerce_int(value))

    def check(self) -> None:
        """Raise OutOfBounds if the current value is outside the limits."""
        self._validator.validate(self._value)
