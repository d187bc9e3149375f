"""Error types for checked values.

Every error derives from CheckedError and from the builtin exception it
most resembles, so callers can catch either ``CheckedError`` or the
familiar ``ValueError`` / ``OverflowError`` / ``ZeroDivisionError``.
"""

from __future__ import annotations

from typing import Any


class CheckedError(Exception):
    """Base class for every error raised by this package."""


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------

class ValidationFailed(CheckedError, ValueError):
    """A value was rejected by a validator."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class OutOfBounds(ValidationFailed):
    """A value lies outside the inclusive range [lower, upper]."""

    def __init__(self, value: int, lower: int, upper: int) -> None:
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(f"{value} is outside bounds [{lower}, {upper}]")

    @classmethod
    def for_value(cls, value: int, lower: int, upper: int) -> OutOfBounds:
        """Pick TooSmall or TooLarge depending on which bound is violated."""
        if value < lower:
            return TooSmall(value, lower, upper)
        return TooLarge(value, lower, upper)


class TooSmall(OutOfBounds):
    """Value below the lower bound."""


class TooLarge(OutOfBounds):
    """Value above the upper bound."""


class BehaviorPanic(OutOfBounds, OverflowError):
    """An operation under Panicking behavior left the declared range."""

    def __init__(self, op: str, value: int, lower: int, upper: int) -> None:
        self.op = op
        super().__init__(value, lower, upper)
        self.args = (f"{op}: {self.reason}",)


class ConfigurationInvalid(CheckedError, ValueError):
    """Limits were declared with lower > upper, or outside their kind."""

    def __init__(self, lower: int, upper: int, detail: str | None = None) -> None:
        self.lower = lower
        self.upper = upper
        message = detail or f"lower ({lower}) must be <= upper ({upper})"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Arithmetic errors
# ---------------------------------------------------------------------------

class DivideByZero(CheckedError, ZeroDivisionError):
    """Division or remainder by zero."""

    def __init__(self) -> None:
        super().__init__("division by zero")


class MachineOverflow(CheckedError, OverflowError):
    """A value does not fit the primitive integer kind or working width."""

    def __init__(self, value: int, kind: Any) -> None:
        self.value = value
        self.kind = kind
        super().__init__(f"{value} does not fit in {kind}")


class ParseFailed(CheckedError, ValueError):
    """Text could not be parsed into the primitive integer kind."""

    def __init__(self, text: str, kind: Any) -> None:
        self.text = text
        self.kind = kind
        super().__init__(f"cannot parse {text!r} as {kind}")


# ---------------------------------------------------------------------------
# Guard / view lifecycle errors
# ---------------------------------------------------------------------------

class GuardInUse(CheckedError, RuntimeError):
    """The owner is leased to an open guard."""

    def __init__(self, owner: Any) -> None:
        self.owner = owner
        super().__init__(
            f"{type(owner).__name__} is leased to an open guard; "
            "commit or cancel it first"
        )


class AlreadyConsumed(CheckedError, RuntimeError):
    """A guard or view was used after reaching a terminal state."""


class UnwrapFailed(CheckedError, ValueError):
    """try_unwrap() on an invalid view; the view is returned intact."""

    def __init__(self, view: Any, reason: ValidationFailed) -> None:
        self.view = view
        self.reason = reason
        super().__init__(f"view holds an invalid item: {reason}")
