"""Validators: pure predicates over a value.

A validator holds no state that changes between calls.  ``validate``
returns None for a valid item and raises ValidationFailed (or a subclass
such as OutOfBounds) otherwise, so the same item always gets the same
answer.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar

from checked_values.bounds import Limits
from checked_values.errors import OutOfBounds, ValidationFailed


class Validator:
    """Base class for validators.

    Subclasses override ``validate``.  ``item_type`` optionally names the
    Python type of the items, which lets pydantic build a schema for views
    over this validator.
    """

    item_type: ClassVar[Any] = None

    def validate(self, item: Any) -> None:
        raise NotImplementedError

    def is_valid(self, item: Any) -> bool:
        try:
            self.validate(item)
        except ValidationFailed:
            return False
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PredicateValidator(Validator):
    """Validator built from a boolean predicate and a failure reason."""

    def __init__(
        self,
        predicate: Callable[[Any], bool],
        reason: str,
        item_type: Any = None,
    ) -> None:
        self.predicate = predicate
        self.reason = reason
        if item_type is not None:
            self.item_type = item_type

    def validate(self, item: Any) -> None:
        if not self.predicate(item):
            raise ValidationFailed(self.reason)

    def __repr__(self) -> str:
        return f"PredicateValidator({self.reason!r})"


class LimitsValidator(Validator):
    """Accepts integers inside a Limits range.

    Limits always lie within their kind, so an accepted item is also
    representable.
    """

    item_type = int

    def __init__(self, limits: Limits) -> None:
        self.limits = limits

    def validate(self, item: int) -> None:
        if not isinstance(item, int):
            raise ValidationFailed(f"expected an integer, got {type(item).__name__}")
        if not self.limits.contains(item):
            raise OutOfBounds.for_value(item, self.limits.lower, self.limits.upper)

    def __repr__(self) -> str:
        return f"LimitsValidator({self.limits})"


class AcceptAll(Validator):
    """Accepts every item; the default for views without a validator."""

    def validate(self, item: Any) -> None:
        return None
