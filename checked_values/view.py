"""
View: an arbitrary value paired with a Validator.

A view never enforces validity.  It may hold an invalid item; callers ask
``is_valid()`` / ``check()`` when they care, stage edits through
``modify()`` (commit runs the validator), and finally take the item out
with ``try_unwrap()`` or throw the view away with ``cancel()``.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from checked_values.errors import AlreadyConsumed, UnwrapFailed, ValidationFailed
from checked_values.guard import Guard, Leasable
from checked_values.validator import AcceptAll, Validator

_SPECIALIZATIONS: dict[tuple, type] = {}


class View(Leasable):
    """
    A value checked on demand by a validator.

    ``View[NotSeven]`` builds a subclass whose default validator is
    ``NotSeven()``, which is also what pydantic fields need.
    """

    default_validator: ClassVar[Validator | None] = None

    def __init__(self, item: Any, validator: Validator | None = None) -> None:
        if validator is None:
            validator = self.default_validator or AcceptAll()
        self._item = item
        self._validator = validator
        self._consumed = False

    @classmethod
    def with_validator(cls, item: Any, validator: Validator) -> View:
        return cls(item, validator)

    def __class_getitem__(cls, validator: Any) -> type:
        if isinstance(validator, type):
            key = (cls, validator)
            if key in _SPECIALIZATIONS:
                return _SPECIALIZATIONS[key]
            instance = validator()
        else:
            key = None
            instance = validator
        name = f"{cls.__name__}[{type(instance).__name__}]"
        specialized = type(name, (cls,), {"default_validator": instance})
        if key is not None:
            _SPECIALIZATIONS[key] = specialized
        return specialized

    # -- access -------------------------------------------------------------

    @property
    def item(self) -> Any:
        self._ensure_alive()
        return self._item

    @item.setter
    def item(self, value: Any) -> None:
        self._ensure_alive()
        self._ensure_writable()
        self._item = value

    @property
    def validator(self) -> Validator:
        return self._validator

    def into_raw(self) -> Any:
        return self.item

    @classmethod
    def from_raw(cls, raw: Any) -> View:
        return cls(raw)

    # -- validation ---------------------------------------------------------

    def check(self) -> None:
        """Raise ValidationFailed if the current item is invalid."""
        self._validator.validate(self.item)

    def is_valid(self) -> bool:
        return self._validator.is_valid(self.item)

    # -- consumption --------------------------------------------------------

    def try_unwrap(self) -> Any:
        """Return the item if valid, consuming the view.

        An invalid item raises UnwrapFailed carrying this view, untouched,
        so it can be repaired through ``modify()`` or discarded.
        """
        self._ensure_alive()
        self._ensure_writable()
        try:
            self._validator.validate(self._item)
        except ValidationFailed as exc:
            raise UnwrapFailed(self, exc) from exc
        self._consumed = True
        return self._item

    def cancel(self) -> None:
        """Discard the view and its item unconditionally."""
        self._ensure_alive()
        self._ensure_writable()
        self._consumed = True
        self._item = None

    @property
    def is_consumed(self) -> bool:
        return self._consumed

    def modify(self) -> Guard:
        self._ensure_alive()
        return super().modify()

    def _ensure_alive(self) -> None:
        if self._consumed:
            raise AlreadyConsumed("view was already unwrapped or cancelled")

    # -- guard protocol -----------------------------------------------------

    def _guard_read(self) -> Any:
        return self._item

    def _guard_write(self, value: Any) -> None:
        self._item = value

    def _guard_validator(self) -> Validator:
        return self._validator

    # -- dunder -------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, View):
            return NotImplemented
        return (
            type(self._validator) is type(other._validator)
            and self._item == other._item
        )

    def __repr__(self) -> str:
        if self._consumed:
            return f"{type(self).__name__}(<consumed>)"
        return f"{type(self).__name__}({self._item!r}, {self._validator!r})"

    # -- serialization ------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        item_type = getattr(cls.default_validator, "item_type", None)
        item_schema = (
            handler.generate_schema(item_type)
            if item_type is not None
            else core_schema.any_schema()
        )
        from_item = core_schema.no_info_after_validator_function(cls.from_raw, item_schema)
        return core_schema.json_or_python_schema(
            json_schema=from_item,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_item]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.into_raw
            ),
        )
