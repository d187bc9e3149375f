"""
Shared machinery for HardClamp and SoftClamp.

A clamp type is parameterized once, at class level, by an IntKind, a
Behavior and a pair of bounds.  Two spellings are supported:

    Score = HardClamp[U8, Saturating, 0, 10]

    class Percent(HardClamp, kind=U8, behavior=Saturating, lower=0, upper=100):
        pass

Subscription is cached, so equal parameters give the same class.  Limits
are validated while the class is created.
"""

from __future__ import annotations

import functools
import operator
import random
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from checked_values.arithmetic import CheckedArithmetic
from checked_values.bounds import Behavior, IntKind, Limits, Panicking
from checked_values.errors import BehaviorPanic, MachineOverflow
from checked_values.guard import Leasable
from checked_values.validator import Validator

_SPECIALIZATIONS: dict[tuple, type] = {}


def _coerce_int(value: Any) -> int:
    if isinstance(value, Clamp):
        raise TypeError(f"expected a raw integer, got {type(value).__name__}")
    return operator.index(value)


@functools.total_ordering
class Clamp(Leasable):
    """Base class; use HardClamp or SoftClamp."""

    kind: ClassVar[IntKind]
    behavior: ClassVar[Behavior]
    limits: ClassVar[Limits]
    lower: ClassVar[int]
    upper: ClassVar[int]

    _engine: ClassVar[CheckedArithmetic]
    _validator: ClassVar[Validator]
    _family: ClassVar[str] = "clamp"

    def __init_subclass__(
        cls,
        kind: IntKind | None = None,
        behavior: Behavior | None = None,
        lower: int | None = None,
        upper: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if kind is None:
            if behavior is not None or lower is not None or upper is not None:
                raise TypeError(f"{cls.__name__}: 'kind' is required")
            return
        cls.kind = kind
        cls.behavior = Panicking if behavior is None else behavior
        cls.limits = Limits.for_kind(kind, lower, upper)
        cls.lower = cls.MIN = cls.limits.lower
        cls.upper = cls.MAX = cls.limits.upper
        cls._engine = cls._make_engine()
        cls._validator = cls._make_validator()

    def __class_getitem__(cls, params: Any) -> type:
        if cls.is_configured():
            raise TypeError(f"{cls.__name__} is already parameterized")
        if not isinstance(params, tuple):
            params = (params,)
        kind, behavior, lower, upper = (tuple(params) + (None,) * 4)[:4]
        if behavior is None:
            behavior = Panicking
        key = (cls, kind, behavior, lower, upper)
        try:
            return _SPECIALIZATIONS[key]
        except KeyError:
            pass
        limits = Limits.for_kind(kind, lower, upper)
        name = f"{cls.__name__}[{kind}, {behavior.name.title()}, {limits.lower}, {limits.upper}]"
        specialized = type(
            name,
            (cls,),
            {"__module__": cls.__module__, "__qualname__": name},
            kind=kind,
            behavior=behavior,
            lower=limits.lower,
            upper=limits.upper,
        )
        _SPECIALIZATIONS[key] = specialized
        return specialized

    # -- hooks for subclasses ----------------------------------------------

    @classmethod
    def _make_engine(cls) -> CheckedArithmetic:
        raise NotImplementedError

    @classmethod
    def _make_validator(cls) -> Validator:
        raise NotImplementedError

    # -- construction -------------------------------------------------------

    @classmethod
    def is_configured(cls) -> bool:
        return getattr(cls, "kind", None) is not None

    @classmethod
    def _require_configured(cls) -> None:
        if not cls.is_configured():
            raise TypeError(
                f"{cls.__name__} needs a kind, e.g. {cls.__name__}[U8, Saturating, 0, 10]"
            )

    @classmethod
    def _from_trusted(cls, value: int) -> Clamp:
        obj = cls.__new__(cls)
        obj._value = value
        return obj

    @classmethod
    def new(cls, value: int) -> Clamp:
        return cls(value)

    @classmethod
    def from_raw(cls, raw: int) -> Clamp:
        return cls(raw)

    @classmethod
    def default(cls) -> Clamp:
        """Instance holding zero, or the lower bound if zero is excluded."""
        cls._require_configured()
        return cls._from_trusted(cls.limits.default())

    @classmethod
    def rand(cls) -> Clamp:
        """Uniform sample within the limits."""
        cls._require_configured()
        return cls._from_trusted(random.randint(cls.lower, cls.upper))

    @classmethod
    def validate(cls, value: int) -> int:
        """Return ``value`` if it lies within the limits, else raise OutOfBounds."""
        cls._require_configured()
        cls._validator.validate(value)
        return value

    @classmethod
    def parse(cls, text: str) -> Clamp:
        cls._require_configured()
        return cls.new(cls.kind.parse(text))

    # -- access -------------------------------------------------------------

    def get(self) -> int:
        return self._value

    def into_raw(self) -> int:
        return self._value

    def is_valid(self) -> bool:
        return self.limits.contains(self._value)

    # -- guard protocol -----------------------------------------------------

    def _guard_read(self) -> int:
        return self._value

    def _guard_write(self, value: int) -> None:
        self._value = int(value)

    def _guard_validator(self) -> Validator:
        return self._validator

    # -- arithmetic ---------------------------------------------------------

    def _same_config(self, other: Clamp) -> bool:
        return (
            self._family == other._family
            and self.kind == other.kind
            and self.behavior is other.behavior
            and self.limits == other.limits
        )

    def _operand(self, other: Any) -> Any:
        if isinstance(other, Clamp):
            return other._value if self._same_config(other) else NotImplemented
        if isinstance(other, int):
            return other
        return NotImplemented

    def _binary(self, other: Any, op: str) -> Any:
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._from_trusted(getattr(self._engine, op)(self._value, rhs))

    def _inplace(self, other: Any, op: str) -> Any:
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        self._ensure_writable()
        self._value = getattr(self._engine, op)(self._value, rhs)
        return self

    def _reflected(self, other: Any, op: str) -> Any:
        """``int op clamp``: a plain int checked against the kind's range."""
        if isinstance(other, Clamp) or not isinstance(other, int):
            return NotImplemented
        engine = CheckedArithmetic.for_kind(self.kind, Panicking)
        try:
            return getattr(engine, op)(other, self._value)
        except BehaviorPanic as exc:
            raise MachineOverflow(exc.value, self.kind) from exc

    def __add__(self, other):
        return self._binary(other, "add")

    def __radd__(self, other):
        return self._reflected(other, "add")

    def __iadd__(self, other):
        return self._inplace(other, "add")

    def __sub__(self, other):
        return self._binary(other, "sub")

    def __rsub__(self, other):
        return self._reflected(other, "sub")

    def __isub__(self, other):
        return self._inplace(other, "sub")

    def __mul__(self, other):
        return self._binary(other, "mul")

    def __rmul__(self, other):
        return self._reflected(other, "mul")

    def __imul__(self, other):
        return self._inplace(other, "mul")

    # Both spellings truncate toward zero, like integer division in C.
    def __truediv__(self, other):
        return self._binary(other, "div")

    def __rtruediv__(self, other):
        return self._reflected(other, "div")

    def __itruediv__(self, other):
        return self._inplace(other, "div")

    __floordiv__ = __truediv__
    __rfloordiv__ = __rtruediv__
    __ifloordiv__ = __itruediv__

    def __mod__(self, other):
        return self._binary(other, "rem")

    def __rmod__(self, other):
        return self._reflected(other, "rem")

    def __imod__(self, other):
        return self._inplace(other, "rem")

    def __and__(self, other):
        return self._binary(other, "and_")

    def __rand__(self, other):
        return self._reflected(other, "and_")

    def __iand__(self, other):
        return self._inplace(other, "and_")

    def __or__(self, other):
        return self._binary(other, "or_")

    def __ror__(self, other):
        return self._reflected(other, "or_")

    def __ior__(self, other):
        return self._inplace(other, "or_")

    def __xor__(self, other):
        return self._binary(other, "xor")

    def __rxor__(self, other):
        return self._reflected(other, "xor")

    def __ixor__(self, other):
        return self._inplace(other, "xor")

    def __lshift__(self, other):
        return self._binary(other, "lshift")

    def __ilshift__(self, other):
        return self._inplace(other, "lshift")

    def __rshift__(self, other):
        return self._binary(other, "rshift")

    def __irshift__(self, other):
        return self._inplace(other, "rshift")

    def __neg__(self):
        return self._from_trusted(self._engine.neg(self._value))

    def __invert__(self):
        return self._from_trusted(self._engine.invert(self._value))

    # -- comparison / conversion --------------------------------------------

    def __eq__(self, other: Any) -> bool:
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._value == rhs

    def __lt__(self, other: Any) -> bool:
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._value < rhs

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __copy__(self) -> Clamp:
        return self._from_trusted(self._value)

    def __deepcopy__(self, memo: dict) -> Clamp:
        return self._from_trusted(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    # -- serialization ------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        cls._require_configured()
        from_int = core_schema.no_info_after_validator_function(
            cls.from_raw,
            core_schema.int_schema(ge=cls.kind.min, le=cls.kind.max),
        )
        return core_schema.json_or_python_schema(
            json_schema=from_int,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_int]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.into_raw, return_schema=core_schema.int_schema()
            ),
        )
