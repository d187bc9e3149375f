"""
Declarative contracts for clamp types.

A Contract is an ordered collection of named properties.  Each property
has a predicate over a clamp class and one or more raw integers drawn
from the class's limits; it returns True when the property holds.  The
factory evaluates these before it hands a generated type out.

Contracts say WHAT must hold, not HOW the clamp achieves it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from checked_values.bounds import WIDE_MAX, WIDE_MIN, Panicking, Saturating
from checked_values.errors import BehaviorPanic, DivideByZero, OutOfBounds


# ---------------------------------------------------------------------------
# Core contract primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Property:
    """A single verifiable property of a clamp type.

    ``raw`` optionally computes the unresolved result for the operands, so
    the factory can tell a legitimate working-width overflow from a bug.
    """

    name: str
    description: str
    arity: int
    predicate: Callable[..., bool]
    raw: Callable[..., int] | None = None

    def check(self, cls: type, *args: int) -> bool:
        return self.predicate(cls, *args)

    def exceeds_working_width(self, *args: int) -> bool:
        if self.raw is None:
            return False
        return not WIDE_MIN <= self.raw(*args) <= WIDE_MAX


@dataclass
class Contract:
    """An ordered collection of properties that together form a contract."""

    name: str
    properties: list[Property] = field(default_factory=list)

    def add(self, prop: Property) -> None:
        self.properties.append(prop)

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _range_of(cls: type) -> tuple[int, int]:
    """Range the Behavior resolves against: limits (hard) or kind (soft)."""
    if cls._family == "soft":
        return cls.kind.min, cls.kind.max
    return cls.lower, cls.upper


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _trunc_rem(a: int, b: int) -> int:
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def _resolved(cls: type, raw: int, result: Any) -> bool:
    """Did the operation produce what the Behavior prescribes for ``raw``?"""
    lo, hi = _range_of(cls)
    if lo <= raw <= hi:
        return result == raw
    if result is BehaviorPanic:
        return cls.behavior is Panicking
    if cls.behavior is Saturating:
        return result == (hi if raw > hi else lo)
    return False


def _run(fn: Callable[[], Any]) -> Any:
    try:
        return fn().get()
    except BehaviorPanic:
        return BehaviorPanic


# ---------------------------------------------------------------------------
# Contract builders
# ---------------------------------------------------------------------------

def _binary_contract(
    name: str, method: str, raw: Callable[[int, int], int]
) -> Contract:
    contract = Contract(name=name)

    contract.add(Property(
        name="resolution",
        description="Result is the raw result, or what the Behavior prescribes",
        arity=2,
        predicate=lambda cls, a, b: _resolved(
            cls, raw(a, b), _run(lambda: getattr(cls(a), method)(b))
        ),
        raw=raw,
    ))

    contract.add(Property(
        name="in_place",
        description="a op= b matches a op b, and leaves a untouched on panic",
        arity=2,
        predicate=lambda cls, a, b: _in_place_matches(cls, method, a, b),
        raw=raw,
    ))

    return contract


def _in_place_matches(cls: type, method: str, a: int, b: int) -> bool:
    expected = _run(lambda: getattr(cls(a), method)(b))
    target = cls(a)
    inplace = "__i" + method[2:]
    try:
        getattr(target, inplace)(b)
    except BehaviorPanic:
        return expected is BehaviorPanic and target.get() == a
    return target.get() == expected


def addition_contract() -> Contract:
    contract = _binary_contract("addition", "__add__", lambda a, b: a + b)
    contract.add(Property(
        name="identity",
        description="a + 0 == a",
        arity=1,
        predicate=lambda cls, a: (cls(a) + 0).get() == a,
    ))
    return contract


def subtraction_contract() -> Contract:
    contract = _binary_contract("subtraction", "__sub__", lambda a, b: a - b)
    contract.add(Property(
        name="identity",
        description="a - 0 == a",
        arity=1,
        predicate=lambda cls, a: (cls(a) - 0).get() == a,
    ))
    return contract


def multiplication_contract() -> Contract:
    return _binary_contract("multiplication", "__mul__", lambda a, b: a * b)


def division_contract() -> Contract:
    contract = Contract(name="division")

    def resolution(cls, a, b):
        if b == 0:
            try:
                cls(a) / b
            except DivideByZero:
                return True
            return False
        return _resolved(cls, _trunc_div(a, b), _run(lambda: cls(a) / b))

    def remainder(cls, a, b):
        if b == 0:
            try:
                cls(a) % b
            except DivideByZero:
                return True
            return False
        return _resolved(cls, _trunc_rem(a, b), _run(lambda: cls(a) % b))

    contract.add(Property(
        name="resolution",
        description="Truncating quotient, or what the Behavior prescribes",
        arity=2,
        predicate=resolution,
    ))
    contract.add(Property(
        name="remainder",
        description="Remainder takes the dividend's sign",
        arity=2,
        predicate=remainder,
    ))
    return contract


def lifecycle_contract() -> Contract:
    """Guard commits are all-or-nothing; parsing round-trips."""
    contract = Contract(name="lifecycle")

    def commit(cls, a, b):
        owner = cls(a)
        guard = owner.modify()
        guard.value = b
        try:
            guard.commit()
        except OutOfBounds:
            guard.cancel()
            return owner.get() == a and not cls.limits.contains(b)
        return owner.get() == b

    contract.add(Property(
        name="commit_all_or_nothing",
        description="Owner holds the staged value after commit, or the old one",
        arity=2,
        predicate=commit,
    ))
    contract.add(Property(
        name="parse",
        description="parse(str(a)) == a",
        arity=1,
        predicate=lambda cls, a: cls.parse(str(a)).get() == a,
    ))
    return contract


def all_contracts() -> list[Contract]:
    """Every contract a generated clamp type must satisfy."""
    return [
        addition_contract(),
        subtraction_contract(),
        multiplication_contract(),
        division_contract(),
        lifecycle_contract(),
    ]
