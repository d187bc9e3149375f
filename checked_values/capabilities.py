"""Capability protocols.

These are the stable surface that code generators and builders rely on
when they emit concrete wrapper types.  A clamp type exposes its bounds
(``Bounded``), its overflow policy (``HasBehavior``) and a conversion
to and from its raw integer (``Convertible``).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from checked_values.bounds import Behavior, Limits


@runtime_checkable
class Bounded(Protocol):
    """Exposes the inclusive bounds of a type."""

    lower: int
    upper: int
    limits: Limits


@runtime_checkable
class HasBehavior(Protocol):
    """Exposes the static overflow Behavior of a type."""

    behavior: Behavior


@runtime_checkable
class Convertible(Protocol):
    """Bidirectional mapping between a wrapper and its raw value."""

    @classmethod
    def from_raw(cls, raw: Any) -> Any: ...

    def into_raw(self) -> Any: ...
