"""
Staged mutation: stage, validate, commit-or-cancel.

A Guard leases its owner (a clamp or a view) exclusively.  Edits go to a
private staged copy; the owner only changes when ``commit`` validates the
staged value.  A failed commit leaves the owner untouched and the guard
open, so the caller may fix the value and retry, or cancel.

Lease rules
-----------
- ``owner.modify()`` while a guard is open raises GuardInUse.
- Direct writes to a leased owner raise GuardInUse.
- Reads are allowed and observe the pre-guard value.
- A guard that is garbage-collected or leaves a ``with`` block while still
  open is cancelled (implicit cancel).  Dropping a changed guard logs a
  warning.
"""

from __future__ import annotations

import copy
import logging
import weakref
from enum import Enum, auto
from typing import Any

from checked_values.errors import AlreadyConsumed, GuardInUse, ValidationFailed
from checked_values.validator import Validator

logger = logging.getLogger(__name__)


class GuardState(Enum):
    UNCHANGED = auto()
    CHANGED = auto()
    COMMITTED = auto()
    CANCELLED = auto()


# ---------------------------------------------------------------------------
# Owner side of the lease
# ---------------------------------------------------------------------------

class Leasable:
    """Mixin for values that can be leased to a Guard.

    Subclasses implement ``_guard_read``, ``_guard_write`` and
    ``_guard_validator``.
    """

    _lease: weakref.ref | None = None

    def _guard_read(self) -> Any:
        raise NotImplementedError

    def _guard_write(self, value: Any) -> None:
        raise NotImplementedError

    def _guard_validator(self) -> Validator:
        raise NotImplementedError

    @property
    def is_leased(self) -> bool:
        guard = self._lease() if self._lease is not None else None
        return guard is not None and guard.is_open

    def _ensure_writable(self) -> None:
        if self.is_leased:
            raise GuardInUse(self)

    def _acquire_lease(self, guard: Guard) -> None:
        self._ensure_writable()
        self._lease = weakref.ref(guard)

    def _release_lease(self) -> None:
        self._lease = None

    def modify(self) -> Guard:
        """Open a guard over this value."""
        return Guard(self)


# ---------------------------------------------------------------------------
# The guard
# ---------------------------------------------------------------------------

class Guard:
    """Exclusive, revocable write access to an owner's value."""

    def __init__(self, owner: Leasable) -> None:
        self._owner = None
        self._outcome: GuardState | None = None
        self.error: ValidationFailed | None = None

        owner._acquire_lease(self)
        self._owner = owner
        current = owner._guard_read()
        self._snapshot = copy.deepcopy(current)
        self._staged = copy.deepcopy(current)

    # -- staged value -------------------------------------------------------

    @property
    def value(self) -> Any:
        self._ensure_open()
        return self._staged

    @value.setter
    def value(self, new_value: Any) -> None:
        self._ensure_open()
        self._staged = new_value

    @property
    def snapshot(self) -> Any:
        return self._snapshot

    @property
    def owner(self) -> Leasable | None:
        return self._owner

    @property
    def is_open(self) -> bool:
        return self._owner is not None and self._outcome is None

    # -- inspection ---------------------------------------------------------

    def check(self) -> GuardState:
        """Current state; equality-based while open."""
        if self._outcome is not None:
            return self._outcome
        if self._staged == self._snapshot:
            return GuardState.UNCHANGED
        return GuardState.CHANGED

    def is_changed(self) -> bool:
        return self.check() is GuardState.CHANGED

    def validate(self) -> None:
        """Run the owner's commit validation without committing."""
        self._ensure_open()
        self._owner._guard_validator().validate(self._staged)

    def is_valid(self) -> bool:
        try:
            self.validate()
        except ValidationFailed:
            return False
        return True

    # -- terminal transitions -----------------------------------------------

    def commit(self) -> None:
        """Validate the staged value and write it to the owner.

        On failure the owner is untouched, the guard stays open and the
        error is recorded in ``self.error`` before being re-raised.
        """
        self._ensure_open()
        try:
            self._owner._guard_validator().validate(self._staged)
        except ValidationFailed as exc:
            self.error = exc
            logger.debug(
                "commit rejected for %s: %s", type(self._owner).__name__, exc
            )
            raise
        self._owner._guard_write(self._staged)
        self.error = None
        self._finish(GuardState.COMMITTED)

    def cancel(self) -> None:
        """Discard the staged value; the owner is left as it was."""
        self._ensure_open()
        self._finish(GuardState.CANCELLED)

    # -- context manager / drop policy --------------------------------------

    def __enter__(self) -> Guard:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self.is_open:
            self._implicit_cancel()
        return False

    def __del__(self):
        if getattr(self, "_owner", None) is not None and self._outcome is None:
            self._implicit_cancel()

    # -- internal -----------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._outcome is not None:
            raise AlreadyConsumed(f"guard already {self._outcome.name.lower()}")

    def _implicit_cancel(self) -> None:
        if self.is_changed():
            logger.warning(
                "guard over %s released without commit or cancel; "
                "discarding staged value %r",
                type(self._owner).__name__,
                self._staged,
            )
        self._finish(GuardState.CANCELLED)

    def _finish(self, outcome: GuardState) -> None:
        self._outcome = outcome
        self._owner._release_lease()

    def __repr__(self) -> str:
        return (
            f"Guard(staged={self._staged!r}, snapshot={self._snapshot!r}, "
            f"state={self.check().name})"
        )
