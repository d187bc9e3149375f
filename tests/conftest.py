"""Shared fixtures for checked-values tests."""
from __future__ import annotations

import pytest

from checked_values import (
    U8,
    HardClamp,
    PredicateValidator,
    Saturating,
    SoftClamp,
    View,
)


# The u8 [0, 10] types from the documented usage examples.
SatScore = HardClamp[U8, Saturating, 0, 10]
SoftScore = SoftClamp[U8, Saturating, 0, 10]


@pytest.fixture
def score() -> HardClamp:
    return SatScore(5)


@pytest.fixture
def soft_score() -> SoftClamp:
    return SoftScore(5)


@pytest.fixture
def not_seven() -> PredicateValidator:
    return PredicateValidator(lambda v: v != 7, "value must not be 7", item_type=int)


@pytest.fixture
def view(not_seven) -> View:
    return View.with_validator(0, not_seven)
