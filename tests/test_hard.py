"""Tests for HardClamp: construction, arithmetic, comparison, parsing."""
from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis.strategies import integers

from checked_values import (
    I8,
    U8,
    BehaviorPanic,
    ConfigurationInvalid,
    DivideByZero,
    HardClamp,
    MachineOverflow,
    OutOfBounds,
    Panicking,
    ParseFailed,
    Saturating,
    SoftClamp,
    TooLarge,
    TooSmall,
)

SatScore = HardClamp[U8, Saturating, 0, 10]
PanicScore = HardClamp[U8, Panicking, 0, 10]


class Percent(HardClamp, kind=U8, behavior=Saturating, lower=0, upper=100):
    pass


# ---------------------------------------------------------------------------
# Type declaration
# ---------------------------------------------------------------------------

class TestDeclaration:
    def test_subscription_is_cached(self):
        assert HardClamp[U8, Saturating, 0, 10] is SatScore

    def test_class_attributes(self):
        assert SatScore.lower == 0
        assert SatScore.upper == 10
        assert SatScore.MIN == 0
        assert SatScore.MAX == 10
        assert SatScore.behavior is Saturating
        assert SatScore.kind is U8

    def test_subclass_keywords(self):
        assert Percent.limits.upper == 100
        assert Percent(42).get() == 42

    def test_missing_bounds_default_to_kind(self):
        Full = HardClamp[I8, Saturating]
        assert Full.lower == -128
        assert Full.upper == 127

    def test_behavior_defaults_to_panicking(self):
        assert HardClamp[U8].behavior is Panicking

    def test_inverted_limits_rejected_at_declaration(self):
        with pytest.raises(ConfigurationInvalid):
            HardClamp[U8, Saturating, 10, 0]
        with pytest.raises(ConfigurationInvalid):
            class Broken(HardClamp, kind=U8, lower=5, upper=1):
                pass

    def test_unparameterized_cannot_be_built(self):
        with pytest.raises(TypeError):
            HardClamp(5)

    def test_cannot_reparameterize(self):
        with pytest.raises(TypeError):
            SatScore[U8]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_new_in_range(self):
        assert SatScore.new(5).get() == 5
        assert SatScore(0).get() == 0
        assert SatScore(10).get() == 10

    def test_new_never_clamps(self):
        with pytest.raises(TooLarge):
            SatScore(11)

    def test_too_small(self):
        Mid = HardClamp[I8, Saturating, -5, 5]
        with pytest.raises(TooSmall) as info:
            Mid(-6)
        assert (info.value.lower, info.value.upper) == (-5, 5)

    def test_unrepresentable(self):
        with pytest.raises(MachineOverflow):
            SatScore(-1)

    def test_rejects_floats(self):
        with pytest.raises(TypeError):
            SatScore(1.5)

    def test_new_valid_saturates(self):
        assert SatScore.new_valid(200).get() == 10

    def test_new_valid_panics(self):
        with pytest.raises(BehaviorPanic):
            PanicScore.new_valid(200)

    def test_default(self):
        assert SatScore.default().get() == 0
        assert HardClamp[U8, Saturating, 3, 9].default().get() == 3

    def test_validate_standalone(self):
        assert SatScore.validate(7) == 7
        with pytest.raises(OutOfBounds):
            SatScore.validate(70)

    def test_rand_within_limits(self):
        for _ in range(200):
            assert 0 <= SatScore.rand().get() <= 10

    @given(v=integers(0, 255))
    def test_constructed_values_in_range(self, v):
        try:
            clamp = SatScore(v)
        except OutOfBounds:
            assert v > 10
        else:
            assert 0 <= clamp.get() <= 10


# ---------------------------------------------------------------------------
# Setting
# ---------------------------------------------------------------------------

class TestSet:
    def test_set_valid(self):
        clamp = SatScore(5)
        clamp.set(9)
        assert clamp.get() == 9

    def test_set_invalid_keeps_value(self):
        clamp = SatScore(5)
        with pytest.raises(OutOfBounds):
            clamp.set(11)
        assert clamp.get() == 5

    def test_value_is_read_only(self):
        clamp = SatScore(5)
        with pytest.raises(AttributeError):
            clamp.value = 3


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

class TestSaturatingArithmetic:
    def test_documented_sequence(self):
        clamp = SatScore(5)
        clamp += 5
        assert clamp.get() == 10
        clamp -= 15
        assert clamp.get() == 0
        clamp += 20
        assert clamp.get() == 10
        clamp /= 2
        assert clamp.get() == 5
        clamp *= 2
        assert clamp.get() == 10
        clamp *= 2
        assert clamp.get() == 10
        clamp %= 2
        assert clamp.get() == 0

    def test_saturation_is_idempotent(self):
        clamp = SatScore(9)
        clamp += 5
        assert clamp == 10
        clamp += 5
        assert clamp == 10

    def test_in_place_returns_same_object(self):
        clamp = SatScore(1)
        before = clamp
        clamp += 1
        assert clamp is before

    def test_by_value_returns_new_instance(self):
        a = SatScore(4)
        b = a + 3
        assert isinstance(b, SatScore)
        assert b.get() == 7
        assert a.get() == 4

    def test_clamp_operands(self):
        assert (SatScore(6) + SatScore(6)).get() == 10
        assert (SatScore(6) - SatScore(2)).get() == 4

    def test_unary(self):
        assert (-SatScore(3)).get() == 0
        assert (~SatScore(3)).get() == 10

    def test_bitwise(self):
        assert (SatScore(6) & 3).get() == 2
        assert (SatScore(4) | 1).get() == 5
        assert (SatScore(5) ^ 1).get() == 4
        assert (SatScore(1) << 4).get() == 10
        assert (SatScore(8) >> 1).get() == 4

    def test_floor_division_truncates(self):
        Signed = HardClamp[I8, Saturating, -10, 10]
        assert (Signed(-7) // 2).get() == -3

    def test_divide_by_zero_regardless_of_behavior(self):
        with pytest.raises(DivideByZero):
            SatScore(5) / 0
        clamp = SatScore(5)
        with pytest.raises(DivideByZero):
            clamp %= 0
        assert clamp.get() == 5

    def test_operand_outside_kind(self):
        clamp = SatScore(5)
        with pytest.raises(MachineOverflow):
            clamp += 300
        assert clamp.get() == 5


class TestPanickingArithmetic:
    def test_overflow_raises_and_keeps_value(self):
        clamp = PanicScore(5)
        with pytest.raises(BehaviorPanic):
            clamp += 6
        assert clamp.get() == 5

    def test_underflow_raises(self):
        with pytest.raises(BehaviorPanic):
            PanicScore(5) - 6

    def test_in_range_ok(self):
        clamp = PanicScore(5)
        clamp += 5
        assert clamp.get() == 10

    @given(a=integers(0, 10), b=integers(0, 255))
    def test_never_out_of_range(self, a, b):
        clamp = PanicScore(a)
        try:
            clamp += b
        except BehaviorPanic:
            assert a + b > 10
        assert 0 <= clamp.get() <= 10


class TestMixedTypes:
    def test_different_behavior_is_a_type_error(self):
        with pytest.raises(TypeError):
            SatScore(1) + PanicScore(1)

    def test_soft_and_hard_do_not_mix(self):
        with pytest.raises(TypeError):
            SatScore(1) + SoftClamp[U8, Saturating, 0, 10](1)

    def test_equal_configuration_interoperates(self):
        class Score(HardClamp, kind=U8, behavior=Saturating, lower=0, upper=10):
            pass

        result = SatScore(3) + Score(4)
        assert type(result) is SatScore
        assert result == 7

    def test_reflected_returns_plain_int(self):
        result = 20 - SatScore(5)
        assert result == 15
        assert type(result) is int

    def test_reflected_checks_kind(self):
        with pytest.raises(MachineOverflow):
            3 - SatScore(5)
        with pytest.raises(MachineOverflow):
            250 + SatScore(10)


# ---------------------------------------------------------------------------
# Comparison, conversion, parsing
# ---------------------------------------------------------------------------

class TestConversions:
    def test_equality_and_ordering(self):
        assert SatScore(3) == 3
        assert SatScore(3) == SatScore(3)
        assert SatScore(3) < SatScore(4)
        assert SatScore(4) >= 4
        assert SatScore(3) != PanicScore(3)

    def test_int_and_index(self):
        clamp = SatScore(7)
        assert int(clamp) == 7
        assert [0, 1, 2, 3, 4, 5, 6, 7][clamp] == 7
        assert clamp.into_raw() == 7
        assert SatScore.from_raw(7) == clamp

    def test_bool(self):
        assert not SatScore(0)
        assert SatScore(1)

    def test_repr_and_str(self):
        assert str(SatScore(4)) == "4"
        assert repr(SatScore(4)) == "HardClamp[u8, Saturating, 0, 10](4)"

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(SatScore(1))

    def test_parse(self):
        assert SatScore.parse("7") == 7

    def test_parse_out_of_limits_is_out_of_bounds(self):
        with pytest.raises(OutOfBounds):
            SatScore.parse("42")

    def test_parse_malformed_is_distinct(self):
        with pytest.raises(ParseFailed):
            SatScore.parse("seven")
        with pytest.raises(ParseFailed):
            SatScore.parse("300")
