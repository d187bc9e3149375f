"""Tests for pydantic integration: raw values in, raw values out."""
from __future__ import annotations

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from checked_values import (
    U8,
    HardClamp,
    Saturating,
    SoftClamp,
    ValidationFailed,
    Validator,
    View,
)

Score = HardClamp[U8, Saturating, 0, 10]
SoftScore = SoftClamp[U8, Saturating, 0, 10]


class NotSeven(Validator):
    item_type = int

    def validate(self, item):
        if item == 7:
            raise ValidationFailed("value must not be 7")


NotSevenView = View[NotSeven]


class Settings(BaseModel):
    score: Score
    soft: SoftScore
    lucky: NotSevenView


# ---------------------------------------------------------------------------
# HardClamp
# ---------------------------------------------------------------------------

class TestHardClamp:
    def test_decode(self):
        adapter = TypeAdapter(Score)
        value = adapter.validate_python(4)
        assert isinstance(value, Score)
        assert value.get() == 4

    def test_decode_json(self):
        assert TypeAdapter(Score).validate_json("10").get() == 10

    def test_encode_is_raw(self):
        adapter = TypeAdapter(Score)
        assert adapter.dump_python(Score(4)) == 4
        assert adapter.dump_json(Score(4)) == b"4"

    @pytest.mark.parametrize("raw", [11, 255])
    def test_out_of_limits_rejected(self, raw):
        with pytest.raises(ValidationError):
            TypeAdapter(Score).validate_python(raw)

    @pytest.mark.parametrize("raw", [-1, 256])
    def test_out_of_kind_rejected(self, raw):
        with pytest.raises(ValidationError):
            TypeAdapter(Score).validate_python(raw)

    def test_instance_passes_through(self, score):
        assert TypeAdapter(Score).validate_python(score) is score


# ---------------------------------------------------------------------------
# SoftClamp
# ---------------------------------------------------------------------------

class TestSoftClamp:
    def test_out_of_limits_accepted(self):
        value = TypeAdapter(SoftScore).validate_python(30)
        assert value.get() == 30
        assert not value.is_valid()

    def test_out_of_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(SoftScore).validate_json("300")

    def test_encode_is_raw(self, soft_score):
        assert TypeAdapter(SoftScore).dump_json(soft_score) == b"5"


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------

class TestView:
    def test_invalid_item_accepted(self):
        view = TypeAdapter(NotSevenView).validate_python(7)
        assert isinstance(view, NotSevenView)
        assert not view.is_valid()

    def test_item_type_enforced(self):
        with pytest.raises(ValidationError):
            TypeAdapter(NotSevenView).validate_json('"seven"')

    def test_encode_is_raw(self):
        assert TypeAdapter(NotSevenView).dump_python(NotSevenView(3)) == 3


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class TestModel:
    def test_round_trip(self):
        settings = Settings.model_validate_json('{"score": 3, "soft": 12, "lucky": 7}')
        assert settings.score.get() == 3
        assert settings.soft.get() == 12
        assert settings.lucky.item == 7

        assert settings.model_dump() == {"score": 3, "soft": 12, "lucky": 7}
        again = Settings.model_validate_json(settings.model_dump_json())
        assert again.score == settings.score
        assert again.soft == settings.soft
        assert again.lucky == settings.lucky

    def test_hard_field_rejects(self):
        with pytest.raises(ValidationError):
            Settings.model_validate({"score": 11, "soft": 0, "lucky": 0})
