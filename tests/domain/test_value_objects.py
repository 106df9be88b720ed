"""Unit tests for value objects."""

import pytest

from wms.domain.exceptions import ValidationError
from wms.domain.model.value_objects import BoxMultiplier, ManualQuantity, new_id


class TestManualQuantity:

    def test_parse_signed(self):
        assert ManualQuantity.parse("-2").value == -2
        assert ManualQuantity.parse(" 5 ").value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="cannot be zero"):
            ManualQuantity(0)

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid manual quantity"):
            ManualQuantity.parse("two")

    def test_str_shows_sign(self):
        assert str(ManualQuantity(3)) == "+3"
        assert str(ManualQuantity(-3)) == "-3"


class TestBoxMultiplier:

    def test_valid(self):
        assert BoxMultiplier(6).value == 6

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            BoxMultiplier(True)


def test_new_id_is_prefixed_and_unique():
    first, second = new_id("REC"), new_id("REC")
    assert first.startswith("REC-")
    assert first != second
