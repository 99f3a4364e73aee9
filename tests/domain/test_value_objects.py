"""Unit tests for Quantity and Actor value objects."""

import pytest

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import Actor, Quantity, Role


class TestQuantity:

    def test_positive_accepted(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)

    def test_equality_by_value(self):
        assert Quantity(3) == Quantity(3)

    def test_str(self):
        assert str(Quantity(7)) == "7"


class TestActor:

    def test_default_role_is_staff(self):
        assert Actor(1).role == Role.STAFF

    def test_zero_id_rejected(self):
        with pytest.raises(ValidationError, match="positive integer"):
            Actor(0)

    def test_string_id_rejected(self):
        with pytest.raises(ValidationError, match="positive integer"):
            Actor("7")

    def test_is_immutable(self):
        actor = Actor(1, Role.MANAGER)
        with pytest.raises(AttributeError):
            actor.id = 2
