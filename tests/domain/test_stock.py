"""Unit tests for stock levels, moves and move filters."""

from datetime import timedelta

import pytest

from ims.domain.exceptions import ValidationError
from ims.domain.model.document import DocumentType
from ims.domain.model.stock import MoveFilter, MoveType, StockLevel, StockMove


def _move(move_type=MoveType.RECEIPT, document_type=DocumentType.RECEIPT, **kwargs) -> StockMove:
    defaults = dict(
        reference="RCP-1",
        product_id=1,
        quantity=5,
        user_id=1,
        document_id=1,
        to_location_id=10,
    )
    defaults.update(kwargs)
    return StockMove(move_type=move_type, document_type=document_type, **defaults)


class TestStockLevel:

    def test_opening_row(self):
        level = StockLevel.opening(product_id=1, location_id=2, quantity=10)
        assert (level.quantity, level.reserved, level.available) == (10, 0, 10)

    def test_opening_needs_positive_quantity(self):
        with pytest.raises(ValidationError):
            StockLevel.opening(product_id=1, location_id=2, quantity=0)

    def test_set_counted_keeps_reservations(self):
        level = StockLevel(product_id=1, location_id=2, quantity=50, reserved=5, available=45)
        level.set_counted(30)
        assert level.quantity == 30
        assert level.reserved == 5
        assert level.available == 25


class TestStockMove:

    def test_receipt_has_destination_only(self):
        move = _move()
        assert move.to_location_id == 10
        assert move.from_location_id is None

    def test_receipt_with_source_rejected(self):
        with pytest.raises(ValidationError, match="Invalid locations"):
            _move(from_location_id=9)

    def test_delivery_needs_source(self):
        with pytest.raises(ValidationError, match="Invalid locations"):
            _move(MoveType.DELIVERY, DocumentType.DELIVERY)

    def test_transfer_needs_two_distinct_locations(self):
        with pytest.raises(ValidationError, match="Invalid locations"):
            _move(MoveType.TRANSFER, DocumentType.TRANSFER, from_location_id=10)

    def test_adjustment_needs_exactly_one_location(self):
        _move(MoveType.ADJUSTMENT, DocumentType.ADJUSTMENT)
        with pytest.raises(ValidationError, match="Invalid locations"):
            _move(MoveType.ADJUSTMENT, DocumentType.ADJUSTMENT, from_location_id=9)

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            _move(quantity=0)

    def test_type_must_match_document(self):
        with pytest.raises(ValidationError, match="cannot originate"):
            _move(document_type=DocumentType.DELIVERY)


class TestMoveFilter:

    def test_empty_filter_matches_everything(self):
        assert MoveFilter().matches(_move())

    def test_location_matches_either_side(self):
        move = _move(MoveType.TRANSFER, DocumentType.TRANSFER, from_location_id=9)
        assert MoveFilter(location_id=9).matches(move)
        assert MoveFilter(location_id=10).matches(move)
        assert not MoveFilter(location_id=11).matches(move)

    def test_date_range_is_inclusive(self):
        move = _move()
        assert MoveFilter(start=move.created_at, end=move.created_at).matches(move)
        later = move.created_at + timedelta(seconds=1)
        assert not MoveFilter(start=later).matches(move)

    def test_type_filter(self):
        assert not MoveFilter(move_type=MoveType.DELIVERY).matches(_move())
