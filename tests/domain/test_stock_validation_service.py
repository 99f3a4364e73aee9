"""Unit tests for the StockValidationService domain service and its ledger."""

from datetime import datetime, timezone

import pytest

from ims.domain.exceptions import InsufficientStockError, InvalidStateError
from ims.domain.model.document import (
    AdjustmentLine,
    Delivery,
    DeliveryLine,
    DocumentStatus,
    InternalTransfer,
    Receipt,
    ReceiptLine,
    StockAdjustment,
    TransferLine,
)
from ims.domain.model.stock import MoveType, StockLevel
from ims.domain.model.value_objects import Actor, Quantity
from ims.domain.service.availability import ensure_available, required_quantities
from ims.domain.service.move_recorder import MoveRecorder
from ims.domain.service.stock_ledger import StockLedger
from ims.domain.service.stock_validation_service import StockValidationService
from tests.fakes import FakeStockLevelRepository, FakeStockMoveRepository

ACTOR = Actor(7)
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _setup(*levels: tuple[int, int, int]):
    """Build the service over fake repos pre-loaded with (product, location, qty)."""
    stock_repo = FakeStockLevelRepository(
        [StockLevel(product_id=p, location_id=loc, quantity=q, available=q) for p, loc, q in levels]
    )
    move_repo = FakeStockMoveRepository()
    ledger = StockLedger(stock_repo)
    svc = StockValidationService(ledger, MoveRecorder(move_repo))
    return svc, ledger, stock_repo, move_repo


def _delivery(location_id: int, *lines: tuple[int, int]) -> Delivery:
    return Delivery(
        id=1,
        reference="DEL-1",
        location_id=location_id,
        user_id=1,
        lines=[DeliveryLine(pid, Quantity(q)) for pid, q in lines],
    )


class TestReceiptValidation:

    def test_creates_stock_row_on_first_receipt(self):
        svc, ledger, _, move_repo = _setup()
        receipt = Receipt(id=1, reference="RCP-1", location_id=10, user_id=1,
                          lines=[ReceiptLine(1, Quantity(100))])

        moves = svc.validate(receipt, ACTOR, when=NOW)

        assert ledger.on_hand(1, 10) == 100
        assert ledger.available(1, 10) == 100
        assert receipt.status == DocumentStatus.DONE
        assert receipt.validated_date == NOW
        assert receipt.lines[0].received_qty == 100
        assert len(moves) == 1
        assert moves[0].to_location_id == 10
        assert moves[0].from_location_id is None
        assert moves[0].user_id == 7
        assert move_repo.all() == moves

    def test_adds_to_existing_row(self):
        svc, ledger, _, _ = _setup((1, 10, 5))
        receipt = Receipt(id=1, reference="RCP-1", location_id=10, user_id=1,
                          lines=[ReceiptLine(1, Quantity(3)), ReceiptLine(1, Quantity(2))])

        moves = svc.validate(receipt, ACTOR)

        assert ledger.on_hand(1, 10) == 10
        assert len(moves) == 2


class TestDeliveryValidation:

    def test_decrements_stock(self):
        svc, ledger, _, _ = _setup((1, 10, 100))
        delivery = _delivery(10, (1, 30))

        moves = svc.validate(delivery, ACTOR)

        assert ledger.on_hand(1, 10) == 70
        assert delivery.lines[0].delivered_qty == 30
        assert moves[0].from_location_id == 10
        assert moves[0].move_type == MoveType.DELIVERY

    def test_insufficient_stock_leaves_document_pending(self):
        svc, ledger, _, move_repo = _setup((1, 10, 5))
        delivery = _delivery(10, (1, 10))

        with pytest.raises(InsufficientStockError, match="need 10, have 5"):
            svc.validate(delivery, ACTOR, labels={1: "W-1 Widget"})

        assert delivery.status == DocumentStatus.DRAFT
        assert ledger.on_hand(1, 10) == 5
        assert move_repo.all() == []

    def test_lines_of_same_product_are_summed(self):
        svc, ledger, _, _ = _setup((1, 10, 10))
        delivery = _delivery(10, (1, 6), (1, 6))

        with pytest.raises(InsufficientStockError, match="need 12, have 10"):
            svc.validate(delivery, ACTOR)

        assert ledger.on_hand(1, 10) == 10

    def test_missing_row_counts_as_zero(self):
        svc, _, _, _ = _setup()

        with pytest.raises(InsufficientStockError, match="product #1 at location #10"):
            svc.validate(_delivery(10, (1, 1)), ACTOR)

    def test_locks_rows_in_product_order(self):
        svc, _, stock_repo, _ = _setup((1, 10, 5), (2, 10, 5))

        svc.validate(_delivery(10, (2, 1), (1, 1)), ACTOR)

        assert stock_repo.locked[:2] == [(1, 10), (2, 10)]

    def test_validated_document_rejected(self):
        svc, ledger, _, _ = _setup((1, 10, 100))
        delivery = _delivery(10, (1, 10))
        svc.validate(delivery, ACTOR)

        with pytest.raises(InvalidStateError, match="already validated"):
            svc.validate(delivery, ACTOR)

        assert ledger.on_hand(1, 10) == 90


class TestTransferValidation:

    def test_conserves_total_quantity(self):
        svc, ledger, _, _ = _setup((1, 10, 40))
        transfer = InternalTransfer(id=1, reference="TRF-1", from_location_id=10, to_location_id=20,
                                    user_id=1, lines=[TransferLine(1, Quantity(15))])

        moves = svc.validate(transfer, ACTOR)

        assert ledger.on_hand(1, 10) == 25
        assert ledger.on_hand(1, 20) == 15
        assert len(moves) == 1
        assert (moves[0].from_location_id, moves[0].to_location_id) == (10, 20)


class TestAdjustmentValidation:

    def _adjustment(self, *lines: AdjustmentLine) -> StockAdjustment:
        return StockAdjustment(id=1, reference="ADJ-1", location_id=10, user_id=1, lines=list(lines))

    def test_count_below_system_records_outgoing_move(self):
        svc, ledger, _, _ = _setup((1, 10, 50))

        moves = svc.validate(self._adjustment(AdjustmentLine.count(1, 50, 45)), ACTOR)

        assert ledger.on_hand(1, 10) == 45
        assert moves[0].quantity == 5
        assert moves[0].from_location_id == 10
        assert moves[0].to_location_id is None

    def test_count_above_system_records_incoming_move(self):
        svc, ledger, _, _ = _setup()

        moves = svc.validate(self._adjustment(AdjustmentLine.count(1, 0, 8)), ACTOR)

        assert ledger.on_hand(1, 10) == 8
        assert moves[0].to_location_id == 10

    def test_zero_difference_writes_nothing(self):
        svc, ledger, stock_repo, move_repo = _setup((1, 10, 20))
        adjustment = self._adjustment(AdjustmentLine.count(1, 20, 20))

        moves = svc.validate(adjustment, ACTOR)

        assert moves == []
        assert move_repo.all() == []
        assert adjustment.status == DocumentStatus.DONE
        assert stock_repo.locked == []

    def test_uses_difference_frozen_at_creation(self):
        # Stock changed between count and validation; the count still wins.
        svc, ledger, _, _ = _setup((1, 10, 60))

        moves = svc.validate(self._adjustment(AdjustmentLine.count(1, 50, 45)), ACTOR)

        assert ledger.on_hand(1, 10) == 45
        assert moves[0].quantity == 5


class TestAvailability:

    def test_required_quantities_sums_per_product(self):
        lines = [DeliveryLine(1, Quantity(2)), DeliveryLine(2, Quantity(1)), DeliveryLine(1, Quantity(3))]
        assert required_quantities(lines) == {1: 5, 2: 1}

    def test_label_used_in_message(self):
        _, ledger, _, _ = _setup()
        with pytest.raises(InsufficientStockError, match="W-1 Widget"):
            ensure_available(ledger, 10, {1: 1}, labels={1: "W-1 Widget"})

    def test_advisory_check_takes_no_locks(self):
        _, ledger, stock_repo, _ = _setup((1, 10, 5))
        ensure_available(ledger, 10, {1: 5})
        assert stock_repo.locked == []
