"""Ledger effects: what validating each document type does to stock.

The status machine and the transaction boundary are shared; each
effect only knows which locations it touches, in which direction, and
whether availability must be re-checked first.

Receipts and deliveries are fulfilled in full on validation: the
``received_qty`` or ``delivered_qty`` of every line is set to the line
quantity in the same transaction as the stock change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from ims.domain.model.document import (
    Delivery,
    DocumentType,
    InternalTransfer,
    OperationDocument,
    Receipt,
    StockAdjustment,
)
from ims.domain.model.stock import MoveType, StockMove
from ims.domain.model.value_objects import Actor
from ims.domain.service.availability import ensure_available, required_quantities
from ims.domain.service.move_recorder import MoveRecorder
from ims.domain.service.stock_ledger import StockLedger


class LedgerEffect(ABC):

    move_type: MoveType

    def recheck(
        self,
        ledger: StockLedger,
        document: OperationDocument,
        labels: Mapping[int, str] | None = None,
    ) -> None:
        """Verify preconditions against live stock. Must not write."""

    @abstractmethod
    def apply(
        self,
        ledger: StockLedger,
        recorder: MoveRecorder,
        document: OperationDocument,
        actor: Actor,
    ) -> list[StockMove]:
        """Mutate the ledger and record one move per effective line."""


class ReceiptEffect(LedgerEffect):
    """Stock arrives at the receipt location. Nothing to re-check."""

    move_type = MoveType.RECEIPT

    def apply(self, ledger, recorder, document: Receipt, actor) -> list[StockMove]:
        moves = []
        for line in document.lines:
            qty = line.quantity.value
            ledger.apply_delta(line.product_id, document.location_id, qty, qty)
            line.received_qty = qty
            moves.append(
                recorder.record(
                    self.move_type,
                    document,
                    line.product_id,
                    qty,
                    user_id=actor.id,
                    to_location_id=document.location_id,
                )
            )
        return moves


class DeliveryEffect(LedgerEffect):
    """Stock leaves from the delivery location."""

    move_type = MoveType.DELIVERY

    def recheck(self, ledger, document: Delivery, labels=None) -> None:
        ensure_available(
            ledger,
            document.location_id,
            required_quantities(document.lines),
            lock=True,
            labels=labels,
        )

    def apply(self, ledger, recorder, document: Delivery, actor) -> list[StockMove]:
        moves = []
        for line in document.lines:
            qty = line.quantity.value
            ledger.apply_delta(line.product_id, document.location_id, -qty, -qty)
            line.delivered_qty = qty
            moves.append(
                recorder.record(
                    self.move_type,
                    document,
                    line.product_id,
                    qty,
                    user_id=actor.id,
                    from_location_id=document.location_id,
                )
            )
        return moves


class TransferEffect(LedgerEffect):
    """Stock moves between two locations; each line debits and credits."""

    move_type = MoveType.TRANSFER

    def recheck(self, ledger, document: InternalTransfer, labels=None) -> None:
        ensure_available(
            ledger,
            document.from_location_id,
            required_quantities(document.lines),
            lock=True,
            labels=labels,
        )

    def apply(
        self, ledger, recorder, document: InternalTransfer, actor
    ) -> list[StockMove]:
        moves = []
        for line in document.lines:
            qty = line.quantity.value
            ledger.apply_delta(line.product_id, document.from_location_id, -qty, -qty)
            ledger.apply_delta(line.product_id, document.to_location_id, qty, qty)
            moves.append(
                recorder.record(
                    self.move_type,
                    document,
                    line.product_id,
                    qty,
                    user_id=actor.id,
                    from_location_id=document.from_location_id,
                    to_location_id=document.to_location_id,
                )
            )
        return moves


class AdjustmentEffect(LedgerEffect):
    """Counted quantities overwrite on-hand stock.

    Uses the difference stored at creation; lines that matched the
    system quantity are skipped entirely.
    """

    move_type = MoveType.ADJUSTMENT

    def apply(
        self, ledger, recorder, document: StockAdjustment, actor
    ) -> list[StockMove]:
        moves = []
        for line in document.lines:
            if line.difference == 0:
                continue
            ledger.set_counted(line.product_id, document.location_id, line.counted_qty)
            if line.difference < 0:
                direction = {"from_location_id": document.location_id}
            else:
                direction = {"to_location_id": document.location_id}
            moves.append(
                recorder.record(
                    self.move_type,
                    document,
                    line.product_id,
                    abs(line.difference),
                    user_id=actor.id,
                    **direction,
                )
            )
        return moves


_EFFECTS: dict[DocumentType, LedgerEffect] = {
    DocumentType.RECEIPT: ReceiptEffect(),
    DocumentType.DELIVERY: DeliveryEffect(),
    DocumentType.TRANSFER: TransferEffect(),
    DocumentType.ADJUSTMENT: AdjustmentEffect(),
}


def effect_for(document_type: DocumentType) -> LedgerEffect:
    return _EFFECTS[document_type]
