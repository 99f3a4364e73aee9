"""Stock ledger rows and the immutable move journal.

A ``StockLevel`` holds the quantity of one product at one location.
A ``StockMove`` is written for every validated change and never
touched again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ims.domain.exceptions import ValidationError
from ims.domain.model.document import DocumentType


@dataclass
class StockLevel:
    """Quantity of a product at a location.

    ``available`` is stored rather than derived, so every write must
    keep ``available == quantity - reserved``.  A missing row is
    equivalent to all three fields being zero.
    """

    product_id: int
    location_id: int
    quantity: int = 0
    reserved: int = 0
    available: int = 0
    id: int | None = None

    @staticmethod
    def opening(product_id: int, location_id: int, quantity: int) -> StockLevel:
        """First row for a pair that is receiving stock."""
        if quantity <= 0:
            raise ValidationError("A new stock row needs a positive quantity")
        return StockLevel(
            product_id=product_id,
            location_id=location_id,
            quantity=quantity,
            reserved=0,
            available=quantity,
        )

    def apply_delta(self, quantity_delta: int, available_delta: int) -> None:
        # Non-negativity is checked by the calling transaction.
        self.quantity += quantity_delta
        self.available += available_delta

    def set_counted(self, counted_qty: int) -> None:
        """Overwrite with a physical count, keeping existing reservations."""
        if counted_qty < 0:
            raise ValidationError("Counted quantity cannot be negative")
        self.quantity = counted_qty
        self.available = counted_qty - self.reserved


class MoveType(Enum):
    RECEIPT = "RECEIPT"
    DELIVERY = "DELIVERY"
    TRANSFER = "TRANSFER"
    ADJUSTMENT = "ADJUSTMENT"


class MoveStatus(Enum):
    DONE = "DONE"


_SOURCE_DOCUMENT = {
    MoveType.RECEIPT: DocumentType.RECEIPT,
    MoveType.DELIVERY: DocumentType.DELIVERY,
    MoveType.TRANSFER: DocumentType.TRANSFER,
    MoveType.ADJUSTMENT: DocumentType.ADJUSTMENT,
}


@dataclass(frozen=True)
class StockMove:
    """Audit record of a single completed stock change.

    Direction conventions:
    - RECEIPT: destination only
    - DELIVERY: source only
    - TRANSFER: both, and they differ
    - ADJUSTMENT: source when stock went down, destination when it went up
    """

    reference: str
    product_id: int
    quantity: int
    move_type: MoveType
    user_id: int
    document_type: DocumentType
    document_id: int
    from_location_id: int | None = None
    to_location_id: int | None = None
    status: MoveStatus = MoveStatus.DONE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValidationError("Move quantity must be positive")
        if _SOURCE_DOCUMENT[self.move_type] != self.document_type:
            raise ValidationError(
                f"{self.move_type.value} move cannot originate from a "
                f"{self.document_type.value.lower()}"
            )

        has_from = self.from_location_id is not None
        has_to = self.to_location_id is not None
        if self.move_type == MoveType.RECEIPT:
            valid = has_to and not has_from
        elif self.move_type == MoveType.DELIVERY:
            valid = has_from and not has_to
        elif self.move_type == MoveType.TRANSFER:
            valid = has_from and has_to and self.from_location_id != self.to_location_id
        else:
            valid = has_from != has_to
        if not valid:
            raise ValidationError(
                f"Invalid locations for {self.move_type.value} move "
                f"(from={self.from_location_id}, to={self.to_location_id})"
            )

    def touches(self, location_id: int) -> bool:
        return location_id in (self.from_location_id, self.to_location_id)


@dataclass(frozen=True)
class MoveFilter:
    """Criteria for browsing the move history. Unset fields match all."""

    product_id: int | None = None
    location_id: int | None = None
    move_type: MoveType | None = None
    start: datetime | None = None
    end: datetime | None = None

    def matches(self, move: StockMove) -> bool:
        if self.product_id is not None and move.product_id != self.product_id:
            return False
        if self.location_id is not None and not move.touches(self.location_id):
            return False
        if self.move_type is not None and move.move_type != self.move_type:
            return False
        if self.start is not None and move.created_at < self.start:
            return False
        if self.end is not None and move.created_at > self.end:
            return False
        return True
