"""Operation documents: receipts, deliveries, internal transfers and
stock adjustments.

All four share one header shape, own an ordered list of line items and
follow the same status machine.  Only the validation transaction turns
a document into stock changes; see ``ims.domain.service``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Sequence

from ims.domain.exceptions import (
    ConstraintViolationError,
    InvalidStateError,
    ValidationError,
)
from ims.domain.model.value_objects import Quantity


class DocumentType(Enum):
    RECEIPT = "RECEIPT"
    DELIVERY = "DELIVERY"
    TRANSFER = "TRANSFER"
    ADJUSTMENT = "ADJUSTMENT"

    @property
    def prefix(self) -> str:
        return _PREFIXES[self]

    @property
    def label(self) -> str:
        return self.value.lower()


_PREFIXES = {
    DocumentType.RECEIPT: "RCP",
    DocumentType.DELIVERY: "DEL",
    DocumentType.TRANSFER: "TRF",
    DocumentType.ADJUSTMENT: "ADJ",
}


class DocumentStatus(Enum):
    DRAFT = "DRAFT"
    WAITING = "WAITING"
    READY = "READY"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class DocumentAction(Enum):
    VALIDATE = "validate"
    CANCEL = "cancel"


# ---------------------------------------------------------------------------
# Status machine
# ---------------------------------------------------------------------------
PENDING_STATUSES = frozenset(
    {DocumentStatus.DRAFT, DocumentStatus.WAITING, DocumentStatus.READY}
)

_TRANSITIONS: dict[tuple[DocumentStatus, DocumentAction], DocumentStatus] = {
    **{(s, DocumentAction.VALIDATE): DocumentStatus.DONE for s in PENDING_STATUSES},
    **{(s, DocumentAction.CANCEL): DocumentStatus.CANCELLED for s in PENDING_STATUSES},
    # Re-cancelling is accepted and changes nothing.
    (DocumentStatus.CANCELLED, DocumentAction.CANCEL): DocumentStatus.CANCELLED,
}


def can_transition(current: DocumentStatus, action: DocumentAction) -> bool:
    return (current, action) in _TRANSITIONS


def next_status(current: DocumentStatus, action: DocumentAction) -> DocumentStatus:
    """Return the status reached by *action*, or raise InvalidStateError."""
    try:
        return _TRANSITIONS[(current, action)]
    except KeyError:
        raise InvalidStateError(_rejection(current, action)) from None


def _rejection(current: DocumentStatus, action: DocumentAction) -> str:
    if action == DocumentAction.VALIDATE and current == DocumentStatus.DONE:
        return "already validated"
    if action == DocumentAction.CANCEL and current == DocumentStatus.DONE:
        return "cannot cancel a validated document"
    if action == DocumentAction.VALIDATE and current == DocumentStatus.CANCELLED:
        return "cannot validate a cancelled document"
    return f"cannot {action.value} a document in {current.value} status"


# ---------------------------------------------------------------------------
# Line items
# ---------------------------------------------------------------------------
MAX_LINES = 200


@dataclass
class ReceiptLine:
    """``received_qty`` stays 0 until validation, which receives the
    line in full and sets it to ``quantity``. There is no partial receipt.
    """

    product_id: int
    quantity: Quantity
    received_qty: int = 0


@dataclass
class DeliveryLine:
    """``delivered_qty`` stays 0 until validation, which ships the line
    in full and sets it to ``quantity``. There is no partial delivery.
    """

    product_id: int
    quantity: Quantity
    delivered_qty: int = 0


@dataclass
class TransferLine:
    product_id: int
    quantity: Quantity


@dataclass
class AdjustmentLine:
    """A physical count of one product.

    ``difference`` is captured when the document is created and used
    as-is at validation.
    """

    product_id: int
    system_qty: int
    counted_qty: int
    difference: int

    @staticmethod
    def count(product_id: int, system_qty: int, counted_qty: int) -> AdjustmentLine:
        if isinstance(counted_qty, bool) or not isinstance(counted_qty, int):
            raise ValidationError(
                f"Counted quantity must be an integer, got {type(counted_qty).__name__}"
            )
        if counted_qty < 0:
            raise ValidationError("Counted quantity cannot be negative")
        return AdjustmentLine(
            product_id=product_id,
            system_qty=system_qty,
            counted_qty=counted_qty,
            difference=counted_qty - system_qty,
        )


def _check_lines(lines: Sequence) -> list:
    if not lines:
        raise ValidationError("Document must contain at least one line")
    if len(lines) > MAX_LINES:
        raise ValidationError(f"Maximum {MAX_LINES} lines per document")
    return list(lines)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------
@dataclass(kw_only=True)
class OperationDocument:
    """Header and lines shared by all four document types.

    Use the ``create()`` factory of a concrete type for new documents.
    The constructor does no checking so repositories can rebuild
    persisted documents as they are.
    """

    document_type: ClassVar[DocumentType]

    id: int | None = None
    reference: str
    user_id: int
    lines: list
    status: DocumentStatus = DocumentStatus.DRAFT
    notes: str | None = None
    scheduled_date: datetime | None = None
    validated_date: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- State transitions ----------------------------------------------------

    def ensure_can(self, action: DocumentAction) -> None:
        if not can_transition(self.status, action):
            raise InvalidStateError(
                f"{self.describe()}: {_rejection(self.status, action)}"
            )

    def mark_validated(self, when: datetime) -> None:
        """Transition to DONE. Stock effects are applied by the caller."""
        self.ensure_can(DocumentAction.VALIDATE)
        self.status = next_status(self.status, DocumentAction.VALIDATE)
        self.validated_date = when

    def cancel(self) -> None:
        """Transition to CANCELLED. Never touches stock."""
        self.ensure_can(DocumentAction.CANCEL)
        self.status = next_status(self.status, DocumentAction.CANCEL)

    # --- Queries --------------------------------------------------------------

    @property
    def is_done(self) -> bool:
        return self.status == DocumentStatus.DONE

    def location_ids(self) -> tuple[int, ...]:
        raise NotImplementedError

    def product_ids(self) -> list[int]:
        return list(dict.fromkeys(line.product_id for line in self.lines))

    def describe(self) -> str:
        return f"{self.document_type.label.capitalize()} {self.reference}"


@dataclass(kw_only=True)
class Receipt(OperationDocument):
    document_type: ClassVar[DocumentType] = DocumentType.RECEIPT

    location_id: int
    supplier_name: str | None = None
    lines: list[ReceiptLine]

    @staticmethod
    def create(
        reference: str,
        location_id: int,
        user_id: int,
        lines: Sequence[ReceiptLine],
        supplier_name: str | None = None,
        scheduled_date: datetime | None = None,
        notes: str | None = None,
    ) -> Receipt:
        return Receipt(
            reference=reference,
            location_id=location_id,
            user_id=user_id,
            lines=_check_lines(lines),
            supplier_name=supplier_name,
            scheduled_date=scheduled_date,
            notes=notes,
        )

    def location_ids(self) -> tuple[int, ...]:
        return (self.location_id,)


@dataclass(kw_only=True)
class Delivery(OperationDocument):
    document_type: ClassVar[DocumentType] = DocumentType.DELIVERY

    location_id: int
    customer_name: str | None = None
    lines: list[DeliveryLine]

    @staticmethod
    def create(
        reference: str,
        location_id: int,
        user_id: int,
        lines: Sequence[DeliveryLine],
        customer_name: str | None = None,
        scheduled_date: datetime | None = None,
        notes: str | None = None,
    ) -> Delivery:
        return Delivery(
            reference=reference,
            location_id=location_id,
            user_id=user_id,
            lines=_check_lines(lines),
            customer_name=customer_name,
            scheduled_date=scheduled_date,
            notes=notes,
        )

    def location_ids(self) -> tuple[int, ...]:
        return (self.location_id,)


@dataclass(kw_only=True)
class InternalTransfer(OperationDocument):
    document_type: ClassVar[DocumentType] = DocumentType.TRANSFER

    from_location_id: int
    to_location_id: int
    lines: list[TransferLine]

    @staticmethod
    def create(
        reference: str,
        from_location_id: int,
        to_location_id: int,
        user_id: int,
        lines: Sequence[TransferLine],
        scheduled_date: datetime | None = None,
        notes: str | None = None,
    ) -> InternalTransfer:
        if from_location_id == to_location_id:
            raise ConstraintViolationError(
                "Source and destination cannot be the same"
            )
        return InternalTransfer(
            reference=reference,
            from_location_id=from_location_id,
            to_location_id=to_location_id,
            user_id=user_id,
            lines=_check_lines(lines),
            scheduled_date=scheduled_date,
            notes=notes,
        )

    def location_ids(self) -> tuple[int, ...]:
        return (self.from_location_id, self.to_location_id)


@dataclass(kw_only=True)
class StockAdjustment(OperationDocument):
    document_type: ClassVar[DocumentType] = DocumentType.ADJUSTMENT

    location_id: int
    reason: str | None = None
    lines: list[AdjustmentLine]

    @staticmethod
    def create(
        reference: str,
        location_id: int,
        user_id: int,
        lines: Sequence[AdjustmentLine],
        reason: str | None = None,
    ) -> StockAdjustment:
        # Validation overwrites on-hand per line, so one count per product.
        seen: set[int] = set()
        for line in lines:
            if line.product_id in seen:
                raise ConstraintViolationError(
                    f"Product #{line.product_id} is counted more than once"
                )
            seen.add(line.product_id)
        return StockAdjustment(
            reference=reference,
            location_id=location_id,
            user_id=user_id,
            lines=_check_lines(lines),
            reason=reason,
        )

    @property
    def adjustment_date(self) -> datetime | None:
        return self.validated_date

    def location_ids(self) -> tuple[int, ...]:
        return (self.location_id,)


DOCUMENT_CLASSES: dict[DocumentType, type[OperationDocument]] = {
    DocumentType.RECEIPT: Receipt,
    DocumentType.DELIVERY: Delivery,
    DocumentType.TRANSFER: InternalTransfer,
    DocumentType.ADJUSTMENT: StockAdjustment,
}
