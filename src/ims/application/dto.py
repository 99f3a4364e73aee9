"""Input and output records of the use cases.

Inputs describe what the caller wants created; outputs are flat,
string-formatted views of documents and moves for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ims.domain.model.document import (
    Delivery,
    InternalTransfer,
    OperationDocument,
    Receipt,
    StockAdjustment,
)
from ims.domain.model.stock import StockMove


# --- Input -------------------------------------------------------------------


@dataclass(frozen=True)
class DocumentHeader:
    """Input: header fields of a new document.

    Which fields are required depends on the document type: receipts,
    deliveries and adjustments use ``location_id``; transfers use
    ``from_location_id`` and ``to_location_id``.
    """

    location_id: int | None = None
    from_location_id: int | None = None
    to_location_id: int | None = None
    partner_name: str | None = None  # supplier or customer
    scheduled_date: datetime | None = None
    notes: str | None = None
    reason: str | None = None


@dataclass(frozen=True)
class LineSpec:
    """Input: one requested line.

    ``quantity`` for receipts, deliveries and transfers; ``counted_qty``
    for adjustments.
    """

    product_id: int
    quantity: int | None = None
    counted_qty: int | None = None


# --- Output ------------------------------------------------------------------


@dataclass(frozen=True)
class DocumentLineDTO:
    product_id: int
    quantity: int
    done_qty: int | None = None
    system_qty: int | None = None
    counted_qty: int | None = None
    difference: int | None = None


@dataclass(frozen=True)
class DocumentDTO:
    id: int
    document_type: str
    reference: str
    status: str
    user_id: int
    lines: list[DocumentLineDTO]
    created_at: str
    location_id: int | None = None
    from_location_id: int | None = None
    to_location_id: int | None = None
    partner_name: str | None = None
    notes: str | None = None
    reason: str | None = None
    scheduled_date: str | None = None
    validated_date: str | None = None


@dataclass(frozen=True)
class MoveDTO:
    id: int
    reference: str
    move_type: str
    product_id: int
    quantity: int
    from_location_id: int | None
    to_location_id: int | None
    user_id: int
    document_type: str
    document_id: int
    created_at: str


_TIME_FORMAT = "%Y-%m-%d %H:%M UTC"


def _fmt(value: datetime | None) -> str | None:
    return value.strftime(_TIME_FORMAT) if value is not None else None


# --- Mapping -----------------------------------------------------------------


def document_to_dto(document: OperationDocument) -> DocumentDTO:
    common = dict(
        id=document.id,
        document_type=document.document_type.value,
        reference=document.reference,
        status=document.status.value,
        user_id=document.user_id,
        created_at=_fmt(document.created_at),
        notes=document.notes,
        scheduled_date=_fmt(document.scheduled_date),
        validated_date=_fmt(document.validated_date),
    )

    if isinstance(document, Receipt):
        return DocumentDTO(
            **common,
            location_id=document.location_id,
            partner_name=document.supplier_name,
            lines=[
                DocumentLineDTO(line.product_id, line.quantity.value, done_qty=line.received_qty)
                for line in document.lines
            ],
        )
    if isinstance(document, Delivery):
        return DocumentDTO(
            **common,
            location_id=document.location_id,
            partner_name=document.customer_name,
            lines=[
                DocumentLineDTO(line.product_id, line.quantity.value, done_qty=line.delivered_qty)
                for line in document.lines
            ],
        )
    if isinstance(document, InternalTransfer):
        return DocumentDTO(
            **common,
            from_location_id=document.from_location_id,
            to_location_id=document.to_location_id,
            lines=[DocumentLineDTO(line.product_id, line.quantity.value) for line in document.lines],
        )
    if isinstance(document, StockAdjustment):
        return DocumentDTO(
            **common,
            location_id=document.location_id,
            reason=document.reason,
            lines=[
                DocumentLineDTO(
                    product_id=line.product_id,
                    quantity=abs(line.difference),
                    system_qty=line.system_qty,
                    counted_qty=line.counted_qty,
                    difference=line.difference,
                )
                for line in document.lines
            ],
        )
    raise TypeError(f"Unsupported document {type(document).__name__}")


def move_to_dto(move: StockMove) -> MoveDTO:
    return MoveDTO(
        id=move.id,  # type: ignore[arg-type]
        reference=move.reference,
        move_type=move.move_type.value,
        product_id=move.product_id,
        quantity=move.quantity,
        from_location_id=move.from_location_id,
        to_location_id=move.to_location_id,
        user_id=move.user_id,
        document_type=move.document_type.value,
        document_id=move.document_id,
        created_at=_fmt(move.created_at),  # type: ignore[arg-type]
    )
