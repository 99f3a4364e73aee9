"""Application service: Create Document use case.

Builds a DRAFT receipt, delivery, transfer or adjustment from header
and line input.  Nothing here writes stock:

- deliveries and transfers get an advisory availability check that
  neither locks nor reserves anything;
- adjustments snapshot the current on-hand quantity of each line as
  ``system_qty`` and store the difference to the counted quantity.
"""

from __future__ import annotations

import logging

from ims.application.dto import DocumentDTO, DocumentHeader, LineSpec, document_to_dto
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.document import (
    AdjustmentLine,
    Delivery,
    DeliveryLine,
    DocumentType,
    InternalTransfer,
    OperationDocument,
    Receipt,
    ReceiptLine,
    StockAdjustment,
    TransferLine,
)
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Actor, Quantity
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.domain.service.availability import ensure_available, required_quantities
from ims.domain.service.reference import ReferenceGenerator, generate_reference
from ims.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class CreateDocumentHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        reference_generator: ReferenceGenerator = generate_reference,
    ) -> None:
        self._uow = uow
        self._reference_generator = reference_generator

    def handle(
        self,
        document_type: DocumentType,
        header: DocumentHeader,
        lines: list[LineSpec],
        actor: Actor,
    ) -> DocumentDTO:
        """Create a new DRAFT document.

        Steps:
        1. Resolve every referenced location and product (fail if missing).
        2. Build the document; type-specific checks run here.
        3. Persist and return a DTO.
        """
        builders = {
            DocumentType.RECEIPT: self._build_receipt,
            DocumentType.DELIVERY: self._build_delivery,
            DocumentType.TRANSFER: self._build_transfer,
            DocumentType.ADJUSTMENT: self._build_adjustment,
        }

        with self._uow:
            products = self._resolve_products(lines)
            reference = self._reference_generator(document_type.prefix)
            document = builders[document_type](reference, header, lines, products, actor)
            self._uow.documents.save(document)
            self._uow.commit()

        logger.info(
            "Created %s %s with %d line(s)",
            document_type.label, document.reference, len(document.lines),
        )
        return document_to_dto(document)

    # --- Builders -------------------------------------------------------------

    def _build_receipt(self, reference, header, lines, products, actor) -> OperationDocument:
        location_id = self._require_location(header.location_id)
        return Receipt.create(
            reference=reference,
            location_id=location_id,
            user_id=actor.id,
            lines=[
                ReceiptLine(product_id=spec.product_id, quantity=_quantity(spec))
                for spec in lines
            ],
            supplier_name=header.partner_name,
            scheduled_date=header.scheduled_date,
            notes=header.notes,
        )

    def _build_delivery(self, reference, header, lines, products, actor) -> OperationDocument:
        location_id = self._require_location(header.location_id)
        document = Delivery.create(
            reference=reference,
            location_id=location_id,
            user_id=actor.id,
            lines=[
                DeliveryLine(product_id=spec.product_id, quantity=_quantity(spec))
                for spec in lines
            ],
            customer_name=header.partner_name,
            scheduled_date=header.scheduled_date,
            notes=header.notes,
        )
        self._advisory_check(location_id, document.lines, products)
        return document

    def _build_transfer(self, reference, header, lines, products, actor) -> OperationDocument:
        from_location_id = self._require_location(header.from_location_id, "Source location")
        to_location_id = self._require_location(header.to_location_id, "Destination location")
        document = InternalTransfer.create(
            reference=reference,
            from_location_id=from_location_id,
            to_location_id=to_location_id,
            user_id=actor.id,
            lines=[
                TransferLine(product_id=spec.product_id, quantity=_quantity(spec))
                for spec in lines
            ],
            scheduled_date=header.scheduled_date,
            notes=header.notes,
        )
        self._advisory_check(from_location_id, document.lines, products)
        return document

    def _build_adjustment(self, reference, header, lines, products, actor) -> OperationDocument:
        location_id = self._require_location(header.location_id)
        ledger = StockLedger(self._uow.stock)
        adjustment_lines = []
        for spec in lines:
            if spec.counted_qty is None:
                raise ValidationError(
                    f"Counted quantity is required for {products[spec.product_id].label}"
                )
            adjustment_lines.append(
                AdjustmentLine.count(
                    product_id=spec.product_id,
                    system_qty=ledger.on_hand(spec.product_id, location_id),
                    counted_qty=spec.counted_qty,
                )
            )
        return StockAdjustment.create(
            reference=reference,
            location_id=location_id,
            user_id=actor.id,
            lines=adjustment_lines,
            reason=header.reason or header.notes,
        )

    # --- Lookups --------------------------------------------------------------

    def _require_location(self, location_id: int | None, what: str = "Location") -> int:
        if location_id is None:
            raise ValidationError(f"{what} is required")
        if self._uow.locations.get_by_id(location_id) is None:
            raise EntityNotFoundError(f"{what} #{location_id} not found")
        return location_id

    def _resolve_products(self, lines: list[LineSpec]) -> dict[int, Product]:
        products: dict[int, Product] = {}
        for spec in lines:
            product = self._uow.products.get_by_id(spec.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{spec.product_id} not found")
            if not product.is_active:
                raise ValidationError(f"Product {product.label} is inactive")
            products[product.id] = product  # type: ignore[index]
        return products

    def _advisory_check(self, location_id: int, lines, products: dict[int, Product]) -> None:
        ensure_available(
            StockLedger(self._uow.stock),
            location_id,
            required_quantities(lines),
            lock=False,
            labels={pid: p.label for pid, p in products.items()},
        )


def _quantity(spec: LineSpec) -> Quantity:
    if spec.quantity is None:
        raise ValidationError(f"Quantity is required for product #{spec.product_id}")
    return Quantity(spec.quantity)
