"""SQLAlchemy-backed implementations of the domain repositories.

Every repository works on the session owned by the unit of work, so
all of them share one transaction.  Rows are translated to domain
dataclasses on the way out and back on the way in.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ims.domain.model.category import Category
from ims.domain.model.document import (
    AdjustmentLine,
    Delivery,
    DeliveryLine,
    DocumentStatus,
    DocumentType,
    InternalTransfer,
    OperationDocument,
    Receipt,
    ReceiptLine,
    StockAdjustment,
    TransferLine,
)
from ims.domain.model.product import Product
from ims.domain.model.stock import MoveFilter, MoveStatus, MoveType, StockLevel, StockMove
from ims.domain.model.value_objects import Quantity
from ims.domain.model.warehouse import Location, LocationType, Warehouse
from ims.domain.repository.category_repository import CategoryRepository
from ims.domain.repository.document_repository import DocumentRepository
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.stock_repository import StockLevelRepository, StockMoveRepository
from ims.domain.repository.warehouse_repository import LocationRepository, WarehouseRepository
from ims.infrastructure.persistence.orm import (
    CategoryRow,
    DocumentLineRow,
    DocumentRow,
    LocationRow,
    ProductRow,
    StockLevelRow,
    StockMoveRow,
    WarehouseRow,
)


def _aware(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything is stored in UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlCategoryRepository(CategoryRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, category_id: int) -> Category | None:
        row = self._session.get(CategoryRow, category_id)
        return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Category | None:
        row = self._session.query(CategoryRow).filter(CategoryRow.name == name).first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Category]:
        return [
            self._to_domain(r)
            for r in self._session.query(CategoryRow).order_by(CategoryRow.name).all()
        ]

    def save(self, category: Category) -> None:
        row = self._session.get(CategoryRow, category.id) if category.id is not None else None
        if row is None:
            row = CategoryRow()
            self._session.add(row)
        row.name = category.name
        row.description = category.description
        self._session.flush()
        category.id = row.id

    @staticmethod
    def _to_domain(row: CategoryRow) -> Category:
        return Category(id=row.id, name=row.name, description=row.description)


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return self._to_domain(row) if row is not None else None

    def get_by_sku(self, sku: str) -> Product | None:
        row = self._session.query(ProductRow).filter(ProductRow.sku == sku).first()
        return self._to_domain(row) if row is not None else None

    def list_all(
        self,
        search: str | None = None,
        active_only: bool = True,
        category_id: int | None = None,
    ) -> list[Product]:
        query = self._session.query(ProductRow)
        if active_only:
            query = query.filter(ProductRow.is_active.is_(True))
        if category_id is not None:
            query = query.filter(ProductRow.category_id == category_id)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    ProductRow.name.ilike(pattern),
                    ProductRow.sku.ilike(pattern),
                )
            )
        return [self._to_domain(r) for r in query.order_by(ProductRow.created_at.desc()).all()]

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id) if product.id is not None else None
        if row is None:
            row = ProductRow(sku=product.sku, created_at=product.created_at)
            self._session.add(row)
        row.name = product.name
        row.description = product.description
        row.unit_of_measure = product.unit_of_measure
        row.reorder_point = product.reorder_point
        row.optimal_stock = product.optimal_stock
        row.category_id = product.category_id
        row.is_active = product.is_active
        self._session.flush()
        product.id = row.id

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            sku=row.sku,
            name=row.name,
            description=row.description,
            unit_of_measure=row.unit_of_measure,
            reorder_point=row.reorder_point,
            optimal_stock=row.optimal_stock,
            category_id=row.category_id,
            is_active=row.is_active,
            created_at=_aware(row.created_at),
        )


class SqlWarehouseRepository(WarehouseRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, warehouse_id: int) -> Warehouse | None:
        row = self._session.get(WarehouseRow, warehouse_id)
        return self._to_domain(row) if row is not None else None

    def get_by_code(self, code: str) -> Warehouse | None:
        row = self._session.query(WarehouseRow).filter(WarehouseRow.code == code).first()
        return self._to_domain(row) if row is not None else None

    def list_all(self, active_only: bool = True) -> list[Warehouse]:
        query = self._session.query(WarehouseRow)
        if active_only:
            query = query.filter(WarehouseRow.is_active.is_(True))
        return [self._to_domain(r) for r in query.order_by(WarehouseRow.name).all()]

    def save(self, warehouse: Warehouse) -> None:
        row = self._session.get(WarehouseRow, warehouse.id) if warehouse.id is not None else None
        if row is None:
            row = WarehouseRow()
            self._session.add(row)
        row.code = warehouse.code
        row.name = warehouse.name
        row.address = warehouse.address
        row.is_active = warehouse.is_active
        self._session.flush()
        warehouse.id = row.id

    @staticmethod
    def _to_domain(row: WarehouseRow) -> Warehouse:
        return Warehouse(
            id=row.id,
            code=row.code,
            name=row.name,
            address=row.address,
            is_active=row.is_active,
        )


class SqlLocationRepository(LocationRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, location_id: int) -> Location | None:
        row = self._session.get(LocationRow, location_id)
        return self._to_domain(row) if row is not None else None

    def list_all(
        self, warehouse_id: int | None = None, active_only: bool = True
    ) -> list[Location]:
        query = self._session.query(LocationRow)
        if warehouse_id is not None:
            query = query.filter(LocationRow.warehouse_id == warehouse_id)
        if active_only:
            query = query.filter(LocationRow.is_active.is_(True))
        return [self._to_domain(r) for r in query.order_by(LocationRow.name).all()]

    def save(self, location: Location) -> None:
        row = self._session.get(LocationRow, location.id) if location.id is not None else None
        if row is None:
            row = LocationRow(warehouse_id=location.warehouse_id)
            self._session.add(row)
        row.code = location.code
        row.name = location.name
        row.type = location.type.value
        row.is_active = location.is_active
        self._session.flush()
        location.id = row.id

    @staticmethod
    def _to_domain(row: LocationRow) -> Location:
        return Location(
            id=row.id,
            warehouse_id=row.warehouse_id,
            code=row.code,
            name=row.name,
            type=LocationType(row.type),
            is_active=row.is_active,
        )


class SqlStockLevelRepository(StockLevelRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(
        self, product_id: int, location_id: int, for_update: bool = False
    ) -> StockLevel | None:
        query = self._session.query(StockLevelRow).filter(
            StockLevelRow.product_id == product_id,
            StockLevelRow.location_id == location_id,
        )
        if for_update:
            query = query.with_for_update()
        row = query.first()
        return self._to_domain(row) if row is not None else None

    def list_for_product(self, product_id: int) -> list[StockLevel]:
        rows = (
            self._session.query(StockLevelRow)
            .filter(StockLevelRow.product_id == product_id)
            .order_by(StockLevelRow.quantity.desc(), StockLevelRow.id)
            .all()
        )
        return [self._to_domain(r) for r in rows]

    def list_all(self) -> list[StockLevel]:
        return [self._to_domain(r) for r in self._session.query(StockLevelRow).all()]

    def save(self, level: StockLevel) -> None:
        row = self._session.get(StockLevelRow, level.id) if level.id is not None else None
        if row is None:
            row = StockLevelRow(product_id=level.product_id, location_id=level.location_id)
            self._session.add(row)
        row.quantity = level.quantity
        row.reserved = level.reserved
        row.available = level.available
        self._session.flush()
        level.id = row.id

    @staticmethod
    def _to_domain(row: StockLevelRow) -> StockLevel:
        return StockLevel(
            id=row.id,
            product_id=row.product_id,
            location_id=row.location_id,
            quantity=row.quantity,
            reserved=row.reserved,
            available=row.available,
        )


class SqlStockMoveRepository(StockMoveRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, move: StockMove) -> StockMove:
        row = StockMoveRow(
            reference=move.reference,
            product_id=move.product_id,
            from_location_id=move.from_location_id,
            to_location_id=move.to_location_id,
            quantity=move.quantity,
            move_type=move.move_type.value,
            status=move.status.value,
            user_id=move.user_id,
            document_type=move.document_type.value,
            document_id=move.document_id,
            created_at=move.created_at,
        )
        self._session.add(row)
        self._session.flush()
        return self._to_domain(row)

    def list(self, criteria: MoveFilter, limit: int) -> list[StockMove]:
        query = self._session.query(StockMoveRow)
        if criteria.product_id is not None:
            query = query.filter(StockMoveRow.product_id == criteria.product_id)
        if criteria.location_id is not None:
            query = query.filter(
                or_(
                    StockMoveRow.from_location_id == criteria.location_id,
                    StockMoveRow.to_location_id == criteria.location_id,
                )
            )
        if criteria.move_type is not None:
            query = query.filter(StockMoveRow.move_type == criteria.move_type.value)
        if criteria.start is not None:
            query = query.filter(StockMoveRow.created_at >= criteria.start)
        if criteria.end is not None:
            query = query.filter(StockMoveRow.created_at <= criteria.end)

        rows = (
            query.order_by(StockMoveRow.created_at.desc(), StockMoveRow.id.desc())
            .limit(limit)
            .all()
        )
        return [self._to_domain(r) for r in rows]

    @staticmethod
    def _to_domain(row: StockMoveRow) -> StockMove:
        return StockMove(
            id=row.id,
            reference=row.reference,
            product_id=row.product_id,
            from_location_id=row.from_location_id,
            to_location_id=row.to_location_id,
            quantity=row.quantity,
            move_type=MoveType(row.move_type),
            status=MoveStatus(row.status),
            user_id=row.user_id,
            document_type=DocumentType(row.document_type),
            document_id=row.document_id,
            created_at=_aware(row.created_at),
        )


class SqlDocumentRepository(DocumentRepository):
    """All four document types share the header and line tables,
    discriminated by ``doc_type``."""

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- DocumentRepository interface -----------------------------------------

    def get(
        self,
        document_type: DocumentType,
        document_id: int,
        for_update: bool = False,
    ) -> OperationDocument | None:
        query = self._session.query(DocumentRow).filter(
            DocumentRow.id == document_id,
            DocumentRow.doc_type == document_type.value,
        )
        if for_update:
            query = query.with_for_update()
        row = query.first()
        return self._to_domain(row) if row is not None else None

    def get_by_reference(self, reference: str) -> OperationDocument | None:
        row = self._session.query(DocumentRow).filter(DocumentRow.reference == reference).first()
        return self._to_domain(row) if row is not None else None

    def list(
        self,
        document_type: DocumentType,
        status: DocumentStatus | None = None,
        location_id: int | None = None,
    ) -> list[OperationDocument]:
        query = self._session.query(DocumentRow).filter(
            DocumentRow.doc_type == document_type.value
        )
        if status is not None:
            query = query.filter(DocumentRow.status == status.value)
        if location_id is not None:
            query = query.filter(
                or_(
                    DocumentRow.location_id == location_id,
                    DocumentRow.from_location_id == location_id,
                    DocumentRow.to_location_id == location_id,
                )
            )
        rows = query.order_by(DocumentRow.created_at.desc(), DocumentRow.id.desc()).all()
        return [self._to_domain(r) for r in rows]

    def save(self, document: OperationDocument) -> None:
        row = self._session.get(DocumentRow, document.id) if document.id is not None else None
        if row is None:
            row = DocumentRow(
                doc_type=document.document_type.value,
                reference=document.reference,
                user_id=document.user_id,
                created_at=document.created_at,
                lines=[
                    DocumentLineRow(position=i, product_id=line.product_id)
                    for i, line in enumerate(document.lines)
                ],
            )
            self._session.add(row)

        row.status = document.status.value
        row.notes = document.notes
        row.scheduled_date = document.scheduled_date
        row.validated_date = document.validated_date
        self._write_variant(row, document)
        for line_row, line in zip(row.lines, document.lines):
            self._write_line(line_row, line)

        self._session.flush()
        document.id = row.id

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _write_variant(row: DocumentRow, document: OperationDocument) -> None:
        if isinstance(document, Receipt):
            row.location_id = document.location_id
            row.partner_name = document.supplier_name
        elif isinstance(document, Delivery):
            row.location_id = document.location_id
            row.partner_name = document.customer_name
        elif isinstance(document, InternalTransfer):
            row.from_location_id = document.from_location_id
            row.to_location_id = document.to_location_id
        elif isinstance(document, StockAdjustment):
            row.location_id = document.location_id
            row.reason = document.reason

    @staticmethod
    def _write_line(row: DocumentLineRow, line) -> None:
        if isinstance(line, AdjustmentLine):
            row.system_qty = line.system_qty
            row.counted_qty = line.counted_qty
            row.difference = line.difference
            return
        row.quantity = line.quantity.value
        if isinstance(line, ReceiptLine):
            row.done_qty = line.received_qty
        elif isinstance(line, DeliveryLine):
            row.done_qty = line.delivered_qty

    @staticmethod
    def _to_domain(row: DocumentRow) -> OperationDocument:
        header = dict(
            id=row.id,
            reference=row.reference,
            user_id=row.user_id,
            status=DocumentStatus(row.status),
            notes=row.notes,
            scheduled_date=_aware(row.scheduled_date),
            validated_date=_aware(row.validated_date),
            created_at=_aware(row.created_at),
        )
        doc_type = DocumentType(row.doc_type)

        if doc_type == DocumentType.RECEIPT:
            return Receipt(
                **header,
                location_id=row.location_id,
                supplier_name=row.partner_name,
                lines=[
                    ReceiptLine(line.product_id, Quantity(line.quantity), received_qty=line.done_qty or 0)
                    for line in row.lines
                ],
            )
        if doc_type == DocumentType.DELIVERY:
            return Delivery(
                **header,
                location_id=row.location_id,
                customer_name=row.partner_name,
                lines=[
                    DeliveryLine(line.product_id, Quantity(line.quantity), delivered_qty=line.done_qty or 0)
                    for line in row.lines
                ],
            )
        if doc_type == DocumentType.TRANSFER:
            return InternalTransfer(
                **header,
                from_location_id=row.from_location_id,
                to_location_id=row.to_location_id,
                lines=[TransferLine(line.product_id, Quantity(line.quantity)) for line in row.lines],
            )
        return StockAdjustment(
            **header,
            location_id=row.location_id,
            reason=row.reason,
            lines=[
                AdjustmentLine(
                    product_id=line.product_id,
                    system_qty=line.system_qty,
                    counted_qty=line.counted_qty,
                    difference=line.difference,
                )
                for line in row.lines
            ],
        )
