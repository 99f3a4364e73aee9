"""Relational tables.

Rows are plain SQLAlchemy models; repositories translate them to and
from the domain dataclasses so nothing outside this package sees them.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class CategoryRow(Base):
    __tablename__ = "category"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), nullable=False, unique=True)
    description = Column(Text)


class ProductRow(Base):
    __tablename__ = "product"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sku = Column(String(64), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    unit_of_measure = Column(String(32), nullable=False, default="Unit")
    reorder_point = Column(Integer, nullable=False, default=0)
    optimal_stock = Column(Integer, nullable=False, default=0)
    category_id = Column(Integer, ForeignKey("category.id"), index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class WarehouseRow(Base):
    __tablename__ = "warehouse"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(32), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    address = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)

    locations = relationship("LocationRow", back_populates="warehouse")


class LocationRow(Base):
    __tablename__ = "location"
    __table_args__ = (UniqueConstraint("warehouse_id", "code", name="uq_location_code"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    warehouse_id = Column(Integer, ForeignKey("warehouse.id"), nullable=False, index=True)
    code = Column(String(32), nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, default="INTERNAL")
    is_active = Column(Boolean, nullable=False, default=True)

    warehouse = relationship("WarehouseRow", back_populates="locations")


class StockLevelRow(Base):
    """One row per (product, location) pair that has ever held stock."""

    __tablename__ = "stock_level"
    __table_args__ = (
        UniqueConstraint("product_id", "location_id", name="uq_stock_product_location"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("location.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    reserved = Column(Integer, nullable=False, default=0)
    available = Column(Integer, nullable=False, default=0)


class DocumentRow(Base):
    """Header of a receipt, delivery, transfer or adjustment."""

    __tablename__ = "operation_document"
    __table_args__ = (Index("ix_document_type_status", "doc_type", "status"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    doc_type = Column(String(20), nullable=False)
    reference = Column(String(64), nullable=False, unique=True)
    status = Column(String(20), nullable=False, default="DRAFT")
    location_id = Column(Integer, ForeignKey("location.id"))
    from_location_id = Column(Integer, ForeignKey("location.id"))
    to_location_id = Column(Integer, ForeignKey("location.id"))
    partner_name = Column(String(255))  # supplier or customer
    reason = Column(Text)
    notes = Column(Text)
    user_id = Column(Integer, nullable=False)
    scheduled_date = Column(DateTime(timezone=True))
    validated_date = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False)

    lines = relationship(
        "DocumentLineRow",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="DocumentLineRow.position",
    )


class DocumentLineRow(Base):
    __tablename__ = "document_line"
    __table_args__ = (UniqueConstraint("document_id", "position", name="uq_line_position"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(Integer, ForeignKey("operation_document.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False)
    quantity = Column(Integer)
    done_qty = Column(Integer)  # received or delivered
    system_qty = Column(Integer)
    counted_qty = Column(Integer)
    difference = Column(Integer)

    document = relationship("DocumentRow", back_populates="lines")


class StockMoveRow(Base):
    """Immutable journal entry; never updated or deleted."""

    __tablename__ = "stock_move"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_move_quantity_positive"),
        Index("ix_move_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    reference = Column(String(64), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False, index=True)
    from_location_id = Column(Integer, ForeignKey("location.id"))
    to_location_id = Column(Integer, ForeignKey("location.id"))
    quantity = Column(Integer, nullable=False)
    move_type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="DONE")
    user_id = Column(Integer, nullable=False)
    document_type = Column(String(20), nullable=False)
    document_id = Column(Integer, ForeignKey("operation_document.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
