"""Abstract unit of work.

A unit of work is one atomic transaction against the store.  Every
write made through its repositories becomes visible together on
``commit()`` or is discarded together.

Usage::

    with uow:
        ...
        uow.commit()

Leaving the block without committing rolls back.  Storage failures
inside the block surface as ``TransactionAbortedError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.repository.category_repository import CategoryRepository
from ims.domain.repository.document_repository import DocumentRepository
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.stock_repository import (
    StockLevelRepository,
    StockMoveRepository,
)
from ims.domain.repository.warehouse_repository import (
    LocationRepository,
    WarehouseRepository,
)


class UnitOfWork(ABC):

    categories: CategoryRepository
    products: ProductRepository
    warehouses: WarehouseRepository
    locations: LocationRepository
    stock: StockLevelRepository
    moves: StockMoveRepository
    documents: DocumentRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write of this unit of work durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted writes. A no-op after commit."""
