"""SQLAlchemy implementation of the unit of work.

One session, and therefore one database transaction, per ``with``
block.  Storage errors raised inside the block are rolled back and
re-raised as ``TransactionAbortedError``; domain errors pass through
unchanged after the rollback.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ims.domain.exceptions import TransactionAbortedError
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.infrastructure.persistence.sqlalchemy_repositories import (
    SqlCategoryRepository,
    SqlDocumentRepository,
    SqlLocationRepository,
    SqlProductRepository,
    SqlStockLevelRepository,
    SqlStockMoveRepository,
    SqlWarehouseRepository,
)

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise RuntimeError("Unit of work is already in progress")
        self._session = self._session_factory()
        self.categories = SqlCategoryRepository(self._session)
        self.products = SqlProductRepository(self._session)
        self.warehouses = SqlWarehouseRepository(self._session)
        self.locations = SqlLocationRepository(self._session)
        self.stock = SqlStockLevelRepository(self._session)
        self.moves = SqlStockMoveRepository(self._session)
        self.documents = SqlDocumentRepository(self._session)
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()  # type: ignore[union-attr]
            self._session = None

        if exc_type is not None and issubclass(exc_type, SQLAlchemyError):
            logger.warning("Transaction aborted: %s", exc_value)
            raise TransactionAbortedError(
                f"Transaction aborted, no changes were saved: {exc_value}"
            ) from exc_value

    def commit(self) -> None:
        self._require_session().commit()

    def rollback(self) -> None:
        self._require_session().rollback()

    def _require_session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Unit of work used outside a 'with' block")
        return self._session
