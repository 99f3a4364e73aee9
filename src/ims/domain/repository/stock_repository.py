"""Abstract repositories for the stock ledger and the move journal."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.stock import MoveFilter, StockLevel, StockMove


class StockLevelRepository(ABC):

    @abstractmethod
    def get(
        self, product_id: int, location_id: int, for_update: bool = False
    ) -> StockLevel | None:
        """Return the row for a (product, location) pair, or None.

        With ``for_update`` the row stays locked until the enclosing
        transaction ends.
        """

    @abstractmethod
    def list_for_product(self, product_id: int) -> list[StockLevel]:
        """Return every row of a product, largest quantity first."""

    @abstractmethod
    def list_all(self) -> list[StockLevel]:
        """Return every stock row."""

    @abstractmethod
    def save(self, level: StockLevel) -> None:
        """Insert or update a row."""


class StockMoveRepository(ABC):

    @abstractmethod
    def add(self, move: StockMove) -> StockMove:
        """Append a move and return it with its ID assigned."""

    @abstractmethod
    def list(self, criteria: MoveFilter, limit: int) -> list[StockMove]:
        """Return at most *limit* matching moves, newest first."""
