"""Abstract repositories for Warehouse and Location aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.warehouse import Location, Warehouse


class WarehouseRepository(ABC):

    @abstractmethod
    def get_by_id(self, warehouse_id: int) -> Warehouse | None:
        """Return a warehouse by its ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Warehouse | None:
        """Return a warehouse by its code, or None if not found."""

    @abstractmethod
    def list_all(self, active_only: bool = True) -> list[Warehouse]:
        """Return warehouses ordered by name."""

    @abstractmethod
    def save(self, warehouse: Warehouse) -> None:
        """Persist a new or updated warehouse."""


class LocationRepository(ABC):

    @abstractmethod
    def get_by_id(self, location_id: int) -> Location | None:
        """Return a location by its ID, or None if not found."""

    @abstractmethod
    def list_all(
        self, warehouse_id: int | None = None, active_only: bool = True
    ) -> list[Location]:
        """Return locations ordered by name, optionally for one warehouse."""

    @abstractmethod
    def save(self, location: Location) -> None:
        """Persist a new or updated location."""
