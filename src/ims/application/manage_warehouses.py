"""Application services: warehouses and their locations."""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.exceptions import ConstraintViolationError, EntityNotFoundError
from ims.domain.model.warehouse import Location, LocationType, Warehouse
from ims.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class WarehouseDTO:
    id: int
    code: str
    name: str
    address: str | None
    locations: list[Location]


class AddWarehouseHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, code: str, name: str, address: str | None = None) -> Warehouse:
        warehouse = Warehouse.create(code=code, name=name, address=address)
        with self._uow:
            if self._uow.warehouses.get_by_code(warehouse.code) is not None:
                raise ConstraintViolationError(
                    f"Warehouse code '{warehouse.code}' already exists"
                )
            self._uow.warehouses.save(warehouse)
            self._uow.commit()
        return warehouse


class AddLocationHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        warehouse_id: int,
        code: str,
        name: str,
        type: LocationType | None = None,
    ) -> Location:
        location = Location.create(warehouse_id=warehouse_id, code=code, name=name, type=type)
        with self._uow:
            if self._uow.warehouses.get_by_id(warehouse_id) is None:
                raise EntityNotFoundError(f"Warehouse #{warehouse_id} not found")
            siblings = self._uow.locations.list_all(warehouse_id=warehouse_id, active_only=False)
            if any(loc.code == location.code for loc in siblings):
                raise ConstraintViolationError(
                    f"Location code '{location.code}' already exists in warehouse #{warehouse_id}"
                )
            self._uow.locations.save(location)
            self._uow.commit()
        return location


class ListWarehousesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[WarehouseDTO]:
        """Active warehouses with their active locations."""
        with self._uow:
            return [
                WarehouseDTO(
                    id=w.id,  # type: ignore[arg-type]
                    code=w.code,
                    name=w.name,
                    address=w.address,
                    locations=self._uow.locations.list_all(warehouse_id=w.id),
                )
                for w in self._uow.warehouses.list_all()
            ]


class ListLocationsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, warehouse_id: int | None = None) -> list[Location]:
        with self._uow:
            return self._uow.locations.list_all(warehouse_id=warehouse_id)
