"""Integration tests for warehouse and location management."""

import pytest

from ims.application.manage_warehouses import (
    AddLocationHandler,
    AddWarehouseHandler,
    ListLocationsHandler,
    ListWarehousesHandler,
)
from ims.domain.exceptions import ConstraintViolationError, EntityNotFoundError, ValidationError
from ims.domain.model.warehouse import LocationType
from tests.fakes import FakeUnitOfWork


def _setup() -> FakeUnitOfWork:
    uow = FakeUnitOfWork()
    AddWarehouseHandler(uow).handle(code="wh1", name="North")
    AddLocationHandler(uow).handle(warehouse_id=1, code="stock", name="Stock")
    return uow


class TestWarehouses:

    def test_code_is_uppercased(self):
        uow = _setup()
        assert uow.warehouses.get_by_id(1).code == "WH1"

    def test_duplicate_code_rejected(self):
        with pytest.raises(ConstraintViolationError, match="'WH1' already exists"):
            AddWarehouseHandler(_setup()).handle(code="WH1", name="Other")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Warehouse name is required"):
            AddWarehouseHandler(FakeUnitOfWork()).handle(code="X", name="")

    def test_list_includes_locations(self):
        [warehouse] = ListWarehousesHandler(_setup()).handle()
        assert warehouse.code == "WH1"
        assert [loc.code for loc in warehouse.locations] == ["STOCK"]


class TestLocations:

    def test_default_type_is_internal(self):
        [location] = ListLocationsHandler(_setup()).handle()
        assert location.type == LocationType.INTERNAL

    def test_unknown_warehouse(self):
        with pytest.raises(EntityNotFoundError, match="Warehouse #5 not found"):
            AddLocationHandler(_setup()).handle(warehouse_id=5, code="X", name="X")

    def test_duplicate_code_in_warehouse_rejected(self):
        with pytest.raises(ConstraintViolationError, match="'STOCK' already exists"):
            AddLocationHandler(_setup()).handle(warehouse_id=1, code="stock", name="Again")

    def test_same_code_in_other_warehouse_accepted(self):
        uow = _setup()
        AddWarehouseHandler(uow).handle(code="wh2", name="South")
        location = AddLocationHandler(uow).handle(
            warehouse_id=2, code="stock", name="Stock", type=LocationType.SCRAP
        )
        assert location.id == 2
        assert [loc.id for loc in ListLocationsHandler(uow).handle(warehouse_id=2)] == [2]
