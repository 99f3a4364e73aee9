"""Integration tests for the product catalog use cases."""

import pytest

from ims.application.add_product import AddProductHandler
from ims.application.show_stock import ListProductsHandler, ShowProductStockHandler
from ims.application.update_product import DeactivateProductHandler, UpdateProductHandler
from ims.domain.exceptions import ConstraintViolationError, EntityNotFoundError, ValidationError
from ims.domain.model.stock import StockLevel
from ims.domain.model.warehouse import Location, Warehouse
from tests.fakes import FakeUnitOfWork


def _setup() -> FakeUnitOfWork:
    uow = FakeUnitOfWork(
        warehouses=[Warehouse.create(code="main", name="Main")],
        locations=[
            Location.create(warehouse_id=1, code="A", name="Shelf A"),
            Location.create(warehouse_id=1, code="B", name="Shelf B"),
        ],
    )
    add = AddProductHandler(uow)
    add.handle(sku="W-1", name="Widget", reorder_point=10)
    add.handle(sku="G-1", name="Gadget", reorder_point=5)
    uow.stock.save(StockLevel(1, 1, quantity=8, available=8))
    uow.stock.save(StockLevel(1, 2, quantity=12, available=12))
    return uow


class TestAddProduct:

    def test_adds_product(self):
        uow = FakeUnitOfWork()
        product = AddProductHandler(uow).handle(sku=" S-9 ", name="Sprocket", unit_of_measure="Box")
        assert product.id == 1
        assert product.sku == "S-9"
        assert uow.products.get_by_sku("S-9").unit_of_measure == "Box"

    def test_default_unit(self):
        product = AddProductHandler(FakeUnitOfWork()).handle(sku="S-9", name="Sprocket")
        assert product.unit_of_measure == "Unit"

    def test_duplicate_sku_rejected(self):
        uow = _setup()
        with pytest.raises(ConstraintViolationError, match="SKU 'W-1' already exists"):
            AddProductHandler(uow).handle(sku="W-1", name="Other")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            AddProductHandler(FakeUnitOfWork()).handle(sku="S-9", name="  ")

    def test_negative_reorder_point_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            AddProductHandler(FakeUnitOfWork()).handle(sku="S-9", name="Sprocket", reorder_point=-1)


class TestUpdateProduct:

    def test_updates_given_fields_only(self):
        uow = _setup()
        UpdateProductHandler(uow).handle(1, name="Widget XL")
        product = uow.products.get_by_id(1)
        assert product.name == "Widget XL"
        assert product.reorder_point == 10
        assert product.sku == "W-1"

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError, match="Product #9 not found"):
            UpdateProductHandler(_setup()).handle(9, name="x")

    def test_deactivate_hides_from_catalog(self):
        uow = _setup()
        DeactivateProductHandler(uow).handle(2)
        assert [p.sku for p in ListProductsHandler(uow).handle()] == ["W-1"]
        assert uow.products.get_by_id(2).is_active is False


class TestStockQueries:

    def test_totals_over_locations(self):
        products = {p.sku: p for p in ListProductsHandler(_setup()).handle()}
        assert products["W-1"].total_stock == 20
        assert products["G-1"].total_stock == 0
        assert products["G-1"].is_out_of_stock

    def test_low_stock_filter(self):
        low = ListProductsHandler(_setup()).handle(low_stock_only=True)
        assert [p.sku for p in low] == ["G-1"]

    def test_search(self):
        found = ListProductsHandler(_setup()).handle(search="gad")
        assert [p.sku for p in found] == ["G-1"]

    def test_stock_per_location(self):
        levels = ShowProductStockHandler(_setup()).handle(1)
        assert [(lvl.location_name, lvl.quantity) for lvl in levels] == [("Shelf B", 12), ("Shelf A", 8)]
        assert levels[0].warehouse_code == "MAIN"

    def test_stock_of_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            ShowProductStockHandler(_setup()).handle(99)
