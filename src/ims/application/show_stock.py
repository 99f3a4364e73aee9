"""Application services: product catalog and stock queries."""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class ProductStockDTO:
    id: int
    sku: str
    name: str
    unit_of_measure: str
    reorder_point: int
    total_stock: int
    total_available: int
    is_low_stock: bool
    is_out_of_stock: bool
    category_id: int | None = None


@dataclass(frozen=True)
class StockLevelDTO:
    location_id: int
    location_name: str
    warehouse_code: str
    quantity: int
    reserved: int
    available: int


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        search: str | None = None,
        low_stock_only: bool = False,
        category_id: int | None = None,
    ) -> list[ProductStockDTO]:
        """Active products with their stock summed over every location.

        A product is low on stock when its total is at or below its
        reorder point.
        """
        with self._uow:
            products = self._uow.products.list_all(search=search, category_id=category_id)
            totals: dict[int, tuple[int, int]] = {}
            for level in self._uow.stock.list_all():
                qty, avail = totals.get(level.product_id, (0, 0))
                totals[level.product_id] = (qty + level.quantity, avail + level.available)

        result = []
        for p in products:
            total, available = totals.get(p.id, (0, 0))  # type: ignore[arg-type]
            dto = ProductStockDTO(
                id=p.id,  # type: ignore[arg-type]
                sku=p.sku,
                name=p.name,
                unit_of_measure=p.unit_of_measure,
                reorder_point=p.reorder_point,
                total_stock=total,
                total_available=available,
                is_low_stock=total <= p.reorder_point,
                is_out_of_stock=total == 0,
                category_id=p.category_id,
            )
            if low_stock_only and not dto.is_low_stock:
                continue
            result.append(dto)
        return result


class ShowProductStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> list[StockLevelDTO]:
        """Stock of one product per location, largest quantity first."""
        with self._uow:
            if self._uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")

            lines = []
            for level in self._uow.stock.list_for_product(product_id):
                location = self._uow.locations.get_by_id(level.location_id)
                warehouse = (
                    self._uow.warehouses.get_by_id(location.warehouse_id)
                    if location is not None
                    else None
                )
                lines.append(
                    StockLevelDTO(
                        location_id=level.location_id,
                        location_name=location.name if location else "?",
                        warehouse_code=warehouse.code if warehouse else "?",
                        quantity=level.quantity,
                        reserved=level.reserved,
                        available=level.available,
                    )
                )
        return lines
