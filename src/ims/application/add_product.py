"""Application service: Add Product use case."""

from __future__ import annotations

from ims.domain.exceptions import ConstraintViolationError, EntityNotFoundError
from ims.domain.model.product import Product
from ims.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        sku: str,
        name: str,
        description: str | None = None,
        unit_of_measure: str | None = None,
        reorder_point: int = 0,
        optimal_stock: int = 0,
        category_id: int | None = None,
    ) -> Product:
        """Add a new product to the catalog. SKUs are unique."""
        product = Product.create(
            sku=sku,
            name=name,
            description=description,
            unit_of_measure=unit_of_measure,
            reorder_point=reorder_point,
            optimal_stock=optimal_stock,
            category_id=category_id,
        )

        with self._uow:
            if category_id is not None and self._uow.categories.get_by_id(category_id) is None:
                raise EntityNotFoundError(f"Category #{category_id} not found")
            if self._uow.products.get_by_sku(product.sku) is not None:
                raise ConstraintViolationError(f"SKU '{product.sku}' already exists")
            self._uow.products.save(product)
            self._uow.commit()
        return product
