"""Application services: Update and Deactivate Product use cases."""

from __future__ import annotations

from ims.domain.exceptions import EntityNotFoundError
from ims.domain.model.product import Product
from ims.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: int,
        name: str | None = None,
        description: str | None = None,
        unit_of_measure: str | None = None,
        reorder_point: int | None = None,
        optimal_stock: int | None = None,
        category_id: int | None = None,
    ) -> Product:
        """Update catalog attributes of a product.

        The SKU is the business key and cannot be changed here.
        """
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")
            if category_id is not None and self._uow.categories.get_by_id(category_id) is None:
                raise EntityNotFoundError(f"Category #{category_id} not found")

            product.update(
                name=name,
                description=description,
                unit_of_measure=unit_of_measure,
                reorder_point=reorder_point,
                optimal_stock=optimal_stock,
                category_id=category_id,
            )
            self._uow.products.save(product)
            self._uow.commit()
        return product


class DeactivateProductHandler:
    """Soft delete: the product disappears from the catalog, history stays."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> Product:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")
            product.deactivate()
            self._uow.products.save(product)
            self._uow.commit()
        return product
