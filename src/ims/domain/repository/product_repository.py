"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. The SQLAlchemy implementation lives in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return a product by its exact SKU, or None if not found."""

    @abstractmethod
    def list_all(
        self,
        search: str | None = None,
        active_only: bool = True,
        category_id: int | None = None,
    ) -> list[Product]:
        """Return catalog products, optionally matching *search* in name or
        SKU and restricted to one category."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product. Assigns ``id`` to new ones."""
