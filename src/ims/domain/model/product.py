"""Product aggregate.

Products live independently of stock documents. Lines reference them
by id; the SKU is the business key and never changes once assigned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ims.domain.exceptions import ValidationError

DEFAULT_UNIT = "Unit"


@dataclass
class Product:
    """A product in the catalog.

    Deleting a product only clears ``is_active`` so historical moves
    keep a valid reference.
    """

    id: int | None
    sku: str
    name: str
    description: str | None = None
    unit_of_measure: str = DEFAULT_UNIT
    reorder_point: int = 0
    optimal_stock: int = 0
    category_id: int | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        sku: str,
        name: str,
        description: str | None = None,
        unit_of_measure: str | None = None,
        reorder_point: int = 0,
        optimal_stock: int = 0,
        category_id: int | None = None,
    ) -> Product:
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")
        product = Product(id=None, sku=sku.strip(), name="")
        product.update(
            name=name,
            description=description,
            unit_of_measure=unit_of_measure or DEFAULT_UNIT,
            reorder_point=reorder_point,
            optimal_stock=optimal_stock,
            category_id=category_id,
        )
        return product

    def update(
        self,
        name: str | None = None,
        description: str | None = None,
        unit_of_measure: str | None = None,
        reorder_point: int | None = None,
        optimal_stock: int | None = None,
        category_id: int | None = None,
    ) -> None:
        """Change catalog attributes. ``None`` leaves a field untouched."""
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            self.name = name.strip()
        if description is not None:
            self.description = description
        if unit_of_measure is not None:
            if not unit_of_measure.strip():
                raise ValidationError("Unit of measure cannot be blank")
            self.unit_of_measure = unit_of_measure.strip()
        if reorder_point is not None:
            if reorder_point < 0:
                raise ValidationError("Reorder point cannot be negative")
            self.reorder_point = reorder_point
        if optimal_stock is not None:
            if optimal_stock < 0:
                raise ValidationError("Optimal stock cannot be negative")
            self.optimal_stock = optimal_stock
        if category_id is not None:
            self.category_id = category_id
        if not self.name:
            raise ValidationError("Product name is required")

    def deactivate(self) -> None:
        self.is_active = False

    @property
    def label(self) -> str:
        return f"{self.sku} {self.name}"
