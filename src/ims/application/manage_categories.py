"""Application services: product categories."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from ims.domain.exceptions import ConstraintViolationError
from ims.domain.model.category import Category
from ims.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class CategoryDTO:
    id: int
    name: str
    description: str | None
    product_count: int


class AddCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, description: str | None = None) -> Category:
        category = Category.create(name=name, description=description)
        with self._uow:
            if self._uow.categories.get_by_name(category.name) is not None:
                raise ConstraintViolationError(f"Category '{category.name}' already exists")
            self._uow.categories.save(category)
            self._uow.commit()
        return category


class ListCategoriesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[CategoryDTO]:
        """Categories by name, each with the number of products filed under it.

        Deactivated products still count.
        """
        with self._uow:
            categories = self._uow.categories.list_all()
            counts = Counter(
                p.category_id for p in self._uow.products.list_all(active_only=False)
            )
        return [
            CategoryDTO(
                id=c.id,  # type: ignore[arg-type]
                name=c.name,
                description=c.description,
                product_count=counts.get(c.id, 0),
            )
            for c in categories
        ]
