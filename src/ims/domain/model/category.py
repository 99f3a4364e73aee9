"""Product categories.

A flat grouping for the catalog. Products point at a category by id;
stock logic never looks at it.
"""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.exceptions import ValidationError


@dataclass
class Category:

    id: int | None
    name: str
    description: str | None = None

    @staticmethod
    def create(name: str, description: str | None = None) -> Category:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        return Category(id=None, name=name.strip(), description=description)
