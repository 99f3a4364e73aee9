"""Warehouse and Location aggregates.

Locations are the addressable endpoints of every stock mutation. Each
belongs to exactly one warehouse.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ims.domain.exceptions import ValidationError


class LocationType(Enum):
    INTERNAL = "INTERNAL"
    SUPPLIER = "SUPPLIER"
    CUSTOMER = "CUSTOMER"
    PRODUCTION = "PRODUCTION"
    SCRAP = "SCRAP"


def _required(value: str, what: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{what} is required")
    return value.strip()


@dataclass
class Warehouse:

    id: int | None
    code: str
    name: str
    address: str | None = None
    is_active: bool = True

    @staticmethod
    def create(code: str, name: str, address: str | None = None) -> Warehouse:
        return Warehouse(
            id=None,
            code=_required(code, "Warehouse code").upper(),
            name=_required(name, "Warehouse name"),
            address=address,
        )


@dataclass
class Location:
    """A place inside a warehouse where stock can sit.

    ``type`` is an advisory classification; stock logic does not
    consult it.
    """

    id: int | None
    warehouse_id: int
    code: str
    name: str
    type: LocationType = LocationType.INTERNAL
    is_active: bool = True

    @staticmethod
    def create(
        warehouse_id: int,
        code: str,
        name: str,
        type: LocationType | None = None,
    ) -> Location:
        return Location(
            id=None,
            warehouse_id=warehouse_id,
            code=_required(code, "Location code").upper(),
            name=_required(name, "Location name"),
            type=type or LocationType.INTERNAL,
        )
