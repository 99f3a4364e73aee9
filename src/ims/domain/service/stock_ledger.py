"""Domain service: Stock Ledger.

The single entry point for reading and writing ``StockLevel`` rows.
Mutators are only called from inside a validation transaction; none of
them re-check availability, the calling effect does that first.
"""

from __future__ import annotations

from ims.domain.exceptions import InsufficientStockError
from ims.domain.model.stock import StockLevel
from ims.domain.repository.stock_repository import StockLevelRepository


class StockLedger:

    def __init__(self, stock_repo: StockLevelRepository) -> None:
        self._stock_repo = stock_repo

    def get_level(
        self, product_id: int, location_id: int, lock: bool = False
    ) -> StockLevel | None:
        return self._stock_repo.get(product_id, location_id, for_update=lock)

    def available(self, product_id: int, location_id: int, lock: bool = False) -> int:
        level = self.get_level(product_id, location_id, lock=lock)
        return level.available if level is not None else 0

    def on_hand(self, product_id: int, location_id: int) -> int:
        level = self.get_level(product_id, location_id)
        return level.quantity if level is not None else 0

    def apply_delta(
        self,
        product_id: int,
        location_id: int,
        quantity_delta: int,
        available_delta: int,
    ) -> StockLevel:
        """Add deltas to a row, creating it for a first stock increase."""
        level = self._stock_repo.get(product_id, location_id, for_update=True)
        if level is None:
            if quantity_delta <= 0:
                raise InsufficientStockError(
                    product_id=product_id,
                    location_id=location_id,
                    requested=-quantity_delta,
                    available=0,
                )
            level = StockLevel.opening(product_id, location_id, quantity_delta)
        else:
            level.apply_delta(quantity_delta, available_delta)
        self._stock_repo.save(level)
        return level

    def set_counted(self, product_id: int, location_id: int, counted_qty: int) -> StockLevel:
        """Overwrite on-hand quantity with a physical count."""
        level = self._stock_repo.get(product_id, location_id, for_update=True)
        if level is None:
            level = StockLevel(product_id=product_id, location_id=location_id)
        level.set_counted(counted_qty)
        self._stock_repo.save(level)
        return level
