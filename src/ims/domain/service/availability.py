"""Stock availability checks for outbound documents.

The same check runs twice: once without locks when a delivery or
transfer is created (advisory, may go stale) and once with row locks
inside the validation transaction (authoritative).
"""

from __future__ import annotations

from typing import Iterable, Mapping

from ims.domain.exceptions import InsufficientStockError
from ims.domain.service.stock_ledger import StockLedger


def required_quantities(lines: Iterable) -> dict[int, int]:
    """Total quantity per product; a product may appear on several lines."""
    totals: dict[int, int] = {}
    for line in lines:
        totals[line.product_id] = totals.get(line.product_id, 0) + line.quantity.value
    return totals


def ensure_available(
    ledger: StockLedger,
    location_id: int,
    requirements: Mapping[int, int],
    lock: bool = False,
    labels: Mapping[int, str] | None = None,
) -> None:
    """Raise InsufficientStockError for the first product that falls short."""
    labels = labels or {}
    # Stable order so concurrent validations lock rows in the same sequence.
    for product_id in sorted(requirements):
        needed = requirements[product_id]
        available = ledger.available(product_id, location_id, lock=lock)
        if available < needed:
            raise InsufficientStockError(
                product_id=product_id,
                location_id=location_id,
                requested=needed,
                available=available,
                label=labels.get(product_id),
            )
