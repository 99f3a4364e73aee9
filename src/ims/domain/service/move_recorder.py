"""Domain service: Move Recorder.

Appends one immutable ``StockMove`` per completed stock change.
Storage errors are not caught here; they abort the enclosing
transaction.
"""

from __future__ import annotations

from ims.domain.model.document import OperationDocument
from ims.domain.model.stock import MoveType, StockMove
from ims.domain.repository.stock_repository import StockMoveRepository


class MoveRecorder:

    def __init__(self, move_repo: StockMoveRepository) -> None:
        self._move_repo = move_repo

    def record(
        self,
        move_type: MoveType,
        document: OperationDocument,
        product_id: int,
        quantity: int,
        user_id: int,
        from_location_id: int | None = None,
        to_location_id: int | None = None,
    ) -> StockMove:
        move = StockMove(
            reference=document.reference,
            product_id=product_id,
            quantity=quantity,
            move_type=move_type,
            user_id=user_id,
            document_type=document.document_type,
            document_id=document.id,  # type: ignore[arg-type]
            from_location_id=from_location_id,
            to_location_id=to_location_id,
        )
        return self._move_repo.add(move)
