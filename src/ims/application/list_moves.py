"""Application service: List Moves use case (query).

Browses the move journal newest first.  Results are capped so a
broad filter never returns the whole history.
"""

from __future__ import annotations

from ims.application.dto import MoveDTO, move_to_dto
from ims.domain.exceptions import ValidationError
from ims.domain.model.stock import MoveFilter
from ims.domain.repository.unit_of_work import UnitOfWork

DEFAULT_LIMIT = 100


class ListMovesHandler:

    def __init__(self, uow: UnitOfWork, limit: int = DEFAULT_LIMIT) -> None:
        if limit <= 0:
            raise ValidationError("Move history limit must be positive")
        self._uow = uow
        self._limit = limit

    def handle(self, criteria: MoveFilter | None = None) -> list[MoveDTO]:
        criteria = criteria or MoveFilter()
        if criteria.start and criteria.end and criteria.start > criteria.end:
            raise ValidationError("Start date must not be after end date")

        with self._uow:
            moves = self._uow.moves.list(criteria, self._limit)
        return [move_to_dto(m) for m in moves]
