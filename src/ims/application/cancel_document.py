"""Application service: Cancel Document use case.

Cancelling is a pure status change: no stock is written and no move
is recorded.  Validated documents cannot be cancelled; cancelling an
already cancelled document is accepted.
"""

from __future__ import annotations

import logging

from ims.application.dto import DocumentDTO, document_to_dto
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.model.document import DocumentType
from ims.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CancelDocumentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, document_type: DocumentType, document_id: int) -> DocumentDTO:
        with self._uow:
            document = self._uow.documents.get(document_type, document_id, for_update=True)
            if document is None:
                raise EntityNotFoundError(
                    f"{document_type.label.capitalize()} #{document_id} not found"
                )

            document.cancel()
            self._uow.documents.save(document)
            self._uow.commit()

        logger.info("Cancelled %s %s", document_type.label, document.reference)
        return document_to_dto(document)
