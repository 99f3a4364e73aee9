"""Application service: Validate Document use case.

Runs the validation transaction for one document: lock the document,
re-check stock, write the ledger and the moves, commit.  Any failure
leaves both the document and the ledger exactly as they were.
"""

from __future__ import annotations

import logging

from ims.application.dto import DocumentDTO, document_to_dto
from ims.domain.exceptions import DomainException, EntityNotFoundError
from ims.domain.model.document import DocumentType
from ims.domain.model.value_objects import Actor
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.domain.service.move_recorder import MoveRecorder
from ims.domain.service.stock_ledger import StockLedger
from ims.domain.service.stock_validation_service import StockValidationService

logger = logging.getLogger(__name__)


class ValidateDocumentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        document_type: DocumentType,
        document_id: int,
        actor: Actor,
    ) -> DocumentDTO:
        try:
            with self._uow:
                document = self._uow.documents.get(
                    document_type, document_id, for_update=True
                )
                if document is None:
                    raise EntityNotFoundError(
                        f"{document_type.label.capitalize()} #{document_id} not found"
                    )

                labels = {}
                for product_id in document.product_ids():
                    product = self._uow.products.get_by_id(product_id)
                    if product is not None:
                        labels[product_id] = product.label

                svc = StockValidationService(
                    StockLedger(self._uow.stock), MoveRecorder(self._uow.moves)
                )
                moves = svc.validate(document, actor, labels=labels)

                self._uow.documents.save(document)
                self._uow.commit()
        except DomainException as exc:
            logger.warning(
                "Validation of %s #%s rejected: %s", document_type.label, document_id, exc
            )
            raise

        logger.info(
            "Validated %s %s by user #%s: %d move(s) recorded",
            document_type.label, document.reference, actor.id, len(moves),
        )
        return document_to_dto(document)
