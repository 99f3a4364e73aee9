"""Application services: Show / List Documents use cases (queries)."""

from __future__ import annotations

from ims.application.dto import DocumentDTO, document_to_dto
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.model.document import DocumentStatus, DocumentType
from ims.domain.repository.unit_of_work import UnitOfWork


class ShowDocumentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, document_type: DocumentType, document_id: int) -> DocumentDTO:
        with self._uow:
            document = self._uow.documents.get(document_type, document_id)
        if document is None:
            raise EntityNotFoundError(
                f"{document_type.label.capitalize()} #{document_id} not found"
            )
        return document_to_dto(document)


class ListDocumentsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        document_type: DocumentType,
        status: DocumentStatus | None = None,
        location_id: int | None = None,
    ) -> list[DocumentDTO]:
        """Documents of one type, newest first."""
        with self._uow:
            documents = self._uow.documents.list(
                document_type, status=status, location_id=location_id
            )
        return [document_to_dto(d) for d in documents]
