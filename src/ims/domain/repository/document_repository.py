"""Abstract repository for the four operation document types."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.document import DocumentStatus, DocumentType, OperationDocument


class DocumentRepository(ABC):

    @abstractmethod
    def get(
        self,
        document_type: DocumentType,
        document_id: int,
        for_update: bool = False,
    ) -> OperationDocument | None:
        """Return a document of the given type by ID, or None."""

    @abstractmethod
    def get_by_reference(self, reference: str) -> OperationDocument | None:
        """Return the document carrying *reference*, or None."""

    @abstractmethod
    def list(
        self,
        document_type: DocumentType,
        status: DocumentStatus | None = None,
        location_id: int | None = None,
    ) -> list[OperationDocument]:
        """Return documents of one type, newest first.

        ``location_id`` matches any location the document touches.
        """

    @abstractmethod
    def save(self, document: OperationDocument) -> None:
        """Persist a new or updated document with its lines."""
