"""Integration tests for the CancelDocument use case."""

import pytest

from ims.application.cancel_document import CancelDocumentHandler
from ims.application.create_document import CreateDocumentHandler
from ims.application.dto import DocumentHeader, LineSpec
from ims.application.validate_document import ValidateDocumentHandler
from ims.domain.exceptions import EntityNotFoundError, InvalidStateError
from ims.domain.model.document import DocumentStatus, DocumentType
from ims.domain.model.product import Product
from ims.domain.model.stock import StockLevel
from ims.domain.model.value_objects import Actor
from ims.domain.model.warehouse import Location
from tests.fakes import FakeUnitOfWork

ACTOR = Actor(1)


def _setup():
    uow = FakeUnitOfWork(
        products=[Product.create(sku="W-1", name="Widget")],
        locations=[Location.create(warehouse_id=1, code="A", name="Shelf A")],
        stock=[StockLevel(1, 1, quantity=10, available=10)],
    )
    doc = CreateDocumentHandler(uow).handle(
        DocumentType.DELIVERY, DocumentHeader(location_id=1), [LineSpec(1, quantity=4)], ACTOR
    )
    return CancelDocumentHandler(uow), uow, doc.id


class TestCancelDocument:

    def test_cancels_draft(self):
        handler, uow, doc_id = _setup()
        dto = handler.handle(DocumentType.DELIVERY, doc_id)
        assert dto.status == "CANCELLED"
        assert uow.documents.get(DocumentType.DELIVERY, doc_id).status == DocumentStatus.CANCELLED

    def test_never_touches_stock(self):
        handler, uow, doc_id = _setup()
        handler.handle(DocumentType.DELIVERY, doc_id)
        assert uow.stock.get(1, 1).quantity == 10
        assert uow.moves.all() == []

    def test_cancel_twice_is_accepted(self):
        handler, _, doc_id = _setup()
        handler.handle(DocumentType.DELIVERY, doc_id)
        dto = handler.handle(DocumentType.DELIVERY, doc_id)
        assert dto.status == "CANCELLED"

    def test_validated_document_cannot_be_cancelled(self):
        handler, uow, doc_id = _setup()
        ValidateDocumentHandler(uow).handle(DocumentType.DELIVERY, doc_id, ACTOR)

        with pytest.raises(InvalidStateError, match="cannot cancel a validated document"):
            handler.handle(DocumentType.DELIVERY, doc_id)

        assert uow.documents.get(DocumentType.DELIVERY, doc_id).status == DocumentStatus.DONE
        assert uow.stock.get(1, 1).quantity == 6

    def test_unknown_document(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Delivery #42 not found"):
            handler.handle(DocumentType.DELIVERY, 42)
