"""Integration tests for move history and document queries."""

from datetime import datetime, timedelta, timezone

import pytest

from ims.application.create_document import CreateDocumentHandler
from ims.application.dto import DocumentHeader, LineSpec
from ims.application.list_moves import ListMovesHandler
from ims.application.show_document import ListDocumentsHandler, ShowDocumentHandler
from ims.application.validate_document import ValidateDocumentHandler
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.document import DocumentStatus, DocumentType
from ims.domain.model.product import Product
from ims.domain.model.stock import MoveFilter, MoveType
from ims.domain.model.value_objects import Actor
from ims.domain.model.warehouse import Location
from tests.fakes import FakeUnitOfWork

ACTOR = Actor(1)


def _setup() -> FakeUnitOfWork:
    """Receive 10 widgets and 4 gadgets on shelf A, then ship 3 widgets."""
    uow = FakeUnitOfWork(
        products=[Product.create(sku="W-1", name="Widget"), Product.create(sku="G-1", name="Gadget")],
        locations=[
            Location.create(warehouse_id=1, code="A", name="Shelf A"),
            Location.create(warehouse_id=1, code="B", name="Shelf B"),
        ],
    )
    create = CreateDocumentHandler(uow)
    validate = ValidateDocumentHandler(uow)
    receipt = create.handle(
        DocumentType.RECEIPT, DocumentHeader(location_id=1),
        [LineSpec(1, quantity=10), LineSpec(2, quantity=4)], ACTOR,
    )
    validate.handle(DocumentType.RECEIPT, receipt.id, ACTOR)
    delivery = create.handle(
        DocumentType.DELIVERY, DocumentHeader(location_id=1), [LineSpec(1, quantity=3)], ACTOR
    )
    validate.handle(DocumentType.DELIVERY, delivery.id, ACTOR)
    create.handle(DocumentType.RECEIPT, DocumentHeader(location_id=2), [LineSpec(2, quantity=1)], ACTOR)
    return uow


class TestListMoves:

    def test_newest_first(self):
        moves = ListMovesHandler(_setup()).handle()
        assert [m.move_type for m in moves] == ["DELIVERY", "RECEIPT", "RECEIPT"]

    def test_filter_by_product(self):
        moves = ListMovesHandler(_setup()).handle(MoveFilter(product_id=2))
        assert [(m.product_id, m.quantity) for m in moves] == [(2, 4)]

    def test_filter_by_type(self):
        moves = ListMovesHandler(_setup()).handle(MoveFilter(move_type=MoveType.DELIVERY))
        assert len(moves) == 1
        assert moves[0].from_location_id == 1

    def test_filter_by_location_without_moves(self):
        assert ListMovesHandler(_setup()).handle(MoveFilter(location_id=2)) == []

    def test_date_window(self):
        uow = _setup()
        future = datetime.now(timezone.utc) + timedelta(days=1)
        assert ListMovesHandler(uow).handle(MoveFilter(start=future)) == []

    def test_limit(self):
        assert len(ListMovesHandler(_setup(), limit=2).handle()) == 2

    def test_inverted_window_rejected(self):
        now = datetime.now(timezone.utc)
        with pytest.raises(ValidationError, match="Start date must not be after end date"):
            ListMovesHandler(_setup()).handle(MoveFilter(start=now, end=now - timedelta(days=1)))

    def test_non_positive_limit_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            ListMovesHandler(FakeUnitOfWork(), limit=0)


class TestDocumentQueries:

    def test_show_document(self):
        dto = ShowDocumentHandler(_setup()).handle(DocumentType.DELIVERY, 2)
        assert dto.status == "DONE"
        assert dto.lines[0].done_qty == 3

    def test_show_unknown_document(self):
        with pytest.raises(EntityNotFoundError, match="Transfer #1 not found"):
            ShowDocumentHandler(_setup()).handle(DocumentType.TRANSFER, 1)

    def test_list_filters_by_status(self):
        handler = ListDocumentsHandler(_setup())
        assert len(handler.handle(DocumentType.RECEIPT)) == 2
        drafts = handler.handle(DocumentType.RECEIPT, status=DocumentStatus.DRAFT)
        assert [d.location_id for d in drafts] == [2]

    def test_list_filters_by_location(self):
        handler = ListDocumentsHandler(_setup())
        assert len(handler.handle(DocumentType.RECEIPT, location_id=1)) == 1
        assert handler.handle(DocumentType.DELIVERY, location_id=2) == []
