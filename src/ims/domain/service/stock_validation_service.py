"""Domain service: Stock Validation.

Commits a pending document's intended effect to the stock ledger.
This is the only code path that writes ``StockLevel`` rows or
produces ``StockMove`` records.

The two-phase approach (check-then-mutate) means a failed availability
check leaves no write behind.  The caller runs ``validate`` inside a
unit of work so a failure during the mutate phase is rolled back too.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping

from ims.domain.model.document import DocumentAction, OperationDocument
from ims.domain.model.stock import StockMove
from ims.domain.model.value_objects import Actor
from ims.domain.service.move_recorder import MoveRecorder
from ims.domain.service.stock_effects import effect_for
from ims.domain.service.stock_ledger import StockLedger


class StockValidationService:

    def __init__(self, ledger: StockLedger, recorder: MoveRecorder) -> None:
        self._ledger = ledger
        self._recorder = recorder

    def validate(
        self,
        document: OperationDocument,
        actor: Actor,
        when: datetime | None = None,
        labels: Mapping[int, str] | None = None,
    ) -> list[StockMove]:
        """Validate *document* and return the moves it produced.

        Steps:
          1. Status check: only pending documents can be validated.
          2. Re-check availability against live, locked stock rows.
          3. Mark the document DONE.
          4. Apply the stock effect and record moves.
        """
        document.ensure_can(DocumentAction.VALIDATE)

        effect = effect_for(document.document_type)
        effect.recheck(self._ledger, document, labels)

        document.mark_validated(when or datetime.now(timezone.utc))
        return effect.apply(self._ledger, self._recorder, document, actor)
