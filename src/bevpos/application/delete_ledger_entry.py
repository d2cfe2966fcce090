"""Application service: Delete Ledger Entry use case (manual correction).

Entries booked for an order or fiado receipt belong to that payment and
can only go away through cancellation or un-settlement.
"""

from __future__ import annotations

import logging

from bevpos.application.dto import OperationResult
from bevpos.domain.exceptions import EntityNotFoundError, ValidationError
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteLedgerEntryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, entry_id: str) -> OperationResult:
        with self._uow as uow:
            entry = uow.ledger.get_by_id(entry_id)
            if entry is None:
                raise EntityNotFoundError(f"Ledger entry '{entry_id}' not found")
            if entry.is_linked:
                raise ValidationError(
                    "This entry records a payment; cancel the order or reopen the debt instead"
                )
            uow.ledger.delete(entry_id)
            uow.commit()

        logger.info("Deleted ledger entry %s", entry_id)
        return OperationResult(ok=True, message=f"Ledger entry '{entry.description}' deleted")
