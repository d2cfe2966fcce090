"""Application service: List Ledger use case (query)."""

from __future__ import annotations

import logging

from bevpos.application.dto import LedgerEntryDTO, to_ledger_dto
from bevpos.domain.exceptions import SchemaMissingError
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ListLedgerHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, limit: int = 100) -> list[LedgerEntryDTO]:
        try:
            with self._uow as uow:
                entries = uow.ledger.list_recent(limit=limit)
        except SchemaMissingError as exc:
            logger.warning("Listing ledger on a fresh install: %s", exc)
            return []
        return [to_ledger_dto(e) for e in entries]
