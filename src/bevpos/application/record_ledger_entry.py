"""Application service: Record Ledger Entry use case (manual bookkeeping)."""

from __future__ import annotations

import logging

from bevpos.application.dto import LedgerEntryDTO, to_ledger_dto
from bevpos.domain.exceptions import ValidationError
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.model.ledger import LedgerDirection, LedgerEntry
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RecordLedgerEntryHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(
        self,
        direction: str,
        description: str,
        category: str,
        amount: str,
        payment_method: str,
    ) -> LedgerEntryDTO:
        try:
            flow = LedgerDirection((direction or "").strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Direction must be 'in' or 'out', got {direction!r}") from exc

        entry = LedgerEntry.manual(
            direction=flow,
            description=description,
            category=category,
            amount=Money.of(amount),
            payment_method=payment_method,
            at=self._calendar.now(),
        )
        with self._uow as uow:
            uow.ledger.add(entry)
            uow.commit()

        logger.info("Recorded manual ledger entry %s: %s %s", entry.id, flow.value, entry.amount)
        return to_ledger_dto(entry)
