"""Application service: Record Fiado Receipt use case."""

from __future__ import annotations

import logging
from datetime import date

from bevpos.application.dto import FiadoItemDTO, fiado_receipt_to_dto
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.model.fiado import FiadoReceipt
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RecordFiadoReceiptHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(
        self,
        customer_name: str,
        total: str,
        due_date: date | None = None,
        phone: str | None = None,
        notes: str | None = None,
    ) -> FiadoItemDTO:
        receipt = FiadoReceipt.record(
            customer_name=customer_name,
            total=Money.of(total),
            at=self._calendar.now(),
            due_date=due_date,
            phone=phone,
            notes=notes,
        )
        with self._uow as uow:
            uow.fiado_receipts.add(receipt)
            uow.commit()

        logger.info("Recorded fiado receipt %s for %s (%s)", receipt.id, receipt.customer_name, receipt.total)
        return fiado_receipt_to_dto(receipt)
