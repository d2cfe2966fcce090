"""Application service: List Open Fiado use case (query).

Merges unsettled on-credit orders and unpaid fiado receipts into one
list, newest first.
"""

from __future__ import annotations

import logging

from bevpos.application.dto import FiadoItemDTO, fiado_order_to_dto, fiado_receipt_to_dto
from bevpos.domain.exceptions import SchemaMissingError
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ListOpenFiadoHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[FiadoItemDTO]:
        try:
            with self._uow as uow:
                orders = uow.orders.list_pending_fiado()
                receipts = uow.fiado_receipts.list_unpaid()
        except SchemaMissingError as exc:
            logger.warning("Listing fiado on a fresh install: %s", exc)
            return []

        items = [fiado_order_to_dto(o) for o in orders]
        items.extend(fiado_receipt_to_dto(r) for r in receipts)
        items.sort(key=lambda item: item.date, reverse=True)
        return items
