"""Application service: Cancel Order use case.

Puts every unit sold back into stock.  If the order had been paid, its
ledger entry is removed as well so the cash book only ever reflects
orders that are actually paid.
"""

from __future__ import annotations

import logging

from bevpos.application.dto import OrderDTO, to_order_dto
from bevpos.domain.exceptions import EntityNotFoundError
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.model.order import OrderStatus
from bevpos.domain.repository.unit_of_work import UnitOfWork
from bevpos.domain.service.ledger_posting_service import LedgerPostingService
from bevpos.domain.service.stock_allocation_service import StockAllocationService

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")

            was_paid = order.status == OrderStatus.PAID
            order.cancel(self._calendar.now())

            StockAllocationService(uow.products).release(order.quantities_by_product())
            if was_paid:
                LedgerPostingService(uow.ledger).reverse_order_payment(order)

            uow.orders.save(order)
            uow.commit()

        logger.info("Canceled order %s (was %s)", order.number, "paid" if was_paid else "pending")
        return to_order_dto(order)
