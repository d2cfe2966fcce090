"""Application service: Today's Sales use case (query)."""

from __future__ import annotations

import logging

from bevpos.application.dto import TodaySalesDTO
from bevpos.domain.exceptions import SchemaMissingError
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.model.order import OrderStatus
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class TodaySalesHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(self) -> TodaySalesDTO:
        today = self._calendar.today()
        start, end = self._calendar.day_bounds(today)
        try:
            with self._uow as uow:
                orders = uow.orders.list_placed_between(start, end, status=OrderStatus.PAID)
        except SchemaMissingError as exc:
            logger.warning("Today's sales on a fresh install: %s", exc)
            orders = []

        total = Money.zero()
        for order in orders:
            total = total + order.total

        return TodaySalesDTO(
            date=today.isoformat(),
            total=total.plain(),
            count=len(orders),
            first_order_time=orders[0].placed_at.isoformat() if orders else None,
        )
