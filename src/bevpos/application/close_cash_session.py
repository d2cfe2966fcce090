"""Application service: Close Cash Session use case.

Totals are recomputed from the paid orders of the session's business
day at closing time; nothing is accumulated incrementally.
"""

from __future__ import annotations

import logging

from bevpos.application.dto import CashSessionDTO, to_cash_session_dto
from bevpos.domain.exceptions import EntityNotFoundError
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.repository.unit_of_work import UnitOfWork
from bevpos.domain.service.sales_summary_service import SalesSummaryService

logger = logging.getLogger(__name__)


class CloseCashSessionHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(self) -> CashSessionDTO:
        with self._uow as uow:
            session = uow.cash_sessions.get_open()
            if session is None:
                raise EntityNotFoundError("No open cash register found")

            sales = SalesSummaryService(uow.orders, self._calendar).for_day(session.business_day)
            session.close(sales.revenue, sales.paid_count, self._calendar.now())
            uow.cash_sessions.save(session)
            uow.commit()

        logger.info(
            "Closed cash session %s: %d paid orders, %s, final balance %s",
            session.id,
            session.order_count,
            session.accumulated_sales,
            session.current_balance,
        )
        return to_cash_session_dto(
            session,
            message=(
                f"Cash register closed: {session.order_count} orders, "
                f"final balance {session.current_balance}"
            ),
        )
