"""Application service: Current Cash Session use case (query).

Returns today's latest session with live totals, without writing them.
"""

from __future__ import annotations

import logging

from bevpos.application.dto import CashSessionDTO, to_cash_session_dto
from bevpos.domain.exceptions import SchemaMissingError
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.repository.unit_of_work import UnitOfWork
from bevpos.domain.service.sales_summary_service import SalesSummaryService

logger = logging.getLogger(__name__)


class CurrentCashSessionHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(self) -> CashSessionDTO | None:
        try:
            with self._uow as uow:
                session = uow.cash_sessions.get_latest_for_day(self._calendar.today())
                if session is None:
                    return None
                if session.is_open:
                    sales = SalesSummaryService(uow.orders, self._calendar).for_day(
                        session.business_day
                    )
                    session.record_totals(sales.revenue, sales.paid_count)
        except SchemaMissingError as exc:
            logger.warning("No cash sessions yet: %s", exc)
            return None
        return to_cash_session_dto(session)
