"""Application service: Daily Report use case (query).

Aggregates the paid orders of one business day and rates the day.
Read-only and deterministic: the same data always yields the same
report.
"""

from __future__ import annotations

import logging
from datetime import date

from bevpos.application.dto import CashRegisterSummaryDTO, DailyReportDTO, iso
from bevpos.domain.exceptions import SchemaMissingError
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.model.cash_session import CashSession
from bevpos.domain.model.report import RegisterState, classify_day
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.unit_of_work import UnitOfWork
from bevpos.domain.service.sales_summary_service import DaySales, SalesSummaryService

logger = logging.getLogger(__name__)


class GetDailyReportHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(self, day: date | None = None) -> DailyReportDTO:
        day = day or self._calendar.today()
        try:
            with self._uow as uow:
                session = uow.cash_sessions.get_latest_for_day(day)
                sales = SalesSummaryService(uow.orders, self._calendar).for_day(day)
        except SchemaMissingError as exc:
            logger.warning("Daily report on a fresh install: %s", exc)
            session, sales = None, DaySales(day=day, orders=[])

        logger.debug("Daily report for %s: %d orders", day, len(sales.orders))
        return self._build(day, session, sales)

    @staticmethod
    def _build(day: date, session: CashSession | None, sales: DaySales) -> DailyReportDTO:
        if session is None:
            state = RegisterState.NEVER_OPENED
        elif session.is_open:
            state = RegisterState.OPEN
        else:
            state = RegisterState.CLOSED

        revenue = sales.revenue
        status, message = classify_day(revenue, state, sales.paid_count)

        top = sales.top_product()
        top_product = f"{top[0]} ({top[1]} units)" if top else ""

        initial = session.opening_float if session else Money.zero()
        if session is not None and not session.is_open:
            final = session.current_balance
        else:
            final = initial + revenue

        return DailyReportDTO(
            date=day.isoformat(),
            revenue=revenue.plain(),
            order_count=sales.paid_count,
            total_orders=len(sales.orders),
            average_ticket=sales.average_ticket.plain(),
            top_product=top_product,
            status=status.value,
            message=message,
            cash_register=CashRegisterSummaryDTO(
                opened=session is not None,
                closed=session is not None and not session.is_open,
                initial_amount=initial.plain(),
                final_amount=final.plain(),
                open_time=iso(session.opened_at) if session else None,
                close_time=iso(session.closed_at) if session else None,
            ),
        )
