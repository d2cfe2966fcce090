"""Application service: Open Cash Session use case."""

from __future__ import annotations

import logging

from bevpos.application.dto import CashSessionDTO, to_cash_session_dto
from bevpos.domain.exceptions import ConflictError
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.model.cash_session import CashSession
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2


class OpenCashSessionHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(self, initial_float: str) -> CashSessionDTO:
        """Open today's register with *initial_float* in the drawer.

        A concurrent open that slips past the check is caught by the
        storage constraint; the retry then sees that session and fails
        with the same ConflictError a sequential caller would get.
        """
        opening_float = Money.of(initial_float)

        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                session = self._open(opening_float)
                break
            except ConflictError:
                if attempt == MAX_ATTEMPTS:
                    raise
                logger.warning("Concurrent cash open detected; re-checking")

        logger.info("Opened cash session %s with %s", session.id, session.opening_float)
        return to_cash_session_dto(session, message=f"Cash register opened with {opening_float}")

    def _open(self, opening_float: Money) -> CashSession:
        with self._uow as uow:
            today = self._calendar.today()
            if uow.cash_sessions.get_open_for_day(today) is not None:
                raise ConflictError("A cash register is already open today")
            stale = uow.cash_sessions.get_open()
            if stale is not None:
                logger.warning(
                    "Cash session %s from %s was never closed; close it to keep its totals",
                    stale.id,
                    stale.business_day.isoformat(),
                )
            session =CashSession.open(today, opening_float, self._calendar.now())
            uow.cash_sessions.add(session)
            uow.commit()
        return session
