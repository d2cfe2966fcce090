"""SQLAlchemy-backed implementation of CashSessionRepository."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bevpos.domain.exceptions import ConflictError, EntityNotFoundError
from bevpos.domain.model.cash_session import CashSession, CashSessionStatus
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.cash_session_repository import CashSessionRepository
from bevpos.infrastructure.persistence.models import CashSessionRow, from_db_time, to_db_time


class SqlCashSessionRepository(CashSessionRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CashSessionRepository interface --------------------------------------

    def get_open(self) -> CashSession | None:
        stmt = (
            select(CashSessionRow)
            .where(CashSessionRow.status == CashSessionStatus.OPEN.value)
            .order_by(CashSessionRow.opened_at.desc())
            .limit(1)
        )
        return self._first(stmt)

    def get_open_for_day(self, business_day: date) -> CashSession | None:
        stmt = (
            select(CashSessionRow)
            .where(
                CashSessionRow.business_day == business_day,
                CashSessionRow.status == CashSessionStatus.OPEN.value,
            )
            .limit(1)
        )
        return self._first(stmt)

    def get_latest_for_day(self, business_day: date) -> CashSession | None:
        stmt = (
            select(CashSessionRow)
            .where(CashSessionRow.business_day == business_day)
            .order_by(CashSessionRow.opened_at.desc())
            .limit(1)
        )
        return self._first(stmt)

    def add(self, session: CashSession) -> None:
        row = CashSessionRow(id=session.id, business_day=session.business_day)
        self._apply(row, session)
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            raise ConflictError("A cash register is already open today") from exc

    def save(self, session: CashSession) -> None:
        row = self._session.get(CashSessionRow, session.id)
        if row is None:
            raise EntityNotFoundError(f"Cash session '{session.id}' not found")
        self._apply(row, session)
        self._session.flush()

    # --- Serialization --------------------------------------------------------

    def _first(self, stmt) -> CashSession | None:
        row = self._session.scalars(stmt.execution_options(populate_existing=True)).first()
        return self._to_domain(row) if row is not None else None

    @staticmethod
    def _apply(row: CashSessionRow, session: CashSession) -> None:
        row.status = session.status.value
        row.open_day = session.business_day if session.is_open else None
        row.opened_at = to_db_time(session.opened_at)
        row.closed_at = to_db_time(session.closed_at)
        row.opening_float_cents = session.opening_float.cents
        row.accumulated_sales_cents = session.accumulated_sales.cents
        row.order_count = session.order_count

    @staticmethod
    def _to_domain(row: CashSessionRow) -> CashSession:
        return CashSession(
            id=row.id,
            business_day=row.business_day,
            opened_at=from_db_time(row.opened_at),
            opening_float=Money.from_cents(row.opening_float_cents),
            status=CashSessionStatus(row.status),
            closed_at=from_db_time(row.closed_at),
            accumulated_sales=Money.from_cents(row.accumulated_sales_cents),
            order_count=row.order_count,
        )
