"""SQLAlchemy unit of work.

One session per ``with`` block: commit on request, roll back on the way
out, and translate driver errors into the domain taxonomy.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from bevpos.domain.exceptions import ConflictError
from bevpos.domain.repository.unit_of_work import UnitOfWork
from bevpos.infrastructure.persistence.database import translate_error
from bevpos.infrastructure.persistence.sql_cash_session_repository import SqlCashSessionRepository
from bevpos.infrastructure.persistence.sql_fiado_repository import SqlFiadoReceiptRepository
from bevpos.infrastructure.persistence.sql_ledger_repository import SqlLedgerRepository
from bevpos.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from bevpos.infrastructure.persistence.sql_product_repository import SqlProductRepository

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):
    """Not shared between threads; build one per worker."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlProductRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        self.cash_sessions = SqlCashSessionRepository(self._session)
        self.ledger = SqlLedgerRepository(self._session)
        self.fiado_receipts = SqlFiadoReceiptRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()
            self._session = None

        if isinstance(exc, SQLAlchemyError):
            translated = translate_error(exc)
            if translated is not None:
                logger.warning("Database error: %s", translated)
                raise translated from exc

    def commit(self) -> None:
        try:
            self._session.commit()
        except IntegrityError as exc:
            raise ConflictError("The change conflicts with data written concurrently") from exc

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()
