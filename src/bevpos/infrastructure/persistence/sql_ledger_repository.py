"""SQLAlchemy-backed implementation of LedgerRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bevpos.domain.exceptions import ConflictError
from bevpos.domain.model.ledger import LedgerDirection, LedgerEntry
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.ledger_repository import LedgerRepository
from bevpos.infrastructure.persistence.models import LedgerEntryRow, from_db_time, to_db_time


class SqlLedgerRepository(LedgerRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- LedgerRepository interface -------------------------------------------

    def get_by_id(self, entry_id: str) -> LedgerEntry | None:
        row = self._session.get(LedgerEntryRow, entry_id)
        return self._to_domain(row) if row is not None else None

    def get_for_order(self, order_id: str) -> LedgerEntry | None:
        stmt = select(LedgerEntryRow).where(LedgerEntryRow.order_id == order_id)
        row = self._session.scalars(stmt).first()
        return self._to_domain(row) if row is not None else None

    def get_for_receipt(self, receipt_id: str) -> LedgerEntry | None:
        stmt = select(LedgerEntryRow).where(LedgerEntryRow.fiado_receipt_id == receipt_id)
        row = self._session.scalars(stmt).first()
        return self._to_domain(row) if row is not None else None

    def add(self, entry: LedgerEntry) -> None:
        self._session.add(self._to_row(entry))
        try:
            self._session.flush()
        except IntegrityError as exc:
            raise ConflictError("This payment is already recorded in the ledger") from exc

    def delete(self, entry_id: str) -> None:
        row = self._session.get(LedgerEntryRow, entry_id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    def list_recent(self, limit: int = 100) -> list[LedgerEntry]:
        stmt = (
            select(LedgerEntryRow)
            .order_by(LedgerEntryRow.created_at.desc(), LedgerEntryRow.id)
            .limit(limit)
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(entry: LedgerEntry) -> LedgerEntryRow:
        return LedgerEntryRow(
            id=entry.id,
            direction=entry.direction.value,
            description=entry.description,
            category=entry.category,
            amount_cents=entry.amount.cents,
            payment_method=entry.payment_method,
            created_at=to_db_time(entry.created_at),
            order_id=entry.order_id,
            fiado_receipt_id=entry.fiado_receipt_id,
        )

    @staticmethod
    def _to_domain(row: LedgerEntryRow) -> LedgerEntry:
        return LedgerEntry(
            id=row.id,
            direction=LedgerDirection(row.direction),
            description=row.description,
            category=row.category,
            amount=Money.from_cents(row.amount_cents),
            payment_method=row.payment_method,
            created_at=from_db_time(row.created_at),
            order_id=row.order_id,
            fiado_receipt_id=row.fiado_receipt_id,
        )
