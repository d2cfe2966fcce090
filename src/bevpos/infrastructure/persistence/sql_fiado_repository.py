"""SQLAlchemy-backed implementation of FiadoReceiptRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from bevpos.domain.exceptions import EntityNotFoundError
from bevpos.domain.model.fiado import FiadoReceipt
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.fiado_repository import FiadoReceiptRepository
from bevpos.infrastructure.persistence.models import FiadoReceiptRow, from_db_time, to_db_time


class SqlFiadoReceiptRepository(FiadoReceiptRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- FiadoReceiptRepository interface -------------------------------------

    def get_by_id(self, receipt_id: str) -> FiadoReceipt | None:
        row = self._session.get(FiadoReceiptRow, receipt_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def add(self, receipt: FiadoReceipt) -> None:
        row = FiadoReceiptRow(id=receipt.id)
        self._apply(row, receipt)
        self._session.add(row)
        self._session.flush()

    def save(self, receipt: FiadoReceipt) -> None:
        row = self._session.get(FiadoReceiptRow, receipt.id)
        if row is None:
            raise EntityNotFoundError(f"Fiado receipt '{receipt.id}' not found")
        self._apply(row, receipt)
        self._session.flush()

    def delete(self, receipt_id: str) -> None:
        row = self._session.get(FiadoReceiptRow, receipt_id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    def list_unpaid(self) -> list[FiadoReceipt]:
        stmt = (
            select(FiadoReceiptRow)
            .where(FiadoReceiptRow.paid.is_(False))
            .order_by(FiadoReceiptRow.created_at.desc())
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _apply(row: FiadoReceiptRow, receipt: FiadoReceipt) -> None:
        row.customer_name = receipt.customer_name
        row.phone = receipt.phone
        row.total_cents = receipt.total.cents
        row.due_date = receipt.due_date
        row.paid = receipt.paid
        row.notes = receipt.notes
        row.created_at = to_db_time(receipt.created_at)
        row.paid_at = to_db_time(receipt.paid_at)

    @staticmethod
    def _to_domain(row: FiadoReceiptRow) -> FiadoReceipt:
        return FiadoReceipt(
            id=row.id,
            customer_name=row.customer_name,
            total=Money.from_cents(row.total_cents),
            created_at=from_db_time(row.created_at),
            due_date=row.due_date,
            phone=row.phone,
            notes=row.notes,
            paid=bool(row.paid),
            paid_at=from_db_time(row.paid_at),
        )
