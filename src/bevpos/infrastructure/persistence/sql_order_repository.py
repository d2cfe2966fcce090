"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bevpos.domain.exceptions import ConflictError, EntityNotFoundError
from bevpos.domain.model.order import (
    CustomerRef,
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
)
from bevpos.domain.model.value_objects import Money, Quantity
from bevpos.domain.repository.order_repository import OrderRepository
from bevpos.infrastructure.persistence.models import (
    OrderItemRow,
    OrderRow,
    from_db_time,
    to_db_time,
)


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def last_sequence(self) -> int:
        return self._session.scalar(select(func.max(OrderRow.sequence))) or 0

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._session.get(OrderRow, order_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def add(self, order: Order) -> None:
        row = OrderRow(id=order.id, sequence=order.sequence, order_number=order.number)
        self._apply(row, order)
        row.placed_at = to_db_time(order.placed_at)
        row.payment_method = order.payment_method.value
        row.customer_id = order.customer.id
        row.customer_name = order.customer.name
        row.customer_phone = order.customer.phone
        row.delivery_address = order.customer.address
        row.total_cents = order.total.cents
        row.items = [
            OrderItemRow(
                position=position,
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity.value,
                unit_price_cents=line.unit_price.cents,
                subtotal_cents=line.subtotal.cents,
            )
            for position, line in enumerate(order.lines)
        ]
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Order number {order.number} is already taken") from exc

    def save(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id)
        if row is None:
            raise EntityNotFoundError(f"Order '{order.id}' not found")
        self._apply(row, order)
        self._session.flush()

    def list_placed_between(
        self,
        start: datetime,
        end: datetime,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        stmt = select(OrderRow).where(
            OrderRow.placed_at >= to_db_time(start),
            OrderRow.placed_at < to_db_time(end),
        )
        if status is not None:
            stmt = stmt.where(OrderRow.status == status.value)
        stmt = stmt.order_by(OrderRow.placed_at, OrderRow.sequence)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def list_recent(self, status: OrderStatus | None = None, limit: int = 50) -> list[Order]:
        stmt = select(OrderRow)
        if status is not None:
            stmt = stmt.where(OrderRow.status == status.value)
        stmt = stmt.order_by(OrderRow.placed_at.desc(), OrderRow.sequence.desc()).limit(limit)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def list_pending_fiado(self) -> list[Order]:
        stmt = (
            select(OrderRow)
            .where(
                OrderRow.payment_method == PaymentMethod.ON_CREDIT.value,
                OrderRow.status == OrderStatus.PENDING.value,
            )
            .order_by(OrderRow.placed_at.desc(), OrderRow.sequence.desc())
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _apply(row: OrderRow, order: Order) -> None:
        """Copy the mutable part of the aggregate onto its row."""
        row.status = order.status.value
        row.paid_at = to_db_time(order.paid_at)
        row.canceled_at = to_db_time(order.canceled_at)
        row.notes = order.notes

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        lines = [
            OrderLine(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=Quantity(item.quantity),
                unit_price=Money.from_cents(item.unit_price_cents),
            )
            for item in row.items
        ]
        return Order(
            id=row.id,
            sequence=row.sequence,
            customer=CustomerRef(
                id=row.customer_id,
                name=row.customer_name,
                phone=row.customer_phone,
                address=row.delivery_address,
            ),
            payment_method=PaymentMethod(row.payment_method),
            lines=lines,
            status=OrderStatus(row.status),
            placed_at=from_db_time(row.placed_at),
            paid_at=from_db_time(row.paid_at),
            canceled_at=from_db_time(row.canceled_at),
            notes=row.notes,
        )
