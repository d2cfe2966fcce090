"""Table definitions.

Money columns hold integer centavos.  Timestamps are naive UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from bevpos.infrastructure.persistence.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_db_time(moment: datetime | None) -> datetime | None:
    if moment is None:
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def from_db_time(moment: datetime | None) -> datetime | None:
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class ProductRow(Base):
    """
    Beverage catalog with current stock.
    """

    __tablename__ = "products"
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)

    id = Column(String(32), primary_key=True)
    name = Column(String(200), nullable=False, index=True)
    category = Column(String(100), nullable=True)
    price_cents = Column(Integer, nullable=False, default=0)
    cost_cents = Column(Integer, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    low_stock_threshold = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class OrderRow(Base):
    """
    Sale header.  ``sequence`` and ``order_number`` are unique so two
    concurrent sales can never share a number.
    """

    __tablename__ = "orders"

    id = Column(String(32), primary_key=True)
    sequence = Column(Integer, nullable=False, unique=True)
    order_number = Column(String(20), nullable=False, unique=True)
    customer_id = Column(String(64), nullable=True)
    customer_name = Column(String(200), nullable=True)
    customer_phone = Column(String(40), nullable=True)
    delivery_address = Column(String(255), nullable=True)
    payment_method = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, index=True)  # pending | paid | canceled
    total_cents = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)
    placed_at = Column(DateTime, nullable=False, index=True)
    paid_at = Column(DateTime, nullable=True)
    canceled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    items = relationship(
        "OrderItemRow",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemRow.position",
        lazy="selectin",
    )


class OrderItemRow(Base):
    """
    Order lines with the price captured at sale time.
    """

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(32), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    product_id = Column(String(32), nullable=False)
    product_name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price_cents = Column(Integer, nullable=False)
    subtotal_cents = Column(Integer, nullable=False)

    order = relationship("OrderRow", back_populates="items")


class CashSessionRow(Base):
    """
    Cash register sessions.  ``open_day`` carries the business day while the
    session is open and is cleared on close, so its unique constraint allows
    at most one open session per day.
    """

    __tablename__ = "cash_sessions"

    id = Column(String(32), primary_key=True)
    business_day = Column(Date, nullable=False, index=True)
    open_day = Column(Date, nullable=True, unique=True)
    status = Column(String(20), nullable=False, default="open")  # open | closed
    opened_at = Column(DateTime, nullable=False)
    closed_at = Column(DateTime, nullable=True)
    opening_float_cents = Column(Integer, nullable=False, default=0)
    accumulated_sales_cents = Column(Integer, nullable=False, default=0)
    order_count = Column(Integer, nullable=False, default=0)


class LedgerEntryRow(Base):
    """
    Cash book.  A payment links at most one entry to its order or receipt.
    """

    __tablename__ = "ledger_entries"

    id = Column(String(32), primary_key=True)
    direction = Column(String(10), nullable=False)  # in | out
    description = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    amount_cents = Column(Integer, nullable=False)
    payment_method = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)
    order_id = Column(String(32), nullable=True, unique=True)
    fiado_receipt_id = Column(String(32), nullable=True, unique=True)


class FiadoReceiptRow(Base):
    """
    On-credit IOUs recorded outside the order flow.
    """

    __tablename__ = "fiado_receipts"

    id = Column(String(32), primary_key=True)
    customer_name = Column(String(200), nullable=False)
    phone = Column(String(40), nullable=True)
    total_cents = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=True)
    paid = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False)
    paid_at = Column(DateTime, nullable=True)
