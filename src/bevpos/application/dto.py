"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money travels as a
plain decimal string (``"14.70"``) and instants as ISO-8601 strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from bevpos.domain.model.cash_session import CashSession
from bevpos.domain.model.fiado import FiadoReceipt
from bevpos.domain.model.ledger import LedgerEntry
from bevpos.domain.model.order import Order
from bevpos.domain.model.product import Product


# --- Requests -----------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class CustomerSpec:
    """Input: a registered customer id and/or a free-text name."""

    id: str | None = None
    name: str | None = None
    phone: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class PlaceOrderRequest:

    customer: CustomerSpec
    items: list[OrderItemSpec]
    payment_method: str
    notes: str | None = None
    placed_at: datetime | None = None  # set only for retroactive entries


# --- Responses ----------------------------------------------------------------


@dataclass(frozen=True)
class PlaceOrderResult:

    order_id: str
    order_number: str
    total: str
    status: str
    message: str


@dataclass(frozen=True)
class OrderLineDTO:

    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    number: str
    customer_name: str
    payment_method: str
    status: str
    lines: list[OrderLineDTO]
    total: str
    placed_at: str
    paid_at: str | None = None
    canceled_at: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ProductDTO:

    id: str
    name: str
    price: str
    cost_price: str
    stock: int
    low_stock_threshold: int
    low_stock: bool
    category: str | None = None


@dataclass(frozen=True)
class CashSessionDTO:

    session_id: str
    business_day: str
    status: str
    opened_at: str
    opening_float: str
    accumulated_sales: str
    order_count: int
    current_balance: str
    closed_at: str | None = None
    message: str = ""


@dataclass(frozen=True)
class CashRegisterSummaryDTO:

    opened: bool
    closed: bool
    initial_amount: str
    final_amount: str
    open_time: str | None = None
    close_time: str | None = None


@dataclass(frozen=True)
class DailyReportDTO:

    date: str
    revenue: str
    order_count: int
    total_orders: int
    average_ticket: str
    top_product: str
    status: str
    message: str
    cash_register: CashRegisterSummaryDTO


@dataclass(frozen=True)
class TodaySalesDTO:

    date: str
    total: str
    count: int
    first_order_time: str | None = None


@dataclass(frozen=True)
class SettlementResult:

    ok: bool
    id: str
    kind: str  # "order" | "receipt"
    paid: bool
    message: str


@dataclass(frozen=True)
class FiadoItemDTO:
    """Output: one open on-credit debt, either an order or a receipt."""

    id: str
    kind: str
    customer_name: str
    total: str
    date: str
    paid: bool
    phone: str | None = None
    due_date: str | None = None
    reference: str | None = None


@dataclass(frozen=True)
class LedgerEntryDTO:

    id: str
    direction: str
    description: str
    category: str
    amount: str
    payment_method: str
    created_at: str
    order_id: str | None = None
    fiado_receipt_id: str | None = None


@dataclass(frozen=True)
class OperationResult:
    """Output of mutating operations that have nothing else to report."""

    ok: bool
    message: str
    data: dict = field(default_factory=dict)


# --- Mapping ------------------------------------------------------------------


def iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        number=order.number,
        customer_name=order.customer.display_name,
        payment_method=order.payment_method.value,
        status=order.status.value,
        lines=[
            OrderLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity.value,
                unit_price=line.unit_price.plain(),
                subtotal=line.subtotal.plain(),
            )
            for line in order.lines
        ],
        total=order.total.plain(),
        placed_at=order.placed_at.isoformat(),
        paid_at=iso(order.paid_at),
        canceled_at=iso(order.canceled_at),
        notes=order.notes,
    )


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        price=product.price.plain(),
        cost_price=product.cost_price.plain(),
        stock=product.stock,
        low_stock_threshold=product.low_stock_threshold,
        low_stock=product.is_low_stock,
        category=product.category,
    )


def to_cash_session_dto(session: CashSession, message: str = "") -> CashSessionDTO:
    return CashSessionDTO(
        session_id=session.id,
        business_day=session.business_day.isoformat(),
        status=session.status.value,
        opened_at=session.opened_at.isoformat(),
        opening_float=session.opening_float.plain(),
        accumulated_sales=session.accumulated_sales.plain(),
        order_count=session.order_count,
        current_balance=session.current_balance.plain(),
        closed_at=iso(session.closed_at),
        message=message,
    )


def to_ledger_dto(entry: LedgerEntry) -> LedgerEntryDTO:
    return LedgerEntryDTO(
        id=entry.id,
        direction=entry.direction.value,
        description=entry.description,
        category=entry.category,
        amount=entry.amount.plain(),
        payment_method=entry.payment_method,
        created_at=entry.created_at.isoformat(),
        order_id=entry.order_id,
        fiado_receipt_id=entry.fiado_receipt_id,
    )


def fiado_order_to_dto(order: Order) -> FiadoItemDTO:
    return FiadoItemDTO(
        id=order.id,
        kind="order",
        customer_name=order.customer.display_name,
        total=order.total.plain(),
        date=order.placed_at.isoformat(),
        paid=False,
        phone=order.customer.phone,
        reference=order.number,
    )


def fiado_receipt_to_dto(receipt: FiadoReceipt) -> FiadoItemDTO:
    return FiadoItemDTO(
        id=receipt.id,
        kind="receipt",
        customer_name=receipt.customer_name,
        total=receipt.total.plain(),
        date=receipt.created_at.isoformat(),
        paid=receipt.paid,
        phone=receipt.phone,
        due_date=receipt.due_date.isoformat() if receipt.due_date else None,
    )
