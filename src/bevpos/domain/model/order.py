"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its lines.
All business invariants are enforced here.
"""

from __future__ import annotations

import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from bevpos.domain.exceptions import ValidationError
from bevpos.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELED = "canceled"


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"
    PIX = "pix"
    ON_CREDIT = "on_credit"

    @property
    def is_immediate(self) -> bool:
        """Immediate methods settle the order at placement time."""
        return self is not PaymentMethod.ON_CREDIT

    @staticmethod
    def parse(raw: str | PaymentMethod) -> PaymentMethod:
        """Accept canonical names and the Portuguese labels stored by the shop."""
        if isinstance(raw, PaymentMethod):
            return raw
        key = (raw or "").strip().lower()
        method = _PAYMENT_ALIASES.get(key)
        if method is None:
            raise ValidationError(f"Unknown payment method: {raw!r}")
        return method


_PAYMENT_ALIASES = {
    "cash": PaymentMethod.CASH,
    "dinheiro": PaymentMethod.CASH,
    "card": PaymentMethod.CARD,
    "cartao": PaymentMethod.CARD,
    "cartão": PaymentMethod.CARD,
    "credito": PaymentMethod.CARD,
    "crédito": PaymentMethod.CARD,
    "debito": PaymentMethod.CARD,
    "débito": PaymentMethod.CARD,
    "pix": PaymentMethod.PIX,
    "on_credit": PaymentMethod.ON_CREDIT,
    "on-credit": PaymentMethod.ON_CREDIT,
    "fiado": PaymentMethod.ON_CREDIT,
}


# ---------------------------------------------------------------------------
# Order numbers
# ---------------------------------------------------------------------------
ORDER_NUMBER_PREFIX = "VENDA"


def format_order_number(sequence: int) -> str:
    """``7`` -> ``VENDA00007``."""
    if sequence <= 0:
        raise ValidationError("Order sequence must be positive")
    return f"{ORDER_NUMBER_PREFIX}{sequence:05d}"


@dataclass(frozen=True)
class CustomerRef:
    """Who the order is for: a registered customer id and/or a free-text name."""

    id: str | None = None
    name: str | None = None
    phone: str | None = None
    address: str | None = None

    def __post_init__(self) -> None:
        if not (self.id and self.id.strip()) and not (self.name and self.name.strip()):
            raise ValidationError("Customer id or name is required")

    @property
    def display_name(self) -> str:
        return (self.name or "").strip() or f"Customer {self.id}"


@dataclass(frozen=True)
class OrderLine:
    """Captures the price of a product at the moment of sale."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at placement time

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for sales.

    Use the ``Order.place()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str
    sequence: int
    customer: CustomerRef
    payment_method: PaymentMethod
    lines: list[OrderLine]
    status: OrderStatus = OrderStatus.PENDING
    placed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    paid_at: datetime | None = None
    canceled_at: datetime | None = None
    notes: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        sequence: int,
        customer: CustomerRef,
        payment_method: PaymentMethod,
        lines: list[OrderLine],
        placed_at: datetime,
        notes: str | None = None,
    ) -> Order:
        """Create a new order, paid at once unless sold on credit."""
        if not lines:
            raise ValidationError("Order must contain at least one item")

        paid = payment_method.is_immediate
        return Order(
            id=uuid.uuid4().hex,
            sequence=sequence,
            customer=customer,
            payment_method=payment_method,
            lines=list(lines),
            status=OrderStatus.PAID if paid else OrderStatus.PENDING,
            placed_at=placed_at,
            paid_at=placed_at if paid else None,
            notes=(notes or "").strip() or None,
        )

    # --- State transitions ----------------------------------------------------

    def mark_paid(self, at: datetime) -> None:
        """Transition PENDING -> PAID (settling a sale made on credit)."""
        if self.status != OrderStatus.PENDING:
            raise ValidationError(
                f"Cannot mark order {self.number} as paid: current status is "
                f"{self.status.value}, expected pending"
            )
        self.status = OrderStatus.PAID
        self.paid_at = at

    def mark_unpaid(self) -> None:
        """Transition PAID -> PENDING; only on-credit sales can be reopened."""
        if self.status != OrderStatus.PAID:
            raise ValidationError(
                f"Cannot reopen order {self.number}: current status is "
                f"{self.status.value}, expected paid"
            )
        if self.payment_method is not PaymentMethod.ON_CREDIT:
            raise ValidationError(
                f"Order {self.number} was paid at the counter and cannot be reopened"
            )
        self.status = OrderStatus.PENDING
        self.paid_at = None

    def cancel(self, at: datetime) -> None:
        """Transition PENDING|PAID -> CANCELED.

        Stock restoration and ledger cleanup are coordinated by the
        application handler.
        """
        if self.status == OrderStatus.CANCELED:
            raise ValidationError(f"Order {self.number} is already canceled")
        self.status = OrderStatus.CANCELED
        self.canceled_at = at

    # --- Computed properties --------------------------------------------------

    @property
    def number(self) -> str:
        return format_order_number(self.sequence)

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.subtotal
        return result

    @property
    def is_fiado(self) -> bool:
        return self.payment_method is PaymentMethod.ON_CREDIT

    def quantities_by_product(self) -> dict[str, int]:
        """Summed quantity per product id (a product may appear on several lines)."""
        totals: Counter[str] = Counter()
        for line in self.lines:
            totals[line.product_id] += line.quantity.value
        return dict(totals)
