"""LedgerEntry: one immutable line of the shop's cash book.

Entries are created automatically when an order or fiado receipt becomes
paid, or manually by the operator.  They are never edited; a correction
is a deletion.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from bevpos.domain.exceptions import ValidationError
from bevpos.domain.model.fiado import FiadoReceipt
from bevpos.domain.model.order import Order
from bevpos.domain.model.value_objects import Money

SALES_CATEGORY = "Sales"


class LedgerDirection(Enum):
    IN = "in"
    OUT = "out"


@dataclass(frozen=True)
class LedgerEntry:

    id: str
    direction: LedgerDirection
    description: str
    category: str
    amount: Money
    payment_method: str
    created_at: datetime
    order_id: str | None = None
    fiado_receipt_id: str | None = None

    def __post_init__(self) -> None:
        if self.amount.amount <= 0:
            raise ValidationError("Ledger amount must be greater than zero")
        if not self.description.strip():
            raise ValidationError("Ledger description is required")
        if not self.category.strip():
            raise ValidationError("Ledger category is required")

    @property
    def is_linked(self) -> bool:
        return self.order_id is not None or self.fiado_receipt_id is not None

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def for_order(order: Order, at: datetime) -> LedgerEntry:
        return LedgerEntry(
            id=uuid.uuid4().hex,
            direction=LedgerDirection.IN,
            description=f"Order {order.number} - {order.customer.display_name}",
            category=SALES_CATEGORY,
            amount=order.total,
            payment_method=order.payment_method.value,
            created_at=at,
            order_id=order.id,
        )

    @staticmethod
    def for_fiado_receipt(receipt: FiadoReceipt, at: datetime) -> LedgerEntry:
        return LedgerEntry(
            id=uuid.uuid4().hex,
            direction=LedgerDirection.IN,
            description=f"Fiado receipt - {receipt.customer_name}",
            category=SALES_CATEGORY,
            amount=receipt.total,
            payment_method="on_credit",
            created_at=at,
            fiado_receipt_id=receipt.id,
        )

    @staticmethod
    def manual(
        direction: LedgerDirection,
        description: str,
        category: str,
        amount: Money,
        payment_method: str,
        at: datetime,
    ) -> LedgerEntry:
        if not (payment_method or "").strip():
            raise ValidationError("Ledger payment method is required")
        return LedgerEntry(
            id=uuid.uuid4().hex,
            direction=direction,
            description=(description or "").strip(),
            category=(category or "").strip(),
            amount=amount,
            payment_method=payment_method.strip(),
            created_at=at,
        )
