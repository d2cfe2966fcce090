"""CashSession aggregate: one opening/closing of the cash register.

Sessions strictly alternate ``open -> closed``; there is at most one open
session per business day.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from bevpos.domain.exceptions import ValidationError
from bevpos.domain.model.value_objects import Money


class CashSessionStatus(Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class CashSession:

    id: str
    business_day: date
    opened_at: datetime
    opening_float: Money
    status: CashSessionStatus = CashSessionStatus.OPEN
    closed_at: datetime | None = None
    accumulated_sales: Money = field(default_factory=Money.zero)
    order_count: int = 0

    @staticmethod
    def open(business_day: date, opening_float: Money, at: datetime) -> CashSession:
        return CashSession(
            id=uuid.uuid4().hex,
            business_day=business_day,
            opened_at=at,
            opening_float=opening_float,
        )

    @property
    def is_open(self) -> bool:
        return self.status == CashSessionStatus.OPEN

    @property
    def current_balance(self) -> Money:
        return self.opening_float + self.accumulated_sales

    def record_totals(self, sales_total: Money, order_count: int) -> None:
        """Replace the running totals with freshly computed ones."""
        if order_count < 0:
            raise ValidationError("Order count cannot be negative")
        self.accumulated_sales = sales_total
        self.order_count = order_count

    def close(self, sales_total: Money, order_count: int, at: datetime) -> None:
        """Transition OPEN -> CLOSED with totals recomputed from paid orders."""
        if not self.is_open:
            raise ValidationError("Cash session is already closed")
        self.record_totals(sales_total, order_count)
        self.status = CashSessionStatus.CLOSED
        self.closed_at = at
