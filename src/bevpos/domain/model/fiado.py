"""FiadoReceipt: an on-credit IOU recorded outside the order flow."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime

from bevpos.domain.exceptions import ValidationError
from bevpos.domain.model.value_objects import Money


@dataclass
class FiadoReceipt:

    id: str
    customer_name: str
    total: Money
    created_at: datetime
    due_date: date | None = None
    phone: str | None = None
    notes: str | None = None
    paid: bool = False
    paid_at: datetime | None = None

    @staticmethod
    def record(
        customer_name: str,
        total: Money,
        at: datetime,
        due_date: date | None = None,
        phone: str | None = None,
        notes: str | None = None,
    ) -> FiadoReceipt:
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if total.amount <= 0:
            raise ValidationError("Receipt total must be greater than zero")
        return FiadoReceipt(
            id=uuid.uuid4().hex,
            customer_name=customer_name.strip(),
            total=total,
            created_at=at,
            due_date=due_date,
            phone=(phone or "").strip() or None,
            notes=(notes or "").strip() or None,
        )

    def mark_paid(self, at: datetime) -> None:
        if self.paid:
            raise ValidationError("Receipt is already paid")
        self.paid = True
        self.paid_at = at

    def mark_unpaid(self) -> None:
        if not self.paid:
            raise ValidationError("Receipt is not paid")
        self.paid = False
        self.paid_at = None
