"""Domain service: Ledger Posting.

Keeps the cash book in step with payments: every paid order or fiado
receipt has exactly one ``in`` entry for its total, and nothing else
does.  All payment-driven ledger writes go through here so the rule is
applied the same way at checkout and at fiado settlement.
"""

from __future__ import annotations

from datetime import datetime

from bevpos.domain.model.fiado import FiadoReceipt
from bevpos.domain.model.ledger import LedgerEntry
from bevpos.domain.model.order import Order, OrderStatus
from bevpos.domain.repository.ledger_repository import LedgerRepository


class LedgerPostingService:

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def post_order_payment(self, order: Order, at: datetime) -> LedgerEntry | None:
        """Book the payment of a paid order.  Returns None for unpaid orders."""
        if order.status != OrderStatus.PAID:
            return None
        entry = LedgerEntry.for_order(order, at)
        self._ledger_repo.add(entry)
        return entry

    def reverse_order_payment(self, order: Order) -> bool:
        """Remove the entry booked for *order*.  Returns True if one existed."""
        entry = self._ledger_repo.get_for_order(order.id)
        if entry is None:
            return False
        self._ledger_repo.delete(entry.id)
        return True

    def post_receipt_payment(self, receipt: FiadoReceipt, at: datetime) -> LedgerEntry:
        entry = LedgerEntry.for_fiado_receipt(receipt, at)
        self._ledger_repo.add(entry)
        return entry

    def reverse_receipt_payment(self, receipt: FiadoReceipt) -> bool:
        entry = self._ledger_repo.get_for_receipt(receipt.id)
        if entry is None:
            return False
        self._ledger_repo.delete(entry.id)
        return True
