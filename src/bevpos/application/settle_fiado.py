"""Application service: Mark Fiado Settled use case.

Flips an on-credit debt between unpaid and paid.  The debt can be an
order sold with the ``on_credit`` method or a standalone fiado receipt;
the ID is looked up as an order first, then as a receipt.

Ledger policy: settling always books the same ``in`` entry a sale paid
at the counter gets, and un-settling removes it.  Asking for the state
a debt is already in succeeds without touching anything.
"""

from __future__ import annotations

import logging

from bevpos.application.dto import SettlementResult
from bevpos.domain.exceptions import EntityNotFoundError, ValidationError
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.model.fiado import FiadoReceipt
from bevpos.domain.model.order import Order, OrderStatus
from bevpos.domain.repository.unit_of_work import UnitOfWork
from bevpos.domain.service.ledger_posting_service import LedgerPostingService

logger = logging.getLogger(__name__)


class MarkFiadoSettledHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(self, target_id: str, paid: bool) -> SettlementResult:
        if not target_id or not target_id.strip():
            raise ValidationError("id is required")
        target_id = target_id.strip()

        with self._uow as uow:
            posting = LedgerPostingService(uow.ledger)

            order = uow.orders.get_by_id(target_id)
            if order is not None:
                result = self._settle_order(uow, posting, order, paid)
            else:
                receipt = uow.fiado_receipts.get_by_id(target_id)
                if receipt is None:
                    raise EntityNotFoundError(f"No fiado order or receipt with id '{target_id}'")
                result = self._settle_receipt(uow, posting, receipt, paid)

            uow.commit()

        logger.info("Fiado %s %s -> paid=%s", result.kind, result.id, result.paid)
        return result

    def _settle_order(
        self,
        uow: UnitOfWork,
        posting: LedgerPostingService,
        order: Order,
        paid: bool,
    ) -> SettlementResult:
        if not order.is_fiado:
            raise ValidationError(f"Order {order.number} was not sold on credit")
        if order.status == OrderStatus.CANCELED:
            raise ValidationError(f"Order {order.number} is canceled")

        currently_paid = order.status == OrderStatus.PAID
        if currently_paid == paid:
            return SettlementResult(
                ok=True,
                id=order.id,
                kind="order",
                paid=paid,
                message=f"Order {order.number} is already {'paid' if paid else 'pending'}",
            )

        if paid:
            order.mark_paid(self._calendar.now())
            uow.orders.save(order)
            posting.post_order_payment(order, order.paid_at)
            message = f"Order {order.number} settled ({order.total})"
        else:
            order.mark_unpaid()
            uow.orders.save(order)
            posting.reverse_order_payment(order)
            message = f"Order {order.number} reopened as pending"

        return SettlementResult(ok=True, id=order.id, kind="order", paid=paid, message=message)

    def _settle_receipt(
        self,
        uow: UnitOfWork,
        posting: LedgerPostingService,
        receipt: FiadoReceipt,
        paid: bool,
    ) -> SettlementResult:
        if receipt.paid == paid:
            return SettlementResult(
                ok=True,
                id=receipt.id,
                kind="receipt",
                paid=paid,
                message=f"Receipt for {receipt.customer_name} is already {'paid' if paid else 'unpaid'}",
            )

        if paid:
            receipt.mark_paid(self._calendar.now())
            uow.fiado_receipts.save(receipt)
            posting.post_receipt_payment(receipt, receipt.paid_at)
            message = f"Receipt for {receipt.customer_name} settled ({receipt.total})"
        else:
            receipt.mark_unpaid()
            uow.fiado_receipts.save(receipt)
            posting.reverse_receipt_payment(receipt)
            message = f"Receipt for {receipt.customer_name} reopened"

        return SettlementResult(ok=True, id=receipt.id, kind="receipt", paid=paid, message=message)
