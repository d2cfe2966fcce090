"""Application service: Place Order use case.

This is the only place that coordinates every aggregate touched by a
sale: product lookup and stock, the order itself, and the ledger.  All
writes happen inside one unit of work, so a failure at any step leaves
no order, no stock change and no ledger entry behind.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from bevpos.application.dto import PlaceOrderRequest, PlaceOrderResult
from bevpos.domain.exceptions import ConflictError, ValidationError
from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.model.order import CustomerRef, Order, OrderLine, PaymentMethod
from bevpos.domain.model.value_objects import Quantity
from bevpos.domain.repository.unit_of_work import UnitOfWork
from bevpos.domain.service.ledger_posting_service import LedgerPostingService
from bevpos.domain.service.stock_allocation_service import StockAllocationService

logger = logging.getLogger(__name__)

# Number allocation races are retried once before surfacing.
MAX_ATTEMPTS = 2


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork, calendar: StoreCalendar) -> None:
        self._uow = uow
        self._calendar = calendar

    def handle(self, request: PlaceOrderRequest) -> PlaceOrderResult:
        """Place a new sale.

        Steps:
        1. Validate the request shape (no storage access yet).
        2. Check every product exists and has enough stock.
        3. Take the stock out with conditional writes.
        4. Snapshot current prices into the lines and allocate a number.
        5. Insert the order, book the payment.
        """
        customer = CustomerRef(
            id=_clean(request.customer.id),
            name=_clean(request.customer.name),
            phone=_clean(request.customer.phone),
            address=_clean(request.customer.address),
        )
        method = PaymentMethod.parse(request.payment_method)
        items = self._validate_items(request)
        placed_at = self._resolve_placed_at(request.placed_at)

        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                order = self._place(customer, method, items, request.notes, placed_at)
                break
            except ConflictError:
                if attempt == MAX_ATTEMPTS:
                    raise
                logger.warning("Order number taken by a concurrent sale; retrying")

        logger.info(
            "Placed order %s for %s: %s (%s, %s)",
            order.number,
            order.customer.display_name,
            order.total,
            order.payment_method.value,
            order.status.value,
        )
        return PlaceOrderResult(
            order_id=order.id,
            order_number=order.number,
            total=order.total.plain(),
            status=order.status.value,
            message=f"Order {order.number} placed ({order.total})",
        )

    # --- Steps ----------------------------------------------------------------

    def _place(
        self,
        customer: CustomerRef,
        method: PaymentMethod,
        items: list[tuple[str, Quantity]],
        notes: str | None,
        placed_at: datetime,
    ) -> Order:
        with self._uow as uow:
            quantities: dict[str, int] = {}
            for product_id, qty in items:
                quantities[product_id] = quantities.get(product_id, 0) + qty.value

            stock = StockAllocationService(uow.products)
            products = stock.check_availability(quantities)
            # the number below is read after this write, inside the same transaction
            stock.allocate(quantities, products)

            lines = [
                OrderLine(
                    product_id=product_id,
                    product_name=products[product_id].name,
                    quantity=qty,
                    unit_price=products[product_id].price,  # <-- price snapshot
                )
                for product_id, qty in items
            ]

            order = Order.place(
                sequence=uow.orders.last_sequence() + 1,
                customer=customer,
                payment_method=method,
                lines=lines,
                placed_at=placed_at,
                notes=notes,
            )
            uow.orders.add(order)
            LedgerPostingService(uow.ledger).post_order_payment(order, placed_at)
            uow.commit()
        return order

    @staticmethod
    def _validate_items(request: PlaceOrderRequest) -> list[tuple[str, Quantity]]:
        if not request.items:
            raise ValidationError("Order must contain at least one item")
        items: list[tuple[str, Quantity]] = []
        for spec in request.items:
            product_id = _clean(spec.product_id)
            if product_id is None:
                raise ValidationError("Every item needs a product id")
            items.append((product_id, Quantity(spec.quantity)))
        return items

    def _resolve_placed_at(self, placed_at: datetime | None) -> datetime:
        if placed_at is None:
            return self._calendar.now()
        if placed_at.tzinfo is None:
            # Retroactive entries are typed in shop-local time.
            placed_at = placed_at.replace(tzinfo=self._calendar.tz)
        placed_at = placed_at.astimezone(timezone.utc)
        if placed_at > self._calendar.now():
            raise ValidationError("Order date cannot be in the future")
        return placed_at


def _clean(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None
