"""Integration tests for the PlaceOrder use case.

Uses the in-memory unit of work, no database.
"""

from datetime import datetime, timezone

import pytest

from bevpos.application.dto import CustomerSpec, OrderItemSpec, PlaceOrderRequest
from bevpos.application.place_order import PlaceOrderHandler
from bevpos.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from bevpos.domain.model.product import Product
from bevpos.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork, make_calendar


def _setup(products: list[Product] | None = None):
    """Build handler with a fake unit of work, optionally pre-loaded with products."""
    if products is None:
        products = [
            Product(id="skol", name="Skol 350ml", price=Money.of("4.90"), stock=5),
            Product(id="gelo", name="Gelo 5kg", price=Money.of("12.00"), stock=10),
        ]
    uow = FakeUnitOfWork(products)
    calendar, clock = make_calendar()
    return PlaceOrderHandler(uow, calendar), uow, clock


def _request(*items: tuple[str, int], method: str = "cash", **kwargs) -> PlaceOrderRequest:
    return PlaceOrderRequest(
        customer=kwargs.pop("customer", CustomerSpec(name="Maria")),
        items=[OrderItemSpec(pid, qty) for pid, qty in items],
        payment_method=method,
        **kwargs,
    )


class TestPlaceOrderHappyPath:

    def test_paid_sale_takes_stock_and_books_ledger(self):
        handler, uow, _ = _setup()

        result = handler.handle(_request(("skol", 3)))

        assert result.total == "14.70"
        assert result.status == "paid"
        assert result.order_number == "VENDA00001"
        assert uow.products.get_by_id("skol").stock == 2

        entries = uow.ledger.all()
        assert len(entries) == 1
        assert entries[0].amount == Money.of("14.70")
        assert entries[0].order_id == result.order_id

    def test_second_order_beyond_stock_fails_without_side_effects(self):
        handler, uow, _ = _setup()
        handler.handle(_request(("skol", 3)))

        with pytest.raises(InsufficientStockError) as info:
            handler.handle(_request(("skol", 3)))

        assert info.value.available == 2
        assert uow.products.get_by_id("skol").stock == 2
        assert len(uow.ledger.all()) == 1
        assert uow.orders.last_sequence() == 1

    def test_on_credit_sale_is_pending_without_ledger_entry(self):
        handler, uow, _ = _setup()
        result = handler.handle(_request(("gelo", 2), method="fiado"))
        assert result.status == "pending"
        assert uow.ledger.all() == []
        assert uow.products.get_by_id("gelo").stock == 8

    def test_total_is_exact_sum_of_lines(self):
        handler, uow, _ = _setup()
        result = handler.handle(_request(("skol", 1), ("gelo", 2), ("skol", 1)))
        order = uow.orders.get_by_id(result.order_id)
        assert result.total == "33.80"
        assert order.total == sum((line.subtotal for line in order.lines), Money.zero())

    def test_repeated_product_lines_are_summed_against_stock(self):
        handler, uow, _ = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle(_request(("skol", 3), ("skol", 3)))
        assert uow.products.get_by_id("skol").stock == 5

    def test_price_snapshot_at_placement(self):
        handler, uow, _ = _setup()
        result = handler.handle(_request(("skol", 1)))

        skol = uow.products.get_by_id("skol")
        skol.update_price(Money.of("9.99"))
        uow.products.save(skol)

        assert uow.orders.get_by_id(result.order_id).total == Money.of("4.90")

    def test_sequential_numbers(self):
        handler, _, _ = _setup()
        first = handler.handle(_request(("gelo", 1)))
        second = handler.handle(_request(("gelo", 1)))
        assert (first.order_number, second.order_number) == ("VENDA00001", "VENDA00002")

    def test_retroactive_placement_in_store_time(self):
        handler, uow, _ = _setup()
        result = handler.handle(_request(("gelo", 1), placed_at=datetime(2026, 3, 13, 20, 0)))
        order = uow.orders.get_by_id(result.order_id)
        assert order.placed_at == datetime(2026, 3, 13, 23, 0, tzinfo=timezone.utc)
        assert order.paid_at == order.placed_at


class TestPlaceOrderValidation:

    def test_empty_items(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle(_request())

    def test_zero_quantity(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle(_request(("skol", 0)))

    def test_missing_customer(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="id or name"):
            handler.handle(_request(("skol", 1), customer=CustomerSpec(name="  ")))

    def test_unknown_payment_method(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="Unknown payment method"):
            handler.handle(_request(("skol", 1), method="cheque"))

    def test_unknown_product(self):
        handler, uow, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="ghost"):
            handler.handle(_request(("skol", 1), ("ghost", 1)))
        assert uow.products.get_by_id("skol").stock == 5
        assert uow.commits == 0

    def test_future_placement_rejected(self):
        handler, _, clock = _setup()
        with pytest.raises(ValidationError, match="future"):
            handler.handle(_request(("skol", 1), placed_at=datetime(2026, 3, 15, 9, 0, tzinfo=timezone.utc)))


class TestPlaceOrderConflicts:

    def test_stale_sequence_is_retried_once(self):
        handler, uow, _ = _setup()
        handler.handle(_request(("gelo", 1)))

        real_last_sequence = uow.orders.last_sequence
        calls = []

        def stale_then_real():
            calls.append(1)
            return 0 if len(calls) == 1 else real_last_sequence()

        uow.orders.last_sequence = stale_then_real

        result = handler.handle(_request(("skol", 2)))

        assert result.order_number == "VENDA00002"
        assert uow.products.get_by_id("skol").stock == 3
        assert len(uow.ledger.all()) == 2

    def test_persistent_conflict_surfaces_and_rolls_back(self):
        handler, uow, _ = _setup()
        handler.handle(_request(("gelo", 1)))
        uow.orders.last_sequence = lambda: 0

        with pytest.raises(ConflictError):
            handler.handle(_request(("skol", 2)))

        assert uow.products.get_by_id("skol").stock == 5
        assert len(uow.ledger.all()) == 1

    def test_ledger_failure_rolls_back_order_and_stock(self):
        handler, uow, _ = _setup()

        def broken_add(entry):
            raise ConflictError("ledger down")

        uow.ledger.add = broken_add

        with pytest.raises(ConflictError):
            handler.handle(_request(("skol", 3)))

        assert uow.products.get_by_id("skol").stock == 5
        assert uow.orders.list_recent() == []
