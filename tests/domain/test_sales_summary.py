"""Unit tests for DaySales aggregation."""

from datetime import date, datetime, timezone

from bevpos.domain.model.order import CustomerRef, Order, OrderLine, PaymentMethod
from bevpos.domain.model.value_objects import Money, Quantity
from bevpos.domain.service.sales_summary_service import DaySales

AT = datetime(2026, 3, 14, 15, 0, tzinfo=timezone.utc)


def _order(seq: int, method: PaymentMethod, *lines: tuple[str, int, str]) -> Order:
    return Order.place(
        sequence=seq,
        customer=CustomerRef(name="Cliente"),
        payment_method=method,
        lines=[OrderLine(name, name, Quantity(qty), Money.of(price)) for name, qty, price in lines],
        placed_at=AT,
    )


class TestDaySales:

    def test_only_paid_orders_count(self):
        sales = DaySales(date(2026, 3, 14), [
            _order(1, PaymentMethod.CASH, ("Skol", 2, "5.00")),
            _order(2, PaymentMethod.ON_CREDIT, ("Skol", 10, "5.00")),
        ])
        assert sales.revenue == Money.of("10.00")
        assert sales.paid_count == 1

    def test_average_ticket_rounds_half_up(self):
        sales = DaySales(date(2026, 3, 14), [
            _order(1, PaymentMethod.CASH, ("Skol", 1, "10.00")),
            _order(2, PaymentMethod.PIX, ("Skol", 1, "5.00")),
            _order(3, PaymentMethod.CARD, ("Skol", 1, "5.00")),
        ])
        assert sales.average_ticket == Money.of("6.67")

    def test_average_ticket_without_sales_is_zero(self):
        assert DaySales(date(2026, 3, 14), []).average_ticket.is_zero

    def test_top_product_by_quantity(self):
        sales = DaySales(date(2026, 3, 14), [
            _order(1, PaymentMethod.CASH, ("Skol", 2, "5.00"), ("Gelo", 1, "12.00")),
            _order(2, PaymentMethod.CASH, ("Gelo", 3, "12.00")),
        ])
        assert sales.top_product() == ("Gelo", 4)

    def test_top_product_tie_goes_to_first_name(self):
        sales = DaySales(date(2026, 3, 14), [
            _order(1, PaymentMethod.CASH, ("Skol", 2, "5.00"), ("Brahma", 2, "5.50")),
        ])
        assert sales.top_product() == ("Brahma", 2)

    def test_no_top_product_without_paid_sales(self):
        assert DaySales(date(2026, 3, 14), []).top_product() is None
