"""Domain service: Sales Summary.

Read-only aggregation of the orders placed on one business day.  Used
when closing the cash register and when building the daily report, so
both always agree on what "today's sales" means.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from bevpos.domain.model.calendar import StoreCalendar
from bevpos.domain.model.order import Order, OrderStatus
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.order_repository import OrderRepository


@dataclass(frozen=True)
class DaySales:

    day: date
    orders: list[Order]

    @property
    def paid_orders(self) -> list[Order]:
        return [o for o in self.orders if o.status == OrderStatus.PAID]

    @property
    def revenue(self) -> Money:
        total = Money.zero()
        for order in self.paid_orders:
            total = total + order.total
        return total

    @property
    def paid_count(self) -> int:
        return len(self.paid_orders)

    @property
    def average_ticket(self) -> Money:
        return self.revenue.split(self.paid_count)

    def top_product(self) -> tuple[str, int] | None:
        """Best seller by summed quantity; ties go to the alphabetically first name."""
        sold: dict[str, int] = {}
        for order in self.paid_orders:
            for line in order.lines:
                sold[line.product_name] = sold.get(line.product_name, 0) + line.quantity.value
        if not sold:
            return None
        return min(sold.items(), key=lambda item: (-item[1], item[0]))


class SalesSummaryService:

    def __init__(self, order_repo: OrderRepository, calendar: StoreCalendar) -> None:
        self._order_repo = order_repo
        self._calendar = calendar

    def for_day(self, day: date) -> DaySales:
        start, end = self._calendar.day_bounds(day)
        return DaySales(day=day, orders=self._order_repo.list_placed_between(start, end))
