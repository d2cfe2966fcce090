"""Concurrent placement against one shared store."""

import threading

from bevpos.application.dto import CustomerSpec, OrderItemSpec, PlaceOrderRequest
from bevpos.application.place_order import PlaceOrderHandler
from bevpos.domain.exceptions import InsufficientStockError
from bevpos.domain.model.product import Product
from bevpos.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork, make_calendar


def test_no_oversell_and_distinct_numbers_under_threads():
    uow = FakeUnitOfWork([Product(id="skol", name="Skol 350ml", price=Money.of("4.90"), stock=5)])
    calendar, _ = make_calendar()
    handler = PlaceOrderHandler(uow, calendar)
    request = PlaceOrderRequest(
        customer=CustomerSpec(name="Balcão"),
        items=[OrderItemSpec("skol", 1)],
        payment_method="cash",
    )

    results, failures = [], []
    lock = threading.Lock()
    start = threading.Barrier(12)

    def worker():
        start.wait()
        try:
            result = handler.handle(request)
        except InsufficientStockError as exc:
            with lock:
                failures.append(exc)
        else:
            with lock:
                results.append(result)

    threads = [threading.Thread(target=worker) for _ in range(12)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 5
    assert len(failures) == 7
    assert uow.products.get_by_id("skol").stock == 0

    numbers = sorted(r.order_number for r in results)
    assert numbers == [f"VENDA0000{n}" for n in range(1, 6)]
    assert len(uow.ledger.all()) == 5
