"""Integration tests for opening, closing and inspecting the cash register."""

import logging

import pytest

from bevpos.application.close_cash_session import CloseCashSessionHandler
from bevpos.application.current_cash_session import CurrentCashSessionHandler
from bevpos.application.dto import CustomerSpec, OrderItemSpec, PlaceOrderRequest
from bevpos.application.open_cash_session import OpenCashSessionHandler
from bevpos.application.place_order import PlaceOrderHandler
from bevpos.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from bevpos.domain.model.product import Product
from bevpos.domain.model.value_objects import Money
from tests.fakes import TODAY, FakeUnitOfWork, MissingSchemaUnitOfWork, make_calendar


def _setup():
    uow = FakeUnitOfWork([Product(id="skol", name="Skol 350ml", price=Money.of("5.00"), stock=100)])
    calendar, clock = make_calendar()
    return uow, calendar, clock


def _sell(uow, calendar, qty, method="cash"):
    PlaceOrderHandler(uow, calendar).handle(PlaceOrderRequest(
        customer=CustomerSpec(name="Maria"),
        items=[OrderItemSpec("skol", qty)],
        payment_method=method,
    ))


class TestOpenCashSession:

    def test_open(self):
        uow, calendar, _ = _setup()
        dto = OpenCashSessionHandler(uow, calendar).handle("100,00")
        assert dto.status == "open"
        assert dto.business_day == TODAY.isoformat()
        assert dto.opening_float == "100.00"
        assert dto.current_balance == "100.00"

    def test_second_open_same_day_conflicts(self):
        uow, calendar, _ = _setup()
        handler = OpenCashSessionHandler(uow, calendar)
        handler.handle("100")
        with pytest.raises(ConflictError, match="already open today"):
            handler.handle("50")

    def test_session_left_open_from_yesterday_is_reported(self, caplog):
        uow, calendar, clock = _setup()
        handler = OpenCashSessionHandler(uow, calendar)
        yesterday = handler.handle("100")
        clock.advance(days=1)

        with caplog.at_level(logging.WARNING, logger="bevpos.application.open_cash_session"):
            dto = handler.handle("50")

        assert dto.status == "open"
        assert f"Cash session {yesterday.session_id} from {TODAY.isoformat()} was never closed" in caplog.text

    def test_negative_float_rejected(self):
        uow, calendar, _ = _setup()
        with pytest.raises(ValidationError):
            OpenCashSessionHandler(uow, calendar).handle("-10")

    def test_reopen_after_close(self):
        uow, calendar, clock = _setup()
        OpenCashSessionHandler(uow, calendar).handle("100")
        CloseCashSessionHandler(uow, calendar).handle()
        clock.advance(minutes=5)
        dto = OpenCashSessionHandler(uow, calendar).handle("20")
        assert dto.status == "open"


class TestCloseCashSession:

    def test_close_recomputes_from_paid_orders(self):
        uow, calendar, clock = _setup()
        OpenCashSessionHandler(uow, calendar).handle("100")
        _sell(uow, calendar, 3)
        _sell(uow, calendar, 2, method="pix")
        _sell(uow, calendar, 10, method="fiado")
        clock.advance(hours=8)

        dto = CloseCashSessionHandler(uow, calendar).handle()

        assert dto.status == "closed"
        assert dto.accumulated_sales == "25.00"
        assert dto.order_count == 2
        assert dto.current_balance == "125.00"
        assert "final balance R$ 125,00" in dto.message

    def test_close_without_open_session(self):
        uow, calendar, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="No open cash register"):
            CloseCashSessionHandler(uow, calendar).handle()


class TestCurrentCashSession:

    def test_live_totals_while_open(self):
        uow, calendar, _ = _setup()
        OpenCashSessionHandler(uow, calendar).handle("50")
        _sell(uow, calendar, 4)

        dto = CurrentCashSessionHandler(uow, calendar).handle()

        assert dto.accumulated_sales == "20.00"
        assert dto.order_count == 1
        assert dto.current_balance == "70.00"

    def test_none_when_not_opened(self):
        uow, calendar, _ = _setup()
        assert CurrentCashSessionHandler(uow, calendar).handle() is None

    def test_none_on_fresh_install(self):
        calendar, _ = make_calendar()
        assert CurrentCashSessionHandler(MissingSchemaUnitOfWork(), calendar).handle() is None
