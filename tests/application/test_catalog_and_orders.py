"""Integration tests for catalog handlers and order queries."""

import pytest

from bevpos.application.add_product import AddProductHandler
from bevpos.application.dto import CustomerSpec, OrderItemSpec, PlaceOrderRequest
from bevpos.application.list_orders import ListOrdersHandler
from bevpos.application.list_products import ListProductsHandler
from bevpos.application.place_order import PlaceOrderHandler
from bevpos.application.set_stock import SetStockHandler
from bevpos.application.show_order import ShowOrderHandler
from bevpos.domain.exceptions import EntityNotFoundError, ValidationError
from tests.fakes import FakeUnitOfWork, MissingSchemaUnitOfWork, make_calendar


class TestProducts:

    def test_add_product(self):
        uow = FakeUnitOfWork()
        dto = AddProductHandler(uow).handle("Skol 350ml", "4,90", cost_price="3.10", stock=24, category="Cerveja")
        assert dto.price == "4.90"
        assert dto.cost_price == "3.10"
        assert uow.products.get_by_id(dto.id).stock == 24

    def test_duplicate_name_rejected(self):
        uow = FakeUnitOfWork()
        AddProductHandler(uow).handle("Skol 350ml", "4.90")
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(uow).handle("skol 350ml", "5.00")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError):
            AddProductHandler(FakeUnitOfWork()).handle("Água", "0")

    def test_sub_cent_price_rejected(self):
        uow = FakeUnitOfWork()
        with pytest.raises(ValidationError, match="fractions of a cent"):
            AddProductHandler(uow).handle("Bala", "0.004", stock=10)
        assert ListProductsHandler(uow).handle() == []

    def test_set_stock_and_low_stock_filter(self):
        uow = FakeUnitOfWork()
        skol = AddProductHandler(uow).handle("Skol 350ml", "4.90", stock=50, low_stock_threshold=10)
        AddProductHandler(uow).handle("Gelo 5kg", "12", stock=30, low_stock_threshold=5)

        SetStockHandler(uow).handle(skol.id, 8)

        low = ListProductsHandler(uow).handle(low_stock_only=True)
        assert [p.name for p in low] == ["Skol 350ml"]
        assert low[0].low_stock

    def test_set_stock_negative_rejected(self):
        uow = FakeUnitOfWork()
        skol = AddProductHandler(uow).handle("Skol 350ml", "4.90", stock=5)
        with pytest.raises(ValidationError):
            SetStockHandler(uow).handle(skol.id, -1)

    def test_set_stock_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            SetStockHandler(FakeUnitOfWork()).handle("ghost", 3)

    def test_list_on_fresh_install(self):
        assert ListProductsHandler(MissingSchemaUnitOfWork()).handle() == []


class TestOrderQueries:

    def _place(self, uow, calendar, method):
        return PlaceOrderHandler(uow, calendar).handle(PlaceOrderRequest(
            customer=CustomerSpec(name="Maria", address="Rua A, 10"),
            items=[OrderItemSpec(self.product_id, 1)],
            payment_method=method,
            notes="portão azul",
        ))

    def _setup(self):
        uow = FakeUnitOfWork()
        self.product_id = AddProductHandler(uow).handle("Skol 350ml", "4.90", stock=10).id
        calendar, clock = make_calendar()
        return uow, calendar, clock

    def test_show_order(self):
        uow, calendar, _ = self._setup()
        placed = self._place(uow, calendar, "pix")

        dto = ShowOrderHandler(uow).handle(placed.order_id)

        assert dto.number == "VENDA00001"
        assert dto.customer_name == "Maria"
        assert dto.notes == "portão azul"
        assert dto.lines[0].product_name == "Skol 350ml"
        assert dto.lines[0].subtotal == "4.90"

    def test_show_unknown(self):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(FakeUnitOfWork()).handle("nope")

    def test_list_newest_first_with_status_filter(self):
        uow, calendar, clock = self._setup()
        self._place(uow, calendar, "cash")
        clock.advance(minutes=1)
        self._place(uow, calendar, "fiado")

        all_orders = ListOrdersHandler(uow).handle()
        pending = ListOrdersHandler(uow).handle(status="pending")

        assert [o.number for o in all_orders] == ["VENDA00002", "VENDA00001"]
        assert [o.number for o in pending] == ["VENDA00002"]

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError, match="Unknown order status"):
            ListOrdersHandler(FakeUnitOfWork()).handle(status="shipped")

    def test_list_on_fresh_install(self):
        assert ListOrdersHandler(MissingSchemaUnitOfWork()).handle() == []
