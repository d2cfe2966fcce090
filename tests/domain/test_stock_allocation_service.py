"""Unit tests for the StockAllocationService domain service."""

import pytest

from bevpos.domain.exceptions import EntityNotFoundError, InsufficientStockError
from bevpos.domain.model.product import Product
from bevpos.domain.model.value_objects import Money
from bevpos.domain.service.stock_allocation_service import StockAllocationService
from tests.fakes import FakeUnitOfWork


def _setup(*specs: tuple[str, str, int]):
    """Build a service over (product_id, name, stock) tuples."""
    uow = FakeUnitOfWork([
        Product(id=pid, name=name, price=Money.of("5.00"), stock=stock) for pid, name, stock in specs
    ])
    return StockAllocationService(uow.products), uow.products


class TestCheckAvailability:

    def test_returns_loaded_products(self):
        svc, _ = _setup(("p1", "Skol", 10), ("p2", "Gelo", 3))
        products = svc.check_availability({"p1": 4, "p2": 3})
        assert set(products) == {"p1", "p2"}
        assert products["p2"].name == "Gelo"

    def test_missing_product(self):
        svc, _ = _setup(("p1", "Skol", 10))
        with pytest.raises(EntityNotFoundError, match="Product not found: 'nope'"):
            svc.check_availability({"p1": 1, "nope": 1})

    def test_insufficient_stock_names_product(self):
        svc, _ = _setup(("p1", "Skol", 2))
        with pytest.raises(InsufficientStockError) as info:
            svc.check_availability({"p1": 3})
        assert info.value.product_id == "p1"
        assert info.value.available == 2


class TestAllocateAndRelease:

    def test_allocate_decrements(self):
        svc, repo = _setup(("p1", "Skol", 10), ("p2", "Gelo", 3))
        products = svc.check_availability({"p1": 4, "p2": 3})
        svc.allocate({"p1": 4, "p2": 3}, products)
        assert repo.get_by_id("p1").stock == 6
        assert repo.get_by_id("p2").stock == 0

    def test_allocate_detects_stock_taken_after_check(self):
        svc, repo = _setup(("p1", "Skol", 5))
        products = svc.check_availability({"p1": 4})

        # another sale takes stock between the two phases
        assert repo.decrement_stock("p1", 3)

        with pytest.raises(InsufficientStockError) as info:
            svc.allocate({"p1": 4}, products)
        assert info.value.available == 2
        assert repo.get_by_id("p1").stock == 2

    def test_release_restocks_and_skips_missing(self):
        svc, repo = _setup(("p1", "Skol", 1))
        svc.release({"p1": 4, "gone": 2})
        assert repo.get_by_id("p1").stock == 5
