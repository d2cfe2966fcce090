"""Unit tests for the Product aggregate."""

import pytest

from bevpos.domain.exceptions import InsufficientStockError, ValidationError
from bevpos.domain.model.product import Product
from bevpos.domain.model.value_objects import Money


def _product(stock: int = 5, threshold: int = 2) -> Product:
    return Product(id="p1", name="Skol 350ml", price=Money.of("4.90"), stock=stock, low_stock_threshold=threshold)


class TestProductStock:

    def test_available_quantity_passes(self):
        _product(stock=5).ensure_available(5)

    def test_more_than_available(self):
        p = _product(stock=2)
        with pytest.raises(InsufficientStockError) as info:
            p.ensure_available(3)
        assert info.value.available == 2
        assert info.value.requested == 3
        assert "Skol 350ml" in str(info.value)
        assert p.stock == 2

    def test_set_stock(self):
        p = _product(stock=0)
        p.set_stock(12)
        assert p.stock == 12

    def test_set_stock_cannot_be_negative(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _product().set_stock(-1)

    def test_low_stock_is_inclusive(self):
        assert _product(stock=2, threshold=2).is_low_stock
        assert not _product(stock=3, threshold=2).is_low_stock


class TestProductPrice:

    def test_update_price(self):
        p = _product()
        p.update_price(Money.of("5.50"))
        assert p.price == Money.of("5.50")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _product().update_price(Money.zero())
