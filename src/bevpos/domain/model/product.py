"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is sold and replenished.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bevpos.domain.exceptions import InsufficientStockError, ValidationError
from bevpos.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is greater than zero
    """

    id: str
    name: str
    price: Money
    cost_price: Money = field(default_factory=Money.zero)
    stock: int = 0
    low_stock_threshold: int = 0
    category: str | None = None

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.low_stock_threshold

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders keep the price captured when they were placed.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def ensure_available(self, quantity: int) -> None:
        if quantity > self.stock:
            raise InsufficientStockError(
                product_id=self.id,
                product_name=self.name,
                available=self.stock,
                requested=quantity,
            )

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock cannot be negative")
        self.stock = quantity
