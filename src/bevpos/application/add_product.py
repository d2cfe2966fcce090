"""Application service: Add Product use case."""

from __future__ import annotations

import uuid

from bevpos.application.dto import ProductDTO, to_product_dto
from bevpos.domain.exceptions import ValidationError
from bevpos.domain.model.product import Product
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        price: str,
        cost_price: str = "0",
        stock: int = 0,
        low_stock_threshold: int = 0,
        category: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock < 0 or low_stock_threshold < 0:
            raise ValidationError("Stock and low-stock threshold cannot be negative")

        product = Product(
            id=uuid.uuid4().hex,
            name=name.strip(),
            price=Money.zero(),
            cost_price=Money.of(cost_price),
            stock=stock,
            low_stock_threshold=low_stock_threshold,
            category=(category or "").strip() or None,
        )
        product.update_price(Money.of(price))

        with self._uow as uow:
            if uow.products.get_by_name(product.name) is not None:
                raise ValidationError(f"Product '{product.name}' already exists")
            uow.products.save(product)
            uow.commit()
        return to_product_dto(product)
