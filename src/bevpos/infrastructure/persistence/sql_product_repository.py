"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from bevpos.domain.model.product import Product
from bevpos.domain.model.value_objects import Money
from bevpos.domain.repository.product_repository import ProductRepository
from bevpos.infrastructure.persistence.models import ProductRow, utcnow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._session.get(ProductRow, product_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Product | None:
        stmt = select(ProductRow).where(func.lower(ProductRow.name) == name.strip().lower()).limit(1)
        row = self._session.scalars(stmt).first()
        return self._to_domain(row) if row is not None else None

    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        ids = list(product_ids)
        if not ids:
            return {}
        stmt = (
            select(ProductRow)
            .where(ProductRow.id.in_(ids))
            .execution_options(populate_existing=True)
        )
        return {row.id: self._to_domain(row) for row in self._session.scalars(stmt)}

    def list_all(self) -> list[Product]:
        stmt = select(ProductRow).order_by(ProductRow.name, ProductRow.id)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            row = ProductRow(id=product.id)
            self._session.add(row)
        row.name = product.name
        row.category = product.category
        row.price_cents = product.price.cents
        row.cost_cents = product.cost_price.cents
        row.stock = product.stock
        row.low_stock_threshold = product.low_stock_threshold
        self._session.flush()

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        self._session.flush()
        stmt = (
            update(ProductRow)
            .where(ProductRow.id == product_id, ProductRow.stock >= quantity)
            .values(stock=ProductRow.stock - quantity, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return self._session.execute(stmt).rowcount == 1

    def increment_stock(self, product_id: str, quantity: int) -> None:
        self._session.flush()
        stmt = (
            update(ProductRow)
            .where(ProductRow.id == product_id)
            .values(stock=ProductRow.stock + quantity, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        self._session.execute(stmt)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=Money.from_cents(row.price_cents),
            cost_price=Money.from_cents(row.cost_cents or 0),
            stock=row.stock,
            low_stock_threshold=row.low_stock_threshold or 0,
            category=row.category,
        )
