"""Domain service: Stock Allocation.

Coordinates the cross-aggregate operation of taking stock out for an
order (or putting it back on cancellation).  It lives in the domain
layer because "never oversell" is a core business rule, not just
orchestration.

Two phases:
  Phase 1, check: load every product and make sure the summed quantity
            per product is in stock.  Fails fast before any mutation.
  Phase 2, allocate: conditional decrement per product.  If another
            sale took the stock between the phases, the decrement
            reports failure and we raise; the enclosing unit of work
            rolls back whatever was already written.
"""

from __future__ import annotations

import logging

from bevpos.domain.exceptions import EntityNotFoundError, InsufficientStockError
from bevpos.domain.model.product import Product
from bevpos.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockAllocationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_availability(self, quantities: dict[str, int]) -> dict[str, Product]:
        """Phase 1: every product exists and has enough stock.

        Returns the loaded products keyed by ID so callers can snapshot
        their names and prices.
        """
        products = self._product_repo.get_many(quantities.keys())

        for product_id in quantities:
            if product_id not in products:
                raise EntityNotFoundError(f"Product not found: '{product_id}'")

        for product_id, qty in quantities.items():
            products[product_id].ensure_available(qty)

        return products

    def allocate(self, quantities: dict[str, int], products: dict[str, Product]) -> None:
        """Phase 2: take the stock out, one conditional write per product."""
        for product_id, qty in quantities.items():
            if not self._product_repo.decrement_stock(product_id, qty):
                current = self._product_repo.get_by_id(product_id)
                product = products[product_id]
                logger.warning(
                    "Stock for %s changed concurrently; %d requested", product.name, qty
                )
                raise InsufficientStockError(
                    product_id=product_id,
                    product_name=product.name,
                    available=current.stock if current is not None else 0,
                    requested=qty,
                )

    def release(self, quantities: dict[str, int]) -> None:
        """Put stock back, e.g. when an order is canceled.

        Products deleted from the catalog since the sale are skipped.
        """
        for product_id, qty in quantities.items():
            if self._product_repo.get_by_id(product_id) is None:
                logger.warning("Cannot restock missing product %s", product_id)
                continue
            self._product_repo.increment_stock(product_id, qty)
