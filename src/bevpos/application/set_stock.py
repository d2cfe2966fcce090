"""Application service: Set Stock use case (stock count correction)."""

from __future__ import annotations

import logging

from bevpos.application.dto import ProductDTO, to_product_dto
from bevpos.domain.exceptions import EntityNotFoundError
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SetStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, quantity: int) -> ProductDTO:
        """Set the counted stock quantity for a product."""
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{product_id}'")
            previous = product.stock
            product.set_stock(quantity)
            uow.products.save(product)
            uow.commit()

        logger.info("Stock of %s set from %d to %d", product.name, previous, quantity)
        return to_product_dto(product)
