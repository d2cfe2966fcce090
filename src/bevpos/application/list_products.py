"""Application service: List Products use case (query)."""

from __future__ import annotations

import logging

from bevpos.application.dto import ProductDTO, to_product_dto
from bevpos.domain.exceptions import SchemaMissingError
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, low_stock_only: bool = False) -> list[ProductDTO]:
        try:
            with self._uow as uow:
                products = uow.products.list_all()
        except SchemaMissingError as exc:
            logger.warning("Listing products on a fresh install: %s", exc)
            return []
        if low_stock_only:
            products = [p for p in products if p.is_low_stock]
        return [to_product_dto(p) for p in products]
