"""Application service: List Orders use case (query)."""

from __future__ import annotations

import logging

from bevpos.application.dto import OrderDTO, to_order_dto
from bevpos.domain.exceptions import SchemaMissingError, ValidationError
from bevpos.domain.model.order import OrderStatus
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, status: str | None = None, limit: int = 50) -> list[OrderDTO]:
        wanted = None
        if status:
            try:
                wanted = OrderStatus(status.strip().lower())
            except ValueError as exc:
                raise ValidationError(f"Unknown order status: {status!r}") from exc

        try:
            with self._uow as uow:
                orders = uow.orders.list_recent(status=wanted, limit=limit)
        except SchemaMissingError as exc:
            logger.warning("Listing orders on a fresh install: %s", exc)
            return []
        return [to_order_dto(order) for order in orders]
