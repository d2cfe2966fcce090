"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from bevpos.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def last_sequence(self) -> int:
        """Return the highest order sequence allocated so far (0 if none)."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order with its lines.

        Raises ConflictError if its number was already taken.
        """

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist status changes of an existing order."""

    @abstractmethod
    def list_placed_between(
        self,
        start: datetime,
        end: datetime,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        """Orders placed in ``[start, end)``, oldest first."""

    @abstractmethod
    def list_recent(self, status: OrderStatus | None = None, limit: int = 50) -> list[Order]:
        """Most recently placed orders first."""

    @abstractmethod
    def list_pending_fiado(self) -> list[Order]:
        """Unsettled on-credit orders, most recent first."""
