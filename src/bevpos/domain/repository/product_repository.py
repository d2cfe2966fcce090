"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from bevpos.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its name (case-insensitive), or None."""

    @abstractmethod
    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Return the products that exist among *product_ids*, keyed by ID."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by name."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically take *quantity* units out of stock.

        The decrement only happens if at least *quantity* units are in
        stock at the moment of the write.  Returns False (and changes
        nothing) otherwise.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> None:
        """Atomically put *quantity* units back into stock."""
