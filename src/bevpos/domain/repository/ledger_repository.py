"""Abstract repository for LedgerEntry records.

Entries are immutable, so there is no ``save``: only insert and delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bevpos.domain.model.ledger import LedgerEntry


class LedgerRepository(ABC):

    @abstractmethod
    def get_by_id(self, entry_id: str) -> LedgerEntry | None:
        """Return an entry by its ID, or None."""

    @abstractmethod
    def get_for_order(self, order_id: str) -> LedgerEntry | None:
        """Return the entry booked for an order's payment, or None."""

    @abstractmethod
    def get_for_receipt(self, receipt_id: str) -> LedgerEntry | None:
        """Return the entry booked for a fiado receipt's payment, or None."""

    @abstractmethod
    def add(self, entry: LedgerEntry) -> None:
        """Insert an entry.

        Raises ConflictError if the linked order or receipt already has one.
        """

    @abstractmethod
    def delete(self, entry_id: str) -> None:
        """Remove an entry."""

    @abstractmethod
    def list_recent(self, limit: int = 100) -> list[LedgerEntry]:
        """Newest entries first."""
