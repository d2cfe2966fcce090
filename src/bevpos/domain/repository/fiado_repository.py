"""Abstract repository for FiadoReceipt records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bevpos.domain.model.fiado import FiadoReceipt


class FiadoReceiptRepository(ABC):

    @abstractmethod
    def get_by_id(self, receipt_id: str) -> FiadoReceipt | None:
        """Return a receipt by its ID, or None."""

    @abstractmethod
    def add(self, receipt: FiadoReceipt) -> None:
        """Insert a new receipt."""

    @abstractmethod
    def save(self, receipt: FiadoReceipt) -> None:
        """Persist changes to an existing receipt."""

    @abstractmethod
    def delete(self, receipt_id: str) -> None:
        """Remove a receipt."""

    @abstractmethod
    def list_unpaid(self) -> list[FiadoReceipt]:
        """Receipts not yet paid, most recent first."""
