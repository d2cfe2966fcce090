"""Abstract unit of work: the transactional boundary of every use case.

A handler enters the unit of work, talks to the repositories it exposes,
and calls ``commit()``.  Leaving the ``with`` block without committing,
or because of an exception, rolls every write back.  A unit of work can
be entered again after it exits; each entry starts a fresh transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bevpos.domain.repository.cash_session_repository import CashSessionRepository
from bevpos.domain.repository.fiado_repository import FiadoReceiptRepository
from bevpos.domain.repository.ledger_repository import LedgerRepository
from bevpos.domain.repository.order_repository import OrderRepository
from bevpos.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    cash_sessions: CashSessionRepository
    ledger: LedgerRepository
    fiado_receipts: FiadoReceiptRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write of this unit visible to other readers."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted write (no-op after a commit)."""
