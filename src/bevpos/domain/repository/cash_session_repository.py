"""Abstract repository for CashSession aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from bevpos.domain.model.cash_session import CashSession


class CashSessionRepository(ABC):

    @abstractmethod
    def get_open(self) -> CashSession | None:
        """Return the most recently opened session that is still open."""

    @abstractmethod
    def get_open_for_day(self, business_day: date) -> CashSession | None:
        """Return the open session of *business_day*, or None."""

    @abstractmethod
    def get_latest_for_day(self, business_day: date) -> CashSession | None:
        """Return the last session opened on *business_day*, open or closed."""

    @abstractmethod
    def add(self, session: CashSession) -> None:
        """Insert a new session.

        Raises ConflictError if another session is already open that day.
        """

    @abstractmethod
    def save(self, session: CashSession) -> None:
        """Persist changes to an existing session."""
