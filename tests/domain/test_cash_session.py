"""Unit tests for the CashSession aggregate."""

from datetime import date, datetime, timezone

import pytest

from bevpos.domain.exceptions import ValidationError
from bevpos.domain.model.cash_session import CashSession, CashSessionStatus
from bevpos.domain.model.value_objects import Money

OPENED = datetime(2026, 3, 14, 11, 0, tzinfo=timezone.utc)
CLOSED = datetime(2026, 3, 14, 23, 0, tzinfo=timezone.utc)


class TestCashSession:

    def test_open(self):
        s = CashSession.open(date(2026, 3, 14), Money.of("100"), OPENED)
        assert s.is_open
        assert s.current_balance == Money.of("100")
        assert s.order_count == 0

    def test_close_records_totals(self):
        s = CashSession.open(date(2026, 3, 14), Money.of("100"), OPENED)
        s.close(Money.of("250.40"), 12, CLOSED)
        assert s.status == CashSessionStatus.CLOSED
        assert s.closed_at == CLOSED
        assert s.order_count == 12
        assert s.current_balance == Money.of("350.40")

    def test_close_twice_rejected(self):
        s = CashSession.open(date(2026, 3, 14), Money.zero(), OPENED)
        s.close(Money.zero(), 0, CLOSED)
        with pytest.raises(ValidationError, match="already closed"):
            s.close(Money.zero(), 0, CLOSED)

    def test_record_totals_replaces_previous(self):
        s = CashSession.open(date(2026, 3, 14), Money.of("50"), OPENED)
        s.record_totals(Money.of("10"), 1)
        s.record_totals(Money.of("30"), 3)
        assert s.accumulated_sales == Money.of("30")
        assert s.order_count == 3
