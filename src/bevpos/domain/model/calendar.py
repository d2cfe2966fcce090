"""StoreCalendar: maps instants to the shop's business days.

Timestamps are kept in UTC everywhere; a "day" always means a calendar
day in the store's own time zone.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone, tzinfo


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StoreCalendar:

    def __init__(
        self,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._tz = tz
        self._clock = clock

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        moment = self._clock()
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc)

    def today(self) -> date:
        return self.day_of(self.now())

    def day_of(self, moment: datetime) -> date:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(self._tz).date()

    def day_bounds(self, day: date) -> tuple[datetime, datetime]:
        """Half-open UTC interval ``[start, end)`` covering *day* locally."""
        start = datetime.combine(day, time.min, tzinfo=self._tz)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=self._tz)
        return start.astimezone(timezone.utc), end.astimezone(timezone.utc)
