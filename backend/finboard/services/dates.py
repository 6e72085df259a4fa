from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional


def days_overdue(due_date: date, today: date) -> int:
    """Whole days elapsed since ``due_date``; 0 on the due date and before it."""

    return max(0, (today - due_date).days)


def add_months(start: date, months: int, day: Optional[int] = None) -> date:
    """Shift ``start`` by ``months`` calendar months.

    ``day`` pins the day of month (defaults to ``start.day``) and is clamped to
    the length of the target month, so Jan 31 + 1 month is Feb 28/29.
    """

    index = start.month - 1 + months
    year = start.year + index // 12
    month = index % 12 + 1
    wanted = start.day if day is None else day
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(wanted, last_day)))


@dataclass(frozen=True)
class DateFilter:
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return any(v is not None for v in (self.year, self.month, self.day))

    def matches(self, value: date) -> bool:
        if self.year is not None and value.year != self.year:
            return False
        if self.month is not None and value.month != self.month:
            return False
        if self.day is not None and value.day != self.day:
            return False
        return True
