from __future__ import annotations

import calendar
from datetime import date, datetime, time


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def previous_month(today: date) -> tuple[int, int]:
    """Return (month, year) of the calendar month before ``today``."""
    if today.month == 1:
        return 12, today.year - 1
    return today.month - 1, today.year


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """First and last instant of a calendar month (both inclusive)."""
    last_day = calendar.monthrange(year, month)[1]
    start = datetime.combine(date(year, month, 1), time.min)
    end = datetime.combine(date(year, month, last_day), time.max)
    return start, end


def format_long_date(value: datetime) -> str:
    """Format like ``March 1, 2024``."""
    return f"{calendar.month_name[value.month]} {value.day}, {value.year}"
