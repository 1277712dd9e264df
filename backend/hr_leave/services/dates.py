"""Calendar helpers shared by the balance, report and paid-limit services.

Every helper accepts ``date`` or ``datetime`` and works on calendar dates:
datetimes are truncated to their date before any arithmetic, so sub-day
timestamps never shift a day count.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from collections.abc import Iterator


def as_date(value: date | datetime, tz: str | None = None) -> date:
    """Normalize a date or datetime to a calendar date.

    Aware datetimes are converted to ``tz`` first, so a timestamp stored
    in UTC lands on the employee's local calendar day. Naive datetimes
    are taken as already local.
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(ZoneInfo(tz))
        return value.date()
    return value


def day_span(start: date | datetime, end: date | datetime) -> int:
    """Inclusive number of calendar days from start to end (same day = 1)."""
    start_day = as_date(start)
    end_day = as_date(end)
    if end_day < start_day:
        msg = f"end {end_day} is before start {start_day}"
        raise ValueError(msg)
    return (end_day - start_day).days + 1


def months_elapsed(from_date: date | datetime, to_date: date | datetime) -> int:
    """Whole calendar months between two dates, rounded down.

    Jan 15 -> Feb 10 is 0 months, Jan 15 -> Feb 20 is 1.
    """
    start = as_date(from_date)
    end = as_date(to_date)
    if end < start:
        msg = f"to_date {end} is before from_date {start}"
        raise ValueError(msg)
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months


def start_of_month(value: date | datetime) -> date:
    return as_date(value).replace(day=1)


def end_of_month(value: date | datetime) -> date:
    day = as_date(value)
    _, days_in_month = monthrange(day.year, day.month)
    return day.replace(day=days_in_month)


def add_months(value: date | datetime, months: int) -> date:
    """Shift by whole months, clamping to the last day of shorter months."""
    return as_date(value) + relativedelta(months=months)


def start_of_year(value: date | datetime) -> date:
    return date(as_date(value).year, 1, 1)


def month_key(value: date | datetime) -> str:
    """Canonical report label for the month containing value, e.g. "March 2025"."""
    return as_date(value).strftime("%B %Y")


def iter_month_starts(start: date | datetime, end: date | datetime) -> Iterator[date]:
    """Yield the first day of every month touched by the inclusive range."""
    current = start_of_month(start)
    last = start_of_month(end)
    while current <= last:
        yield current
        current = add_months(current, 1)


def business_days(start: date | datetime, end: date | datetime) -> int:
    """Inclusive count of Monday-Friday dates in the range (0 if end < start)."""
    current = as_date(start)
    last = as_date(end)
    one_day = timedelta(days=1)
    count = 0
    while current <= last:
        # Skip weekends.
        if current.weekday() < 5:
            count += 1
        current += one_day
    return count
