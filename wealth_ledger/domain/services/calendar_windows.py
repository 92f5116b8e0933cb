"""Calendar helpers working in a local time zone.

Month boundaries are computed on local calendar dates and only then turned
into UTC instants, so a transaction late on the last day of a month never
slips into the next one.
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from wealth_ledger.domain.constants import DEFAULT_TIMEZONE_NAME
from wealth_ledger.domain.models import MonthWindow

DEFAULT_TIMEZONE = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive values are UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day_utc(day: date, tz: ZoneInfo) -> datetime:
    """Return the UTC instant at which ``day`` starts in ``tz``."""
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def end_of_day_cutoff(day: date, tz: ZoneInfo) -> datetime:
    """Return the exclusive UTC upper bound of ``day`` in ``tz``."""
    return start_of_day_utc(day + timedelta(days=1), tz)


def local_date(value: datetime, tz: ZoneInfo) -> date:
    """Return the calendar date of an instant in ``tz``."""
    return ensure_utc(value).astimezone(tz).date()


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_window(year: int, month: int) -> MonthWindow:
    """Return the calendar window for one month."""
    last = calendar.monthrange(year, month)[1]
    return MonthWindow(
        year=year,
        month=month,
        label=calendar.month_abbr[month],
        first_day=date(year, month, 1),
        last_day=date(year, month, last),
    )


def trailing_month_windows(
    now: datetime,
    count: int,
    tz: ZoneInfo,
) -> list[MonthWindow]:
    """Return the trailing ``count`` calendar months ending with ``now``'s.

    Args:
        now: Reference instant.
        count: Number of months, including the current one.
        tz: Local time zone defining the calendar.

    Returns:
        list[MonthWindow]: Windows ordered oldest to newest.
    """
    today = local_date(now, tz)
    windows = []
    for offset in range(count - 1, -1, -1):
        year, month = _shift_month(today.year, today.month, -offset)
        windows.append(month_window(year, month))
    return windows


__all__ = [
    "DEFAULT_TIMEZONE",
    "utc_now",
    "ensure_utc",
    "start_of_day_utc",
    "end_of_day_cutoff",
    "local_date",
    "month_window",
    "trailing_month_windows",
]
