"""Tests for local calendar helpers."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from wealth_ledger.domain.services.calendar_windows import (
    end_of_day_cutoff,
    ensure_utc,
    local_date,
    month_window,
    start_of_day_utc,
    trailing_month_windows,
)

WARSAW = ZoneInfo("Europe/Warsaw")


def test_day_bounds_follow_local_midnight() -> None:
    """Warsaw is UTC+1 in winter and UTC+2 in summer."""
    assert start_of_day_utc(date(2024, 1, 15), WARSAW) == datetime(
        2024, 1, 14, 23, 0, tzinfo=timezone.utc
    )
    assert end_of_day_cutoff(date(2024, 7, 15), WARSAW) == datetime(
        2024, 7, 15, 22, 0, tzinfo=timezone.utc
    )


def test_local_date_of_late_utc_instant_is_next_day() -> None:
    instant = datetime(2024, 1, 31, 23, 30, tzinfo=timezone.utc)

    assert local_date(instant, WARSAW) == date(2024, 2, 1)


def test_ensure_utc_treats_naive_values_as_utc() -> None:
    naive = datetime(2024, 3, 1, 12, 0)

    assert ensure_utc(naive) == datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    aware = datetime(2024, 3, 1, 13, 0, tzinfo=WARSAW)
    assert ensure_utc(aware).tzinfo is timezone.utc


def test_month_window_handles_leap_february() -> None:
    window = month_window(2024, 2)

    assert window.label == "Feb"
    assert window.first_day == date(2024, 2, 1)
    assert window.last_day == date(2024, 2, 29)


def test_trailing_windows_cross_year_boundary() -> None:
    now = datetime(2024, 2, 10, 12, 0, tzinfo=timezone.utc)

    windows = trailing_month_windows(now, 4, WARSAW)

    assert [(w.year, w.month) for w in windows] == [
        (2023, 11),
        (2023, 12),
        (2024, 1),
        (2024, 2),
    ]
    assert [w.label for w in windows] == ["Nov", "Dec", "Jan", "Feb"]
