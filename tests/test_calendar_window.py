"""Unit tests for the business-day calendar and window resolution"""

from datetime import date, datetime

import pytest

from setupscan.core.calendar import business_day_bars, count_business_days, is_business_day
from setupscan.core.errors import InvalidSetupError
from setupscan.core.models import Period
from setupscan.core.window import TimeWindow, resolve_window


def test_is_business_day():
    assert is_business_day(date(2025, 1, 6)) is True   # Monday
    assert is_business_day(date(2025, 1, 10)) is True  # Friday
    assert is_business_day(date(2025, 1, 11)) is False  # Saturday
    assert is_business_day(date(2025, 1, 12)) is False  # Sunday


def test_count_business_days_inclusive():
    # Monday to Sunday
    assert count_business_days(date(2025, 1, 6), date(2025, 1, 12)) == 5
    # Single Monday
    assert count_business_days(date(2025, 1, 6), date(2025, 1, 6)) == 1
    # Weekend only
    assert count_business_days(date(2025, 1, 11), date(2025, 1, 12)) == 0


def test_count_business_days_empty_range():
    assert count_business_days(date(2025, 1, 10), date(2025, 1, 6)) == 0


def test_count_business_days_ignores_holidays():
    # 2024-12-31 to 2025-01-31, New Year's Day still counts
    assert count_business_days(date(2024, 12, 31), date(2025, 1, 31)) == 24


def test_business_day_bars(make_bar):
    bars = [
        make_bar(date(2025, 1, 10), 1, 1, 1, 1),
        make_bar(date(2025, 1, 11), 1, 1, 1, 1),
        make_bar(date(2025, 1, 13), 1, 1, 1, 1),
    ]

    assert [b.date.day for b in business_day_bars(bars)] == [10, 13]


def test_resolve_fixed_periods():
    now = datetime(2025, 6, 15, 18, 30)

    assert resolve_window(Period.ONE_MONTH, None, now) == TimeWindow(date(2025, 5, 15), date(2025, 6, 15))
    assert resolve_window(Period.TWO_MONTHS, None, now).start == date(2025, 4, 15)
    assert resolve_window(Period.THREE_MONTHS, None, now).start == date(2025, 3, 15)
    assert resolve_window(Period.SIX_MONTHS, None, now).start == date(2024, 12, 15)
    assert resolve_window(Period.ONE_YEAR, None, now).start == date(2024, 6, 15)


def test_month_offset_rolls_past_short_month():
    """31 March minus 1M is "31 February", which rolls over to 3 March."""
    window = resolve_window(Period.ONE_MONTH, None, date(2025, 3, 31))

    assert window.start == date(2025, 3, 3)


def test_month_offsets_roll_over_from_month_end():
    assert resolve_window(Period.ONE_MONTH, None, date(2024, 3, 31)).start == date(2024, 3, 2)
    assert resolve_window(Period.THREE_MONTHS, None, date(2025, 5, 31)).start == date(2025, 3, 3)
    assert resolve_window(Period.SIX_MONTHS, None, date(2025, 8, 31)).start == date(2025, 3, 3)


def test_month_end_run_changes_trading_days():
    window = resolve_window(Period.ONE_MONTH, None, date(2025, 3, 31))

    # Monday 3 March through Monday 31 March
    assert count_business_days(window.start, window.end) == 21


def test_year_offset_from_leap_day():
    window = resolve_window(Period.ONE_YEAR, None, date(2024, 2, 29))

    assert window.start == date(2023, 3, 1)


def test_resolve_custom_period():
    window = resolve_window(Period.CUSTOM, date(2025, 1, 2), date(2025, 2, 1))

    assert window == TimeWindow(date(2025, 1, 2), date(2025, 2, 1))


def test_custom_start_today_is_allowed():
    window = resolve_window(Period.CUSTOM, date(2025, 2, 1), date(2025, 2, 1))

    assert window.start == window.end


def test_custom_start_in_future_is_rejected():
    with pytest.raises(InvalidSetupError):
        resolve_window(Period.CUSTOM, date(2025, 2, 2), date(2025, 2, 1))


def test_custom_without_start_is_rejected():
    with pytest.raises(InvalidSetupError):
        resolve_window(Period.CUSTOM, None, date(2025, 2, 1))


def test_missing_period_is_rejected():
    with pytest.raises(InvalidSetupError):
        resolve_window(None, None, date(2025, 2, 1))


def test_window_epoch_bounds():
    window = TimeWindow(date(2025, 1, 6), date(2025, 1, 6))

    assert window.period1 == 1736121600
    assert window.period2 == 1736121600 + 86399
    assert window.contains(date(2025, 1, 6))
    assert not window.contains(date(2025, 1, 7))
    assert str(window) == "2025-01-06 to 2025-01-06"
