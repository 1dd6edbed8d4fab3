"""Business-day calendar (Mon-Fri, no holidays)"""

from datetime import date, timedelta
from typing import Iterable, List

from setupscan.core.models import Bar

SATURDAY = 5
SUNDAY = 6


def is_business_day(day: date) -> bool:
    """
    Check if a date is a tradable weekday.

    No holiday calendar is applied: only Saturday and Sunday are excluded.

    Args:
        day: Calendar date

    Returns:
        True for Monday through Friday
    """
    return day.weekday() not in (SATURDAY, SUNDAY)


def count_business_days(start: date, end: date) -> int:
    """
    Count business days in [start, end], both ends inclusive.

    Args:
        start: First day of the range
        end: Last day of the range

    Returns:
        Number of weekdays in the range (0 if start > end)
    """
    count = 0
    current = start
    while current <= end:
        if is_business_day(current):
            count += 1
        current += timedelta(days=1)
    return count


def business_day_bars(bars: Iterable[Bar]) -> List[Bar]:
    """Keep only the bars that fall on a business day, preserving order."""
    return [bar for bar in bars if is_business_day(bar.date)]
