"""Lookback period to date-window resolution"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

import pandas as pd

from setupscan.core.errors import InvalidSetupError
from setupscan.core.models import Period
from setupscan.utils.helpers import end_of_day_epoch, start_of_day_epoch

# Calendar offsets subtracted from "now" for each fixed period
PERIOD_OFFSETS = {
    Period.ONE_MONTH: pd.DateOffset(months=1),
    Period.TWO_MONTHS: pd.DateOffset(months=2),
    Period.THREE_MONTHS: pd.DateOffset(months=3),
    Period.SIX_MONTHS: pd.DateOffset(months=6),
    Period.ONE_YEAR: pd.DateOffset(years=1),
}


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive date range requested from the provider."""

    start: date
    end: date

    @property
    def period1(self) -> int:
        """Epoch seconds at the start of the first day (provider contract)."""
        return start_of_day_epoch(self.start)

    @property
    def period2(self) -> int:
        """Epoch seconds at the end of the last day (provider contract)."""
        return end_of_day_epoch(self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


def resolve_window(
    period: Optional[Period],
    custom_start: Optional[date],
    now: Union[date, datetime]
) -> TimeWindow:
    """
    Resolve a lookback period into a concrete date window ending today.

    The offset moves to the same day number in the target month. A day that
    does not exist there rolls over into the next month (31 March minus one
    month is 3 March, or 2 March in a leap year).

    Args:
        period: Selected lookback period
        custom_start: Start date, required for Period.CUSTOM
        now: Current date or datetime; the window ends on its date

    Returns:
        TimeWindow covering [start, today]

    Raises:
        InvalidSetupError: If the period is missing, or a CUSTOM period has
            no start date or one in the future
    """
    today = now.date() if isinstance(now, datetime) else now

    if period is None:
        raise InvalidSetupError("A period must be selected before running the setup")

    if period is Period.CUSTOM:
        if custom_start is None:
            raise InvalidSetupError("A CUSTOM period requires a start date")
        if custom_start > today:
            raise InvalidSetupError(
                f"Custom start date {custom_start.isoformat()} is in the future "
                f"(today is {today.isoformat()})"
            )
        return TimeWindow(start=custom_start, end=today)

    # Offset from the 1st so DateOffset never clamps, then add the day back
    first = pd.Timestamp(today.replace(day=1)) - PERIOD_OFFSETS[period]
    start = (first + pd.Timedelta(days=today.day - 1)).date()
    return TimeWindow(start=start, end=today)
