"""Utility functions for SetupScan"""

from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Union

Number = Union[Decimal, int, float, str]


def to_decimal(value: Any) -> Decimal:
    """
    Convert a number or numeric string to Decimal without binary noise.

    Floats go through their shortest repr, so 0.1 becomes Decimal("0.1").

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Decimal value

    Raises:
        ValueError: If value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def epoch_to_date(timestamp: int) -> date:
    """
    Convert Unix epoch seconds to a calendar date (UTC).

    Args:
        timestamp: Unix timestamp in seconds

    Returns:
        UTC calendar date
    """
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc).date()


def start_of_day_epoch(day: date) -> int:
    """Epoch seconds at 00:00:00 UTC of the given day."""
    return int(datetime.combine(day, time.min, tzinfo=timezone.utc).timestamp())


def end_of_day_epoch(day: date) -> int:
    """Epoch seconds at 23:59:59 UTC of the given day."""
    return int(datetime.combine(day, time(23, 59, 59), tzinfo=timezone.utc).timestamp())


def format_money(value: Number, decimals: int = 2) -> str:
    """
    Format a monetary value with thousands separators.

    Args:
        value: Amount
        decimals: Decimal places to display

    Returns:
        Formatted string, e.g. "9,900.01"
    """
    return f"{to_decimal(value):,.{decimals}f}"


def format_percent(value: Number, decimals: int = 2) -> str:
    """Format a percentage value, e.g. 33.333 -> "33.33%"."""
    return f"{to_decimal(value):.{decimals}f}%"
