"""Reduces a symbol's detail records into summary statistics"""

from datetime import date
from decimal import Decimal
from operator import attrgetter
from typing import List, Sequence, Tuple

from setupscan.core.models import DetailRecord, SymbolSummary


def percentage(count: int, total: int) -> float:
    """count / total * 100, or 0.0 when total is 0."""
    if total <= 0:
        return 0.0
    return count / total * 100


def summarize(
    symbol: str,
    details: Sequence[DetailRecord],
    trading_days: int,
    initial_capital: Decimal
) -> SymbolSummary:
    """
    Compute trade, profit, loss and stop statistics for one symbol.

    Profits, losses and stops are counted among executed trades only, and
    their percentages are relative to the number of executed trades.

    Args:
        symbol: Instrument identifier
        details: Detail records in ascending date order
        trading_days: Business days in the whole requested window
        initial_capital: Capital reported when there are no records

    Returns:
        SymbolSummary
    """
    executed = [d for d in details if d.executed]
    num_trades = len(executed)
    num_profits = sum(1 for d in executed if d.profit_loss > 0)
    num_losses = sum(1 for d in executed if d.profit_loss < 0)
    num_stops = sum(1 for d in executed if d.stop_hit)

    final_capital = details[-1].current_capital if details else initial_capital

    return SymbolSummary(
        symbol=symbol,
        trading_days=trading_days,
        num_trades=num_trades,
        trade_percentage=percentage(num_trades, trading_days),
        num_profits=num_profits,
        profit_percentage=percentage(num_profits, num_trades),
        num_losses=num_losses,
        loss_percentage=percentage(num_losses, num_trades),
        num_stops=num_stops,
        stop_percentage=percentage(num_stops, num_trades),
        final_capital=final_capital,
    )


def sort_details(details: Sequence[DetailRecord], field: str = "date", descending: bool = False) -> List[DetailRecord]:
    """
    Sort detail records by any record field for display.

    Args:
        details: Detail records
        field: DetailRecord attribute name
        descending: Sort direction

    Returns:
        New sorted list (input is left untouched)

    Raises:
        ValueError: If field is not a DetailRecord attribute
    """
    if field not in DetailRecord.__dataclass_fields__:
        raise ValueError(f"Unknown detail field '{field}'")
    return sorted(details, key=attrgetter(field), reverse=descending)


def capital_curve(details: Sequence[DetailRecord]) -> List[Tuple[date, Decimal]]:
    """(date, current_capital) points in record order."""
    return [(d.date, d.current_capital) for d in details]
