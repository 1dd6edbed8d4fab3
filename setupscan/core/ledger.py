"""Capital ledger: folds the bar simulator over a symbol's time series"""

from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from setupscan.core.calendar import business_day_bars
from setupscan.core.errors import NoDataError
from setupscan.core.models import Bar, DetailRecord, Granularity, TradingSetup
from setupscan.core.simulator import select_reference_price, simulate_unit


def build_units(bars: Sequence[Bar], granularity: Granularity) -> List[Bar]:
    """
    Turn a daily series into evaluation units.

    DAYTRADE evaluates every business-day bar. WEEKLY, MONTHLY and YEARLY
    collapse the whole range into a single synthetic unit: date and open of
    the first business-day bar, high, low, close and volume of the last one.
    The range is not split into weeks, months or years.

    Args:
        bars: Daily bars in ascending date order
        granularity: Evaluation granularity

    Returns:
        Units in ascending date order (empty if no business-day bar exists)
    """
    session_bars = business_day_bars(bars)
    if granularity is Granularity.DAYTRADE or not session_bars:
        return session_bars

    first, last = session_bars[0], session_bars[-1]
    return [
        Bar(
            date=first.date,
            open=first.open,
            high=last.high,
            low=last.low,
            close=last.close,
            volume=last.volume,
        )
    ]


def fold_units(units: Sequence[Bar], setup: TradingSetup) -> Tuple[List[DetailRecord], Decimal]:
    """
    Left fold of the simulator over units, threading capital forward.

    Each record's current_capital is the next unit's carry-in capital, and
    each unit's reference price comes from the previous unit.

    Args:
        units: Evaluation units in ascending date order
        setup: Trading setup

    Returns:
        Tuple of (detail records, final capital)
    """
    details: List[DetailRecord] = []
    capital = setup.initial_capital
    previous: Optional[Bar] = None

    for unit in units:
        reference = select_reference_price(previous, unit, setup.reference_price)
        record = simulate_unit(unit, reference, capital, setup)
        details.append(record)
        capital = record.current_capital
        previous = unit

    return details, capital


def run_ledger(bars: Sequence[Bar], setup: TradingSetup, symbol: Optional[str] = None) -> List[DetailRecord]:
    """
    Produce the ordered detail records for one symbol.

    Args:
        bars: Daily bars in ascending date order
        setup: Trading setup
        symbol: Symbol name, used in error messages only

    Returns:
        Detail records, one per evaluation unit

    Raises:
        NoDataError: If the series has no evaluable unit
    """
    units = build_units(bars, setup.granularity)
    if not units:
        raise NoDataError(
            f"No business-day bars to evaluate for {symbol or 'symbol'} "
            f"({len(bars)} bars received)",
            symbol=symbol
        )

    details, _ = fold_units(units, setup)
    return details
