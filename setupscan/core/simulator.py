"""Bar simulator: one synthetic limit entry and one stop-loss exit per unit

Each evaluation unit (a session in DAYTRADE mode, or a whole window in the
period modes) gets a limit order offset from a reference price. If the
unit's range touches the order it fills, sized with all available capital,
and is closed either at the stop or at the unit's close.
"""

from decimal import Decimal
from typing import Optional

from setupscan.core.models import Bar, DetailRecord, Operation, ReferencePrice, TradingSetup

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def select_reference_price(
    previous: Optional[Bar],
    current: Bar,
    reference_price: ReferencePrice
) -> Decimal:
    """
    Pick the price the entry offset is measured from.

    The first unit has no predecessor and always uses its own open,
    whatever reference option is configured.

    Args:
        previous: Previous evaluation unit, None for the first one
        current: Unit being evaluated
        reference_price: Configured reference option

    Returns:
        Reference price
    """
    if previous is None:
        return current.open

    if reference_price is ReferencePrice.OPEN:
        return previous.open
    elif reference_price is ReferencePrice.HIGH:
        return previous.high
    elif reference_price is ReferencePrice.LOW:
        return previous.low
    else:  # PREV_CLOSE
        return previous.close


def suggested_entry_price(reference: Decimal, operation: Operation, entry_percentage: Decimal) -> Decimal:
    """BUY below the reference (pullback), SELL above it (rally)."""
    if operation is Operation.BUY:
        return reference * (1 - entry_percentage / HUNDRED)
    return reference * (1 + entry_percentage / HUNDRED)


def stop_price(entry: Decimal, operation: Operation, stop_percentage: Decimal) -> Decimal:
    """Stop-loss level on the losing side of the entry."""
    if operation is Operation.BUY:
        return entry * (1 - stop_percentage / HUNDRED)
    return entry * (1 + stop_percentage / HUNDRED)


def lot_size_for(capital: Decimal, entry: Decimal) -> int:
    """
    Whole number of shares affordable with all available capital.

    Args:
        capital: Carry-in capital
        entry: Entry price (positive)

    Returns:
        floor(capital / entry), never below 0
    """
    if capital <= 0:
        return 0
    return int(capital // entry)


def simulate_unit(
    unit: Bar,
    reference: Decimal,
    carry_in_capital: Decimal,
    setup: TradingSetup
) -> DetailRecord:
    """
    Evaluate one unit against the setup.

    Args:
        unit: Session bar, or synthetic window bar in period modes
        reference: Reference price chosen by select_reference_price
        carry_in_capital: Capital available when the unit starts
        setup: Trading setup (operation, entry and stop offsets)

    Returns:
        DetailRecord with entry, sizing, stop, exit and capital fields
    """
    operation = setup.operation
    entry = suggested_entry_price(reference, operation, setup.entry_percentage)

    if operation is Operation.BUY:
        executed = unit.low <= entry
    else:
        executed = unit.high >= entry

    if not executed:
        return DetailRecord(
            date=unit.date,
            open=unit.open,
            high=unit.high,
            low=unit.low,
            close=unit.close,
            volume=unit.volume,
            carry_in_capital=carry_in_capital,
            suggested_entry_price=entry,
            executed=False,
            real_price=ZERO,
            lot_size=0,
            stop_value=ZERO,
            stop_hit=False,
            exit_price=ZERO,
            profit_loss=ZERO,
            current_capital=carry_in_capital,
        )

    lot_size = lot_size_for(carry_in_capital, entry)
    stop_value = stop_price(entry, operation, setup.stop_percentage)

    if operation is Operation.BUY:
        stop_hit = unit.low <= stop_value
    else:
        stop_hit = unit.high >= stop_value

    # Forced exit at the unit's close when the stop is not touched
    exit_price = stop_value if stop_hit else unit.close

    if operation is Operation.BUY:
        profit_loss = (exit_price - entry) * lot_size
    else:
        profit_loss = (entry - exit_price) * lot_size

    return DetailRecord(
        date=unit.date,
        open=unit.open,
        high=unit.high,
        low=unit.low,
        close=unit.close,
        volume=unit.volume,
        carry_in_capital=carry_in_capital,
        suggested_entry_price=entry,
        executed=True,
        real_price=entry,
        lot_size=lot_size,
        stop_value=stop_value,
        stop_hit=stop_hit,
        exit_price=exit_price,
        profit_loss=profit_loss,
        current_capital=carry_in_capital + profit_loss,
    )
