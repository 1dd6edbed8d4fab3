"""Unit tests for the capital ledger

Tests verify that:
1. Capital compounds from one unit to the next
2. Weekend bars are never evaluated
3. WEEKLY/MONTHLY/YEARLY collapse the whole range into ONE synthetic unit
4. Re-running on the same input yields identical records
"""

from datetime import date
from decimal import Decimal

import pytest

from setupscan.core.errors import NoDataError
from setupscan.core.ledger import build_units, fold_units, run_ledger
from setupscan.core.models import Granularity


def create_trending_bars(make_bar, days):
    """Five sessions that each dip below the previous close and recover."""
    prices = [
        (100, 103, 98, 102),
        (102, 104, 100, 103),
        (103, 103, 99, 100),
        (100, 106, 98, 105),
        (105, 107, 104, 106),
    ]
    return [make_bar(day, *p) for day, p in zip(days, prices)]


def test_capital_is_carried_forward(make_bar, make_setup, week_days):
    bars = create_trending_bars(make_bar, week_days)
    setup = make_setup()

    details = run_ledger(bars, setup)

    assert len(details) == 5
    assert details[0].carry_in_capital == setup.initial_capital
    for prev, curr in zip(details, details[1:]):
        assert curr.carry_in_capital == prev.current_capital


def test_fold_returns_last_capital(make_bar, make_setup, week_days):
    bars = create_trending_bars(make_bar, week_days)

    details, final_capital = fold_units(bars, make_setup())

    assert final_capital == details[-1].current_capital


def test_reference_comes_from_previous_unit(make_bar, make_setup, week_days):
    bars = create_trending_bars(make_bar, week_days)

    details = run_ledger(bars, make_setup(reference_price="PREV_CLOSE"))

    # Second session: previous close 102 -> entry 100.98
    assert details[1].suggested_entry_price == Decimal("100.98")


def test_first_unit_ignores_reference_option(make_bar, make_setup):
    """The first unit has no predecessor and anchors on its own open."""
    bar = make_bar(date(2025, 1, 6), 100, 150, 90, 120)

    record = run_ledger([bar], make_setup(reference_price="HIGH"))[0]

    assert record.suggested_entry_price == Decimal("99")


def test_weekend_bars_are_skipped(make_bar, make_setup):
    bars = [
        make_bar(date(2025, 1, 10), 100, 101, 99, 100),  # Friday
        make_bar(date(2025, 1, 11), 100, 101, 99, 100),  # Saturday
        make_bar(date(2025, 1, 12), 100, 101, 99, 100),  # Sunday
        make_bar(date(2025, 1, 13), 100, 101, 99, 100),  # Monday
    ]

    details = run_ledger(bars, make_setup())

    assert [d.date for d in details] == [date(2025, 1, 10), date(2025, 1, 13)]


def test_only_weekend_bars_raises_no_data(make_bar, make_setup):
    bars = [make_bar(date(2025, 1, 11), 100, 101, 99, 100)]

    with pytest.raises(NoDataError):
        run_ledger(bars, make_setup(), "PETR4.SA")


@pytest.mark.parametrize("granularity", ["WEEKLY", "MONTHLY", "YEARLY"])
def test_period_modes_collapse_to_single_unit(make_bar, make_setup, week_days, granularity):
    """The whole range becomes one trade, not one trade per week/month/year."""
    bars = create_trending_bars(make_bar, week_days)

    details = run_ledger(bars, make_setup(granularity=granularity))

    assert len(details) == 1
    record = details[0]
    assert record.date == week_days[0]
    assert record.open == Decimal("100")
    assert record.high == Decimal("107")
    assert record.low == Decimal("104")
    assert record.close == Decimal("106")
    # Reference is the synthetic unit's open
    assert record.suggested_entry_price == Decimal("99")
    # Last bar's low 104 does not reach 99
    assert record.executed is False


def test_build_units_daytrade_keeps_every_session(make_bar, week_days):
    bars = create_trending_bars(make_bar, week_days)

    assert build_units(bars, Granularity.DAYTRADE) == bars


def test_build_units_empty_series():
    assert build_units([], Granularity.MONTHLY) == []


def test_rerun_is_identical(make_bar, make_setup, week_days):
    bars = create_trending_bars(make_bar, week_days)
    setup = make_setup(reference_price="LOW", entry_percentage="0.5", stop_percentage="2")

    assert run_ledger(bars, setup) == run_ledger(bars, setup)
