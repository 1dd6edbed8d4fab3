"""Unit tests for per-symbol summary statistics"""

from datetime import date
from decimal import Decimal

import pytest

from setupscan.core.aggregator import capital_curve, percentage, sort_details, summarize
from setupscan.core.models import DetailRecord

ZERO = Decimal("0")


def create_record(day, executed=False, profit_loss="0", stop_hit=False, capital="10000"):
    price = Decimal("10")
    return DetailRecord(
        date=day,
        open=price,
        high=price,
        low=price,
        close=price,
        volume=100,
        carry_in_capital=Decimal(capital) - Decimal(profit_loss),
        suggested_entry_price=price,
        executed=executed,
        real_price=price if executed else ZERO,
        lot_size=10 if executed else 0,
        stop_value=price if executed else ZERO,
        stop_hit=stop_hit,
        exit_price=price if executed else ZERO,
        profit_loss=Decimal(profit_loss),
        current_capital=Decimal(capital),
    )


def test_summarize_counts_executed_trades_only():
    details = [
        create_record(date(2025, 1, 6), executed=True, profit_loss="50", capital="10050"),
        create_record(date(2025, 1, 7), executed=True, profit_loss="-20", stop_hit=True, capital="10030"),
        create_record(date(2025, 1, 8), executed=False, capital="10030"),
        create_record(date(2025, 1, 9), executed=True, profit_loss="0", capital="10030"),
    ]

    summary = summarize("VALE3.SA", details, trading_days=8, initial_capital=Decimal("10000"))

    assert summary.symbol == "VALE3.SA"
    assert summary.trading_days == 8
    assert summary.num_trades == 3
    assert summary.trade_percentage == pytest.approx(37.5)
    assert summary.num_profits == 1
    assert summary.profit_percentage == pytest.approx(100 / 3)
    assert summary.num_losses == 1
    assert summary.loss_percentage == pytest.approx(100 / 3)
    assert summary.num_stops == 1
    assert summary.stop_percentage == pytest.approx(100 / 3)
    assert summary.final_capital == Decimal("10030")


def test_no_trades_gives_zero_percentages():
    details = [create_record(date(2025, 1, 6)), create_record(date(2025, 1, 7))]

    summary = summarize("AAPL", details, trading_days=2, initial_capital=Decimal("10000"))

    assert summary.num_trades == 0
    assert summary.trade_percentage == 0.0
    assert summary.profit_percentage == 0.0
    assert summary.loss_percentage == 0.0
    assert summary.stop_percentage == 0.0


def test_empty_details_report_initial_capital():
    summary = summarize("AAPL", [], trading_days=0, initial_capital=Decimal("2500"))

    assert summary.final_capital == Decimal("2500")
    assert summary.trade_percentage == 0.0


def test_percentage_zero_denominator():
    assert percentage(3, 0) == 0.0
    assert percentage(0, 0) == 0.0
    assert percentage(1, 4) == 25.0


def test_sort_details_by_field():
    details = [
        create_record(date(2025, 1, 7), executed=True, profit_loss="5", capital="10005"),
        create_record(date(2025, 1, 6), executed=True, profit_loss="-3", capital="9997"),
        create_record(date(2025, 1, 8), executed=True, profit_loss="9", capital="10009"),
    ]

    newest_first = sort_details(details, "date", descending=True)
    by_pnl = sort_details(details, "profit_loss")

    assert [d.date.day for d in newest_first] == [8, 7, 6]
    assert [d.profit_loss for d in by_pnl] == [Decimal("-3"), Decimal("5"), Decimal("9")]
    # Input order untouched
    assert details[0].date == date(2025, 1, 7)


def test_sort_details_unknown_field():
    with pytest.raises(ValueError):
        sort_details([], "not_a_field")


def test_capital_curve():
    details = [
        create_record(date(2025, 1, 6), capital="10000"),
        create_record(date(2025, 1, 7), executed=True, profit_loss="12.5", capital="10012.5"),
    ]

    assert capital_curve(details) == [
        (date(2025, 1, 6), Decimal("10000")),
        (date(2025, 1, 7), Decimal("10012.5")),
    ]
