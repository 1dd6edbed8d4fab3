"""Unit tests for BarDataSource (http and file sources)"""

from datetime import date
from decimal import Decimal

import pytest

from setupscan.core.errors import NoDataError
from setupscan.core.window import TimeWindow
from setupscan_backtest.data_source import BarDataSource

WINDOW = TimeWindow(date(2025, 1, 6), date(2025, 1, 8))


class FakeChartClient:
    def __init__(self, payload):
        self.payload = payload
        self.requests = []

    def get_historical(self, symbol, period1, period2):
        self.requests.append((symbol, period1, period2))
        return self.payload


def write_csv(path, rows):
    lines = ["date,open,high,low,close,volume"] + rows
    path.write_text("\n".join(lines) + "\n")


def test_csv_source_filters_window(tmp_path):
    write_csv(tmp_path / "PETR4.SA.csv", [
        "2025-01-03,30.0,31.0,29.5,30.5,1000",
        "2025-01-06,30.5,31.2,30.1,31.0,1200",
        "2025-01-07,31.0,31.5,30.7,31.1,",
        "2025-01-08,31.1,32.0,31.0,31.9,900",
        "2025-01-09,31.9,32.2,31.5,32.0,800",
    ])
    source = BarDataSource("csv", data_dir=str(tmp_path))

    bars = source.load("PETR4.SA", WINDOW)

    assert [b.date for b in bars] == [date(2025, 1, 6), date(2025, 1, 7), date(2025, 1, 8)]
    assert bars[0].low == Decimal("30.1")
    assert bars[1].volume == 0


def test_csv_source_sorts_unordered_rows(tmp_path):
    write_csv(tmp_path / "AAPL.csv", [
        "2025-01-07,10,11,9,10,100",
        "2025-01-06,10,11,9,10,100",
    ])

    bars = BarDataSource("csv", data_dir=str(tmp_path)).load("AAPL", WINDOW)

    assert [b.date.day for b in bars] == [6, 7]


def test_csv_missing_file(tmp_path):
    source = BarDataSource("csv", data_dir=str(tmp_path))

    with pytest.raises(NoDataError):
        source.load("MISSING", WINDOW)


def test_csv_missing_column(tmp_path):
    (tmp_path / "AAPL.csv").write_text("date,open,high,low\n2025-01-06,1,2,1\n")
    source = BarDataSource("csv", data_dir=str(tmp_path))

    with pytest.raises(NoDataError):
        source.load("AAPL", WINDOW)


def test_csv_nothing_inside_window(tmp_path):
    write_csv(tmp_path / "AAPL.csv", ["2024-12-02,10,11,9,10,100"])
    source = BarDataSource("csv", data_dir=str(tmp_path))

    with pytest.raises(NoDataError):
        source.load("AAPL", WINDOW)


def test_http_source_uses_window_epochs(make_chart_payload):
    days = [date(2025, 1, 3), date(2025, 1, 6), date(2025, 1, 7)]
    payload = make_chart_payload(days, [10, 11, 12], [11, 12, 13], [9, 10, 11], [10, 11, 12])
    client = FakeChartClient(payload)
    source = BarDataSource("http", client=client)

    bars = source.load("VALE3.SA", WINDOW)

    assert client.requests == [("VALE3.SA", WINDOW.period1, WINDOW.period2)]
    # Padding outside the window is dropped
    assert [b.date for b in bars] == [date(2025, 1, 6), date(2025, 1, 7)]


def test_invalid_source_configuration(tmp_path):
    with pytest.raises(ValueError):
        BarDataSource("ftp")
    with pytest.raises(ValueError):
        BarDataSource("http")
    with pytest.raises(ValueError):
        BarDataSource("csv")
