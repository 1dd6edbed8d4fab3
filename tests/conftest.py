"""Shared fixtures for SetupScan tests"""

from datetime import date, datetime, time, timezone

import pytest

from setupscan.core.models import Bar, TradingSetup
from setupscan.utils.helpers import to_decimal


@pytest.fixture
def make_bar():
    """Factory for Bar objects from plain numbers."""
    def _make(day, open, high, low, close, volume=1000):
        return Bar(
            date=day,
            open=to_decimal(open),
            high=to_decimal(high),
            low=to_decimal(low),
            close=to_decimal(close),
            volume=volume
        )
    return _make


@pytest.fixture
def make_setup():
    """Factory for TradingSetup with the default BUY 1%/1% 10000 setup."""
    def _make(**overrides):
        fields = {
            "operation": "BUY",
            "reference_price": "PREV_CLOSE",
            "entry_percentage": "1",
            "stop_percentage": "1",
            "initial_capital": "10000",
            "period": "1M",
            "granularity": "DAYTRADE",
            "symbols": ["PETR4.SA"],
        }
        fields.update(overrides)
        return TradingSetup(**fields)
    return _make


@pytest.fixture
def make_chart_payload():
    """Factory for provider chart payloads keyed by calendar date."""
    def _make(days, opens, highs, lows, closes, volumes=None):
        timestamps = [
            int(datetime.combine(day, time(13, 0), tzinfo=timezone.utc).timestamp())
            for day in days
        ]
        return {
            "chart": {
                "result": [{
                    "timestamp": timestamps,
                    "indicators": {
                        "quote": [{
                            "open": opens,
                            "high": highs,
                            "low": lows,
                            "close": closes,
                            "volume": volumes if volumes is not None else [1000] * len(days),
                        }]
                    }
                }]
            }
        }
    return _make


@pytest.fixture
def week_days():
    """Monday 2025-01-06 through Friday 2025-01-10."""
    return [date(2025, 1, d) for d in range(6, 11)]
