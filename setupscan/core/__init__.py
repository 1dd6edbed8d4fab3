"""
Core simulation modules.

This package contains the pure components of the SetupScan engine:
- models: Setup, bar, detail and summary data model
- calendar: Business-day classification and counting
- window: Lookback period to date-window resolution
- simulator: Single-unit entry/stop/exit simulation
- ledger: Capital-compounding fold over a time series
- aggregator: Per-symbol summary statistics
- catalog: Market indices and their constituents
"""

from setupscan.core.errors import (
    SetupScanError,
    ProviderUnavailableError,
    NoDataError,
    InvalidSetupError,
    EmptyBatchError
)
from setupscan.core.models import (
    Operation,
    ReferencePrice,
    Period,
    Granularity,
    Bar,
    TradingSetup,
    DetailRecord,
    SymbolSummary
)
from setupscan.core.calendar import is_business_day, count_business_days
from setupscan.core.window import TimeWindow, resolve_window
from setupscan.core.simulator import select_reference_price, simulate_unit
from setupscan.core.ledger import build_units, fold_units, run_ledger
from setupscan.core.aggregator import summarize, sort_details, capital_curve
from setupscan.core.catalog import symbols_for

__all__ = [
    "SetupScanError",
    "ProviderUnavailableError",
    "NoDataError",
    "InvalidSetupError",
    "EmptyBatchError",
    "Operation",
    "ReferencePrice",
    "Period",
    "Granularity",
    "Bar",
    "TradingSetup",
    "DetailRecord",
    "SymbolSummary",
    "is_business_day",
    "count_business_days",
    "TimeWindow",
    "resolve_window",
    "select_reference_price",
    "simulate_unit",
    "build_units",
    "fold_units",
    "run_ledger",
    "summarize",
    "sort_details",
    "capital_curve",
    "symbols_for"
]
