"""SetupScan Backtest - batch runner for trading setups.

This package runs one TradingSetup over many symbols:
- Loads daily bars from the chart provider (HTTP) or local CSV/Parquet files
- Folds the setupscan bar simulator over each series
- Isolates per-symbol failures so the rest of the batch still completes
- Exports summaries, detail records and capital curves

Usage:
    python -m setupscan_backtest --symbols PETR4.SA VALE3.SA --period 3M --granularity DAYTRADE

Package structure:
- config: BatchConfig dataclass
- api_client: ChartApiClient for the /historical endpoint
- data_source: BarDataSource for loading bars
- engine: BatchEngine for batch orchestration
- reporting: BatchReporter for results export
- cli: Command-line interface
"""

__version__ = "1.0.0"
__author__ = "SetupScan Team"

from .config import BatchConfig
from .api_client import ChartApiClient
from .data_source import BarDataSource
from .engine import BatchEngine, BatchResult, SymbolOutcome
from .reporting import BatchReporter

__all__ = [
    "BatchConfig",
    "ChartApiClient",
    "BarDataSource",
    "BatchEngine",
    "BatchResult",
    "SymbolOutcome",
    "BatchReporter"
]
