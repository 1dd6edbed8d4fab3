"""Entry point for running a batch as a module.

Usage:
    python -m setupscan_backtest --symbols PETR4.SA AAPL --period 1M --granularity DAYTRADE
"""

from .cli import main

if __name__ == "__main__":
    exit(main())
