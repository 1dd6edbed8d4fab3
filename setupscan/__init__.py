"""
SetupScan - Rule-based trade-setup backtesting engine

Simulates a limit-style entry and a stop-loss exit per evaluation unit over
daily price history, compounding capital from unit to unit, and reduces the
results into per-symbol statistics.
"""

__version__ = "1.0.0"
__author__ = "SetupScan Development Team"
__license__ = "MIT"

from setupscan.config import (
    PROVIDER_URL,
    PROVIDER_TIMEOUT,
    PROVIDER_MAX_RETRIES,
    LOG_LEVEL,
    LOG_DIR,
    DEFAULT_SETUP
)

__all__ = [
    "__version__",
    "PROVIDER_URL",
    "PROVIDER_TIMEOUT",
    "PROVIDER_MAX_RETRIES",
    "LOG_LEVEL",
    "LOG_DIR",
    "DEFAULT_SETUP"
]
