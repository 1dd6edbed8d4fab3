"""
Utility modules for SetupScan.

This package contains utility functions:
- helpers: Decimal conversion, epoch/date conversion, formatting
- logger: Structured logging system
- bar_validation: Provider payload parsing and series validation
  (import it directly, it depends on setupscan.core)
"""

from setupscan.utils.helpers import (
    to_decimal,
    epoch_to_date,
    start_of_day_epoch,
    end_of_day_epoch,
    format_money,
    format_percent
)
from setupscan.utils.logger import setup_logger, log_batch_step

__all__ = [
    "to_decimal",
    "epoch_to_date",
    "start_of_day_epoch",
    "end_of_day_epoch",
    "format_money",
    "format_percent",
    "setup_logger",
    "log_batch_step"
]
