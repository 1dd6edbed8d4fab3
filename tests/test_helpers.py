"""Unit tests for utility helpers and the logger setup"""

from datetime import date
from decimal import Decimal
import logging

import pytest

from setupscan.utils.helpers import (
    end_of_day_epoch,
    epoch_to_date,
    format_money,
    format_percent,
    start_of_day_epoch,
    to_decimal,
)
from setupscan.utils.logger import log_batch_step, setup_logger


def test_to_decimal_avoids_float_noise():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("  98.01 ") == Decimal("98.01")
    assert to_decimal(7) == Decimal("7")
    assert to_decimal(Decimal("1.5")) == Decimal("1.5")


@pytest.mark.parametrize("value", ["abc", True, float("nan"), float("inf"), None])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        to_decimal(value)


def test_epoch_conversions_are_utc():
    day = date(2025, 1, 6)

    assert start_of_day_epoch(day) == 1736121600
    assert end_of_day_epoch(day) == 1736207999
    assert epoch_to_date(1736121600) == day
    assert epoch_to_date(1736207999) == day


def test_formatting():
    assert format_money(Decimal("9900.01")) == "9,900.01"
    assert format_money(Decimal("-99.99")) == "-99.99"
    assert format_percent(100 / 3) == "33.33%"
    assert format_percent(0.0) == "0.00%"


def test_setup_logger_without_file_handler():
    logger = setup_logger("setupscan.test_console", log_dir=None, level="WARNING")

    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.WARNING
    # Second call reuses the configured logger
    assert setup_logger("setupscan.test_console", log_dir=None) is logger
    assert len(logger.handlers) == 1


def test_setup_logger_writes_file(tmp_path):
    logger = setup_logger("setupscan.test_file", log_dir=str(tmp_path))

    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()

    log_files = list(tmp_path.glob("setupscan.test_file_*.log"))
    assert len(log_files) == 1
    assert "hello" in log_files[0].read_text()


def test_log_batch_step_failed_symbol(caplog):
    logger = logging.getLogger("setupscan.test_steps")

    with caplog.at_level(logging.INFO, logger="setupscan.test_steps"):
        log_batch_step(logger, "SYMBOL_FAILED", {"symbol": "BAD", "error": "timeout"})

    assert "[BAD] Failed: timeout" in caplog.text
