"""Logging system for SetupScan"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional


def setup_logger(name: str = "setupscan", log_dir: Optional[str] = "logs", level: str = "INFO") -> logging.Logger:
    """
    Setup logger with file and console handlers.

    Log format: [TIMESTAMP] [LEVEL] [MODULE] Message
    Logs to: logs/setupscan_YYYY-MM-DD.log

    Args:
        name: Logger name
        log_dir: Directory for log files (None disables the file handler)
        level: Console logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    detailed_formatter = logging.Formatter(
        fmt='[%(asctime)s] [%(levelname)8s] [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = logging.Formatter(
        fmt='[%(levelname)s] %(message)s'
    )

    # File handler (detailed logs)
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = log_path / f"{name}_{datetime.now().strftime('%Y-%m-%d')}.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    # Console handler (simple logs)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    return logger


def log_batch_step(logger: logging.Logger, step: str, data: Dict[str, Any]):
    """
    Log a batch step with details.

    Steps:
    - BATCH_START: Setup being evaluated
    - WINDOW: Resolved date window and trading days
    - SYMBOL_FETCH: Bars fetched for a symbol
    - SYMBOL_DONE: Summary for a symbol
    - SYMBOL_FAILED: Symbol recorded as failed
    - BATCH_DONE: Final counts

    Args:
        logger: Logger instance
        step: Step name
        data: Step-specific data dictionary
    """
    if step == "BATCH_START":
        logger.info("=" * 70)
        logger.info("Starting Batch")
        logger.info("=" * 70)
        logger.info(f"Operation: {data.get('operation')} | Reference: {data.get('reference_price')}")
        logger.info(f"Entry: {data.get('entry_percentage')}% | Stop: {data.get('stop_percentage')}%")
        logger.info(f"Initial Capital: {data.get('initial_capital')}")
        logger.info(f"Period: {data.get('period')} | Granularity: {data.get('granularity')}")
        logger.info(f"Symbols ({len(data.get('symbols', []))}): {', '.join(data.get('symbols', []))}")

    elif step == "WINDOW":
        logger.info(f"Window: {data.get('window')} ({data.get('trading_days')} trading days)")

    elif step == "SYMBOL_FETCH":
        logger.info(f"[{data.get('symbol')}] Fetched {data.get('bars_count')} bars")

    elif step == "SYMBOL_DONE":
        logger.info(
            f"[{data.get('symbol')}] Trades: {data.get('num_trades')} | "
            f"Final Capital: {data.get('final_capital')}"
        )

    elif step == "SYMBOL_FAILED":
        logger.warning(f"[{data.get('symbol')}] Failed: {data.get('error')}")

    elif step == "BATCH_DONE":
        logger.info("=" * 70)
        logger.info(
            f"Batch Complete: {data.get('succeeded')} succeeded, {data.get('failed')} failed"
        )
        logger.info("=" * 70)
