"""Command-line interface for running setup batches."""

import argparse
import logging

from setupscan.config import LOG_LEVEL
from setupscan.core.catalog import symbols_for
from setupscan.core.errors import EmptyBatchError, InvalidSetupError, SetupScanError
from setupscan.utils.logger import setup_logger

from .config import BatchConfig, SOURCES
from .data_source import BarDataSource
from .api_client import ChartApiClient
from .engine import BatchEngine
from .reporting import BatchReporter


def parse_args(argv=None):
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="SetupScan - rule-based trade-setup backtesting",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Config file
    parser.add_argument("--config", type=str, help="Path to JSON config file (overrides all other args)")

    # Symbols
    parser.add_argument("--symbols", type=str, nargs="+", help="Symbols to evaluate (e.g., PETR4.SA AAPL)")
    parser.add_argument("--index", type=str, default="ALL",
                        help="Catalog index used when --symbols is not given (IBOV, SP500, ALL)")
    parser.add_argument("--country", type=str, default="ALL", choices=["BR", "US", "ALL"],
                        help="Catalog country used when --symbols is not given")

    # Trading setup
    parser.add_argument("--operation", type=str, default="BUY", choices=["BUY", "SELL"], help="Trade direction")
    parser.add_argument("--reference-price", type=str, default="PREV_CLOSE",
                        choices=["OPEN", "HIGH", "LOW", "PREV_CLOSE"],
                        help="Previous-unit price the entry offset is measured from")
    parser.add_argument("--entry-pct", type=str, default="1", help="Entry offset (%%)")
    parser.add_argument("--stop-pct", type=str, default="1", help="Stop-loss offset (%%)")
    parser.add_argument("--capital", type=str, default="10000", help="Initial capital")
    parser.add_argument("--period", type=str, choices=["1M", "2M", "3M", "6M", "1Y", "CUSTOM"],
                        help="Lookback period")
    parser.add_argument("--start", type=str, help="Custom start date (YYYY-MM-DD), implies --period CUSTOM")
    parser.add_argument("--granularity", type=str, choices=["DAYTRADE", "WEEKLY", "MONTHLY", "YEARLY"],
                        help="Evaluation granularity")

    # Data source
    parser.add_argument("--source", type=str, default="http", choices=SOURCES, help="Data source type")
    parser.add_argument("--data-dir", type=str, help="Directory with {symbol}.csv/.parquet files")

    # Provider configuration
    parser.add_argument("--provider-url", type=str, help="Historical data provider base URL")
    parser.add_argument("--timeout", type=float, help="Provider request timeout (seconds)")
    parser.add_argument("--max-retries", type=int, help="Max provider request attempts")

    # Execution settings
    parser.add_argument("--workers", type=int, default=1, help="Symbols evaluated concurrently")
    parser.add_argument("--detail", type=str, metavar="SYMBOL",
                        help="Print the detail records of one symbol instead of the batch summary")

    # Output settings
    parser.add_argument("--output-dir", type=str, default="./setupscan_results",
                        help="Output directory for results")
    parser.add_argument("--no-save", action="store_true", help="Don't write CSV/text reports")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    return parser.parse_args(argv)


def build_config(args) -> BatchConfig:
    """Create a BatchConfig from parsed CLI args.

    Raises:
        InvalidSetupError: If the catalog filter is invalid
        ValueError: If a runner setting is invalid
    """
    if args.config:
        return BatchConfig.from_json(args.config)

    symbols = args.symbols or symbols_for(index=args.index, country=args.country)
    period = "CUSTOM" if args.start else args.period

    overrides = {}
    if args.provider_url:
        overrides["provider_url"] = args.provider_url
    if args.timeout is not None:
        overrides["provider_timeout"] = args.timeout
    if args.max_retries is not None:
        overrides["provider_max_retries"] = args.max_retries

    return BatchConfig(
        symbols=symbols,
        operation=args.operation,
        reference_price=args.reference_price,
        entry_percentage=args.entry_pct,
        stop_percentage=args.stop_pct,
        initial_capital=args.capital,
        period=period,
        custom_start_date=args.start,
        granularity=args.granularity,
        source=args.source,
        data_dir=args.data_dir,
        max_workers=args.workers,
        output_dir=args.output_dir,
        save_results=not args.no_save,
        verbose=args.verbose,
        **overrides
    )


def main(argv=None):
    """Main CLI entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
        setup = config.to_setup()
    except (InvalidSetupError, ValueError, TypeError, OSError) as e:
        logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
        logging.getLogger(__name__).error(f"Invalid configuration: {e}")
        return 1

    level = "DEBUG" if config.verbose else LOG_LEVEL
    logger = setup_logger("setupscan", log_dir=config.log_dir, level=level)

    client = None
    if config.source == "http":
        client = ChartApiClient(
            base_url=config.provider_url,
            timeout=config.provider_timeout,
            max_retries=config.provider_max_retries,
            retry_delay=config.provider_retry_delay,
            logger=logger
        )

    data_source = BarDataSource(
        source=config.source,
        client=client,
        data_dir=config.data_dir,
        logger=logger
    )

    engine = BatchEngine(
        setup=setup,
        data_source=data_source,
        max_workers=config.max_workers,
        logger=logger
    )

    reporter = BatchReporter(output_dir=config.output_dir, logger=logger)

    try:
        if args.detail:
            details = engine.run_symbol(args.detail)
            reporter.print_details(args.detail, details)
            if config.save_results:
                reporter.save_details(args.detail, details)
        else:
            result = engine.run()
            reporter.print_summary(result)
            if config.save_results:
                reporter.save_results(result)

    except InvalidSetupError as e:
        logger.error(f"Invalid setup: {e}")
        return 1
    except EmptyBatchError as e:
        logger.error(str(e))
        return 1
    except SetupScanError as e:
        logger.error(f"Run failed: {e}")
        return 1
    finally:
        if client is not None:
            stats = client.get_stats()
            logger.info("=" * 70)
            logger.info("PROVIDER CLIENT STATISTICS")
            logger.info("=" * 70)
            logger.info(f"Total Requests: {stats['total_requests']}")
            logger.info(f"Failed Requests: {stats['failed_requests']}")
            logger.info(f"Total Retries: {stats['total_retry_count']}")
            logger.info(f"Success Rate: {stats['success_rate'] * 100:.2f}%")
            logger.info("=" * 70)
            client.close()

    logger.info("Run complete!")
    return 0


if __name__ == "__main__":
    exit(main())
