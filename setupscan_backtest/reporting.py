"""Results reporting and CSV export.

Provides functions to export batch summaries, per-symbol detail records and
capital curves, and to print them as console tables.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Sequence
import pandas as pd
import logging

from setupscan.core.aggregator import capital_curve, sort_details
from setupscan.core.models import DetailRecord
from setupscan.utils.helpers import format_money, format_percent

from .engine import BatchResult


class BatchReporter:
    """Generates reports and exports batch results."""

    def __init__(self, output_dir: str = "./setupscan_results", logger: logging.Logger = None):
        """Initialize reporter.

        Args:
            output_dir: Directory to save reports
            logger: Optional logger
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.logger = logger or logging.getLogger(__name__)

    def save_results(self, result: BatchResult, save_details: bool = True) -> Dict[str, Path]:
        """Save batch results to files.

        Args:
            result: BatchResult from BatchEngine
            save_details: Whether to save the detail records CSV

        Returns:
            Dictionary mapping file type to file path
        """
        saved_files = {}

        # Generate timestamp for unique filenames
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        prefix = f"{result.setup.operation.value}_{result.setup.granularity.value}_{timestamp}"

        summaries_path = self._save_summaries_csv(result, prefix)
        saved_files["summaries"] = summaries_path
        self.logger.info(f"Saved summaries to: {summaries_path}")

        if save_details:
            details_path = self._save_details_csv(result, prefix)
            saved_files["details"] = details_path
            self.logger.info(f"Saved details to: {details_path}")

        summary_path = self._save_summary_txt(result, prefix)
        saved_files["summary"] = summary_path
        self.logger.info(f"Saved summary to: {summary_path}")

        return saved_files

    def save_details(self, symbol: str, details: Sequence[DetailRecord]) -> Dict[str, Path]:
        """Save one symbol's drill-down records and capital curve.

        Args:
            symbol: Trading symbol
            details: Detail records from BatchEngine.run_symbol

        Returns:
            Dictionary mapping file type to file path
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        prefix = f"{symbol}_{timestamp}"

        details_path = self.output_dir / f"{prefix}_details.csv"
        pd.DataFrame([d.to_dict() for d in details]).to_csv(details_path, index=False)
        self.logger.info(f"Saved details to: {details_path}")

        curve_path = self.output_dir / f"{prefix}_capital.csv"
        curve = pd.DataFrame(capital_curve(details), columns=["date", "capital"])
        curve.to_csv(curve_path, index=False)
        self.logger.info(f"Saved capital curve to: {curve_path}")

        return {"details": details_path, "capital": curve_path}

    def _save_summaries_csv(self, result: BatchResult, prefix: str) -> Path:
        """Save per-symbol summaries to CSV."""
        df = pd.DataFrame([s.to_dict() for s in result.summaries])

        filepath = self.output_dir / f"{prefix}_summaries.csv"
        df.to_csv(filepath, index=False)

        return filepath

    def _save_details_csv(self, result: BatchResult, prefix: str) -> Path:
        """Save the detail records of every successful symbol to one CSV."""
        rows = []
        for outcome in result.outcomes:
            if not outcome.ok:
                continue
            for record in outcome.details:
                rows.append({"symbol": outcome.symbol, **record.to_dict()})

        df = pd.DataFrame(rows)

        filepath = self.output_dir / f"{prefix}_details.csv"
        df.to_csv(filepath, index=False)

        return filepath

    def _save_summary_txt(self, result: BatchResult, prefix: str) -> Path:
        """Save the console summary to a text file."""
        filepath = self.output_dir / f"{prefix}_summary.txt"

        with open(filepath, "w") as f:
            f.write("\n".join(self.format_summary(result)) + "\n")

        return filepath

    def format_summary(self, result: BatchResult) -> List[str]:
        """Render the batch summary table as lines of text.

        Args:
            result: BatchResult

        Returns:
            Lines of the report
        """
        setup = result.setup
        lines = [
            "=" * 70,
            "SETUP RESULTS SUMMARY",
            "=" * 70,
            f"Operation: {setup.operation.value} | Reference: {setup.reference_price.value}",
            f"Entry: {format_percent(setup.entry_percentage)} | Stop: {format_percent(setup.stop_percentage)}",
            f"Initial Capital: {format_money(setup.initial_capital)}",
            f"Period: {setup.period.value} ({result.window}) | Granularity: {setup.granularity.value}",
            f"Trading Days: {result.trading_days}",
            "",
            f"{'Symbol':<10} {'Trades':>7} {'Trade%':>8} {'Profits':>8} {'Profit%':>8} "
            f"{'Losses':>7} {'Loss%':>8} {'Stops':>6} {'Stop%':>8} {'Final Capital':>15}",
            "-" * 70,
        ]

        for s in result.summaries:
            lines.append(
                f"{s.symbol:<10} {s.num_trades:>7} {format_percent(s.trade_percentage):>8} "
                f"{s.num_profits:>8} {format_percent(s.profit_percentage):>8} "
                f"{s.num_losses:>7} {format_percent(s.loss_percentage):>8} "
                f"{s.num_stops:>6} {format_percent(s.stop_percentage):>8} "
                f"{format_money(s.final_capital):>15}"
            )

        if result.warning:
            lines.append("")
            lines.append(f"Warning: {result.warning}")

        lines.append("=" * 70)
        return lines

    def print_summary(self, result: BatchResult):
        """Print summary to console.

        Args:
            result: BatchResult
        """
        print("\n" + "\n".join(self.format_summary(result)) + "\n")

    def print_details(
        self,
        symbol: str,
        details: Sequence[DetailRecord],
        sort_field: str = "date",
        descending: bool = True
    ):
        """Print one symbol's detail records, newest first by default.

        Args:
            symbol: Trading symbol
            details: Detail records
            sort_field: DetailRecord field to sort by
            descending: Sort direction
        """
        print("\n" + "=" * 70)
        print(f"{symbol} DETAILS")
        print("=" * 70)
        print(
            f"{'Date':<11} {'Open':>9} {'High':>9} {'Low':>9} {'Close':>9} {'Entry':>9} "
            f"{'Lots':>6} {'Stop':>9} {'Hit':>4} {'P&L':>11} {'Capital':>13}"
        )
        print("-" * 70)

        for d in sort_details(details, sort_field, descending):
            print(
                f"{d.date.isoformat():<11} {format_money(d.open):>9} {format_money(d.high):>9} "
                f"{format_money(d.low):>9} {format_money(d.close):>9} "
                f"{format_money(d.suggested_entry_price):>9} {d.lot_size:>6} "
                f"{format_money(d.stop_value):>9} {'Y' if d.stop_hit else '-':>4} "
                f"{format_money(d.profit_loss):>11} {format_money(d.current_capital):>13}"
            )

        print("=" * 70 + "\n")
