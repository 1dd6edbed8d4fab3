"""Batch engine orchestrating data loading, simulation and aggregation.

This module coordinates:
1. Validating the setup and resolving the date window (once, up front)
2. Loading bars per symbol from the data source
3. Folding the bar simulator over each series (capital ledger)
4. Reducing detail records into per-symbol summaries
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
import logging

from setupscan.core.aggregator import summarize
from setupscan.core.calendar import count_business_days
from setupscan.core.errors import EmptyBatchError, SetupScanError
from setupscan.core.ledger import run_ledger
from setupscan.core.models import DetailRecord, SymbolSummary, TradingSetup
from setupscan.core.window import TimeWindow, resolve_window
from setupscan.utils.bar_validation import log_bar_validation_summary
from setupscan.utils.logger import log_batch_step

from .data_source import BarDataSource


@dataclass
class SymbolOutcome:
    """Per-symbol result: a summary on success, the error on failure."""

    symbol: str
    summary: Optional[SymbolSummary] = None
    details: List[DetailRecord] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.summary is not None


@dataclass
class BatchResult:
    """Outcome of a whole batch run."""

    setup: TradingSetup
    window: TimeWindow
    trading_days: int
    outcomes: List[SymbolOutcome]

    @property
    def summaries(self) -> List[SymbolSummary]:
        """Summaries of the symbols that succeeded, in setup order."""
        return [o.summary for o in self.outcomes if o.ok]

    @property
    def failed_symbols(self) -> List[str]:
        return [o.symbol for o in self.outcomes if not o.ok]

    @property
    def warning(self) -> Optional[str]:
        """Non-fatal warning naming the failed symbols, if any."""
        if not self.failed_symbols:
            return None
        return f"Could not process data for: {', '.join(self.failed_symbols)}"

    def details_for(self, symbol: str) -> List[DetailRecord]:
        for outcome in self.outcomes:
            if outcome.symbol == symbol:
                return outcome.details
        raise KeyError(symbol)


class BatchEngine:
    """Main batch orchestration engine.

    Implements the batch loop:
    - Resolve the window and count trading days once
    - For each symbol: load bars, run the ledger, summarize
    - Record any per-symbol failure and continue with the next symbol
    - Fail the whole run only if every symbol failed
    """

    def __init__(
        self,
        setup: TradingSetup,
        data_source: BarDataSource,
        max_workers: int = 1,
        now: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize batch engine.

        Args:
            setup: Validated trading setup
            data_source: Data source for bars
            max_workers: Number of symbols evaluated concurrently
            now: Clock used to resolve the window (defaults to datetime.now)
            logger: Optional logger
        """
        self.setup = setup
        self.data_source = data_source
        self.max_workers = max_workers
        self.now = now or datetime.now
        self.logger = logger or logging.getLogger(__name__)

    def resolve_window(self) -> TimeWindow:
        """Resolve the setup's period against the engine clock.

        Raises:
            InvalidSetupError: If the period selection is invalid
        """
        return resolve_window(self.setup.period, self.setup.custom_start_date, self.now())

    def run(self) -> BatchResult:
        """Run the batch.

        Returns:
            BatchResult with per-symbol outcomes

        Raises:
            InvalidSetupError: Before any fetch, if the window cannot be resolved
            EmptyBatchError: If no symbol produced a summary
        """
        log_batch_step(self.logger, "BATCH_START", {
            "operation": self.setup.operation.value,
            "reference_price": self.setup.reference_price.value,
            "entry_percentage": self.setup.entry_percentage,
            "stop_percentage": self.setup.stop_percentage,
            "initial_capital": self.setup.initial_capital,
            "period": self.setup.period.value,
            "granularity": self.setup.granularity.value,
            "symbols": list(self.setup.symbols),
        })

        window = self.resolve_window()
        trading_days = count_business_days(window.start, window.end)
        log_batch_step(self.logger, "WINDOW", {"window": window, "trading_days": trading_days})

        symbols = list(self.setup.symbols)
        if self.max_workers > 1 and len(symbols) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map() yields in submission order, so outcomes keep setup order
                outcomes = list(executor.map(
                    lambda s: self._evaluate_symbol(s, window, trading_days), symbols
                ))
        else:
            outcomes = [self._evaluate_symbol(s, window, trading_days) for s in symbols]

        result = BatchResult(
            setup=self.setup,
            window=window,
            trading_days=trading_days,
            outcomes=outcomes
        )

        log_batch_step(self.logger, "BATCH_DONE", {
            "succeeded": len(result.summaries),
            "failed": len(result.failed_symbols),
        })

        if not result.summaries:
            raise EmptyBatchError(result.failed_symbols)

        if result.warning:
            self.logger.warning(result.warning)

        return result

    def run_symbol(
        self,
        symbol: str,
        reference_price=None,
        entry_percentage=None,
        stop_percentage=None,
        initial_capital=None
    ) -> List[DetailRecord]:
        """Drill down into one symbol with an adjusted sub-setup.

        Uses the same window resolution as run(). Errors propagate.

        Args:
            symbol: Instrument identifier
            reference_price: Override for the reference price option
            entry_percentage: Override for the entry offset
            stop_percentage: Override for the stop offset
            initial_capital: Override for the starting capital

        Returns:
            Detail records in ascending date order
        """
        setup = self.setup.with_overrides(
            reference_price=reference_price,
            entry_percentage=entry_percentage,
            stop_percentage=stop_percentage,
            initial_capital=initial_capital,
            symbols=[symbol]
        )
        window = self.resolve_window()
        bars = self.data_source.load(symbol, window)
        log_batch_step(self.logger, "SYMBOL_FETCH", {"symbol": symbol, "bars_count": len(bars)})
        return run_ledger(bars, setup, symbol)

    def _evaluate_symbol(self, symbol: str, window: TimeWindow, trading_days: int) -> SymbolOutcome:
        """Evaluate one symbol; no exception crosses this boundary."""
        try:
            bars = self.data_source.load(symbol, window)
            log_batch_step(self.logger, "SYMBOL_FETCH", {"symbol": symbol, "bars_count": len(bars)})
            log_bar_validation_summary(self.logger, bars, symbol)

            details = run_ledger(bars, self.setup, symbol)
            summary = summarize(symbol, details, trading_days, self.setup.initial_capital)

        except SetupScanError as e:
            log_batch_step(self.logger, "SYMBOL_FAILED", {"symbol": symbol, "error": e})
            return SymbolOutcome(symbol=symbol, error=e)

        except Exception as e:
            self.logger.error(f"Unexpected error processing {symbol}: {e}", exc_info=True)
            return SymbolOutcome(symbol=symbol, error=e)

        log_batch_step(self.logger, "SYMBOL_DONE", {
            "symbol": symbol,
            "num_trades": summary.num_trades,
            "final_capital": summary.final_capital,
        })
        return SymbolOutcome(symbol=symbol, summary=summary, details=details)
