"""Data source for loading daily OHLCV bars per symbol.

This module loads bars from the chart provider or from local files, but
does NOT run any simulation logic. It only provides validated raw bars.
"""

from pathlib import Path
from typing import List, Optional
import logging

import pandas as pd

from setupscan.core.errors import NoDataError
from setupscan.core.models import Bar
from setupscan.core.window import TimeWindow
from setupscan.utils.bar_validation import bars_from_chart_payload, validate_bars
from setupscan.utils.helpers import to_decimal

from .api_client import ChartApiClient

REQUIRED_COLUMNS = ["date", "open", "high", "low", "close", "volume"]


class BarDataSource:
    """Loads daily bars for one symbol and window.

    Supports:
    - http: the historical chart endpoint via ChartApiClient
    - csv: {data_dir}/{symbol}.csv (date, open, high, low, close, volume)
    - parquet: {data_dir}/{symbol}.parquet with the same columns
    """

    def __init__(
        self,
        source: str,
        client: Optional[ChartApiClient] = None,
        data_dir: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize data source.

        Args:
            source: "http", "csv", or "parquet"
            client: Chart API client (required for http source)
            data_dir: Directory holding per-symbol files (required for csv/parquet)
            logger: Optional logger

        Raises:
            ValueError: If source is invalid or its requirement is missing
        """
        if source == "http":
            if client is None:
                raise ValueError("client required for http source")
        elif source in ["csv", "parquet"]:
            if not data_dir:
                raise ValueError(f"data_dir required for {source} source")
        else:
            raise ValueError(f"Invalid source: {source}. Must be 'http', 'csv', or 'parquet'")

        self.source = source
        self.client = client
        self.data_dir = Path(data_dir) if data_dir else None
        self.logger = logger or logging.getLogger(__name__)

    def load(self, symbol: str, window: TimeWindow) -> List[Bar]:
        """Load bars for a symbol within the window.

        Args:
            symbol: Instrument identifier
            window: Inclusive date window

        Returns:
            List of Bar objects sorted by date (ascending)

        Raises:
            NoDataError: If no valid bars are available
            ProviderUnavailableError: If the http provider fails
        """
        if self.source == "http":
            payload = self.client.get_historical(symbol, window.period1, window.period2)
            bars = bars_from_chart_payload(payload, symbol)
            # The provider may pad the range; keep the requested window only
            bars = [bar for bar in bars if window.contains(bar.date)]
            return validate_bars(bars, symbol)

        if self.source == "csv":
            df = self._load_csv(symbol)
        else:
            df = self._load_parquet(symbol)

        df = self._filter_by_window(df, window)
        return validate_bars(self._df_to_bars(df), symbol)

    def _symbol_path(self, symbol: str, extension: str) -> Path:
        path = self.data_dir / f"{symbol}.{extension}"
        if not path.exists():
            raise NoDataError(f"No {extension} file for {symbol}: {path}", symbol=symbol)
        return path

    def _load_csv(self, symbol: str) -> pd.DataFrame:
        """Load bars from CSV file."""
        # Prices are read as text so they convert to Decimal exactly
        df = pd.read_csv(self._symbol_path(symbol, "csv"), dtype=str)
        return self._prepare(df, symbol, "CSV")

    def _load_parquet(self, symbol: str) -> pd.DataFrame:
        """Load bars from Parquet file."""
        df = pd.read_parquet(self._symbol_path(symbol, "parquet"))
        return self._prepare(df, symbol, "Parquet")

    def _prepare(self, df: pd.DataFrame, symbol: str, kind: str) -> pd.DataFrame:
        # Ensure required columns exist
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise NoDataError(f"{kind} for {symbol} missing required columns: {missing}", symbol=symbol)

        df = df[REQUIRED_COLUMNS].dropna(subset=["open", "high", "low", "close"])

        # Convert date to datetime if needed
        if not pd.api.types.is_datetime64_any_dtype(df['date']):
            df = df.assign(date=pd.to_datetime(df['date']))

        # Sort by date
        return df.sort_values('date').reset_index(drop=True)

    def _filter_by_window(self, df: pd.DataFrame, window: TimeWindow) -> pd.DataFrame:
        """Filter DataFrame to the inclusive window."""
        days = df['date'].dt.date
        return df[(days >= window.start) & (days <= window.end)].reset_index(drop=True)

    def _df_to_bars(self, df: pd.DataFrame) -> List[Bar]:
        """Convert DataFrame to list of Bar objects."""
        bars = []
        for _, row in df.iterrows():
            volume = row['volume']
            bars.append(Bar(
                date=row['date'].date(),
                open=to_decimal(row['open']),
                high=to_decimal(row['high']),
                low=to_decimal(row['low']),
                close=to_decimal(row['close']),
                volume=int(float(volume)) if pd.notna(volume) else 0
            ))
        return bars
