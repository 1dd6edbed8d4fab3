"""Batch configuration settings using dataclasses."""

from dataclasses import dataclass, field
from typing import Optional, List
import json

from setupscan.config import (
    DEFAULT_SETUP,
    LOG_DIR,
    PROVIDER_MAX_RETRIES,
    PROVIDER_RETRY_DELAY,
    PROVIDER_TIMEOUT,
    PROVIDER_URL,
)
from setupscan.core.models import TradingSetup

SOURCES = ["http", "csv", "parquet"]


@dataclass
class BatchConfig:
    """Configuration for a batch run.

    Holds the trading setup as plain values (strings/numbers, as they come
    from JSON or the command line) plus data-source, concurrency and output
    settings. The setup itself is validated by to_setup().
    """

    # Trading setup
    symbols: List[str] = field(default_factory=list)
    operation: str = DEFAULT_SETUP["operation"]
    reference_price: str = DEFAULT_SETUP["reference_price"]
    entry_percentage: str = DEFAULT_SETUP["entry_percentage"]
    stop_percentage: str = DEFAULT_SETUP["stop_percentage"]
    initial_capital: str = DEFAULT_SETUP["initial_capital"]
    period: Optional[str] = None
    custom_start_date: Optional[str] = None  # YYYY-MM-DD, CUSTOM period only
    granularity: Optional[str] = None

    # Data source
    source: str = "http"  # "http", "csv" or "parquet"
    data_dir: Optional[str] = None  # Directory with {symbol}.csv / {symbol}.parquet

    # Provider configuration
    provider_url: str = PROVIDER_URL
    provider_timeout: float = PROVIDER_TIMEOUT
    provider_max_retries: int = PROVIDER_MAX_RETRIES
    provider_retry_delay: float = PROVIDER_RETRY_DELAY

    # Execution settings
    max_workers: int = 1  # >1 evaluates symbols on a thread pool

    # Output settings
    output_dir: str = "./setupscan_results"
    save_results: bool = True
    log_dir: Optional[str] = LOG_DIR
    verbose: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.source not in SOURCES:
            raise ValueError(f"source must be one of {SOURCES}, got: {self.source}")

        if self.source in ["csv", "parquet"] and not self.data_dir:
            raise ValueError(f"data_dir is required for source '{self.source}'")

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got: {self.max_workers}")

        if self.provider_max_retries < 1:
            raise ValueError(f"provider_max_retries must be >= 1, got: {self.provider_max_retries}")

        if self.provider_timeout <= 0:
            raise ValueError(f"provider_timeout must be positive, got: {self.provider_timeout}")

    def to_setup(self) -> TradingSetup:
        """Build the validated TradingSetup.

        Raises:
            InvalidSetupError: If the setup fields are invalid
        """
        return TradingSetup.from_dict({
            "operation": self.operation,
            "reference_price": self.reference_price,
            "entry_percentage": self.entry_percentage,
            "stop_percentage": self.stop_percentage,
            "initial_capital": self.initial_capital,
            "period": self.period,
            "granularity": self.granularity,
            "symbols": self.symbols,
            "custom_start_date": self.custom_start_date,
        })

    @classmethod
    def from_json(cls, filepath: str) -> "BatchConfig":
        """Load configuration from JSON file.

        Args:
            filepath: Path to JSON config file

        Returns:
            BatchConfig instance

        Example JSON:
            {
                "symbols": ["PETR4.SA", "VALE3.SA", "AAPL"],
                "operation": "BUY",
                "reference_price": "PREV_CLOSE",
                "entry_percentage": "1",
                "stop_percentage": "1",
                "initial_capital": "10000",
                "period": "3M",
                "granularity": "DAYTRADE",
                "provider_url": "http://localhost:3001/api"
            }
        """
        with open(filepath, 'r') as f:
            data = json.load(f)

        # Numbers are kept as strings so they convert to Decimal exactly
        for key in ("entry_percentage", "stop_percentage", "initial_capital"):
            if key in data and data[key] is not None:
                data[key] = str(data[key])

        return cls(**data)

    def to_json(self, filepath: str):
        """Save configuration to JSON file.

        Args:
            filepath: Path to save JSON config file
        """
        data = self.__dict__.copy()

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)
