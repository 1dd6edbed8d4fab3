"""Data model for setups, bars and simulation results"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple, Type

from setupscan.core.errors import InvalidSetupError
from setupscan.utils.helpers import to_decimal


class Operation(Enum):
    """Trade direction."""
    BUY = "BUY"
    SELL = "SELL"


class ReferencePrice(Enum):
    """Which field of the previous unit anchors the entry price."""
    OPEN = "OPEN"
    HIGH = "HIGH"
    LOW = "LOW"
    PREV_CLOSE = "PREV_CLOSE"


class Period(Enum):
    """Lookback period, resolved against "now" into a date window."""
    ONE_MONTH = "1M"
    TWO_MONTHS = "2M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    CUSTOM = "CUSTOM"


class Granularity(Enum):
    """Evaluation unit: one bar per session, or one window per run."""
    DAYTRADE = "DAYTRADE"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


def parse_enum(enum_cls: Type[Enum], value: Any, field_name: str) -> Enum:
    """Parse an enum member from its value (case-insensitive).

    Raises:
        InvalidSetupError: If value is missing or not a valid member
    """
    if isinstance(value, enum_cls):
        return value
    if value is None or value == "":
        raise InvalidSetupError(f"{field_name} is required")
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise InvalidSetupError(
            f"Invalid {field_name} '{value}'. Must be one of: {valid}"
        ) from None


def parse_date(value: Any) -> Optional[date]:
    """Parse a date from a date, datetime or ISO string (YYYY-MM-DD)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        # Full ISO timestamps (YYYY-MM-DDTHH:MM[:SS]) keep their date part
        if text[10:11] == "T":
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidSetupError(f"Invalid date '{value}'. Expected YYYY-MM-DD") from None


@dataclass(frozen=True)
class Bar:
    """One daily OHLCV observation."""

    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int


@dataclass
class TradingSetup:
    """Declarative trading setup evaluated against every symbol.

    Field values are normalized on construction: enums are parsed from their
    string values, numbers become Decimal and symbols an ordered tuple.
    The "not in the future" rule for custom_start_date needs a clock and is
    enforced by window resolution instead.

    Raises:
        InvalidSetupError: If any field violates the setup invariants
    """

    operation: Operation
    reference_price: ReferencePrice
    entry_percentage: Decimal
    stop_percentage: Decimal
    initial_capital: Decimal
    period: Optional[Period]
    granularity: Optional[Granularity]
    symbols: Tuple[str, ...]
    custom_start_date: Optional[date] = None

    def __post_init__(self):
        self.operation = parse_enum(Operation, self.operation, "operation")
        self.reference_price = parse_enum(ReferencePrice, self.reference_price, "reference_price")
        self.period = parse_enum(Period, self.period, "period")
        self.granularity = parse_enum(Granularity, self.granularity, "granularity")

        self.entry_percentage = self._decimal_field("entry_percentage", self.entry_percentage)
        self.stop_percentage = self._decimal_field("stop_percentage", self.stop_percentage)
        self.initial_capital = self._decimal_field("initial_capital", self.initial_capital)

        if self.entry_percentage < 0:
            raise InvalidSetupError(f"entry_percentage must be >= 0, got: {self.entry_percentage}")
        if self.stop_percentage < 0:
            raise InvalidSetupError(f"stop_percentage must be >= 0, got: {self.stop_percentage}")
        if self.initial_capital <= 0:
            raise InvalidSetupError(f"initial_capital must be positive, got: {self.initial_capital}")
        if self.operation is Operation.BUY and self.entry_percentage >= 100:
            raise InvalidSetupError(
                f"entry_percentage must be below 100 for BUY setups, got: {self.entry_percentage}"
            )

        self.custom_start_date = parse_date(self.custom_start_date)
        if self.period is Period.CUSTOM and self.custom_start_date is None:
            raise InvalidSetupError("custom_start_date is required when period is CUSTOM")
        if self.period is not Period.CUSTOM and self.custom_start_date is not None:
            raise InvalidSetupError(
                f"custom_start_date is only allowed with a CUSTOM period, got period {self.period.value}"
            )

        self.symbols = self._normalize_symbols(self.symbols)

    @staticmethod
    def _decimal_field(name: str, value: Any) -> Decimal:
        if value is None:
            raise InvalidSetupError(f"{name} is required")
        try:
            return to_decimal(value)
        except ValueError:
            raise InvalidSetupError(f"{name} must be a number, got: {value!r}") from None

    @staticmethod
    def _normalize_symbols(symbols: Iterable[str]) -> Tuple[str, ...]:
        if isinstance(symbols, str):
            symbols = [symbols]
        cleaned = [str(s).strip() for s in symbols if str(s).strip()]
        if not cleaned:
            raise InvalidSetupError("At least one symbol is required")
        seen = set()
        duplicates = []
        for symbol in cleaned:
            if symbol in seen:
                duplicates.append(symbol)
            seen.add(symbol)
        if duplicates:
            raise InvalidSetupError(f"Duplicate symbols in setup: {', '.join(duplicates)}")
        return tuple(cleaned)

    def with_overrides(
        self,
        reference_price: Optional[Any] = None,
        entry_percentage: Optional[Any] = None,
        stop_percentage: Optional[Any] = None,
        initial_capital: Optional[Any] = None,
        symbols: Optional[Iterable[str]] = None
    ) -> "TradingSetup":
        """Return a copy with drill-down adjustments applied.

        Only the arguments that are not None are changed.
        """
        changes = {
            "reference_price": reference_price,
            "entry_percentage": entry_percentage,
            "stop_percentage": stop_percentage,
            "initial_capital": initial_capital,
            "symbols": tuple(symbols) if symbols is not None else None,
        }
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TradingSetup":
        """Create a setup from a plain dictionary (JSON config, CLI)."""
        return cls(
            operation=data.get("operation"),
            reference_price=data.get("reference_price"),
            entry_percentage=data.get("entry_percentage"),
            stop_percentage=data.get("stop_percentage"),
            initial_capital=data.get("initial_capital"),
            period=data.get("period"),
            granularity=data.get("granularity"),
            symbols=data.get("symbols", ()),
            custom_start_date=data.get("custom_start_date"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "operation": self.operation.value,
            "reference_price": self.reference_price.value,
            "entry_percentage": str(self.entry_percentage),
            "stop_percentage": str(self.stop_percentage),
            "initial_capital": str(self.initial_capital),
            "period": self.period.value,
            "granularity": self.granularity.value,
            "symbols": list(self.symbols),
            "custom_start_date": self.custom_start_date.isoformat() if self.custom_start_date else None,
        }


@dataclass(frozen=True)
class DetailRecord:
    """Outcome of one evaluated unit (a session, or a whole window)."""

    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int
    carry_in_capital: Decimal
    suggested_entry_price: Decimal
    executed: bool
    real_price: Decimal
    lot_size: int
    stop_value: Decimal
    stop_hit: bool
    exit_price: Decimal
    profit_loss: Decimal
    current_capital: Decimal

    def to_dict(self) -> dict:
        """Convert to dictionary for CSV export."""
        return {
            "date": self.date.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
            "carry_in_capital": self.carry_in_capital,
            "suggested_entry_price": self.suggested_entry_price,
            "executed": self.executed,
            "real_price": self.real_price,
            "lot_size": self.lot_size,
            "stop_value": self.stop_value,
            "stop_hit": self.stop_hit,
            "exit_price": self.exit_price,
            "profit_loss": self.profit_loss,
            "current_capital": self.current_capital,
        }


@dataclass(frozen=True)
class SymbolSummary:
    """Aggregate statistics for one symbol's detail records."""

    symbol: str
    trading_days: int
    num_trades: int
    trade_percentage: float
    num_profits: int
    profit_percentage: float
    num_losses: int
    loss_percentage: float
    num_stops: int
    stop_percentage: float
    final_capital: Decimal

    def to_dict(self) -> dict:
        """Convert to dictionary for CSV export."""
        return {
            "symbol": self.symbol,
            "trading_days": self.trading_days,
            "num_trades": self.num_trades,
            "trade_percentage": self.trade_percentage,
            "num_profits": self.num_profits,
            "profit_percentage": self.profit_percentage,
            "num_losses": self.num_losses,
            "loss_percentage": self.loss_percentage,
            "num_stops": self.num_stops,
            "stop_percentage": self.stop_percentage,
            "final_capital": self.final_capital,
        }
