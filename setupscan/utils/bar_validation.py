"""
Bar Validation and Normalization - Provider Contract Enforcement

This module turns the provider's chart payload into Bar objects and checks
that every series conforms to the contract the ledger relies on:
- All OHLCV arrays present, each as long as the timestamp array
- Strictly increasing dates (oldest -> newest), no duplicates
- Positive prices, non-negative volume
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from setupscan.core.errors import NoDataError
from setupscan.core.models import Bar
from setupscan.utils.helpers import epoch_to_date, to_decimal

OHLCV_FIELDS = ("open", "high", "low", "close", "volume")


class ChartQuote(BaseModel):
    """Indicator arrays, index-aligned with the timestamp array"""
    open: Optional[List[Optional[float]]] = None
    high: Optional[List[Optional[float]]] = None
    low: Optional[List[Optional[float]]] = None
    close: Optional[List[Optional[float]]] = None
    volume: Optional[List[Optional[float]]] = None


class ChartIndicators(BaseModel):
    quote: List[ChartQuote] = []


class ChartResult(BaseModel):
    timestamp: Optional[List[int]] = None
    indicators: Optional[ChartIndicators] = None


class ChartBody(BaseModel):
    result: Optional[List[ChartResult]] = None


class ChartResponse(BaseModel):
    """Chart payload returned by the historical endpoint"""
    chart: ChartBody


def bars_from_chart_payload(payload: Dict[str, Any], symbol: str) -> List[Bar]:
    """
    Convert a chart payload into validated daily bars.

    Entries whose open, high, low or close is null (halted sessions) are
    dropped; a null volume is read as 0.

    Args:
        payload: Decoded JSON payload
        symbol: Symbol the payload belongs to (for error messages)

    Returns:
        Bars in ascending date order

    Raises:
        NoDataError: If the payload is malformed, arrays are missing or of
            unequal length, or no usable bar remains
    """
    try:
        response = ChartResponse.model_validate(payload)
    except ValidationError as e:
        raise NoDataError(f"Malformed chart payload for {symbol}: {e}", symbol=symbol) from e

    if not response.chart.result:
        raise NoDataError(f"No data available for {symbol}", symbol=symbol)

    result = response.chart.result[0]
    if not result.timestamp:
        raise NoDataError(f"No timestamps returned for {symbol}", symbol=symbol)
    if result.indicators is None or not result.indicators.quote:
        raise NoDataError(f"No quote indicators returned for {symbol}", symbol=symbol)

    quote = result.indicators.quote[0]
    arrays = {name: getattr(quote, name) for name in OHLCV_FIELDS}

    missing = [name for name, values in arrays.items() if values is None]
    if missing:
        raise NoDataError(f"Chart payload for {symbol} is missing arrays: {missing}", symbol=symbol)

    expected = len(result.timestamp)
    mismatched = {name: len(values) for name, values in arrays.items() if len(values) != expected}
    if mismatched:
        raise NoDataError(
            f"Indicator arrays for {symbol} do not match {expected} timestamps: {mismatched}",
            symbol=symbol
        )

    bars = []
    for i, timestamp in enumerate(result.timestamp):
        prices = [arrays[name][i] for name in ("open", "high", "low", "close")]
        if any(price is None for price in prices):
            continue
        volume = arrays["volume"][i]
        bars.append(Bar(
            date=epoch_to_date(timestamp),
            open=to_decimal(prices[0]),
            high=to_decimal(prices[1]),
            low=to_decimal(prices[2]),
            close=to_decimal(prices[3]),
            volume=int(volume) if volume is not None else 0
        ))

    return validate_bars(bars, symbol)


def validate_bars(bars: Sequence[Bar], symbol: str) -> List[Bar]:
    """
    Check the ordering and value rules for a daily series.

    Validation Rules (hard-fail):
    1. At least one bar
    2. Strictly increasing dates (no duplicates, no backward dates)
    3. Positive open/high/low/close
    4. Non-negative volume

    Args:
        bars: Bars to validate
        symbol: Symbol name for error messages

    Returns:
        The bars as a list

    Raises:
        NoDataError: If any rule is violated
    """
    if not bars:
        raise NoDataError(f"Provider returned zero bars for {symbol}", symbol=symbol)

    for i, bar in enumerate(bars):
        if min(bar.open, bar.high, bar.low, bar.close) <= 0:
            raise NoDataError(
                f"Non-positive price in {symbol} bar {i} ({bar.date.isoformat()})",
                symbol=symbol
            )
        if bar.volume < 0:
            raise NoDataError(
                f"Negative volume in {symbol} bar {i} ({bar.date.isoformat()})",
                symbol=symbol
            )
        if i > 0 and bar.date <= bars[i - 1].date:
            raise NoDataError(
                f"Bars not strictly increasing for {symbol} at index {i}: "
                f"{bars[i - 1].date.isoformat()} then {bar.date.isoformat()}. "
                f"Bars must be ordered oldest -> newest with no duplicate dates.",
                symbol=symbol
            )

    return list(bars)


def log_bar_validation_summary(logger, bars: Sequence[Bar], symbol: str):
    """
    Log a one-block summary of a validated series.

    Args:
        logger: Logger instance
        bars: Validated bars
        symbol: Trading symbol
    """
    logger.debug("-" * 70)
    logger.debug(f"Bars for {symbol}: {len(bars)}")
    logger.debug(f"First bar: {bars[0].date.isoformat()} (open {bars[0].open})")
    logger.debug(f"Last bar: {bars[-1].date.isoformat()} (close {bars[-1].close})")
    logger.debug("-" * 70)
