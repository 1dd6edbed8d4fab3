"""Instrument catalog: market indices and their tracked constituents"""

from dataclasses import dataclass
from typing import List, Optional

from setupscan.core.errors import InvalidSetupError

COUNTRIES = ("BR", "US", "ALL")


@dataclass(frozen=True)
class MarketIndex:
    id: str
    name: str
    country: str


@dataclass(frozen=True)
class Instrument:
    symbol: str
    name: str
    index: str


INDICES = (
    MarketIndex("IBOV", "Ibovespa", "BR"),
    MarketIndex("SP500", "S&P 500", "US"),
)

INSTRUMENTS = (
    # Brazilian stocks
    Instrument("PETR4.SA", "Petrobras PN", "IBOV"),
    Instrument("VALE3.SA", "Vale ON", "IBOV"),
    Instrument("ITUB4.SA", "Itaú Unibanco PN", "IBOV"),
    Instrument("BBDC4.SA", "Bradesco PN", "IBOV"),
    Instrument("B3SA3.SA", "B3 ON", "IBOV"),
    Instrument("ABEV3.SA", "Ambev ON", "IBOV"),
    Instrument("WEGE3.SA", "WEG ON", "IBOV"),
    Instrument("RENT3.SA", "Localiza ON", "IBOV"),
    Instrument("BBAS3.SA", "Banco do Brasil ON", "IBOV"),
    Instrument("SUZB3.SA", "Suzano ON", "IBOV"),

    # US stocks
    Instrument("AAPL", "Apple Inc", "SP500"),
    Instrument("MSFT", "Microsoft Corporation", "SP500"),
    Instrument("GOOGL", "Alphabet Inc", "SP500"),
    Instrument("AMZN", "Amazon.com Inc", "SP500"),
    Instrument("NVDA", "NVIDIA Corporation", "SP500"),
    Instrument("META", "Meta Platforms Inc", "SP500"),
    Instrument("TSLA", "Tesla Inc", "SP500"),
    Instrument("BRK-B", "Berkshire Hathaway Inc", "SP500"),
    Instrument("JPM", "JPMorgan Chase & Co", "SP500"),
    Instrument("V", "Visa Inc", "SP500"),
)


def indices_for(country: str = "ALL") -> List[MarketIndex]:
    """Indices listed in a country ("ALL" for every country)."""
    country = country.upper()
    if country not in COUNTRIES:
        raise InvalidSetupError(f"Invalid country '{country}'. Must be one of: {', '.join(COUNTRIES)}")
    return [idx for idx in INDICES if country == "ALL" or idx.country == country]


def symbols_for(index: str = "ALL", country: str = "ALL") -> List[str]:
    """
    Catalog symbols filtered by index and country.

    Args:
        index: Index id (e.g. "IBOV") or "ALL"
        country: "BR", "US" or "ALL"

    Returns:
        Symbols in catalog order

    Raises:
        InvalidSetupError: If the index is unknown or not listed in the country
    """
    allowed = {idx.id for idx in indices_for(country)}
    index = index.upper()
    if index != "ALL":
        if index not in {idx.id for idx in INDICES}:
            raise InvalidSetupError(f"Unknown index '{index}'")
        if index not in allowed:
            raise InvalidSetupError(f"Index '{index}' is not listed in country '{country.upper()}'")
        allowed = {index}
    return [inst.symbol for inst in INSTRUMENTS if inst.index in allowed]


def find_instrument(symbol: str) -> Optional[Instrument]:
    """Catalog entry for a symbol, or None if it is not tracked."""
    for inst in INSTRUMENTS:
        if inst.symbol == symbol:
            return inst
    return None
