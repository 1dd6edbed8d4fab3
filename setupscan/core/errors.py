"""Error kinds raised by the SetupScan engine and its runners"""

from typing import List, Optional


class SetupScanError(Exception):
    """Base class for all SetupScan errors"""
    pass


class ProviderUnavailableError(SetupScanError):
    """Raised when the time-series provider cannot be reached or fails"""

    def __init__(self, message: str, symbol: Optional[str] = None):
        super().__init__(message)
        self.symbol = symbol


class NoDataError(SetupScanError):
    """Raised when a symbol has no usable bars (empty or malformed series)"""

    def __init__(self, message: str, symbol: Optional[str] = None):
        super().__init__(message)
        self.symbol = symbol


class InvalidSetupError(SetupScanError):
    """Raised when a trading setup violates a precondition"""
    pass


class EmptyBatchError(SetupScanError):
    """Raised when every symbol in a batch failed"""

    def __init__(self, failed_symbols: List[str]):
        self.failed_symbols = list(failed_symbols)
        super().__init__(
            "No data could be retrieved for any of the selected symbols: "
            f"{', '.join(self.failed_symbols)}"
        )
