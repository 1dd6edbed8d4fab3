"""API client for the historical chart endpoint.

This module handles all communication with the time-series provider
(GET {base_url}/historical/{symbol}?period1=&period2=), including retries,
timeouts, and mapping of provider failures onto SetupScan error kinds.
"""

from typing import Optional
from urllib.parse import quote
import requests
import threading
import time
import logging

from setupscan.core.errors import NoDataError, ProviderUnavailableError


class ChartApiClient:
    """Client for the historical chart endpoint.

    Handles retries with exponential backoff, timeouts, and logging.
    A 404 ("No data found") is not retried and maps to NoDataError. Other
    4xx responses (bad request) are not retried either and map to
    ProviderUnavailableError, as does every failure that survives the
    retries. One client may be shared by worker threads.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001/api",
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize API client.

        Args:
            base_url: Base URL of the provider (e.g., "http://localhost:3001/api")
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts per request
            retry_delay: Base delay between retries in seconds
            logger: Optional logger for request/response logging
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.logger = logger or logging.getLogger(__name__)

        # Session for connection pooling
        self.session = requests.Session()

        # Stats tracking, guarded for concurrent batches
        self._stats_lock = threading.Lock()
        self.total_requests = 0
        self.failed_requests = 0
        self.total_retry_count = 0

    def get_historical(self, symbol: str, period1: int, period2: int) -> dict:
        """Fetch the daily chart payload for a symbol and epoch range.

        Args:
            symbol: Instrument identifier (e.g., "PETR4.SA")
            period1: Range start, Unix epoch seconds
            period2: Range end, Unix epoch seconds (inclusive)

        Returns:
            Decoded chart payload

        Raises:
            NoDataError: If the provider has no data for the symbol (404)
            ProviderUnavailableError: If the provider rejects the request (4xx),
                or the request fails after retries
        """
        if period1 > period2:
            raise ValueError(f"period1 ({period1}) must be <= period2 ({period2})")

        url = f"{self.base_url}/historical/{quote(symbol, safe='')}"
        params = {"period1": int(period1), "period2": int(period2)}
        with self._stats_lock:
            self.total_requests += 1

        for attempt in range(self.max_retries):
            try:
                self.logger.debug(f"GET /historical/{symbol} (attempt {attempt + 1}/{self.max_retries})")

                response = self.session.get(url, params=params, timeout=self.timeout)

                if response.status_code == 404:
                    self._record_failure()
                    raise NoDataError(
                        f"No data found for {symbol}: {self._error_message(response)}",
                        symbol=symbol
                    )

                # Rejected requests fail the same way on every attempt
                if 400 <= response.status_code < 500 and response.status_code != 429:
                    self._record_failure()
                    raise ProviderUnavailableError(
                        f"Provider rejected request for {symbol} (HTTP {response.status_code}): "
                        f"{self._error_message(response)}",
                        symbol=symbol
                    )

                if response.status_code >= 400:
                    raise requests.exceptions.HTTPError(
                        f"HTTP {response.status_code}: {self._error_message(response)}",
                        response=response
                    )

                return response.json()

            except (requests.exceptions.RequestException, ValueError) as e:
                self.logger.warning(
                    f"Request for {symbol} failed (attempt {attempt + 1}/{self.max_retries}): {e}"
                )

                if attempt < self.max_retries - 1:
                    # Retry with exponential backoff
                    delay = self.retry_delay * (2 ** attempt)
                    self.logger.debug(f"Retrying in {delay:.1f}s...")
                    time.sleep(delay)
                    with self._stats_lock:
                        self.total_retry_count += 1
                else:
                    # Max retries reached
                    self._record_failure()
                    self.logger.error(f"Request for {symbol} failed after {self.max_retries} attempts")
                    raise ProviderUnavailableError(
                        f"Failed to fetch data for {symbol}: {e}",
                        symbol=symbol
                    ) from e

        # Should never reach here, but for type safety
        raise RuntimeError("Unexpected code path in get_historical")

    def _record_failure(self):
        with self._stats_lock:
            self.failed_requests += 1

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract the provider's {"error": ...} message, if any."""
        try:
            body = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP {response.status_code}"

    def get_stats(self) -> dict:
        """Get client statistics.

        Returns:
            Dictionary with total_requests, failed_requests, total_retry_count
        """
        with self._stats_lock:
            return {
                "total_requests": self.total_requests,
                "failed_requests": self.failed_requests,
                "total_retry_count": self.total_retry_count,
                "success_rate": (self.total_requests - self.failed_requests) / max(self.total_requests, 1)
            }

    def close(self):
        """Close the HTTP session and release resources."""
        self.session.close()
