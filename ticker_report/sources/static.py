"""In-memory price data source for offline runs and tests."""

import copy
from datetime import date
from typing import Any, Optional, Union

from ..errors import TransportError
from .base import PriceDataSource


class StaticDataSource(PriceDataSource):
    """Serves a fixed payload, optionally after a number of transport failures.

    :param payload: Raw response returned by every successful call.
    :param failures: Number of leading calls that raise ``error`` instead.
    :param error: Exception raised by failing calls (default: TransportError).
    """

    def __init__(self, payload: dict[str, Any], failures: int = 0,
                 error: Optional[Exception] = None) -> None:
        self.payload = payload
        self.failures = failures
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def fetch(self, ticker: str, start_date: Union[str, date]) -> dict[str, Any]:
        start = start_date.isoformat() if isinstance(start_date, date) else str(start_date)
        self.calls.append((ticker, start))

        if len(self.calls) <= self.failures:
            raise self.error or TransportError(
                f"Simulated transport failure #{len(self.calls)}",
                ticker=ticker
            )

        return copy.deepcopy(self.payload)
