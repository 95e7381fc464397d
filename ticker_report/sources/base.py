"""Base class for price data sources."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Union


class PriceDataSource(ABC):
    """Abstract base class for price data sources.

    Instances are callable, so a source can be passed wherever a plain
    ``fetch_fn(ticker, date)`` is expected.
    """

    @abstractmethod
    def fetch(self, ticker: str, start_date: Union[str, date]) -> dict[str, Any]:
        """Fetch closing prices for a ticker from a start date onwards.

        :param ticker: Ticker symbol.
        :param start_date: First calendar date of the series (ISO string or date).
        :returns: Raw response dict, possibly carrying an error marker.
        :raises TransportError: If the provider cannot be reached.
        """
        ...

    def __call__(self, ticker: str, start_date: Union[str, date]) -> dict[str, Any]:
        return self.fetch(ticker, start_date)
