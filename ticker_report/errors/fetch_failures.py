"""
Fetch failure classifications.

Transport failures are transient and may be retried; API failures are
reported by the data provider itself and are final for the request.
"""

from typing import Optional, Dict, Any

from .recovery import RecoverableError, UnrecoverableError


class FetchError(Exception):
    """Base class for failures reaching or querying the price data source."""

    def __init__(self, message: str, ticker: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.ticker = ticker
        self.context = context or {}


class TransportError(FetchError, RecoverableError):
    """Network or server side failure while fetching price data."""

    def __init__(self, message: str, ticker: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        FetchError.__init__(self, message, ticker=ticker, context=kwargs.get("context"))
        self.recoverable = True
        self.retry_count = kwargs.get("retry_count", 0)
        self.max_retries = kwargs.get("max_retries", 3)
        self.status_code = status_code


class ApiError(FetchError, UnrecoverableError):
    """The data provider rejected the request."""

    def __init__(self, message: str, ticker: Optional[str] = None,
                 code: Optional[str] = None, **kwargs):
        FetchError.__init__(self, message, ticker=ticker, context=kwargs.get("context"))
        self.recoverable = False
        self.code = code


class FetchFailedError(TransportError):
    """Every fetch attempt failed; the request cannot proceed."""

    def __init__(self, message: str, ticker: Optional[str] = None,
                 attempts: int = 0, **kwargs):
        super().__init__(message, ticker=ticker, **kwargs)
        self.attempts = attempts
        self.recoverable = False
