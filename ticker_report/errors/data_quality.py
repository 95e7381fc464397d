"""
Data quality error classifications for price data processing.

These exceptions describe problems with the request input, the fetched
response, individual price records, or the amount of data available.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class InvalidRequestError(DataQualityError):
    """Ticker or date supplied by the caller is not usable."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class MalformedResponseError(DataQualityError):
    """Response has no error marker but does not have the expected shape."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class MalformedRecordError(DataQualityError):
    """A single price record could not be reshaped."""

    def __init__(self, message: str, row_index: Optional[int] = None,
                 field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.row_index = row_index
        self.field = field


class InsufficientDataError(DataQualityError):
    """Not enough price points for a calculation."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count
