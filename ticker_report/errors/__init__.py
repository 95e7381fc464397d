"""
Error classification system for the report pipeline.

This module provides a structured exception hierarchy for the kinds of errors
encountered while fetching price data, reshaping it and computing metrics.
"""

from .data_quality import (
    DataQualityError,
    InvalidRequestError,
    MalformedResponseError,
    MalformedRecordError,
    InsufficientDataError,
)
from .fetch_failures import (
    FetchError,
    TransportError,
    ApiError,
    FetchFailedError,
)
from .system_failures import (
    SystemFailureError,
    DivisionByZeroError,
    MetricsCalculationError,
    DeliveryError,
)
from .recovery import (
    RecoverableError,
    UnrecoverableError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "InvalidRequestError",
    "MalformedResponseError",
    "MalformedRecordError",
    "InsufficientDataError",
    # Fetch Errors
    "FetchError",
    "TransportError",
    "ApiError",
    "FetchFailedError",
    # System Failures
    "SystemFailureError",
    "DivisionByZeroError",
    "MetricsCalculationError",
    "DeliveryError",
    # Recovery Categories
    "RecoverableError",
    "UnrecoverableError",
]
