"""
System failure error classifications.

These exceptions represent failures in computation or delivery that cannot be
fixed by the pipeline itself.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class DivisionByZeroError(SystemFailureError, ZeroDivisionError):
    """A metric needed to divide by a zero price."""

    def __init__(self, message: str, metric_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.metric_name = metric_name


class MetricsCalculationError(SystemFailureError):
    """Unexpected error in metrics calculation."""

    def __init__(self, message: str, metric_name: Optional[str] = None,
                 calculation_input: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.metric_name = metric_name
        self.calculation_input = calculation_input


class DeliveryError(SystemFailureError):
    """Notification delivery system failures."""

    def __init__(self, message: str, delivery_method: Optional[str] = None,
                 recipient: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.delivery_method = delivery_method
        self.recipient = recipient
