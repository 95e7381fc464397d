"""Base classes for notification delivery mechanisms."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import structlog

from ..data.models import NotificationMessage
from ..errors import DeliveryError


class DeliveryStatus(Enum):
    """Notification delivery status."""
    SUCCESS = "success"
    FAILED = "failed"
    DEAD_LETTER = "dead_letter"


@dataclass
class DeliveryResult:
    """Result of a notification delivery attempt."""
    status: DeliveryStatus
    message: Optional[str] = None
    attempt_count: int = 1
    delivery_time_ms: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def delivered(self) -> bool:
        return self.status == DeliveryStatus.SUCCESS


class NotificationDeliveryError(DeliveryError):
    """Base exception for notification delivery errors."""
    pass


class NotificationDeliveryRetryableError(NotificationDeliveryError):
    """Retryable notification delivery error."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, **kwargs)
        self.recoverable = True


class NotificationDeliveryPermanentError(NotificationDeliveryError):
    """Permanent notification delivery error that should not be retried."""
    pass


class BaseNotificationDelivery(ABC):
    """Base class for notification delivery mechanisms."""

    def __init__(self, name: str, config: Any):
        self.name = name
        self.config = config
        self.logger = structlog.get_logger(f"notification.delivery.{name}")
        self._delivery_count = 0
        self._error_count = 0

    @abstractmethod
    def deliver(self, message: NotificationMessage) -> DeliveryResult:
        """
        Deliver one message to the configured destination.

        Implementations report expected failures as a FAILED result, or raise
        NotificationDeliveryRetryableError / NotificationDeliveryPermanentError.

        Args:
            message: Report to deliver

        Returns:
            Delivery result
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Check if delivery mechanism is healthy."""
        pass

    def send(self, recipient: str, body: str, subject: str = "") -> DeliveryResult:
        """Deliver a message built from its parts."""
        return self.deliver(NotificationMessage(recipient=recipient, body=body, subject=subject))

    def deliver_with_retry(
        self,
        message: NotificationMessage,
        max_retries: int = 3,
        retry_delay: float = 1
    ) -> DeliveryResult:
        """
        Deliver a message, retrying failed and retryable attempts.

        A permanent error stops immediately with FAILED. Exhausting all
        1 + max_retries attempts yields DEAD_LETTER.

        Args:
            message: Report to deliver
            max_retries: Attempts allowed after the first
            retry_delay: Seconds to wait between attempts

        Returns:
            The successful result, or the final failure
        """
        attempts = 1 + max(0, max_retries)
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            started = time.monotonic()
            try:
                result = self.deliver(message)
            except NotificationDeliveryPermanentError as e:
                self._error_count += 1
                self.logger.error("Permanent delivery failure", delivery_name=self.name,
                                  recipient=message.recipient, error=str(e))
                return DeliveryResult(
                    status=DeliveryStatus.FAILED,
                    message=f"Permanent error: {e}",
                    attempt_count=attempt,
                    error=e
                )
            except Exception as e:
                # Retryable and unclassified errors both get another attempt
                last_error = e
            else:
                if result.delivered:
                    result.delivery_time_ms = int((time.monotonic() - started) * 1000)
                    result.attempt_count = attempt
                    self._delivery_count += 1
                    return result
                last_error = result.error or NotificationDeliveryError(result.message or "delivery failed")

            if attempt < attempts:
                self.logger.warning(
                    "Delivery attempt failed, retrying",
                    delivery_name=self.name,
                    attempt=attempt,
                    retry_delay=retry_delay,
                    error=str(last_error)
                )
                time.sleep(retry_delay)

        self._error_count += 1
        self.logger.error("Delivery moved to dead letter", delivery_name=self.name,
                          recipient=message.recipient, attempts=attempts)
        return DeliveryResult(
            status=DeliveryStatus.DEAD_LETTER,
            message=f"Max retries exceeded: {last_error}",
            attempt_count=attempts,
            error=last_error
        )

    def get_stats(self) -> dict[str, Any]:
        """Delivery counters since creation or the last reset."""
        total = self._delivery_count + self._error_count
        return {
            "name": self.name,
            "delivery_count": self._delivery_count,
            "error_count": self._error_count,
            "success_rate": self._delivery_count / total if total else 0.0,
        }

    def reset_stats(self) -> None:
        self._delivery_count = 0
        self._error_count = 0
