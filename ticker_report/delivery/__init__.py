"""
Notification delivery module.

Destinations that receive the finished report: stdout, file, HTTP webhook
and SMTP email.
"""

from ..config.notification_delivery import DeliveryDestination, DeliveryMethod
from .base import (
    BaseNotificationDelivery,
    DeliveryResult,
    DeliveryStatus,
    NotificationDeliveryError,
    NotificationDeliveryPermanentError,
    NotificationDeliveryRetryableError,
)
from .email_delivery import EmailNotificationDelivery
from .file_delivery import FileNotificationDelivery
from .http_delivery import HttpNotificationDelivery
from .stdout_delivery import StdoutNotificationDelivery

_DELIVERY_CLASSES = {
    DeliveryMethod.EMAIL: EmailNotificationDelivery,
    DeliveryMethod.HTTP_POST: HttpNotificationDelivery,
    DeliveryMethod.FILE_OUTPUT: FileNotificationDelivery,
    DeliveryMethod.STDOUT: StdoutNotificationDelivery,
}


def create_delivery(destination: DeliveryDestination) -> BaseNotificationDelivery:
    """Build the delivery implementation for a destination."""
    if not destination.enabled:
        raise NotificationDeliveryPermanentError(f"Delivery destination is disabled: {destination.name}")
    delivery_cls = _DELIVERY_CLASSES.get(destination.method)
    if delivery_cls is None:
        raise NotificationDeliveryPermanentError(f"Unsupported delivery method: {destination.method}")
    return delivery_cls(destination.name, destination.config)


__all__ = [
    "BaseNotificationDelivery",
    "DeliveryResult",
    "DeliveryStatus",
    "NotificationDeliveryError",
    "NotificationDeliveryPermanentError",
    "NotificationDeliveryRetryableError",
    "EmailNotificationDelivery",
    "FileNotificationDelivery",
    "HttpNotificationDelivery",
    "StdoutNotificationDelivery",
    "create_delivery",
]
