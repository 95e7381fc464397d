"""HTTP POST notification delivery mechanism."""

import socket
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

import orjson

from ..config.notification_delivery import HttpDeliveryConfig
from ..data.models import NotificationMessage
from .base import (
    BaseNotificationDelivery,
    DeliveryResult,
    DeliveryStatus,
    NotificationDeliveryPermanentError,
    NotificationDeliveryRetryableError,
)


class HttpNotificationDelivery(BaseNotificationDelivery):
    """HTTP POST (webhook) notification delivery implementation."""

    def __init__(self, name: str, config: HttpDeliveryConfig):
        super().__init__(name, config)
        self.config: HttpDeliveryConfig = config

        parsed = urlparse(config.url)
        if not parsed.scheme or not parsed.netloc:
            raise NotificationDeliveryPermanentError(f"Invalid URL: {config.url}")

    def deliver(self, message: NotificationMessage) -> DeliveryResult:
        """Deliver the report via HTTP POST."""
        data = orjson.dumps(message.to_dict())
        headers = {
            'Content-Type': 'application/json',
            'Content-Length': str(len(data)),
            'User-Agent': 'ticker-report/1.0'
        }

        if self.config.headers:
            headers.update(self.config.headers)

        req = Request(
            self.config.url,
            data=data,
            headers=headers,
            method=self.config.method
        )

        try:
            with urlopen(req, timeout=self.config.timeout_seconds) as response:
                response_code = response.getcode()
                response_data = response.read().decode('utf-8', 'replace')

        except HTTPError as e:
            error_msg = f"HTTP {e.code}: {e.reason}"
            self.logger.warning(
                "Notification delivery HTTP error",
                delivery_name=self.name,
                recipient=message.recipient,
                error_code=e.code,
                error_reason=str(e.reason)
            )

            # Server errors are retryable, client errors are permanent
            if e.code >= 500:
                raise NotificationDeliveryRetryableError(error_msg)
            raise NotificationDeliveryPermanentError(error_msg)

        except (OSError, URLError, socket.timeout) as e:
            self.logger.warning(
                "Notification delivery network error",
                delivery_name=self.name,
                recipient=message.recipient,
                error=str(e)
            )
            raise NotificationDeliveryRetryableError(f"Network error: {str(e)}")

        if 200 <= response_code < 300:
            self.logger.info(
                "Report delivered successfully",
                delivery_name=self.name,
                recipient=message.recipient,
                response_code=response_code
            )
            return DeliveryResult(
                status=DeliveryStatus.SUCCESS,
                message=f"HTTP {response_code}: {response_data[:100]}"
            )

        error_msg = f"HTTP {response_code}: {response_data[:200]}"
        if response_code >= 500:
            raise NotificationDeliveryRetryableError(error_msg)
        raise NotificationDeliveryPermanentError(error_msg)

    def health_check(self) -> bool:
        """Check if HTTP endpoint is reachable."""
        try:
            parsed = urlparse(self.config.url)
            health_url = f"{parsed.scheme}://{parsed.netloc}"

            req = Request(health_url, method='HEAD')
            with urlopen(req, timeout=5) as response:
                return 200 <= response.getcode() < 400

        except (OSError, URLError) as e:
            self.logger.warning(
                "Health check failed",
                delivery_name=self.name,
                error=str(e)
            )
            return False
