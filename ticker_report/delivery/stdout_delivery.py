"""Standard output notification delivery mechanism."""

import sys
from datetime import datetime, timezone

import orjson

from ..config.notification_delivery import StdoutDeliveryConfig
from ..data.models import NotificationMessage
from .base import BaseNotificationDelivery, DeliveryResult, DeliveryStatus


class StdoutNotificationDelivery(BaseNotificationDelivery):
    """Standard output notification delivery implementation."""

    def __init__(self, name: str, config: StdoutDeliveryConfig):
        super().__init__(name, config)
        self.config: StdoutDeliveryConfig = config

    def deliver(self, message: NotificationMessage) -> DeliveryResult:
        """Print the report to stdout."""
        try:
            print(self._format_message(message), file=sys.stdout, flush=True)

            self.logger.info(
                "Report printed to stdout",
                delivery_name=self.name,
                recipient=message.recipient
            )
            return DeliveryResult(status=DeliveryStatus.SUCCESS, message="Printed to stdout")

        except (OSError, ValueError) as e:
            self.logger.error(
                "Failed to print report to stdout",
                delivery_name=self.name,
                recipient=message.recipient,
                error=str(e)
            )
            return DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"Stdout error: {str(e)}",
                error=e
            )

    def _format_message(self, message: NotificationMessage) -> str:
        """Format the report for stdout output."""
        if self.config.format == "json":
            payload = message.to_dict()
            if self.config.include_timestamp:
                payload["stdout_timestamp"] = datetime.now(timezone.utc).isoformat()
            return orjson.dumps(payload).decode("utf-8")

        if self.config.include_timestamp:
            return f"[{datetime.now(timezone.utc).isoformat()}]\n{message.body}"
        return message.body

    def health_check(self) -> bool:
        """Check if stdout is available."""
        try:
            return sys.stdout.writable()
        except (OSError, ValueError):
            return False
