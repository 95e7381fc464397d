"""File-based notification delivery mechanism."""

import fcntl
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import orjson

from ..config.notification_delivery import FileDeliveryConfig
from ..data.models import NotificationMessage
from .base import (
    BaseNotificationDelivery,
    DeliveryResult,
    DeliveryStatus,
    NotificationDeliveryPermanentError,
)


class FileNotificationDelivery(BaseNotificationDelivery):
    """File-based notification delivery implementation."""

    def __init__(self, name: str, config: FileDeliveryConfig):
        super().__init__(name, config)
        self.config: FileDeliveryConfig = config

        self.output_path = Path(config.output_path)

        if config.create_dirs:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

        if config.format not in ["json", "jsonl"]:
            raise NotificationDeliveryPermanentError(f"Unsupported format: {config.format}")

    def deliver(self, message: NotificationMessage) -> DeliveryResult:
        """Append the report to the output file."""
        record = message.to_dict()
        record["written_at"] = datetime.now(timezone.utc).isoformat()

        try:
            if self.config.format == "json":
                self._write_json_format(record)
            else:
                self._write_jsonl_format(record)

        except OSError as e:
            self.logger.warning(
                "Notification delivery file error",
                delivery_name=self.name,
                output_path=str(self.output_path),
                error=str(e)
            )
            return DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"File system error: {str(e)}",
                error=e
            )

        self.logger.info(
            "Report written to file",
            delivery_name=self.name,
            recipient=message.recipient,
            output_path=str(self.output_path)
        )
        return DeliveryResult(
            status=DeliveryStatus.SUCCESS,
            message=f"Written to {self.output_path}"
        )

    def _write_json_format(self, record: dict[str, Any]) -> None:
        """Write reports in JSON format (array of objects)."""
        existing_data = []
        if self.config.append_mode and self.output_path.exists():
            try:
                existing_data = orjson.loads(self.output_path.read_bytes())
                if not isinstance(existing_data, list):
                    existing_data = []
            except orjson.JSONDecodeError:
                # Corrupted or empty file, start fresh
                existing_data = []

        with open(self.output_path, 'wb') as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            f.write(orjson.dumps(existing_data + [record], option=orjson.OPT_INDENT_2))

    def _write_jsonl_format(self, record: dict[str, Any]) -> None:
        """Write reports in JSONL format (one JSON object per line)."""
        mode = 'ab' if self.config.append_mode else 'wb'

        with open(self.output_path, mode) as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            f.write(orjson.dumps(record))
            f.write(b'\n')

    def health_check(self) -> bool:
        """Check if file system is writable."""
        try:
            test_file = self.output_path.parent / ".health_check_test"
            test_file.write_text("test")
            test_file.unlink()
            return True

        except OSError as e:
            self.logger.warning(
                "Health check failed",
                delivery_name=self.name,
                error=str(e)
            )
            return False
