"""Pytest configuration and shared fixtures."""

import pytest
from typing import Dict, Any, List

from ticker_report.data.models import NotificationMessage
from ticker_report.logging import configure_logging
from ticker_report.delivery.base import BaseNotificationDelivery, DeliveryResult, DeliveryStatus


class RecordingDelivery(BaseNotificationDelivery):
    """Delivery that keeps every message in memory."""

    def __init__(self, fail: bool = False):
        super().__init__("recording", config=None)
        self.fail = fail
        self.messages: List[NotificationMessage] = []

    def deliver(self, message: NotificationMessage) -> DeliveryResult:
        self.messages.append(message)
        if self.fail:
            return DeliveryResult(status=DeliveryStatus.FAILED, message="recording failure")
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message="recorded")

    def health_check(self) -> bool:
        return True


@pytest.fixture
def sample_response() -> Dict[str, Any]:
    """Two monthly closes for AAPL."""
    return {
        "data": [
            {"date": "2017-01-01", "close": 31},
            {"date": "2017-02-01", "close": 34},
        ]
    }


@pytest.fixture
def unordered_response() -> Dict[str, Any]:
    """Closes delivered newest first."""
    return {
        "data": [
            {"date": "2017-05-01", "close": 110},
            {"date": "2017-04-01", "close": 60},
            {"date": "2017-03-01", "close": 120},
            {"date": "2017-02-01", "close": 80},
            {"date": "2017-01-01", "close": 100},
        ]
    }


@pytest.fixture
def recording_delivery() -> RecordingDelivery:
    """In-memory notification destination."""
    return RecordingDelivery()


@pytest.fixture
def failing_delivery() -> RecordingDelivery:
    """Notification destination that reports every delivery as failed."""
    return RecordingDelivery(fail=True)


@pytest.fixture(scope="session", autouse=True)
def _stderr_logging():
    """Keep log output off stdout so printed reports can be asserted."""
    configure_logging(level="DEBUG", include_timestamp=False)
