"""
Canonical data models for price series and pipeline messages.

This module defines immutable data structures that represent fetch outcomes,
validated closing prices and outgoing notifications.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Iterator, Optional

from ..errors import MalformedRecordError


class FetchErrorKind(Enum):
    """Kind of error reported by a fetch collaborator."""
    TRANSPORT = "transport"
    API = "api"


@dataclass(frozen=True)
class FetchResult:
    """Tagged outcome of one fetch: either a response or an error kind."""
    response: Optional[dict[str, Any]] = None
    error_kind: Optional[FetchErrorKind] = None
    error_msg: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error_kind is None

    @classmethod
    def ok(cls, response: dict[str, Any]) -> "FetchResult":
        """Create successful result carrying the raw response."""
        return cls(response=response)

    @classmethod
    def err(cls, kind: FetchErrorKind, message: str) -> "FetchResult":
        """Create error result."""
        return cls(error_kind=kind, error_msg=message)


@dataclass(frozen=True)
class PricePoint:
    """Closing price on one calendar date."""
    date: date
    close_price: float


@dataclass(frozen=True)
class PriceSeries:
    """Closing prices in strictly increasing date order."""
    points: tuple[PricePoint, ...] = field(default_factory=tuple)

    def __post_init__(self):
        points = tuple(self.points)
        object.__setattr__(self, "points", points)

        for i in range(1, len(points)):
            if points[i].date <= points[i - 1].date:
                raise MalformedRecordError(
                    f"Series out of order at index {i}: {points[i].date} after {points[i - 1].date}",
                    row_index=i,
                    field="date"
                )

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PricePoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> PricePoint:
        return self.points[index]

    @property
    def first(self) -> Optional[PricePoint]:
        return self.points[0] if self.points else None

    @property
    def last(self) -> Optional[PricePoint]:
        return self.points[-1] if self.points else None

    def closing_prices(self) -> list[float]:
        return [point.close_price for point in self.points]

    def dates(self) -> list[date]:
        return [point.date for point in self.points]

    def to_records(self, date_field: str = "date", close_field: str = "close") -> list[dict[str, Any]]:
        """Re-derive response rows (ISO dates) from the series."""
        return [
            {date_field: point.date.isoformat(), close_field: point.close_price}
            for point in self.points
        ]


@dataclass(frozen=True)
class NotificationMessage:
    """Report handed to a notification destination."""
    recipient: str
    body: str
    subject: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"recipient": self.recipient, "subject": self.subject, "body": self.body}
