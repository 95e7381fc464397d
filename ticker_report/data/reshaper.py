"""
Reshaping of validated responses into ordered closing-price series.

Rows are always sorted by date here; the upstream order is not trusted.
"""

import math
from typing import Any, Iterable, Optional

from ..config.defaults import ResponseParams, params_from_config
from ..errors import MalformedRecordError
from .models import PricePoint, PriceSeries
from .parsers import parse_price_date


def parse_close_price(value: Any) -> float:
    """
    Convert a close field to a finite, non-negative float.

    Raises:
        ValueError: If the value is not a usable price
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a number: {value!r}")

    try:
        price = float(value.strip() if isinstance(value, str) else value)
    except OverflowError:
        raise ValueError(f"Price out of range: {value!r}")

    if not math.isfinite(price):
        raise ValueError(f"Price must be finite, got {price}")
    if price < 0:
        raise ValueError(f"Price must be non-negative, got {price}")

    return price


def records_to_series(rows: Iterable[Any],
                      date_field: str = "date",
                      close_field: str = "close") -> PriceSeries:
    """
    Build a PriceSeries from row mappings.

    Raises:
        MalformedRecordError: If a row is missing a field, has an unparseable
            date or price, or repeats a date
    """
    points = []

    for i, row in enumerate(rows):
        try:
            raw_date = row[date_field]
        except (KeyError, TypeError):
            raise MalformedRecordError(f"Row {i} is missing '{date_field}'", row_index=i, field=date_field)

        try:
            raw_close = row[close_field]
        except (KeyError, TypeError):
            raise MalformedRecordError(f"Row {i} is missing '{close_field}'", row_index=i, field=close_field)

        try:
            point_date = parse_price_date(raw_date)
        except (ValueError, TypeError) as e:
            raise MalformedRecordError(f"Row {i} has invalid date {raw_date!r}: {e}", row_index=i, field=date_field)

        try:
            close_price = parse_close_price(raw_close)
        except (ValueError, TypeError) as e:
            raise MalformedRecordError(f"Row {i} has invalid close {raw_close!r}: {e}", row_index=i, field=close_field)

        points.append((i, PricePoint(date=point_date, close_price=close_price)))

    points.sort(key=lambda item: item[1].date)

    for (_, prev), (index, curr) in zip(points, points[1:]):
        if curr.date == prev.date:
            raise MalformedRecordError(
                f"Duplicate date {curr.date.isoformat()} at row {index}",
                row_index=index,
                field=date_field
            )

    return PriceSeries(tuple(point for _, point in points))


def reshape(response: dict[str, Any], config: Optional[dict[str, Any]] = None) -> PriceSeries:
    """
    Convert a validated response into a PriceSeries ordered by date.

    Must only be called on a response that passed validate_response().

    Args:
        response: Validated raw response
        config: Merged configuration dict (uses the "response" section)

    Returns:
        PriceSeries sorted ascending by date

    Raises:
        MalformedRecordError: If any row cannot be reshaped
    """
    fields = params_from_config(ResponseParams, config, "response")
    return records_to_series(response[fields.data_field], fields.date_field, fields.close_field)
