"""
Parsers for request input and raw fetch output.

This module handles the conversion of caller input and raw provider payloads
into typed values, including the normalization of the two error markers a
fetch collaborator may set into a single tagged FetchResult.
"""

import re
from datetime import date, datetime
from typing import Any, Optional, Union

import orjson

from ..config.defaults import ResponseParams, params_from_config
from ..errors import InvalidRequestError, MalformedResponseError
from .models import FetchErrorKind, FetchResult

TICKER_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,15}$")
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_request_input(ticker: str, date_str: str) -> tuple[str, date]:
    """
    Validate and normalize a ticker/date request.

    Args:
        ticker: Ticker symbol such as "aapl"
        date_str: Calendar date in ISO form, e.g. "2017-08-01"

    Returns:
        Upper-cased ticker and parsed date

    Raises:
        InvalidRequestError: If either value is unusable
    """
    if not isinstance(ticker, str) or not TICKER_PATTERN.match(ticker.strip()):
        raise InvalidRequestError(f"Invalid ticker: {ticker!r}", field="ticker", value=str(ticker))

    if not isinstance(date_str, str) or not ISO_DATE_PATTERN.match(date_str.strip()):
        raise InvalidRequestError(
            f"Invalid date: {date_str!r}, expected YYYY-MM-DD",
            field="date",
            value=str(date_str)
        )

    try:
        parsed_date = date.fromisoformat(date_str.strip())
    except ValueError as e:
        raise InvalidRequestError(f"Invalid date: {date_str!r}: {e}", field="date", value=date_str)

    return ticker.strip().upper(), parsed_date


def parse_price_date(value: Any) -> date:
    """
    Parse a row's date field.

    Accepts date and datetime objects and ISO-8601 strings (a time part is
    dropped).

    Raises:
        ValueError: If the value is not a recognizable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if ISO_DATE_PATTERN.match(text):
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    raise ValueError(f"Unsupported date value: {value!r}")


def parse_json_payload(raw_data: Union[str, bytes]) -> Any:
    """
    Parse raw JSON text into Python objects using orjson.

    Raises:
        MalformedResponseError: If the payload is not valid JSON
    """
    try:
        return orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        preview = raw_data[:100] if isinstance(raw_data, str) else raw_data[:100].decode("utf-8", "replace")
        raise MalformedResponseError(f"Invalid JSON: {e}", raw_data=preview, expected_format="json")


def describe_error_marker(value: Any) -> str:
    """Render an error marker value as a user-facing message."""
    if isinstance(value, dict):
        code = value.get("code")
        message = value.get("message") or value.get("msg") or ""
        if code and message:
            return f"{code}: {message}"
        return str(message or code or value)
    return str(value)


def normalize_fetch_output(raw: Any, config: Optional[dict[str, Any]] = None) -> FetchResult:
    """
    Convert raw fetch output into a tagged FetchResult.

    The API-level marker is checked before the transport-level marker; any
    other payload, well-formed or not, is passed on as a successful fetch for
    shape validation.
    """
    fields = params_from_config(ResponseParams, config, "response")

    if isinstance(raw, dict):
        api_error = raw.get(fields.api_error_field)
        if api_error is not None:
            return FetchResult.err(FetchErrorKind.API, describe_error_marker(api_error))

        transport_error = raw.get(fields.transport_error_field)
        if transport_error is not None:
            return FetchResult.err(FetchErrorKind.TRANSPORT, describe_error_marker(transport_error))

    return FetchResult.ok(raw)
