"""Quandl datatable price source.

Fetches closing prices from the Quandl v3 datatables API and converts the
columnar datatable into the row-oriented response the pipeline validates.
"""

import socket
from datetime import date
from typing import Any, Optional, Union
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

import structlog

from ..config.defaults import QuandlParams, ResponseParams, params_from_config
from ..data.parsers import parse_json_payload
from ..errors import MalformedResponseError, TransportError
from .base import PriceDataSource

logger = structlog.get_logger(__name__)


class QuandlDataSource(PriceDataSource):
    """Price source backed by a Quandl datatable (WIKI/PRICES by default).

    :param config: Merged configuration dict; uses the "quandl" and
        "response" sections.
    :param max_pages: Upper bound on cursor pages followed per request.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None, max_pages: int = 50) -> None:
        self.params = params_from_config(QuandlParams, config, "quandl")
        self.fields = params_from_config(ResponseParams, config, "response")
        self.max_pages = max_pages

    def build_url(self, ticker: str, start_date: str, cursor_id: Optional[str] = None) -> str:
        """Build the datatable query URL."""
        query = {
            "ticker": ticker.upper(),
            "date.gte": start_date,
            "qopts.columns": f"{self.fields.date_field},{self.fields.close_field}",
        }
        if cursor_id:
            query["qopts.cursor_id"] = cursor_id

        base = self.params.base_url.rstrip("/")
        return f"{base}/datatables/{self.params.table}.json?{urlencode(query)}"

    def fetch(self, ticker: str, start_date: Union[str, date]) -> dict[str, Any]:
        """Fetch closing prices, following cursor pages.

        :returns: ``{"data": [...]}`` on success, the provider's
            ``quandl_error`` marker on API rejection, or the undecoded payload
            when it has no datatable (left for shape validation to reject).
        :raises TransportError: On network failures and 5xx responses.
        """
        start = start_date.isoformat() if isinstance(start_date, date) else str(start_date)
        rows: list[dict[str, Any]] = []
        cursor_id = None

        for _ in range(self.max_pages):
            payload = self._get_json(self.build_url(ticker, start, cursor_id), ticker)

            if self.fields.api_error_field in payload or "datatable" not in payload:
                return payload

            rows.extend(self._datatable_rows(payload["datatable"]))

            cursor_id = (payload.get("meta") or {}).get("next_cursor_id")
            if not cursor_id:
                break
        else:
            logger.warning("Quandl page limit reached", ticker=ticker, max_pages=self.max_pages)

        logger.info("Fetched Quandl prices", ticker=ticker, start_date=start, rows=len(rows))
        return {self.fields.data_field: rows}

    def _get_json(self, url: str, ticker: str) -> dict[str, Any]:
        req = Request(url, headers={"Accept": "application/json", "User-Agent": "ticker-report/1.0"})

        try:
            with urlopen(req, timeout=self.params.timeout_seconds) as response:
                body = response.read()

        except HTTPError as e:
            if e.code >= 500:
                raise TransportError(f"Quandl server error HTTP {e.code}", ticker=ticker, status_code=e.code)

            # Client errors carry the provider's error marker in the body
            body = e.read()
            try:
                payload = parse_json_payload(body)
            except MalformedResponseError:
                payload = None
            if isinstance(payload, dict) and self.fields.api_error_field in payload:
                return payload
            return {self.fields.api_error_field: {"code": str(e.code), "message": str(e.reason)}}

        except (URLError, OSError, socket.timeout) as e:
            raise TransportError(f"Network error fetching {ticker}: {e}", ticker=ticker)

        try:
            payload = parse_json_payload(body)
        except MalformedResponseError as e:
            logger.warning("Quandl returned non-JSON body", ticker=ticker, error=str(e))
            return {"raw_body": e.raw_data}

        return payload if isinstance(payload, dict) else {"raw_body": payload}

    def _datatable_rows(self, datatable: dict[str, Any]) -> list[dict[str, Any]]:
        """Zip datatable column names onto each row array."""
        names = [column.get("name") for column in datatable.get("columns", [])]
        return [dict(zip(names, row)) for row in datatable.get("data", [])]
