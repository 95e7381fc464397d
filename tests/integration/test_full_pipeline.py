"""
End-to-end tests: Quandl payloads through the source, engine and delivery.

Only the HTTP layer is mocked; everything else runs as in production.
"""

import io
import json
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError

import orjson
import pytest

from ticker_report.config.loader import ConfigLoader
from ticker_report.config.notification_delivery import create_file_destination
from ticker_report.delivery import create_delivery
from ticker_report.engine import ReportEngine, RunStatus
from ticker_report.sources import QuandlDataSource, StaticDataSource

pytestmark = pytest.mark.integration


def _http_response(payload):
    response = MagicMock()
    response.read.return_value = orjson.dumps(payload)
    response.__enter__.return_value = response
    return response


def _datatable(rows, cursor=None):
    return {
        "datatable": {
            "data": rows,
            "columns": [{"name": "date", "type": "Date"}, {"name": "close", "type": "BigDecimal(34,12)"}],
        },
        "meta": {"next_cursor_id": cursor},
    }


class TestFullPipeline:
    """Test the report from HTTP payload to delivered message."""

    def test_reference_report(self, sample_response, recording_delivery):
        """Test the canonical aapl request renders the expected two lines."""
        engine = ReportEngine(delivery=recording_delivery)

        result = engine.run(StaticDataSource(sample_response), "aapl", "2017-08-01", "investor@example.com")

        assert result.status == RunStatus.DELIVERED
        body = recording_delivery.messages[0].body
        assert "ROI: 9.7 %" in body
        assert "Max drawdown: 0.0 %" in body

    def test_aapl_report(self, tmp_path, recording_delivery):
        """Test the two-point AAPL series produces the expected report."""
        config = ConfigLoader.create(tmp_path).merge_config("AAPL")
        engine = ReportEngine(config, delivery=recording_delivery)
        payload = _datatable([["2017-08-01", 31.0], ["2017-08-02", 34.0]])

        with patch("ticker_report.sources.quandl.urlopen", return_value=_http_response(payload)) as mock_urlopen:
            result = engine.run(QuandlDataSource(config), "aapl", "2017-08-01", "investor@example.com")

        assert result.status == RunStatus.DELIVERED
        assert recording_delivery.messages[0].body == "ROI: 9.7 %\nMax drawdown: 0.0 %"
        assert "ticker=AAPL" in mock_urlopen.call_args[0][0].full_url
        assert "date.gte=2017-08-01" in mock_urlopen.call_args[0][0].full_url

    def test_paginated_unordered_series(self, tmp_path):
        """Test pages are joined and ordered before metrics, then written to file."""
        config = ConfigLoader.create(tmp_path).merge_config("XYZ")
        output = tmp_path / "reports.jsonl"
        delivery = create_delivery(create_file_destination("file", str(output)))
        engine = ReportEngine(config, delivery=delivery)
        pages = [
            _http_response(_datatable([["2017-05-01", 110], ["2017-04-01", 60]], cursor="c1")),
            _http_response(_datatable([["2017-03-01", 120], ["2017-02-01", 80], ["2017-01-01", 100]])),
        ]

        with patch("ticker_report.sources.quandl.urlopen", side_effect=pages):
            result = engine.run(QuandlDataSource(config), "xyz", "2017-01-01", "desk@example.com")

        assert result.status == RunStatus.DELIVERED
        record = json.loads(output.read_text().splitlines()[0])
        assert record["body"] == "ROI: 10.0 %\nMax drawdown: 50.0 %"
        assert record["subject"] == "Ticker report: XYZ"

    def test_unknown_ticker(self, tmp_path, recording_delivery):
        """Test a provider rejection is reported without delivery."""
        config = ConfigLoader.create(tmp_path).merge_config("NOPE")
        engine = ReportEngine(config, delivery=recording_delivery)
        body = orjson.dumps({"quandl_error": {"code": "QECx02", "message": "You have submitted an incorrect Quandl code."}})
        error = HTTPError("https://www.quandl.com", 400, "Bad Request", {}, io.BytesIO(body))

        with patch("ticker_report.sources.quandl.urlopen", side_effect=error):
            result = engine.run(QuandlDataSource(config), "nope", "2017-01-01", "stdout")

        assert result.status == RunStatus.API_ERROR
        assert result.message.startswith("QECx02")
        assert recording_delivery.messages == []
