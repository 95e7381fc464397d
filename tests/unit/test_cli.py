"""Tests for the command line entry point."""

import json
from unittest.mock import Mock, patch

import pytest
import yaml

from ticker_report.cli import EXIT_FAILED, EXIT_OK, EXIT_USAGE, build_parser, main
from ticker_report.errors import ApiError
from ticker_report.sources import StaticDataSource


@pytest.fixture
def run_cli(tmp_path):
    """Run main() against a canned source and an empty config directory."""
    def _run(source, *args):
        factory = Mock(return_value=source)
        with patch("ticker_report.cli.QuandlDataSource", factory):
            code = main(["--config-dir", str(tmp_path), *args])
        return code, factory
    return _run


class TestParser:
    """Test argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(["aapl", "2017-08-01"])

        assert args.ticker == "aapl"
        assert args.date == "2017-08-01"
        assert args.recipient == "stdout"
        assert args.delivery == "stdout"
        assert args.delivery_retries == 0

    def test_unknown_delivery_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["aapl", "2017-08-01", "--delivery", "pigeon"])


class TestMain:
    """Test exit codes and output of main()."""

    def test_success_prints_report(self, run_cli, sample_response, capsys):
        code, factory = run_cli(StaticDataSource(sample_response), "aapl", "2017-01-01")

        assert code == EXIT_OK
        assert capsys.readouterr().out == "ROI: 9.7 %\nMax drawdown: 0.0 %\n"
        factory.assert_called_once()

    def test_invalid_date(self, run_cli, sample_response, capsys):
        code, factory = run_cli(StaticDataSource(sample_response), "aapl", "August 1st")

        assert code == EXIT_USAGE
        assert "Invalid input" in capsys.readouterr().err
        factory.assert_not_called()

    def test_invalid_ticker(self, run_cli, sample_response):
        code, _ = run_cli(StaticDataSource(sample_response), "$$$", "2017-01-01")
        assert code == EXIT_USAGE

    def test_missing_webhook_url(self, run_cli, sample_response, capsys):
        code, _ = run_cli(StaticDataSource(sample_response), "aapl", "2017-01-01", "--delivery", "http")

        assert code == EXIT_USAGE
        assert "--webhook-url" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, sample_response, capsys):
        (tmp_path / "tickers.yaml").write_text(yaml.safe_dump({"tickers": {"AAPL": {"report": {"decimals": 12}}}}))

        with patch("ticker_report.cli.QuandlDataSource", Mock(return_value=StaticDataSource(sample_response))):
            code = main(["--config-dir", str(tmp_path), "aapl", "2017-01-01"])

        assert code == EXIT_USAGE
        assert "decimals" in capsys.readouterr().err

    def test_fetch_exhausted(self, run_cli, sample_response, capsys):
        source = StaticDataSource(sample_response, failures=10)

        code, _ = run_cli(source, "aapl", "2017-01-01")

        assert code == EXIT_FAILED
        assert len(source.calls) == 4
        assert "Could not fetch prices for AAPL" in capsys.readouterr().err

    def test_api_error_raised(self, run_cli, sample_response):
        code, _ = run_cli(StaticDataSource(sample_response, failures=1, error=ApiError("rejected")), "aapl", "2017-01-01")
        assert code == EXIT_FAILED

    def test_api_marker(self, run_cli, capsys):
        payload = {"quandl_error": {"code": "QECx02", "message": "You have submitted an incorrect Quandl code."}}

        code, _ = run_cli(StaticDataSource(payload), "nope", "2017-01-01")

        captured = capsys.readouterr()
        assert code == EXIT_FAILED
        assert captured.out == ""
        assert "QECx02" in captured.err

    def test_malformed_response(self, run_cli, capsys):
        code, _ = run_cli(StaticDataSource({"unexpected": True}), "aapl", "2017-01-01")

        assert code == EXIT_FAILED
        assert "something probably did not go as you wanted" in capsys.readouterr().err

    def test_zero_price(self, run_cli):
        payload = {"data": [{"date": "2017-01-01", "close": 0}]}
        code, _ = run_cli(StaticDataSource(payload), "aapl", "2017-01-01")
        assert code == EXIT_FAILED

    def test_file_delivery(self, run_cli, sample_response, tmp_path):
        output = tmp_path / "reports.jsonl"

        code, _ = run_cli(StaticDataSource(sample_response), "aapl", "2017-01-01",
                          "--delivery", "file", "--output-path", str(output), "--recipient", "desk@example.com")

        assert code == EXIT_OK
        record = json.loads(output.read_text().splitlines()[0])
        assert record["recipient"] == "desk@example.com"
        assert record["body"] == "ROI: 9.7 %\nMax drawdown: 0.0 %"

    def test_config_passed_to_source(self, run_cli, sample_response):
        code, factory = run_cli(StaticDataSource(sample_response), "aapl", "2017-01-01")

        assert code == EXIT_OK
        config = factory.call_args[0][0]
        assert config["quandl"]["table"] == "WIKI/PRICES"
