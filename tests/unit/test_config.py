"""Tests for configuration defaults, loading and validation."""

import pytest
import yaml

from ticker_report.config.defaults import (
    FetchParams,
    QuandlParams,
    ReportParams,
    ResponseParams,
    get_default_config,
    params_from_config,
)
from ticker_report.config.loader import ConfigLoader
from ticker_report.config.validation import ConfigValidator


@pytest.fixture
def config_dir(tmp_path):
    tickers = {
        "tickers": {
            "AAPL": {
                "fetch": {"max_retries": 5},
                "report": {"decimals": 2},
            },
            "BRK.A": {
                "response": {"close_field": "adj_close"},
            },
        }
    }
    (tmp_path / "tickers.yaml").write_text(yaml.safe_dump(tickers))
    return tmp_path


class TestDefaults:
    """Test default parameter values."""

    def test_default_values(self):
        config = get_default_config()

        assert config.fetch.max_retries == 3
        assert config.fetch.retry_delay_seconds == 0.0
        assert config.response.transport_error_field == "error"
        assert config.response.api_error_field == "quandl_error"
        assert config.report.decimals == 1
        assert config.quandl.table == "WIKI/PRICES"

    def test_params_from_config(self):
        params = params_from_config(FetchParams, {"fetch": {"max_retries": 1, "unknown": True}}, "fetch")
        assert params == FetchParams(max_retries=1)

    def test_params_from_missing_section(self):
        assert params_from_config(ReportParams, None, "report") == ReportParams()
        assert params_from_config(QuandlParams, {"quandl": None}, "quandl") == QuandlParams()
        assert params_from_config(ResponseParams, {}, "response") == ResponseParams()


class TestConfigLoader:
    """Test 3-tier configuration merging."""

    def test_defaults_only(self, tmp_path):
        config = ConfigLoader.create(tmp_path).merge_config("MSFT")

        assert config["fetch"]["max_retries"] == 3
        assert config["response"]["data_field"] == "data"

    def test_ticker_overrides(self, config_dir):
        config = ConfigLoader.create(config_dir).merge_config("aapl")

        assert config["fetch"]["max_retries"] == 5
        assert config["fetch"]["retry_delay_seconds"] == 0.0
        assert config["report"]["decimals"] == 2

    def test_call_overrides_win(self, config_dir):
        config = ConfigLoader.create(config_dir).merge_config("AAPL", {"fetch": {"max_retries": 0}})

        assert config["fetch"]["max_retries"] == 0
        assert config["report"]["decimals"] == 2

    def test_load_ticker_config(self, config_dir):
        loader = ConfigLoader.create(config_dir)

        assert loader.load_ticker_config("brk.a") == {"response": {"close_field": "adj_close"}}
        assert loader.load_ticker_config("IBM") == {}

    def test_empty_file(self, tmp_path):
        (tmp_path / "tickers.yaml").write_text("")
        assert ConfigLoader.create(tmp_path).load_ticker_config("AAPL") == {}

    def test_bundled_config_is_valid(self):
        config = ConfigLoader.create().merge_config("AAPL")
        assert ConfigValidator.validate_config(config) == []


class TestConfigValidator:
    """Test configuration validation."""

    def test_defaults_are_valid(self, tmp_path):
        config = ConfigLoader.create(tmp_path).merge_config("AAPL")
        assert ConfigValidator.validate_config(config) == []

    def test_invalid_fetch_params(self):
        errors = ConfigValidator.validate_fetch_params({"max_retries": -1, "retry_delay_seconds": "soon"})
        assert {error.field for error in errors} == {"max_retries", "retry_delay_seconds"}

    def test_bool_is_not_a_count(self):
        errors = ConfigValidator.validate_fetch_params({"max_retries": True})
        assert errors[0].field == "max_retries"

    def test_invalid_response_params(self):
        errors = ConfigValidator.validate_response_params({"data_field": "", "date_field": "x", "close_field": "x"})
        assert {error.field for error in errors} == {"data_field", "close_field"}

    def test_invalid_report_params(self):
        errors = ConfigValidator.validate_report_params({"decimals": 9, "subject_template": 1})
        assert len(errors) == 2

    def test_invalid_quandl_params(self):
        errors = ConfigValidator.validate_quandl_params({"base_url": "ftp://x", "timeout_seconds": 0})
        assert {error.field for error in errors} == {"base_url", "timeout_seconds"}

    def test_validate_config_collects_all_sections(self):
        config = {
            "fetch": {"max_retries": -1},
            "report": {"decimals": -1},
            "quandl": {"timeout_seconds": -5},
        }
        assert len(ConfigValidator.validate_config(config)) == 3
