"""Default configuration parameters for the report pipeline."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchParams:
    """Fetch retry parameters."""
    max_retries: int = 3                 # Additional attempts after the first
    retry_delay_seconds: float = 0.0     # Fixed delay, no back-off


@dataclass(frozen=True)
class ResponseParams:
    """Field names of the raw response contract."""
    data_field: str = "data"
    date_field: str = "date"
    close_field: str = "close"
    transport_error_field: str = "error"
    api_error_field: str = "quandl_error"


@dataclass(frozen=True)
class ReportParams:
    """Report message parameters."""
    decimals: int = 1
    subject_template: str = "Ticker report: {ticker}"


@dataclass(frozen=True)
class QuandlParams:
    """Quandl datatable source parameters."""
    base_url: str = "https://www.quandl.com/api/v3"
    table: str = "WIKI/PRICES"
    timeout_seconds: int = 30


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    fetch: FetchParams
    response: ResponseParams
    report: ReportParams
    quandl: QuandlParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        fetch=FetchParams(),
        response=ResponseParams(),
        report=ReportParams(),
        quandl=QuandlParams(),
    )


def params_from_config(params_cls, config, section: str):
    """
    Build a params dataclass from one section of a merged config dict.

    Unknown keys are ignored; missing keys fall back to the dataclass defaults.
    """
    values = (config or {}).get(section) or {}
    known = params_cls.__dataclass_fields__
    return params_cls(**{key: value for key, value in values.items() if key in known})
