"""Command line entry point for the ticker report pipeline."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config.loader import ConfigLoader
from .config.notification_delivery import (
    DeliveryDestination,
    create_email_destination,
    create_file_destination,
    create_http_destination,
    get_default_delivery_config,
)
from .config.validation import ConfigValidator
from .data.parsers import parse_request_input
from .delivery import NotificationDeliveryPermanentError, create_delivery
from .engine import ReportEngine
from .errors import (
    ApiError,
    DataQualityError,
    DivisionByZeroError,
    FetchFailedError,
    InvalidRequestError,
    MetricsCalculationError,
)
from .logging.config import configure_logging
from .sources import QuandlDataSource

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ticker-report",
        description="Compute ROI and maximum drawdown for a ticker and send a report.",
    )
    parser.add_argument("ticker", help="Ticker symbol, e.g. aapl")
    parser.add_argument("date", help="Start date in YYYY-MM-DD form, e.g. 2017-08-01")
    parser.add_argument("--recipient", default="stdout", help="Report recipient (email address for --delivery email)")
    parser.add_argument("--config-dir", default=None, help="Directory holding tickers.yaml overrides")
    parser.add_argument(
        "--delivery",
        choices=["stdout", "file", "http", "email"],
        default="stdout",
        help="Where to send the report",
    )
    parser.add_argument("--output-path", default="reports.jsonl", help="Output file for --delivery file")
    parser.add_argument("--webhook-url", default=None, help="Endpoint for --delivery http")
    parser.add_argument("--sender", default=None, help="From address for --delivery email")
    parser.add_argument("--smtp-host", default="localhost", help="SMTP server for --delivery email")
    parser.add_argument("--smtp-port", type=int, default=25, help="SMTP port for --delivery email")
    parser.add_argument("--delivery-retries", type=int, default=0, help="Extra delivery attempts")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    return parser


def build_destination(args: argparse.Namespace) -> DeliveryDestination:
    """Translate delivery options into a destination."""
    if args.delivery == "file":
        return create_file_destination("file", args.output_path)
    if args.delivery == "http":
        if not args.webhook_url:
            raise NotificationDeliveryPermanentError("--webhook-url is required for http delivery")
        return create_http_destination("http", args.webhook_url)
    if args.delivery == "email":
        if not args.sender:
            raise NotificationDeliveryPermanentError("--sender is required for email delivery")
        return create_email_destination("email", args.sender, args.smtp_host, args.smtp_port)
    return get_default_delivery_config()


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, format_json=args.json_logs)

    try:
        ticker, start_date = parse_request_input(args.ticker, args.date)
    except InvalidRequestError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return EXIT_USAGE

    loader = ConfigLoader.create(Path(args.config_dir) if args.config_dir else None)
    config = loader.merge_config(ticker)

    config_errors = ConfigValidator.validate_config(config)
    if config_errors:
        for error in config_errors:
            print(f"Invalid configuration: {error.field}: {error.message} (got: {error.value})", file=sys.stderr)
        return EXIT_USAGE

    try:
        delivery = create_delivery(build_destination(args))
    except NotificationDeliveryPermanentError as e:
        print(f"Invalid delivery options: {e}", file=sys.stderr)
        return EXIT_USAGE

    engine = ReportEngine(config, delivery=delivery, delivery_retries=args.delivery_retries)

    try:
        result = engine.run(QuandlDataSource(config), ticker, start_date, args.recipient)
    except FetchFailedError as e:
        print(f"Could not fetch prices for {ticker}: {e}", file=sys.stderr)
        return EXIT_FAILED
    except ApiError as e:
        print(f"Data provider rejected the request: {e}", file=sys.stderr)
        return EXIT_FAILED
    except (DataQualityError, DivisionByZeroError, MetricsCalculationError) as e:
        print(f"Could not compute report for {ticker}: {e}", file=sys.stderr)
        return EXIT_FAILED

    if not result.success:
        print(result.message, file=sys.stderr)
        return EXIT_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
