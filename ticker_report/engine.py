"""
Main report engine coordinator.

Orchestrates the report pipeline, coordinating the fetch collaborator, response
validation, series reshaping, metrics calculation and notification delivery.
"""

import time
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional, Union

import structlog

from .config.defaults import FetchParams, ReportParams, params_from_config
from .config.notification_delivery import get_default_delivery_config
from .data.models import FetchErrorKind, NotificationMessage
from .data.parsers import normalize_fetch_output, parse_request_input
from .data.reshaper import reshape
from .data.validators import ResponseValidator
from .delivery import BaseNotificationDelivery, DeliveryResult, create_delivery
from .errors import FetchFailedError, RecoverableError
from .logging.config import get_pipeline_logger, log_pipeline_step, run_context
from .metrics.calculator import MetricsCalculator
from .models.report import ReportMetrics

logger = structlog.get_logger(__name__)

FetchFn = Callable[[str, str], Any]

UNEXPECTED_RESULT_MESSAGE = "something probably did not go as you wanted"

# Failures worth another attempt; everything else propagates at once
TRANSIENT_FETCH_ERRORS = (RecoverableError, OSError)


class RunStatus(Enum):
    """Final state of one pipeline run."""
    DELIVERED = "delivered"
    DELIVERY_FAILED = "delivery_failed"
    TRANSPORT_ERROR = "transport_error"
    API_ERROR = "api_error"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class RunResult:
    """Outcome of one pipeline run."""
    status: RunStatus
    ticker: str
    message: Optional[str] = None
    metrics: Optional[ReportMetrics] = None
    notification: Optional[NotificationMessage] = None
    delivery: Optional[DeliveryResult] = None

    @property
    def success(self) -> bool:
        return self.status == RunStatus.DELIVERED


def fetch_with_retry(
    fetch_fn: FetchFn,
    ticker: str,
    start_date: str,
    max_retries: int = 3,
    retry_delay_seconds: float = 0.0
) -> Any:
    """
    Call the fetch collaborator, retrying transient failures.

    Makes one attempt plus up to max_retries more and returns the first
    successful response. Transient failures are RecoverableError (which
    includes TransportError) and OSError; any other exception propagates
    immediately.

    Args:
        fetch_fn: Collaborator called as fetch_fn(ticker, start_date)
        ticker: Normalized ticker
        start_date: ISO calendar date
        max_retries: Additional attempts after the first
        retry_delay_seconds: Fixed pause between attempts

    Returns:
        Raw response of the first successful attempt

    Raises:
        FetchFailedError: If every attempt failed, chained to the last failure
    """
    attempts = 1 + max(0, max_retries)
    last_error: Optional[BaseException] = None

    for attempt in range(1, attempts + 1):
        try:
            response = fetch_fn(ticker, start_date)
        except TRANSIENT_FETCH_ERRORS as e:
            last_error = e
            logger.warning(
                "Fetch attempt failed",
                ticker=ticker,
                attempt=attempt,
                max_attempts=attempts,
                error=str(e)
            )
            if attempt < attempts and retry_delay_seconds > 0:
                time.sleep(retry_delay_seconds)
            continue

        if attempt > 1:
            logger.info("Fetch succeeded after retry", ticker=ticker, attempt=attempt)
        return response

    raise FetchFailedError(
        f"Fetching {ticker} failed after {attempts} attempts: {last_error}",
        ticker=ticker,
        attempts=attempts
    ) from last_error


class ReportEngine:
    """
    Main coordinator for the ticker report pipeline.

    Manages the pipeline:
    Fetch → Validate → Reshape → ROI / Max Drawdown → Notification
    """

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        delivery: Optional[BaseNotificationDelivery] = None,
        delivery_retries: int = 0,
        delivery_retry_delay: float = 1.0
    ) -> None:
        """
        Initialize the report engine.

        Args:
            config: Merged configuration dict (see ConfigLoader.merge_config)
            delivery: Notification destination; stdout when omitted
            delivery_retries: Extra delivery attempts on failure
            delivery_retry_delay: Seconds between delivery attempts
        """
        self.config = config or {}
        self.logger = get_pipeline_logger(__name__)
        self.validator = ResponseValidator(self.config)
        self.metrics_calculator = MetricsCalculator()
        self.delivery = delivery or create_delivery(get_default_delivery_config())
        self.delivery_retries = delivery_retries
        self.delivery_retry_delay = delivery_retry_delay

    def run(
        self,
        fetch_fn: FetchFn,
        ticker: str,
        start_date: Union[str, date],
        recipient: str
    ) -> RunResult:
        """
        Run the pipeline for one ticker and start date.

        Args:
            fetch_fn: Fetch collaborator called as fetch_fn(ticker, iso_date)
            ticker: Ticker symbol
            start_date: Start of the period, ISO string or date
            recipient: Notification recipient

        Returns:
            RunResult describing the outcome

        Raises:
            InvalidRequestError: If ticker or date are unusable
            FetchFailedError: If every fetch attempt failed
            ApiError: If the collaborator raised a permanent fetch error
            MalformedRecordError: If a validated row cannot be reshaped
            InsufficientDataError: If the series is empty
            DivisionByZeroError: If the first close is zero
        """
        date_text = start_date.isoformat() if isinstance(start_date, date) else start_date
        ticker, parsed_date = parse_request_input(ticker, date_text)
        fetch_params = params_from_config(FetchParams, self.config, "fetch")

        with run_context(run_ticker=ticker, run_start_date=parsed_date.isoformat()):
            raw_response = fetch_with_retry(
                fetch_fn,
                ticker,
                parsed_date.isoformat(),
                max_retries=fetch_params.max_retries,
                retry_delay_seconds=fetch_params.retry_delay_seconds
            )
            log_pipeline_step(self.logger, ticker, "fetch", "ok")

            return self.handle_response(raw_response, ticker, parsed_date, recipient)

    def handle_response(
        self,
        raw_response: Any,
        ticker: str,
        start_date: Optional[date],
        recipient: str
    ) -> RunResult:
        """Validate, compute and deliver the report for a fetched response."""
        fetched = normalize_fetch_output(raw_response, self.config)

        if not fetched.success:
            status = (RunStatus.TRANSPORT_ERROR
                      if fetched.error_kind == FetchErrorKind.TRANSPORT
                      else RunStatus.API_ERROR)
            log_pipeline_step(self.logger, ticker, "fetch", status.value,
                              {"error": fetched.error_msg})
            return RunResult(status=status, ticker=ticker, message=fetched.error_msg)

        if not self.validator.validate(fetched.response, ticker):
            log_pipeline_step(self.logger, ticker, "validate", RunStatus.MALFORMED_RESPONSE.value)
            return RunResult(
                status=RunStatus.MALFORMED_RESPONSE,
                ticker=ticker,
                message=UNEXPECTED_RESULT_MESSAGE
            )

        series = reshape(fetched.response, self.config)
        log_pipeline_step(self.logger, ticker, "reshape", "ok", {"points": len(series)})

        metrics = self.metrics_calculator.calculate(series, ticker, start_date)
        log_pipeline_step(self.logger, ticker, "compute", "ok", metrics.to_dict())
        notification = self.build_notification(metrics, recipient)

        delivery_result = self.delivery.deliver_with_retry(
            notification,
            max_retries=self.delivery_retries,
            retry_delay=self.delivery_retry_delay
        )

        if not delivery_result.delivered:
            log_pipeline_step(self.logger, ticker, "deliver", RunStatus.DELIVERY_FAILED.value,
                              {"error": delivery_result.message})
            return RunResult(
                status=RunStatus.DELIVERY_FAILED,
                ticker=ticker,
                message=delivery_result.message,
                metrics=metrics,
                notification=notification,
                delivery=delivery_result
            )

        log_pipeline_step(self.logger, ticker, "deliver", "ok", {"recipient": recipient})
        return RunResult(
            status=RunStatus.DELIVERED,
            ticker=ticker,
            message=notification.body,
            metrics=metrics,
            notification=notification,
            delivery=delivery_result
        )

    def build_notification(self, metrics: ReportMetrics, recipient: str) -> NotificationMessage:
        """Format computed metrics into the outgoing message."""
        report = params_from_config(ReportParams, self.config, "report")
        return NotificationMessage(
            recipient=recipient,
            body=metrics.format_body(report.decimals),
            subject=report.subject_template.format(ticker=metrics.ticker)
        )
