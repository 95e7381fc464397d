"""
Logging setup for the ticker report pipeline.

Every module logs through structlog on top of the standard library. Output
goes to stderr because stdout is a delivery channel for the report itself.
"""
import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog
from structlog.types import FilteringBoundLogger, Processor


def build_processors(
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list[Processor]] = None
) -> list[Processor]:
    """Assemble the structlog processor chain, renderer last."""
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if include_caller:
        chain.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.MODULE,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    chain.extend(extra_processors or [])

    renderer = (structlog.processors.JSONRenderer() if format_json
                else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    chain.append(renderer)
    return chain


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list[Processor]] = None
) -> None:
    """
    Configure structlog and stdlib logging for the whole package.

    Args:
        level: Level name such as "DEBUG" or "WARNING"
        format_json: Render one JSON object per line instead of console text
        include_timestamp: Add an ISO-8601 UTC timestamp to each event
        include_caller: Add module and line number to each event
        extra_processors: Processors inserted just before the renderer
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
        format="%(message)s"
    )

    structlog.configure(
        processors=build_processors(format_json, include_timestamp, include_caller, extra_processors),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    return structlog.get_logger(name)


def get_pipeline_logger(name: str) -> FilteringBoundLogger:
    """Logger tagged with subsystem=pipeline. Call after configure_logging."""
    return get_logger(name).bind(subsystem="pipeline")


@contextmanager
def run_context(**values: Any) -> Iterator[None]:
    """Bind values to every event logged while one pipeline run is active."""
    with structlog.contextvars.bound_contextvars(**values):
        yield


def log_pipeline_step(
    logger: FilteringBoundLogger,
    ticker: str,
    step: str,
    outcome: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Record the outcome of one pipeline step.

    "ok" outcomes log at info, anything else (transport_error, api_error,
    malformed_response, delivery_failed) at warning.
    """
    event = logger.bind(ticker=ticker, step=step, outcome=outcome)
    if context:
        event = event.bind(**context)

    if outcome == "ok":
        event.info("pipeline_step")
    else:
        event.warning("pipeline_step_failed")
