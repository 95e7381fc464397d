"""Structured logging for the report pipeline."""

from .config import configure_logging, get_logger, get_pipeline_logger, log_pipeline_step, run_context

__all__ = ["configure_logging", "get_logger", "get_pipeline_logger", "log_pipeline_step", "run_context"]
