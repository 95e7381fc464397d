"""
Shape validation for raw fetch responses.

The validator is a pure predicate: a response either carries the minimal
tabular shape needed to build a price series, or it does not. Malformed but
present data is reported as False, never raised.
"""

from collections.abc import Mapping
from typing import Any, Optional

import structlog

from ..config.defaults import ResponseParams, params_from_config

logger = structlog.get_logger(__name__)


def describe_problem(response: Any, config: Optional[dict[str, Any]] = None) -> Optional[str]:
    """
    Explain why a response fails shape validation.

    Args:
        response: Raw response from a fetch collaborator
        config: Merged configuration dict (uses the "response" section)

    Returns:
        None for a valid response, otherwise a short reason
    """
    fields = params_from_config(ResponseParams, config, "response")

    if not isinstance(response, Mapping):
        return f"Response must be a mapping, got {type(response).__name__}"

    if response.get(fields.api_error_field) is not None:
        return f"Response carries API error marker '{fields.api_error_field}'"

    if response.get(fields.transport_error_field) is not None:
        return f"Response carries transport error marker '{fields.transport_error_field}'"

    rows = response.get(fields.data_field)
    if not isinstance(rows, list):
        return f"Missing or non-list '{fields.data_field}' field"

    if not rows:
        return f"Empty '{fields.data_field}' field"

    for i, row in enumerate(rows):
        if not isinstance(row, Mapping):
            return f"Row {i} is not a mapping"
        if fields.date_field not in row:
            return f"Row {i} has no '{fields.date_field}' column"
        if fields.close_field not in row:
            return f"Row {i} has no '{fields.close_field}' column"

    return None


def validate_response(response: Any, config: Optional[dict[str, Any]] = None) -> bool:
    """
    Check that a response has the minimal shape required to proceed.

    True only if there is no transport-error marker, no API-error marker, and
    the data payload is a non-empty list of rows with date and close columns.
    """
    return describe_problem(response, config) is None


class ResponseValidator:
    """Validates fetch responses and logs the rejection reason."""

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """
        Initialize validator with configuration.

        Args:
            config: Merged configuration dict
        """
        self.config = config or {}

    def validate(self, response: Any, ticker: Optional[str] = None) -> bool:
        problem = describe_problem(response, self.config)
        if problem is not None:
            logger.warning("Response failed shape validation", ticker=ticker, reason=problem)
            return False
        return True
