"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_fetch_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate fetch retry parameters."""
        errors = []

        if "max_retries" in params:
            value = params["max_retries"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="max_retries",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "retry_delay_seconds" in params:
            value = params["retry_delay_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="retry_delay_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_response_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate response field names."""
        errors = []

        for field_name in ("data_field", "date_field", "close_field",
                           "transport_error_field", "api_error_field"):
            if field_name in params:
                value = params[field_name]
                if not isinstance(value, str) or not value:
                    errors.append(ValidationError(
                        field=field_name,
                        message="Must be a non-empty string",
                        value=value
                    ))

        if params.get("date_field") and params.get("date_field") == params.get("close_field"):
            errors.append(ValidationError(
                field="close_field",
                message="Must differ from date_field",
                value=params["close_field"]
            ))

        return errors

    @staticmethod
    def validate_report_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate report formatting parameters."""
        errors = []

        if "decimals" in params:
            value = params["decimals"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0 or value > 6:
                errors.append(ValidationError(
                    field="decimals",
                    message="Must be an integer between 0 and 6",
                    value=value
                ))

        if "subject_template" in params:
            value = params["subject_template"]
            if not isinstance(value, str):
                errors.append(ValidationError(
                    field="subject_template",
                    message="Must be a string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_quandl_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate Quandl source parameters."""
        errors = []

        if "base_url" in params:
            value = params["base_url"]
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(ValidationError(
                    field="base_url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "fetch" in config:
            errors.extend(ConfigValidator.validate_fetch_params(config["fetch"]))

        if "response" in config:
            errors.extend(ConfigValidator.validate_response_params(config["response"]))

        if "report" in config:
            errors.extend(ConfigValidator.validate_report_params(config["report"]))

        if "quandl" in config:
            errors.extend(ConfigValidator.validate_quandl_params(config["quandl"]))

        return errors
