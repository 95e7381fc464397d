"""Configuration for notification delivery mechanisms."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class DeliveryMethod(Enum):
    """Supported notification delivery methods."""
    EMAIL = "email"
    HTTP_POST = "http_post"
    FILE_OUTPUT = "file_output"
    STDOUT = "stdout"


@dataclass(frozen=True)
class EmailDeliveryConfig:
    """Configuration for SMTP email delivery."""
    sender: str
    smtp_host: str = "localhost"
    smtp_port: int = 25
    use_tls: bool = False
    username: Optional[str] = None
    password: Optional[str] = None
    timeout_seconds: int = 30


@dataclass(frozen=True)
class HttpDeliveryConfig:
    """Configuration for HTTP POST delivery."""
    url: str
    method: str = "POST"
    headers: Optional[dict[str, str]] = None
    timeout_seconds: int = 30


@dataclass(frozen=True)
class FileDeliveryConfig:
    """Configuration for file-based delivery."""
    output_path: str
    format: str = "jsonl"  # json, jsonl
    append_mode: bool = True
    create_dirs: bool = True


@dataclass(frozen=True)
class StdoutDeliveryConfig:
    """Configuration for stdout delivery."""
    format: str = "text"  # text, json
    include_timestamp: bool = False


@dataclass(frozen=True)
class DeliveryDestination:
    """Single notification delivery destination."""
    name: str
    method: DeliveryMethod
    config: Any  # EmailDeliveryConfig | HttpDeliveryConfig | FileDeliveryConfig | StdoutDeliveryConfig
    enabled: bool = True


def get_default_delivery_config() -> DeliveryDestination:
    """Get the default delivery destination (plain text on stdout)."""
    return DeliveryDestination(
        name="stdout",
        method=DeliveryMethod.STDOUT,
        config=StdoutDeliveryConfig(
            format="text",
            include_timestamp=False
        ),
        enabled=True
    )


def create_email_destination(
    name: str,
    sender: str,
    smtp_host: str = "localhost",
    smtp_port: int = 25,
    enabled: bool = True,
    **kwargs
) -> DeliveryDestination:
    """Create email delivery destination."""
    return DeliveryDestination(
        name=name,
        method=DeliveryMethod.EMAIL,
        config=EmailDeliveryConfig(
            sender=sender,
            smtp_host=smtp_host,
            smtp_port=smtp_port,
            **kwargs
        ),
        enabled=enabled
    )


def create_http_destination(
    name: str,
    url: str,
    headers: Optional[dict[str, str]] = None,
    enabled: bool = True,
    **kwargs
) -> DeliveryDestination:
    """Create HTTP delivery destination."""
    return DeliveryDestination(
        name=name,
        method=DeliveryMethod.HTTP_POST,
        config=HttpDeliveryConfig(
            url=url,
            headers=headers or {},
            **kwargs
        ),
        enabled=enabled
    )


def create_file_destination(
    name: str,
    output_path: str,
    format: str = "jsonl",
    enabled: bool = True,
    **kwargs
) -> DeliveryDestination:
    """Create file delivery destination."""
    return DeliveryDestination(
        name=name,
        method=DeliveryMethod.FILE_OUTPUT,
        config=FileDeliveryConfig(
            output_path=output_path,
            format=format,
            **kwargs
        ),
        enabled=enabled
    )
