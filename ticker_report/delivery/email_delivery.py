"""SMTP email notification delivery mechanism."""

import smtplib
import socket
from email.message import EmailMessage

from ..config.notification_delivery import EmailDeliveryConfig
from ..data.models import NotificationMessage
from .base import (
    BaseNotificationDelivery,
    DeliveryResult,
    DeliveryStatus,
    NotificationDeliveryPermanentError,
    NotificationDeliveryRetryableError,
)


class EmailNotificationDelivery(BaseNotificationDelivery):
    """Email notification delivery over SMTP."""

    def __init__(self, name: str, config: EmailDeliveryConfig):
        super().__init__(name, config)
        self.config: EmailDeliveryConfig = config

        if "@" not in config.sender:
            raise NotificationDeliveryPermanentError(f"Invalid sender address: {config.sender}")

    def build_email(self, message: NotificationMessage) -> EmailMessage:
        """Build the MIME message for a report."""
        email = EmailMessage()
        email["From"] = self.config.sender
        email["To"] = message.recipient
        email["Subject"] = message.subject or "Ticker report"
        email.set_content(message.body)
        return email

    def deliver(self, message: NotificationMessage) -> DeliveryResult:
        """Send the report as a plain-text email."""
        if "@" not in message.recipient:
            raise NotificationDeliveryPermanentError(f"Invalid recipient address: {message.recipient}")

        email = self.build_email(message)

        try:
            with smtplib.SMTP(self.config.smtp_host, self.config.smtp_port,
                              timeout=self.config.timeout_seconds) as smtp:
                if self.config.use_tls:
                    smtp.starttls()
                if self.config.username:
                    smtp.login(self.config.username, self.config.password or "")
                smtp.send_message(email)

        except (smtplib.SMTPAuthenticationError, smtplib.SMTPRecipientsRefused,
                smtplib.SMTPSenderRefused) as e:
            self.logger.error(
                "Email rejected by SMTP server",
                delivery_name=self.name,
                recipient=message.recipient,
                error=str(e)
            )
            raise NotificationDeliveryPermanentError(f"SMTP rejected message: {e}")

        except (smtplib.SMTPException, OSError, socket.timeout) as e:
            self.logger.warning(
                "Email delivery failed",
                delivery_name=self.name,
                recipient=message.recipient,
                smtp_host=self.config.smtp_host,
                error=str(e)
            )
            raise NotificationDeliveryRetryableError(f"SMTP error: {e}")

        self.logger.info(
            "Report emailed",
            delivery_name=self.name,
            recipient=message.recipient
        )
        return DeliveryResult(
            status=DeliveryStatus.SUCCESS,
            message=f"Sent to {message.recipient}"
        )

    def health_check(self) -> bool:
        """Check if the SMTP server answers NOOP."""
        try:
            with smtplib.SMTP(self.config.smtp_host, self.config.smtp_port, timeout=5) as smtp:
                code, _ = smtp.noop()
                return code == 250

        except (smtplib.SMTPException, OSError) as e:
            self.logger.warning(
                "Health check failed",
                delivery_name=self.name,
                error=str(e)
            )
            return False
