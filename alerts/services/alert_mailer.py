"""SMTP mailer for alert notifications."""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.template.loader import render_to_string

import structlog

from alerts.enums import AlertSeverity
from alerts.models import User
from alerts.schemas import Notification

logger = structlog.get_logger(__name__)

HTML_TEMPLATE = "alerts/email/alert.html"
TEXT_TEMPLATE = "alerts/email/alert.txt"


def alert_subject(notification: Notification) -> str:
    """Return ``[SEVERITY] title`` for an alert email."""
    severity = AlertSeverity(notification.severity)
    return f"[{severity.value.upper()}] {notification.title}"


class AlertMailer:
    """Render alert notifications and send them over SMTP.

    Each message carries a plain-text and an HTML part rendered from the
    ``alerts/email`` templates, and a generated Message-ID that is returned
    to the caller for the delivery record.
    """

    def __init__(self) -> None:
        """Read SMTP configuration from Django's email settings."""
        self.smtp_host = settings.EMAIL_HOST
        self.smtp_port = settings.EMAIL_PORT
        self.smtp_user = settings.EMAIL_HOST_USER
        self.smtp_password = settings.EMAIL_HOST_PASSWORD
        self.use_tls = settings.EMAIL_USE_TLS
        self.timeout = getattr(settings, "EMAIL_TIMEOUT", None) or 10
        self.from_email = settings.DEFAULT_FROM_EMAIL

    def send_alert_email(self, recipient: User, notification: Notification) -> dict:
        """Email one alert notification to one recipient.

        Args:
            recipient: User to notify; must have a valid email address.
            notification: Notification payload for the alert.

        Returns:
            Delivery metadata: ``message_id``, ``email_address`` and
            ``smtp_host``.

        Raises:
            ValueError: If the recipient's email address is invalid.
            smtplib.SMTPException: If the SMTP exchange fails.
            OSError: If the SMTP server cannot be reached.
        """
        try:
            validate_email(recipient.email)
        except ValidationError as e:
            raise ValueError(f"Invalid email address: {recipient.email}") from e

        message = self.build_message(recipient, notification)

        try:
            with smtplib.SMTP(
                self.smtp_host, self.smtp_port, timeout=self.timeout
            ) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(message)
        except smtplib.SMTPException as e:
            logger.error(
                "alert_email_failed",
                alert_id=notification.alert_id,
                user_id=recipient.id,
                error=str(e),
            )
            raise

        logger.info(
            "alert_email_sent",
            alert_id=notification.alert_id,
            user_id=recipient.id,
            message_id=message["Message-ID"],
        )
        return {
            "message_id": message["Message-ID"],
            "email_address": recipient.email,
            "smtp_host": self.smtp_host,
        }

    def build_message(self, recipient: User, notification: Notification) -> EmailMessage:
        """Assemble the multipart alert email without sending it."""
        severity = AlertSeverity(notification.severity)
        context = {
            "recipient_name": recipient.name,
            "title": notification.title,
            "message": notification.message,
            "severity": severity.value,
            "is_critical": severity is AlertSeverity.CRITICAL,
        }

        message = EmailMessage()
        message["Subject"] = alert_subject(notification)
        message["From"] = self.from_email
        message["To"] = recipient.email
        message["Message-ID"] = make_msgid(domain=self.smtp_host)
        if severity is AlertSeverity.CRITICAL:
            message["X-Priority"] = "1"
        message.set_content(render_to_string(TEXT_TEMPLATE, context))
        message.add_alternative(render_to_string(HTML_TEMPLATE, context), subtype="html")
        return message
