"""
Email Tools

Mail transports for outbound email: SMTP (default) and AWS SES.
Both expose the same async send() and raise MailDeliveryError on failure.
"""

import asyncio
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Protocol

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from whatsapp_email.shared.config import Settings
from whatsapp_email.shared.exceptions import MailDeliveryError
from whatsapp_email.shared.models import OutboundEmail

log = structlog.get_logger()


class MailSender(Protocol):
    """Delivers one rendered email. Returns the transport's message id, if any."""

    async def send(self, email: OutboundEmail) -> str | None:
        ...


def build_mime_message(email: OutboundEmail, *, domain: str | None = None) -> EmailMessage:
    """
    Build a multipart/alternative message with text and HTML parts.

    Args:
        email: Rendered outbound email
        domain: Domain used for the generated Message-ID

    Returns:
        EmailMessage ready for SMTP submission
    """
    message = EmailMessage()
    message["Subject"] = email.subject
    message["From"] = email.from_address
    message["To"] = email.to
    message["Message-ID"] = make_msgid(domain=domain)
    message.set_content(email.text)
    message.add_alternative(email.html, subtype="html")
    return message


class SmtpMailSender:
    """
    SMTP transport.

    smtp_secure=True connects with implicit TLS (port 465 style); otherwise
    the connection is upgraded with STARTTLS when the server offers it.
    """

    transport = "smtp"

    def __init__(self, settings: Settings):
        self._settings = settings

    def _send_sync(self, email: OutboundEmail) -> str:
        settings = self._settings
        sender_domain = settings.email_user.rpartition("@")[2] or None
        message = build_mime_message(email, domain=sender_domain)
        password = settings.email_password.get_secret_value()
        context = ssl.create_default_context()

        if settings.smtp_secure:
            with smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, context=context) as smtp:
                smtp.login(settings.email_user, password)
                smtp.send_message(message)
        else:
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as smtp:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls(context=context)
                    smtp.ehlo()
                smtp.login(settings.email_user, password)
                smtp.send_message(message)

        return message["Message-ID"]

    async def send(self, email: OutboundEmail) -> str:
        """
        Send an email over SMTP.

        Raises:
            MailDeliveryError: If the message cannot be built (invalid header
                values) or connecting, authenticating or sending fails
        """
        log.info(
            "sending_smtp_email",
            to=email.to,
            subject=email.subject[:50],
            host=self._settings.smtp_host,
            port=self._settings.smtp_port,
        )

        try:
            message_id = await asyncio.to_thread(self._send_sync, email)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            log.error(
                "smtp_send_failed",
                to=email.to,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise MailDeliveryError(
                transport=self.transport,
                recipient=email.to,
                error_message=str(e),
            ) from e

        log.info(
            "smtp_email_sent",
            message_id=message_id,
            to=email.to,
        )
        return message_id


class SesMailSender:
    """AWS SES transport."""

    transport = "ses"

    def __init__(self, settings: Settings, client=None):
        self._settings = settings
        self._client = client

    def _get_client(self):
        if self._client is None:
            self._client = boto3.client("ses", **self._settings.ses_config)
        return self._client

    def _send_sync(self, email: OutboundEmail) -> str:
        send_params = {
            "Source": email.from_address,
            "Destination": {"ToAddresses": [email.to]},
            "Message": {
                "Subject": {"Data": email.subject, "Charset": "UTF-8"},
                "Body": {
                    "Text": {"Data": email.text, "Charset": "UTF-8"},
                    "Html": {"Data": email.html, "Charset": "UTF-8"},
                },
            },
        }
        if self._settings.ses_configuration_set:
            send_params["ConfigurationSetName"] = self._settings.ses_configuration_set

        response = self._get_client().send_email(**send_params)
        return response["MessageId"]

    async def send(self, email: OutboundEmail) -> str:
        """
        Send an email via SES.

        Raises:
            MailDeliveryError: If SES rejects the message
        """
        log.info(
            "sending_ses_email",
            to=email.to,
            subject=email.subject[:50],
        )

        try:
            message_id = await asyncio.to_thread(self._send_sync, email)
        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            error_message = e.response["Error"]["Message"]
            log.error(
                "ses_send_failed",
                to=email.to,
                error_code=error_code,
                error_message=error_message,
            )
            raise MailDeliveryError(
                transport=self.transport,
                recipient=email.to,
                error_message=f"{error_code}: {error_message}",
            ) from e
        except BotoCoreError as e:
            log.error(
                "ses_send_failed",
                to=email.to,
                error_message=str(e),
            )
            raise MailDeliveryError(
                transport=self.transport,
                recipient=email.to,
                error_message=str(e),
            ) from e

        log.info(
            "ses_email_sent",
            message_id=message_id,
            to=email.to,
        )
        return message_id


def build_mail_sender(settings: Settings) -> MailSender:
    """Create the mail transport selected by settings.mail_backend."""
    if settings.mail_backend == "ses":
        return SesMailSender(settings)
    return SmtpMailSender(settings)
