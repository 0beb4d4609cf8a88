"""
Collaborator adapters: mail transports and the WhatsApp message source.

The neonize-backed source is imported from
whatsapp_email.shared.tools.neonize_source when it is actually needed.
"""

from whatsapp_email.shared.tools.email import (
    MailSender,
    SesMailSender,
    SmtpMailSender,
    build_mail_sender,
    build_mime_message,
)
from whatsapp_email.shared.tools.whatsapp import (
    InboundMessage,
    MessageSource,
    render_pairing_code,
)

__all__ = [
    # Email
    "MailSender",
    "SmtpMailSender",
    "SesMailSender",
    "build_mail_sender",
    "build_mime_message",
    # WhatsApp
    "InboundMessage",
    "MessageSource",
    "render_pairing_code",
]
