"""
Composer Pipeline

One pass from WhatsApp text to a delivered email:
1. Parse recipient and context (pattern, then model fallback)
2. Generate subject and body with the model
3. Render text and HTML parts and hand them to the mail transport

handle_message() never raises for parse misses or external failures;
the Outcome it returns is rendered by each entry point (tool result,
chat reply) in its own shape.
"""

import structlog

from whatsapp_email.composer.config import ComposerConfig
from whatsapp_email.composer.generator import generate_email_content
from whatsapp_email.composer.models import (
    EmailRequest,
    EmailSent,
    Failure,
    Outcome,
    ParseMiss,
)
from whatsapp_email.composer.parser import parse_message
from whatsapp_email.composer.tools import build_outbound_email
from whatsapp_email.shared.config import Settings
from whatsapp_email.shared.llm import TextModel
from whatsapp_email.shared.tools.email import MailSender

log = structlog.get_logger()


async def send_enhanced_email(
    request: EmailRequest,
    *,
    model: TextModel,
    mail_sender: MailSender,
    settings: Settings,
    config: ComposerConfig | None = None,
) -> EmailSent:
    """
    Generate an email for a parsed request and send it.

    Args:
        request: Recipient and context
        model: Generative model
        mail_sender: Mail transport
        settings: Application settings
        config: Composer configuration

    Returns:
        EmailSent describing what was delivered

    Raises:
        ModelError: If generation fails
        MailDeliveryError: If the transport rejects the email
    """
    content = await generate_email_content(request.context, model, config)
    email = build_outbound_email(request, content, settings, config)
    message_id = await mail_sender.send(email)

    log.info(
        "email_sent",
        to=request.recipient,
        subject=content.subject[:50],
        message_id=message_id,
    )

    return EmailSent(
        recipient=request.recipient,
        subject=content.subject,
        body=content.body,
        message_id=message_id,
    )


async def handle_message(
    text: str,
    *,
    model: TextModel,
    mail_sender: MailSender,
    settings: Settings,
    config: ComposerConfig | None = None,
) -> Outcome:
    """
    Run the full pipeline for one WhatsApp message.

    Args:
        text: Raw WhatsApp message text
        model: Generative model (used for parsing fallback and generation)
        mail_sender: Mail transport
        settings: Application settings
        config: Composer configuration

    Returns:
        EmailSent, ParseMiss or Failure
    """
    try:
        request = await parse_message(text, model)
        if request is None:
            return ParseMiss()

        return await send_enhanced_email(
            request,
            model=model,
            mail_sender=mail_sender,
            settings=settings,
            config=config,
        )
    except Exception as e:
        log.error(
            "message_handling_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        return Failure(description=str(e), error_type=type(e).__name__)
