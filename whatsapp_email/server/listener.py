"""
WhatsApp Listener

In-channel side of the bridge: decides which inbound messages enter the
pipeline and renders outcomes as chat replies.
"""

from whatsapp_email.composer.models import EmailSent, Outcome, ParseMiss
from whatsapp_email.shared.tools.whatsapp import InboundMessage

PARSE_MISS_REPLY = (
    "❌ Could not parse your message. "
    "Please use format: 'recipient@email.com: your context here'"
)


def should_handle(message: InboundMessage) -> bool:
    """Skip our own messages (including the bridge's replies) and non-text messages."""
    return not message.from_me and bool(message.body.strip())


def render_chat_reply(outcome: Outcome) -> str:
    """Describe a pipeline outcome as a WhatsApp reply."""
    if isinstance(outcome, EmailSent):
        return f"✅ Email sent successfully to {outcome.recipient}!\nSubject: {outcome.subject}"
    if isinstance(outcome, ParseMiss):
        return PARSE_MISS_REPLY
    return f"❌ Error sending email: {outcome.description}"
