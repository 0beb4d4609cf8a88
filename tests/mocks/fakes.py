"""
Fake collaborators for the WhatsApp email server.
"""

from whatsapp_email.shared.exceptions import MailDeliveryError
from whatsapp_email.shared.models import OutboundEmail
from whatsapp_email.shared.tools.whatsapp import InboundMessage


class FakeMailSender:
    """Records sent emails; optionally rejects them."""

    def __init__(self, error: Exception | None = None):
        self.sent: list[OutboundEmail] = []
        self.error = error

    async def send(self, email: OutboundEmail) -> str:
        if self.error is not None:
            raise self.error
        self.sent.append(email)
        return f"msg-{len(self.sent)}"

    @classmethod
    def rejecting(cls, message: str = "550 Mailbox unavailable") -> "FakeMailSender":
        return cls(
            error=MailDeliveryError(
                transport="smtp",
                recipient="bob@corp.io",
                error_message=message,
            )
        )


class FakeMessageSource:
    """Stores registered handlers and counts initialize() calls."""

    def __init__(self, error: Exception | None = None):
        self.message_handler = None
        self.pairing_handler = None
        self.ready_handler = None
        self.initialize_calls = 0
        self.error = error

    def on_message(self, handler) -> None:
        self.message_handler = handler

    def on_pairing(self, handler) -> None:
        self.pairing_handler = handler

    def on_ready(self, handler) -> None:
        self.ready_handler = handler

    async def initialize(self) -> None:
        self.initialize_calls += 1
        if self.error is not None:
            raise self.error


class RecordingReply:
    """Async reply callable that keeps what was sent."""

    def __init__(self, error: Exception | None = None):
        self.replies: list[str] = []
        self.error = error

    async def __call__(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.replies.append(text)


def make_inbound_message(
    body: str,
    *,
    from_me: bool = False,
    reply: RecordingReply | None = None,
) -> tuple[InboundMessage, RecordingReply]:
    """Build an InboundMessage and the reply recorder behind it."""
    reply = reply or RecordingReply()
    message = InboundMessage(
        body=body,
        reply=reply,
        sender="15551234567@s.whatsapp.net",
        chat="15551234567@s.whatsapp.net",
        from_me=from_me,
    )
    return message, reply
