"""
WhatsApp Message Source Interface

The orchestrator only depends on this module: the inbound message type,
the MessageSource protocol and pairing code rendering. The concrete
client lives in whatsapp_email.shared.tools.neonize_source.
"""

import sys
from dataclasses import dataclass
from typing import Awaitable, Callable, Protocol, TextIO

import segno


@dataclass(frozen=True)
class InboundMessage:
    """One text message delivered by the message source."""

    body: str
    reply: Callable[[str], Awaitable[None]]
    sender: str = ""
    chat: str = ""
    from_me: bool = False


MessageHandler = Callable[[InboundMessage], Awaitable[None]]
PairingHandler = Callable[[str], None]
ReadyHandler = Callable[[], None]


class MessageSource(Protocol):
    """
    Instant-messaging client lifecycle.

    Handlers are registered before initialize(). initialize() starts the
    connection and returns without waiting for pairing or readiness.
    """

    def on_message(self, handler: MessageHandler) -> None:
        ...

    def on_pairing(self, handler: PairingHandler) -> None:
        ...

    def on_ready(self, handler: ReadyHandler) -> None:
        ...

    async def initialize(self) -> None:
        ...


def render_pairing_code(token: str, out: TextIO | None = None) -> None:
    """Print a pairing token as a terminal QR code (stderr by default)."""
    segno.make_qr(token).terminal(out=out or sys.stderr, compact=True)
