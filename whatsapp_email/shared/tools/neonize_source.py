"""
Neonize WhatsApp Client Adapter

Implements MessageSource on top of neonize (WhatsApp Web multi-device).
The client runs on a background daemon thread; its callbacks are
marshalled onto the asyncio loop that called initialize().
"""

import asyncio
import threading

import structlog
from neonize.client import NewClient
from neonize.events import ConnectedEv, MessageEv

from whatsapp_email.shared.config import Settings
from whatsapp_email.shared.exceptions import MessageSourceError
from whatsapp_email.shared.tools.whatsapp import (
    InboundMessage,
    MessageHandler,
    PairingHandler,
    ReadyHandler,
)

log = structlog.get_logger()


def _jid_to_str(jid) -> str:
    if not jid or not jid.User:
        return ""
    return f"{jid.User}@{jid.Server}"


def extract_text(event: MessageEv) -> str:
    """Text of a plain or extended (quoted, link preview) message."""
    message = event.Message
    return message.conversation or message.extendedTextMessage.text or ""


class NeonizeMessageSource:
    """MessageSource backed by a neonize client with a local session store."""

    def __init__(self, settings: Settings):
        self._session_path = settings.whatsapp_session_path
        self._client: NewClient | None = None
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._message_handler: MessageHandler | None = None
        self._pairing_handler: PairingHandler | None = None
        self._ready_handler: ReadyHandler | None = None

    def on_message(self, handler: MessageHandler) -> None:
        self._message_handler = handler

    def on_pairing(self, handler: PairingHandler) -> None:
        self._pairing_handler = handler

    def on_ready(self, handler: ReadyHandler) -> None:
        self._ready_handler = handler

    @property
    def started(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _create_client(self) -> NewClient:
        client = NewClient(self._session_path)
        client.event(ConnectedEv)(self._handle_connected)
        client.event(MessageEv)(self._handle_message)
        client.qr(self._handle_qr)
        return client

    async def initialize(self) -> None:
        """
        Start the WhatsApp connection in the background.

        Returns once the client thread is running. Pairing and readiness
        are reported later through the registered handlers.

        Raises:
            MessageSourceError: If the client cannot be created or started
        """
        if self.started:
            log.info("whatsapp_client_already_started")
            return

        self._loop = asyncio.get_running_loop()
        try:
            if self._client is None:
                self._client = self._create_client()
            self._thread = threading.Thread(
                target=self._run_client,
                name="whatsapp-client",
                daemon=True,
            )
            self._thread.start()
        except Exception as e:
            log.error(
                "whatsapp_client_start_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise MessageSourceError(
                f"Failed to start WhatsApp client: {e}",
                session_path=self._session_path,
            ) from e

        log.info("whatsapp_client_started", session_path=self._session_path)

    def _run_client(self) -> None:
        try:
            self._client.connect()
        except Exception as e:
            log.error(
                "whatsapp_client_stopped",
                error=str(e),
                error_type=type(e).__name__,
            )

    def _handle_qr(self, _client: NewClient, data_qr: bytes) -> None:
        if self._pairing_handler is None:
            return
        token = data_qr.decode() if isinstance(data_qr, bytes) else str(data_qr)
        self._loop.call_soon_threadsafe(self._pairing_handler, token)

    def _handle_connected(self, _client: NewClient, _event: ConnectedEv) -> None:
        if self._ready_handler is not None:
            self._loop.call_soon_threadsafe(self._ready_handler)

    def _handle_message(self, client: NewClient, event: MessageEv) -> None:
        if self._message_handler is None:
            return

        async def reply(text: str) -> None:
            await asyncio.to_thread(client.reply_message, text, event)

        source = event.Info.MessageSource
        inbound = InboundMessage(
            body=extract_text(event),
            reply=reply,
            sender=_jid_to_str(source.Sender),
            chat=_jid_to_str(source.Chat),
            from_me=bool(source.IsFromMe),
        )
        future = asyncio.run_coroutine_threadsafe(
            self._message_handler(inbound),
            self._loop,
        )
        future.add_done_callback(self._log_handler_failure)

    @staticmethod
    def _log_handler_failure(future) -> None:
        if not future.cancelled() and future.exception() is not None:
            error = future.exception()
            log.error(
                "whatsapp_message_handler_failed",
                error=str(error),
                error_type=type(error).__name__,
            )
