"""
WhatsApp Email Server

Long-lived orchestrator owning the three collaborators (message source,
mail transport, generative model) and exposing the bridge two ways:

- MCP tools over stdio: send_email_from_whatsapp, start_whatsapp_listener
- In-channel replies to messages delivered by the WhatsApp listener

Both paths run the same composer pipeline and render its Outcome.
"""

from typing import Any

import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from whatsapp_email.composer import handle_message
from whatsapp_email.composer.config import ComposerConfig, get_composer_config
from whatsapp_email.composer.models import Outcome
from whatsapp_email.server.listener import render_chat_reply, should_handle
from whatsapp_email.server.tools import (
    LISTENER_STARTED_TEXT,
    SEND_EMAIL_TOOL,
    START_LISTENER_TOOL,
    TOOLS,
    render_listener_error,
    render_tool_result,
    require_message_argument,
    text_content,
)
from whatsapp_email.shared.config import Settings
from whatsapp_email.shared.exceptions import UnknownToolError
from whatsapp_email.shared.llm import LLMSettings, TextModel, build_text_model
from whatsapp_email.shared.tools.email import MailSender, build_mail_sender
from whatsapp_email.shared.tools.whatsapp import (
    InboundMessage,
    MessageSource,
    render_pairing_code,
)

log = structlog.get_logger()


class WhatsAppEmailServer:
    """
    Bridge between a WhatsApp client, a generative model and a mail transport.

    Collaborators are injected so tests can substitute fakes.
    """

    def __init__(
        self,
        settings: Settings,
        model: TextModel,
        mail_sender: MailSender,
        source: MessageSource,
        composer_config: ComposerConfig | None = None,
    ):
        self._settings = settings
        self._model = model
        self._mail_sender = mail_sender
        self._source = source
        self._composer_config = composer_config or get_composer_config()
        self.server = Server(settings.server_name, version=settings.server_version)

        self._setup_whatsapp()
        self._setup_handlers()

    @property
    def settings(self) -> Settings:
        return self._settings

    def _setup_whatsapp(self) -> None:
        self._source.on_pairing(self._handle_pairing)
        self._source.on_ready(self._handle_ready)
        self._source.on_message(self.handle_inbound_message)

    def _setup_handlers(self) -> None:
        @self.server.list_tools()
        async def _list_tools() -> list[types.Tool]:
            return self.list_tools()

        @self.server.call_tool()
        async def _call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            return await self.call_tool(name, arguments)

    def _handle_pairing(self, token: str) -> None:
        log.info("whatsapp_pairing_required", hint="scan the QR code on stderr")
        render_pairing_code(token)

    def _handle_ready(self) -> None:
        log.info("whatsapp_client_ready")

    async def handle_message(self, text: str) -> Outcome:
        """Run the composer pipeline with this server's collaborators."""
        return await handle_message(
            text,
            model=self._model,
            mail_sender=self._mail_sender,
            settings=self._settings,
            config=self._composer_config,
        )

    def list_tools(self) -> list[types.Tool]:
        return list(TOOLS)

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None,
    ) -> list[types.TextContent]:
        """
        Dispatch a tool call.

        Business failures are reported in the returned text. Only protocol
        violations raise.

        Raises:
            UnknownToolError: If the tool name is not exposed
            InvalidToolArgumentsError: If the arguments do not match the schema
        """
        log.info("tool_called", tool=name)

        if name == SEND_EMAIL_TOOL:
            message = require_message_argument(arguments)
            outcome = await self.handle_message(message)
            log.info("tool_completed", tool=name, outcome=outcome.kind)
            return text_content(
                render_tool_result(outcome, self._composer_config.preview_length)
            )

        if name == START_LISTENER_TOOL:
            return text_content(await self.start_whatsapp_listener())

        log.warning("unknown_tool_requested", tool=name)
        raise UnknownToolError(name)

    async def start_whatsapp_listener(self) -> str:
        """
        Start the WhatsApp connection without waiting for it to be ready.

        Returns:
            Acknowledgment text, or a description of the startup failure
        """
        try:
            await self._source.initialize()
        except Exception as e:
            log.error(
                "whatsapp_listener_start_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return render_listener_error(e)

        log.info("whatsapp_listener_started")
        return LISTENER_STARTED_TEXT

    async def handle_inbound_message(self, message: InboundMessage) -> None:
        """
        Process a message delivered by the WhatsApp listener and reply in-channel.

        Reply failures are logged; nothing is raised to the message source.
        """
        if not should_handle(message):
            log.debug(
                "whatsapp_message_ignored",
                from_me=message.from_me,
                chat=message.chat,
            )
            return

        log.info(
            "whatsapp_message_received",
            sender=message.sender,
            body_preview=message.body[:100],
        )

        outcome = await self.handle_message(message.body)

        try:
            await message.reply(render_chat_reply(outcome))
        except Exception as e:
            log.error(
                "whatsapp_reply_failed",
                sender=message.sender,
                outcome=outcome.kind,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def run(self) -> None:
        """Serve MCP over stdio until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            log.info(
                "server_running",
                transport="stdio",
                name=self._settings.server_name,
                version=self._settings.server_version,
            )
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def create_server(
    settings: Settings,
    llm_settings: LLMSettings,
    source: MessageSource | None = None,
) -> WhatsAppEmailServer:
    """
    Build the server with production collaborators.

    Args:
        settings: Application settings
        llm_settings: Model backend settings
        source: Message source override (default: neonize WhatsApp client)
    """
    if source is None:
        from whatsapp_email.shared.tools.neonize_source import NeonizeMessageSource

        source = NeonizeMessageSource(settings)

    return WhatsAppEmailServer(
        settings=settings,
        model=build_text_model(llm_settings),
        mail_sender=build_mail_sender(settings),
        source=source,
    )
