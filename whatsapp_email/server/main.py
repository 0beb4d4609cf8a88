"""
Command line entry point.

Usage:
    whatsapp-email-bridge
    whatsapp-email-bridge --listen            # connect to WhatsApp at startup
    whatsapp-email-bridge --log-level DEBUG
"""

import argparse
import asyncio

import structlog

from whatsapp_email.server.app import WhatsAppEmailServer, create_server
from whatsapp_email.shared.config import load_settings
from whatsapp_email.shared.exceptions import ConfigurationError
from whatsapp_email.shared.llm import load_llm_settings
from whatsapp_email.shared.log_config import configure_logging

log = structlog.get_logger()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="whatsapp-email-bridge",
        description="MCP server turning WhatsApp messages into AI-written emails",
    )
    parser.add_argument(
        "--listen",
        action="store_true",
        help="Start the WhatsApp listener immediately",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override WAMAIL_LOG_LEVEL",
    )
    return parser.parse_args(argv)


async def serve(server: WhatsAppEmailServer, listen: bool = False) -> None:
    if listen:
        result = await server.start_whatsapp_listener()
        log.info("listener_autostart", result=result)
    await server.run()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings()
        llm_settings = load_llm_settings()
    except ConfigurationError as e:
        configure_logging(args.log_level or "INFO")
        log.error("configuration_invalid", error=str(e))
        return 1

    configure_logging(args.log_level or settings.log_level, settings.log_format)
    log.info(
        "server_starting",
        environment=settings.environment,
        mail_backend=settings.mail_backend,
        llm_provider=llm_settings.llm_provider,
    )

    server = create_server(settings, llm_settings)
    try:
        asyncio.run(serve(server, listen=args.listen))
    except KeyboardInterrupt:
        log.info("server_stopped")
    return 0
