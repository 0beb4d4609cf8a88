"""
Tool Definitions

Schemas of the two tools exposed over MCP and the rendering of pipeline
outcomes into tool result text.
"""

from typing import Any

import mcp.types as types

from whatsapp_email.composer.models import EmailSent, Outcome, ParseMiss
from whatsapp_email.composer.parser import EXPECTED_FORMAT
from whatsapp_email.shared.exceptions import InvalidToolArgumentsError

SEND_EMAIL_TOOL = "send_email_from_whatsapp"
START_LISTENER_TOOL = "start_whatsapp_listener"

TOOLS: list[types.Tool] = [
    types.Tool(
        name=SEND_EMAIL_TOOL,
        description="Process WhatsApp message and send email automatically",
        inputSchema={
            "type": "object",
            "properties": {
                "whatsappMessage": {
                    "type": "string",
                    "description": "Raw WhatsApp message content",
                },
            },
            "required": ["whatsappMessage"],
        },
    ),
    types.Tool(
        name=START_LISTENER_TOOL,
        description="Start listening for WhatsApp messages",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
]

LISTENER_STARTED_TEXT = "WhatsApp listener started. Scan the QR code to connect."


def text_content(text: str) -> list[types.TextContent]:
    """Wrap text as a single-block tool result."""
    return [types.TextContent(type="text", text=text)]


def require_message_argument(arguments: dict[str, Any] | None) -> str:
    """
    Validate send_email_from_whatsapp arguments.

    Raises:
        InvalidToolArgumentsError: If whatsappMessage is missing or not a string
    """
    message = (arguments or {}).get("whatsappMessage")
    if not isinstance(message, str):
        raise InvalidToolArgumentsError(
            SEND_EMAIL_TOOL,
            "'whatsappMessage' must be a string.",
        )
    return message


def render_tool_result(outcome: Outcome, preview_length: int = 100) -> str:
    """Describe a pipeline outcome for the calling process."""
    if isinstance(outcome, EmailSent):
        return (
            "Email sent successfully!\n"
            f"Recipient: {outcome.recipient}\n"
            f"Subject: {outcome.subject}\n"
            f"Preview: {outcome.body[:preview_length]}..."
        )
    if isinstance(outcome, ParseMiss):
        return f"Could not parse WhatsApp message. Expected format: '{EXPECTED_FORMAT}'"
    return f"Error: {outcome.description}"


def render_listener_error(error: Exception) -> str:
    return f"Error starting WhatsApp: {error}"
