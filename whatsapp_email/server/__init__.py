"""
WhatsApp Email Server

Exposes the composer pipeline as MCP tools and as in-channel WhatsApp replies.
"""

from whatsapp_email.server.app import WhatsAppEmailServer, create_server
from whatsapp_email.server.listener import render_chat_reply, should_handle
from whatsapp_email.server.tools import (
    SEND_EMAIL_TOOL,
    START_LISTENER_TOOL,
    TOOLS,
    render_tool_result,
)

__all__ = [
    "WhatsAppEmailServer",
    "create_server",
    "render_chat_reply",
    "should_handle",
    "SEND_EMAIL_TOOL",
    "START_LISTENER_TOOL",
    "TOOLS",
    "render_tool_result",
]
