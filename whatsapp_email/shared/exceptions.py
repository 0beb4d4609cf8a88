"""
Custom Exceptions for the WhatsApp Email Bridge

All exceptions carry the context needed for debugging and logging.
Their str() is what users see in tool results and chat replies.
"""

from typing import Any


class BridgeError(Exception):
    """Base exception for the WhatsApp email bridge."""

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigurationError(BridgeError):
    """Required configuration is missing or invalid."""


class ModelError(BridgeError):
    """Generative model invocation failed."""

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.provider = provider
        self.original_error = original_error
        super().__init__(message)


class MailDeliveryError(BridgeError):
    """Outbound email could not be delivered by the mail transport."""

    def __init__(
        self,
        transport: str,
        recipient: str | None = None,
        error_message: str | None = None,
    ) -> None:
        self.transport = transport
        self.recipient = recipient
        self.error_message = error_message
        super().__init__(
            f"{transport.upper()} send failed{f' for {recipient}' if recipient else ''}: "
            f"{error_message or 'Unknown error'}"
        )


class MessageSourceError(BridgeError):
    """The WhatsApp client could not be initialized."""


class ToolError(BridgeError):
    """Invalid tool invocation by the calling process."""


class UnknownToolError(ToolError):
    """Requested tool is not exposed by this server."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidToolArgumentsError(ToolError):
    """Tool arguments do not match the tool's input schema."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid arguments for '{name}': {reason}")
