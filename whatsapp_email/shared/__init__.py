# Shared Infrastructure for the WhatsApp Email Bridge
"""
Shared infrastructure components.

This package provides:
- Configuration management (pydantic-settings)
- Custom exceptions
- Structured logging setup
- Collaborator payload models
- LLM clients and mail/WhatsApp adapters (subpackages llm and tools)
"""

from whatsapp_email.shared.config import Settings, load_settings
from whatsapp_email.shared.exceptions import (
    BridgeError,
    ConfigurationError,
    InvalidToolArgumentsError,
    MailDeliveryError,
    MessageSourceError,
    ModelError,
    ToolError,
    UnknownToolError,
)
from whatsapp_email.shared.log_config import configure_logging
from whatsapp_email.shared.models import OutboundEmail

__all__ = [
    # Config
    "Settings",
    "load_settings",
    # Exceptions
    "BridgeError",
    "ConfigurationError",
    "ModelError",
    "MailDeliveryError",
    "MessageSourceError",
    "ToolError",
    "UnknownToolError",
    "InvalidToolArgumentsError",
    # Logging
    "configure_logging",
    # Models
    "OutboundEmail",
]
