"""
LLM Infrastructure for the WhatsApp Email Bridge

This package provides:
- TextModel, the narrow prompt -> text interface the composer depends on
- GeminiTextModel and BedrockTextModel backends
- LLMSettings for configuration management
"""

from whatsapp_email.shared.llm.config import LLMSettings, get_llm_settings, load_llm_settings
from whatsapp_email.shared.llm.client import (
    BaseTextModel,
    BedrockTextModel,
    GeminiTextModel,
    TextModel,
    build_text_model,
)


__all__ = [
    # Clients
    "TextModel",
    "BaseTextModel",
    "GeminiTextModel",
    "BedrockTextModel",
    "build_text_model",
    # Settings
    "LLMSettings",
    "get_llm_settings",
    "load_llm_settings",
]
