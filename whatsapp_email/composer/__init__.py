"""
Composer

Turns a WhatsApp message into a delivered email.

This package:
1. Parses "recipient@email.com: context" messages (model fallback for free text)
2. Generates a subject and body from the context with one model call
3. Renders text and HTML parts
4. Sends the email through the configured mail transport

The pipeline returns an Outcome (EmailSent, ParseMiss, Failure) instead of
raising, so every entry point can report a readable result.
"""

from whatsapp_email.composer.agent import handle_message, send_enhanced_email
from whatsapp_email.composer.config import ComposerConfig, get_composer_config
from whatsapp_email.composer.generator import (
    extract_email_content,
    fallback_subject,
    generate_email_content,
)
from whatsapp_email.composer.models import (
    EmailContent,
    EmailRequest,
    EmailSent,
    Failure,
    Outcome,
    ParseMiss,
)
from whatsapp_email.composer.parser import (
    EXPECTED_FORMAT,
    match_email_request,
    parse_message,
    parse_model_response,
)
from whatsapp_email.composer.tools import build_outbound_email, render_html_body

__all__ = [
    # Pipeline
    "handle_message",
    "send_enhanced_email",
    # Config
    "ComposerConfig",
    "get_composer_config",
    # Models
    "EmailRequest",
    "EmailContent",
    "EmailSent",
    "ParseMiss",
    "Failure",
    "Outcome",
    # Parser
    "EXPECTED_FORMAT",
    "match_email_request",
    "parse_message",
    "parse_model_response",
    # Generator
    "extract_email_content",
    "fallback_subject",
    "generate_email_content",
    # Tools
    "build_outbound_email",
    "render_html_body",
]
