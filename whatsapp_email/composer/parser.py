"""
WhatsApp Message Parser

Extracts an EmailRequest from a chat message. A strict
"recipient@domain.tld: context" pattern is tried first; only when it does
not match is the model asked to find the recipient and context.
"""

import json
import re

import structlog
from pydantic import ValidationError

from whatsapp_email.composer.llm_prompts import build_extraction_prompt
from whatsapp_email.composer.models import EmailRequest
from whatsapp_email.shared.llm import TextModel

log = structlog.get_logger()

# First occurrence wins; context runs to the end of the line
EMAIL_REQUEST_PATTERN = re.compile(
    r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}):\s*(.+)"
)

EXPECTED_FORMAT = "recipient@email.com: context"


def match_email_request(message: str) -> EmailRequest | None:
    """
    Apply the strict pattern to a message.

    Args:
        message: Raw WhatsApp message text

    Returns:
        EmailRequest, or None if the pattern is absent or the context is blank
    """
    match = EMAIL_REQUEST_PATTERN.search(message)
    if not match:
        return None

    recipient = match.group(1).strip()
    context = match.group(2).strip()
    if not context:
        return None

    return EmailRequest(recipient=recipient, context=context)


def _strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_model_response(response: str) -> EmailRequest | None:
    """
    Interpret the model's extraction answer.

    Args:
        response: Raw model output, expected to be a JSON object or null

    Returns:
        EmailRequest, or None for invalid JSON, null, non-objects and
        objects missing either field
    """
    cleaned = _strip_code_fence(response)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        log.info(
            "ai_parse_invalid_json",
            error=str(e),
            response_preview=cleaned[:200],
        )
        return None

    if not isinstance(data, dict):
        return None

    try:
        return EmailRequest.model_validate(
            {"recipient": data.get("recipient"), "context": data.get("context")}
        )
    except ValidationError:
        log.info("ai_parse_missing_fields", keys=sorted(data.keys()))
        return None


async def parse_message(message: str, model: TextModel) -> EmailRequest | None:
    """
    Extract recipient and context from a WhatsApp message.

    Model failures are logged and treated as "no match"; this function
    does not raise for them.

    Args:
        message: Raw WhatsApp message text
        model: Model used when the strict pattern does not match

    Returns:
        EmailRequest, or None when nothing usable was found
    """
    request = match_email_request(message)
    if request is not None:
        log.info("message_parsed", method="pattern", recipient=request.recipient)
        return request

    try:
        response = await model.generate(build_extraction_prompt(message))
    except Exception as e:
        log.warning(
            "ai_parsing_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        return None

    request = parse_model_response(response)
    if request is None:
        log.info("message_not_parsed", message_preview=message[:100])
    else:
        log.info("message_parsed", method="model", recipient=request.recipient)
    return request
