"""
Email Content Generator

Expands a short context into a subject and body with one model call.
"""

import re

import structlog

from whatsapp_email.composer.config import ComposerConfig, get_composer_config
from whatsapp_email.composer.llm_prompts import build_email_generation_prompt
from whatsapp_email.composer.models import EmailContent
from whatsapp_email.shared.llm import TextModel

log = structlog.get_logger()

# The subject may follow the label on the same line or on the next non-blank line
SUBJECT_LINE_PATTERN = re.compile(r"^[ \t]*Subject:\s*(\S[^\r\n]*)", re.IGNORECASE | re.MULTILINE)


def fallback_subject(context: str, length: int = 50) -> str:
    """
    Subject used when the model response has no Subject: line.

    Whitespace runs (including newlines) collapse to one space so the
    result is a valid header value.
    """
    return f"Regarding: {' '.join(context[:length].split())}..."


def extract_email_content(
    response: str,
    context: str,
    *,
    fallback_length: int = 50,
) -> EmailContent:
    """
    Split a model response into subject and body.

    The first line starting with "Subject:" (any case) gives the subject,
    taken from the rest of that line or, when it is blank, from the next
    non-blank line. That span and the blank lines after it are removed to
    form the body.
    Without such a line the subject is derived from the context and the
    whole response becomes the body.

    Args:
        response: Raw model output
        context: Context the email was generated from
        fallback_length: Context characters used in the fallback subject

    Returns:
        EmailContent with a non-empty subject; the body may be empty
    """
    match = SUBJECT_LINE_PATTERN.search(response)
    if match is None:
        return EmailContent(
            subject=fallback_subject(context, fallback_length),
            body=response.strip(),
        )

    after = response[match.end():].lstrip(" \t\r\n")
    body = (response[:match.start()] + after).strip()
    return EmailContent(subject=match.group(1).strip(), body=body)


async def generate_email_content(
    context: str,
    model: TextModel,
    config: ComposerConfig | None = None,
) -> EmailContent:
    """
    Generate an email from a short context.

    The model call is not guarded here: callers own the failure boundary.

    Args:
        context: Free-text context from the WhatsApp message
        model: Generative model
        config: Composer configuration (default: cached instance)

    Returns:
        EmailContent with subject and body

    Raises:
        ModelError: If the model call fails
    """
    config = config or get_composer_config()

    log.info("email_generation_start", context_preview=context[:50])

    response = await model.generate(build_email_generation_prompt(context))
    content = extract_email_content(
        response,
        context,
        fallback_length=config.fallback_subject_length,
    )

    log.info(
        "email_generation_success",
        subject_preview=content.subject[:50],
        body_chars=len(content.body),
    )
    return content
