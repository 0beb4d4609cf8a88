"""
Composer Tools

Rendering of generated content into a deliverable email.
"""

import structlog
from jinja2 import Environment

from whatsapp_email.composer.config import ComposerConfig, get_composer_config
from whatsapp_email.composer.models import EmailContent, EmailRequest
from whatsapp_email.shared.config import Settings
from whatsapp_email.shared.models import OutboundEmail

log = structlog.get_logger()

_environment = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

HTML_TEMPLATE = _environment.from_string(
    """<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  {% for line in body_lines %}{{ line }}{% if not loop.last %}<br>{% endif %}{% endfor %}

  <br><br>
  <hr style="border: none; border-top: 1px solid #eee; margin: 20px 0;">
  <p style="color: #666; font-size: 12px;">
    {{ footer }}
  </p>
</div>
"""
)


def render_html_body(body: str, footer: str) -> str:
    """
    Render a plain text body as the HTML email part.

    Text is HTML-escaped and newlines become <br> tags.
    """
    return HTML_TEMPLATE.render(body_lines=body.split("\n"), footer=footer)


def build_outbound_email(
    request: EmailRequest,
    content: EmailContent,
    settings: Settings,
    config: ComposerConfig | None = None,
) -> OutboundEmail:
    """
    Assemble the email handed to the mail transport.

    Args:
        request: Parsed recipient and context
        content: Generated subject and body
        settings: Application settings (sender identity)
        config: Composer configuration (default: cached instance)

    Returns:
        OutboundEmail with text and HTML bodies
    """
    config = config or get_composer_config()

    log.debug(
        "rendering_email",
        to=request.recipient,
        body_chars=len(content.body),
    )

    return OutboundEmail(
        from_address=settings.from_address,
        to=request.recipient,
        subject=content.subject,
        html=render_html_body(content.body, config.html_footer),
        text=content.body,
    )
