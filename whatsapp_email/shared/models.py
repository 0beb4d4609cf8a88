"""
Shared Models

Payloads exchanged with the external collaborators.
"""

from pydantic import BaseModel, ConfigDict, Field


class OutboundEmail(BaseModel):
    """
    A fully rendered email handed to a mail transport.

    Mirrors the {from, to, subject, html, text} shape transports accept.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_address: str = Field(..., alias="from", description="From header")
    to: str = Field(..., description="Recipient email address")
    subject: str = Field(..., description="Email subject line")
    html: str = Field(..., description="HTML body")
    text: str = Field(..., description="Plain text body")
