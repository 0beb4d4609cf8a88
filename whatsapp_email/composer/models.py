"""
Composer Models

Pydantic models for one pass through the WhatsApp -> email pipeline.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EmailRequest(BaseModel):
    """Recipient and free-text context extracted from a WhatsApp message."""

    model_config = ConfigDict(frozen=True)

    recipient: str = Field(..., description="Recipient email address")
    context: str = Field(..., description="What the email should say, in brief")

    @field_validator("recipient", "context")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Both fields are required and trimmed."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class EmailContent(BaseModel):
    """Generated subject and body. The body may be empty."""

    model_config = ConfigDict(frozen=True)

    subject: str = Field(..., min_length=1, description="Email subject line")
    body: str = Field(default="", description="Plain text email body")


class EmailSent(BaseModel):
    """The email was generated and handed to the mail transport."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["sent"] = "sent"
    recipient: str
    subject: str
    body: str
    message_id: str | None = None


class ParseMiss(BaseModel):
    """No recipient/context pair could be found in the message."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["parse_miss"] = "parse_miss"


class Failure(BaseModel):
    """Generation or delivery failed; description is shown to the user."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    description: str
    error_type: str | None = None


Outcome = Annotated[Union[EmailSent, ParseMiss, Failure], Field(discriminator="kind")]
