"""
Composer Configuration

Presentation settings for generated emails and their summaries.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ComposerConfig(BaseSettings):
    """
    Composer configuration.

    Environment variables are prefixed with COMPOSER_.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMPOSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    fallback_subject_length: int = Field(
        default=50,
        ge=1,
        le=200,
        description="Characters of context used when the model gives no subject",
    )
    preview_length: int = Field(
        default=100,
        ge=0,
        description="Characters of body included in tool result previews",
    )
    html_footer: str = Field(
        default="This email was sent automatically via WhatsApp integration.",
        description="Footer line appended to HTML emails",
    )


@lru_cache
def get_composer_config() -> ComposerConfig:
    """Get cached composer configuration."""
    return ComposerConfig()
