"""
Configuration Management

Pydantic-settings based configuration for the WhatsApp email bridge.
All settings can be overridden via environment variables.
"""

from typing import Literal

from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from whatsapp_email.shared.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables are prefixed with WAMAIL_ and are case-insensitive.
    Example: WAMAIL_SMTP_HOST=smtp.example.com

    Mail credentials have no defaults: a missing WAMAIL_EMAIL_USER or
    WAMAIL_EMAIL_PASSWORD fails at startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="WAMAIL_",
        env_file=[".env.local", ".env"],  # Try .env.local first
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Mail transport
    mail_backend: Literal["smtp", "ses"] = Field(
        default="smtp",
        description="Outbound mail transport",
    )
    smtp_host: str = Field(
        default="smtp.gmail.com",
        description="SMTP server host",
    )
    smtp_port: int = Field(
        default=587,
        gt=0,
        lt=65536,
        description="SMTP server port",
    )
    smtp_secure: bool = Field(
        default=False,
        description="Use implicit TLS. When false, STARTTLS is used if offered",
    )
    email_user: str = Field(
        ...,
        min_length=1,
        description="Mail account user name, also used as the From address",
    )
    email_password: SecretStr = Field(
        ...,
        description="Mail account password (app password for Gmail)",
    )
    email_from_name: str | None = Field(
        default=None,
        description="Display name for outbound emails",
    )

    # SES Configuration
    ses_region: str = Field(
        default="us-west-2",
        description="AWS region for SES",
    )
    ses_endpoint_url: str | None = Field(
        default=None,
        description="SES endpoint URL (for local development)",
    )
    ses_configuration_set: str | None = Field(
        default=None,
        description="SES configuration set for tracking",
    )

    # WhatsApp client
    whatsapp_session_path: str = Field(
        default="whatsapp_session.sqlite3",
        description="Path of the WhatsApp session store",
    )

    # Tool server
    server_name: str = Field(
        default="whatsapp-email-server",
        description="Name announced to tool clients",
    )
    server_version: str = Field(
        default="1.0.0",
        description="Version announced to tool clients",
    )

    # Application Configuration
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer",
    )

    @property
    def from_address(self) -> str:
        """From header for outbound emails."""
        if self.email_from_name:
            return f"{self.email_from_name} <{self.email_user}>"
        return self.email_user

    @property
    def ses_config(self) -> dict:
        """SES client configuration."""
        config = {"region_name": self.ses_region}
        if self.ses_endpoint_url:
            config["endpoint_url"] = self.ses_endpoint_url
        return config


def load_settings(**overrides) -> Settings:
    """
    Load settings, converting validation failures into ConfigurationError.

    Args:
        **overrides: Explicit values taking precedence over the environment

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If required settings are missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields)}",
            fields=fields,
        ) from e

