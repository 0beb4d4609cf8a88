"""
LLM Configuration Settings

Pydantic-settings based configuration for the generative model backends.
All settings can be overridden via environment variables with WAMAIL_ prefix.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from whatsapp_email.shared.exceptions import ConfigurationError


class LLMSettings(BaseSettings):
    """
    LLM-specific settings.

    Gemini is the default provider and requires an API key. Bedrock uses
    the ambient AWS credentials.

    Environment variables are prefixed with WAMAIL_ and are case-insensitive.
    Example: WAMAIL_LLM_PROVIDER=bedrock
    """

    model_config = SettingsConfigDict(
        env_prefix="WAMAIL_",
        env_file=[".env.local", ".env"],  # Try .env.local first
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    llm_provider: Literal["gemini", "bedrock"] = Field(
        default="gemini",
        description="Generative model backend",
    )

    # Google Gemini Configuration
    gemini_api_key: SecretStr | None = Field(
        default=None,
        description="Google Generative AI API key",
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model name",
    )

    # AWS Bedrock Configuration
    bedrock_model_id: str = Field(
        default="anthropic.claude-3-sonnet-20240229-v1:0",
        description="AWS Bedrock model ID",
    )
    bedrock_region: str = Field(
        default="us-west-2",
        description="AWS region for Bedrock service",
    )

    # LLM Parameters
    llm_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="LLM sampling temperature (lower = more deterministic)",
    )
    llm_max_tokens: int = Field(
        default=2048,
        gt=0,
        le=100000,
        description="Maximum tokens for LLM response",
    )

    # Retry Configuration
    llm_max_retries: int = Field(
        default=0,
        ge=0,
        le=10,
        description="Retry attempts after a failed LLM call (0 = single attempt)",
    )
    llm_retry_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Initial delay between retries (exponential backoff)",
    )

    # Timeout Configuration
    llm_timeout_seconds: float | None = Field(
        default=None,
        gt=0.0,
        description="Timeout for a single LLM call in seconds (unset = wait indefinitely)",
    )

    @model_validator(mode="after")
    def require_provider_credentials(self) -> "LLMSettings":
        """Gemini cannot be used without an API key."""
        if self.llm_provider == "gemini" and (
            self.gemini_api_key is None or not self.gemini_api_key.get_secret_value()
        ):
            raise ValueError("gemini_api_key is required when llm_provider is 'gemini'")
        return self


def load_llm_settings(**overrides) -> LLMSettings:
    """
    Load LLM settings, converting validation failures into ConfigurationError.

    Raises:
        ConfigurationError: If the selected provider is not fully configured
    """
    try:
        return LLMSettings(**overrides)
    except ValidationError as e:
        reasons = [err["msg"] for err in e.errors()]
        raise ConfigurationError(
            f"Invalid LLM configuration: {'; '.join(reasons)}",
        ) from e


@lru_cache(maxsize=1)
def get_llm_settings() -> LLMSettings:
    """
    Get cached LLM settings instance.

    For testing, use LLMSettings() directly with overrides.
    """
    return load_llm_settings()
