"""
Unit tests for configuration loading.
"""

import pytest

from whatsapp_email.composer.config import ComposerConfig
from whatsapp_email.shared.config import Settings, load_settings
from whatsapp_email.shared.exceptions import ConfigurationError
from whatsapp_email.shared.llm import load_llm_settings


class TestSettings:
    def test_defaults(self):
        settings = load_settings(_env_file=None)

        assert settings.mail_backend == "smtp"
        assert settings.smtp_host == "smtp.gmail.com"
        assert settings.smtp_port == 587
        assert settings.smtp_secure is False
        assert settings.email_user == "bridge@example.com"
        assert settings.email_password.get_secret_value() == "app-password"
        assert settings.server_name == "whatsapp-email-server"
        assert settings.server_version == "1.0.0"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("WAMAIL_SMTP_PORT", "465")
        monkeypatch.setenv("WAMAIL_SMTP_SECURE", "true")

        settings = load_settings(_env_file=None)

        assert settings.smtp_port == 465
        assert settings.smtp_secure is True

    def test_password_not_in_repr(self):
        settings = load_settings(_env_file=None)

        assert "app-password" not in repr(settings)

    @pytest.mark.parametrize("missing", ["WAMAIL_EMAIL_USER", "WAMAIL_EMAIL_PASSWORD"])
    def test_missing_credentials_fail_fast(self, monkeypatch, missing):
        monkeypatch.delenv(missing)

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(_env_file=None)

        field = missing.removeprefix("WAMAIL_").lower()
        assert field in exc_info.value.context["fields"]
        assert str(exc_info.value).startswith("Invalid configuration: ")

    def test_invalid_port(self):
        with pytest.raises(ConfigurationError, match="smtp_port"):
            load_settings(_env_file=None, smtp_port=0)

    def test_ses_config(self):
        settings = Settings(
            email_user="bridge@example.com",
            email_password="pw",
            ses_region="eu-west-1",
            ses_endpoint_url="http://localhost:4566",
        )

        assert settings.ses_config == {
            "region_name": "eu-west-1",
            "endpoint_url": "http://localhost:4566",
        }


class TestLLMSettings:
    def test_gemini_default(self):
        settings = load_llm_settings(_env_file=None)

        assert settings.llm_provider == "gemini"
        assert settings.gemini_model == "gemini-2.0-flash"
        assert settings.llm_max_retries == 0
        assert settings.llm_timeout_seconds is None

    def test_gemini_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("WAMAIL_GEMINI_API_KEY")

        with pytest.raises(ConfigurationError, match="gemini_api_key is required"):
            load_llm_settings(_env_file=None)

    def test_bedrock_without_gemini_key(self, monkeypatch):
        monkeypatch.delenv("WAMAIL_GEMINI_API_KEY")
        monkeypatch.setenv("WAMAIL_LLM_PROVIDER", "bedrock")

        settings = load_llm_settings(_env_file=None)

        assert settings.llm_provider == "bedrock"


class TestComposerConfig:
    def test_defaults(self):
        config = ComposerConfig(_env_file=None)

        assert config.fallback_subject_length == 50
        assert config.preview_length == 100
        assert config.html_footer == "This email was sent automatically via WhatsApp integration."

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("COMPOSER_PREVIEW_LENGTH", "20")

        assert ComposerConfig(_env_file=None).preview_length == 20
