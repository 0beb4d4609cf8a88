"""
Pytest Configuration and Shared Fixtures

Provides settings, a scripted text model, fake collaborators and a
server wired with them.
"""

import os

import pytest

# Set test environment before importing application modules
os.environ["WAMAIL_EMAIL_USER"] = "bridge@example.com"
os.environ["WAMAIL_EMAIL_PASSWORD"] = "app-password"
os.environ["WAMAIL_GEMINI_API_KEY"] = "test-gemini-key"
os.environ["WAMAIL_SES_REGION"] = "us-west-2"
os.environ["AWS_DEFAULT_REGION"] = "us-west-2"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"

from whatsapp_email.composer.config import ComposerConfig  # noqa: E402
from whatsapp_email.server.app import WhatsAppEmailServer  # noqa: E402
from whatsapp_email.shared.config import Settings  # noqa: E402
from whatsapp_email.shared.llm import LLMSettings  # noqa: E402

from tests.mocks.fakes import FakeMailSender, FakeMessageSource  # noqa: E402
from tests.mocks.mock_model import MockTextModel  # noqa: E402


# --- Settings Fixtures ---


@pytest.fixture
def settings() -> Settings:
    """Application settings with SMTP defaults."""
    return Settings(
        email_user="bridge@example.com",
        email_password="app-password",
        smtp_host="smtp.example.com",
    )


@pytest.fixture
def llm_settings() -> LLMSettings:
    """Gemini settings with a single attempt and no timeout."""
    return LLMSettings(
        llm_provider="gemini",
        gemini_api_key="test-gemini-key",
        llm_max_retries=0,
        llm_retry_delay_seconds=0.0,
        llm_timeout_seconds=None,
    )


@pytest.fixture
def composer_config() -> ComposerConfig:
    return ComposerConfig()


# --- Collaborator Fixtures ---


@pytest.fixture
def mock_model() -> MockTextModel:
    """Scripted model; queue responses with add_response()."""
    return MockTextModel()


@pytest.fixture
def mail_sender() -> FakeMailSender:
    return FakeMailSender()


@pytest.fixture
def source() -> FakeMessageSource:
    return FakeMessageSource()


@pytest.fixture
def server(settings, mock_model, mail_sender, source, composer_config) -> WhatsAppEmailServer:
    """Server wired with fakes."""
    return WhatsAppEmailServer(
        settings=settings,
        model=mock_model,
        mail_sender=mail_sender,
        source=source,
        composer_config=composer_config,
    )
