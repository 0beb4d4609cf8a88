"""
Generative Model Clients

A narrow text-in/text-out interface over the supported model backends:
Google Gemini through LangChain, and Claude on AWS Bedrock through the
Strands Agents SDK. Every backend failure surfaces as ModelError.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Protocol

import structlog
from langchain_google_genai import ChatGoogleGenerativeAI
from strands import Agent
from strands.models import BedrockModel
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from whatsapp_email.shared.exceptions import ModelError
from whatsapp_email.shared.llm.config import LLMSettings, get_llm_settings


log = structlog.get_logger()


class TextModel(Protocol):
    """Anything that turns a prompt into a text completion."""

    async def generate(self, prompt: str) -> str:
        ...


class BaseTextModel(ABC):
    """
    Shared invocation wrapper for model backends.

    Subclasses implement _complete(); generate() adds logging, the optional
    timeout and retry policy from LLMSettings, and ModelError conversion.
    With default settings a call is attempted once and never times out.
    """

    provider = "unknown"

    def __init__(self, settings: LLMSettings | None = None):
        self._settings = settings or get_llm_settings()

    @property
    def settings(self) -> LLMSettings:
        """Get the LLM settings."""
        return self._settings

    @abstractmethod
    async def _complete(self, prompt: str) -> str:
        """Return the backend's raw completion for one prompt."""

    async def _complete_with_timeout(self, prompt: str) -> str:
        timeout = self._settings.llm_timeout_seconds
        if timeout is None:
            return await self._complete(prompt)
        try:
            return await asyncio.wait_for(self._complete(prompt), timeout)
        except asyncio.TimeoutError as e:
            raise TimeoutError(f"model did not respond within {timeout:g}s") from e

    async def generate(self, prompt: str) -> str:
        """
        Invoke the model and return its raw text response.

        Args:
            prompt: Complete user prompt

        Returns:
            Text completion

        Raises:
            ModelError: If the call fails (after any configured retries)
        """
        log.info(
            "llm_invoke_start",
            provider=self.provider,
            prompt_chars=len(prompt),
        )

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.llm_max_retries + 1),
                wait=wait_exponential(
                    multiplier=self._settings.llm_retry_delay_seconds,
                    max=10,
                ),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        log.warning(
                            "llm_invoke_retry",
                            provider=self.provider,
                            attempt=attempt.retry_state.attempt_number,
                        )
                    text = await self._complete_with_timeout(prompt)
        except Exception as e:
            log.error(
                "llm_invoke_error",
                provider=self.provider,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ModelError(
                f"Failed to invoke LLM: {e}",
                provider=self.provider,
                original_error=e,
            ) from e

        log.debug(
            "llm_raw_response",
            provider=self.provider,
            response_preview=text[:500],
        )
        return text


def _message_text(message: Any) -> str:
    """Flatten a LangChain message's content into plain text."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class GeminiTextModel(BaseTextModel):
    """Google Gemini via langchain-google-genai."""

    provider = "gemini"

    def __init__(
        self,
        settings: LLMSettings | None = None,
        chat_model: ChatGoogleGenerativeAI | None = None,
    ):
        super().__init__(settings)
        self._chat_model = chat_model

    def _get_chat_model(self) -> ChatGoogleGenerativeAI:
        if self._chat_model is None:
            self._chat_model = ChatGoogleGenerativeAI(
                model=self._settings.gemini_model,
                google_api_key=self._settings.gemini_api_key.get_secret_value(),
                temperature=self._settings.llm_temperature,
                max_output_tokens=self._settings.llm_max_tokens,
            )
            log.debug(
                "gemini_model_initialized",
                model=self._settings.gemini_model,
            )
        return self._chat_model

    async def _complete(self, prompt: str) -> str:
        message = await self._get_chat_model().ainvoke(prompt)
        return _message_text(message)


class BedrockTextModel(BaseTextModel):
    """Claude on AWS Bedrock via the Strands Agents SDK."""

    provider = "bedrock"

    def __init__(self, settings: LLMSettings | None = None):
        super().__init__(settings)
        self._model: BedrockModel | None = None

    def _get_model(self) -> BedrockModel:
        if self._model is None:
            self._model = BedrockModel(
                model_id=self._settings.bedrock_model_id,
                region_name=self._settings.bedrock_region,
                temperature=self._settings.llm_temperature,
                max_tokens=self._settings.llm_max_tokens,
            )
            log.debug(
                "bedrock_model_initialized",
                model_id=self._settings.bedrock_model_id,
                region=self._settings.bedrock_region,
            )
        return self._model

    async def _complete(self, prompt: str) -> str:
        # Fresh agent per call so no conversation history carries over.
        # callback_handler=None keeps Strands from streaming to stdout.
        agent = Agent(model=self._get_model(), callback_handler=None)
        result = await asyncio.to_thread(agent, prompt)
        return str(result)


def build_text_model(settings: LLMSettings) -> BaseTextModel:
    """Create the model client for the configured provider."""
    if settings.llm_provider == "bedrock":
        return BedrockTextModel(settings)
    return GeminiTextModel(settings)
