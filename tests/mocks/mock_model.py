"""
Mock Text Model for Testing

Returns queued responses in order, records every prompt, and can
simulate failures without calling a real model.

Usage:
    from tests.mocks.mock_model import MockTextModel

    model = MockTextModel(["Subject: Hi\n\nBody"])
    text = await model.generate("prompt")
"""

from typing import Iterable


class MockLLMError(Exception):
    """Mock error to simulate model failures."""
    pass


class MockTextModel:
    """
    Mock TextModel.

    Queued items are returned in order. An Exception instance in the queue
    is raised instead of returned, which lets one test make the first call
    succeed and the second fail.
    """

    def __init__(self, responses: Iterable[str | Exception] | None = None):
        self._responses: list[str | Exception] = list(responses or [])
        self._prompts: list[str] = []
        self._error: Exception | None = None

    def add_response(self, response: str | Exception) -> None:
        self._responses.append(response)

    def set_error(self, error: Exception) -> None:
        """Raise this error on every call until cleared."""
        self._error = error

    def clear_error(self) -> None:
        self._error = None

    @property
    def call_count(self) -> int:
        return len(self._prompts)

    @property
    def prompts(self) -> list[str]:
        return self._prompts.copy()

    @property
    def last_prompt(self) -> str | None:
        return self._prompts[-1] if self._prompts else None

    async def generate(self, prompt: str) -> str:
        self._prompts.append(prompt)

        if self._error is not None:
            raise self._error

        if not self._responses:
            raise MockLLMError("MockTextModel has no response queued")

        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
