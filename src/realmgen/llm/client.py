"""Thin async wrapper around the google.genai SDK for plain text prompts."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from google import genai
from tenacity import AsyncRetrying

from realmgen.config.settings import DEFAULT_MODEL, get_gemini_api_key
from realmgen.llm.exceptions import InvalidLLMResponseError, TextGenerationError
from realmgen.llm.retry import DEFAULT_RETRY_KWARGS

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything that turns a prompt into raw response text."""

    async def generate_text(self, prompt: str) -> str: ...


class GeminiTextClient:
    """Send single-turn prompts to Gemini and return the response text.

    The synchronous SDK call runs in a worker thread so the event loop stays
    free while waiting. ``timeout`` bounds each call, including its internal
    transient-error retries; ``None`` waits indefinitely.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        timeout: float | None = None,
        client: Any | None = None,
        retry_kwargs: dict[str, Any] | None = None,
    ) -> None:
        self.model = model
        self.timeout = timeout
        self._retry_kwargs = retry_kwargs if retry_kwargs is not None else DEFAULT_RETRY_KWARGS
        if client is not None:
            self._client = client
        else:
            self._client = genai.Client(api_key=api_key or get_gemini_api_key())

    @property
    def client(self) -> Any:
        return self._client

    async def generate_text(self, prompt: str) -> str:
        try:
            text = await asyncio.wait_for(self._generate_with_retries(prompt), timeout=self.timeout)
        except TimeoutError as e:
            msg = f"Gemini call to {self.model} timed out after {self.timeout}s"
            raise TextGenerationError(msg) from e

        if not text:
            msg = f"Gemini model {self.model} returned an empty response"
            raise InvalidLLMResponseError(msg)
        return text

    async def _generate_with_retries(self, prompt: str) -> str | None:
        async for attempt in AsyncRetrying(**self._retry_kwargs):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info(
                        "[yellow]⏳ Retry[/] Gemini call, attempt %d",
                        attempt.retry_state.attempt_number,
                    )
                response = await asyncio.to_thread(
                    self._client.models.generate_content,
                    model=self.model,
                    contents=prompt,
                )
        return response.text


__all__ = ["GeminiTextClient", "TextGenerator"]
