"""Gemini text-generation client."""

from realmgen.llm.client import GeminiTextClient, TextGenerator
from realmgen.llm.exceptions import InvalidLLMResponseError, TextGenerationError

__all__ = ["GeminiTextClient", "InvalidLLMResponseError", "TextGenerationError", "TextGenerator"]
