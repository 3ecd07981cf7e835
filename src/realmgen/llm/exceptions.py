"""Custom exceptions for LLM-related errors."""

from realmgen.exceptions import RealmgenError


class TextGenerationError(RealmgenError):
    """Raised when a Gemini text-generation call fails or times out."""


class InvalidLLMResponseError(TextGenerationError):
    """Raised when an LLM response carries no usable text."""
