"""Shared retry configuration for tenacity-based retries around Gemini calls.

These retries only absorb transient API failures (rate limiting and server
errors) inside a single call. Step-level retries are the pipeline driver's
business.
"""

from __future__ import annotations

from google.genai import errors as genai_errors
from tenacity import retry_if_exception, stop_after_attempt, wait_random_exponential

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_DELAY = 1.0
DEFAULT_MAX_DELAY = 10.0

_RATE_LIMIT_STATUS = 429


def is_transient_api_error(error: BaseException) -> bool:
    """Return True for errors worth retrying within the same call."""
    if isinstance(error, genai_errors.ServerError):
        return True
    return isinstance(error, genai_errors.ClientError) and error.code == _RATE_LIMIT_STATUS


DEFAULT_RETRY_KWARGS = {
    "stop": stop_after_attempt(DEFAULT_MAX_ATTEMPTS),
    "wait": wait_random_exponential(multiplier=DEFAULT_INITIAL_DELAY, max=DEFAULT_MAX_DELAY),
    "retry": retry_if_exception(is_transient_api_error),
    "reraise": True,
}

__all__ = [
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_RETRY_KWARGS",
    "is_transient_api_error",
]
