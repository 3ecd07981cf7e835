"""Runtime configuration for Realmgen.

Values come from ``REALMGEN_*`` environment variables (and a ``.env`` file
loaded by the CLI). The Gemini API key is deliberately not part of the
settings model: it is read on demand by :func:`get_gemini_api_key` so that it
never ends up in logged settings dumps.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from realmgen.config.exceptions import ApiKeyNotFoundError, InvalidConfigurationValueError

logger = logging.getLogger(__name__)

# ============================================================================
# Constants
# ============================================================================

API_KEY_ENV_VAR = "GEMINI_API_KEY"
DEFAULT_MODEL = "gemini-2.5-pro"
DEFAULT_STEP_TRY_LIMIT = 3
DEFAULT_PROJECT_DIR = "realm-project"
DEFAULT_SCRIPT_FILENAME = "redocly-realm-script.js"
DEFAULT_PREVIEW_COMMAND = ("npx", "@redocly/realm", "develop")
DEFAULT_FAILURE_MARKER = "❌"
DEFAULT_SUCCESS_MARKER = "Status: No errors found"


class RetryScope(str, Enum):
    """How the step retry counter is shared between pipeline steps."""

    GLOBAL = "global"
    """One counter for every step, zeroed only after a successful step."""

    PER_STEP = "per_step"
    """One counter per step; switching steps starts from a fresh budget."""


class RealmgenSettings(BaseSettings):
    """Root configuration for Realmgen.

    Supports environment variable overrides with the pattern
    ``REALMGEN_<FIELD>`` (e.g. ``REALMGEN_STEP_TRY_LIMIT=5``).
    """

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Gemini model used for every text-generation call",
    )
    step_try_limit: int = Field(
        default=DEFAULT_STEP_TRY_LIMIT,
        ge=1,
        description="Maximum consecutive failed attempts before escalation",
    )
    retry_scope: RetryScope = Field(
        default=RetryScope.GLOBAL,
        description="Whether the retry counter is shared by all steps or kept per step",
    )
    project_dir: Path = Field(
        default=Path(DEFAULT_PROJECT_DIR),
        description="Project directory used when -d/--directory is not given",
    )
    script_filename: str = Field(
        default=DEFAULT_SCRIPT_FILENAME,
        description="File name the generated script is persisted to (working directory)",
    )
    script_interpreter: list[str] = Field(
        default_factory=lambda: ["node"],
        description="Command used to execute the generated script",
    )
    preview_command: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PREVIEW_COMMAND),
        description="Command that starts the preview server; '-d <dir>' is appended",
    )
    preview_failure_marker: str = Field(default=DEFAULT_FAILURE_MARKER)
    preview_success_marker: str = Field(default=DEFAULT_SUCCESS_MARKER)
    max_pipeline_restarts: int | None = Field(
        default=None,
        ge=0,
        description="Full restarts allowed after preview failures (None is unbounded)",
    )
    llm_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Deadline for a single Gemini call (None waits forever)",
    )
    script_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Deadline for the generated script (None waits forever)",
    )
    preview_probe_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Deadline for the streaming preview probe (None waits forever)",
    )

    model_config = SettingsConfigDict(
        env_prefix="REALMGEN_",
        extra="ignore",
        validate_assignment=True,
    )

    @field_validator("script_interpreter", "preview_command")
    @classmethod
    def validate_command(cls, v: list[str]) -> list[str]:
        if not v or not all(part.strip() for part in v):
            msg = "Command must contain at least one non-empty argument"
            raise ValueError(msg)
        return v

    @field_validator("preview_failure_marker", "preview_success_marker")
    @classmethod
    def validate_marker(cls, v: str) -> str:
        if not v:
            msg = "Preview markers must not be empty"
            raise ValueError(msg)
        return v


def get_gemini_api_key() -> str:
    """Get the Gemini API key from the environment.

    Raises:
        ApiKeyNotFoundError: If the environment variable is not set

    """
    api_key = os.environ.get(API_KEY_ENV_VAR)
    if not api_key:
        raise ApiKeyNotFoundError(API_KEY_ENV_VAR)
    return api_key


def load_settings(**overrides: object) -> RealmgenSettings:
    """Build settings from the environment, applying explicit overrides last."""
    try:
        settings = RealmgenSettings(**overrides)
    except ValidationError as e:
        msg = f"Invalid Realmgen configuration: {e}"
        raise InvalidConfigurationValueError(msg) from e
    logger.debug("Loaded settings: %s", settings.model_dump())
    return settings
