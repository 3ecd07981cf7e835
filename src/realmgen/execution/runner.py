"""Sanitize, persist and run the generated file creation script.

The script is model output and is executed as-is with the invoking user's
permissions. The only isolation applied is a separate process whose
environment does not carry the Gemini credentials, plus an optional timeout.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from collections.abc import Sequence
from pathlib import Path

from realmgen.config.settings import API_KEY_ENV_VAR, DEFAULT_SCRIPT_FILENAME

logger = logging.getLogger(__name__)

_FENCED_BLOCK_RE = re.compile(r"```.*?```", re.DOTALL)
_SECRET_ENV_VARS = frozenset({API_KEY_ENV_VAR, "GOOGLE_API_KEY"})


def sanitize_script(script: str) -> str:
    """Replace backticks with double quotes and drop fenced blocks."""
    script = script.replace("`", '"')
    script = _FENCED_BLOCK_RE.sub("", script)
    return script.strip()


def persist_script(script: str, path: Path | str = DEFAULT_SCRIPT_FILENAME) -> Path:
    """Write ``script`` to ``path``, overwriting any previous run."""
    target = Path(path)
    target.write_text(script, encoding="utf-8")
    logger.debug("Persisted generated script to %s (%d bytes)", target, len(script))
    return target


def script_environment() -> dict[str, str]:
    """Return the current environment without API credentials."""
    return {key: value for key, value in os.environ.items() if key not in _SECRET_ENV_VARS}


def execute_generated_script(
    script: str,
    *,
    script_path: Path | str = DEFAULT_SCRIPT_FILENAME,
    interpreter: Sequence[str] = ("node",),
    timeout: float | None = None,
) -> bool:
    """Sanitize and run ``script``; return True when it exits with status 0."""
    try:
        target = persist_script(sanitize_script(script), script_path)
        subprocess.run(
            [*interpreter, str(target)],
            check=True,
            timeout=timeout,
            env=script_environment(),
        )
    except FileNotFoundError:
        logger.exception("Error executing AI-generated script: %r not found", interpreter[0])
        return False
    except subprocess.TimeoutExpired:
        logger.exception("Error executing AI-generated script: timed out after %ss", timeout)
        return False
    except (subprocess.CalledProcessError, OSError):
        logger.exception("Error executing AI-generated script")
        return False
    return True


__all__ = ["execute_generated_script", "persist_script", "sanitize_script", "script_environment"]
