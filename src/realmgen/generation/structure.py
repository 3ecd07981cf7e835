"""Ask Gemini for the documentation project skeleton and parse it."""

from __future__ import annotations

import json
import logging
import re
from pathlib import PurePosixPath

from realmgen.generation.exceptions import ProjectStructureError
from realmgen.llm.client import TextGenerator
from realmgen.prompt_templates import STRUCTURE_TEMPLATE, render_prompt

logger = logging.getLogger(__name__)

ProjectFiles = dict[str, str]

_JSON_FENCE_RE = re.compile(r"```json")
_FENCE_RE = re.compile(r"```")


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers the model may wrap its answer in."""
    text = _JSON_FENCE_RE.sub("", text)
    text = _FENCE_RE.sub("", text)
    return text.strip()


def _validate_relative_path(path: str) -> None:
    posix = PurePosixPath(path.replace("\\", "/"))
    if not path.strip() or posix.is_absolute() or ".." in posix.parts:
        msg = f"File path must stay inside the project folder: {path!r}"
        raise ProjectStructureError(msg)


def parse_project_files(text: str) -> ProjectFiles:
    """Parse a model response into a mapping of relative path to file content.

    Raises:
        ProjectStructureError: If the payload is not a JSON object of strings
            or a path points outside the project folder.

    """
    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        msg = f"Project structure response is not valid JSON: {e}"
        raise ProjectStructureError(msg) from e

    if not isinstance(payload, dict):
        msg = f"Project structure must be a JSON object, got {type(payload).__name__}"
        raise ProjectStructureError(msg)

    files: ProjectFiles = {}
    for path, content in payload.items():
        if not isinstance(content, str):
            msg = f"Content for {path!r} must be a string, got {type(content).__name__}"
            raise ProjectStructureError(msg)
        _validate_relative_path(path)
        files[path] = content
    return files


async def generate_project_structure(llm: TextGenerator) -> ProjectFiles:
    """Generate the ``index.md`` / ``openapi.yaml`` skeleton."""
    prompt = render_prompt(STRUCTURE_TEMPLATE)
    text = await llm.generate_text(prompt)
    try:
        files = parse_project_files(text)
    except ProjectStructureError:
        logger.exception("Error parsing AI response for project structure")
        raise
    logger.debug("Project structure contains %d file(s): %s", len(files), ", ".join(files))
    return files


__all__ = ["ProjectFiles", "generate_project_structure", "parse_project_files", "strip_code_fences"]
