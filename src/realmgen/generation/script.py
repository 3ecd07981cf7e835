"""Ask Gemini for a Node.js script that writes the project files to disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from realmgen.generation.exceptions import ScriptGenerationError
from realmgen.generation.structure import ProjectFiles
from realmgen.llm.client import TextGenerator
from realmgen.llm.exceptions import InvalidLLMResponseError
from realmgen.prompt_templates import SCRIPT_TEMPLATE, render_prompt

logger = logging.getLogger(__name__)


def build_script_prompt(project_dir: Path | str, files: ProjectFiles) -> str:
    return render_prompt(
        SCRIPT_TEMPLATE,
        project_dir=str(project_dir),
        files_json=json.dumps(files, indent=2, ensure_ascii=False),
    )


async def generate_file_creation_script(
    llm: TextGenerator,
    project_dir: Path | str,
    files: ProjectFiles | None = None,
) -> str:
    """Return the raw (unsanitized) script text produced by the model."""
    prompt = build_script_prompt(project_dir, files or {})
    try:
        script = await llm.generate_text(prompt)
    except InvalidLLMResponseError as e:
        raise ScriptGenerationError(str(e)) from e
    if not script.strip():
        msg = "Gemini returned an empty file creation script"
        raise ScriptGenerationError(msg)
    return script


__all__ = ["build_script_prompt", "generate_file_creation_script"]
