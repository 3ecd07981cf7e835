"""Jinja2 template management for the Gemini prompts.

Templates live in ``src/realmgen/prompts/``. A custom directory can be
passed to override individual templates; the package directory is always
searched last.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

logger = logging.getLogger(__name__)

PACKAGE_PROMPTS_DIR = Path(__file__).parent / "prompts"

STRUCTURE_TEMPLATE = "project_structure.jinja"
SCRIPT_TEMPLATE = "file_creation_script.jinja"
DIAGNOSIS_TEMPLATE = "diagnose_preview_error.jinja"


def create_prompt_environment(prompts_dir: Path | None = None) -> Environment:
    """Create a Jinja2 environment searching ``prompts_dir`` before the package defaults."""
    search_paths: list[Path] = []
    if prompts_dir and prompts_dir.is_dir():
        search_paths.append(prompts_dir)
        logger.info("Custom prompts directory: %s", prompts_dir)
    search_paths.append(PACKAGE_PROMPTS_DIR)

    return Environment(
        loader=FileSystemLoader(search_paths),
        autoescape=select_autoescape(enabled_extensions=()),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


DEFAULT_ENVIRONMENT = create_prompt_environment()


def render_prompt(template_name: str, *, env: Environment | None = None, **context: Any) -> str:
    """Render a prompt template with the given variables."""
    template = (env or DEFAULT_ENVIRONMENT).get_template(template_name)
    return template.render(**context)


__all__ = [
    "DIAGNOSIS_TEMPLATE",
    "PACKAGE_PROMPTS_DIR",
    "SCRIPT_TEMPLATE",
    "STRUCTURE_TEMPLATE",
    "create_prompt_environment",
    "render_prompt",
]
