"""Gemini-backed generation of the project skeleton and its creation script."""

from realmgen.generation.exceptions import (
    GenerationError,
    ProjectStructureError,
    ScriptGenerationError,
)
from realmgen.generation.script import build_script_prompt, generate_file_creation_script
from realmgen.generation.structure import (
    ProjectFiles,
    generate_project_structure,
    parse_project_files,
    strip_code_fences,
)

__all__ = [
    "GenerationError",
    "ProjectFiles",
    "ProjectStructureError",
    "ScriptGenerationError",
    "build_script_prompt",
    "generate_file_creation_script",
    "generate_project_structure",
    "parse_project_files",
    "strip_code_fences",
]
