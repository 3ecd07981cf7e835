"""Exceptions raised while generating the project skeleton and its script."""

from realmgen.exceptions import RealmgenError


class GenerationError(RealmgenError):
    """Base exception for generation failures."""


class ProjectStructureError(GenerationError):
    """Raised when the project structure response cannot be turned into files."""


class ScriptGenerationError(GenerationError):
    """Raised when the file creation script cannot be produced."""
