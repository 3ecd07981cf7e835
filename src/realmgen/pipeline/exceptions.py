"""Exceptions for the pipeline driver."""

from realmgen.exceptions import RealmgenError


class PipelineError(RealmgenError):
    """Base exception for pipeline errors."""


class RetriesExhaustedError(PipelineError):
    """Raised when a step fails more often than the configured ceiling allows."""

    def __init__(self, step: str, attempts: int) -> None:
        self.step = step
        self.attempts = attempts
        super().__init__(f"Step '{step}' failed after {attempts} attempt(s)")


class RestartLimitError(PipelineError):
    """Raised when the preview step forced more pipeline restarts than allowed."""

    def __init__(self, restarts: int) -> None:
        self.restarts = restarts
        super().__init__(f"Pipeline restarted {restarts} time(s) without a working preview")
