"""Step identifiers and the bounded retry counter used by the pipeline driver."""

from __future__ import annotations

from collections import defaultdict
from enum import Enum

from realmgen.config.settings import DEFAULT_STEP_TRY_LIMIT, RetryScope


class Step(str, Enum):
    """Pipeline steps, in execution order."""

    GENERATE_PROJECT_STRUCTURE = "generateProjectStructure"
    GENERATE_FILE_CREATION_SCRIPT = "generateFileCreationScript"
    EXECUTE_GENERATED_SCRIPT = "executeGeneratedScript"
    RUN_REALM_DEVELOP = "runRealmDevelop"


class StepTracker:
    """Hold the current step and count attempts against a fixed ceiling.

    With :attr:`RetryScope.GLOBAL` a single counter is shared by every step
    and only :meth:`reset` zeroes it. With :attr:`RetryScope.PER_STEP` each
    step keeps its own counter and :meth:`reset` zeroes the current one.
    """

    def __init__(
        self,
        limit: int = DEFAULT_STEP_TRY_LIMIT,
        scope: RetryScope = RetryScope.GLOBAL,
        step: Step = Step.GENERATE_PROJECT_STRUCTURE,
    ) -> None:
        if limit < 1:
            msg = f"Step try limit must be at least 1, got {limit}"
            raise ValueError(msg)
        self.limit = limit
        self.scope = scope
        self.step = step
        self._counts: defaultdict[Step | None, int] = defaultdict(int)

    def _key(self) -> Step | None:
        return self.step if self.scope is RetryScope.PER_STEP else None

    @property
    def attempts(self) -> int:
        """Attempts recorded against the current counter."""
        return self._counts[self._key()]

    def attempts_remain(self) -> bool:
        return self.limit - self.attempts > 0

    def record_attempt(self) -> None:
        self._counts[self._key()] += 1

    def reset(self) -> None:
        self._counts[self._key()] = 0

    def advance(self, step: Step) -> None:
        """Move to ``step`` after a success, zeroing the counter."""
        self.reset()
        self.step = step
        self.reset()

    def restart(self, step: Step = Step.GENERATE_PROJECT_STRUCTURE) -> None:
        """Jump back to ``step`` without a success, keeping the global counter."""
        self.step = step
        if self.scope is RetryScope.PER_STEP:
            self.reset()


__all__ = ["Step", "StepTracker"]
