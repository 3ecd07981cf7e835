"""The four-step generate / script / execute / preview loop.

Each loop iteration runs the guarded block of the current step and falls
through to the following blocks once a step succeeds. A failure records an
attempt and leaves the step in place for the next iteration; the loop stops
when the tracker runs out of attempts. A preview failure is handled
differently: Gemini is asked for a diagnosis, which is only printed, and the
pipeline starts over from structure generation.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rich.panel import Panel
from rich.text import Text

from realmgen.config.settings import RealmgenSettings
from realmgen.execution.runner import execute_generated_script
from realmgen.generation.script import generate_file_creation_script
from realmgen.generation.structure import ProjectFiles, generate_project_structure
from realmgen.llm.client import TextGenerator
from realmgen.logging_setup import console
from realmgen.pipeline.exceptions import RestartLimitError, RetriesExhaustedError
from realmgen.pipeline.tracker import Step, StepTracker
from realmgen.preview.exceptions import PreviewLaunchError
from realmgen.preview.launcher import LaunchMode, PreviewLauncher
from realmgen.prompt_templates import DIAGNOSIS_TEMPLATE, render_prompt

logger = logging.getLogger(__name__)

ScriptRunner = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outcome of a pipeline run that reached a working preview."""

    project_dir: Path
    restarts: int
    structure_skipped: bool


class PipelineDriver:
    """Walk the pipeline steps for one project directory."""

    def __init__(
        self,
        llm: TextGenerator,
        settings: RealmgenSettings,
        *,
        project_dir: Path | str | None = None,
        launcher: PreviewLauncher | None = None,
        script_runner: ScriptRunner | None = None,
    ) -> None:
        self.llm = llm
        self.settings = settings
        self.directory_specified = project_dir is not None
        self.project_dir = Path(project_dir) if project_dir is not None else settings.project_dir
        self.tracker = StepTracker(settings.step_try_limit, settings.retry_scope)
        self.launcher = launcher or PreviewLauncher(
            command=tuple(settings.preview_command),
            failure_marker=settings.preview_failure_marker,
            success_marker=settings.preview_success_marker,
            probe_timeout=settings.preview_probe_timeout_seconds,
        )
        self._run_script = script_runner or functools.partial(
            execute_generated_script,
            script_path=settings.script_filename,
            interpreter=tuple(settings.script_interpreter),
            timeout=settings.script_timeout_seconds,
        )
        self.restarts = 0
        self.structure_skipped = False

    def _retrying(self, what: str, error: Exception) -> None:
        logger.error(
            "Error %s (attempt %d/%d): %s. Retrying...",
            what,
            self.tracker.attempts,
            self.tracker.limit,
            error,
        )
        logger.debug("Step failure details", exc_info=error)

    async def run(self) -> PipelineResult:
        tracker = self.tracker
        project_files: ProjectFiles | None = None
        script: str | None = None

        while tracker.attempts_remain():
            if tracker.step is Step.GENERATE_PROJECT_STRUCTURE:
                if not self.directory_specified:
                    tracker.record_attempt()
                    logger.info("Generating project structure...")
                    try:
                        project_files = await generate_project_structure(self.llm)
                    except Exception as e:  # noqa: BLE001
                        self._retrying("generating project structure", e)
                    else:
                        tracker.advance(Step.GENERATE_FILE_CREATION_SCRIPT)
                else:
                    logger.info(
                        "Skipping project structure generation. Using existing directory: %s",
                        self.project_dir,
                    )
                    self.structure_skipped = True
                    tracker.advance(Step.GENERATE_FILE_CREATION_SCRIPT)

            if tracker.step is Step.GENERATE_FILE_CREATION_SCRIPT:
                tracker.record_attempt()
                logger.info("Generating file creation script...")
                try:
                    script = await generate_file_creation_script(
                        self.llm, self.project_dir, project_files or {}
                    )
                except Exception as e:  # noqa: BLE001
                    self._retrying("generating file creation script", e)
                else:
                    tracker.advance(Step.EXECUTE_GENERATED_SCRIPT)

            if tracker.step is Step.EXECUTE_GENERATED_SCRIPT:
                tracker.record_attempt()
                logger.info("Executing script to create files...")
                if script is None:
                    self._retrying("executing script", RuntimeError("file creation script is undefined"))
                elif not self._run_script(script):
                    self._retrying("executing script", RuntimeError("execution failed"))
                else:
                    tracker.advance(Step.RUN_REALM_DEVELOP)

            if tracker.step is Step.RUN_REALM_DEVELOP:
                tracker.record_attempt()
                logger.info("Launching preview server...")
                try:
                    await self.launcher.run(self.project_dir, LaunchMode.STREAM)
                    await self.launcher.run(self.project_dir, LaunchMode.INHERIT)
                except Exception as e:  # noqa: BLE001
                    logger.error("Preview server failed: %s", e)
                    await self._diagnose(e)
                    self._restart()
                else:
                    tracker.reset()
                    return PipelineResult(
                        project_dir=self.project_dir,
                        restarts=self.restarts,
                        structure_skipped=self.structure_skipped,
                    )

        raise RetriesExhaustedError(tracker.step.value, tracker.attempts)

    async def _diagnose(self, error: Exception) -> str:
        """Print Gemini's reading of a preview failure; errors here propagate."""
        details = error.output if isinstance(error, PreviewLaunchError) and error.output else str(error)
        prompt = render_prompt(DIAGNOSIS_TEMPLATE, error=details)
        try:
            diagnosis = await self.llm.generate_text(prompt)
        except Exception:
            logger.exception("Error asking Gemini to diagnose the preview failure")
            raise
        console.print(Panel(Text(diagnosis), title="Gemini diagnosis", border_style="yellow"))
        return diagnosis

    def _restart(self) -> None:
        self.restarts += 1
        limit = self.settings.max_pipeline_restarts
        if limit is not None and self.restarts > limit:
            raise RestartLimitError(self.restarts)
        self.directory_specified = False
        self.tracker.restart(Step.GENERATE_PROJECT_STRUCTURE)
        logger.error("Error launching preview server. Restarting from project structure generation...")


__all__ = ["PipelineDriver", "PipelineResult", "ScriptRunner"]
