"""Launch ``@redocly/realm develop`` for a project directory.

Two modes are supported:

- ``STREAM`` spawns the server with piped output and watches stderr for a
  failure marker or the success marker, killing the server either way.
- ``INHERIT`` runs the server attached to this process's terminal until it
  exits.

The driver probes with ``STREAM`` first and hands the terminal over with
``INHERIT`` once the probe reports no errors.
"""

from __future__ import annotations

import asyncio
import codecs
import contextlib
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from realmgen.config.settings import (
    DEFAULT_FAILURE_MARKER,
    DEFAULT_PREVIEW_COMMAND,
    DEFAULT_SUCCESS_MARKER,
)
from realmgen.preview.exceptions import PreviewLaunchError, PreviewTimeoutError

logger = logging.getLogger(__name__)

_READ_CHUNK_SIZE = 4096
_CAPTURE_LIMIT = 8192


class LaunchMode(str, Enum):
    INHERIT = "inherit"
    STREAM = "stream"


class ProbeOutcome(Enum):
    FAILED = "failed"
    SUCCEEDED = "succeeded"


def scan_chunk(text: str, *, failure_marker: str, success_marker: str) -> ProbeOutcome | None:
    """Classify one piece of stderr output; the failure marker wins a tie."""
    if failure_marker in text:
        return ProbeOutcome.FAILED
    if success_marker in text:
        return ProbeOutcome.SUCCEEDED
    return None


@dataclass
class PreviewLauncher:
    """Run the preview server command against a project directory."""

    command: Sequence[str] = DEFAULT_PREVIEW_COMMAND
    failure_marker: str = DEFAULT_FAILURE_MARKER
    success_marker: str = DEFAULT_SUCCESS_MARKER
    probe_timeout: float | None = None

    @property
    def name(self) -> str:
        return " ".join(self.command)

    def build_command(self, directory: Path | str) -> list[str]:
        return [*self.command, "-d", str(directory)]

    async def run(self, directory: Path | str, mode: LaunchMode) -> None:
        logger.info("Launching %s from directory: %s, in mode %s", self.name, directory, mode.value)
        if mode is LaunchMode.INHERIT:
            await self._run_inherit(directory)
        elif mode is LaunchMode.STREAM:
            await self._run_stream(directory)
        else:
            msg = f"Invalid launch mode: {mode!r}"
            raise ValueError(msg)

    async def _spawn(self, directory: Path | str, **kwargs) -> asyncio.subprocess.Process:
        try:
            return await asyncio.create_subprocess_exec(*self.build_command(directory), **kwargs)
        except FileNotFoundError as e:
            msg = f"Preview command not found: {self.command[0]!r}"
            raise PreviewLaunchError(msg) from e

    async def _run_inherit(self, directory: Path | str) -> None:
        process = await self._spawn(directory)
        returncode = await process.wait()
        if returncode != 0:
            msg = f"{self.name} exited with status {returncode}"
            raise PreviewLaunchError(msg)

    async def _run_stream(self, directory: Path | str) -> None:
        process = await self._spawn(
            directory,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        drain = asyncio.create_task(_drain(process.stdout))
        try:
            outcome, output = await asyncio.wait_for(
                self._watch(process.stderr), timeout=self.probe_timeout
            )
        except TimeoutError as e:
            msg = f"{self.name} reported no status within {self.probe_timeout}s"
            raise PreviewTimeoutError(msg) from e
        finally:
            await _stop(process)
            drain.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await drain

        if outcome is ProbeOutcome.FAILED:
            msg = f"{self.name} reported an error"
            raise PreviewLaunchError(msg, output=output)
        logger.info("[green]%s reported no errors[/]", self.name)

    async def _watch(self, stream: asyncio.StreamReader | None) -> tuple[ProbeOutcome, str]:
        """Read stderr until a marker shows up.

        Returns the outcome with the most recent stderr text, at most
        ``_CAPTURE_LIMIT`` characters of it, for the diagnosis prompt.
        """
        if stream is None:
            msg = "Preview stderr is not piped"
            raise PreviewLaunchError(msg)

        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        # A marker split across two reads is still found through the carried tail.
        keep = max(len(self.failure_marker), len(self.success_marker)) - 1
        tail = ""
        captured = ""
        while True:
            data = await stream.read(_READ_CHUNK_SIZE)
            if not data:
                captured = (captured + decoder.decode(b"", final=True))[-_CAPTURE_LIMIT:]
                msg = f"{self.name} exited without reporting a status"
                raise PreviewLaunchError(msg, output=captured)
            text = decoder.decode(data)
            if not text:
                continue
            logger.info("%s", text.rstrip(), extra={"markup": False})
            captured = (captured + text)[-_CAPTURE_LIMIT:]
            window = tail + text
            outcome = scan_chunk(
                window, failure_marker=self.failure_marker, success_marker=self.success_marker
            )
            if outcome is not None:
                if outcome is ProbeOutcome.FAILED:
                    logger.error("%s", window.rstrip(), extra={"markup": False})
                return outcome, captured
            tail = window[-keep:] if keep else ""


async def _drain(stream: asyncio.StreamReader | None) -> None:
    if stream is None:
        return
    while data := await stream.read(_READ_CHUNK_SIZE):
        logger.debug("%s", data.decode("utf-8", errors="replace").rstrip(), extra={"markup": False})


async def _stop(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            process.terminate()
    await process.wait()


__all__ = ["LaunchMode", "PreviewLauncher", "ProbeOutcome", "scan_chunk"]
