"""Route realmgen's log records through one Rich handler on the root logger."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["console", "configure_logging"]

LOG_LEVEL_ENV = "REALMGEN_LOG_LEVEL"

# Shared with the CLI error handler and the diagnosis panel.
console = Console()

# Libraries that log every HTTP request at INFO.
_NOISY_LOGGERS = ("httpx", "google_genai")

_handler: RichHandler | None = None


def _level_from_env() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, debug: bool = False) -> RichHandler:
    """Install the Rich handler and set the root level.

    Repeated calls reuse the installed handler and only update the level.
    ``debug`` wins over ``REALMGEN_LOG_LEVEL``.
    """
    global _handler

    root = logging.getLogger()
    if _handler is None or _handler not in root.handlers:
        root.handlers.clear()
        _handler = RichHandler(
            console=console,
            markup=True,
            rich_tracebacks=True,
            show_path=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
        _handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(_handler)

    root.setLevel(logging.DEBUG if debug else _level_from_env())
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.captureWarnings(True)
    return _handler
