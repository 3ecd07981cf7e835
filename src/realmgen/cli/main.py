"""Main Typer application for Realmgen."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from dotenv import find_dotenv, load_dotenv

from realmgen.cli.errorhandler import handle_cli_errors
from realmgen.config.settings import get_gemini_api_key, load_settings
from realmgen.llm.client import GeminiTextClient
from realmgen.logging_setup import configure_logging, console
from realmgen.pipeline.driver import PipelineDriver

app = typer.Typer(
    name="realmgen",
    help="Generate a Redocly Realm documentation project with Gemini and preview it",
    add_completion=False,
)

logger = logging.getLogger(__name__)


@app.command()
def main(
    directory: Annotated[
        Path | None,
        typer.Option(
            "--directory",
            "-d",
            help="Existing project directory; skips AI-driven structure generation",
        ),
    ] = None,
    *,
    debug: Annotated[bool, typer.Option("--debug", help="Show full tracebacks")] = False,
) -> None:
    """Generate the project, write it with a generated script and launch the preview."""
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging(debug=debug)

    with handle_cli_errors(debug=debug):
        api_key = get_gemini_api_key()
        settings = load_settings()
        logger.debug("Using model %s with a step limit of %d", settings.model, settings.step_try_limit)
        llm = GeminiTextClient(
            model=settings.model,
            api_key=api_key,
            timeout=settings.llm_timeout_seconds,
        )
        driver = PipelineDriver(llm, settings, project_dir=directory)
        result = asyncio.run(driver.run())

    console.print(
        f"[bold green]✅ Preview finished for {result.project_dir}[/bold green] "
        f"[dim](restarts: {result.restarts})[/dim]"
    )


__all__ = ["app", "main"]
