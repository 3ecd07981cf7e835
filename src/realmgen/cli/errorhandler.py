"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer

from realmgen.config.exceptions import ApiKeyNotFoundError, ConfigError
from realmgen.logging_setup import console
from realmgen.pipeline.exceptions import PipelineError


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, re-raise with the full traceback instead of a short message.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit):
        raise
    except ApiKeyNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]🔑 API Key Missing:[/bold red] {e}")
        console.print(
            f"Please set the [bold]{e.env_var}[/bold] environment variable or add it to a .env file.\n"
            "You can get one at [cyan]https://aistudio.google.com/app/apikey[/cyan]"
        )
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]⚙️ Configuration Error:[/bold red] {e}")
        raise typer.Exit(1) from e
    except PipelineError as e:
        if debug:
            raise
        console.print(f"[bold red]🚨 Pipeline Failed:[/bold red] {e}")
        raise typer.Exit(1) from e
    except Exception as e:
        if debug:
            console.print_exception(show_locals=False)
            raise typer.Exit(1) from e

        console.print(f"[bold red]💥 An unexpected error occurred:[/bold red] {e}")
        console.print("[dim]Run with [bold]--debug[/bold] for more details.[/dim]")
        raise typer.Exit(1) from e
