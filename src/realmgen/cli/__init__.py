"""Command-line interface for Realmgen."""

from realmgen.cli.main import app

__all__ = ["app"]
