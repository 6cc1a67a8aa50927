"""CLI package for tidyfs.

This package contains the Typer application and all subcommands.
"""

from tidyfs.cli.main import app

__all__ = ["app"]
