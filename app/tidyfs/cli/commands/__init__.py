"""CLI commands for tidyfs.

This package contains all subcommand implementations.
"""

from tidyfs.cli.commands import clean, config, dupes, rename, run

__all__ = ["clean", "config", "dupes", "rename", "run"]
