"""Shared types and utilities for CLI commands.

This module provides the exit codes and configuration loading used
across multiple CLI command modules to avoid code duplication.
"""

from pathlib import Path
from typing import Any

import typer
from rich.markup import escape

from tidyfs.core.config import ConfigError, MaintenanceConfig, load_config
from tidyfs.utils.formatting import print_error

# Operation precondition failure or bad configuration
EXIT_FAILURE = 1
# Scoped workspace could not be acquired
EXIT_WORKSPACE = 2


def get_config(ctx: typer.Context, **overrides: Any) -> MaintenanceConfig:
    """Build the run configuration from the config file and CLI overrides.

    Args:
        ctx: Typer context carrying the global ``--config`` option.
        **overrides: Field values from command options (None = not given).

    Returns:
        Immutable MaintenanceConfig.

    Raises:
        typer.Exit: With EXIT_FAILURE if the configuration is invalid.
    """
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    config_path: Path | None = obj.get("config_path")
    try:
        return load_config(config_path, **overrides)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=EXIT_FAILURE) from e
