"""Config command implementation.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import tomli_w
import typer
from rich.markup import escape

from tidyfs.cli.types import EXIT_FAILURE, get_config
from tidyfs.core.config import ConfigError, MaintenanceConfig, config_to_dict, save_config
from tidyfs.core.paths import get_config_path
from tidyfs.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show or create the configuration file.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration as TOML."""
    config = get_config(ctx)
    console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default values."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    path = obj.get("config_path") or get_config_path()

    if path.exists() and not force:
        print_warning(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=EXIT_FAILURE)

    try:
        saved = save_config(MaintenanceConfig(), path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=EXIT_FAILURE) from e

    print_success(f"Config written to {saved}")
