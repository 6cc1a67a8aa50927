"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from tidyfs import __version__
from tidyfs.cli.commands import clean, config, dupes, rename, run
from tidyfs.core.log import configure_logging

# Create main Typer app
app = typer.Typer(
    name="tidyfs",
    help="Filesystem maintenance: cache cleanup, duplicate detection, filename normalization.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tidyfs version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: ~/.config/tidyfs/config.toml).",
        ),
    ] = None,
) -> None:
    """tidyfs - Filesystem maintenance for a single workstation.

    Every change goes through a preview-aware gate: runs are dry-run by
    default and only describe what they would do until --live is given.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(clean.app, name="clean")
app.add_typer(dupes.app, name="dupes")
app.add_typer(rename.app, name="rename")
app.add_typer(run.app, name="run")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
