"""Rename command implementation.

Normalizes the names of files directly inside one directory.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from tidyfs.cli.display import print_rename_summary
from tidyfs.cli.types import EXIT_FAILURE, get_config
from tidyfs.core.executor import create_gate, run_rename
from tidyfs.rename.normalizer import RenameError
from tidyfs.utils.formatting import print_error

app = typer.Typer(
    help="Normalize filenames to lowercase, hyphenated form.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def rename(
    ctx: typer.Context,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--dir",
            "-d",
            help="Directory to process. Defaults to the configured one.",
        ),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--live",
            help="Preview renames, or perform them. Defaults to the configured mode.",
        ),
    ] = None,
) -> None:
    """Normalize filenames to lowercase, hyphenated form."""
    config = get_config(ctx, target_dir=directory, dry_run=dry_run)

    try:
        summary = run_rename(config, create_gate(config))
    except RenameError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=EXIT_FAILURE) from e

    print_rename_summary(summary, dry_run=config.dry_run)
