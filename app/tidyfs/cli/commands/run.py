"""Run command implementation.

Runs cleanup, duplicate detection, and renaming in sequence. A failure
in one operation is reported and the remaining operations still run.
"""

from typing import Annotated

import typer
from rich.markup import escape

from tidyfs.cli.display import (
    print_cleanup_summary,
    print_duplicate_report,
    print_rename_summary,
)
from tidyfs.cli.types import EXIT_WORKSPACE, get_config
from tidyfs.core.executor import create_workspace, run_all
from tidyfs.core.workspace import WorkspaceError
from tidyfs.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Run cleanup, duplicate detection, and renaming.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def run(
    ctx: typer.Context,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--live",
            help="Preview changes, or perform them. Defaults to the configured mode.",
        ),
    ] = None,
) -> None:
    """Run cleanup, duplicate detection, and renaming."""
    config = get_config(ctx, dry_run=dry_run)
    mode = "dry-run" if config.dry_run else "live"
    console.print(f"[bold_header]tidyfs run[/] [muted]({mode})[/]")

    try:
        with create_workspace(config) as workspace:
            outcome = run_all(config, workspace)
    except WorkspaceError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=EXIT_WORKSPACE) from e

    if outcome.cleanup is not None:
        print_cleanup_summary(outcome.cleanup)
    if outcome.duplicates is not None:
        print_duplicate_report(outcome.duplicates)
    if outcome.rename is not None:
        print_rename_summary(outcome.rename, dry_run=config.dry_run)

    for error in outcome.errors:
        print_warning(escape(error))

    print_success("Done.")
