"""Clean command implementation.

Empties user cache directories and, when run as root, removes old
system logs.
"""

from typing import Annotated

import typer

from tidyfs.cli.display import print_cleanup_summary
from tidyfs.cli.types import get_config
from tidyfs.core.executor import create_gate, run_cleanup

app = typer.Typer(
    help="Clear cache directories and old system logs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean(
    ctx: typer.Context,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--live",
            help="Preview deletions, or perform them. Defaults to the configured mode.",
        ),
    ] = None,
    log_days: Annotated[
        int | None,
        typer.Option("--log-days", min=0, help="Delete logs older than this many days."),
    ] = None,
) -> None:
    """Clear cache directories and old system logs."""
    config = get_config(ctx, dry_run=dry_run, log_days=log_days)
    summary = run_cleanup(config, create_gate(config))
    print_cleanup_summary(summary)
