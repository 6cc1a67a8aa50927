"""Duplicate detection command implementation.

Finds files with identical content and prints them as
``<hex-digest> <path>`` lines. Nothing is ever deleted.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from tidyfs.cli.display import print_duplicate_report
from tidyfs.cli.types import EXIT_FAILURE, EXIT_WORKSPACE, get_config
from tidyfs.core.executor import create_workspace, run_duplicates
from tidyfs.core.workspace import WorkspaceError
from tidyfs.duplicates.detector import DuplicateScanError, format_report
from tidyfs.duplicates.models import DuplicateReport
from tidyfs.utils.formatting import print_error, print_info

app = typer.Typer(
    help="Find duplicate files by content.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def dupes(
    ctx: typer.Context,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--dir",
            "-d",
            help="Directory to search. Defaults to the configured one.",
        ),
    ] = None,
    min_size: Annotated[
        int | None,
        typer.Option(
            "--min-size",
            "-s",
            min=0,
            help="Only compare files larger than this many bytes.",
        ),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Also write the report to a file.",
        ),
    ] = None,
) -> None:
    """Find duplicate files by content."""
    config = get_config(ctx, duplicate_dir=directory, min_duplicate_size=min_size)

    try:
        with create_workspace(config) as workspace:
            report = run_duplicates(config, workspace)
    except WorkspaceError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=EXIT_WORKSPACE) from e
    except DuplicateScanError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=EXIT_FAILURE) from e

    print_duplicate_report(report)

    if export_path is not None:
        _export_report(report, export_path)


def _export_report(report: DuplicateReport, export_path: Path) -> None:
    """Write the report lines to a file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=EXIT_FAILURE)

    content = "\n".join(format_report(report)) + "\n"
    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(content, encoding="utf-8", errors="surrogateescape")
        print_info(f"Report exported to {export_path}")
    except OSError as e:
        print_error(escape(f"Failed to export: {e}"))
        raise typer.Exit(code=EXIT_FAILURE) from e
