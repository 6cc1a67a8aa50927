"""Shared display functions for operation results.

Provides the duplicate report printer (a stable plain-text format) and
Rich tables for rename plans and deletion results.
"""

import typer
from rich.markup import escape
from rich.table import Table

from tidyfs.cleanup.operation import CleanupSummary
from tidyfs.duplicates.detector import format_report
from tidyfs.duplicates.models import DuplicateReport
from tidyfs.models.action import ActionResult
from tidyfs.rename.models import RenameDisposition, RenameSummary
from tidyfs.utils.formatting import (
    console,
    format_size,
    print_info,
    print_success,
    print_warning,
)

_DISPOSITION_STYLES: dict[RenameDisposition, str] = {
    RenameDisposition.APPLY: "[renamed]rename[/]",
    RenameDisposition.SKIP_COLLISION: "[collision]collision[/]",
    RenameDisposition.SKIP_EMPTY: "[muted]skipped[/]",
    RenameDisposition.FAILED: "[error]failed[/]",
    RenameDisposition.NO_OP: "[muted]unchanged[/]",
}


def print_duplicate_report(report: DuplicateReport) -> None:
    """Print duplicate groups as ``<hex-digest> <path>`` lines.

    The group lines and the trailing total are written as plain text,
    without Rich markup, since other tools may parse them.
    """
    for issue in report.issues:
        print_warning(f"Skipped {escape(str(issue))}")

    if report.files_scanned == 0:
        print_info("No files above the size threshold found")
    elif not report.has_duplicates:
        print_info("No duplicates found")
    else:
        print_info("Duplicate files found:")

    for line in format_report(report):
        typer.echo(line)

    if report.has_duplicates:
        console.print(
            f"[dim]{report.files_hashed} of {report.files_scanned} file(s) hashed, "
            f"{format_size(report.wasted_bytes)} in redundant copies[/dim]"
        )


def print_rename_summary(summary: RenameSummary, dry_run: bool) -> None:
    """Display the rename plan and the rename/collision counts."""
    changes = summary.changes
    if changes:
        title = "Rename Plan (dry-run)" if dry_run else "Rename Results"
        table = Table(
            title=title,
            show_header=True,
            header_style="bold_header",
            border_style="border",
        )
        table.add_column("Status", width=10)
        table.add_column("Original", no_wrap=True)
        table.add_column("Canonical", no_wrap=True)
        table.add_column("Details", style="dim")

        for entry in changes:
            table.add_row(
                _DISPOSITION_STYLES[entry.disposition],
                escape(entry.original),
                escape(entry.canonical),
                escape(entry.error or ""),
            )
        console.print(table)

    verb = "Would rename" if dry_run else "Renamed"
    message = f"{verb} {summary.renamed} files, {summary.collisions} collisions avoided"
    if summary.failures:
        print_warning(f"{message}, {summary.failures} failed")
    else:
        print_success(message)


def print_cleanup_summary(summary: CleanupSummary) -> None:
    """Display deletion results of a cleanup run."""
    if summary.results:
        console.print(create_results_table(list(summary.results)))
    else:
        print_info("Nothing to clean.")

    if summary.system_logs_skipped:
        print_info("Skipped system log cleanup (requires root).")

    dry_count = sum(1 for r in summary.results if r.dry_run and r.success)
    if dry_count:
        print_info(f"Dry-run: {dry_count} path(s) would be deleted.")
    elif summary.failed:
        print_warning(f"{summary.succeeded} succeeded, {summary.failed} failed")
    elif summary.succeeded:
        print_success(f"All {summary.succeeded} path(s) deleted successfully.")


def create_results_table(results: list[ActionResult]) -> Table:
    """Create a Rich table displaying gate results.

    Args:
        results: Results returned by the execution gate.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Deletion Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=10)
    table.add_column("Path", no_wrap=True)
    table.add_column("Details", style="dim")

    for r in results:
        if r.failed:
            status = "[error]failed[/]"
            detail = r.error or "Unknown error"
        elif r.dry_run:
            status = "[info]dry-run[/]"
            detail = "Would delete"
        else:
            status = "[deleted]deleted[/]"
            detail = r.action.reason or ""
        table.add_row(status, escape(r.action.path), escape(detail))

    return table
