"""Rename plan models for filename normalization."""

from dataclasses import dataclass
from enum import Enum


class RenameDisposition(str, Enum):
    """What happened (or would happen) to one file.

    Attributes:
        APPLY: Renamed to its canonical name (or would be, in preview).
        SKIP_COLLISION: Canonical name taken by a different file; skipped.
        NO_OP: Name is already canonical.
        SKIP_EMPTY: Canonical form is empty; left untouched.
        FAILED: The execution gate refused or failed the rename.
    """

    APPLY = "apply"
    SKIP_COLLISION = "skip-collision"
    NO_OP = "no-op-identical"
    SKIP_EMPTY = "skip-empty"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RenamePlanEntry:
    """Rename decision for a single file.

    Attributes:
        original: Current basename.
        canonical: Normalized basename.
        disposition: Outcome for this file.
        error: Error message for FAILED entries.
    """

    original: str
    canonical: str
    disposition: RenameDisposition
    error: str | None = None


@dataclass(frozen=True, slots=True)
class RenameSummary:
    """Outcome of normalizing one directory.

    Attributes:
        directory: Directory that was processed.
        entries: One plan entry per regular file, in name order.
    """

    directory: str
    entries: tuple[RenamePlanEntry, ...] = ()

    def _count(self, disposition: RenameDisposition) -> int:
        return sum(1 for e in self.entries if e.disposition == disposition)

    @property
    def renamed(self) -> int:
        """Number of files renamed (or planned for renaming in preview)."""
        return self._count(RenameDisposition.APPLY)

    @property
    def collisions(self) -> int:
        """Number of renames skipped because the target name was taken."""
        return self._count(RenameDisposition.SKIP_COLLISION)

    @property
    def failures(self) -> int:
        """Number of renames the execution gate could not perform."""
        return self._count(RenameDisposition.FAILED)

    @property
    def changes(self) -> tuple[RenamePlanEntry, ...]:
        """Entries other than no-ops, for display."""
        return tuple(e for e in self.entries if e.disposition != RenameDisposition.NO_OP)
