"""Duplicate detection result models."""

from dataclasses import dataclass, field

from tidyfs.filesystem.models import ScanIssue


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """Files sharing both an exact size and a content digest.

    Attributes:
        digest: Hex SHA-256 digest of the shared content.
        size_bytes: Size of each file in the group.
        paths: Member paths in discovery order (always two or more).
    """

    digest: str
    size_bytes: int
    paths: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate group data after initialization."""
        if len(self.paths) < 2:
            msg = f"A duplicate group needs at least two paths, got {len(self.paths)}"
            raise ValueError(msg)

    @property
    def wasted_bytes(self) -> int:
        """Bytes that would be reclaimed by keeping a single copy."""
        return self.size_bytes * (len(self.paths) - 1)


@dataclass(frozen=True, slots=True)
class DuplicateReport:
    """Outcome of one duplicate detection pass.

    Attributes:
        root: Directory that was scanned.
        groups: Duplicate groups ordered by discovery of their first member.
        issues: Entries skipped because they could not be read.
        files_scanned: Regular files above the size threshold.
        files_hashed: Files whose content was actually hashed.
    """

    root: str
    groups: tuple[DuplicateGroup, ...] = ()
    issues: tuple[ScanIssue, ...] = field(default=())
    files_scanned: int = 0
    files_hashed: int = 0

    @property
    def group_count(self) -> int:
        """Number of duplicate groups found."""
        return len(self.groups)

    @property
    def wasted_bytes(self) -> int:
        """Total bytes held by redundant copies across all groups."""
        return sum(g.wasted_bytes for g in self.groups)

    @property
    def has_duplicates(self) -> bool:
        """Check if any duplicate group was found."""
        return bool(self.groups)
