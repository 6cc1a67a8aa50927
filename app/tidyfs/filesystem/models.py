"""Filesystem domain models for enumeration.

This module defines the entries produced by the file enumerator: a
FileEntry for each path that matched, and a ScanIssue for each path
that could not be read. Both travel in the same sequence so a single
unreadable entry never aborts a walk.
"""

from dataclasses import dataclass
from enum import Enum


class PathType(str, Enum):
    """Type of filesystem entry.

    Attributes:
        DIRECTORY: Regular directory.
        FILE: Regular file.
        SYMLINK: Symbolic link (never followed during enumeration).
        OTHER: Sockets, FIFOs, device nodes.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A filesystem entry discovered during enumeration.

    Attributes:
        path: Path as yielded by the walk (root joined with entry names).
        path_type: Type of the entry, determined without following symlinks.
        size_bytes: Size in bytes from lstat.
        mtime: Last modification time as epoch seconds.
        depth: Distance from the enumeration root (1 = direct child).
    """

    path: str
    path_type: PathType
    size_bytes: int
    mtime: float
    depth: int

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def is_file(self) -> bool:
        """Check if this entry is a regular file."""
        return self.path_type == PathType.FILE


@dataclass(frozen=True, slots=True)
class ScanIssue:
    """A path that could not be processed.

    Attributes:
        path: Path that failed.
        phase: Processing phase where it failed ("enumerate", "stat", "hash").
        message: Underlying error message.
    """

    path: str
    phase: str
    message: str

    def __str__(self) -> str:
        return f"{self.phase}: {self.path}: {self.message}"
