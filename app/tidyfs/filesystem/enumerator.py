"""Lazy filesystem enumeration with per-entry error reporting.

Walks a directory tree without following symlinks and yields a
FileEntry for every entry accepted by the predicate, or a ScanIssue
for every directory or entry that could not be read. Paths are kept as
Python strings end to end (undecodable bytes survive through the
filesystem encoding's surrogateescape handler), so names containing
spaces, newlines, or arbitrary bytes are never split or merged.
"""

import fnmatch
import logging
import os
import stat
import time
from collections.abc import Callable, Iterator
from pathlib import Path

from tidyfs.filesystem.models import FileEntry, PathType, ScanIssue

logger = logging.getLogger(__name__)

Predicate = Callable[[FileEntry], bool]


def enumerate_entries(
    root: str | Path,
    predicate: Predicate | None = None,
    max_depth: int | None = None,
) -> Iterator[FileEntry | ScanIssue]:
    """Enumerate entries under root that satisfy predicate.

    Directories are descended depth-first in name order. Each directory
    listing is read completely before any of its entries is yielded, so
    the consumer may rename or delete yielded entries without disturbing
    the walk.

    Args:
        root: Directory to enumerate.
        predicate: Filter applied to each entry. None accepts everything.
        max_depth: Maximum depth to descend (1 = direct children only).
            None means unbounded.

    Yields:
        FileEntry for accepted entries, ScanIssue for unreadable ones.

    Raises:
        FileNotFoundError: If root does not exist.
        NotADirectoryError: If root is not a directory.
        ValueError: If max_depth is less than 1.
    """
    if max_depth is not None and max_depth < 1:
        msg = f"max_depth must be at least 1, got {max_depth}"
        raise ValueError(msg)

    root_str = os.fspath(root)
    if not os.path.lexists(root_str):
        raise FileNotFoundError(f"Directory does not exist: {root_str}")
    if not os.path.isdir(root_str):
        raise NotADirectoryError(f"Not a directory: {root_str}")

    return _walk(root_str, predicate, max_depth)


def _walk(
    root: str,
    predicate: Predicate | None,
    max_depth: int | None,
) -> Iterator[FileEntry | ScanIssue]:
    # Stack of (directory, depth of its children)
    pending: list[tuple[str, int]] = [(root, 1)]

    while pending:
        directory, depth = pending.pop()

        try:
            with os.scandir(directory) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning("Cannot read directory %s: %s", directory, e.strerror or e)
            yield ScanIssue(path=directory, phase="enumerate", message=str(e))
            continue

        subdirs: list[str] = []
        for child in children:
            try:
                entry = _make_entry(child, depth)
            except OSError as e:
                # Vanished or unreadable between listing and lstat
                logger.warning("Cannot stat %s: %s", child.path, e.strerror or e)
                yield ScanIssue(path=child.path, phase="stat", message=str(e))
                continue

            if predicate is None or predicate(entry):
                yield entry

            if entry.path_type == PathType.DIRECTORY and (max_depth is None or depth < max_depth):
                subdirs.append(entry.path)

        # Reverse so the stack pops subdirectories in name order
        pending.extend((path, depth + 1) for path in reversed(subdirs))


def _make_entry(dir_entry: os.DirEntry[str], depth: int) -> FileEntry:
    st = dir_entry.stat(follow_symlinks=False)
    return FileEntry(
        path=dir_entry.path,
        path_type=_path_type(st.st_mode),
        size_bytes=st.st_size,
        mtime=st.st_mtime,
        depth=depth,
    )


def _path_type(mode: int) -> PathType:
    if stat.S_ISLNK(mode):
        return PathType.SYMLINK
    if stat.S_ISDIR(mode):
        return PathType.DIRECTORY
    if stat.S_ISREG(mode):
        return PathType.FILE
    return PathType.OTHER


# =============================================================================
# Predicates
# =============================================================================


def is_regular_file(entry: FileEntry) -> bool:
    """Accept regular files only (not symlinks, directories, or devices)."""
    return entry.is_file


def larger_than(size_bytes: int) -> Predicate:
    """Accept entries strictly larger than size_bytes."""

    def _check(entry: FileEntry) -> bool:
        return entry.size_bytes > size_bytes

    return _check


def older_than(days: int, now: float | None = None) -> Predicate:
    """Accept entries last modified more than the given number of days ago.

    Args:
        days: Age threshold in whole days.
        now: Reference time as epoch seconds. Defaults to the current time.
    """
    reference = time.time() if now is None else now
    cutoff = reference - days * 86400

    def _check(entry: FileEntry) -> bool:
        return entry.mtime < cutoff

    return _check


def name_matches(pattern: str) -> Predicate:
    """Accept entries whose basename matches a glob pattern."""

    def _check(entry: FileEntry) -> bool:
        return fnmatch.fnmatchcase(os.path.basename(entry.path), pattern)

    return _check


def all_of(*predicates: Predicate) -> Predicate:
    """Combine predicates; an entry must satisfy every one of them."""

    def _check(entry: FileEntry) -> bool:
        return all(p(entry) for p in predicates)

    return _check
