"""Content-based duplicate file detection.

The detector runs a three-stage pipeline over a directory tree:

1. Enumerate regular files strictly larger than the size threshold and
   partition them into buckets by exact byte size.
2. Drop every bucket with a single member. Those files cannot have a
   duplicate and are never opened.
3. Hash the members of the remaining buckets with SHA-256, regroup by
   (size, digest), and keep groups with two or more members.

Hash records are appended to a JSON Lines ledger inside the scoped
workspace and the groups are rebuilt from that ledger, so the only
per-file state that outlives a bucket is on scratch storage that is
removed with the workspace.
"""

import hashlib
import json
import logging
import os
from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

from tidyfs.core.workspace import ScopedWorkspace, WorkspaceError
from tidyfs.duplicates.models import DuplicateGroup, DuplicateReport
from tidyfs.filesystem.enumerator import all_of, enumerate_entries, is_regular_file, larger_than
from tidyfs.filesystem.models import FileEntry, ScanIssue

logger = logging.getLogger(__name__)

DEFAULT_MIN_SIZE = 1024 * 1024
HASH_CHUNK_SIZE = 1024 * 1024
LEDGER_NAME = "hashes.jsonl"

Hasher = Callable[[str], str]


class DuplicateScanError(Exception):
    """Raised when a duplicate scan cannot start (missing or invalid root)."""


def hash_file(path: str, chunk_size: int = HASH_CHUNK_SIZE) -> str:
    """Compute the SHA-256 hex digest of a file's full content.

    Args:
        path: File to hash.
        chunk_size: Read size in bytes.

    Returns:
        Lowercase hex digest.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            digest.update(chunk)
    return digest.hexdigest()


class DuplicateDetector:
    """Finds groups of files with identical content under a directory.

    Attributes:
        _workspace: Acquired scoped workspace holding the hash ledger.
        _min_size: Files must be strictly larger than this to be compared.
        _hasher: Function mapping a path to its content digest.
    """

    def __init__(
        self,
        workspace: ScopedWorkspace,
        min_size: int = DEFAULT_MIN_SIZE,
        hasher: Hasher = hash_file,
    ) -> None:
        """Initialize the DuplicateDetector.

        Args:
            workspace: Acquired workspace for scratch data.
            min_size: Size threshold in bytes (files at or below are ignored).
            hasher: Content digest function, replaceable for instrumentation.
        """
        if min_size < 0:
            msg = f"min_size cannot be negative, got {min_size}"
            raise ValueError(msg)
        self._workspace = workspace
        self._min_size = min_size
        self._hasher = hasher

    def find_duplicates(self, root: str | Path) -> DuplicateReport:
        """Scan root and return the duplicate groups found.

        Args:
            root: Directory tree to scan.

        Returns:
            DuplicateReport; an empty report when nothing passes the size
            filter or no contents match.

        Raises:
            DuplicateScanError: If root does not exist or is not a directory.
            WorkspaceError: If scratch data cannot be written to the workspace.
        """
        root_str = os.fspath(root)
        try:
            entries = enumerate_entries(
                root_str,
                predicate=all_of(is_regular_file, larger_than(self._min_size)),
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            raise DuplicateScanError(str(e)) from e

        issues: list[ScanIssue] = []
        buckets, order, files_scanned = self._bucket_by_size(entries, issues)
        logger.debug(
            "Scanned %d file(s) above %d bytes into %d size bucket(s)",
            files_scanned,
            self._min_size,
            len(buckets),
        )

        candidates = {size: members for size, members in buckets.items() if len(members) > 1}
        if not candidates:
            return DuplicateReport(root=root_str, issues=tuple(issues), files_scanned=files_scanned)

        ledger = self._workspace.scratch_path(LEDGER_NAME)
        try:
            files_hashed = self._hash_candidates(candidates, order, ledger, issues)
            groups = _groups_from_ledger(ledger)
        except OSError as e:
            msg = f"Cannot use hash ledger {ledger}: {e}"
            raise WorkspaceError(msg) from e

        return DuplicateReport(
            root=root_str,
            groups=tuple(groups),
            issues=tuple(issues),
            files_scanned=files_scanned,
            files_hashed=files_hashed,
        )

    @staticmethod
    def _bucket_by_size(
        entries: Iterable[FileEntry | ScanIssue],
        issues: list[ScanIssue],
    ) -> tuple[dict[int, list[FileEntry]], dict[str, int], int]:
        buckets: dict[int, list[FileEntry]] = defaultdict(list)
        order: dict[str, int] = {}
        for item in entries:
            if isinstance(item, ScanIssue):
                issues.append(item)
                continue
            order[item.path] = len(order)
            buckets[item.size_bytes].append(item)
        return buckets, order, len(order)

    def _hash_candidates(
        self,
        candidates: dict[int, list[FileEntry]],
        order: dict[str, int],
        ledger: Path,
        issues: list[ScanIssue],
    ) -> int:
        hashed = 0
        with ledger.open("w", encoding="utf-8") as out:
            for size, members in candidates.items():
                for entry in members:
                    try:
                        digest = self._hasher(entry.path)
                    except OSError as e:
                        logger.warning("Cannot hash %s: %s", entry.path, e.strerror or e)
                        issues.append(ScanIssue(path=entry.path, phase="hash", message=str(e)))
                        continue
                    hashed += 1
                    record = {
                        "seq": order[entry.path],
                        "size": size,
                        "digest": digest,
                        "path": entry.path,
                    }
                    out.write(json.dumps(record) + "\n")
        return hashed


def _groups_from_ledger(ledger: Path) -> list[DuplicateGroup]:
    """Rebuild duplicate groups from the hash ledger.

    Groups are keyed by (size, digest) and ordered by the discovery
    sequence of their first member; members keep discovery order too.
    """
    grouped: dict[tuple[int, str], list[tuple[int, str]]] = defaultdict(list)
    for record in _read_ledger(ledger):
        key = (record["size"], record["digest"])
        grouped[key].append((record["seq"], record["path"]))

    groups: list[tuple[int, DuplicateGroup]] = []
    for (size, digest), members in grouped.items():
        if len(members) < 2:
            continue
        members.sort()
        group = DuplicateGroup(digest=digest, size_bytes=size, paths=tuple(p for _, p in members))
        groups.append((members[0][0], group))

    groups.sort(key=lambda item: item[0])
    return [group for _, group in groups]


def _read_ledger(ledger: Path) -> Iterator[dict[str, Any]]:
    with ledger.open(encoding="utf-8") as f:
        for line in f:
            yield json.loads(line)


def format_report(report: DuplicateReport) -> list[str]:
    """Render a report in the stable ``<hex-digest> <path>`` line format.

    Lines of one group are contiguous. A summary line with the total
    group count is always appended.

    Args:
        report: Report to render.

    Returns:
        Output lines without trailing newlines.
    """
    lines = [f"{group.digest} {path}" for group in report.groups for path in group.paths]
    lines.append(f"Total duplicate groups: {report.group_count}")
    return lines
