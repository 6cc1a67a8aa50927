"""Filename normalization.

Renames the regular files directly inside one directory to a canonical
form: lowercase, whitespace runs collapsed to a single hyphen, and every
character outside ``[a-z0-9._-]`` removed. Renames go through the
execution gate, never overwrite, and skip any file whose canonical name
is already taken by a different entry.
"""

import logging
import os
import re
from pathlib import Path

from tidyfs.core.gate import ExecutionGate, is_case_only_rename
from tidyfs.filesystem.enumerator import enumerate_entries, is_regular_file
from tidyfs.filesystem.models import ScanIssue
from tidyfs.models.action import create_rename_action
from tidyfs.rename.models import RenameDisposition, RenamePlanEntry, RenameSummary

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9._-]")

# Canonical forms that cannot be used as a file name
_UNUSABLE_NAMES = frozenset({"", ".", ".."})


class RenameError(Exception):
    """Raised when a directory cannot be normalized (missing or invalid)."""


def canonical_name(name: str) -> str:
    """Compute the canonical form of a filename.

    Applying it to an already canonical name returns the name unchanged.

    Args:
        name: Basename to normalize.

    Returns:
        The canonical basename (possibly empty).
    """
    lowered = name.lower()
    hyphenated = _WHITESPACE_RUN.sub("-", lowered)
    return _DISALLOWED.sub("", hyphenated)


class FilenameNormalizer:
    """Renames files in one directory to their canonical names.

    Attributes:
        _gate: Execution gate that performs or records each rename.
    """

    def __init__(self, gate: ExecutionGate) -> None:
        """Initialize the FilenameNormalizer.

        Args:
            gate: Execution gate performing (or, in preview, recording)
                each rename.
        """
        self._gate = gate

    def normalize(self, directory: str | Path) -> RenameSummary:
        """Normalize the names of regular files directly under directory.

        Files are processed in name order. The collision check runs
        against the directory contents as they stand after the renames
        already made (or planned, in preview mode) earlier in the run, so
        preview and live mode produce the same plan.

        Args:
            directory: Directory to process (not recursive).

        Returns:
            RenameSummary with one entry per regular file.

        Raises:
            RenameError: If directory does not exist or is not a directory.
        """
        dir_str = os.fspath(directory)
        try:
            entries = enumerate_entries(dir_str, predicate=is_regular_file, max_depth=1)
            taken = set(os.listdir(dir_str))
        except (FileNotFoundError, NotADirectoryError) as e:
            raise RenameError(str(e)) from e
        except OSError as e:
            raise RenameError(f"Cannot list {dir_str}: {e}") from e

        plan: list[RenamePlanEntry] = []
        for item in entries:
            if isinstance(item, ScanIssue):
                continue
            plan.append(self._normalize_one(dir_str, os.path.basename(item.path), taken))

        summary = RenameSummary(directory=dir_str, entries=tuple(plan))
        logger.info(
            "Renamed %d files, %d collisions avoided",
            summary.renamed,
            summary.collisions,
        )
        return summary

    def _normalize_one(self, directory: str, name: str, taken: set[str]) -> RenamePlanEntry:
        new_name = canonical_name(name)

        if new_name == name:
            return RenamePlanEntry(name, new_name, RenameDisposition.NO_OP)

        if new_name in _UNUSABLE_NAMES:
            logger.warning("Skipping %s: name has no usable characters", name)
            return RenamePlanEntry(name, new_name, RenameDisposition.SKIP_EMPTY)

        source = os.path.join(directory, name)
        destination = os.path.join(directory, new_name)

        if new_name in taken and not is_case_only_rename(source, destination):
            logger.warning("Collision detected - %s already exists, skipping %s", new_name, name)
            return RenamePlanEntry(name, new_name, RenameDisposition.SKIP_COLLISION)

        result = self._gate.perform(
            create_rename_action(source, destination, reason="normalize filename")
        )
        if result.failed:
            return RenamePlanEntry(name, new_name, RenameDisposition.FAILED, error=result.error)

        taken.discard(name)
        taken.add(new_name)
        return RenamePlanEntry(name, new_name, RenameDisposition.APPLY)

