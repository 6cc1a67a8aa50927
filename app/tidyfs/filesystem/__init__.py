"""Filesystem enumeration module.

This module provides the lazy file enumerator, its entry models, and
the protected path list consulted before any deletion.
"""

from tidyfs.filesystem.enumerator import (
    Predicate,
    all_of,
    enumerate_entries,
    is_regular_file,
    larger_than,
    name_matches,
    older_than,
)
from tidyfs.filesystem.models import FileEntry, PathType, ScanIssue
from tidyfs.filesystem.protected import PROTECTED_PATH_PATTERNS, is_protected_path

__all__ = [
    "PROTECTED_PATH_PATTERNS",
    "FileEntry",
    "PathType",
    "Predicate",
    "ScanIssue",
    "all_of",
    "enumerate_entries",
    "is_protected_path",
    "is_regular_file",
    "larger_than",
    "name_matches",
    "older_than",
]
