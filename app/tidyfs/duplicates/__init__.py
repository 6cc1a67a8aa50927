"""Content-based duplicate file detection.

Size-bucket pre-filter, selective SHA-256 hashing, and group reporting.
"""

from tidyfs.duplicates.detector import (
    DEFAULT_MIN_SIZE,
    DuplicateDetector,
    DuplicateScanError,
    format_report,
    hash_file,
)
from tidyfs.duplicates.models import DuplicateGroup, DuplicateReport

__all__ = [
    "DEFAULT_MIN_SIZE",
    "DuplicateDetector",
    "DuplicateGroup",
    "DuplicateReport",
    "DuplicateScanError",
    "format_report",
    "hash_file",
]
