"""Cache and system log cleanup."""

from tidyfs.cleanup.operation import CleanupOperation, CleanupSummary, is_privileged

__all__ = ["CleanupOperation", "CleanupSummary", "is_privileged"]
