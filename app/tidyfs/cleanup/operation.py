"""Cache and log cleanup.

Empties the user's cache directories (generic XDG cache, Firefox and
Chrome caches) and, when running as root, deletes old ``*.log`` files
under /var/log. Every deletion is submitted to the execution gate.
"""

import glob
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from tidyfs.core.gate import ExecutionGate
from tidyfs.filesystem.enumerator import (
    all_of,
    enumerate_entries,
    is_regular_file,
    name_matches,
    older_than,
)
from tidyfs.filesystem.models import ScanIssue
from tidyfs.models.action import ActionResult, create_delete_action

logger = logging.getLogger(__name__)

# Cache directories relative to the user's home; glob patterns allowed
_CACHE_TARGETS: tuple[str, ...] = (
    ".cache",
    ".mozilla/firefox/*/cache2",
    ".config/google-chrome/Default/Cache",
)

SYSTEM_LOG_DIR = Path("/var/log")


def is_privileged() -> bool:
    """Check whether the process runs with root privileges."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


@dataclass(frozen=True, slots=True)
class CleanupSummary:
    """Outcome of a cleanup run.

    Attributes:
        results: Gate results for every deletion submitted.
        system_logs_skipped: True when log cleanup was skipped for lack
            of privileges.
    """

    results: tuple[ActionResult, ...] = ()
    system_logs_skipped: bool = False

    @property
    def succeeded(self) -> int:
        """Number of deletions performed (or planned, in preview)."""
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        """Number of deletions that failed or were refused."""
        return sum(1 for r in self.results if r.failed)


class CleanupOperation:
    """Removes cache contents and stale system logs.

    Args:
        gate: Execution gate receiving every delete action.
        log_days: Delete logs last modified more than this many days ago.
        home: Home directory holding the cache targets.
        log_dir: Directory searched for old logs.
        privileged: Override for the root check (None = detect).
    """

    def __init__(
        self,
        gate: ExecutionGate,
        *,
        log_days: int = 7,
        home: Path | None = None,
        log_dir: Path = SYSTEM_LOG_DIR,
        privileged: bool | None = None,
    ) -> None:
        if log_days < 0:
            msg = f"log_days cannot be negative, got {log_days}"
            raise ValueError(msg)
        self._gate = gate
        self._log_days = log_days
        self._home = home if home is not None else Path.home()
        self._log_dir = log_dir
        self._privileged = is_privileged() if privileged is None else privileged

    def run(self) -> CleanupSummary:
        """Clean cache directories and, if privileged, old system logs.

        Returns:
            CleanupSummary with the results of every deletion.
        """
        results: list[ActionResult] = []

        for cache_dir in self._cache_dirs():
            logger.info("Clearing cache %s", cache_dir)
            results.extend(self._clear_directory(cache_dir))

        skipped = not self._privileged
        if skipped:
            logger.info("Skipping system-wide cleanup (requires root)")
        else:
            logger.info("Running as root - cleaning system logs older than %d days", self._log_days)
            results.extend(self._remove_old_logs())

        return CleanupSummary(results=tuple(results), system_logs_skipped=skipped)

    def _cache_dirs(self) -> list[Path]:
        dirs: list[Path] = []
        for pattern in _CACHE_TARGETS:
            matches = sorted(glob.glob(os.path.join(glob.escape(str(self._home)), pattern)))
            dirs.extend(Path(m) for m in matches if os.path.isdir(m) and not os.path.islink(m))
        return dirs

    def _clear_directory(self, directory: Path) -> list[ActionResult]:
        """Delete every entry inside directory, keeping the directory itself."""
        try:
            entries = enumerate_entries(directory, max_depth=1)
        except (FileNotFoundError, NotADirectoryError) as e:
            logger.warning("Cache directory vanished: %s", e)
            return []

        results: list[ActionResult] = []
        for item in entries:
            if isinstance(item, ScanIssue):
                continue
            results.append(self._gate.perform(create_delete_action(item.path, reason="cache")))
        return results

    def _remove_old_logs(self) -> list[ActionResult]:
        try:
            entries = enumerate_entries(
                self._log_dir,
                predicate=all_of(is_regular_file, name_matches("*.log"), older_than(self._log_days)),
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            logger.warning("Log directory unavailable: %s", e)
            return []

        results: list[ActionResult] = []
        for item in entries:
            if isinstance(item, ScanIssue):
                continue
            results.append(self._gate.perform(create_delete_action(item.path, reason="old log")))
        return results
