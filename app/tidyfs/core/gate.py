"""Execution gate for filesystem mutations.

Every delete and rename in tidyfs goes through ExecutionGate.perform().
In preview (dry-run) mode the gate logs and records the action without
touching the filesystem; in live mode it executes the action and turns
any OSError into a failed ActionResult so one bad path never aborts an
operation.
"""

import errno
import logging
import os
import shutil
from collections.abc import Iterable

from tidyfs.filesystem.protected import is_protected_path
from tidyfs.models.action import Action, ActionResult

logger = logging.getLogger(__name__)

# errno values meaning "hard links are not available here", which makes
# the gate fall back to check-then-rename.
_NO_LINK_ERRNOS = frozenset(
    {errno.EPERM, errno.EXDEV, errno.EMLINK, errno.ENOTSUP, errno.EOPNOTSUPP, errno.ENOSYS}
)


class ExecutionGate:
    """Performs or records filesystem actions depending on the mode.

    Attributes:
        _dry_run: If True, record actions without performing them.
        _planned: Actions recorded in preview mode, in submission order.
        _results: Results of every action submitted to this gate.
    """

    def __init__(self, dry_run: bool = True) -> None:
        """Initialize the ExecutionGate.

        Args:
            dry_run: If True, describe actions instead of performing them.
        """
        self._dry_run = dry_run
        self._planned: list[Action] = []
        self._results: list[ActionResult] = []

    @property
    def dry_run(self) -> bool:
        """Whether the gate is in preview mode."""
        return self._dry_run

    @property
    def planned(self) -> list[Action]:
        """Actions recorded (not executed) in preview mode."""
        return list(self._planned)

    @property
    def results(self) -> list[ActionResult]:
        """Results of all actions submitted so far."""
        return list(self._results)

    def perform(self, action: Action) -> ActionResult:
        """Perform a single action, or record it in preview mode.

        Protected paths are refused in both modes so that a preview never
        shows a deletion the live run would not perform.

        Args:
            action: Fully-resolved action to perform.

        Returns:
            ActionResult describing the outcome.
        """
        if action.is_delete and is_protected_path(action.path):
            logger.warning("Refusing to delete protected path: %s", action.path)
            result = ActionResult(
                action=action,
                success=False,
                dry_run=self._dry_run,
                error=f"Protected path cannot be deleted: {action.path}",
            )
        elif self._dry_run:
            logger.info("[DRY] %s", action.describe())
            self._planned.append(action)
            result = ActionResult(action=action, success=True, dry_run=True)
        else:
            result = self._execute(action)

        self._results.append(result)
        return result

    def perform_all(self, actions: Iterable[Action]) -> list[ActionResult]:
        """Perform several actions in order, isolating failures per action.

        Args:
            actions: Actions to perform.

        Returns:
            List of ActionResult, one per input action.
        """
        return [self.perform(action) for action in actions]

    def _execute(self, action: Action) -> ActionResult:
        logger.debug("Executing: %s", action.describe())
        try:
            if action.is_rename:
                _rename_no_replace(action.path, action.destination or "")
            else:
                _delete_path(action.path)
        except OSError as e:
            logger.error("Failed: %s: %s", action.describe(), e)
            return ActionResult(action=action, success=False, error=str(e))

        return ActionResult(action=action, success=True)


def _delete_path(path: str) -> None:
    """Delete a single path.

    Directories (but not symlinks to directories) are removed with
    shutil.rmtree; files, symlinks, and dead symlinks are unlinked.

    Raises:
        FileNotFoundError: If the path does not exist.
        OSError: If removal fails.
    """
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.unlink(path)
    else:
        raise FileNotFoundError(errno.ENOENT, "Path does not exist", path)


def _rename_no_replace(source: str, destination: str) -> None:
    """Rename source to destination, refusing to overwrite.

    The destination is created with os.link, which fails atomically with
    EEXIST if anything appeared there since the caller's check; the
    source name is then unlinked. On filesystems without hard links the
    rename falls back to an existence check followed by os.rename.

    A destination that is the same file as the source is allowed only for
    case-only renames on case-insensitive filesystems (see is_case_only_rename).
    Two hard-linked names of one inode are distinct entries and refused.

    Raises:
        FileExistsError: If destination exists and is a different file.
        OSError: If the rename fails.
    """
    if os.path.lexists(destination):
        if is_case_only_rename(source, destination):
            os.rename(source, destination)
            return
        raise FileExistsError(errno.EEXIST, "Destination already exists", destination)

    try:
        os.link(source, destination, follow_symlinks=False)
    except FileExistsError:
        raise
    except OSError as e:
        if e.errno not in _NO_LINK_ERRNOS:
            raise
        logger.debug("Hard links unavailable for %s (%s), using rename", destination, e)
        if os.path.lexists(destination):
            raise FileExistsError(errno.EEXIST, "Destination already exists", destination) from e
        os.rename(source, destination)
        return

    os.unlink(source)


def is_case_only_rename(source: str, destination: str) -> bool:
    """Check whether destination is source under a differently-cased name.

    True only when both names live in the same directory, differ in case
    alone, resolve (without following symlinks) to the same inode, and the
    directory does not list both names. Two hard links that differ only in
    case on a case-sensitive filesystem are separate entries, not one file
    seen through a case-insensitive lookup.

    Args:
        source: Existing path.
        destination: Proposed new path.

    Returns:
        True if renaming source to destination only changes letter case.
    """
    src_dir, src_name = os.path.split(source)
    dst_dir, dst_name = os.path.split(destination)
    if src_dir != dst_dir or src_name == dst_name or src_name.casefold() != dst_name.casefold():
        return False
    try:
        listed = set(os.listdir(src_dir or os.curdir))
    except OSError:
        return False
    if src_name in listed and dst_name in listed:
        return False
    try:
        src_stat = os.lstat(source)
        dst_stat = os.lstat(destination)
    except OSError:
        return False
    return (src_stat.st_dev, src_stat.st_ino) == (dst_stat.st_dev, dst_stat.st_ino)
