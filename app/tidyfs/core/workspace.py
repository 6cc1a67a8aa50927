"""Scoped temporary workspace.

Provides a uniquely-named scratch directory whose lifetime is tied to a
``with`` block. The directory is removed when the block exits, whether
it completed, raised, or the process received SIGINT, SIGTERM, or
SIGHUP while the workspace was held.
"""

from __future__ import annotations

import logging
import shutil
import signal
import tempfile
import threading
from pathlib import Path
from types import FrameType, TracebackType
from typing import Any

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "tidyfs-"

# Signals translated into SystemExit while a workspace is held.
# SIGINT already raises KeyboardInterrupt, which unwinds the same way.
_TERMINATING_SIGNALS: tuple[signal.Signals, ...] = tuple(
    sig for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if sig
)


class WorkspaceError(RuntimeError):
    """Raised when the scoped workspace cannot be created or used."""


class ScopedWorkspace:
    """A private scratch directory removed when its scope ends.

    Use as a context manager::

        with ScopedWorkspace() as ws:
            ledger = ws.scratch_path("hashes.jsonl")

    Attributes:
        _base_dir: Parent directory for the workspace (None = system temp).
        _path: Path of the acquired directory, None until acquired.
    """

    def __init__(self, base_dir: Path | None = None, *, handle_signals: bool = True) -> None:
        """Initialize the workspace without creating it.

        Args:
            base_dir: Directory to create the workspace in. Defaults to the
                system temporary directory.
            handle_signals: Translate SIGTERM/SIGHUP into SystemExit while
                the workspace is held so that cleanup still runs.
        """
        self._base_dir = base_dir
        self._handle_signals = handle_signals
        self._path: Path | None = None
        self._previous_handlers: dict[signal.Signals, Any] = {}

    @property
    def path(self) -> Path:
        """Path of the acquired workspace.

        Raises:
            WorkspaceError: If the workspace has not been acquired.
        """
        if self._path is None:
            msg = "Workspace has not been acquired"
            raise WorkspaceError(msg)
        return self._path

    def acquire(self) -> Path:
        """Create a fresh, uniquely-named workspace directory.

        Returns:
            Path to the new directory.

        Raises:
            WorkspaceError: If the workspace is already acquired or the
                directory cannot be created.
        """
        if self._path is not None:
            msg = f"Workspace already acquired at {self._path}"
            raise WorkspaceError(msg)

        try:
            created = tempfile.mkdtemp(
                prefix=WORKSPACE_PREFIX,
                dir=str(self._base_dir) if self._base_dir is not None else None,
            )
        except OSError as e:
            location = self._base_dir or tempfile.gettempdir()
            msg = f"Cannot create workspace in {location}: {e}"
            raise WorkspaceError(msg) from e

        self._path = Path(created)
        logger.debug("Acquired workspace %s", self._path)
        return self._path

    def scratch_path(self, name: str) -> Path:
        """Return a path for a scratch file inside the workspace.

        The file itself is not created.

        Args:
            name: Relative name of the scratch file.

        Returns:
            Path inside the workspace.

        Raises:
            WorkspaceError: If the workspace is not acquired or the name
                would resolve outside of it.
        """
        base = self.path
        candidate = (base / name).resolve()
        if candidate == base.resolve() or base.resolve() not in candidate.parents:
            msg = f"Scratch name escapes the workspace: {name!r}"
            raise WorkspaceError(msg)
        return candidate

    def release(self) -> None:
        """Remove the workspace directory recursively. Safe to call twice."""
        if self._path is None:
            return
        path, self._path = self._path, None
        shutil.rmtree(path, ignore_errors=True)
        if path.exists():
            logger.warning("Could not fully remove workspace %s", path)
        else:
            logger.debug("Released workspace %s", path)

    def __enter__(self) -> ScopedWorkspace:
        self.acquire()
        if self._handle_signals:
            self._install_signal_handlers()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.release()
        finally:
            self._restore_signal_handlers()

    def _install_signal_handlers(self) -> None:
        # signal.signal only works from the main thread
        if threading.current_thread() is not threading.main_thread():
            return
        for sig in _TERMINATING_SIGNALS:
            self._previous_handlers[sig] = signal.signal(sig, _raise_system_exit)

    def _restore_signal_handlers(self) -> None:
        for sig, handler in self._previous_handlers.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()


def _raise_system_exit(signum: int, _frame: FrameType | None) -> None:
    logger.warning("Received signal %d, cleaning up", signum)
    raise SystemExit(128 + signum)
