"""Operation orchestration shared by the CLI commands.

Each ``run_*`` function executes one maintenance operation against an
immutable MaintenanceConfig. They are used both by the single-operation
commands (clean, dupes, rename) and by ``tidyfs run``, which calls all
three in sequence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tidyfs.cleanup.operation import CleanupOperation, CleanupSummary
from tidyfs.core.gate import ExecutionGate
from tidyfs.core.workspace import ScopedWorkspace
from tidyfs.duplicates.detector import DuplicateDetector, DuplicateScanError
from tidyfs.duplicates.models import DuplicateReport
from tidyfs.rename.models import RenameSummary
from tidyfs.rename.normalizer import FilenameNormalizer, RenameError

if TYPE_CHECKING:
    from tidyfs.core.config import MaintenanceConfig

logger = logging.getLogger(__name__)


def create_gate(config: MaintenanceConfig) -> ExecutionGate:
    """Create an execution gate honoring the configured preview mode."""
    return ExecutionGate(dry_run=config.dry_run)


def create_workspace(config: MaintenanceConfig) -> ScopedWorkspace:
    """Create (but do not acquire) the scoped workspace for a run."""
    return ScopedWorkspace(base_dir=config.workspace_dir)


def run_cleanup(config: MaintenanceConfig, gate: ExecutionGate) -> CleanupSummary:
    """Run the cache and log cleanup operation."""
    logger.info("== System cleanup ==")
    return CleanupOperation(gate, log_days=config.log_days).run()


def run_duplicates(config: MaintenanceConfig, workspace: ScopedWorkspace) -> DuplicateReport:
    """Run duplicate detection over the configured directory.

    Raises:
        DuplicateScanError: If the duplicate directory is missing.
        WorkspaceError: If scratch data cannot be written.
    """
    logger.info("== Finding duplicates in %s ==", config.duplicate_dir)
    detector = DuplicateDetector(workspace, min_size=config.min_duplicate_size)
    return detector.find_duplicates(config.duplicate_dir)


def run_rename(config: MaintenanceConfig, gate: ExecutionGate) -> RenameSummary:
    """Run filename normalization over the configured directory.

    Raises:
        RenameError: If the target directory is missing.
    """
    logger.info("== Bulk renaming in %s ==", config.target_dir)
    return FilenameNormalizer(gate).normalize(config.target_dir)


@dataclass
class RunOutcome:
    """Results of a full ``tidyfs run``.

    Each operation field is None when that operation aborted; the
    reason is collected in ``errors``.
    """

    cleanup: CleanupSummary | None = None
    duplicates: DuplicateReport | None = None
    rename: RenameSummary | None = None
    errors: list[str] = field(default_factory=list)


def run_all(config: MaintenanceConfig, workspace: ScopedWorkspace) -> RunOutcome:
    """Run cleanup, duplicate detection, and renaming in order.

    A missing directory aborts only the operation that needs it; the
    remaining operations still run. Workspace errors propagate because
    nothing downstream can proceed without scratch storage.

    Args:
        config: Run configuration.
        workspace: Acquired scoped workspace.

    Returns:
        RunOutcome with per-operation results and collected errors.
    """
    outcome = RunOutcome()
    gate = create_gate(config)

    outcome.cleanup = run_cleanup(config, gate)

    try:
        outcome.duplicates = run_duplicates(config, workspace)
    except DuplicateScanError as e:
        logger.error("ERROR: %s", e)
        outcome.errors.append(f"duplicates: {e}")

    try:
        outcome.rename = run_rename(config, gate)
    except RenameError as e:
        logger.error("ERROR: %s", e)
        outcome.errors.append(f"rename: {e}")

    return outcome
