"""Action models for filesystem mutations.

Every state-changing operation in tidyfs is represented as an Action
value and handed to the ExecutionGate, which either performs it or
records it when running in preview mode.
"""

import shlex
from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Type of filesystem mutation.

    Attributes:
        DELETE: Remove a file, symlink, or directory tree.
        RENAME: Move a path to a new name without overwriting.
    """

    DELETE = "delete"
    RENAME = "rename"


@dataclass(frozen=True, slots=True)
class Action:
    """A single, fully-resolved filesystem mutation.

    Attributes:
        action_type: The kind of mutation.
        path: Path the action operates on (source for renames).
        destination: Target path for renames, None for deletes.
        reason: Optional explanation shown in previews and logs.
    """

    action_type: ActionType
    path: str
    destination: str | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.path:
            msg = "Action path cannot be empty"
            raise ValueError(msg)
        if self.action_type == ActionType.RENAME and not self.destination:
            msg = "Rename action requires a destination"
            raise ValueError(msg)
        if self.action_type == ActionType.DELETE and self.destination is not None:
            msg = "Delete action cannot have a destination"
            raise ValueError(msg)

    @property
    def is_delete(self) -> bool:
        """Check if this is a delete action."""
        return self.action_type == ActionType.DELETE

    @property
    def is_rename(self) -> bool:
        """Check if this is a rename action."""
        return self.action_type == ActionType.RENAME

    def describe(self) -> str:
        """Render the action as a shell-like, human-readable command.

        Arguments are quoted so names containing whitespace or newlines
        stay unambiguous in the preview output.
        """
        if self.is_rename:
            return f"mv -n {shlex.quote(self.path)} {shlex.quote(self.destination or '')}"
        return f"rm -rf {shlex.quote(self.path)}"


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of passing an Action through the ExecutionGate.

    Attributes:
        action: The action that was performed or recorded.
        success: Whether the action completed (always True in preview mode
            unless the action was refused up front).
        dry_run: True if the action was only recorded, not executed.
        error: Error message if the action failed.
    """

    action: Action
    success: bool
    dry_run: bool = False
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success


def create_delete_action(path: str, reason: str | None = None) -> Action:
    """Create a delete action for a path.

    Args:
        path: Path to remove.
        reason: Optional explanation for the deletion.

    Returns:
        Action configured for deletion.
    """
    return Action(action_type=ActionType.DELETE, path=path, reason=reason)


def create_rename_action(source: str, destination: str, reason: str | None = None) -> Action:
    """Create a no-overwrite rename action.

    Args:
        source: Existing path to rename.
        destination: New path; must not exist when the action runs.
        reason: Optional explanation for the rename.

    Returns:
        Action configured for renaming.
    """
    return Action(
        action_type=ActionType.RENAME,
        path=source,
        destination=destination,
        reason=reason,
    )
