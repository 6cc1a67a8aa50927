"""Data models for tidyfs.

This module exports the action structures shared by every operation.
"""

from tidyfs.models.action import (
    Action,
    ActionResult,
    ActionType,
    create_delete_action,
    create_rename_action,
)

__all__ = [
    "Action",
    "ActionResult",
    "ActionType",
    "create_delete_action",
    "create_rename_action",
]
