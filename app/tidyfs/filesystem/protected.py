"""Protected filesystem paths that should never be deleted.

The execution gate refuses delete actions on any path matching these
patterns, in preview and live mode alike.
"""

import fnmatch
import os
from pathlib import Path

# Protected filesystem path patterns (glob-style).
# Patterns starting with ~ are expanded to the user's home directory
# before matching. Patterns starting with / are matched as-is.
PROTECTED_PATH_PATTERNS: list[str] = [
    # Roots
    "/",
    "~",
    "~/.cache",
    "~/.config",
    "/var/log",
    # SSH and security
    "~/.ssh",
    "~/.ssh/*",
    "~/.gnupg",
    "~/.gnupg/*",
    # Keyrings
    "~/.local/share/keyrings",
    "~/.local/share/keyrings/*",
    # tidyfs itself
    "~/.config/tidyfs",
    "~/.config/tidyfs/*",
    # System
    "/etc",
    "/etc/*",
    "/boot",
    "/boot/*",
    "/usr",
    "/usr/*",
]


def is_protected_path(path: str) -> bool:
    """Check if a filesystem path is protected and must not be deleted.

    The path is normalized (trailing separators and dot segments removed)
    but symlinks are not resolved, because deleting a link never touches
    its target.

    Args:
        path: Filesystem path to check.

    Returns:
        True if the path matches any protected pattern, False otherwise.
    """
    home = str(Path.home())
    normalized = os.path.normpath(os.path.abspath(path))

    for pattern in PROTECTED_PATH_PATTERNS:
        expanded = home + pattern[1:] if pattern.startswith("~") else pattern

        if fnmatch.fnmatchcase(normalized, expanded):
            return True

    return False
