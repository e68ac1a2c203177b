"""
Workspace cleanup logic.
"""
from pathlib import Path
from typing import Any

from core.archive import delete_tree

from .errors import CleanupError


def cleanup(workspace: Path, enabled: bool, *, console: Any) -> bool:
    """Remove ``workspace`` recursively when ``enabled``.

    Returns True if the directory was deleted.
    """
    if not enabled or not workspace.exists():
        return False

    if console.dry_run:
        console.dry(f"Would delete work directory {workspace}")
        return False

    console.info(f"Deleting directory {workspace}")
    try:
        delete_tree(workspace)
    except OSError as exc:
        raise CleanupError(
            f"Failed to delete work directory {workspace}: {exc}") from exc
    return True
