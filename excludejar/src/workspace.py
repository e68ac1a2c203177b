"""
Workspace (staging directory) resolution.
"""
import tempfile
import time
import uuid
from pathlib import Path
from typing import Any, Optional

WORKSPACE_PREFIX = "excludejar.ExcludeJar"


def default_workspace_path(*, now: Optional[float] = None) -> Path:
    """Generated staging path under the system temp directory.

    The name is the fixed prefix, the millisecond timestamp and a short random
    suffix. The directory itself is not created.
    """
    millis = int((time.time() if now is None else now) * 1000)
    suffix = uuid.uuid4().hex[:8]
    return Path(tempfile.gettempdir()) / f"{WORKSPACE_PREFIX}.{millis}.{suffix}"


def resolve_workspace(explicit_path: Optional[Path] = None, *, console: Any = None) -> Path:
    """Return the directory used to stage extracted files.

    An explicit path is only used when this call creates it. Anything that makes
    creation fail (the path already exists, a file is in the way, permissions)
    selects the generated default instead.
    """
    if explicit_path is None:
        return default_workspace_path()

    path = Path(explicit_path).expanduser()
    if console is not None and console.dry_run:
        return path if not path.exists() else default_workspace_path()

    try:
        path.mkdir(parents=True)
    except OSError as exc:
        fallback = default_workspace_path()
        if console is not None:
            console.debug(
                f"Cannot create work directory {path} ({exc}); using {fallback}")
        return fallback
    return path
