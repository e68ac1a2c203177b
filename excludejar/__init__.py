"""Remove the files listed by one JAR from another and repackage the result."""
from __future__ import annotations

from .src import (
    ArchiveOperationError,
    CleanupError,
    ConfigurationError,
    Console,
    ExcludeJarError,
    ExcludeJarOptions,
    ExcludeJarTask,
    RunResult,
    build_exclusion_list,
)

__all__ = [
    "ArchiveOperationError",
    "CleanupError",
    "ConfigurationError",
    "Console",
    "ExcludeJarError",
    "ExcludeJarOptions",
    "ExcludeJarTask",
    "RunResult",
    "build_exclusion_list",
]
