"""Shared core utilities for archive handling and configuration loading."""

from .archive import MANIFEST_NAME, ArchiveArtifact, ArchiveConsole, ArchiveError, ArchiveManager, delete_tree
from .config_loader import (
    ConfigLoader,
    FILE_LOADERS,
    load_config_file,
    load_config_section,
    merge_mappings,
)

__all__ = [
    "MANIFEST_NAME",
    "ArchiveArtifact",
    "ArchiveConsole",
    "ArchiveError",
    "ArchiveManager",
    "delete_tree",
    "ConfigLoader",
    "FILE_LOADERS",
    "load_config_file",
    "load_config_section",
    "merge_mappings",
]
