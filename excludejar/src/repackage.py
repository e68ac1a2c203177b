"""
Extract-then-package round trip of the base archive.
"""
from pathlib import Path
from typing import Any

from core.archive import MANIFEST_NAME, ArchiveArtifact, ArchiveManager

from .exclusion import parse_exclusion_list

DEFAULT_MANIFEST = "Manifest-Version: 1.0\r\nCreated-By: excludejar\r\n\r\n"

_KNOWN_SUFFIXES = (".jar", ".war", ".ear", ".zip")


def write_default_manifest(workspace: Path) -> bool:
    """Write a minimal manifest unless the workspace already has one."""
    manifest = workspace / MANIFEST_NAME
    if manifest.exists():
        return False
    manifest.parent.mkdir(parents=True, exist_ok=True)
    manifest.write_bytes(DEFAULT_MANIFEST.encode("utf-8"))
    return True


def repackage(
    base: Path,
    exclusion_patterns: str,
    workspace: Path,
    destination: Path,
    *,
    archives: ArchiveManager,
    console: Any,
    manifest: bool = False,
) -> Path:
    """Extract ``base`` into ``workspace`` minus the excluded entries, then
    archive the workspace contents to ``destination``.

    Errors from either phase propagate unchanged.
    """
    excludes = parse_exclusion_list(exclusion_patterns)

    extracted = archives.extract_archive(
        archive_path=base,
        destination_dir=workspace,
        excludes=excludes,
    )
    console.debug(f"Extracted {len(extracted)} entries into {workspace}")

    if manifest and not console.dry_run:
        if write_default_manifest(workspace):
            console.debug(f"Added default {MANIFEST_NAME}")

    format_hint = None
    if not destination.name.lower().endswith(_KNOWN_SUFFIXES):
        format_hint = "jar"

    result = archives.create_archive(
        artifact=ArchiveArtifact(source_dir=workspace, label=base.name),
        target_path=destination,
        format_hint=format_hint,
    )
    if not console.dry_run:
        console.info(f"Building jar: {result}")
    return result
