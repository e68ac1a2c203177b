"""ZIP/JAR archive utilities reusable across projects."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Collection, Iterator, Protocol, runtime_checkable
import os
import shutil
import time
import zipfile

MANIFEST_NAME = "META-INF/MANIFEST.MF"

_JAR_LEADING: dict[str, int] = {"META-INF/": 0, MANIFEST_NAME: 1}

_SUFFIX_FORMATS: list[tuple[str, str]] = [
    (".jar", "jar"),
    (".war", "jar"),
    (".ear", "jar"),
    (".zip", "zip"),
]

_FORMAT_ALIASES: dict[str, str] = {
    "jar": "jar",
    "war": "jar",
    "ear": "jar",
    "zip": "zip",
}


class ArchiveError(RuntimeError):
    """Raised when an archive cannot be read, written or safely extracted."""


@runtime_checkable
class ArchiveConsole(Protocol):
    """Minimal console interface required by :class:`ArchiveManager`."""

    dry_run: bool

    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def dry(self, message: str) -> None:
        ...


@dataclass(slots=True)
class ArchiveArtifact:
    """Description of filesystem content to package into an archive."""

    source_dir: Path
    label: str | None = None


class ArchiveManager:
    """Create and extract ZIP based archives (zip, jar, war, ear)."""

    def __init__(
        self,
        console: ArchiveConsole,
    ) -> None:
        self._console = console

    def create_archive(
        self,
        *,
        artifact: ArchiveArtifact,
        target_path: Path | str,
        format_hint: str | None = None,
        overwrite: bool = True,
    ) -> Path:
        """Create an archive for *artifact* at *target_path*.

        Parameters
        ----------
        artifact:
            Data describing the directory to archive. Member names are relative
            to ``artifact.source_dir``.
        target_path:
            Exact path (including filename) for the archive that should be created.
        format_hint:
            Optional explicit archive format such as ``"jar"`` or ``"zip"``. When
            omitted, the format is inferred from *target_path*'s suffix.
        overwrite:
            When ``False`` and the target already exists, a :class:`FileExistsError`
            is raised instead of replacing the file.
        """

        target = Path(target_path).expanduser()
        source_dir = Path(artifact.source_dir).expanduser()

        archive_format = self._resolve_archive_format(
            target=target, format_hint=format_hint)

        if self._console.dry_run:
            label = artifact.label or source_dir.name
            self._emit_dry(f"Would archive {label} to {target}")
            return target

        if not source_dir.exists():
            raise FileNotFoundError(
                f"Archive source directory '{source_dir}' does not exist")

        if target.exists() and not overwrite:
            raise FileExistsError(f"Archive target '{target}' already exists")

        target.parent.mkdir(parents=True, exist_ok=True)

        return self._make_zip_archive(
            target_path=target,
            source_dir=source_dir,
            manifest_first=archive_format == "jar",
        )

    def _resolve_archive_format(
            self,
            *,
            target: Path,
            format_hint: str | None) -> str:
        if format_hint:
            normalized = format_hint.strip().lower()
            if normalized in _FORMAT_ALIASES:
                return _FORMAT_ALIASES[normalized]
            raise ValueError(
                f"Unsupported archive format hint '{format_hint}'")

        filename = target.name.lower()
        for suffix, fmt in _SUFFIX_FORMATS:
            if filename.endswith(suffix):
                return fmt

        raise ValueError(
            "Unable to determine archive format from target path. "
            "Provide an explicit format_hint or use a supported suffix."
        )

    def _emit_dry(self, message: str) -> None:
        dry_method = getattr(self._console, "dry", None)
        if callable(dry_method):
            dry_method(message)
            return
        if getattr(self._console, "dry_run", False):
            self._console.info(f"[dry-run] {message}")

    @staticmethod
    def _iter_tree(source_dir: Path) -> Iterator[tuple[Path, str]]:
        """Yield ``(path, member_name)`` pairs in a stable, sorted walk order.

        Every directory below the root is yielded with a trailing ``/`` ahead
        of its contents, as ``jar`` does.
        """

        for dirpath, dirnames, filenames in os.walk(source_dir, topdown=True):
            dirnames.sort()
            filenames.sort()

            current_dir = Path(dirpath)
            relative_dir = current_dir.relative_to(source_dir)

            if relative_dir != Path("."):
                yield current_dir, f"{relative_dir.as_posix()}/"

            for filename in filenames:
                if relative_dir != Path("."):
                    arcname_path = relative_dir / filename
                else:
                    arcname_path = Path(filename)
                yield current_dir / filename, arcname_path.as_posix()

    def _make_zip_archive(
        self,
        *,
        target_path: Path,
        source_dir: Path,
        manifest_first: bool = False,
    ) -> Path:
        # The target may live inside the tree being archived.
        resolved_target = target_path.resolve()
        members = [
            (file_path, arcname)
            for file_path, arcname in self._iter_tree(source_dir)
            if file_path.resolve() != resolved_target
        ]
        if manifest_first:
            # JAR readers expect META-INF/ and the manifest to lead the archive.
            members.sort(key=lambda item: _JAR_LEADING.get(item[1], len(_JAR_LEADING)))

        with zipfile.ZipFile(
            target_path,
            mode="w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=9,
            allowZip64=True,
            strict_timestamps=False,
        ) as archive:
            for file_path, arcname in members:
                archive.write(file_path, arcname)

        return target_path

    def extract_archive(
        self,
        *,
        archive_path: Path | str,
        destination_dir: Path | str,
        excludes: Collection[str] = (),
    ) -> list[str]:
        """Extract an archive to a destination directory.

        Parameters
        ----------
        archive_path:
            Path to the archive file.
        destination_dir:
            Directory where contents should be extracted. Created when missing.
        excludes:
            Member names to skip. Names are compared literally against the
            archive's member names; no wildcard expansion is performed.

        Returns the member names that were extracted, in archive order.
        """
        archive = Path(archive_path).expanduser()
        dest = Path(destination_dir).expanduser()

        if not archive.exists():
            raise FileNotFoundError(f"Archive '{archive}' does not exist")

        if self._console.dry_run:
            self._emit_dry(f"Would extract {archive} to {dest}")
            return []

        skipped = frozenset(excludes)
        extracted: list[str] = []
        stamps: list[tuple[str, float]] = []

        dest.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive, "r") as zip_ref:
            for member in zip_ref.infolist():
                if member.filename in skipped:
                    continue
                self._check_member_name(member.filename)
                target = zip_ref.extract(member, dest)
                extracted.append(member.filename)
                stamps.append((target, time.mktime(member.date_time + (0, 0, -1))))

        # Applied last so that later writes into a directory keep its entry date.
        for target, mtime in reversed(stamps):
            os.utime(target, (mtime, mtime))

        self._console.info(f"Extracted {archive} to {dest}")
        return extracted

    @staticmethod
    def _check_member_name(name: str) -> None:
        member = PurePosixPath(name.replace("\\", "/"))
        if member.is_absolute() or ".." in member.parts:
            raise ArchiveError(
                f"Refusing to extract member outside of destination: {name}")


def delete_tree(path: Path | str) -> None:
    """Recursively delete the directory at *path*."""

    target = Path(path)
    if not target.is_dir():
        raise NotADirectoryError(f"'{target}' is not a directory")
    shutil.rmtree(target)


__all__ = [
    "MANIFEST_NAME",
    "ArchiveConsole",
    "ArchiveError",
    "ArchiveManager",
    "ArchiveArtifact",
    "delete_tree",
]
