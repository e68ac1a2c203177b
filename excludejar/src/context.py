"""
Console and run options for excludejar.
"""
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from core.archive import ArchiveConsole

from .errors import ConfigurationError


class Console(ArchiveConsole):
    """Simple console output handler with configurable log level.

    Levels: none < error < info < debug
    Default: 'none' (no output)
    """

    LEVELS = {
        "none": 0,
        "error": 1,
        "info": 2,
        "debug": 3,
    }

    def __init__(self, level: str = "none", dry_run: bool = False):
        self.level_name = level
        self.level = self.LEVELS.get(level, 0)
        self.dry_run = dry_run

    def info(self, message: str) -> None:
        if self.level >= self.LEVELS["info"]:
            print(f"[INFO] {message}")

    def error(self, message: str) -> None:
        if self.level >= self.LEVELS["error"]:
            print(f"[ERROR] {message}", file=sys.stderr)

    def dry(self, message: str) -> None:
        if self.dry_run:
            print(f"[DRY] {message}")

    def debug(self, message: str) -> None:
        if self.level >= self.LEVELS["debug"]:
            print(f"[DEBUG] {message}")


_REQUIRED = ("dest_file", "base_file", "exclude_file")


def _coerce_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0", ""):
            return False
    raise ConfigurationError(f"Option '{name}' must be a boolean, got {value!r}")


def _coerce_path(value: Any, name: str, base_dir: Optional[Path]) -> Path:
    if not isinstance(value, (str, Path)) or not str(value).strip():
        raise ConfigurationError(f"Option '{name}' must be a non-empty path")
    path = Path(str(value)).expanduser()
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path


@dataclass
class ExcludeJarOptions:
    """Invocation options of a single run."""

    dest_file: Path
    base_file: Path
    exclude_file: Path
    work_dir: Optional[Path] = None
    autoclean: bool = False
    manifest: bool = False

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], *, base_dir: Optional[Path] = None
    ) -> "ExcludeJarOptions":
        """Build options from a config mapping.

        Relative paths are resolved against ``base_dir`` when given. ``work``
        takes precedence over ``work_dir``.
        """
        missing = [name for name in _REQUIRED if data.get(name) in (None, "")]
        if missing:
            raise ConfigurationError(
                f"Missing required option(s): {', '.join(missing)}")

        work = data.get("work", data.get("work_dir"))
        return cls(
            dest_file=_coerce_path(data["dest_file"], "dest_file", base_dir),
            base_file=_coerce_path(data["base_file"], "base_file", base_dir),
            exclude_file=_coerce_path(
                data["exclude_file"], "exclude_file", base_dir),
            work_dir=_coerce_path(work, "work", base_dir) if work else None,
            autoclean=_coerce_bool(data.get("autoclean", False), "autoclean"),
            manifest=_coerce_bool(data.get("manifest", False), "manifest"),
        )
