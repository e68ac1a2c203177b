"""Command line interface for the excludejar tool."""
from __future__ import annotations

from argparse import ArgumentParser, BooleanOptionalAction, Namespace
from pathlib import Path
from typing import Any, Dict, Iterable
import os
import sys

from core.config_loader import load_config_section, merge_mappings

from .src.context import Console, ExcludeJarOptions
from .src.errors import ConfigurationError, ExcludeJarError
from .src.task import ExcludeJarTask

CONFIG_ENV = "EXCLUDEJAR_CONFIG"
CONFIG_SECTION = "excludejar"


def _parse_arguments(argv: Iterable[str]) -> Namespace:
    parser = ArgumentParser(
        prog="excludejar",
        description="Remove the files of one JAR from another and repackage it")
    parser.add_argument("--config", "-c", type=Path, default=None, help="Path to a TOML/JSON/YAML configuration file")
    parser.add_argument("--dest", dest="dest_file", help="Destination archive to write")
    parser.add_argument("--base", dest="base_file", help="Archive to filter")
    parser.add_argument("--exclude", dest="exclude_file", help="Archive whose entries are removed from the base archive")
    parser.add_argument("--work", dest="work", help="Work directory used to stage extracted files")
    parser.add_argument(
        "--autoclean",
        action=BooleanOptionalAction,
        default=None,
        help="Delete the work directory when done (default: keep it)")
    parser.add_argument(
        "--manifest",
        action="store_true",
        default=None,
        help="Add a default META-INF/MANIFEST.MF when the result has none")
    parser.add_argument("--dry-run", "-n", action="store_true", help="Show what would be done without doing it")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output (maps to debug)")
    parser.add_argument(
        "--log",
        "-l",
        choices=["none", "error", "info", "debug"],
        default="error",
        help="Set log level (default: error)")
    return parser.parse_args(list(argv))


def _load_settings(args: Namespace, console: Console) -> tuple[Dict[str, Any], Path | None]:
    config_path = args.config
    if config_path is None:
        env_config = os.environ.get(CONFIG_ENV)
        if env_config:
            config_path = Path(env_config)
            console.info(f"Using configuration from {CONFIG_ENV}: {config_path}")

    settings: Dict[str, Any] = {}
    base_dir: Path | None = None
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        try:
            settings = load_config_section(config_path, CONFIG_SECTION)
        except Exception as exc:
            raise ConfigurationError(f"Failed to load config: {exc}") from exc
        base_dir = config_path.resolve().parent
        console.debug(f"Loaded configuration from {config_path}: {settings}")

    return settings, base_dir


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)

    log_level = "debug" if args.verbose else args.log
    console = Console(level=log_level, dry_run=args.dry_run)

    try:
        settings, base_dir = _load_settings(args, console)
        # Config paths are relative to the config file, CLI paths to the cwd.
        if base_dir is not None:
            for key in ("dest_file", "base_file", "exclude_file", "work", "work_dir"):
                value = settings.get(key)
                if isinstance(value, str) and value and not Path(value).expanduser().is_absolute():
                    settings[key] = str(base_dir / value)

        overrides = {
            "dest_file": args.dest_file,
            "base_file": args.base_file,
            "exclude_file": args.exclude_file,
            "work": args.work,
            "autoclean": args.autoclean,
            "manifest": args.manifest,
        }
        options = ExcludeJarOptions.from_mapping(merge_mappings(settings, overrides))
        ExcludeJarTask(options, console=console).execute()
    except ExcludeJarError as exc:
        console.error(str(exc))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
