"""Shared helpers for loading configuration mappings from disk."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Mapping

import json
import tomllib

try:  # Optional dependency for YAML support
    import yaml
except ModuleNotFoundError:  # pragma: no cover - exercised when PyYAML absent
    yaml = None


ConfigLoader = Callable[[Any], Mapping[str, Any]]


def _raise_yaml_missing() -> Mapping[str, Any]:
    raise RuntimeError(
        "PyYAML is required to load YAML configuration files. Install with `pip install PyYAML`."
    )


FILE_LOADERS: Dict[str, ConfigLoader] = {
    ".toml": lambda stream: tomllib.load(stream),
    ".json": lambda stream: json.load(stream),
    ".yaml": lambda stream: yaml.safe_load(stream) if yaml else _raise_yaml_missing(),
    ".yml": lambda stream: yaml.safe_load(stream) if yaml else _raise_yaml_missing(),
}
"""Mapping of file suffixes to loader callables."""


def load_config_file(path: Path) -> Mapping[str, Any]:
    """Load and decode a configuration mapping from ``path``."""

    suffix = path.suffix.lower()
    loader = FILE_LOADERS.get(suffix)
    if loader is None:
        supported = ", ".join(sorted(FILE_LOADERS)) or "<none>"
        raise ValueError(
            f"Unsupported configuration file extension: {suffix}. Supported: {supported}"
        )

    mode = "rb" if suffix == ".toml" else "r"
    kwargs: Dict[str, Any] = {}
    if mode == "r":
        kwargs["encoding"] = "utf-8"

    with path.open(mode, **kwargs) as handle:
        data = loader(handle)

    if data is None:
        return {}

    if not isinstance(data, Mapping):
        raise TypeError(f"Configuration file '{path}' must contain a mapping at the root")

    return data


def load_config_section(path: Path, section: str) -> Dict[str, Any]:
    """Return the ``section`` table of ``path``, or the root mapping when absent."""

    data = load_config_file(path)
    table = data.get(section, data)
    if not isinstance(table, Mapping):
        raise TypeError(f"Section '{section}' in '{path}' must be a mapping")
    return dict(table)


def merge_mappings(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep merge two mapping objects. ``None`` values in ``overlay`` are ignored."""

    result: Dict[str, Any] = dict(base)
    for key, value in overlay.items():
        if value is None:
            continue
        existing = result.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            result[key] = merge_mappings(existing, value)
        else:
            result[key] = value
    return result


__all__ = [
    "ConfigLoader",
    "FILE_LOADERS",
    "load_config_file",
    "load_config_section",
    "merge_mappings",
]
