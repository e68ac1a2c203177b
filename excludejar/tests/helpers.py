"""
Shared fixtures for excludejar tests.
"""
import zipfile
from pathlib import Path
from typing import Iterable, Mapping, Union


def write_jar(path: Path, members: Union[Mapping[str, bytes], Iterable[str]]) -> Path:
    """Write a ZIP archive at ``path``.

    Names ending in ``/`` become directory entries. An iterable of names gets
    the name itself as payload.
    """
    if not isinstance(members, Mapping):
        members = {name: name.encode("utf-8") for name in members}
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in members.items():
            archive.writestr(name, b"" if name.endswith("/") else data)
    return path


def jar_names(path: Path) -> list:
    with zipfile.ZipFile(path) as archive:
        return archive.namelist()


def jar_files(path: Path) -> set:
    return {name for name in jar_names(path) if not name.endswith("/")}
