"""
Exclusion list computation from a reference archive.
"""
import zipfile
from pathlib import Path
from typing import FrozenSet, Tuple

MANIFEST_SUFFIX = "MANIFEST.MF"
SEPARATOR = ","


def read_exclusion_entries(reference: Path) -> Tuple[str, ...]:
    """Return the file entries of ``reference`` in archive order.

    Directory entries and anything ending in ``MANIFEST.MF`` are skipped.
    A corrupt archive is reported as :class:`OSError`.
    """
    try:
        with zipfile.ZipFile(reference, "r") as archive:
            return tuple(
                info.filename
                for info in archive.infolist()
                if not info.is_dir() and not info.filename.endswith(MANIFEST_SUFFIX)
            )
    except zipfile.BadZipFile as exc:
        raise OSError(f"Invalid archive '{reference}': {exc}") from exc


def build_exclusion_list(reference: Path) -> str:
    """Comma-joined exclusion list for ``reference`` (empty if nothing qualifies)."""
    return SEPARATOR.join(read_exclusion_entries(reference))


def parse_exclusion_list(text: str) -> FrozenSet[str]:
    """Split an exclusion list back into its entry names, dropping empty items."""
    return frozenset(item for item in text.split(SEPARATOR) if item)
