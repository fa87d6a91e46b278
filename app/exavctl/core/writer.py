"""Exclusion list file I/O.

Each list is stored as a UTF-8 text file: a header line, one blank
separator line, then one entry per line. Files are overwritten on
every build.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from exavctl.models.exclusion import ExclusionKind, ExclusionLists

logger = logging.getLogger(__name__)

# Header line plus blank separator
HEADER_LINES = 2


def exclusion_file_name(hostname: str, kind: ExclusionKind) -> str:
    """Return the file name for a host's exclusion list."""
    return f"av-exclusions-{hostname}-{kind.value}.txt"


def exclusion_file_path(directory: Path, hostname: str, kind: ExclusionKind) -> Path:
    """Return the full path of a host's exclusion list file."""
    return directory / exclusion_file_name(hostname, kind)


def format_header(hostname: str, kind: ExclusionKind) -> str:
    """Return the header line written at the top of an exclusion file."""
    return f"### Antivirus exclusion {kind.value} for {hostname} ###"


def render_exclusion_file(hostname: str, kind: ExclusionKind, entries: Iterable[str]) -> str:
    """Render the full text of an exclusion file."""
    lines = [format_header(hostname, kind), "", *entries]
    return "\n".join(lines) + "\n"


def write_exclusion_file(
    path: Path,
    hostname: str,
    kind: ExclusionKind,
    entries: Iterable[str],
) -> Path:
    """Write one exclusion list, replacing any existing file.

    Args:
        path: Destination file.
        hostname: Server name used in the header.
        kind: Which list is being written.
        entries: List entries in order.

    Returns:
        The written path.

    Raises:
        OSError: If the file cannot be written.
    """
    path.write_text(render_exclusion_file(hostname, kind, entries), encoding="utf-8")
    logger.debug("Wrote %s", path)
    return path


def write_exclusion_lists(
    lists: ExclusionLists,
    directory: Path,
    hostname: str,
) -> dict[ExclusionKind, Path]:
    """Write all three exclusion lists into a directory.

    Args:
        lists: Built exclusion lists.
        directory: Output directory, created if missing.
        hostname: Server name used in file names and headers.

    Returns:
        Mapping of kind to written file path.

    Raises:
        OSError: If the directory or a file cannot be written.
    """
    directory.mkdir(parents=True, exist_ok=True)
    written: dict[ExclusionKind, Path] = {}
    for kind in ExclusionKind:
        path = exclusion_file_path(directory, hostname, kind)
        written[kind] = write_exclusion_file(path, hostname, kind, lists.get(kind))
    return written


def read_exclusion_file(path: Path) -> list[str]:
    """Read the entries of an exclusion file.

    Skips exactly the first two lines (header and separator) and any
    blank lines after them.

    Args:
        path: File written by ``write_exclusion_file``.

    Returns:
        Entries in file order.

    Raises:
        OSError: If the file cannot be read.
    """
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines[HEADER_LINES:] if line.strip()]
