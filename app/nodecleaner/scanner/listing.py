"""Single-level directory listing with link detection.

Shared by the tree scanner and the size calculator. A listing either
holds the classified children of one directory or records why the
directory could not be read, so callers skip unreadable subtrees
explicitly instead of relying on suppressed exceptions.
"""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Windows-only attribute; the constant is missing from the stat module elsewhere.
_REPARSE_POINT: int = getattr(stat, "FILE_ATTRIBUTE_REPARSE_POINT", 0x400)


def is_link(entry: os.DirEntry[str]) -> bool:
    """Check if a directory entry is a symlink, junction or other reparse point.

    Args:
        entry: Entry produced by ``os.scandir``.

    Returns:
        True if the entry redirects elsewhere and must not be followed.

    Raises:
        OSError: If the entry's attributes cannot be read.
    """
    if entry.is_symlink() or entry.is_junction():
        return True
    if os.name != "nt":
        return False
    attributes = getattr(entry.stat(follow_symlinks=False), "st_file_attributes", 0)
    return bool(attributes & _REPARSE_POINT)


def is_link_path(path: Path) -> bool:
    """Path-based variant of :func:`is_link` for a single top-level path.

    Returns False when the path does not exist.
    """
    if path.is_symlink() or path.is_junction():
        return True
    if os.name != "nt":
        return False
    try:
        attributes = getattr(path.lstat(), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & _REPARSE_POINT)


@dataclass(frozen=True, slots=True)
class DirectoryListing:
    """Immediate children of one directory, split by kind.

    Attributes:
        path: Directory that was listed.
        files: Regular files (absolute paths).
        directories: Real subdirectories (absolute paths), never links.
        links: Symlinks, junctions and reparse points, never followed.
        error: Why the directory could not be listed, None on success.
    """

    path: str
    files: tuple[str, ...] = ()
    directories: tuple[str, ...] = ()
    links: tuple[str, ...] = ()
    error: str | None = None

    @property
    def skipped(self) -> bool:
        """Whether the directory could not be listed and its subtree is skipped."""
        return self.error is not None


def list_directory(path: str | Path) -> DirectoryListing:
    """List the immediate children of a directory, never raising.

    Entries are sorted by name so traversal order is deterministic.
    Entries whose type cannot be determined are left out.

    Args:
        path: Directory to list.

    Returns:
        DirectoryListing with classified children, or with ``error`` set
        if the directory could not be opened.
    """
    path_str = str(path)
    try:
        with os.scandir(path_str) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", path_str, e)
        return DirectoryListing(path=path_str, error=str(e))

    files: list[str] = []
    directories: list[str] = []
    links: list[str] = []

    for entry in entries:
        try:
            if is_link(entry):
                links.append(entry.path)
            elif entry.is_dir(follow_symlinks=False):
                directories.append(entry.path)
            elif entry.is_file(follow_symlinks=False):
                files.append(entry.path)
        except OSError as e:
            logger.debug("Cannot determine type of %s: %s", entry.path, e)

    return DirectoryListing(
        path=path_str,
        files=tuple(files),
        directories=tuple(directories),
        links=tuple(links),
    )
