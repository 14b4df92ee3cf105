"""Best-effort disk usage of a directory tree.

Sizes are the sum of regular file lengths. Unreadable entries count as
zero, links are never followed, and the calculation never raises.
"""

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from pathlib import Path

from nodecleaner.scanner.listing import DirectoryListing, list_directory

logger = logging.getLogger(__name__)

_EPOCH = datetime.fromtimestamp(0, tz=UTC)

SizeMapper = Callable[[Callable[[str], int | None], Iterable[str]], Iterator[int | None]]


def file_size(path: str) -> int | None:
    """Return the length of a file, or None if it cannot be read.

    Uses lstat so a link that slipped through is measured as the link
    itself, never as its target.
    """
    try:
        return os.lstat(path).st_size
    except OSError as e:
        logger.debug("Cannot read size of %s: %s", path, e)
        return None


def get_last_modified(path: str | Path) -> datetime:
    """Return the modification time of a path as an aware UTC datetime.

    Falls back to the Unix epoch if the path cannot be read.
    """
    try:
        return datetime.fromtimestamp(os.stat(path).st_mtime, tz=UTC)
    except OSError as e:
        logger.debug("Cannot read mtime of %s: %s", path, e)
        return _EPOCH


class SizeCalculator:
    """Computes the total size of all files beneath a directory.

    Directory listing is sequential; the per-file length lookups of each
    directory are spread over a thread pool. The result is a plain sum,
    so it does not depend on lookup order or worker count.

    Args:
        max_workers: Threads used for file length lookups. Defaults to
            the CPU count; 1 disables the pool entirely.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        self._max_workers = max_workers if max_workers is not None else (os.cpu_count() or 1)
        if self._max_workers < 1:
            msg = f"max_workers must be >= 1, got {self._max_workers}"
            raise ValueError(msg)

    def calculate(self, directory: str | Path) -> int:
        """Return the total size in bytes of every file beneath directory.

        Symlinks and junctions contribute nothing and are not followed.
        Returns 0 if the directory itself cannot be listed.

        Args:
            directory: Directory to measure.

        Returns:
            Non-negative byte count.
        """
        top = list_directory(directory)
        if top.skipped:
            return 0

        if self._max_workers == 1:
            return self._sum_tree(top, map)

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            return self._sum_tree(top, executor.map)

    @staticmethod
    def _sum_tree(top: DirectoryListing, mapper: SizeMapper) -> int:
        """Walk the tree below an already-listed directory and sum file sizes.

        Args:
            top: Listing of the directory being measured.
            mapper: ``map`` or ``Executor.map`` used for file length lookups.

        Returns:
            Total bytes.
        """
        total = 0
        pending: list[DirectoryListing] = [top]

        while pending:
            listing = pending.pop()
            total += sum(size for size in mapper(file_size, listing.files) if size is not None)

            for subdir in listing.directories:
                child = list_directory(subdir)
                if not child.skipped:
                    pending.append(child)

        return total
