"""Depth-bounded search for target directories.

Walks a directory tree one level at a time and yields every directory
whose name is in the target set. Matched directories are never entered,
so nested targets inside a large dependency tree are not reported twice.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from nodecleaner.scanner.listing import list_directory
from nodecleaner.scanner.models import RootNotFoundError
from nodecleaner.scanner.targets import TargetSet, is_system_folder

logger = logging.getLogger(__name__)


class TreeScanner:
    """Finds target directories beneath a root directory.

    Traversal uses an explicit stack, so deep trees cannot exhaust the
    interpreter's recursion limit. Symlinks and junctions are neither
    entered nor reported, which rules out cycles.
    """

    def scan(
        self,
        root: str | Path,
        max_depth: int | None = None,
        targets: TargetSet | Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """Start a scan and return a lazy iterator over matched directories.

        The root is checked before the iterator is returned, so a missing
        root fails immediately rather than on first iteration. Every other
        error (unreadable subdirectories, entries vanishing mid-scan) only
        skips the affected subtree.

        Args:
            root: Directory to start from.
            max_depth: Deepest level a match may sit at; the root's direct
                children are level 1. None means unlimited.
            targets: Folder names to look for. Defaults to the default target.

        Returns:
            Single-use iterator of absolute paths of matched directories.

        Raises:
            RootNotFoundError: If root does not exist or is not a directory.
        """
        root_path = Path(root).expanduser()
        if not root_path.is_dir():
            raise RootNotFoundError(root_path)

        target_set = targets if isinstance(targets, TargetSet) else TargetSet(targets)
        logger.debug(
            "Scanning %s for [%s] (max depth: %s)",
            root_path,
            target_set.label(),
            "unlimited" if max_depth is None else max_depth,
        )
        return self._walk(root_path.absolute(), max_depth, target_set)

    def _walk(
        self,
        root: Path,
        max_depth: int | None,
        targets: TargetSet,
    ) -> Iterator[Path]:
        """Depth-first traversal yielding matches as they are found.

        Args:
            root: Absolute root directory (depth 0).
            max_depth: Depth limit, or None.
            targets: Folder names to match.

        Yields:
            Paths of matched directories.
        """
        stack: list[tuple[str, int]] = [(str(root), 0)]

        while stack:
            current, depth = stack.pop()
            if max_depth is not None and depth > max_depth:
                continue

            listing = list_directory(current)
            if listing.skipped:
                continue

            children: list[tuple[str, int]] = []
            for child in listing.directories:
                name = os.path.basename(child)

                # Denylist wins over the target set
                if is_system_folder(name):
                    continue

                if name in targets:
                    if max_depth is None or depth + 1 <= max_depth:
                        yield Path(child)
                    continue

                children.append((child, depth + 1))

            # Reversed so siblings are visited in name order
            stack.extend(reversed(children))
