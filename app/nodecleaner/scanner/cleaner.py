"""Recursive deletion of matched directories.

Deletes bottom-up, opens up read-only files and directories before
emptying them, and removes links as links so a junction or symlink
inside a dependency folder never takes its target down with it.
"""

import logging
import os
import stat
from collections.abc import Callable, Iterable
from pathlib import Path

from nodecleaner.scanner.listing import is_link, is_link_path
from nodecleaner.scanner.models import (
    DeletionResult,
    DeletionSummary,
    FailureKind,
    ScanResult,
)

logger = logging.getLogger(__name__)

DeletionCallback = Callable[[DeletionResult], None]


class DirectoryCleaner:
    """Deletes matched directories one at a time.

    Failures are isolated per directory: each call returns a
    DeletionResult and a batch keeps going after a failed item.

    Attributes:
        _dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the DirectoryCleaner.

        Args:
            dry_run: If True, report what would be deleted without deleting.
        """
        self._dry_run = dry_run

    def delete(
        self,
        results: Iterable[ScanResult],
        on_result: DeletionCallback | None = None,
    ) -> DeletionSummary:
        """Delete the directories of several scan results in order.

        Each deletion finishes before the next one starts.

        Args:
            results: Scan results selected for deletion.
            on_result: Optional callback fired after each directory.

        Returns:
            DeletionSummary holding one DeletionResult per input.
        """
        outcomes: list[DeletionResult] = []

        for result in results:
            outcome = self.delete_directory(result.path, size_bytes=result.size_bytes)
            outcomes.append(outcome)
            if on_result:
                on_result(outcome)

        return DeletionSummary(results=tuple(outcomes))

    def delete_directory(self, path: str | Path, size_bytes: int = 0) -> DeletionResult:
        """Delete a single directory and everything beneath it.

        Args:
            path: Directory to delete.
            size_bytes: Size recorded at scan time, reported back as freed.

        Returns:
            DeletionResult indicating success or the failure category.
        """
        path_str = str(path)
        target = Path(path_str)

        if not target.is_dir() and not is_link_path(target):
            return DeletionResult(
                path=path_str,
                success=False,
                size_bytes=size_bytes,
                failure=FailureKind.NOT_FOUND,
                reason=f"Directory not found: {path_str}",
            )

        if self._dry_run:
            logger.info("Dry-run: would delete %s", path_str)
            return DeletionResult(path=path_str, success=True, size_bytes=size_bytes, dry_run=True)

        try:
            if is_link_path(target):
                _remove_link(path_str, is_dir_link=target.is_junction() or target.is_dir())
            else:
                _remove_tree(path_str)
        except FileNotFoundError as e:
            return self._failure(path_str, size_bytes, FailureKind.NOT_FOUND, f"Not found: {e}")
        except PermissionError as e:
            return self._failure(path_str, size_bytes, FailureKind.ACCESS_DENIED, f"Access denied: {e}")
        except OSError as e:
            return self._failure(path_str, size_bytes, FailureKind.IO_ERROR, f"IO error: {e}")
        except Exception as e:
            logger.exception("Unexpected error deleting %s", path_str)
            return self._failure(path_str, size_bytes, FailureKind.UNEXPECTED, f"Unexpected error: {e}")

        logger.info("Deleted %s", path_str)
        return DeletionResult(path=path_str, success=True, size_bytes=size_bytes)

    @staticmethod
    def _failure(path: str, size_bytes: int, kind: FailureKind, reason: str) -> DeletionResult:
        logger.warning("Failed to delete %s: %s", path, reason)
        return DeletionResult(
            path=path,
            success=False,
            size_bytes=size_bytes,
            failure=kind,
            reason=reason,
        )


def _remove_tree(path: str) -> None:
    """Remove a real directory post-order: subdirectories, then files, then itself.

    Removing entries needs write access to the directory, so owner rwx
    bits are added first when any is missing.
    The original mode is put back if the removal fails.

    Raises:
        OSError: On the first entry that cannot be removed.
    """
    mode = stat.S_IMODE(os.lstat(path).st_mode)
    opened = False

    if (mode & stat.S_IRWXU) != stat.S_IRWXU:
        os.chmod(path, mode | stat.S_IRWXU)
        opened = True

    try:
        _remove_contents(path)
        os.rmdir(path)
    except OSError:
        if opened:
            _restore_mode(path, mode)
        raise


def _remove_contents(path: str) -> None:
    with os.scandir(path) as it:
        entries = list(it)

    files: list[str] = []
    for entry in entries:
        if is_link(entry):
            if entry.is_junction() or entry.is_dir():
                _remove_link(entry.path, is_dir_link=True)
            else:
                files.append(entry.path)
        elif entry.is_dir(follow_symlinks=False):
            _remove_tree(entry.path)
        else:
            files.append(entry.path)

    for file_path in files:
        _remove_file(file_path)


def _restore_mode(path: str, mode: int) -> None:
    try:
        os.chmod(path, mode)
    except OSError as e:
        logger.debug("Could not restore mode of %s: %s", path, e)


def _remove_link(path: str, *, is_dir_link: bool) -> None:
    """Remove a symlink or junction without touching its target.

    Windows removes directory links and junctions with rmdir; everywhere
    else a link is unlinked.
    """
    if os.name == "nt" and is_dir_link:
        os.rmdir(path)
    else:
        os.unlink(path)


def _remove_file(path: str) -> None:
    """Remove a file, clearing its read-only permission first if needed.

    If removal fails after the permission was cleared, the original
    mode is put back before the error propagates.
    """
    mode = stat.S_IMODE(os.lstat(path).st_mode)
    cleared = False

    if not mode & stat.S_IWRITE and not os.path.islink(path):
        os.chmod(path, mode | stat.S_IWRITE)
        cleared = True

    try:
        os.unlink(path)
    except OSError:
        if cleared:
            _restore_mode(path, mode)
        raise
