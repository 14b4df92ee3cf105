"""Scanner domain models.

This module defines the immutable data structures passed between the
tree scanner, the size calculator, the directory cleaner and the
presentation layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from nodecleaner.scanner.targets import TargetSet


class RootNotFoundError(FileNotFoundError):
    """Raised when the scan root does not exist or is not a directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = str(root)
        super().__init__(f"Directory not found: {self.root}")


class FailureKind(str, Enum):
    """Reason category for a failed deletion.

    Attributes:
        NOT_FOUND: The directory vanished before it could be deleted.
        ACCESS_DENIED: The OS refused access to an entry.
        IO_ERROR: Any other I/O failure (locked file, busy mount point).
        UNEXPECTED: A non-I/O error; the original message is preserved.
    """

    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    IO_ERROR = "io_error"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True, slots=True)
class ScanResult:
    """A matched directory with its measured size.

    Attributes:
        path: Absolute path of the matched directory.
        size_bytes: Total size of all files beneath it, in bytes.
        last_modified: Modification time of the directory itself (UTC).
    """

    path: str
    size_bytes: int
    last_modified: datetime

    def __post_init__(self) -> None:
        """Validate scan result data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size must be non-negative, got {self.size_bytes}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "path": self.path,
            "size_bytes": self.size_bytes,
            "last_modified": self.last_modified.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class ScanParameters:
    """Inputs of a single scan run.

    Attributes:
        root: Directory to start scanning from.
        max_depth: Deepest level at which a match may be reported
            (the root's direct children are level 1). None means unlimited.
        min_size: Results smaller than this many bytes are dropped after
            sizing. None disables the filter.
        targets: Folder names to search for.
    """

    root: Path
    max_depth: int | None = None
    min_size: int | None = None
    targets: TargetSet = field(default_factory=TargetSet)

    def __post_init__(self) -> None:
        """Validate scan parameters after initialization."""
        if self.max_depth is not None and self.max_depth < 0:
            msg = f"Max depth must be >= 0, got {self.max_depth}"
            raise ValueError(msg)
        if self.min_size is not None and self.min_size < 0:
            msg = f"Minimum size must be >= 0, got {self.min_size}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Outcome of deleting a single matched directory.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the directory is gone.
        size_bytes: Size recorded at scan time, counted as freed on success.
        failure: Failure category, None on success.
        reason: Human-readable failure reason, None on success.
        dry_run: Whether this was a dry-run (nothing was deleted).
    """

    path: str
    success: bool
    size_bytes: int = 0
    failure: FailureKind | None = None
    reason: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class DeletionSummary:
    """Aggregate of a batch deletion run."""

    results: tuple[DeletionResult, ...] = ()

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def bytes_freed(self) -> int:
        """Bytes freed by successful deletions (dry-runs free nothing)."""
        return sum(r.size_bytes for r in self.results if r.success and not r.dry_run)
