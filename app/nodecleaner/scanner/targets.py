"""Target folder names and the system folder denylist.

This module defines which directory names the scanner looks for and
which directory names it must never enter or report, regardless of
the configured targets.
"""

from collections.abc import Iterable, Iterator

DEFAULT_TARGET: str = "node_modules"

# Version-control, editor and IDE metadata folders (case-insensitive).
# These are never traversed and never matched, even when listed as targets.
SYSTEM_FOLDERS: frozenset[str] = frozenset(
    {
        ".git",
        ".github",
        ".hg",
        ".idea",
        ".svn",
        ".vs",
        ".vscode",
    }
)


def is_system_folder(name: str) -> bool:
    """Check if a directory name is on the system folder denylist.

    Args:
        name: Directory basename (not a full path).

    Returns:
        True if the folder must be skipped during scanning.
    """
    return name.casefold() in SYSTEM_FOLDERS


class TargetSet:
    """Case-insensitive set of folder names to search for.

    Names keep the spelling of their first occurrence for display;
    membership tests ignore case. An empty or missing name list falls
    back to the single default target.

    Args:
        names: Folder names to match. Blank entries are ignored.
    """

    __slots__ = ("_folded", "_names")

    def __init__(self, names: Iterable[str] | None = None) -> None:
        ordered: dict[str, str] = {}
        for name in names or ():
            stripped = name.strip()
            if stripped:
                ordered.setdefault(stripped.casefold(), stripped)

        if not ordered:
            ordered[DEFAULT_TARGET.casefold()] = DEFAULT_TARGET

        self._names: tuple[str, ...] = tuple(ordered.values())
        self._folded: frozenset[str] = frozenset(ordered)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._folded

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TargetSet):
            return NotImplemented
        return self._folded == other._folded

    def __hash__(self) -> int:
        return hash(self._folded)

    def __repr__(self) -> str:
        return f"TargetSet({list(self._names)!r})"

    def label(self) -> str:
        """Return the target names joined for display (e.g. "node_modules, bin")."""
        return ", ".join(self._names)
