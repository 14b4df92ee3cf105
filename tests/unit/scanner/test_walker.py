"""Unit tests for the depth-bounded tree scanner."""

import os
from pathlib import Path

import pytest
from nodecleaner.scanner.models import RootNotFoundError
from nodecleaner.scanner.targets import TargetSet
from nodecleaner.scanner.walker import TreeScanner


def _scan(root: Path, max_depth: int | None = None, targets: list[str] | None = None) -> list[Path]:
    return list(TreeScanner().scan(root, max_depth=max_depth, targets=targets))


@pytest.fixture
def depth_tree(tmp_path: Path) -> Path:
    """Tree with one node_modules at each depth from 1 to 4."""
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "x" / "node_modules").mkdir(parents=True)
    (tmp_path / "x" / "y" / "node_modules").mkdir(parents=True)
    (tmp_path / "x" / "y" / "z" / "node_modules").mkdir(parents=True)
    return tmp_path


class TestTreeScanner:
    """Tests for TreeScanner.scan."""

    def test_scenario_skips_system_folders(self, scenario_root: Path) -> None:
        """Matches under .git are never reported."""
        matches = _scan(scenario_root)

        assert matches == [
            scenario_root / "a" / "node_modules",
            scenario_root / "b" / "sub" / "node_modules",
        ]

    def test_returns_absolute_paths(self, scenario_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Relative roots still produce absolute match paths."""
        monkeypatch.chdir(scenario_root.parent)

        matches = _scan(Path("r"))

        assert all(match.is_absolute() for match in matches)
        assert matches[0].parts[-3:] == ("r", "a", "node_modules")

    @pytest.mark.parametrize(
        ("max_depth", "expected"),
        [
            (0, []),
            (1, ["node_modules"]),
            (2, ["node_modules", "x/node_modules"]),
            (3, ["node_modules", "x/node_modules", "x/y/node_modules"]),
            (4, ["node_modules", "x/node_modules", "x/y/node_modules", "x/y/z/node_modules"]),
        ],
    )
    def test_depth_limit(self, depth_tree: Path, max_depth: int, expected: list[str]) -> None:
        """A match at depth d is reported only when d <= max_depth."""
        matches = {match.relative_to(depth_tree).as_posix() for match in _scan(depth_tree, max_depth)}

        assert matches == set(expected)

    def test_unlimited_depth(self, depth_tree: Path) -> None:
        """Without a limit every level is searched."""
        assert len(_scan(depth_tree)) == 4

    def test_does_not_descend_into_matches(self, tmp_path: Path) -> None:
        """Nested targets inside a match are not reported."""
        (tmp_path / "app" / "node_modules" / "pkg" / "node_modules").mkdir(parents=True)

        assert _scan(tmp_path) == [tmp_path / "app" / "node_modules"]

    def test_denylist_beats_target_set(self, tmp_path: Path) -> None:
        """A system folder is never reported even if it is a target name."""
        (tmp_path / ".git").mkdir()
        (tmp_path / "bin").mkdir()

        assert _scan(tmp_path, targets=[".git", "bin"]) == [tmp_path / "bin"]

    def test_system_folders_match_case_insensitively(self, tmp_path: Path) -> None:
        """Differently cased system folders are still skipped."""
        (tmp_path / ".GIT" / "node_modules").mkdir(parents=True)
        (tmp_path / ".VSCode" / "node_modules").mkdir(parents=True)

        assert _scan(tmp_path) == []

    def test_target_match_is_case_insensitive(self, tmp_path: Path) -> None:
        """Target names match regardless of case."""
        (tmp_path / "proj" / "Node_Modules").mkdir(parents=True)

        assert _scan(tmp_path) == [tmp_path / "proj" / "Node_Modules"]

    def test_multiple_targets(self, tmp_path: Path) -> None:
        """Every configured target name is searched for."""
        (tmp_path / "web" / "node_modules").mkdir(parents=True)
        (tmp_path / "svc" / "bin").mkdir(parents=True)
        (tmp_path / "svc" / "obj").mkdir(parents=True)

        matches = _scan(tmp_path, targets=["node_modules", "bin", "obj"])

        assert set(matches) == {
            tmp_path / "web" / "node_modules",
            tmp_path / "svc" / "bin",
            tmp_path / "svc" / "obj",
        }

    def test_accepts_target_set(self, tmp_path: Path) -> None:
        """A prepared TargetSet is used as is."""
        (tmp_path / "dist").mkdir()

        matches = list(TreeScanner().scan(tmp_path, targets=TargetSet(["dist"])))

        assert matches == [tmp_path / "dist"]

    def test_files_named_like_targets_are_ignored(self, tmp_path: Path) -> None:
        """Only directories can match."""
        (tmp_path / "node_modules").write_text("not a directory")

        assert _scan(tmp_path) == []

    def test_siblings_visited_in_name_order(self, tmp_path: Path) -> None:
        """Traversal order is deterministic."""
        for name in ("c", "a", "b"):
            (tmp_path / name / "node_modules").mkdir(parents=True)

        assert [m.parent.name for m in _scan(tmp_path)] == ["a", "b", "c"]

    @pytest.mark.usefixtures("symlinks_supported")
    def test_symlinked_directories_are_not_followed(self, tmp_path: Path) -> None:
        """Links are neither entered nor reported."""
        outside = tmp_path / "outside"
        (outside / "node_modules").mkdir(parents=True)
        root = tmp_path / "root"
        root.mkdir()
        os.symlink(outside, root / "linked", target_is_directory=True)
        os.symlink(outside / "node_modules", root / "node_modules", target_is_directory=True)

        assert _scan(root) == []

    @pytest.mark.usefixtures("symlinks_supported")
    def test_symlink_cycle_terminates(self, tmp_path: Path) -> None:
        """A link pointing back up the tree does not loop forever."""
        (tmp_path / "a" / "node_modules").mkdir(parents=True)
        os.symlink(tmp_path, tmp_path / "a" / "loop", target_is_directory=True)

        assert _scan(tmp_path) == [tmp_path / "a" / "node_modules"]

    def test_unreadable_subdirectory_is_skipped(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An unreadable directory only skips its own subtree."""
        (tmp_path / "locked" / "node_modules").mkdir(parents=True)
        (tmp_path / "open" / "node_modules").mkdir(parents=True)
        locked = str(tmp_path / "locked")
        real_scandir = os.scandir

        def scandir(path: str):  # type: ignore[no-untyped-def]
            if str(path) == locked:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr("nodecleaner.scanner.listing.os.scandir", scandir)

        assert _scan(tmp_path) == [tmp_path / "open" / "node_modules"]

    def test_missing_root_fails_immediately(self, tmp_path: Path) -> None:
        """The root check happens before iteration starts."""
        with pytest.raises(RootNotFoundError, match="Directory not found"):
            TreeScanner().scan(tmp_path / "missing")

    def test_file_root_fails(self, tmp_path: Path) -> None:
        """A file is not a valid scan root."""
        root_file = tmp_path / "file.txt"
        root_file.write_text("x")

        with pytest.raises(RootNotFoundError):
            TreeScanner().scan(root_file)

    def test_scan_is_lazy(self, depth_tree: Path) -> None:
        """Matches are produced one at a time."""
        matches = TreeScanner().scan(depth_tree)

        first = next(matches)

        assert first == depth_tree / "node_modules"
        assert len(list(matches)) == 3

    def test_empty_root(self, tmp_path: Path) -> None:
        """An empty root yields nothing."""
        assert _scan(tmp_path) == []
