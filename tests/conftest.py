"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

FileWriter = Callable[[Path, int], Path]


def write_file(path: Path, size: int) -> Path:
    """Create a file of exactly ``size`` bytes, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def make_file() -> FileWriter:
    """Factory for files of a given size."""
    return write_file


@pytest.fixture
def symlinks_supported(tmp_path: Path) -> None:
    """Skip the test if the platform or user cannot create directory symlinks."""
    probe_target = tmp_path / "_probe_target"
    probe_target.mkdir()
    probe_link = tmp_path / "_probe_link"
    try:
        os.symlink(probe_target, probe_link, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("Directory symlinks are not supported here")
    probe_link.unlink()
    probe_target.rmdir()


@pytest.fixture
def scenario_root(tmp_path: Path) -> Path:
    """Build the reference tree used by end-to-end scan tests.

    Layout::

        r/a/node_modules/         1024 + 2048 + 0 bytes   (depth 2)
        r/.git/node_modules/      500 bytes               (denylisted)
        r/b/sub/node_modules/     100 bytes               (depth 3)
    """
    root = tmp_path / "r"
    write_file(root / "a" / "node_modules" / "one.js", 1024)
    write_file(root / "a" / "node_modules" / "pkg" / "two.js", 2048)
    write_file(root / "a" / "node_modules" / "empty.js", 0)
    write_file(root / ".git" / "node_modules" / "hidden.js", 500)
    write_file(root / "b" / "sub" / "node_modules" / "small.js", 100)
    write_file(root / "b" / "README.md", 42)
    return root


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config file at a fresh temporary location for every test."""
    config_path = tmp_path_factory.mktemp("config") / "config.json"
    monkeypatch.setenv("NODECLEANER_CONFIG", str(config_path))
    return config_path
