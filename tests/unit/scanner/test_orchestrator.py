"""Unit tests for scan orchestration."""

from collections.abc import Callable, Iterator
from concurrent.futures import Future
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from nodecleaner.scanner.models import RootNotFoundError, ScanParameters, ScanResult
from nodecleaner.scanner.orchestrator import ScanOrchestrator, scan_for_results
from nodecleaner.scanner.sizer import SizeCalculator
from nodecleaner.scanner.targets import TargetSet
from nodecleaner.scanner.walker import TreeScanner


class _InlineExecutor:
    """Executor stand-in that runs each task as soon as it is submitted."""

    def __init__(self, max_workers: int | None = None) -> None:
        self.max_workers = max_workers

    def __enter__(self) -> "_InlineExecutor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def submit(self, fn: Callable[[Path], ScanResult], arg: Path) -> Future[ScanResult]:
        future: Future[ScanResult] = Future()
        future.set_result(fn(arg))
        return future


class TestScanOrchestrator:
    """Tests for ScanOrchestrator.run."""

    def test_scenario(self, scenario_root: Path) -> None:
        """Results are sized and sorted largest first."""
        results = ScanOrchestrator().run(ScanParameters(root=scenario_root))

        assert [(Path(r.path), r.size_bytes) for r in results] == [
            (scenario_root / "a" / "node_modules", 3072),
            (scenario_root / "b" / "sub" / "node_modules", 100),
        ]
        assert all(isinstance(r.last_modified, datetime) for r in results)
        assert all(r.last_modified.tzinfo is not None for r in results)

    def test_min_size_filters_after_sizing(self, scenario_root: Path) -> None:
        """Small matches are dropped but still measured."""
        seen: list[ScanResult] = []

        results = ScanOrchestrator().run(
            ScanParameters(root=scenario_root, min_size=1000),
            on_match=seen.append,
        )

        assert [Path(r.path) for r in results] == [scenario_root / "a" / "node_modules"]
        assert len(seen) == 2

    def test_min_size_is_inclusive(self, scenario_root: Path) -> None:
        """A result exactly at the minimum size is kept."""
        results = ScanOrchestrator().run(ScanParameters(root=scenario_root, min_size=3072))

        assert len(results) == 1

    def test_min_size_zero_keeps_everything(self, scenario_root: Path) -> None:
        """Zero as the minimum keeps empty folders too."""
        (scenario_root / "c" / "node_modules").mkdir(parents=True)

        results = ScanOrchestrator().run(ScanParameters(root=scenario_root, min_size=0))

        assert len(results) == 3
        assert results[-1].size_bytes == 0

    def test_max_depth(self, scenario_root: Path) -> None:
        """Depth limits are passed through to the scanner."""
        results = ScanOrchestrator().run(ScanParameters(root=scenario_root, max_depth=2))

        assert [Path(r.path) for r in results] == [scenario_root / "a" / "node_modules"]

    def test_sequential_matches_parallel(self, scenario_root: Path) -> None:
        """A single worker produces the same results as a pool."""
        sequential = ScanOrchestrator(calculator=SizeCalculator(max_workers=1), max_workers=1)
        parallel = ScanOrchestrator(calculator=SizeCalculator(max_workers=4), max_workers=4)
        params = ScanParameters(root=scenario_root)

        assert sequential.run(params) == parallel.run(params)

    def test_equal_sizes_sorted_by_path(self, tmp_path: Path) -> None:
        """Ties are broken by path so output is stable."""
        for name in ("b", "a", "c"):
            (tmp_path / name / "node_modules").mkdir(parents=True)

        results = ScanOrchestrator().run(ScanParameters(root=tmp_path))

        assert [Path(r.path).parent.name for r in results] == ["a", "b", "c"]

    def test_custom_targets(self, tmp_path: Path) -> None:
        """Target names come from the parameters."""
        (tmp_path / "svc" / "bin").mkdir(parents=True)
        (tmp_path / "web" / "node_modules").mkdir(parents=True)

        results = ScanOrchestrator().run(ScanParameters(root=tmp_path, targets=TargetSet(["bin"])))

        assert [Path(r.path) for r in results] == [tmp_path / "svc" / "bin"]

    def test_uses_injected_calculator(self, scenario_root: Path) -> None:
        """Every match is measured with the given calculator."""
        calculator = MagicMock(spec=SizeCalculator)
        calculator.calculate.return_value = 7

        results = ScanOrchestrator(calculator=calculator).run(ScanParameters(root=scenario_root))

        assert calculator.calculate.call_count == 2
        assert {r.size_bytes for r in results} == {7}

    def test_matches_reported_during_walk(self, tmp_path: Path) -> None:
        """A measured match is reported before the walk moves on to the next one."""
        events: list[str] = []

        def walk(*_args: object) -> Iterator[Path]:
            for name in ("a", "b"):
                events.append(f"walk {name}")
                yield tmp_path / name / "node_modules"

        scanner = MagicMock(spec=TreeScanner)
        scanner.scan.side_effect = walk
        calculator = MagicMock(spec=SizeCalculator)
        calculator.calculate.return_value = 1

        with patch("nodecleaner.scanner.orchestrator.ThreadPoolExecutor", _InlineExecutor):
            ScanOrchestrator(scanner=scanner, calculator=calculator).run(
                ScanParameters(root=tmp_path),
                on_match=lambda result: events.append(f"found {Path(result.path).parent.name}"),
            )

        assert events == ["walk a", "found a", "walk b", "found b"]

    def test_default_calculator_is_sequential(self) -> None:
        """Matches run in parallel, so each one is sized on a single thread."""
        with patch("nodecleaner.scanner.orchestrator.SizeCalculator") as calculator_cls:
            ScanOrchestrator()

        calculator_cls.assert_called_once_with(max_workers=1)

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root raises before any work starts."""
        with pytest.raises(RootNotFoundError):
            ScanOrchestrator().run(ScanParameters(root=tmp_path / "missing"))

    def test_no_matches(self, tmp_path: Path) -> None:
        """A tree without targets yields an empty list."""
        (tmp_path / "src").mkdir()

        assert ScanOrchestrator().run(ScanParameters(root=tmp_path)) == []


class TestScanForResults:
    """Tests for the scan_for_results convenience function."""

    def test_defaults(self, scenario_root: Path) -> None:
        """Default arguments scan for node_modules without limits."""
        results = scan_for_results(scenario_root)

        assert [r.size_bytes for r in results] == [3072, 100]

    def test_all_options(self, scenario_root: Path) -> None:
        """Depth, size and targets are honored together."""
        (scenario_root / "bin").mkdir()
        seen: list[ScanResult] = []

        results = scan_for_results(
            scenario_root,
            max_depth=3,
            min_size=50,
            targets=["node_modules", "bin"],
            on_match=seen.append,
        )

        assert [r.size_bytes for r in results] == [3072, 100]
        assert len(seen) == 3

    def test_negative_depth_rejected(self, scenario_root: Path) -> None:
        """Invalid parameters are rejected before scanning."""
        with pytest.raises(ValueError, match="Max depth"):
            scan_for_results(scenario_root, max_depth=-1)
