"""Scan orchestration.

Composes the tree scanner and the size calculator into a single call
that returns size-sorted scan results ready for display.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, as_completed, wait
from pathlib import Path

from nodecleaner.scanner.models import ScanParameters, ScanResult
from nodecleaner.scanner.sizer import SizeCalculator, get_last_modified
from nodecleaner.scanner.targets import TargetSet
from nodecleaner.scanner.walker import TreeScanner

logger = logging.getLogger(__name__)

MatchCallback = Callable[[ScanResult], None]


class ScanOrchestrator:
    """Runs a scan and measures every match.

    Traversal runs on the calling thread. Each match is handed to a
    thread pool for sizing as soon as it is found, and finished
    measurements are reported while the walk is still running.

    Args:
        scanner: Tree scanner to use. Defaults to a new TreeScanner.
        calculator: Size calculator to use. Defaults to a sequential
            SizeCalculator; matches themselves are measured in parallel.
        max_workers: Matches measured concurrently. Defaults to the CPU count.
    """

    def __init__(
        self,
        scanner: TreeScanner | None = None,
        calculator: SizeCalculator | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._scanner = scanner or TreeScanner()
        self._calculator = calculator or SizeCalculator(max_workers=1)
        self._max_workers = max_workers or os.cpu_count() or 1

    def run(self, params: ScanParameters, on_match: MatchCallback | None = None) -> list[ScanResult]:
        """Scan, measure and filter.

        The minimum-size filter is applied only after every match has been
        measured; it never prunes the traversal.

        Args:
            params: Scan parameters.
            on_match: Optional callback fired on the calling thread for each
                measured match, before filtering.

        Returns:
            Results at or above the minimum size, largest first.

        Raises:
            RootNotFoundError: If the scan root does not exist.
        """
        matches = self._scanner.scan(params.root, params.max_depth, params.targets)

        measured: list[ScanResult] = []

        def collect(done: Iterable[Future[ScanResult]]) -> None:
            for future in done:
                result = future.result()
                measured.append(result)
                if on_match:
                    on_match(result)

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            pending: set[Future[ScanResult]] = set()
            for match in matches:
                pending.add(executor.submit(self._measure, match))
                done, pending = wait(pending, timeout=0, return_when=FIRST_COMPLETED)
                collect(done)
            collect(as_completed(pending))

        results = [r for r in measured if params.min_size is None or r.size_bytes >= params.min_size]
        results.sort(key=lambda r: (-r.size_bytes, r.path))

        logger.debug(
            "Scan of %s found %d match(es), %d after size filter",
            params.root,
            len(measured),
            len(results),
        )
        return results

    def _measure(self, directory: Path) -> ScanResult:
        return ScanResult(
            path=str(directory),
            size_bytes=self._calculator.calculate(directory),
            last_modified=get_last_modified(directory),
        )


def scan_for_results(
    root: str | Path,
    max_depth: int | None = None,
    min_size: int | None = None,
    targets: Iterable[str] | None = None,
    on_match: MatchCallback | None = None,
) -> list[ScanResult]:
    """Run a scan with default components.

    Args:
        root: Directory to scan.
        max_depth: Depth limit for matches, or None.
        min_size: Minimum result size in bytes, or None.
        targets: Folder names to look for; defaults to the default target.
        on_match: Optional callback per measured match.

    Returns:
        Filtered results, largest first.

    Raises:
        RootNotFoundError: If root does not exist.
    """
    params = ScanParameters(
        root=Path(root),
        max_depth=max_depth,
        min_size=min_size,
        targets=TargetSet(targets),
    )
    return ScanOrchestrator().run(params, on_match=on_match)
