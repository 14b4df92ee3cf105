"""Directory scanning, sizing and deletion.

This package provides the target-folder search, best-effort size
calculation, safe recursive deletion and the orchestration that ties
scanning and sizing together.
"""

from nodecleaner.scanner.cleaner import DirectoryCleaner
from nodecleaner.scanner.models import (
    DeletionResult,
    DeletionSummary,
    FailureKind,
    RootNotFoundError,
    ScanParameters,
    ScanResult,
)
from nodecleaner.scanner.orchestrator import ScanOrchestrator, scan_for_results
from nodecleaner.scanner.sizer import SizeCalculator
from nodecleaner.scanner.targets import DEFAULT_TARGET, SYSTEM_FOLDERS, TargetSet, is_system_folder
from nodecleaner.scanner.walker import TreeScanner

__all__ = [
    "DEFAULT_TARGET",
    "SYSTEM_FOLDERS",
    "DeletionResult",
    "DeletionSummary",
    "DirectoryCleaner",
    "FailureKind",
    "RootNotFoundError",
    "ScanOrchestrator",
    "ScanParameters",
    "ScanResult",
    "SizeCalculator",
    "TargetSet",
    "TreeScanner",
    "is_system_folder",
    "scan_for_results",
]
