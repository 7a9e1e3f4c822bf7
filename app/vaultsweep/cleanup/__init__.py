"""Cleanup core.

Reference extraction, candidate classification, empty folder
collapsing, path filtering and execution of a cleanup run.
"""

from vaultsweep.cleanup.classifier import CANVAS_EMPTY_THRESHOLD_BYTES, CandidateClassifier
from vaultsweep.cleanup.executor import CleanupExecutor, DeletionResult
from vaultsweep.cleanup.filters import PathFilter, merge_candidates
from vaultsweep.cleanup.folders import collapse_empty_folders
from vaultsweep.cleanup.references import (
    ReferenceSet,
    build_reference_set,
    extract_references,
)
from vaultsweep.cleanup.runner import (
    CleanupOutcome,
    CleanupStatus,
    find_candidates,
    run_cleanup,
)

__all__ = [
    "CANVAS_EMPTY_THRESHOLD_BYTES",
    "CandidateClassifier",
    "CleanupExecutor",
    "CleanupOutcome",
    "CleanupStatus",
    "DeletionResult",
    "PathFilter",
    "ReferenceSet",
    "build_reference_set",
    "collapse_empty_folders",
    "extract_references",
    "find_candidates",
    "merge_candidates",
    "run_cleanup",
]
