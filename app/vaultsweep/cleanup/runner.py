"""Cleanup run orchestration.

Wires the reference extractor, classifier, folder collapser, path
filter and executor into a single asynchronous run.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from vaultsweep.cleanup.classifier import CandidateClassifier
from vaultsweep.cleanup.executor import CleanupExecutor, DeletionResult
from vaultsweep.cleanup.filters import PathFilter, merge_candidates
from vaultsweep.cleanup.folders import collapse_empty_folders
from vaultsweep.cleanup.references import extract_references
from vaultsweep.models.candidate import Candidate, CleanupReason
from vaultsweep.models.policy import CleanupPolicy
from vaultsweep.vault.base import MetadataCache, Vault

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[Sequence[Candidate]], bool | Awaitable[bool]]


class CleanupStatus(str, Enum):
    """How a cleanup run ended.

    Attributes:
        NOTHING_TO_CLEAN: No candidates were found.
        CLEANED: Deletions were carried out (some may have failed).
        DECLINED: The user declined the confirmation.
        DRY_RUN: Candidates were reported without deleting anything.
    """

    NOTHING_TO_CLEAN = "nothing_to_clean"
    CLEANED = "cleaned"
    DECLINED = "declined"
    DRY_RUN = "dry_run"


@dataclass(frozen=True, slots=True)
class CleanupOutcome:
    """End-of-run summary.

    Attributes:
        status: How the run ended.
        candidates: Final deletion set.
        results: Per-entry deletion results (empty unless deletions ran).
    """

    status: CleanupStatus
    candidates: tuple[Candidate, ...] = ()
    results: tuple[DeletionResult, ...] = field(default_factory=tuple)

    @property
    def deleted(self) -> list[DeletionResult]:
        return [r for r in self.results if r.success and not r.dry_run]

    @property
    def failed(self) -> list[DeletionResult]:
        return [r for r in self.results if not r.success]

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)


async def find_candidates(
    vault: Vault,
    cache: MetadataCache,
    policy: CleanupPolicy,
) -> list[Candidate]:
    """Compute the final deletion set without touching the vault.

    Args:
        vault: Vault to inspect.
        cache: Host metadata (link graph, document structure).
        policy: Cleanup policy.

    Returns:
        Candidates that passed the path filter, files before folders.
    """
    references = await extract_references(vault, cache)

    path_filter = PathFilter(policy.excluded_folders, policy.exclude_include)
    classifier = CandidateClassifier(policy)
    file_candidates = path_filter.apply(classifier.classify(vault.get_files(), references, cache))

    folder_candidates: list[Candidate] = []
    if policy.remove_folders:
        # Files are deleted before folders, so their folders count as emptied
        removed = {c.path for c in file_candidates}
        folders = [node for node in vault.get_all_loaded_files() if node.is_folder]
        folder_candidates = path_filter.apply(
            Candidate(node=folder, reason=CleanupReason.EMPTY_FOLDER)
            for folder in collapse_empty_folders(folders, removed)
        )

    candidates = merge_candidates(file_candidates, folder_candidates)
    logger.debug(
        "%d file and %d folder candidates after path filter",
        len(file_candidates),
        len(folder_candidates),
    )
    return candidates


async def run_cleanup(
    vault: Vault,
    cache: MetadataCache,
    policy: CleanupPolicy,
    confirm: ConfirmCallback | None = None,
    *,
    dry_run: bool = False,
) -> CleanupOutcome:
    """Run one cleanup pass over a vault.

    When the policy asks for confirmation, ``confirm`` receives the
    candidate list and deletions only happen if it returns True (it may
    be a coroutine function).

    Args:
        vault: Vault to clean.
        cache: Host metadata (link graph, document structure).
        policy: Cleanup policy.
        confirm: Confirmation callback, required when
            ``policy.deletion_confirmation`` is set and not a dry-run.
        dry_run: Report what would be deleted without deleting.

    Returns:
        CleanupOutcome describing how the run ended.

    Raises:
        ValueError: If there is something to delete, confirmation is
            required and no callback is given.
    """
    candidates = await find_candidates(vault, cache, policy)
    if not candidates:
        logger.info("No file to clean")
        return CleanupOutcome(status=CleanupStatus.NOTHING_TO_CLEAN)

    if policy.deletion_confirmation and confirm is None and not dry_run:
        msg = "Policy requires confirmation but no confirm callback was given"
        raise ValueError(msg)

    executor = CleanupExecutor(vault, policy.deletion_destination, dry_run=dry_run)

    if dry_run:
        results = await executor.execute(candidates)
        return CleanupOutcome(
            status=CleanupStatus.DRY_RUN,
            candidates=tuple(candidates),
            results=tuple(results),
        )

    if policy.deletion_confirmation and confirm is not None:
        decision = confirm(candidates)
        if inspect.isawaitable(decision):
            decision = await decision
        if not decision:
            logger.info("Cleanup declined, %d candidates kept", len(candidates))
            return CleanupOutcome(status=CleanupStatus.DECLINED, candidates=tuple(candidates))

    results = await executor.execute(candidates)
    outcome = CleanupOutcome(
        status=CleanupStatus.CLEANED,
        candidates=tuple(candidates),
        results=tuple(results),
    )
    logger.info(
        "Cleaned %d entries (%d failed)", outcome.deleted_count, len(outcome.failed)
    )
    return outcome
