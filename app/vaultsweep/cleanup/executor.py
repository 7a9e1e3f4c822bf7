"""Cleanup execution.

Deletes the final candidate set one entry at a time. A failing entry
is recorded and the remaining entries are still attempted.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from vaultsweep.models.candidate import Candidate
from vaultsweep.models.node import VaultNode
from vaultsweep.models.policy import DeletionDestination
from vaultsweep.vault.base import Vault
from vaultsweep.vault.protected import is_protected_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of deleting a single vault entry.

    Attributes:
        path: Vault-relative path that was operated on.
        success: Whether the operation completed successfully.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (nothing deleted).
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False


def deletion_order(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Order candidates files first, then folders deepest first."""
    files = [c for c in candidates if not c.node.is_folder]
    folders = [c for c in candidates if c.node.is_folder]
    folders.sort(key=lambda c: (-c.node.depth, c.path))
    return files + folders


class CleanupExecutor:
    """Deletes candidates according to a deletion destination.

    Folders are only removed while empty; a folder whose content could
    not be removed stays in place and is reported as failed.

    Args:
        vault: Vault to delete from.
        destination: Permanent deletion, system trash or vault trash.
        dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(
        self,
        vault: Vault,
        destination: DeletionDestination,
        dry_run: bool = False,
    ) -> None:
        self._vault = vault
        self._destination = destination
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    async def execute(self, candidates: Iterable[Candidate]) -> list[DeletionResult]:
        """Delete candidates and return one result per candidate.

        Args:
            candidates: Final deletion set.

        Returns:
            Results in deletion order.
        """
        results: list[DeletionResult] = []
        for candidate in deletion_order(candidates):
            results.append(await self._delete_single(candidate.node))
        return results

    async def _delete_single(self, node: VaultNode) -> DeletionResult:
        if node.is_root or is_protected_path(node.path):
            return DeletionResult(
                path=node.path,
                success=False,
                error=f"Protected path cannot be deleted: {node.path}",
            )

        if self._dry_run:
            logger.info("Dry-run: would delete %s", node.path)
            return DeletionResult(path=node.path, success=True, dry_run=True)

        try:
            if self._destination == DeletionDestination.PERMANENT:
                await self._vault.delete(node)
            elif self._destination == DeletionDestination.SYSTEM_TRASH:
                await self._vault.trash(node, system=True)
            else:
                await self._vault.trash(node, system=False)
        except OSError as e:
            logger.warning("Failed to delete %s: %s", node.path, e)
            return DeletionResult(path=node.path, success=False, error=str(e))

        logger.info("%s cleaned", node.path)
        return DeletionResult(path=node.path, success=True)
