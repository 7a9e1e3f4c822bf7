"""Clean command implementation.

Runs a cleanup pass: finds candidates, asks for confirmation when the
policy requires it, deletes, and records the run to history.
"""

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from vaultsweep.cleanup.runner import CleanupOutcome, CleanupStatus, run_cleanup
from vaultsweep.cli.display import print_candidates_table, print_deletion_results
from vaultsweep.cli.types import open_vault, require_policy
from vaultsweep.core.history import HistoryStore
from vaultsweep.models.candidate import Candidate
from vaultsweep.models.history import HistoryEntry, RemovedItem
from vaultsweep.models.policy import CleanupPolicy, DeletionDestination
from vaultsweep.utils.formatting import print_info, print_success, print_warning

app = typer.Typer(
    help="Remove unused files and empty folders from a vault.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_vault(
    vault_path: Annotated[
        Path,
        typer.Option(
            "--vault",
            "-d",
            help="Vault directory.",
            file_okay=False,
        ),
    ] = Path("."),
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Policy file to use."),
    ] = None,
    destination: Annotated[
        DeletionDestination | None,
        typer.Option(
            "--destination",
            help="Override where deleted files go: permanent, system or app.",
            case_sensitive=False,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Clean unused files and empty folders."""
    vault, index = open_vault(vault_path)
    policy = require_policy(vault.root, config_path)

    updates: dict[str, object] = {}
    if destination is not None:
        updates["deletion_destination"] = destination
    if yes:
        updates["deletion_confirmation"] = False
    if updates:
        policy = policy.model_copy(update=updates)

    outcome = asyncio.run(run_cleanup(vault, index, policy, _confirm, dry_run=dry_run))

    if outcome.status == CleanupStatus.NOTHING_TO_CLEAN:
        print_info("No file to clean.")
        return

    if outcome.status == CleanupStatus.DECLINED:
        print_info("Aborted.")
        return

    print_deletion_results(list(outcome.results), policy.deletion_destination)

    if outcome.status == CleanupStatus.CLEANED:
        _record_history(vault.root, policy, outcome)

    if outcome.failed:
        raise typer.Exit(code=1)


def _confirm(candidates: Sequence[Candidate]) -> bool:
    """Show the deletion plan and ask the user to proceed."""
    print_candidates_table(list(candidates), title="Planned Deletions")
    return typer.confirm(
        f"\nProceed with deleting {len(candidates)} path(s)?",
        default=False,
    )


def _record_history(vault_root: Path, policy: CleanupPolicy, outcome: CleanupOutcome) -> None:
    """Record successful deletions; history failures only warn."""
    if not outcome.deleted:
        return

    reasons = {c.path: c.reason.value for c in outcome.candidates}
    entry = HistoryEntry(
        vault=str(vault_root),
        destination=policy.deletion_destination,
        removed=tuple(
            RemovedItem(path=r.path, reason=reasons.get(r.path)) for r in outcome.deleted
        ),
        failed=tuple(r.path for r in outcome.failed),
        metadata={"command": "vaultsweep clean"},
    )
    try:
        HistoryStore().append(entry)
    except (OSError, RuntimeError) as e:
        print_warning(f"Could not record to history: {escape(str(e))}")
        return
    print_success("Run recorded to history.")
