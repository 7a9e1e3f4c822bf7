"""Rendering of candidates and deletion results."""

import json

from rich.markup import escape
from rich.table import Table

from vaultsweep.cleanup.executor import DeletionResult
from vaultsweep.models.candidate import Candidate, CleanupReason
from vaultsweep.models.policy import DeletionDestination
from vaultsweep.utils.formatting import console, format_size, print_info, print_success, print_warning

_REASON_STYLES: dict[CleanupReason, str] = {
    CleanupReason.UNUSED_ATTACHMENT: "attachment",
    CleanupReason.EMPTY_MARKDOWN: "document",
    CleanupReason.FRONTMATTER_ONLY: "document",
    CleanupReason.EMPTY_CANVAS: "canvas",
    CleanupReason.EMPTY_FOLDER: "folder",
}


def candidate_to_dict(candidate: Candidate) -> dict[str, object]:
    """Convert a candidate to a JSON-serializable dict.

    Args:
        candidate: Candidate to convert.

    Returns:
        Mapping with path, kind, reason and size_bytes (None for folders).
    """
    node = candidate.node
    return {
        "path": node.path,
        "kind": node.kind.value,
        "reason": candidate.reason.value,
        "size_bytes": node.size_bytes,
    }


def print_candidates_table(candidates: list[Candidate], title: str = "Cleanup Candidates") -> None:
    """Display candidates as a Rich table."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="bold")
    table.add_column("Kind", width=8)
    table.add_column("Size", justify="right", width=10)
    table.add_column("Reason")

    for candidate in candidates:
        node = candidate.node
        size_str = "-" if node.is_folder else format_size(node.size_bytes)
        style = _REASON_STYLES.get(candidate.reason, "text")
        table.add_row(
            escape(node.path),
            node.kind.value,
            size_str,
            f"[{style}]{candidate.reason.value}[/]",
        )

    console.print(table)


def print_candidates_json(candidates: list[Candidate]) -> None:
    """Display candidates as JSON."""
    console.print_json(json.dumps([candidate_to_dict(c) for c in candidates]))


_DESTINATION_VERBS: dict[DeletionDestination, str] = {
    DeletionDestination.PERMANENT: "deleted",
    DeletionDestination.SYSTEM_TRASH: "moved to system trash",
    DeletionDestination.APP_TRASH: "moved to .trash",
}


def print_deletion_results(results: list[DeletionResult], destination: DeletionDestination) -> None:
    """One line per entry, then a summary."""
    verb = _DESTINATION_VERBS[destination]
    planned = [r for r in results if r.dry_run]
    if planned:
        for r in planned:
            console.print(f"  [muted]would be {verb}:[/] {escape(r.path)}")
        print_info(f"Dry-run: {len(planned)} path(s) would be deleted.")
        return

    removed = [r for r in results if r.success]
    failed = [r for r in results if not r.success]
    for r in removed:
        console.print(f"  [success]{verb}:[/] {escape(r.path)}")
    for r in failed:
        detail = escape(r.error or "unknown error")
        console.print(f"  [error]failed:[/] {escape(r.path)} [dim]({detail})[/]")

    if failed:
        print_warning(f"{len(removed)} path(s) {verb}, {len(failed)} failed.")
    else:
        print_success(f"Clean successful: {len(removed)} path(s) {verb}.")
