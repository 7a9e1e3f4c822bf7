"""History command: list recorded cleanup runs."""

import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from vaultsweep.core.history import HistoryStore
from vaultsweep.models.history import HistoryEntry
from vaultsweep.utils.formatting import console, print_info

app = typer.Typer(
    help="List recorded cleanup runs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_history(
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Maximum number of runs to show."),
    ] = 20,
    vault_path: Annotated[
        Path | None,
        typer.Option("--vault", "-d", help="Only runs on this vault.", file_okay=False),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print runs as JSON."),
    ] = False,
) -> None:
    """Show recorded cleanup runs, newest first.

    Examples:
        vaultsweep history -n 5
        vaultsweep history --vault ~/notes --json
    """
    entries = HistoryStore().recent()
    if vault_path is not None:
        vault = str(vault_path.expanduser().resolve())
        entries = [entry for entry in entries if entry.vault == vault]
    entries = entries[:limit]

    if not entries:
        print_info("No history entries found.")
        return

    if json_output:
        typer.echo(json.dumps([entry.to_dict() for entry in entries], indent=2))
        return

    console.print(_history_table(entries))


def _history_table(entries: list[HistoryEntry]) -> Table:
    table = Table(title="Cleanup History", header_style="bold_header", border_style="border")
    table.add_column("Run", style="dim", no_wrap=True)
    table.add_column("When", style="info", no_wrap=True)
    table.add_column("Vault")
    table.add_column("To", style="muted")
    table.add_column("Removed")
    table.add_column("Failed", justify="right")

    for entry in entries:
        table.add_row(
            entry.id[:8],
            _short_timestamp(entry.timestamp),
            escape(entry.vault),
            entry.destination.value,
            _summarize_items(entry),
            f"[error]{len(entry.failed)}[/]" if entry.failed else "0",
        )
    return table


def _summarize_items(entry: HistoryEntry) -> str:
    """Count removed entries per reason, e.g. ``3 unused_attachment, 1 empty_markdown``."""
    counts = Counter(item.reason or "unknown" for item in entry.removed)
    return ", ".join(f"{count} {reason}" for reason, count in counts.most_common())


def _short_timestamp(iso_timestamp: str) -> str:
    try:
        return datetime.fromisoformat(iso_timestamp).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return iso_timestamp
