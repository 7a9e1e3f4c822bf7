"""Scan command implementation.

Lists the files and folders a cleanup run would remove, without
touching the vault.
"""

import asyncio
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from vaultsweep.cleanup.runner import find_candidates
from vaultsweep.cli.display import print_candidates_json, print_candidates_table
from vaultsweep.cli.types import open_vault, require_policy
from vaultsweep.utils.formatting import console, format_size, print_success

app = typer.Typer(
    help="List unused files and empty folders in a vault.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def scan_vault(
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
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", help="Limit number of results."),
    ] = None,
) -> None:
    """Show what a cleanup would remove."""
    vault, index = open_vault(vault_path)
    policy = require_policy(vault.root, config_path)

    candidates = asyncio.run(find_candidates(vault, index, policy))

    if not candidates:
        print_success("No file to clean.")
        return

    display = candidates[:limit] if limit else candidates

    if output_format == OutputFormat.JSON:
        print_candidates_json(display)
        return

    print_candidates_table(display)

    total_size = sum(c.node.size_bytes or 0 for c in candidates)
    console.print(
        f"\n[dim]Found {len(candidates)} candidates ({format_size(total_size)} total)[/dim]"
    )
    if limit and len(display) < len(candidates):
        console.print(f"[dim](showing {len(display)} of {len(candidates)}, limited to {limit})[/dim]")
