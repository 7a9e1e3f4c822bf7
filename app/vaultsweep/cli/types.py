"""Shared helpers for CLI commands."""

from pathlib import Path

import typer
from rich.markup import escape

from vaultsweep.core.config import ConfigError, resolve_policy
from vaultsweep.models.policy import CleanupPolicy
from vaultsweep.utils.formatting import print_error, print_info
from vaultsweep.vault.index import LocalMetadataIndex
from vaultsweep.vault.local import LocalVault


def open_vault(vault_path: Path) -> tuple[LocalVault, LocalMetadataIndex]:
    """Open a vault directory and its metadata index.

    Raises:
        typer.Exit: If the path is not a directory.
    """
    vault = LocalVault(vault_path)
    try:
        vault.refresh()
    except NotADirectoryError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e
    return vault, LocalMetadataIndex(vault)


def require_policy(vault_root: Path, config_path: Path | None = None) -> CleanupPolicy:
    """Load the policy for a vault or exit with a helpful error message.

    Raises:
        typer.Exit: If a policy file exists but cannot be loaded.
    """
    try:
        policy, _ = resolve_policy(vault_root, config_path)
    except ConfigError as e:
        print_error(escape(str(e)))
        print_info("Run 'vaultsweep config init' to write a default policy.")
        raise typer.Exit(code=1) from e
    return policy
