"""Policy configuration commands."""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer
from rich.markup import escape

from vaultsweep.cli.types import require_policy
from vaultsweep.core.config import ConfigError, policy_to_dict, save_policy
from vaultsweep.core.paths import get_config_path, get_vault_config_path
from vaultsweep.models.policy import CleanupPolicy
from vaultsweep.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the cleanup policy.",
    no_args_is_help=True,
)


@app.command()
def show(
    vault_path: Annotated[
        Path,
        typer.Option("--vault", "-d", help="Vault directory.", file_okay=False),
    ] = Path("."),
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Policy file to use."),
    ] = None,
) -> None:
    """Print the policy that applies to a vault."""
    policy = require_policy(vault_path.expanduser().resolve(), config_path)
    console.print(tomli_w.dumps({"cleanup": policy_to_dict(policy)}), markup=False, highlight=False)


@app.command()
def init(
    vault_path: Annotated[
        Path | None,
        typer.Option(
            "--vault",
            "-d",
            help="Write the policy into this vault instead of the user config.",
            file_okay=False,
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing policy file."),
    ] = False,
) -> None:
    """Write a default policy file."""
    target = get_vault_config_path(vault_path.expanduser().resolve()) if vault_path else get_config_path()

    if target.exists() and not force:
        print_info(f"Policy already exists: {escape(str(target))} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        saved = save_policy(CleanupPolicy(), target)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Policy written to {escape(str(saved))}")
