"""vaultsweep command line.

Registers the command groups and sets up logging before any of them
runs.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from vaultsweep import __version__
from vaultsweep.cli.commands import clean, config, history, scan
from vaultsweep.utils.formatting import err_console

# -v for run summaries, -vv for per-file decisions
_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

app = typer.Typer(
    name="vaultsweep",
    help="Find and remove unused attachments, empty notes and empty folders in a vault.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)
app.add_typer(scan.app, name="scan")
app.add_typer(clean.app, name="clean")
app.add_typer(config.app, name="config")
app.add_typer(history.app, name="history")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"vaultsweep {__version__}")
        raise typer.Exit()


def configure_logging(verbosity: int) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbosity: Number of -v flags given (0 logs warnings only).
    """
    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    handler = RichHandler(console=err_console, show_path=False, show_time=verbosity > 1)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


@app.callback()
def main(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Log more detail (repeat for per-file decisions).",
        ),
    ] = 0,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_show_version,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """vaultsweep - clean unused files out of a note vault.

    Attachments nothing links to, empty notes, empty canvases and empty
    folders are found and removed according to the cleanup policy.
    """
    configure_logging(verbose)


if __name__ == "__main__":
    app()
