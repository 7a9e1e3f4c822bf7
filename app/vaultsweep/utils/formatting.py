"""Console output helpers.

Results go to stdout; warnings and errors go to stderr so scripted
``--format json`` output stays parseable.
"""

import sys

from rich.console import Console

from vaultsweep.core.theme import get_theme

_SIZE_UNITS = ("KB", "MB", "GB", "TB")


def _make_console(*, stderr: bool = False) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    # Hex theme colors need truecolor on a terminal; Rich picks otherwise
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def format_size(size_bytes: int | None) -> str:
    """Human-readable size, e.g. ``512 B`` or ``4.9 KB``."""
    if not size_bytes:
        return "0 B"
    if abs(size_bytes) < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in _SIZE_UNITS[:-1]:
        if abs(size) < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_SIZE_UNITS[-1]}"


def print_info(message: str) -> None:
    """Print an info message to stdout."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success message to stdout."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[error]Error:[/] {message}")
