"""Subprocess helpers for the desktop trash tools."""

import shutil
import subprocess
from dataclasses import dataclass

# Preference order; the path to trash is appended as the last argument
TRASH_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("gio", "trash"),
    ("trash-put",),
)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output and exit code of a finished command."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run ``args`` without a shell and wait for it.

    A non-zero exit is reported through the result, not raised.

    Args:
        args: Command and its arguments.
        timeout: Seconds to wait before giving up (None waits forever).

    Returns:
        CommandResult with the captured output and exit code.

    Raises:
        subprocess.TimeoutExpired: If the command outlives ``timeout``.
        FileNotFoundError: If the executable does not exist.
    """
    completed = subprocess.run(args, capture_output=True, text=True, check=False, timeout=timeout)
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """Check whether ``name`` is an executable on PATH."""
    return shutil.which(name) is not None


def find_trash_command() -> list[str] | None:
    """Pick the first installed tool from TRASH_COMMANDS.

    Returns:
        Command prefix to which the path to trash is appended, or None
        if no trash tool is installed.
    """
    return next((list(cmd) for cmd in TRASH_COMMANDS if command_exists(cmd[0])), None)
