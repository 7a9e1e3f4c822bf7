"""Utility modules for vaultsweep.

This module exports commonly used utility functions.
"""

from vaultsweep.utils.formatting import (
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from vaultsweep.utils.shell import (
    TRASH_COMMANDS,
    CommandResult,
    command_exists,
    find_trash_command,
    run_command,
)

__all__ = [
    "TRASH_COMMANDS",
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "find_trash_command",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
