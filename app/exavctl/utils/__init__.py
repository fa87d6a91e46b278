"""Utility modules for exavctl.

This module exports commonly used utility functions.
"""

from exavctl.utils.formatting import (
    console,
    create_summary_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from exavctl.utils.shell import (
    CommandResult,
    command_exists,
    quote_ps,
    run_command,
    run_powershell,
)

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_summary_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "quote_ps",
    "run_command",
    "run_powershell",
]
