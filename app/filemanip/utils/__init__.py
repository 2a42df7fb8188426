"""Utility modules for filemanip.

This module exports commonly used utility functions.
"""

from filemanip.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from filemanip.utils.shell import command_exists, run_interactive

__all__ = [
    "command_exists",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_interactive",
]
