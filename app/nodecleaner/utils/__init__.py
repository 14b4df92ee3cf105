"""Utility modules for nodecleaner.

This module exports commonly used utility functions.
"""

from nodecleaner.utils.formatting import (
    console,
    err_console,
    format_date,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "format_date",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
