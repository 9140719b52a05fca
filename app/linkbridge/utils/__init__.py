"""Utility modules for linkbridge.

This module exports commonly used utility functions.
"""

from linkbridge.utils.formatting import (
    console,
    create_link_table,
    err_console,
    print_error,
    print_info,
    print_success,
)

__all__ = [
    "console",
    "create_link_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
]
