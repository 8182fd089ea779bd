"""Utility modules for slowrm.

This module exports commonly used utility functions.
"""

from slowrm.utils.formatting import err_console, format_size, print_error

__all__ = [
    "err_console",
    "format_size",
    "print_error",
]
