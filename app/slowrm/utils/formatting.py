"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys
from typing import TextIO

from rich.console import Console

from slowrm.core.theme import get_theme


def _detect_color_system(stream: TextIO) -> str | None:
    """Detect the best color system for the given stream.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if stream.isatty():
        return "truecolor"
    return None


# Shared stderr console (theme loaded once at import)
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system(sys.stderr))


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string."""
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")
