"""Diagnostic output sink.

The removal core hands every failure to a ``Reporter`` as a
``(path, message)`` pair. Where and how it is shown is up to the
reporter; the default one writes a single themed line to stderr.
"""

import logging
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from slowrm.utils.formatting import err_console

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    """Receives failure and warning diagnostics."""

    def report(self, path: str, message: str) -> None:
        """Record one diagnostic.

        Args:
            path: Offending path (may be empty for global problems).
            message: Description including the OS error text.
        """
        ...


class ConsoleReporter:
    """Reporter that prints one line per diagnostic on stderr."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or err_console

    def report(self, path: str, message: str) -> None:
        logger.debug("Reporting failure for %s: %s", path, message)
        if path:
            line = f"[error]Error:[/] [path]{escape(path)}[/]: {escape(message)}"
        else:
            line = f"[error]Error:[/] {escape(message)}"
        # soft_wrap keeps long paths on a single line
        self._console.print(line, soft_wrap=True, highlight=False)
