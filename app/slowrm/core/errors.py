"""Error taxonomy and the abort/continue policy.

Every failure met while removing a tree is described by one of the
exceptions below. ``FailurePolicy`` decides what happens next: the
failure is always reported, and unless force mode is on it is raised
so the run stops at the first problem.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slowrm.core.reporter import Reporter

logger = logging.getLogger(__name__)


class SlowrmError(Exception):
    """Base exception for slowrm failures.

    Attributes:
        path: Path the failure relates to, None if not path specific.
        message: Human-readable description without the path.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message if path is None else f"{message} ({path})")
        self.path = path
        self.message = message


class ConfigurationError(SlowrmError):
    """Raised when options are missing or out of range."""


class TraversalPolicyViolation(SlowrmError):
    """Raised when a directory is met in non-recursive mode."""

    def __init__(self, path: str) -> None:
        super().__init__("Directory encountered in non-recursive mode", path)


class SyscallFailure(SlowrmError):
    """Raised when an open, unlink, rmdir or truncate call fails.

    Attributes:
        action: What was being attempted (e.g. "unlink", "truncate").
        error: The underlying OSError.
    """

    def __init__(self, action: str, path: str, error: OSError) -> None:
        description = error.strerror or str(error)
        super().__init__(f"Could not {action}: {description}", path)
        self.action = action
        self.error = error


class FailurePolicy:
    """Single chokepoint for reporting failures and deciding to abort.

    Attributes:
        force: If True, failures are reported and processing continues.
    """

    def __init__(self, reporter: Reporter, force: bool = False) -> None:
        self._reporter = reporter
        self.force = force

    def handle(self, error: SlowrmError) -> None:
        """Report a failure and raise it unless running in force mode.

        Args:
            error: The failure to handle.

        Raises:
            SlowrmError: The given error, when force mode is off.
        """
        self._reporter.report(error.path or "", error.message)
        if not self.force:
            raise error
        logger.debug("Continuing after failure (force mode): %s", error)
