"""Removal of a single directory entry name."""

import logging
import os

from slowrm.core.errors import FailurePolicy, SyscallFailure
from slowrm.filesystem.models import TraversalEntry

logger = logging.getLogger(__name__)


class EntryDeleter:
    """Unlinks one name at a time under a shared failure policy.

    Used both for direct deletions and for the name-removal step of
    shredding, so every unlink failure goes through the same policy.
    """

    def __init__(self, policy: FailurePolicy) -> None:
        self._policy = policy

    def delete(self, entry: TraversalEntry) -> bool:
        """Unlink the entry's name.

        Args:
            entry: Entry to remove. Must not be a directory.

        Returns:
            True if the name was removed, False if it failed in force mode.

        Raises:
            SyscallFailure: If unlinking fails and force mode is off.
        """
        try:
            os.unlink(entry.access_path, dir_fd=entry.dir_fd)
        except OSError as e:
            self._policy.handle(SyscallFailure("unlink", entry.path, e))
            return False

        logger.debug("Unlinked %s", entry.path)
        return True
