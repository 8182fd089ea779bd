"""Filesystem removal operator.

Drives a post-order walk over each root and decides, per entry, how
it is removed: regular files are throttled and either shredded or
unlinked, other entries are unlinked, and directories are removed
once everything inside them has been handled.
"""

import logging
import os
from contextlib import closing

from slowrm.core.errors import FailurePolicy, SyscallFailure, TraversalPolicyViolation
from slowrm.core.throttle import RateLimiter
from slowrm.filesystem.deleter import EntryDeleter
from slowrm.filesystem.models import EntryKind, TraversalEntry
from slowrm.filesystem.shredder import LargeFileShredder, is_shreddable
from slowrm.filesystem.walker import TreeWalker

logger = logging.getLogger(__name__)


class TreeRemover:
    """Removes directory trees entry by entry.

    Failures are routed through the failure policy; in force mode the
    walk carries on with the next entry, otherwise the raised error
    ends the removal.

    Attributes:
        _recursive: If False, directories below a root are refused.
    """

    def __init__(
        self,
        walker: TreeWalker,
        deleter: EntryDeleter,
        shredder: LargeFileShredder,
        limiter: RateLimiter,
        policy: FailurePolicy,
        *,
        recursive: bool = False,
    ) -> None:
        """Initialize the TreeRemover.

        Args:
            walker: Walker producing entries in post-order.
            deleter: Deleter for single names.
            shredder: Shredder for large unshared files.
            limiter: Rate limiter shared by the whole run.
            policy: Failure policy shared by the whole run.
            recursive: Whether directories below a root may be removed.
        """
        self._walker = walker
        self._deleter = deleter
        self._shredder = shredder
        self._limiter = limiter
        self._policy = policy
        self._recursive = recursive

    def remove(self, root: str) -> None:
        """Remove a root and everything below it.

        Args:
            root: Path to remove.

        Raises:
            SlowrmError: On the first failure when force mode is off.
        """
        logger.info("Removing %s", root)
        with closing(self._walker.walk(root)) as entries:
            for entry in entries:
                self._process(entry)

    def _process(self, entry: TraversalEntry) -> None:
        """Dispatch a single entry by kind."""
        if entry.kind is EntryKind.PRE_DIRECTORY:
            self._enter_directory(entry)
        elif entry.kind is EntryKind.POST_DIRECTORY:
            self._remove_directory(entry)
        elif entry.kind is EntryKind.REGULAR_FILE:
            self._remove_file(entry)
        else:
            self._deleter.delete(entry)

    def _enter_directory(self, entry: TraversalEntry) -> None:
        if self._recursive or entry.is_root:
            return
        self._policy.handle(TraversalPolicyViolation(entry.path))
        self._walker.skip()

    def _remove_directory(self, entry: TraversalEntry) -> None:
        if entry.error is not None:
            # Could not be listed, so it cannot be empty yet
            self._policy.handle(SyscallFailure("read directory", entry.path, entry.error))
            return

        try:
            os.rmdir(entry.access_path, dir_fd=entry.dir_fd)
        except OSError as e:
            self._policy.handle(SyscallFailure("remove directory", entry.path, e))
            return
        logger.debug("Removed directory %s", entry.path)

    def _remove_file(self, entry: TraversalEntry) -> None:
        self._limiter.maybe_pause()

        if is_shreddable(entry, self._shredder.threshold_bytes):
            self._shredder.shred(entry)
        elif self._deleter.delete(entry):
            self._limiter.credit(entry.size_bytes)
