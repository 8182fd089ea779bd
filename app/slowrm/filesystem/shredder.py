"""Chunked truncation of large files.

A large file is opened, its name is removed, and the still-open data
is then cut down from the end one chunk at a time with a pause after
every cut. That keeps any single burst of freed blocks bounded by the
chunk size. The last partial chunk is released when the descriptor is
closed, since nothing refers to the file anymore.
"""

import logging
import os

from slowrm.core.errors import FailurePolicy, SyscallFailure
from slowrm.core.throttle import RateLimiter
from slowrm.filesystem.deleter import EntryDeleter
from slowrm.filesystem.models import EntryKind, TraversalEntry

logger = logging.getLogger(__name__)


def is_shreddable(entry: TraversalEntry, threshold_bytes: int) -> bool:
    """Check if a file should be shredded rather than unlinked directly.

    Hard-linked files are never shredded: truncating them would destroy
    the content still visible through their other names.

    Args:
        entry: Entry to check.
        threshold_bytes: Chunk threshold in bytes.

    Returns:
        True for regular files larger than the threshold with at most
        one link.
    """
    return (
        entry.kind is EntryKind.REGULAR_FILE
        and entry.size_bytes > threshold_bytes
        and entry.hard_link_count <= 1
    )


class LargeFileShredder:
    """Unlinks a large file and truncates it in paced steps.

    Args:
        deleter: Deleter used to remove the file's name.
        limiter: Rate limiter providing the pause between steps.
        policy: Failure policy for open and truncate errors.
        threshold_bytes: Size of each truncation step.
    """

    def __init__(
        self,
        deleter: EntryDeleter,
        limiter: RateLimiter,
        policy: FailurePolicy,
        threshold_bytes: int,
    ) -> None:
        self._deleter = deleter
        self._limiter = limiter
        self._policy = policy
        self.threshold_bytes = threshold_bytes

    def shred(self, entry: TraversalEntry) -> int:
        """Shred one file.

        Args:
            entry: Eligible REGULAR_FILE entry.

        Returns:
            Number of truncation steps performed.

        Raises:
            SyscallFailure: If open, unlink or truncate fails and force
                mode is off.
        """
        try:
            fd = os.open(entry.access_path, os.O_RDWR | os.O_NOFOLLOW, dir_fd=entry.dir_fd)
        except OSError as e:
            self._policy.handle(SyscallFailure("open for truncation", entry.path, e))
            return 0

        steps = 0
        try:
            if not self._deleter.delete(entry):
                return 0

            boundary = entry.size_bytes
            # A zero threshold can never shrink the file
            while self.threshold_bytes and boundary >= self.threshold_bytes:
                boundary -= self.threshold_bytes
                try:
                    os.ftruncate(fd, boundary)
                except OSError as e:
                    self._policy.handle(SyscallFailure("truncate", entry.path, e))
                    break
                logger.debug("Truncated %s to %d bytes", entry.path, boundary)
                steps += 1
                self._limiter.pause()
        finally:
            os.close(fd)

        logger.debug("Shredded %s in %d step(s)", entry.path, steps)
        return steps
