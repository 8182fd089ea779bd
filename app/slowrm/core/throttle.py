"""Byte-counting throttle for deletion I/O.

The rate limiter accumulates the sizes of files removed directly and
pauses once the total goes past the chunk threshold. The same pause
primitive is used by the shredder between truncation steps.
"""

import logging
import time
from collections.abc import Callable

from slowrm.utils.formatting import format_size

logger = logging.getLogger(__name__)


class RateLimiter:
    """Pauses deletion once enough bytes have been released.

    The counter is owned by a single removal run and is only changed
    through ``credit`` and ``pause``. It is reset to zero right after
    every pause and never decremented otherwise.

    Attributes:
        threshold_bytes: Counter value that has to be exceeded to pause.
        pause_seconds: Length of each blocking pause.
    """

    def __init__(
        self,
        threshold_bytes: int,
        pause_seconds: float,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the RateLimiter.

        Args:
            threshold_bytes: Counter value that has to be exceeded to pause.
            pause_seconds: Length of each blocking pause.
            sleep: Blocking sleep function, replaceable in tests.
        """
        self.threshold_bytes = threshold_bytes
        self.pause_seconds = pause_seconds
        self._sleep = sleep
        self._bytes_since_pause = 0

    @property
    def bytes_since_pause(self) -> int:
        """Bytes credited since the last pause."""
        return self._bytes_since_pause

    def credit(self, size_bytes: int) -> None:
        """Add the size of a directly removed file to the counter."""
        self._bytes_since_pause += size_bytes

    def maybe_pause(self) -> bool:
        """Pause if the counter has gone past the threshold.

        Returns:
            True if a pause was performed.
        """
        if self._bytes_since_pause > self.threshold_bytes:
            self.pause()
            return True
        return False

    def pause(self) -> None:
        """Block for the configured pause and reset the counter."""
        logger.debug(
            "Pausing %.3fs after %s",
            self.pause_seconds,
            format_size(self._bytes_since_pause),
        )
        self._sleep(self.pause_seconds)
        self._bytes_since_pause = 0
