"""Removal run orchestration.

Wires the rate limiter, failure policy, walker, deleter and shredder
together for one run, removes every configured root in order, and
turns the outcome into a process exit code.
"""

import logging
import time
from collections.abc import Callable

from slowrm.core.config import RemovalConfig
from slowrm.core.errors import FailurePolicy, SlowrmError
from slowrm.core.reporter import Reporter
from slowrm.core.throttle import RateLimiter
from slowrm.filesystem.deleter import EntryDeleter
from slowrm.filesystem.operator import TreeRemover
from slowrm.filesystem.shredder import LargeFileShredder
from slowrm.filesystem.walker import TreeWalker

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def build_remover(
    config: RemovalConfig,
    reporter: Reporter,
    sleep: Callable[[float], None] = time.sleep,
) -> TreeRemover:
    """Create a TreeRemover and its collaborators for one run.

    Args:
        config: Run configuration.
        reporter: Sink for failure diagnostics.
        sleep: Blocking sleep function used for all pauses.

    Returns:
        TreeRemover sharing one RateLimiter and one FailurePolicy.
    """
    policy = FailurePolicy(reporter, force=config.force)
    limiter = RateLimiter(config.chunk_bytes, config.pause_seconds, sleep=sleep)
    deleter = EntryDeleter(policy)
    shredder = LargeFileShredder(deleter, limiter, policy, config.chunk_bytes)
    walker = TreeWalker(one_file_system=config.one_file_system)

    return TreeRemover(
        walker,
        deleter,
        shredder,
        limiter,
        policy,
        recursive=config.recursive,
    )


def execute_removal(
    config: RemovalConfig,
    reporter: Reporter,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Remove every configured root and return the exit code.

    The first failure outside force mode stops the run; roots after it
    are left untouched. In force mode failures are only reported and
    the run still succeeds.

    Args:
        config: Run configuration.
        reporter: Sink for failure diagnostics.
        sleep: Blocking sleep function used for all pauses.

    Returns:
        EXIT_SUCCESS or EXIT_FAILURE.
    """
    remover = build_remover(config, reporter, sleep)

    for root in config.roots:
        try:
            remover.remove(root)
        except SlowrmError as e:
            # Already reported by the failure policy
            logger.debug("Aborting run: %s", e)
            return EXIT_FAILURE

    return EXIT_SUCCESS
