"""Post-order directory tree walker.

Walks one root at a time and yields a ``TraversalEntry`` for every
object below it. Directories produce two events: ``PRE_DIRECTORY``
before their children and ``POST_DIRECTORY`` after all of them.
The consumer can prune a directory right after its pre-visit with
``skip()``.

Directories being walked are kept on an explicit stack together with
their sorted child names. Entries carry a parent descriptor plus a bare
name, so syscalls never have to resolve long paths again. Only a
bounded number of directory descriptors stay open: when the stack
grows past the limit, descriptors of intermediate directories are
closed and reopened by name from their nearest open ancestor once the
walk climbs back up. Reopened directories must still be the same inode
on the same device. Symlinks are never followed.
"""

import errno
import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass, replace

from slowrm.filesystem.models import EntryKind, TraversalEntry

logger = logging.getLogger(__name__)

_DIRECTORY_FLAGS = os.O_RDONLY | os.O_DIRECTORY | os.O_NOFOLLOW

DEFAULT_MAX_OPEN_DIRECTORIES = 32


@dataclass(slots=True)
class _Frame:
    """A directory that is currently being walked.

    ``fd`` is None while the descriptor is evicted. ``error`` is set
    when the directory could not be reopened; its remaining children
    are then abandoned.
    """

    entry: TraversalEntry
    names: list[str]
    fd: int | None
    index: int = 0
    error: OSError | None = None


def _entry_from_stat(
    path: str,
    access_path: str,
    dir_fd: int | None,
    st: os.stat_result,
    depth: int,
) -> TraversalEntry:
    """Build a TraversalEntry from lstat results."""
    if stat.S_ISDIR(st.st_mode):
        kind = EntryKind.PRE_DIRECTORY
    elif stat.S_ISREG(st.st_mode):
        kind = EntryKind.REGULAR_FILE
    else:
        kind = EntryKind.OTHER

    return TraversalEntry(
        path=path,
        access_path=access_path,
        dir_fd=dir_fd,
        kind=kind,
        size_bytes=st.st_size,
        hard_link_count=st.st_nlink,
        device_id=st.st_dev,
        inode=st.st_ino,
        depth=depth,
    )


def _close_all(stack: list[_Frame]) -> None:
    for frame in reversed(stack):
        if frame.fd is not None:
            os.close(frame.fd)
            frame.fd = None


class TreeWalker:
    """Depth-first, post-order walker over directory trees.

    Args:
        one_file_system: If True, entries on a different device than
            the root are neither yielded nor descended into.
        max_open_directories: Upper bound on directory descriptors held
            open at once, at least 2 (the root and the current
            directory).
    """

    def __init__(
        self,
        *,
        one_file_system: bool = False,
        max_open_directories: int = DEFAULT_MAX_OPEN_DIRECTORIES,
    ) -> None:
        if max_open_directories < 2:
            msg = f"max_open_directories must be at least 2, got {max_open_directories}"
            raise ValueError(msg)
        self._one_file_system = one_file_system
        self._max_open = max_open_directories
        self._skip_requested = False

    def skip(self) -> None:
        """Prune the descendants of the directory just pre-visited.

        Only has an effect when called right after a PRE_DIRECTORY
        entry was yielded. The pruned directory gets no POST_DIRECTORY
        event.
        """
        self._skip_requested = True

    def walk(self, root: str) -> Iterator[TraversalEntry]:
        """Walk a single root in post-order.

        A root that cannot be stat-ed is yielded once as an OTHER entry
        carrying the error. A directory that cannot be opened, listed
        or reopened is yielded as POST_DIRECTORY with the error attached
        and without its remaining children.

        Args:
            root: Path to walk.

        Yields:
            TraversalEntry for every entry under root, root last.
        """
        self._skip_requested = False
        try:
            root_stat = os.lstat(root)
        except OSError as e:
            yield TraversalEntry(
                path=root,
                access_path=root,
                dir_fd=None,
                kind=EntryKind.OTHER,
                error=e,
            )
            return

        root_entry = _entry_from_stat(root, root, None, root_stat, depth=0)
        if root_entry.kind is not EntryKind.PRE_DIRECTORY:
            yield root_entry
            return

        device = root_stat.st_dev
        stack: list[_Frame] = []
        pending: TraversalEntry | None = root_entry
        try:
            while True:
                if pending is not None:
                    directory, pending = pending, None
                    self._skip_requested = False
                    yield directory

                    if self._skip_requested:
                        self._skip_requested = False
                        logger.debug("Skipping subtree %s", directory.path)
                    else:
                        failed: TraversalEntry | None = None
                        try:
                            stack.append(self._enter(directory))
                        except OSError as e:
                            failed = replace(directory, kind=EntryKind.POST_DIRECTORY, error=e)
                        if failed is not None:
                            yield failed
                        else:
                            self._evict(stack)

                if not stack:
                    return

                frame = stack[-1]
                child = None if frame.error is not None else self._next_child(frame, device)
                if child is None:
                    yield self._leave(stack)
                elif child.kind is EntryKind.PRE_DIRECTORY:
                    pending = child
                else:
                    yield child
        finally:
            _close_all(stack)

    def _enter(self, directory: TraversalEntry) -> _Frame:
        """Open and list a directory.

        Args:
            directory: PRE_DIRECTORY entry to descend into.

        Returns:
            Frame holding the open descriptor and the sorted child names.

        Raises:
            OSError: If the directory cannot be opened or listed.
        """
        fd = os.open(directory.access_path, _DIRECTORY_FLAGS, dir_fd=directory.dir_fd)
        try:
            names = sorted(os.listdir(fd))
        except OSError:
            os.close(fd)
            raise

        logger.debug("Entering %s (%d entries)", directory.path, len(names))
        return _Frame(entry=directory, names=names, fd=fd)

    def _leave(self, stack: list[_Frame]) -> TraversalEntry:
        """Pop the finished top frame and build its post-visit entry.

        The parent's descriptor is reopened if it was evicted. If that
        fails, the parent is marked as failed and the post-visit carries
        the error instead of a usable parent descriptor.
        """
        frame = stack.pop()
        if frame.fd is not None:
            os.close(frame.fd)
            frame.fd = None

        error = frame.error
        parent_fd: int | None = None
        if stack:
            try:
                parent_fd = self._reopen(stack)
            except OSError as e:
                logger.warning("Could not return to %s: %s", stack[-1].entry.path, e)
                stack[-1].error = e
                error = error or e
        return replace(frame.entry, kind=EntryKind.POST_DIRECTORY, dir_fd=parent_fd, error=error)

    def _next_child(self, frame: _Frame, device: int) -> TraversalEntry | None:
        """Stat the next child of the top frame that stays in scope.

        Args:
            frame: Top frame, with an open descriptor.
            device: Device id of the root being walked.

        Returns:
            The next TraversalEntry, or None once the directory is exhausted.
        """
        depth = frame.entry.depth + 1
        while frame.index < len(frame.names):
            name = frame.names[frame.index]
            frame.index += 1
            path = os.path.join(frame.entry.path, name)
            try:
                st = os.stat(name, dir_fd=frame.fd, follow_symlinks=False)
            except OSError as e:
                return TraversalEntry(
                    path=path,
                    access_path=name,
                    dir_fd=frame.fd,
                    kind=EntryKind.OTHER,
                    depth=depth,
                    error=e,
                )

            entry = _entry_from_stat(path, name, frame.fd, st, depth)
            if self._one_file_system and entry.device_id != device:
                logger.debug("Not crossing into another file system: %s", path)
                continue
            return entry
        return None

    def _evict(self, stack: list[_Frame]) -> None:
        """Close the shallowest intermediate descriptors beyond the limit.

        The root and the top frame always keep their descriptors.
        """
        held = [frame for frame in stack[1:-1] if frame.fd is not None]
        excess = len(held) + min(len(stack), 2) - self._max_open
        for frame in held[: max(excess, 0)]:
            if frame.fd is not None:
                os.close(frame.fd)
                frame.fd = None

    def _reopen(self, stack: list[_Frame]) -> int:
        """Make sure the top frame has an open descriptor.

        Evicted directories are reopened by name, starting from the
        nearest ancestor that is still open (the root always is).

        Returns:
            Descriptor of the top frame.

        Raises:
            OSError: If a directory cannot be opened or is no longer the
                directory that was walked into.
        """
        top = stack[-1]
        if top.fd is not None:
            return top.fd

        base = len(stack) - 1
        while stack[base].fd is None:
            base -= 1

        fd = stack[base].fd
        for frame in stack[base + 1 :]:
            fd = frame.fd = self._open_same(frame.entry, fd)
        logger.debug("Reopened %s", top.entry.path)

        self._evict(stack)
        return fd

    def _open_same(self, directory: TraversalEntry, dir_fd: int | None) -> int:
        """Reopen a directory and check it was not replaced meanwhile."""
        fd = os.open(directory.access_path, _DIRECTORY_FLAGS, dir_fd=dir_fd)
        st = os.fstat(fd)
        if (st.st_dev, st.st_ino) != (directory.device_id, directory.inode):
            os.close(fd)
            raise OSError(errno.ESTALE, "Directory was replaced during removal", directory.path)
        return fd
