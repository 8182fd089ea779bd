"""Filesystem domain models for tree removal.

This module defines the entries a tree walk produces: what kind of
filesystem object each one is, where it lives, and the stat details
the removal policy needs.
"""

from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Kind of event produced by a tree walk.

    Attributes:
        PRE_DIRECTORY: A directory, before any of its children.
        POST_DIRECTORY: A directory, after all of its children.
        REGULAR_FILE: Regular file.
        OTHER: Anything else (symlinks, devices, sockets, FIFOs, or an
            entry that could not be stat-ed).
    """

    PRE_DIRECTORY = "pre_directory"
    POST_DIRECTORY = "post_directory"
    REGULAR_FILE = "regular_file"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class TraversalEntry:
    """One entry produced by a tree walk.

    Entries are consumed once and not retained: ``dir_fd`` belongs to
    the walker and is only valid until the walk is resumed.

    Attributes:
        path: Full path, used for diagnostics.
        access_path: Name to pass to syscalls, relative to dir_fd.
        dir_fd: Descriptor of the parent directory, None for roots.
        kind: What kind of entry this is.
        size_bytes: Size from lstat (0 if unavailable).
        hard_link_count: Number of hard links (0 if unavailable).
        device_id: Device the entry lives on (0 if unavailable).
        inode: Inode number (0 if unavailable).
        depth: Distance from the root (0 for the root itself).
        error: Stat error for OTHER entries, listing error for
            POST_DIRECTORY entries, None otherwise.
    """

    path: str
    access_path: str
    dir_fd: int | None
    kind: EntryKind
    size_bytes: int = 0
    hard_link_count: int = 0
    device_id: int = 0
    inode: int = 0
    depth: int = 0
    error: OSError | None = None

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def is_root(self) -> bool:
        """Check if this entry is one of the configured roots."""
        return self.depth == 0
