"""Filesystem walking and removal module.

This module provides the post-order tree walker, the single-name
deleter, the large-file shredder, and the operator that ties them
together for each root.
"""

from slowrm.filesystem.deleter import EntryDeleter
from slowrm.filesystem.models import EntryKind, TraversalEntry
from slowrm.filesystem.operator import TreeRemover
from slowrm.filesystem.shredder import LargeFileShredder, is_shreddable
from slowrm.filesystem.walker import TreeWalker

__all__ = [
    "EntryDeleter",
    "EntryKind",
    "LargeFileShredder",
    "TraversalEntry",
    "TreeRemover",
    "TreeWalker",
    "is_shreddable",
]
