"""Tests for filesystem domain models."""

import pytest
from slowrm.filesystem.models import EntryKind, TraversalEntry


class TestEntryKind:
    """Tests for EntryKind enum."""

    def test_entry_kind_values(self) -> None:
        """Verify all 4 EntryKind enum values exist with correct string values."""
        assert EntryKind.PRE_DIRECTORY == "pre_directory"
        assert EntryKind.POST_DIRECTORY == "post_directory"
        assert EntryKind.REGULAR_FILE == "regular_file"
        assert EntryKind.OTHER == "other"
        assert len(EntryKind) == 4

    def test_entry_kind_is_str_enum(self) -> None:
        """EntryKind values are usable as strings."""
        assert isinstance(EntryKind.OTHER, str)


class TestTraversalEntry:
    """Tests for TraversalEntry frozen dataclass."""

    def test_defaults(self) -> None:
        """Stat fields default to zero and error to None."""
        entry = TraversalEntry(path="/x", access_path="/x", dir_fd=None, kind=EntryKind.OTHER)

        assert entry.size_bytes == 0
        assert entry.hard_link_count == 0
        assert entry.device_id == 0
        assert entry.inode == 0
        assert entry.depth == 0
        assert entry.error is None

    def test_empty_path_rejected(self) -> None:
        """An empty path is invalid."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            TraversalEntry(path="", access_path="", dir_fd=None, kind=EntryKind.OTHER)

    def test_is_frozen(self) -> None:
        """Entries are immutable."""
        entry = TraversalEntry(path="/x", access_path="/x", dir_fd=None, kind=EntryKind.OTHER)

        with pytest.raises(AttributeError):
            entry.size_bytes = 5  # type: ignore[misc]

    def test_is_root(self) -> None:
        """Only depth-zero entries are roots."""
        root = TraversalEntry(path="/r", access_path="/r", dir_fd=None, kind=EntryKind.PRE_DIRECTORY)
        child = TraversalEntry(
            path="/r/c", access_path="c", dir_fd=3, kind=EntryKind.PRE_DIRECTORY, depth=1
        )

        assert root.is_root is True
        assert child.is_root is False
