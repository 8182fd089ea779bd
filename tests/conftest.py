"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from slowrm.core.reporter import Reporter


class _RecordingReporter:
    """Reporter that keeps every diagnostic in a list."""

    def __init__(self, reports: list[tuple[str, str]]) -> None:
        self._reports = reports

    def report(self, path: str, message: str) -> None:
        self._reports.append((path, message))


@pytest.fixture
def reports() -> list[tuple[str, str]]:
    """Diagnostics collected by the ``reporter`` fixture."""
    return []


@pytest.fixture
def reporter(reports: list[tuple[str, str]]) -> Reporter:
    """Reporter recording into ``reports``."""
    return _RecordingReporter(reports)


@pytest.fixture
def sleeps() -> list[float]:
    """Pause durations collected by the ``fake_sleep`` fixture."""
    return []


@pytest.fixture
def fake_sleep(sleeps: list[float]) -> Callable[[float], None]:
    """Sleep replacement that records instead of blocking."""
    return sleeps.append


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small tree with files, a nested directory and a symlink.

    Layout::

        root/
            a.txt        (3 bytes)
            nested/
                deep/
                    b.bin (4 bytes)
                c.txt    (2 bytes)
            link -> a.txt
    """
    root = tmp_path / "root"
    (root / "nested" / "deep").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"aaa")
    (root / "nested" / "deep" / "b.bin").write_bytes(b"bbbb")
    (root / "nested" / "c.txt").write_bytes(b"cc")
    (root / "link").symlink_to("a.txt")
    return root
