"""Shared fixtures for fwalker tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from fwalker.walker import Walker

ALL_NAMES = sorted(["file0", "file1", "file2", ".hiddenFile", "file3"])


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """Create the standard five-file test tree.

    Structure::

        root/
        ├── file0
        └── dir0/
            ├── file1
            ├── file2
            ├── .hiddenFile
            ├── emptyDir/
            └── .hiddenDir/
                └── file3

    The tree lives one level below ``tmp_path`` so tests can place output
    files and symlink targets beside it.
    """
    root = tmp_path / "root"
    (root / "dir0" / "emptyDir").mkdir(parents=True)
    (root / "dir0" / ".hiddenDir").mkdir()
    (root / "file0").write_text("0")
    (root / "dir0" / "file1").write_text("1")
    (root / "dir0" / "file2").write_text("2")
    (root / "dir0" / ".hiddenFile").write_text("h")
    (root / "dir0" / ".hiddenDir" / "file3").write_text("3")
    return root


def walked_names(walker: Walker) -> list[str]:
    """Drain *walker* and return the yielded basenames, sorted."""
    return sorted(path.name for path in walker)
