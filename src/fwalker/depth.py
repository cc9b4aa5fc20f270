"""Depth bookkeeping relative to a walk origin."""

from __future__ import annotations

from pathlib import Path


def canonicalize(path: Path) -> Path:
    """Resolve symlinks and ``.``/``..`` segments of an existing *path*.

    Raises:
        OSError: If *path* no longer exists.
    """
    return path.resolve(strict=True)


def component_count(path: Path) -> int:
    """Return the number of components in the canonical form of *path*.

    Equivalent spellings of a path (relative, trailing separator, ``..``
    segments, symlinked parents) always count the same.

    Raises:
        OSError: If *path* no longer exists.
    """
    return len(canonicalize(path).parts)


def relative_depth(path: Path, origin_depth: int) -> int:
    """Return the depth of *path* below an origin of ``origin_depth`` components.

    Raises:
        OSError: If *path* no longer exists.
    """
    return component_count(path) - origin_depth
