"""Mount table access and filesystem boundary detection via psutil."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import psutil

from fwalker import MountTableError

logger = logging.getLogger(__name__)


def filesystems() -> frozenset[Path]:
    """Return the mount points of all currently mounted filesystems.

    Pseudo filesystems (``/proc``, ``/sys``, cgroups) are included, since
    they are exactly the boundaries a single-filesystem walk must not cross.

    Returns:
        frozenset[Path]: Absolute mount point paths.

    Raises:
        MountTableError: If the platform mount table cannot be read.
    """
    try:
        partitions = psutil.disk_partitions(all=True)
    except (OSError, psutil.Error) as exc:
        raise MountTableError(f"cannot read mounted filesystems: {exc}") from exc
    mounts = frozenset(Path(part.mountpoint) for part in partitions)
    logger.debug("Found %d mounted filesystems", len(mounts))
    return mounts


def fs_boundaries(filesystems: Iterable[Path | str], root: Path) -> frozenset[Path]:
    """Return the mount points lying strictly beneath *root*.

    A mount point equal to *root* is not a boundary: a walk may start at
    the top of a mounted filesystem, it just may not descend into another.

    Args:
        filesystems: Known mount points.
        root: Walk origin.

    Returns:
        frozenset[Path]: Mount points that are proper descendants of *root*.
    """
    root = Path(root)
    mounts = (Path(fs) for fs in filesystems)
    return frozenset(m for m in mounts if m != root and m.is_relative_to(root))
