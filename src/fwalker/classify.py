"""Directory entry classification: file, directory, symlink, or other."""

from __future__ import annotations

import enum
import logging
import os

logger = logging.getLogger(__name__)


class EntryKind(enum.Enum):
    """Type of a directory entry as reported by the listing."""

    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    OTHER = "other"


def classify(entry: os.DirEntry[str]) -> EntryKind | None:
    """Classify a listing entry without following symlinks.

    ``os.DirEntry`` carries the type reported by the listing on most
    platforms, so this usually costs no extra system call.

    Args:
        entry: Entry produced by ``os.scandir``.

    Returns:
        EntryKind | None: The entry type, or ``None`` when it cannot be
        determined (entry vanished, permission denied).
    """
    try:
        if entry.is_symlink():
            return EntryKind.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return EntryKind.DIR
        if entry.is_file(follow_symlinks=False):
            return EntryKind.FILE
    except OSError as exc:
        logger.warning("Cannot stat: %s (%s)", entry.path, exc)
        return None
    return EntryKind.OTHER


def target_kind(entry: os.DirEntry[str], follow_symlinks: bool) -> EntryKind | None:
    """Return the traversable kind of an entry, or ``None`` if it is invalid.

    Plain files and directories are always valid. A symlink is valid only
    when ``follow_symlinks`` is set, and then counts as whatever its target
    is. Dangling links, links to special files, and special files
    themselves (sockets, fifos, devices) are invalid.

    Args:
        entry: Entry produced by ``os.scandir``.
        follow_symlinks: Whether symlinks may be traversed.

    Returns:
        EntryKind | None: ``EntryKind.FILE``, ``EntryKind.DIR`` or ``None``.
    """
    kind = classify(entry)
    if kind is EntryKind.FILE or kind is EntryKind.DIR:
        return kind
    if kind is not EntryKind.SYMLINK or not follow_symlinks:
        return None

    try:
        if entry.is_dir(follow_symlinks=True):
            return EntryKind.DIR
        if entry.is_file(follow_symlinks=True):
            return EntryKind.FILE
    except OSError as exc:
        logger.warning("Cannot resolve symlink: %s (%s)", entry.path, exc)
        return None
    logger.debug("Skipping symlink with unusable target: %s", entry.path)
    return None
