"""Lazy breadth-first file walker built on os.scandir with two work queues."""

from __future__ import annotations

import logging
import os
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from fwalker import PathError, RootNotADirectoryError, RootNotFoundError
from fwalker.classify import EntryKind, target_kind
from fwalker.depth import canonicalize, component_count, relative_depth
from fwalker.mounts import filesystems, fs_boundaries

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WalkOptions:
    """Options controlling walker behavior.

    Attributes:
        max_depth: Deepest directory whose children are discovered.
            ``0`` lists only the root. ``None`` means unlimited.
        follow_symlinks: Whether symlinked files and directories are walked.
        local_filesystem_only: Whether to stay on the root's filesystem.
    """

    max_depth: int | None = None
    follow_symlinks: bool = False
    local_filesystem_only: bool = False


class Walker(Iterator[Path]):
    """Lazy iterator over the files beneath a root directory.

    Pending files are yielded first. Only when none are left is the next
    pending directory listed, so work is proportional to what the consumer
    actually pulls. Directories are expanded in FIFO order.

    Filesystem errors met while walking are logged and the affected
    directory or entry is skipped; ``next()`` only ever returns a path or
    raises ``StopIteration``.

    Example::

        walker = Walker("/srv").with_max_depth(2).with_local_filesystem_only()
        for path in walker:
            print(path)
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, root: Path | str) -> None:
        """Validate *root* and seed the walk with it.

        Args:
            root: Directory to walk.

        Raises:
            RootNotFoundError: If *root* does not exist.
            RootNotADirectoryError: If *root* is not a directory.
            PathError: If *root* cannot be inspected (e.g. permission denied).
        """
        path = Path(root)
        try:
            if not path.exists():
                raise RootNotFoundError(root, "no such file or directory")
            if not path.is_dir():
                raise RootNotADirectoryError(root, "not a directory")
            self._origin = canonicalize(path)
            self._origin_depth = component_count(self._origin)
        except OSError as exc:
            raise PathError(root, f"cannot access root ({exc})") from exc

        self._max_depth: int | None = None
        self._follow_symlinks = False
        self._local_only = False
        self._ignore: frozenset[Path] = frozenset()

        self._files: deque[Path] = deque()
        self._dirs: deque[Path] = deque([self._origin])
        # Canonical paths of directories expanded in this generation
        self._expanded: set[Path] = set()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def with_max_depth(self, max_depth: int) -> Walker:
        """Stop discovering subdirectories below *max_depth*.

        Raises:
            ValueError: If *max_depth* is negative.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be 0 or greater, got {max_depth}")
        self._max_depth = max_depth
        return self

    def with_symlinks_followed(self) -> Walker:
        """Walk symlinked files and directories as their targets."""
        self._follow_symlinks = True
        return self

    def with_local_filesystem_only(
        self, mounts: Iterable[Path | str] | None = None
    ) -> Walker:
        """Exclude every mount point beneath the origin from expansion.

        The mount table is read once, now. Filesystems mounted later are
        not honored.

        Args:
            mounts: Known mount points. Defaults to the live mount table.

        Raises:
            MountTableError: If the live mount table cannot be read.
        """
        known = filesystems() if mounts is None else mounts
        self._ignore = fs_boundaries(known, self._origin)
        self._local_only = True
        logger.debug(
            "Filesystem boundaries under %s: %s",
            self._origin,
            sorted(str(p) for p in self._ignore),
        )
        return self

    def reset(self) -> Walker:
        """Restart the walk from the origin, keeping the configuration."""
        self._files.clear()
        self._dirs.clear()
        self._dirs.append(self._origin)
        self._expanded.clear()
        logger.debug("Walker reset to %s", self._origin)
        return self

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def origin(self) -> Path:
        return self._origin

    @property
    def origin_depth(self) -> int:
        return self._origin_depth

    @property
    def max_depth(self) -> int | None:
        return self._max_depth

    @property
    def follow_symlinks(self) -> bool:
        return self._follow_symlinks

    @property
    def ignore(self) -> frozenset[Path]:
        return self._ignore

    @property
    def options(self) -> WalkOptions:
        """Current configuration as a ``WalkOptions`` value."""
        return WalkOptions(
            max_depth=self._max_depth,
            follow_symlinks=self._follow_symlinks,
            local_filesystem_only=self._local_only,
        )

    def depth(self, path: Path | str) -> int:
        """Return the depth of *path* relative to the origin.

        Raises:
            OSError: If *path* does not exist.
        """
        return relative_depth(Path(path), self._origin_depth)

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------
    def __iter__(self) -> Walker:
        return self

    def __next__(self) -> Path:
        while not self._files:
            if not self._dirs:
                raise StopIteration
            self._expand(self._dirs.popleft())
        return self._files.popleft()

    def _expand(self, directory: Path) -> None:
        """List *directory* and enqueue what it contains.

        Any failure skips the whole directory: nothing from a partial
        listing is enqueued.
        """
        try:
            canonical = canonicalize(directory)
            depth = relative_depth(canonical, self._origin_depth)
        except OSError as exc:
            logger.warning("Cannot resolve directory: %s (%s)", directory, exc)
            return

        # A followed symlink may point at a boundary under another name
        if canonical in self._ignore:
            logger.debug("Not crossing filesystem boundary: %s", directory)
            return
        if canonical in self._expanded:
            logger.debug("Already expanded: %s", directory)
            return
        self._expanded.add(canonical)

        files: list[Path] = []
        subdirs: list[Path] = []
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    kind = target_kind(entry, self._follow_symlinks)
                    if kind is EntryKind.FILE:
                        files.append(Path(entry.path))
                    elif kind is EntryKind.DIR:
                        subdirs.append(Path(entry.path))
        except OSError as exc:
            logger.warning("Cannot list directory: %s (%s)", directory, exc)
            return

        self._files.extend(files)

        if self._max_depth is not None and depth >= self._max_depth:
            return
        for subdir in subdirs:
            if subdir in self._ignore:
                logger.debug("Not crossing filesystem boundary: %s", subdir)
                continue
            self._dirs.append(subdir)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def _next_depth(self) -> int | None:
        """Depth of the next available item, or ``None`` once exhausted.

        Queued paths are built beneath the canonical origin, so their
        component count is taken as-is without touching the filesystem.
        """
        if self._files:
            head = self._files[0]
        elif self._dirs:
            head = self._dirs[0]
        else:
            return None
        return len(head.parts) - self._origin_depth

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Walker):
            return NotImplemented
        return (
            self._origin == other._origin
            and self.options == other.options
            and self._ignore == other._ignore
            and self._files == other._files
            and self._dirs == other._dirs
        )

    def __lt__(self, other: Walker) -> bool:
        """Deepest-first: a walker whose next item is deeper sorts first.

        An exhausted walker sorts after any walker with work left.

        The depth compared here is lexical (component count of the queued
        path), while expansion limits use the canonical depth. The two
        differ for items reached through a followed symlink, whose
        canonical target may sit at another level.
        """
        if not isinstance(other, Walker):
            return NotImplemented
        mine = self._next_depth()
        theirs = other._next_depth()
        if mine is None:
            return False
        if theirs is None:
            return True
        return mine > theirs

    def __repr__(self) -> str:
        return (
            f"Walker(origin={str(self._origin)!r}, max_depth={self._max_depth}, "
            f"follow_symlinks={self._follow_symlinks}, ignore={len(self._ignore)}, "
            f"pending_files={len(self._files)}, pending_dirs={len(self._dirs)})"
        )


def walk(root: Path | str, options: WalkOptions | None = None) -> Walker:
    """Create a walker over *root* configured from *options*.

    Args:
        root: Directory to walk.
        options: Walker options. Defaults to ``WalkOptions()``.

    Returns:
        Walker: A fresh, lazily evaluated walker.

    Raises:
        RootNotFoundError: If *root* does not exist.
        RootNotADirectoryError: If *root* is not a directory.
        MountTableError: If ``local_filesystem_only`` is set and the mount
            table cannot be read.
    """
    walk_options = options or WalkOptions()
    walker = Walker(root)
    if walk_options.max_depth is not None:
        walker.with_max_depth(walk_options.max_depth)
    if walk_options.follow_symlinks:
        walker.with_symlinks_followed()
    if walk_options.local_filesystem_only:
        walker.with_local_filesystem_only()
    return walker
