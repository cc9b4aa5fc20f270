"""fwalker: lazy breadth-first directory walker with depth and filesystem limits."""

from __future__ import annotations

from pathlib import Path

__version__ = "0.1.0"


class FwalkerError(Exception):
    """User-facing walker error.

    Raised for invalid roots, unreadable mount tables, and other
    configuration-time failures. The CLI prints the message to stderr
    and exits with code 1.
    """


class PathError(FwalkerError):
    """Error tied to a specific filesystem path.

    Attributes:
        path: Offending path, as given by the caller.
        message: Human-readable reason.
    """

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        self.message = message
        super().__init__(f"'{path}': {message}")


class RootNotFoundError(PathError):
    """The walker root does not exist."""


class RootNotADirectoryError(PathError):
    """The walker root exists but is not a directory."""


class MountTableError(FwalkerError):
    """The list of mounted filesystems could not be read."""


from fwalker.walker import Walker, WalkOptions, walk  # noqa: E402

__all__ = [
    "FwalkerError",
    "MountTableError",
    "PathError",
    "RootNotADirectoryError",
    "RootNotFoundError",
    "WalkOptions",
    "Walker",
    "walk",
]
