"""CLI entry point for fwalk — I/O boundary only."""

from __future__ import annotations

import argparse
import io
import logging
import os
import sys
from typing import BinaryIO

from fwalker import FwalkerError
from fwalker.walker import Walker, WalkOptions, walk


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``fwalk`` command.
    """
    parser = argparse.ArgumentParser(
        prog="fwalk",
        description="list files beneath a directory, breadth first",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Root directory to walk (default: current directory)",
    )
    parser.add_argument(
        "-L",
        "--max-depth",
        type=int,
        default=None,
        dest="max_depth",
        help="Deepest directory level to descend into (0 = root only)",
    )
    parser.add_argument(
        "-s",
        "--follow-symlinks",
        action="store_true",
        dest="follow_symlinks",
        help="Follow symlinked files and directories",
    )
    parser.add_argument(
        "-x",
        "--one-file-system",
        action="store_true",
        dest="local_only",
        help="Do not descend into other mounted filesystems",
    )
    parser.add_argument(
        "-z",
        "--null",
        action="store_true",
        dest="null_separated",
        help="Separate paths with NUL instead of newline",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        dest="output_file",
        help="Write output to a file instead of stdout",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped directories and boundaries in detail",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress warnings about unreadable directories",
    )
    return parser


def run_fwalk(argv: list[str] | None = None) -> str:
    """Run fwalk with provided CLI args and return formatted output.

    This function is intentionally side-effect free and is the primary
    test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.

    Returns:
        str: Walked paths, each followed by the selected separator.

    Raises:
        FwalkerError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _validate_max_depth(max_depth: int | None) -> int | None:
    """Reject negative ``-L`` values.

    Raises:
        FwalkerError: If the depth is negative.
    """
    if max_depth is not None and max_depth < 0:
        raise FwalkerError("Invalid depth, must be 0 or greater.")
    return max_depth


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="fwalk: %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_walker(args: argparse.Namespace) -> Walker:
    """Create the walker for parsed arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        Walker: Configured, not yet started walker.

    Raises:
        FwalkerError: On any user-facing validation or I/O error.
    """
    options = WalkOptions(
        max_depth=_validate_max_depth(args.max_depth),
        follow_symlinks=args.follow_symlinks,
        local_filesystem_only=args.local_only,
    )
    return walk(args.directory, options)


def _write_paths(walker: Walker, stream: BinaryIO, separator: bytes) -> None:
    """Write each path as it is pulled from *walker*, followed by *separator*.

    Paths are written as raw filesystem bytes, so names that are not valid
    in the locale encoding come out unchanged.
    """
    for path in walker:
        stream.write(os.fsencode(path) + separator)


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the walk for parsed arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        str: Rendered output, each path followed by the separator.

    Raises:
        FwalkerError: On any user-facing validation or I/O error.
    """
    walker = _build_walker(args)
    buffer = io.BytesIO()
    _write_paths(walker, buffer, _separator(args))
    return os.fsdecode(buffer.getvalue())


def _separator(args: argparse.Namespace) -> bytes:
    return b"\0" if args.null_separated else b"\n"


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and streams paths to stdout or the ``-o``
    file as the walk produces them. Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse
    _configure_logging(args)

    try:
        walker = _build_walker(args)
    except FwalkerError as exc:
        sys.stderr.write(f"fwalk: {exc}\n")
        sys.exit(1)

    separator = _separator(args)
    if args.output_file:
        try:
            with open(args.output_file, "wb") as out:
                _write_paths(walker, out, separator)
        except OSError as exc:
            sys.stderr.write(f"fwalk: cannot write to '{args.output_file}': {exc}\n")
            sys.exit(1)
    else:
        sys.stdout.flush()
        _write_paths(walker, sys.stdout.buffer, separator)
        sys.stdout.buffer.flush()
