"""Argument validation and routing to the two comparison modes."""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

from issame.compare import compare
from issame.coordinator import ComputationCoordinator
from issame.digest import PathArg
from issame.models import ComparisonResult, IsSameError, Mode

logger = logging.getLogger(__name__)

ONE_FILE_FLAG = "--one-file"

USAGE_LINES = (
    "Usage: issame <file1> <file2>",
    "Usage: issame --one-file <file> <sha512 checksum>",
)


class UsageError(IsSameError):
    """The arguments do not fit either comparison mode."""


class FileAccessError(IsSameError):
    """An input file cannot be opened for reading."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open {path}: {reason}")


def select_mode(args: Sequence[str]) -> Mode:
    if args and args[0].lower() == ONE_FILE_FLAG:
        return Mode.ONE_FILE
    return Mode.TWO_FILES


def check_arguments(args: Sequence[str]) -> Mode:
    """Pick the mode and make sure it got exactly the arguments it needs."""
    mode = select_mode(args)
    if mode is Mode.ONE_FILE and len(args) != 3:
        raise UsageError(f"{ONE_FILE_FLAG} takes a file and a checksum")
    if mode is Mode.TWO_FILES and len(args) != 2:
        raise UsageError("Expected exactly two files")
    return mode


def ensure_readable(path: PathArg) -> None:
    try:
        with open(path, "rb"):
            pass
    except OSError as e:
        raise FileAccessError(os.fspath(path), e.strerror or str(e)) from e


def dispatch(
    args: Sequence[str],
    coordinator: Optional[ComputationCoordinator] = None,
) -> ComparisonResult:
    """Run one comparison for a raw argument list.

    ``["a.txt", "b.txt"]`` compares two files; ``["--one-file", "a.txt",
    "<checksum>"]`` compares a file with a checksum. The checksum's format
    is not checked, a malformed one simply does not match.

    Raises:
        UsageError: before any file is opened.
        FileAccessError: before any digest is computed.
        ComputationError: if a digest computation fails.
    """
    mode = check_arguments(args)

    if mode is Mode.ONE_FILE:
        _, path, checksum = args
        ensure_readable(path)
        coordinator = coordinator or ComputationCoordinator()
        digest = coordinator.compute_single_digest(path)
        outcome = compare(digest, checksum)
        logger.debug("%s against checksum: %s", path, outcome.value)
        return ComparisonResult(mode=mode, outcome=outcome, left=digest, right=checksum)

    path_a, path_b = args
    ensure_readable(path_a)
    ensure_readable(path_b)
    coordinator = coordinator or ComputationCoordinator()
    digest_a, digest_b = coordinator.compute_two_digests(path_a, path_b)
    outcome = compare(digest_a, digest_b)
    logger.debug("%s against %s: %s", path_a, path_b, outcome.value)
    return ComparisonResult(mode=mode, outcome=outcome, left=digest_a, right=digest_b)
