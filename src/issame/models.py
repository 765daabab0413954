"""Shared models for issame."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

EXIT_MATCH = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2
# What the shell sees for a C-style `return -1`.
EXIT_USAGE = 255


class Mode(str, Enum):
    TWO_FILES = "two-file"
    ONE_FILE = "one-file"


class ComparisonOutcome(str, Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    ERROR = "error"

    @property
    def exit_code(self) -> int:
        return {
            ComparisonOutcome.MATCH: EXIT_MATCH,
            ComparisonOutcome.MISMATCH: EXIT_MISMATCH,
            ComparisonOutcome.ERROR: EXIT_ERROR,
        }[self]


class ComparisonResult(BaseModel):
    """Outcome of one invocation plus the values that were compared.

    ``right`` is the second file's digest in two-file mode and the
    caller's checksum literal in one-file mode.
    """

    mode: Mode
    outcome: ComparisonOutcome
    left: str
    right: str

    model_config = {"frozen": True}

    @property
    def is_match(self) -> bool:
        return self.outcome is ComparisonOutcome.MATCH


class IsSameError(Exception):
    """Base class for fatal issame errors."""
