"""issame - check whether two files, or a file and a checksum, are the same."""

from issame.compare import compare
from issame.coordinator import ComputationCoordinator
from issame.digest import ComputationError, ComputationHandle, DigestComputer
from issame.dispatch import FileAccessError, UsageError, dispatch
from issame.models import ComparisonOutcome, ComparisonResult, IsSameError, Mode

__version__ = "0.5.0"

__all__ = [
    "compare",
    "dispatch",
    "ComputationCoordinator",
    "ComputationHandle",
    "DigestComputer",
    "ComparisonOutcome",
    "ComparisonResult",
    "Mode",
    "IsSameError",
    "ComputationError",
    "FileAccessError",
    "UsageError",
]
