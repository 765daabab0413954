"""Digest comparison."""

from __future__ import annotations

from issame.models import ComparisonOutcome


def compare(a: str, b: str) -> ComparisonOutcome:
    """Exact, case-sensitive equality of two digest strings."""
    if a == b:
        return ComparisonOutcome.MATCH
    return ComparisonOutcome.MISMATCH
