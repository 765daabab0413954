"""Runs one or two digest computations side by side and collects them."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Optional, Sequence

from issame.digest import ComputationHandle, DigestComputer, PathArg

logger = logging.getLogger(__name__)


class ComputationCoordinator:
    """Launches digest computations and collects each result exactly once.

    All children are launched before any output is read, so the two
    computations of a two-file comparison overlap. Every launched child
    is reaped and every pipe closed on every exit path, including when a
    launch, read or wait fails part way through. There is no timeout: a
    digest tool that never exits blocks the caller.
    """

    def __init__(self, computer: Optional[DigestComputer] = None):
        self._computer = computer or DigestComputer()

    def compute_two_digests(self, path_a: PathArg, path_b: PathArg) -> tuple[str, str]:
        digest_a, digest_b = self._collect([path_a, path_b])
        return digest_a, digest_b

    def compute_single_digest(self, path: PathArg) -> str:
        (digest,) = self._collect([path])
        return digest

    def _collect(self, paths: Sequence[PathArg]) -> list[str]:
        with ExitStack() as stack:
            handles: list[ComputationHandle] = []
            for path in paths:
                handles.append(stack.enter_context(self._computer.launch(path)))

            for handle in handles:
                handle.read()

            # Reap every child before trusting any output.
            for handle in handles:
                handle.wait()

            digests = [handle.digest() for handle in handles]

        for handle, digest in zip(handles, digests):
            logger.debug("Digest of %s: %s", handle.target, digest)
        return digests
