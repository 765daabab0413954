"""Shared fixtures for issame tests."""

from __future__ import annotations

import os
import shlex
import shutil
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("ISSAME_"):
            monkeypatch.delenv(key)


@pytest.fixture
def sha512sum() -> str:
    path = shutil.which("sha512sum")
    if path is None:
        pytest.skip("sha512sum is not on PATH")
    return path


@pytest.fixture
def file_a(tmp_path: Path) -> Path:
    path = tmp_path / "a.txt"
    path.write_bytes(b"The quick brown fox jumps over the lazy dog\n")
    return path


@pytest.fixture
def file_a_copy(tmp_path: Path) -> Path:
    path = tmp_path / "a copy.txt"
    path.write_bytes(b"The quick brown fox jumps over the lazy dog\n")
    return path


@pytest.fixture
def file_b(tmp_path: Path) -> Path:
    path = tmp_path / "b.txt"
    path.write_bytes(b"The quick brown fox jumps over the lazy cat\n")
    return path


@pytest.fixture
def fake_tool(tmp_path: Path) -> Callable[[str], str]:
    """Write a Python script standing in for sha512sum.

    Returns a factory taking the script body and returning a command
    line suitable for ``DigestComputer`` or ``ISSAME_DIGEST_COMMAND``.
    The file path is always the script's last argument.
    """
    counter = iter(range(1000))

    def make(body: str) -> str:
        script = tmp_path / f"fake_digest_{next(counter)}.py"
        script.write_text("import sys\n" + textwrap.dedent(body))
        return f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"

    return make


@pytest.fixture
def constant_tool(fake_tool: Callable[[str], str]) -> str:
    """A digest tool printing the same digest for every file."""
    return fake_tool(
        """
        print("ab" * 64 + "  " + sys.argv[-1])
        """
    )


@pytest.fixture
def failing_tool(fake_tool: Callable[[str], str]) -> str:
    return fake_tool(
        """
        sys.stderr.write("boom\\n")
        sys.exit(3)
        """
    )
