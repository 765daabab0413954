"""SHA-512 digests computed by an external tool in a child process."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import Optional, Union

from issame.config import get_settings
from issame.models import IsSameError

logger = logging.getLogger(__name__)

PathArg = Union[str, os.PathLike]


class ComputationError(IsSameError):
    """A digest computation could not be launched, read or waited on."""

    def __init__(self, operation: str, target: str, detail: str = ""):
        self.operation = operation
        self.target = target
        self.detail = detail
        message = f"Failed to {operation} digest computation for {target}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def parse_digest_output(output: str) -> str:
    """Return the leading hex token of a sha512sum-style output line.

    The tool prints ``<digest>  <path>\\n``. GNU coreutils prefixes the
    line with a backslash when the path had to be escaped. Returns an
    empty string when there is no token.
    """
    lines = output.splitlines()
    if not lines:
        return ""
    tokens = lines[0].split()
    if not tokens:
        return ""
    token = tokens[0]
    if token.startswith("\\"):
        token = token[1:]
    return token


class ComputationHandle:
    """One in-flight digest computation: a child process and its pipes.

    Lifecycle is launched -> collected (output drained, child reaped) ->
    released (pipes closed). ``release`` is safe on every path: a child
    that was never waited on is killed if still running and reaped there.
    """

    def __init__(self, process: subprocess.Popen, target: str, program: str):
        self._process = process
        self.target = target
        self.program = program
        self._stdout: Optional[str] = None
        self._stderr = ""
        self._returncode: Optional[int] = None
        self._released = False

    @classmethod
    def launch(cls, argv: list[str], target: str) -> ComputationHandle:
        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise ComputationError(
                "launch", target, f"cannot run {argv[0]!r} ({e.strerror or e})"
            ) from e
        logger.debug("Launched %s (pid %d) for %s", argv[0], process.pid, target)
        return cls(process, target, argv[0])

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def returncode(self) -> Optional[int]:
        return self._returncode

    @property
    def is_collected(self) -> bool:
        return self._stdout is not None and self._returncode is not None

    @property
    def is_released(self) -> bool:
        return self._released

    @property
    def channels_closed(self) -> bool:
        streams = (self._process.stdout, self._process.stderr)
        return all(stream is None or stream.closed for stream in streams)

    def read(self) -> str:
        """Drain the child's output channel until EOF."""
        if self._stdout is not None:
            raise RuntimeError(f"Output for {self.target} was already read")
        try:
            stdout, stderr = self._process.communicate()
        except (OSError, ValueError) as e:
            raise ComputationError("read", self.target, str(e)) from e
        self._stdout = stdout or ""
        self._stderr = stderr or ""
        return self._stdout

    def wait(self) -> int:
        """Block until the child has exited and return its exit status."""
        if self._returncode is not None:
            return self._returncode
        try:
            self._returncode = self._process.wait()
        except OSError as e:
            raise ComputationError("wait", self.target, str(e)) from e
        logger.debug(
            "%s (pid %d) for %s exited with status %d",
            self.program, self.pid, self.target, self._returncode,
        )
        return self._returncode

    def digest(self) -> str:
        """The collected digest. Only valid once read and waited on."""
        if not self.is_collected:
            raise RuntimeError(f"Computation for {self.target} has not been collected")
        if self._returncode != 0:
            detail = f"{self.program} exited with status {self._returncode}"
            if self._stderr.strip():
                detail = f"{detail}: {self._stderr.strip()}"
            raise ComputationError("wait", self.target, detail)
        value = parse_digest_output(self._stdout or "")
        if not value:
            raise ComputationError("read", self.target, f"no digest in {self.program} output")
        return value

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        try:
            if self._returncode is None:
                if self._process.poll() is None:
                    logger.warning(
                        "Killing unfinished digest computation for %s (pid %d)",
                        self.target, self.pid,
                    )
                    self._process.kill()
                self._returncode = self._process.wait()
        finally:
            for stream in (self._process.stdout, self._process.stderr):
                if stream is not None:
                    stream.close()

    def __enter__(self) -> ComputationHandle:
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


class DigestComputer:
    """Runs the configured digest tool over a single file."""

    def __init__(self, command: Optional[str] = None):
        if command is None:
            command = get_settings().digest_command
        self._argv = shlex.split(command)
        if not self._argv:
            raise ValueError("Digest command must not be empty")

    def build_command(self, path: PathArg) -> list[str]:
        return [*self._argv, "--", os.fspath(path)]

    def launch(self, path: PathArg) -> ComputationHandle:
        return ComputationHandle.launch(self.build_command(path), os.fspath(path))

    def compute_digest(self, path: PathArg) -> str:
        with self.launch(path) as handle:
            handle.read()
            handle.wait()
            return handle.digest()
