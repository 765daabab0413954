"""issame configuration."""

from __future__ import annotations

import shlex

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class IsSameSettings(BaseSettings):
    # Any command printing a sha512sum-format line, e.g. gsha512sum on macOS.
    digest_command: str = Field(default="sha512sum", min_length=1)
    verbose: bool = False
    log_level: str = "WARNING"

    model_config = {"env_prefix": "ISSAME_"}

    @field_validator("digest_command")
    @classmethod
    def _check_digest_command(cls, value: str) -> str:
        try:
            argv = shlex.split(value)
        except ValueError as e:
            raise ValueError(f"cannot parse digest command {value!r}: {e}") from e
        if not argv:
            raise ValueError("digest command must not be empty")
        return value


def get_settings() -> IsSameSettings:
    return IsSameSettings()
