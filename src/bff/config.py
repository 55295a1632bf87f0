"""Editor configuration resolved from the environment."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "BFF_"
SCRATCH_DIR_NAME = "bff_buffers"


def default_scratch_dir() -> str:
    return os.path.join(tempfile.gettempdir(), SCRATCH_DIR_NAME)


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Where buffers persist between invocations and how files are decoded."""

    scratch_dir: str
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        return cls(
            scratch_dir=env.get(f"{ENV_PREFIX}SCRATCH_DIR") or default_scratch_dir(),
            encoding=env.get(f"{ENV_PREFIX}ENCODING") or "utf-8",
        )

    def with_overrides(self, *, scratch_dir: Optional[str] = None) -> "EditorConfig":
        if not scratch_dir:
            return self
        return replace(self, scratch_dir=scratch_dir)
