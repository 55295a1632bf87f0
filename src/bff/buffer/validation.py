"""Validation helpers shared across buffer services."""

from __future__ import annotations

import os
from typing import Optional


class BufferValidationError(ValueError):
    """Raised when a buffer name cannot be used as a scratch file stem."""

    def __init__(self, message: str, *, name: Optional[str] = None) -> None:
        super().__init__(message)
        self.name = name


def in_range(line_num: int, line_count: int) -> bool:
    """True when the 1-based ``line_num`` addresses an existing line."""

    return 1 <= line_num <= line_count


def ensure_buffer_name(name: str) -> str:
    if not name:
        raise BufferValidationError("Buffer name cannot be empty", name=name)
    if name in {".", ".."} or "\x00" in name:
        raise BufferValidationError(f"Invalid buffer name '{name}'", name=name)
    separators = {os.sep, "/"} | ({os.altsep} if os.altsep else set())
    if any(sep in name for sep in separators):
        raise BufferValidationError(
            f"Buffer name '{name}' cannot contain a path separator", name=name
        )
    return name


def is_single_line(text: str) -> bool:
    """True when ``text`` would reload as exactly one line."""

    return "\n" not in text
