"""Dataclasses describing parsed commands and their outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class CommandType(Enum):
    BUFFER = "buffer"
    LINE = "line"


class BufferCommand(Enum):
    OPEN = "open"
    PRINT = "print"
    APPEND = "append"
    SAVE = "save"
    NEW = "new"


class LineCommand(Enum):
    REPLACE = "replace"
    INSERT = "insert"
    DELETE = "delete"
    MOVE = "move"
    COPY = "copy"
    GET = "get"
    PRINT = "print"
    RANGE = "range"


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """One invocation's worth of intent, produced by ``CommandParser``."""

    buffer_name: str
    type: CommandType
    buffer_cmd: Optional[BufferCommand] = None
    buffer_arg: Optional[str] = None
    line_cmd: Optional[LineCommand] = None
    line_number: int = 0
    second_line_number: int = 0
    line_content: Optional[str] = None
    scratch_dir: Optional[str] = None

    @property
    def key(self) -> BufferCommand | LineCommand:
        command = self.buffer_cmd if self.type is CommandType.BUFFER else self.line_cmd
        if command is None:
            raise ValueError(f"Command of type '{self.type.value}' has no operation")
        return command


@dataclass(slots=True)
class CommandResult:
    """Result returned from dispatching a ``ParsedCommand``."""

    ok: bool
    status: str = "ok"
    message: Optional[str] = None
    output: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


__all__ = [
    "CommandType",
    "BufferCommand",
    "LineCommand",
    "ParsedCommand",
    "CommandResult",
]
