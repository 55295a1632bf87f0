"""Command parsing, dispatch, and output formatting."""

from .dispatch import dispatch
from .models import (
    BufferCommand,
    CommandResult,
    CommandType,
    LineCommand,
    ParsedCommand,
)
from .parser import USAGE, CommandParseError, CommandParser, InfoRequested
from .render import format_line, format_lines

__all__ = [
    "dispatch",
    "BufferCommand",
    "CommandResult",
    "CommandType",
    "LineCommand",
    "ParsedCommand",
    "CommandParser",
    "CommandParseError",
    "InfoRequested",
    "USAGE",
    "format_line",
    "format_lines",
]
