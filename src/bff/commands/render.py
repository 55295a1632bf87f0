"""Formatting for printed buffer lines."""

from __future__ import annotations

from typing import Iterable, Tuple

from bff.buffer import NumberedLine

NUMBER_WIDTH = 4


def format_line(number: int, text: str, *, width: int = NUMBER_WIDTH) -> str:
    return f"{number:0{width}d}: {text}"


def format_lines(lines: Iterable[NumberedLine]) -> Tuple[str, ...]:
    return tuple(format_line(number, text) for number, text in lines)
