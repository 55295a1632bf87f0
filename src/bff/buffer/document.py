"""Core line-buffer data structure for bff."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .validation import in_range, is_single_line

NumberedLine = Tuple[int, str]


@dataclass(slots=True)
class LineBuffer:
    """Named, ordered list of text lines.

    Line numbers in the public API are 1-based. Operations report bad line
    numbers, and text containing a newline, by returning ``False`` (or
    ``None``) instead of raising. Every successful mutation marks the buffer
    as modified.
    """

    name: str
    _lines: List[str] = field(default_factory=list)
    file_path: Optional[str] = None
    modified: bool = False

    @classmethod
    def from_lines(
        cls,
        name: str,
        lines: Iterable[str],
        *,
        file_path: Optional[str] = None,
        modified: bool = False,
    ) -> "LineBuffer":
        return cls(name=name, _lines=list(lines), file_path=file_path, modified=modified)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def set_lines(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)

    def clear(self) -> None:
        self._lines.clear()

    def append(self, text: str) -> bool:
        if not is_single_line(text):
            return False
        self._lines.append(text)
        self.modified = True
        return True

    def replace(self, line_num: int, text: str) -> bool:
        if not (in_range(line_num, self.line_count) and is_single_line(text)):
            return False
        self._lines[line_num - 1] = text
        self.modified = True
        return True

    def insert(self, line_num: int, text: str) -> bool:
        """Insert ``text`` before ``line_num``; past the end appends."""

        if line_num < 1 or not is_single_line(text):
            return False
        if line_num > self.line_count:
            self._lines.append(text)
        else:
            self._lines.insert(line_num - 1, text)
        self.modified = True
        return True

    def delete(self, line_num: int) -> bool:
        if not in_range(line_num, self.line_count):
            return False
        del self._lines[line_num - 1]
        self.modified = True
        return True

    def move(self, from_line: int, to_line: int) -> bool:
        """Move a line so it lands before the original line ``to_line``.

        Removing the source shifts every later line up by one, so a target
        after the source is decremented before re-inserting.
        """

        count = self.line_count
        if not (in_range(from_line, count) and in_range(to_line, count)):
            return False
        text = self._lines.pop(from_line - 1)
        if to_line > from_line:
            to_line -= 1
        self._lines.insert(to_line - 1, text)
        self.modified = True
        return True

    def copy(self, from_line: int, to_line: int) -> bool:
        count = self.line_count
        if not (in_range(from_line, count) and in_range(to_line, count)):
            return False
        self._lines.insert(to_line - 1, self._lines[from_line - 1])
        self.modified = True
        return True

    def get(self, line_num: int) -> Optional[str]:
        if not in_range(line_num, self.line_count):
            return None
        return self._lines[line_num - 1]

    def numbered(self, line_num: int) -> Optional[NumberedLine]:
        text = self.get(line_num)
        if text is None:
            return None
        return (line_num, text)

    def numbered_range(self, start: int, end: int) -> List[NumberedLine]:
        """Return ``(number, text)`` pairs for ``start..end`` clamped to the buffer."""

        start = max(start, 1)
        end = min(end, self.line_count)
        return [(num, self._lines[num - 1]) for num in range(start, end + 1)]

    def numbered_lines(self) -> List[NumberedLine]:
        return self.numbered_range(1, self.line_count)
