"""Buffer store owning every named buffer for one invocation."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from bff.runtime import telemetry

from .document import LineBuffer
from .scratch import TEXT_ERRORS, ScratchStorage, read_lines
from .validation import ensure_buffer_name


class BufferStore:
    """Single owner of the named buffers, backed by scratch storage.

    Buffers are looked up in memory first, then reloaded from scratch storage,
    and finally created empty. Every successful mutation is persisted right
    away so the next invocation sees it.
    """

    def __init__(self, storage: ScratchStorage) -> None:
        self.storage = storage
        self._buffers: Dict[str, LineBuffer] = {}
        self._current: Optional[str] = None

    @property
    def current(self) -> Optional[LineBuffer]:
        if self._current is None:
            return None
        return self._buffers.get(self._current)

    def exists(self, name: str) -> bool:
        return name in self._buffers or self.storage.exists(name)

    def create(self, name: str) -> LineBuffer:
        ensure_buffer_name(name)
        buffer = self._buffers.get(name)
        if buffer is None:
            buffer = LineBuffer(name=name)
            self._buffers[name] = buffer
        return buffer

    def get(self, name: str) -> LineBuffer:
        buffer = self._buffers.get(name)
        if buffer is not None:
            return buffer
        loaded = self.storage.load(name)
        if loaded is not None:
            self._buffers[name] = loaded
            return loaded
        return self.create(name)

    def select(self, name: str) -> bool:
        if not self.exists(name):
            return False
        self.get(name)
        self._current = name
        return True

    def persist(self, buffer: LineBuffer) -> None:
        self.storage.save(buffer)

    def flush(self) -> None:
        for buffer in self._buffers.values():
            self.persist(buffer)

    # File operations -------------------------------------------------

    def open_file(self, name: str, path: str) -> bool:
        with telemetry.span(
            "store::open_file",
            component="store",
            metadata={"buffer": name, "path": path},
        ) as handle:
            buffer = self.create(name)
            try:
                with open(
                    path, "r", encoding=self.storage.encoding, errors=TEXT_ERRORS, newline=""
                ) as source:
                    lines = read_lines(source.read())
            except (OSError, UnicodeError, LookupError) as exc:
                handle.reject(str(exc))
                return False

            buffer.set_lines(lines)
            buffer.file_path = path
            buffer.modified = False
            self.persist(buffer)
            telemetry.record_event(
                "file.opened",
                data={"buffer": name, "path": path, "lines": buffer.line_count},
                logger_name="bff.store",
            )
            return True

    def save_file(self, name: str, path: Optional[str] = None) -> bool:
        with telemetry.span(
            "store::save_file",
            component="store",
            metadata={"buffer": name, "path": path or ""},
        ) as handle:
            buffer = self.get(name)
            target = path or buffer.file_path
            if not target:
                handle.reject("no file path associated with buffer")
                return False

            content = "".join(f"{line}\n" for line in buffer.snapshot())
            try:
                # Encode up front so an unencodable line never truncates the target.
                data = content.encode(self.storage.encoding, TEXT_ERRORS)
                with open(target, "wb") as sink:
                    sink.write(data)
            except (OSError, UnicodeError, LookupError) as exc:
                handle.reject(str(exc))
                return False

            buffer.modified = False
            if path:
                buffer.file_path = path
            self.persist(buffer)
            telemetry.record_event(
                "file.saved",
                data={"buffer": name, "path": target, "lines": buffer.line_count},
                logger_name="bff.store",
            )
            return True

    def new_buffer(self, name: str, path: Optional[str] = None) -> bool:
        buffer = self.create(name)
        buffer.clear()
        buffer.file_path = path or None
        buffer.modified = False
        self.persist(buffer)
        return True

    # Line operations -------------------------------------------------

    def append(self, name: str, text: str) -> bool:
        return self._mutate(name, "append", lambda buf: buf.append(text))

    def replace_line(self, name: str, line_num: int, text: str) -> bool:
        return self._mutate(name, "replace", lambda buf: buf.replace(line_num, text))

    def insert_line(self, name: str, line_num: int, text: str) -> bool:
        return self._mutate(name, "insert", lambda buf: buf.insert(line_num, text))

    def delete_line(self, name: str, line_num: int) -> bool:
        return self._mutate(name, "delete", lambda buf: buf.delete(line_num))

    def move_line(self, name: str, from_line: int, to_line: int) -> bool:
        return self._mutate(name, "move", lambda buf: buf.move(from_line, to_line))

    def copy_line(self, name: str, from_line: int, to_line: int) -> bool:
        return self._mutate(name, "copy", lambda buf: buf.copy(from_line, to_line))

    def _mutate(
        self, name: str, label: str, operation: Callable[[LineBuffer], bool]
    ) -> bool:
        with telemetry.span(
            f"store::{label}", component="store", metadata={"buffer": name}
        ) as handle:
            buffer = self.get(name)
            if not operation(buffer):
                handle.reject(
                    f"bad line number or multi-line text ({buffer.line_count} lines)"
                )
                return False
            self.persist(buffer)
            return True
