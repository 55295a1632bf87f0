"""Scratch-file persistence that carries buffers across invocations.

Each buffer lives in ``<scratch_dir>/<name>.tmp`` (one text line per file
line) with a ``<name>.meta.json`` sidecar holding the associated file path
and the modified flag.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from bff.runtime import telemetry

from .document import LineBuffer
from .validation import ensure_buffer_name

LINES_SUFFIX = ".tmp"
META_SUFFIX = ".meta.json"
# Bytes that do not decode (e.g. non-UTF-8 argv or files) round-trip unchanged.
TEXT_ERRORS = "surrogateescape"


class ScratchStorageError(OSError):
    """Raised when a buffer cannot be written to or read from scratch storage."""


@dataclass(slots=True)
class ScratchMeta:
    file_path: Optional[str] = None
    modified: bool = False


def write_text_atomic(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write ``content`` to ``path`` through a temp file and ``os.replace``.

    The temp file never outlives a failed write, whatever the failure.
    """

    temp_name: Optional[str] = None
    replaced = False
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding=encoding,
            errors=TEXT_ERRORS,
            newline="",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".part",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, path)
        replaced = True
    finally:
        if not replaced and temp_name is not None and os.path.exists(temp_name):
            os.remove(temp_name)


class ScratchStorage:
    """Reads and writes buffers under a single scratch directory."""

    def __init__(self, directory: os.PathLike[str] | str, *, encoding: str = "utf-8") -> None:
        self.directory = Path(directory)
        self.encoding = encoding
        self.logger = telemetry.get_logger("bff.scratch")

    def lines_path(self, name: str) -> Path:
        return self.directory / f"{ensure_buffer_name(name)}{LINES_SUFFIX}"

    def meta_path(self, name: str) -> Path:
        return self.directory / f"{ensure_buffer_name(name)}{META_SUFFIX}"

    def exists(self, name: str) -> bool:
        return self.lines_path(name).is_file()

    def names(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(
            entry.name[: -len(LINES_SUFFIX)]
            for entry in self.directory.iterdir()
            if entry.is_file() and entry.name.endswith(LINES_SUFFIX)
        )

    def save(self, buffer: LineBuffer) -> None:
        lines_path = self.lines_path(buffer.name)
        meta = {"file_path": buffer.file_path, "modified": buffer.modified}
        content = "".join(f"{line}\n" for line in buffer.snapshot())
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            write_text_atomic(lines_path, content, encoding=self.encoding)
            write_text_atomic(
                self.meta_path(buffer.name), json.dumps(meta, indent=2), encoding="utf-8"
            )
        except (OSError, UnicodeError, LookupError) as exc:
            telemetry.record_event(
                "buffer.persist_failed",
                level="error",
                data={"buffer": buffer.name, "reason": str(exc)},
                logger_name="bff.scratch",
            )
            raise ScratchStorageError(
                f"Could not write scratch file for buffer '{buffer.name}': {exc}"
            ) from exc

        telemetry.record_event(
            "buffer.persisted",
            level="debug",
            data={"buffer": buffer.name, "lines": buffer.line_count},
            logger_name="bff.scratch",
        )

    def load(self, name: str) -> Optional[LineBuffer]:
        """Return the persisted buffer, or ``None`` when no scratch file exists."""

        lines_path = self.lines_path(name)
        if not lines_path.is_file():
            return None
        try:
            with open(
                lines_path, "r", encoding=self.encoding, errors=TEXT_ERRORS, newline=""
            ) as handle:
                lines = read_lines(handle.read())
        except (OSError, UnicodeError, LookupError) as exc:
            telemetry.record_event(
                "buffer.load_failed",
                level="error",
                data={"buffer": name, "reason": str(exc)},
                logger_name="bff.scratch",
            )
            raise ScratchStorageError(
                f"Could not read scratch file for buffer '{name}': {exc}"
            ) from exc
        meta = self._load_meta(name)
        return LineBuffer.from_lines(
            name, lines, file_path=meta.file_path, modified=meta.modified
        )

    def discard(self, name: str) -> None:
        for path in (self.lines_path(name), self.meta_path(name)):
            path.unlink(missing_ok=True)

    def _load_meta(self, name: str) -> ScratchMeta:
        meta_path = self.meta_path(name)
        if not meta_path.is_file():
            return ScratchMeta()
        try:
            with open(meta_path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (ValueError, OSError) as exc:
            self.logger.warning(f"Ignoring unreadable scratch metadata {meta_path}: {exc}")
            return ScratchMeta()

        if not isinstance(data, dict):
            self.logger.warning(f"Scratch metadata {meta_path} is not a mapping, ignoring")
            return ScratchMeta()

        file_path = data.get("file_path")
        return ScratchMeta(
            file_path=file_path if isinstance(file_path, str) and file_path else None,
            modified=bool(data.get("modified", False)),
        )


def read_lines(content: str) -> List[str]:
    """Split on ``\\n`` only; a trailing newline does not start a new line.

    Carriage returns stay part of the line so CRLF files save back unchanged.
    """

    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines
