"""Buffer model, validation, and scratch persistence."""

from .document import LineBuffer, NumberedLine
from .scratch import ScratchMeta, ScratchStorage, ScratchStorageError
from .store import BufferStore
from .validation import (
    BufferValidationError,
    ensure_buffer_name,
    in_range,
    is_single_line,
)

__all__ = [
    "LineBuffer",
    "NumberedLine",
    "ScratchMeta",
    "ScratchStorage",
    "ScratchStorageError",
    "BufferStore",
    "BufferValidationError",
    "ensure_buffer_name",
    "in_range",
    "is_single_line",
]
