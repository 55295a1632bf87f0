"""Map parsed commands onto buffer store operations."""

from __future__ import annotations

from typing import Callable, Dict

from bff.buffer import BufferStore, BufferValidationError, ScratchStorageError
from bff.runtime import telemetry

from .models import BufferCommand, CommandResult, LineCommand, ParsedCommand
from .render import format_line, format_lines

CommandHandler = Callable[[BufferStore, ParsedCommand], CommandResult]


def dispatch(store: BufferStore, command: ParsedCommand) -> CommandResult:
    """Run ``command`` against ``store`` and describe the outcome."""

    handler = _COMMAND_HANDLERS[command.key]
    with telemetry.span(
        f"command::{command.key.value}",
        component="commands",
        metadata={"buffer": command.buffer_name, "type": command.type.value},
    ):
        try:
            return handler(store, command)
        except BufferValidationError as exc:
            return _failure(command, "buffer_invalid", str(exc))
        except ScratchStorageError as exc:
            return _failure(command, "storage_error", str(exc))


def _failure(command: ParsedCommand, status: str, message: str) -> CommandResult:
    telemetry.record_event(
        "command.failed",
        level="warning",
        data={
            "buffer": command.buffer_name,
            "command": command.key.value,
            "status": status,
            "reason": message,
        },
        logger_name="bff.commands",
    )
    return CommandResult(ok=False, status=status, message=message)


def _outcome(
    command: ParsedCommand, ok: bool, status: str, success: str, failure: str
) -> CommandResult:
    if not ok:
        return _failure(command, f"{status}_failed", failure)
    return CommandResult(ok=True, status=status, message=success)


# Buffer commands ------------------------------------------------------


def _handle_open(store: BufferStore, command: ParsedCommand) -> CommandResult:
    path = command.buffer_arg or ""
    return _outcome(
        command,
        bool(path) and store.open_file(command.buffer_name, path),
        "open",
        f"File opened in buffer '{command.buffer_name}'",
        f"Could not open file {path}",
    )


def _handle_print(store: BufferStore, command: ParsedCommand) -> CommandResult:
    buffer = store.get(command.buffer_name)
    return CommandResult(
        ok=True, status="print", output=format_lines(buffer.numbered_lines())
    )


def _handle_append(store: BufferStore, command: ParsedCommand) -> CommandResult:
    return _outcome(
        command,
        store.append(command.buffer_name, command.buffer_arg or ""),
        "append",
        f"Content appended to buffer '{command.buffer_name}'",
        f"Could not append to buffer '{command.buffer_name}'",
    )


def _handle_save(store: BufferStore, command: ParsedCommand) -> CommandResult:
    return _outcome(
        command,
        store.save_file(command.buffer_name, command.buffer_arg),
        "save",
        f"Buffer '{command.buffer_name}' saved",
        f"Could not save buffer {command.buffer_name}",
    )


def _handle_new(store: BufferStore, command: ParsedCommand) -> CommandResult:
    return _outcome(
        command,
        store.new_buffer(command.buffer_name, command.buffer_arg),
        "new",
        f"New buffer '{command.buffer_name}' created",
        "Could not create new buffer",
    )


# Line commands --------------------------------------------------------


def _handle_replace(store: BufferStore, command: ParsedCommand) -> CommandResult:
    n = command.line_number
    return _outcome(
        command,
        store.replace_line(command.buffer_name, n, command.line_content or ""),
        "replace",
        f"Line {n} replaced in buffer '{command.buffer_name}'",
        f"Could not replace line {n}",
    )


def _handle_insert(store: BufferStore, command: ParsedCommand) -> CommandResult:
    n = command.line_number
    return _outcome(
        command,
        store.insert_line(command.buffer_name, n, command.line_content or ""),
        "insert",
        f"Line inserted at position {n} in buffer '{command.buffer_name}'",
        f"Could not insert line at {n}",
    )


def _handle_delete(store: BufferStore, command: ParsedCommand) -> CommandResult:
    n = command.line_number
    return _outcome(
        command,
        store.delete_line(command.buffer_name, n),
        "delete",
        f"Line {n} deleted from buffer '{command.buffer_name}'",
        f"Could not delete line {n}",
    )


def _handle_move(store: BufferStore, command: ParsedCommand) -> CommandResult:
    n, target = command.line_number, command.second_line_number
    return _outcome(
        command,
        store.move_line(command.buffer_name, n, target),
        "move",
        f"Line {n} moved to position {target}",
        "Could not move line",
    )


def _handle_copy(store: BufferStore, command: ParsedCommand) -> CommandResult:
    n, target = command.line_number, command.second_line_number
    return _outcome(
        command,
        store.copy_line(command.buffer_name, n, target),
        "copy",
        f"Line {n} copied to position {target}",
        "Could not copy line",
    )


def _missing_line(command: ParsedCommand, status: str) -> CommandResult:
    return _failure(
        command,
        status,
        f"Line {command.line_number} not found in buffer '{command.buffer_name}'",
    )


def _handle_get(store: BufferStore, command: ParsedCommand) -> CommandResult:
    text = store.get(command.buffer_name).get(command.line_number)
    if text is None:
        return _missing_line(command, "get_failed")
    return CommandResult(ok=True, status="get", output=(text,))


def _handle_print_line(store: BufferStore, command: ParsedCommand) -> CommandResult:
    line = store.get(command.buffer_name).numbered(command.line_number)
    if line is None:
        return _missing_line(command, "print_line_failed")
    return CommandResult(ok=True, status="print_line", output=(format_line(*line),))


def _handle_range(store: BufferStore, command: ParsedCommand) -> CommandResult:
    buffer = store.get(command.buffer_name)
    lines = buffer.numbered_range(command.line_number, command.second_line_number)
    return CommandResult(ok=True, status="range", output=format_lines(lines))


_COMMAND_HANDLERS: Dict[BufferCommand | LineCommand, CommandHandler] = {
    BufferCommand.OPEN: _handle_open,
    BufferCommand.PRINT: _handle_print,
    BufferCommand.APPEND: _handle_append,
    BufferCommand.SAVE: _handle_save,
    BufferCommand.NEW: _handle_new,
    LineCommand.REPLACE: _handle_replace,
    LineCommand.INSERT: _handle_insert,
    LineCommand.DELETE: _handle_delete,
    LineCommand.MOVE: _handle_move,
    LineCommand.COPY: _handle_copy,
    LineCommand.GET: _handle_get,
    LineCommand.PRINT: _handle_print_line,
    LineCommand.RANGE: _handle_range,
}


__all__ = ["dispatch", "CommandHandler"]
