from __future__ import annotations

from pathlib import Path

from bff.buffer import BufferStore, ScratchStorage
from bff.commands import CommandParser, CommandResult, dispatch


def make_store(tmp_path: Path) -> BufferStore:
    return BufferStore(ScratchStorage(tmp_path / "scratch"))


def run(tmp_path: Path, *argv: str) -> CommandResult:
    command = CommandParser().parse(["-b", "notes", *argv])
    return dispatch(make_store(tmp_path), command)


def test_append_then_print(tmp_path: Path) -> None:
    appended = run(tmp_path, "append", "hello")
    printed = run(tmp_path, "print")

    assert appended.ok
    assert appended.message == "Content appended to buffer 'notes'"
    assert printed.output == ("0001: hello",)
    assert printed.exit_code == 0


def test_line_operations_messages(tmp_path: Path) -> None:
    run(tmp_path, "append", "a")
    run(tmp_path, "append", "b")

    assert run(tmp_path, "line", "1", "replace", "A").message == (
        "Line 1 replaced in buffer 'notes'"
    )
    assert run(tmp_path, "line", "3", "insert", "c").message == (
        "Line inserted at position 3 in buffer 'notes'"
    )
    assert run(tmp_path, "line", "3", "move", "1").message == "Line 3 moved to position 1"
    assert run(tmp_path, "line", "1", "copy", "3").message == "Line 1 copied to position 3"
    assert run(tmp_path, "line", "4", "delete").message == (
        "Line 4 deleted from buffer 'notes'"
    )

    assert run(tmp_path, "print").output == ("0001: c", "0002: A", "0003: c")


def test_out_of_range_line_fails(tmp_path: Path) -> None:
    run(tmp_path, "append", "a")

    result = run(tmp_path, "line", "5", "delete")

    assert result.ok is False
    assert result.exit_code == 1
    assert result.status == "delete_failed"
    assert result.message == "Could not delete line 5"


def test_get_returns_raw_text(tmp_path: Path) -> None:
    run(tmp_path, "append", "raw text")

    assert run(tmp_path, "line", "1", "get").output == ("raw text",)

    missing = run(tmp_path, "line", "2", "get")
    assert missing.ok is False
    assert missing.message == "Line 2 not found in buffer 'notes'"


def test_print_line_and_range(tmp_path: Path) -> None:
    for text in ("a", "b", "c"):
        run(tmp_path, "append", text)

    assert run(tmp_path, "line", "2", "print").output == ("0002: b",)
    assert run(tmp_path, "line", "2", "range", "99").output == ("0002: b", "0003: c")
    assert run(tmp_path, "line", "4", "print").ok is False


def test_save_without_path_fails(tmp_path: Path) -> None:
    run(tmp_path, "append", "a")

    result = run(tmp_path, "save")

    assert result.ok is False
    assert result.message == "Could not save buffer notes"


def test_open_missing_file_fails(tmp_path: Path) -> None:
    result = run(tmp_path, "open", str(tmp_path / "missing.txt"))

    assert result.ok is False
    assert result.message == f"Could not open file {tmp_path / 'missing.txt'}"


def test_new_reports_creation(tmp_path: Path) -> None:
    run(tmp_path, "append", "a")

    result = run(tmp_path, "new")

    assert result.message == "New buffer 'notes' created"
    assert run(tmp_path, "print").output == ()


def test_invalid_buffer_name_becomes_failed_result(tmp_path: Path) -> None:
    command = CommandParser().parse(["-b", "../escape", "append", "x"])

    result = dispatch(make_store(tmp_path), command)

    assert result.ok is False
    assert result.status == "buffer_invalid"


def test_print_on_fresh_store_is_empty(tmp_path: Path) -> None:
    result = run(tmp_path, "print")

    assert result.ok is True
    assert result.output == ()


def test_storage_failure_becomes_failed_result(tmp_path: Path) -> None:
    (tmp_path / "scratch").write_text("not a directory", encoding="utf-8")

    result = run(tmp_path, "append", "x")

    assert result.ok is False
    assert result.status == "storage_error"
    assert result.message.startswith("Could not write scratch file for buffer 'notes'")
    assert result.exit_code == 1


def test_multi_line_append_fails(tmp_path: Path) -> None:
    result = run(tmp_path, "append", "a\nb")

    assert result.ok is False
    assert result.status == "append_failed"
    assert result.message == "Could not append to buffer 'notes'"
