from __future__ import annotations

from bff.buffer import LineBuffer


def make_buffer(*lines: str, name: str = "test") -> LineBuffer:
    return LineBuffer.from_lines(name, lines)


def test_replace_updates_line_and_marks_modified() -> None:
    buffer = make_buffer("one", "two")

    assert buffer.replace(2, "TWO") is True

    assert buffer.snapshot() == ("one", "TWO")
    assert buffer.modified is True


def test_replace_rejects_out_of_range() -> None:
    buffer = make_buffer("one")

    assert buffer.replace(0, "x") is False
    assert buffer.replace(2, "x") is False
    assert buffer.snapshot() == ("one",)
    assert buffer.modified is False


def test_insert_before_line() -> None:
    buffer = make_buffer("a", "c")

    assert buffer.insert(2, "b") is True

    assert buffer.snapshot() == ("a", "b", "c")


def test_insert_past_end_appends() -> None:
    buffer = make_buffer("a")

    assert buffer.insert(10, "z") is True

    assert buffer.snapshot() == ("a", "z")


def test_insert_into_empty_buffer() -> None:
    buffer = make_buffer()

    assert buffer.insert(1, "first") is True
    assert buffer.snapshot() == ("first",)


def test_insert_rejects_zero() -> None:
    buffer = make_buffer("a")

    assert buffer.insert(0, "x") is False
    assert buffer.line_count == 1


def test_insert_then_delete_restores_content() -> None:
    buffer = make_buffer("a", "b", "c")
    before = buffer.snapshot()

    assert buffer.insert(2, "inserted")
    assert buffer.delete(2)

    assert buffer.snapshot() == before
    assert buffer.line_count == 3


def test_delete_rejects_out_of_range() -> None:
    buffer = make_buffer("a")

    assert buffer.delete(2) is False
    assert buffer.delete(-1) is False
    assert buffer.snapshot() == ("a",)


def test_move_forward_lands_before_original_position() -> None:
    buffer = make_buffer("a", "b", "c", "d")

    assert buffer.move(1, 3) is True

    assert buffer.snapshot() == ("b", "a", "c", "d")


def test_move_backward() -> None:
    buffer = make_buffer("a", "b", "c", "d")

    assert buffer.move(4, 2) is True

    assert buffer.snapshot() == ("a", "d", "b", "c")


def test_move_twice_restores_two_line_buffer() -> None:
    buffer = make_buffer("first", "second")

    assert buffer.move(2, 1)
    assert buffer.snapshot() == ("second", "first")
    assert buffer.move(2, 1)

    assert buffer.snapshot() == ("first", "second")


def test_move_rejects_target_out_of_range() -> None:
    buffer = make_buffer("a", "b")

    assert buffer.move(1, 3) is False
    assert buffer.move(0, 1) is False
    assert buffer.snapshot() == ("a", "b")


def test_copy_keeps_original() -> None:
    buffer = make_buffer("a", "b", "c")

    assert buffer.copy(3, 1) is True

    assert buffer.snapshot() == ("c", "a", "b", "c")


def test_copy_rejects_out_of_range() -> None:
    buffer = make_buffer("a")

    assert buffer.copy(1, 2) is False
    assert buffer.copy(2, 1) is False


def test_get_and_numbered() -> None:
    buffer = make_buffer("a", "b")

    assert buffer.get(2) == "b"
    assert buffer.get(3) is None
    assert buffer.numbered(1) == (1, "a")
    assert buffer.numbered(0) is None


def test_numbered_range_clamps_silently() -> None:
    buffer = make_buffer("a", "b", "c")

    assert buffer.numbered_range(-5, 99) == [(1, "a"), (2, "b"), (3, "c")]
    assert buffer.numbered_range(2, 2) == [(2, "b")]
    assert buffer.numbered_range(3, 1) == []
    assert make_buffer().numbered_range(1, 10) == []


def test_append_and_clear() -> None:
    buffer = make_buffer()

    assert buffer.append("hello") is True
    assert buffer.snapshot() == ("hello",)
    assert buffer.modified is True

    buffer.clear()
    assert buffer.line_count == 0


def test_multi_line_text_is_rejected() -> None:
    buffer = make_buffer("one")

    assert buffer.append("a\nb") is False
    assert buffer.replace(1, "a\nb") is False
    assert buffer.insert(1, "a\nb") is False

    assert buffer.snapshot() == ("one",)
    assert buffer.modified is False
