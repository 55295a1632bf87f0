"""bff CLI entry point: parse one command, apply it, report, exit."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO

from bff.buffer import BufferStore, ScratchStorage
from bff.commands import (
    CommandParseError,
    CommandParser,
    CommandResult,
    InfoRequested,
    dispatch,
)
from bff.config import EditorConfig
from bff.runtime import telemetry

logger = telemetry.get_logger("bff.cli")


def build_store(config: EditorConfig) -> BufferStore:
    return BufferStore(ScratchStorage(config.scratch_dir, encoding=config.encoding))


def report(result: CommandResult, *, stdout: TextIO, stderr: TextIO) -> None:
    for line in result.output:
        print(line, file=stdout)
    if not result.message:
        return
    if result.ok:
        print(result.message, file=stdout)
    else:
        print(f"Error: {result.message}", file=stderr)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    parser = CommandParser()
    try:
        command = parser.parse(args)
    except InfoRequested as info:
        print(info.text, file=out, end="")
        return 0
    except CommandParseError as exc:
        logger.debug(f"rejected argv {args!r}: {exc}")
        print(f"Error: {exc}", file=err)
        print(parser.usage(), file=err, end="")
        return 1

    config = EditorConfig.from_env().with_overrides(scratch_dir=command.scratch_dir)
    result = dispatch(build_store(config), command)
    report(result, stdout=out, stderr=err)
    return result.exit_code


def run() -> None:
    """Console-script wrapper turning the return value into the exit status.

    Lines read from non-UTF-8 input carry surrogate escapes; the standard
    streams write them back out as the original bytes.
    """

    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="surrogateescape")
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
