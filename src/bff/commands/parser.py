"""Turn ``argv`` into a ``ParsedCommand``.

argparse does the tokenising; its error path is redirected into
``CommandParseError`` so the caller decides how to report and exit.
"""

from __future__ import annotations

import argparse
from typing import NoReturn, Optional, Sequence

from bff import __version__

from .models import BufferCommand, CommandType, LineCommand, ParsedCommand

USAGE = f"""\
bff: {__version__}

Usage: bff -b [BUFFER NAME] [BUFFER COMMAND|LINE COMMAND] [COMMAND ARGUMENT 1] [COMMAND ARGUMENT 2]

Usage examples:

Buffer commands:
bff -b "test" open "/path/to/file.txt"
bff -b "test" print
bff -b "test" append "new content"
bff -b "test" save "/new/path/file.txt"
bff -b "test" new "/path/to/newfile.txt"

Line commands:
bff -b "test" line 10 replace "return 0;"
bff -b "test" line 5 insert "// New comment"
bff -b "test" line 3 delete
bff -b "test" line 7 move 2
bff -b "test" line 4 copy 8
bff -b "test" line 6 get
bff -b "test" line 2 print
bff -b "test" line 1 range 10

Options:
--scratch-dir DIR   keep buffer scratch files in DIR (env: BFF_SCRATCH_DIR)
-h, --help          print this help and exit
--version, -V       print the version and exit
"""


class CommandParseError(ValueError):
    """Raised when ``argv`` does not describe a valid command."""


class InfoRequested(Exception):
    """Raised by ``--help``/``--version``; ``text`` is what to print before exiting 0."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text


class _RaisingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise CommandParseError(message)


class _ShowTextAction(argparse.Action):
    def __init__(self, option_strings, dest, text: str = "", **kwargs) -> None:
        super().__init__(option_strings, dest, nargs=0, default=argparse.SUPPRESS, **kwargs)
        self.text = text

    def __call__(self, parser, namespace, values, option_string=None) -> NoReturn:
        raise InfoRequested(self.text)


_BUFFER_ARGS = {
    BufferCommand.OPEN: ("path", None),
    BufferCommand.PRINT: None,
    BufferCommand.APPEND: ("text", None),
    BufferCommand.SAVE: ("path", "?"),
    BufferCommand.NEW: ("path", "?"),
}

_LINE_ARGS = {
    LineCommand.REPLACE: ("text", str),
    LineCommand.INSERT: ("text", str),
    LineCommand.DELETE: None,
    LineCommand.MOVE: ("target", int),
    LineCommand.COPY: ("target", int),
    LineCommand.GET: None,
    LineCommand.PRINT: None,
    LineCommand.RANGE: ("end", int),
}


class CommandParser:
    """Builds the argparse tree once and validates what it produces."""

    def __init__(self) -> None:
        self._parser = self._build()

    @staticmethod
    def usage() -> str:
        return USAGE

    def _build(self) -> argparse.ArgumentParser:
        parser = _RaisingArgumentParser(prog="bff", add_help=False)
        parser.add_argument("-h", "--help", action=_ShowTextAction, text=USAGE)
        parser.add_argument(
            "-V", "--version", action=_ShowTextAction, text=f"bff {__version__}\n"
        )
        parser.add_argument("-b", "--buffer", dest="buffer_name", required=True)
        parser.add_argument("--scratch-dir", dest="scratch_dir", default=None)

        commands = parser.add_subparsers(dest="command", parser_class=_RaisingArgumentParser)
        for command, arg_spec in _BUFFER_ARGS.items():
            sub = commands.add_parser(command.value, add_help=False)
            if arg_spec is not None:
                dest, nargs = arg_spec
                sub.add_argument(dest, nargs=nargs, default=None)

        line = commands.add_parser("line", add_help=False)
        line.add_argument("number", type=int)
        operations = line.add_subparsers(dest="operation", parser_class=_RaisingArgumentParser)
        operations.required = True
        for command, arg_spec in _LINE_ARGS.items():
            sub = operations.add_parser(command.value, add_help=False)
            if arg_spec is not None:
                dest, kind = arg_spec
                sub.add_argument(dest, type=kind)
        return parser

    def parse(self, argv: Sequence[str]) -> ParsedCommand:
        namespace = self._parser.parse_args(list(argv))
        command = self._from_namespace(namespace)
        self.validate(command)
        return command

    def validate(self, command: ParsedCommand) -> None:
        if not command.buffer_name:
            raise CommandParseError("Buffer name cannot be empty")
        if command.type is CommandType.LINE and command.line_number < 1:
            raise CommandParseError(
                f"Line number must be 1 or greater, got {command.line_number}"
            )

    def _from_namespace(self, namespace: argparse.Namespace) -> ParsedCommand:
        name = namespace.buffer_name
        scratch_dir: Optional[str] = namespace.scratch_dir

        if namespace.command is None:
            return ParsedCommand(
                buffer_name=name,
                type=CommandType.BUFFER,
                buffer_cmd=BufferCommand.PRINT,
                scratch_dir=scratch_dir,
            )

        if namespace.command != "line":
            buffer_cmd = BufferCommand(namespace.command)
            arg_spec = _BUFFER_ARGS[buffer_cmd]
            return ParsedCommand(
                buffer_name=name,
                type=CommandType.BUFFER,
                buffer_cmd=buffer_cmd,
                buffer_arg=getattr(namespace, arg_spec[0]) if arg_spec else None,
                scratch_dir=scratch_dir,
            )

        line_cmd = LineCommand(namespace.operation)
        second_line_number = 0
        line_content: Optional[str] = None
        arg_spec = _LINE_ARGS[line_cmd]
        if arg_spec is not None:
            dest, kind = arg_spec
            if kind is int:
                second_line_number = getattr(namespace, dest)
            else:
                line_content = getattr(namespace, dest)
        return ParsedCommand(
            buffer_name=name,
            type=CommandType.LINE,
            line_cmd=line_cmd,
            line_number=namespace.number,
            second_line_number=second_line_number,
            line_content=line_content,
            scratch_dir=scratch_dir,
        )


__all__ = ["CommandParser", "CommandParseError", "InfoRequested", "USAGE"]
