"""Parser for a small shell language: words, redirections, pipes, lists, background."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"
MAXARGS = 10


class OpenFlag(enum.IntFlag):
    """Flags for opening a file, as used by redirections."""

    RDONLY = 0x000
    WRONLY = 0x001
    RDWR = 0x002
    CREATE = 0x200
    TRUNC = 0x400


class ShellSyntaxError(ValueError):
    """The command line could not be parsed."""


@dataclass
class ExecCommand:
    """Run a program with arguments; argv[0] names the program."""

    argv: list[str] = field(default_factory=list)


@dataclass
class RedirCommand:
    """Run a command with descriptor fd opened on file with the given mode."""

    command: "Command"
    file: str
    mode: OpenFlag
    fd: int


@dataclass
class PipeCommand:
    """Connect the output of left to the input of right."""

    left: "Command"
    right: "Command"


@dataclass
class ListCommand:
    """Run left, wait for it, then run right."""

    left: "Command"
    right: "Command"


@dataclass
class BackCommand:
    """Run a command without waiting for it."""

    command: "Command"


Command = Union[ExecCommand, RedirCommand, PipeCommand, ListCommand, BackCommand]

_REDIRECTIONS = {
    "<": (OpenFlag.RDONLY, 0),
    ">": (OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC, 1),
    "+": (OpenFlag.WRONLY | OpenFlag.CREATE, 1),
}


class _Parser:
    def __init__(self, line: str) -> None:
        self.text = line
        self.pos = 0

    def _skip_space(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def peek(self, tokens: str) -> bool:
        self._skip_space()
        return self.pos < len(self.text) and self.text[self.pos] in tokens

    def token(self) -> tuple[str, str]:
        """Consume one token; return its kind and its text.

        Kinds: "" at the end, a symbol character, "+" for ">>", "a" for a word.
        """
        self._skip_space()
        if self.pos >= len(self.text):
            return "", ""
        start = self.pos
        char = self.text[self.pos]
        if char in "|();&<":
            self.pos += 1
            kind = char
        elif char == ">":
            self.pos += 1
            kind = ">"
            if self.pos < len(self.text) and self.text[self.pos] == ">":
                self.pos += 1
                kind = "+"
        else:
            kind = "a"
            while (
                self.pos < len(self.text)
                and self.text[self.pos] not in WHITESPACE
                and self.text[self.pos] not in SYMBOLS
            ):
                self.pos += 1
        word = self.text[start : self.pos]
        self._skip_space()
        return kind, word

    def parse_line(self) -> Command:
        command = self.parse_pipe()
        while self.peek("&"):
            self.token()
            command = BackCommand(command)
        if self.peek(";"):
            self.token()
            command = ListCommand(command, self.parse_line())
        return command

    def parse_pipe(self) -> Command:
        command = self.parse_exec()
        if self.peek("|"):
            self.token()
            command = PipeCommand(command, self.parse_pipe())
        return command

    def parse_redirs(self, command: Command) -> Command:
        while self.peek("<>"):
            kind, _ = self.token()
            file_kind, file = self.token()
            if file_kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            mode, fd = _REDIRECTIONS[kind]
            command = RedirCommand(command, file, mode, fd)
        return command

    def parse_block(self) -> Command:
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.token()
        command = self.parse_line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.token()
        return self.parse_redirs(command)

    def parse_exec(self) -> Command:
        if self.peek("("):
            return self.parse_block()
        exec_command = ExecCommand()
        command = self.parse_redirs(exec_command)
        while not self.peek("|)&;"):
            kind, word = self.token()
            if not kind:
                break
            if kind != "a":
                raise ShellSyntaxError("syntax")
            exec_command.argv.append(word)
            if len(exec_command.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            command = self.parse_redirs(command)
        return command


def parse_command(line: str) -> Command:
    """Parse a whole command line into a command tree."""
    parser = _Parser(line)
    command = parser.parse_line()
    parser.peek("")
    if parser.pos != len(parser.text):
        raise ShellSyntaxError(f"leftovers: {parser.text[parser.pos:]}")
    return command