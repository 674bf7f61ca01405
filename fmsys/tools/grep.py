"""A small grep supporting only the ^ . * $ operators."""

from __future__ import annotations

import sys
from typing import BinaryIO, Iterable, Iterator

MAX_LINE = 1023
_ENCODING = "latin-1"


def _match_here(pattern: str, pi: int, text: str, ti: int) -> bool:
    """Match pattern[pi:] at the very start of text[ti:]."""
    while True:
        if pi == len(pattern):
            return True
        if pi + 1 < len(pattern) and pattern[pi + 1] == "*":
            return _match_star(pattern[pi], pattern, pi + 2, text, ti)
        if pattern[pi] == "$" and pi + 1 == len(pattern):
            return ti == len(text)
        if ti < len(text) and pattern[pi] in (".", text[ti]):
            pi += 1
            ti += 1
            continue
        return False


def _match_star(char: str, pattern: str, pi: int, text: str, ti: int) -> bool:
    """Match char* followed by pattern[pi:] at the start of text[ti:]."""
    while True:
        if _match_here(pattern, pi, text, ti):
            return True
        if ti < len(text) and (text[ti] == char or char == "."):
            ti += 1
            continue
        return False


def match(pattern: str, text: str) -> bool:
    """Return whether pattern matches anywhere in text."""
    if pattern.startswith("^"):
        return _match_here(pattern, 1, text, 0)
    return any(_match_here(pattern, 0, text, start) for start in range(len(text) + 1))


def grep_lines(pattern: str, lines: Iterable[str]) -> Iterator[str]:
    """Yield the lines that match pattern; a trailing newline is not matched."""
    for line in lines:
        body = line[:-1] if line.endswith("\n") else line
        if match(pattern, body):
            yield line


def _complete_lines(stream: BinaryIO) -> Iterator[bytes]:
    """Yield newline-terminated lines; stop at a line longer than the buffer."""
    pending = b""
    while True:
        chunk = stream.read(MAX_LINE - len(pending))
        if not chunk:
            return
        pending += chunk
        *lines, pending = pending.split(b"\n")
        for line in lines:
            yield line + b"\n"


def _grep_stream(pattern: str, stream: BinaryIO, out: BinaryIO) -> None:
    lines = (line.decode(_ENCODING) for line in _complete_lines(stream))
    for line in grep_lines(pattern, lines):
        out.write(line.encode(_ENCODING))
    out.flush()


def main(argv: list[str] | None = None) -> int:
    """Print the lines of the files (or standard input) that match a pattern."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("usage: grep pattern [file ...]", file=sys.stderr)
        return 1
    pattern, *names = args
    out = sys.stdout.buffer
    if not names:
        _grep_stream(pattern, sys.stdin.buffer, out)
        return 0
    for name in names:
        try:
            handle = open(name, "rb")
        except OSError:
            out.write(f"grep: cannot open {name}\n".encode(_ENCODING, "replace"))
            out.flush()
            return 1
        with handle:
            _grep_stream(pattern, handle, out)
    return 0