"""Count lines, words and bytes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import partial
from typing import BinaryIO, Iterable, Iterator

WHITESPACE = frozenset(b" \r\t\n\v")
READ_SIZE = 512


@dataclass(frozen=True)
class Counts:
    """Line, word and byte counts of some data."""

    lines: int = 0
    words: int = 0
    chars: int = 0


def count(data: bytes | bytearray | memoryview | Iterable[bytes]) -> Counts:
    """Count the data, given whole or as a sequence of chunks."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        chunks: Iterable[bytes] = [bytes(data)]
    else:
        chunks = data
    lines = words = chars = 0
    in_word = False
    for chunk in chunks:
        for byte in chunk:
            chars += 1
            if byte == 0x0A:
                lines += 1
            if byte in WHITESPACE:
                in_word = False
            elif not in_word:
                words += 1
                in_word = True
    return Counts(lines, words, chars)


def _chunks(stream: BinaryIO) -> Iterator[bytes]:
    return iter(partial(stream.read, READ_SIZE), b"")


def main(argv: list[str] | None = None) -> int:
    """Print counts for each file named, or for standard input."""
    names = sys.argv[1:] if argv is None else list(argv)
    if not names:
        result = count(_chunks(sys.stdin.buffer))
        print(f"{result.lines} {result.words} {result.chars} ")
        return 0
    for name in names:
        try:
            handle = open(name, "rb")
        except OSError:
            print(f"wc: cannot open {name}")
            return 1
        with handle:
            result = count(_chunks(handle))
        print(f"{result.lines} {result.words} {result.chars} {name}")
    return 0