"""Wire format shared by the file server and its clients."""

from __future__ import annotations

import enum
import struct

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
BUFFER_SIZE = 4096
CHUNK_SIZE = 1024
MAX_CLIENTS = 10

_OPERATION_FORMAT = struct.Struct("<i")
OPERATION_SIZE = _OPERATION_FORMAT.size


class Operation(enum.IntEnum):
    """Commands a client can ask the server to perform."""

    READ = 1
    WRITE = 2
    DELETE = 3
    RENAME = 4
    COPY = 5
    METADATA = 6
    COMPRESS = 7
    DECOMPRESS = 8
    EXIT = 9


def encode_operation(operation: Operation | int) -> bytes:
    """Encode an operation code as the four bytes sent on the wire."""
    return _OPERATION_FORMAT.pack(Operation(operation))


def decode_operation(data: bytes) -> Operation:
    """Decode four bytes from the wire into an Operation.

    Raises ValueError if the data has the wrong size or names no operation.
    """
    if len(data) != OPERATION_SIZE:
        raise ValueError(
            f"operation code must be {OPERATION_SIZE} bytes, got {len(data)}"
        )
    (value,) = _OPERATION_FORMAT.unpack(data)
    return Operation(value)


def decode_text(data: bytes) -> str:
    """Decode a NUL-terminated, possibly padded, text field."""
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")