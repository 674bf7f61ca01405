"""File operations carried out by the server on behalf of clients."""

from __future__ import annotations

import os
import stat
import time
import zlib
from pathlib import Path
from typing import BinaryIO, Iterator

from fmsys.protocol import CHUNK_SIZE

PROTECTED_FILE = "log.txt"
COMPRESSED_PREFIX = "compressed_"
DECOMPRESSED_PREFIX = "decompressed_"
MAX_COMPRESSED_SOURCE_LEN = 1004
MAX_DECOMPRESSED_SOURCE_LEN = 1009
DECOMPRESSION_RATIO_LIMIT = 4

_PERMISSION_BITS = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


class AccessDenied(PermissionError):
    """The requested file may not be touched by clients."""


class FileOperationError(OSError):
    """A file operation failed."""


def check_file_access(filename: str) -> str:
    """Return filename if clients may use it; raise AccessDenied otherwise."""
    if filename == PROTECTED_FILE:
        raise AccessDenied(f"access to {filename} is not permitted")
    return filename


def _iter_lines(handle: BinaryIO) -> Iterator[bytes]:
    with handle:
        while chunk := handle.readline(CHUNK_SIZE - 1):
            yield chunk


def read_chunks(path: str | os.PathLike[str]) -> Iterator[bytes]:
    """Yield the file's lines, each split into pieces of at most 1023 bytes.

    The file is opened at once, so a missing file raises FileOperationError
    here rather than on iteration.
    """
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise FileOperationError(f"cannot open {os.fspath(path)}: {exc}") from exc
    return _iter_lines(handle)


def append_text(path: str | os.PathLike[str], text: str) -> int:
    """Append text to the file, creating it if needed; return bytes written."""
    data = text.encode("utf-8")
    try:
        with open(path, "ab") as handle:
            handle.write(data)
    except OSError as exc:
        raise FileOperationError(f"cannot write {os.fspath(path)}: {exc}") from exc
    return len(data)


def delete_file(path: str | os.PathLike[str]) -> None:
    """Remove the file."""
    try:
        os.remove(path)
    except OSError as exc:
        raise FileOperationError(f"cannot delete {os.fspath(path)}: {exc}") from exc


def rename_file(
    path: str | os.PathLike[str], new_name: str | os.PathLike[str]
) -> Path:
    """Rename path to new_name and return the new path."""
    try:
        os.rename(path, new_name)
    except OSError as exc:
        raise FileOperationError(
            f"cannot rename {os.fspath(path)} to {os.fspath(new_name)}: {exc}"
        ) from exc
    return Path(new_name)


def format_metadata(path: str | os.PathLike[str]) -> str:
    """Describe the file's size, permissions and times."""
    try:
        info = os.stat(path)
    except OSError as exc:
        raise FileOperationError(
            f"cannot read metadata of {os.fspath(path)}: {exc}"
        ) from exc
    permissions = "".join(
        char if info.st_mode & bit else "-" for bit, char in _PERMISSION_BITS
    )
    return (
        f"File Size: {info.st_size} bytes\n"
        f"Permissions: {permissions}\n"
        f"Last Access Time: {time.ctime(info.st_atime)}\n"
        f"Last Modification Time: {time.ctime(info.st_mtime)}\n"
        f"Last Status Change Time: {time.ctime(info.st_ctime)}\n"
    )


def compressed_name(filename: str) -> str:
    """Name of the file that holds the compressed form of filename."""
    return COMPRESSED_PREFIX + filename[:MAX_COMPRESSED_SOURCE_LEN]


def decompressed_name(filename: str) -> str:
    """Name of the file that holds the decompressed form of filename."""
    return DECOMPRESSED_PREFIX + filename[:MAX_DECOMPRESSED_SOURCE_LEN]


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileOperationError(f"cannot read {path}: {exc}") from exc


def _write_bytes(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise FileOperationError(f"cannot create {path}: {exc}") from exc


def compress_file(path: str | os.PathLike[str]) -> Path:
    """Compress the file with zlib into a sibling file; return its path."""
    source = Path(path)
    data = _read_bytes(source)
    target = source.with_name(compressed_name(source.name))
    _write_bytes(target, zlib.compress(data))
    return target


def decompress_file(path: str | os.PathLike[str]) -> Path:
    """Decompress a zlib file into a sibling file; return its path.

    The output may be at most four times the compressed size.
    """
    source = Path(path)
    data = _read_bytes(source)
    decompressor = zlib.decompressobj()
    try:
        output = decompressor.decompress(data, DECOMPRESSION_RATIO_LIMIT * len(data))
    except zlib.error as exc:
        raise FileOperationError(f"decompression of {source} failed: {exc}") from exc
    if not decompressor.eof:
        raise FileOperationError(
            f"decompression of {source} failed: data incomplete or too large"
        )
    target = source.with_name(decompressed_name(source.name))
    _write_bytes(target, output)
    return target