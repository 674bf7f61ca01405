"""Client for the file server, with an interactive menu."""

from __future__ import annotations

import argparse
import enum
import os
import socket
import struct
import sys
from typing import Callable

from fmsys.operations import AccessDenied, FileOperationError
from fmsys.protocol import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    Operation,
    encode_operation,
)

_FRAME = struct.Struct("<BI")


class _Kind(enum.IntEnum):
    DATA = 0
    DONE = 1
    ERROR = 2
    DENIED = 3


def _recv_exact(conn: socket.socket, size: int) -> bytes:
    data = bytearray()
    while len(data) < size:
        piece = conn.recv(size - len(data))
        if not piece:
            raise ConnectionError("server closed the connection")
        data += piece
    return bytes(data)


class FileClient:
    """A connection to the file server."""

    def __init__(
        self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, timeout: float = 7.0
    ) -> None:
        self._sock = socket.create_connection((host, port), timeout=timeout)
        self._closed = False

    def __enter__(self) -> FileClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, operation: Operation, *fields: str) -> tuple[bytes, str]:
        message = bytearray(encode_operation(operation))
        for field in fields:
            payload = field.encode("utf-8")
            message += _FRAME.pack(_Kind.DATA, len(payload)) + payload
        self._sock.sendall(bytes(message))
        chunks: list[bytes] = []
        while True:
            kind, length = _FRAME.unpack(_recv_exact(self._sock, _FRAME.size))
            payload = _recv_exact(self._sock, length)
            kind = _Kind(kind)
            if kind is _Kind.DATA:
                chunks.append(payload)
                continue
            reply = payload.decode("utf-8", errors="replace")
            if kind is _Kind.DONE:
                return b"".join(chunks), reply
            if kind is _Kind.DENIED:
                raise AccessDenied(reply)
            raise FileOperationError(reply)

    def read(self, filename: str) -> str:
        """Return the contents of a file on the server."""
        data, _ = self._request(Operation.READ, filename)
        return data.decode("utf-8", errors="replace")

    def write(self, filename: str, text: str) -> str:
        """Append text to a file on the server; return the server's reply."""
        return self._request(Operation.WRITE, filename, text)[1]

    def delete(self, filename: str) -> str:
        """Delete a file on the server; return the server's reply."""
        return self._request(Operation.DELETE, filename)[1]

    def rename(self, filename: str, new_name: str) -> str:
        """Rename a file on the server; return the server's reply."""
        return self._request(Operation.RENAME, filename, new_name)[1]

    def copy(self, filename: str, destination: str | os.PathLike[str]) -> int:
        """Append a server file to a local file; return the bytes copied."""
        data, _ = self._request(Operation.COPY, filename)
        with open(destination, "ab") as handle:
            handle.write(data)
        return len(data)

    def metadata(self, filename: str) -> str:
        """Return the server's description of a file's metadata."""
        data, _ = self._request(Operation.METADATA, filename)
        return data.decode("utf-8", errors="replace")

    def compress(self, filename: str) -> str:
        """Compress a file on the server; return the compressed file's name."""
        return self._request(Operation.COMPRESS, filename)[1]

    def decompress(self, filename: str) -> str:
        """Decompress a file on the server; return the output file's name."""
        return self._request(Operation.DECOMPRESS, filename)[1]

    def close(self) -> None:
        """Tell the server goodbye and close the connection."""
        if self._closed:
            return
        self._closed = True
        try:
            self._sock.sendall(encode_operation(Operation.EXIT))
        except OSError:
            pass
        finally:
            self._sock.close()


_MENU = (
    "\nChoose an option:\n"
    "1. Concurrent File Reading\n"
    "2. Exclusive File Writing\n"
    "3. File Deletion\n"
    "4. File Renaming\n"
    "5. File Copying\n"
    "6. File Metadata Display\n"
    "7. Compression\n"
    "8. Decompression\n"
    "9. Exit"
)


def _ask(prompt: str) -> str:
    return input(prompt).strip()


def _do_read(client: FileClient) -> str:
    return client.read(_ask("File to read : "))


def _do_write(client: FileClient) -> str:
    name = _ask("File to write : ")
    return client.write(name, input("Text to write: "))


def _do_delete(client: FileClient) -> str:
    return client.delete(_ask("File to delete : "))


def _do_rename(client: FileClient) -> str:
    name = _ask("File to rename: ")
    return client.rename(name, _ask("New file name :"))


def _do_copy(client: FileClient) -> str:
    name = _ask("File to copy: ")
    destination = _ask("Enter the name of the file to copy into: ")
    copied = client.copy(name, destination)
    return f"{copied} bytes copied into {destination}"


def _do_metadata(client: FileClient) -> str:
    name = _ask("File to get meta data: ")
    print(f"Requesting meta data for {name}")
    return client.metadata(name)


def _do_compress(client: FileClient) -> str:
    target = client.compress(_ask("File to compress: "))
    return f"File compressed and saved as: {target}"


def _do_decompress(client: FileClient) -> str:
    target = client.decompress(_ask("File to decompress: "))
    return f"File decompressed and saved as: {target}"


_ACTIONS: dict[int, Callable[[FileClient], str]] = {
    Operation.READ: _do_read,
    Operation.WRITE: _do_write,
    Operation.DELETE: _do_delete,
    Operation.RENAME: _do_rename,
    Operation.COPY: _do_copy,
    Operation.METADATA: _do_metadata,
    Operation.COMPRESS: _do_compress,
    Operation.DECOMPRESS: _do_decompress,
}


def main(argv: list[str] | None = None) -> int:
    """Run the interactive client menu."""
    parser = argparse.ArgumentParser(
        prog="fmsys-client", description="Talk to a file server."
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--timeout", type=float, default=7.0)
    args = parser.parse_args(argv)
    try:
        client = FileClient(args.host, args.port, args.timeout)
    except OSError as exc:
        print(f"Connection failed: {exc}", file=sys.stderr)
        return 1
    print("Connected to the server.")
    with client:
        while True:
            print(_MENU)
            try:
                raw = input()
            except EOFError:
                break
            try:
                choice = int(raw.strip())
            except ValueError:
                choice = 0
            if choice == Operation.EXIT:
                break
            action = _ACTIONS.get(choice)
            if action is None:
                print("Invalid option.")
                continue
            try:
                result = action(client)
            except EOFError:
                break
            except (AccessDenied, FileOperationError) as exc:
                print(f"Error: {exc}")
            except (ConnectionError, TimeoutError) as exc:
                print(f"Connection lost: {exc}", file=sys.stderr)
                return 1
            else:
                print(result, end="" if result.endswith("\n") else "\n")
            print("EOF")
    return 0