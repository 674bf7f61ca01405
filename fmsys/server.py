"""Threaded file server answering client file-operation requests."""

from __future__ import annotations

import argparse
import enum
import os
import socket
import struct
import sys
import threading
from pathlib import Path

from fmsys.locks import LockRegistry
from fmsys.operations import (
    AccessDenied,
    FileOperationError,
    append_text,
    check_file_access,
    compress_file,
    decompress_file,
    delete_file,
    format_metadata,
    read_chunks,
    rename_file,
)
from fmsys.oplog import OperationLogger
from fmsys.protocol import (
    DEFAULT_PORT,
    MAX_CLIENTS,
    OPERATION_SIZE,
    Operation,
    decode_operation,
    decode_text,
)

_FRAME = struct.Struct("<BI")
_POLL_INTERVAL = 0.2


class _Kind(enum.IntEnum):
    DATA = 0
    DONE = 1
    ERROR = 2
    DENIED = 3


_STATUS = {
    Operation.READ: ("File read successfully", "File read failed"),
    Operation.WRITE: ("File write successful", "File write not successful"),
    Operation.DELETE: ("File deleted successfully", "File Deletion Failed"),
    Operation.RENAME: ("File renamed successfully", "File renaming failed"),
    Operation.COPY: ("File copied successfully", "File copy failed"),
    Operation.METADATA: (
        "File metadata accessed successfully",
        "File metadata access failed",
    ),
    Operation.COMPRESS: ("Compression successful", "Compression failed"),
    Operation.DECOMPRESS: ("Decompression success", "Decompression failed"),
}

# Compression requests are not subject to the protected-file check.
_GUARDED = frozenset(_STATUS) - {Operation.COMPRESS, Operation.DECOMPRESS}


def _recv_exact(conn: socket.socket, size: int) -> bytes:
    data = bytearray()
    while len(data) < size:
        piece = conn.recv(size - len(data))
        if not piece:
            raise EOFError("connection closed")
        data += piece
    return bytes(data)


def _send_frame(conn: socket.socket, kind: _Kind, payload: bytes = b"") -> None:
    conn.sendall(_FRAME.pack(kind, len(payload)) + payload)


def _recv_frame(conn: socket.socket) -> tuple[_Kind, bytes]:
    kind, length = _FRAME.unpack(_recv_exact(conn, _FRAME.size))
    return _Kind(kind), _recv_exact(conn, length)


class FileServer:
    """Serves file operations to many clients, one thread per client."""

    def __init__(
        self,
        host: str = "0.0.0.0",
        port: int = DEFAULT_PORT,
        root: str | os.PathLike[str] = ".",
        log_path: str | os.PathLike[str] | None = None,
    ) -> None:
        self.root = Path(root)
        self.logger = OperationLogger(
            log_path if log_path is not None else self.root / "log.txt"
        )
        self.locks = LockRegistry()
        self._slots = threading.BoundedSemaphore(MAX_CLIENTS)
        self._closed = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self._sock.bind((host, port))
            self._sock.listen(MAX_CLIENTS)
        except OSError:
            self._sock.close()
            raise
        self._sock.settimeout(_POLL_INTERVAL)
        self.address: tuple[str, int] = self._sock.getsockname()[:2]

    def __enter__(self) -> FileServer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def serve_forever(self) -> None:
        """Accept clients until close() is called."""
        print("Waiting for connections....", flush=True)
        count = 0
        while not self._closed.is_set():
            if not self._slots.acquire(timeout=_POLL_INTERVAL):
                continue
            try:
                conn, _ = self._sock.accept()
            except TimeoutError:
                self._slots.release()
                continue
            except OSError:
                self._slots.release()
                if self._closed.is_set():
                    break
                raise
            conn.settimeout(None)
            count += 1
            print(f"Connection established with client {count}", flush=True)
            threading.Thread(
                target=self._serve_client, args=(conn, count), daemon=True
            ).start()

    def _serve_client(self, conn: socket.socket, client_id: int) -> None:
        try:
            self.handle_client(conn, client_id)
        finally:
            self._slots.release()

    def handle_client(self, conn: socket.socket, client_id: int) -> None:
        """Run one client's commands until it exits or disconnects."""
        try:
            while True:
                print("Waiting for command from client", flush=True)
                code = _recv_exact(conn, OPERATION_SIZE)
                try:
                    operation = decode_operation(code)
                except ValueError:
                    continue
                if operation is Operation.EXIT:
                    break
                self._dispatch(conn, client_id, operation)
        except (EOFError, OSError, ValueError):
            pass
        finally:
            conn.close()

    def close(self) -> None:
        """Stop accepting clients and forget all file locks."""
        self._closed.set()
        self._sock.close()
        self.locks.clear()

    def _recv_text(self, conn: socket.socket) -> str:
        kind, payload = _recv_frame(conn)
        if kind is not _Kind.DATA:
            raise ValueError(f"unexpected frame {kind.name}")
        return decode_text(payload)

    def _dispatch(
        self, conn: socket.socket, client_id: int, operation: Operation
    ) -> None:
        filename = self._recv_text(conn)
        new_name = self._recv_text(conn) if operation is Operation.RENAME else ""
        text = self._recv_text(conn) if operation is Operation.WRITE else ""
        print(f"File name received {filename}", flush=True)
        success, failure = _STATUS[operation]

        if operation in _GUARDED:
            try:
                check_file_access(filename)
            except AccessDenied as exc:
                print(
                    "Custom signal SIGUSR1 received - Permission Error",
                    file=sys.stderr,
                    flush=True,
                )
                _send_frame(conn, _Kind.DENIED, str(exc).encode("utf-8"))
                return

        try:
            logged, message = self._perform(conn, operation, filename, new_name, text)
        except FileOperationError as exc:
            print(
                "Custom signal SIGUSR2 received - File operation error",
                file=sys.stderr,
                flush=True,
            )
            self.logger.log(client_id, operation, filename, failure, new_name)
            _send_frame(conn, _Kind.ERROR, str(exc).encode("utf-8"))
            return
        self.logger.log(client_id, operation, logged, success, new_name)
        _send_frame(conn, _Kind.DONE, message.encode("utf-8"))

    def _relative(self, path: Path) -> str:
        return Path(os.path.relpath(path, self.root)).as_posix()

    def _perform(
        self,
        conn: socket.socket,
        operation: Operation,
        filename: str,
        new_name: str,
        text: str,
    ) -> tuple[str, str]:
        """Carry out the operation; return the logged name and reply message."""
        path = self.root / filename
        lock = self.locks.get(filename)
        if operation in (Operation.READ, Operation.COPY):
            with lock.read():
                for chunk in read_chunks(path):
                    _send_frame(conn, _Kind.DATA, chunk)
            return filename, ""
        if operation is Operation.METADATA:
            with lock.read():
                metadata = format_metadata(path)
            _send_frame(conn, _Kind.DATA, metadata.encode("utf-8"))
            return filename, ""
        if operation is Operation.WRITE:
            with lock.write():
                append_text(path, text)
            print(text, flush=True)
            return filename, "File written successfully"
        if operation is Operation.DELETE:
            with lock.write():
                delete_file(path)
            return filename, "File deleted successfully\n"
        if operation is Operation.RENAME:
            with lock.write():
                rename_file(path, self.root / new_name)
            return filename, "File renamed successfully"
        if operation is Operation.COMPRESS:
            target = self._relative(compress_file(path))
            print(f"File compressed and saved as: {target}", flush=True)
            return filename, target
        target = self._relative(decompress_file(path))
        print(f"File decompressed and saved as: {target}", flush=True)
        return target, target


def main(argv: list[str] | None = None) -> int:
    """Run the file server until interrupted."""
    parser = argparse.ArgumentParser(
        prog="fmsys-server", description="Serve file operations to clients."
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--root", default=".")
    parser.add_argument("--log", default=None, help="log file (default: ROOT/log.txt)")
    args = parser.parse_args(argv)
    try:
        server = FileServer(args.host, args.port, args.root, args.log)
    except OSError as exc:
        print(f"Binding failed: {exc}", file=sys.stderr)
        return 1
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("Server shutdown initiated by SIGINT")
    finally:
        server.close()
    return 0