"""Append-only log of file operations."""

from __future__ import annotations

import os
import threading
from datetime import datetime

from fmsys.protocol import Operation

_TEMPLATES = {
    Operation.READ: "File {file} read at {time} by {client} STATUS : {status}\n",
    Operation.WRITE: "File {file} written at {time} by {client} STATUS : {status}\n",
    Operation.DELETE: "File {file} deleted at {time} by {client} STATUS : {status}\n",
    Operation.RENAME: (
        "File {file} renamed to {new} at {time} by {client} STATUS : {status}\n"
    ),
    Operation.COPY: "File {file} copied at {time} by {client} STATUS : {status}\n",
    Operation.METADATA: (
        "Metadata of file {file} accessed at {time} by {client} STATUS {status}\n"
    ),
    Operation.COMPRESS: (
        "File {file} compression operation at {time} by {client} STATUS : {status}\n"
    ),
    Operation.DECOMPRESS: (
        "File {file} decompression operation at {time} by {client} "
        "STATUS : {status}\n"
    ),
}


def format_entry(
    client: int,
    operation: Operation | int,
    filename: str,
    status: str,
    new_name: str = "",
    when: datetime | None = None,
) -> str:
    """Build one log entry; the timestamp is in asctime form with its newline.

    Raises ValueError for operations that are never logged.
    """
    op = Operation(operation)
    template = _TEMPLATES.get(op)
    if template is None:
        raise ValueError(f"operation {op.name} is not logged")
    moment = when if when is not None else datetime.now()
    return template.format(
        file=filename,
        new=new_name,
        time=moment.ctime() + "\n",
        client=client,
        status=status,
    )


class OperationLogger:
    """Appends operation entries to a log file, safely across threads."""

    def __init__(self, path: str | os.PathLike[str] = "log.txt") -> None:
        self.path = os.fspath(path)
        self._lock = threading.Lock()

    def log(
        self,
        client: int,
        operation: Operation | int,
        filename: str,
        status: str,
        new_name: str = "",
    ) -> str:
        """Append an entry for the operation and return it."""
        entry = format_entry(client, operation, filename, status, new_name)
        with self._lock, open(self.path, "a", encoding="utf-8") as log_file:
            log_file.write(entry)
        return entry