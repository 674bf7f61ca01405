"""Per-file reader/writer locking."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """A readers-preference lock: many readers or one writer at a time."""

    def __init__(self) -> None:
        self._count_lock = threading.Lock()
        self._write_lock = threading.Semaphore(1)
        self._readers = 0

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        with self._count_lock:
            return self._readers

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock for shared reading."""
        with self._count_lock:
            self._readers += 1
            if self._readers == 1:
                self._write_lock.acquire()
        try:
            yield
        finally:
            with self._count_lock:
                self._readers -= 1
                if self._readers == 0:
                    self._write_lock.release()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock exclusively."""
        self._write_lock.acquire()
        try:
            yield
        finally:
            self._write_lock.release()


class LockRegistry:
    """Hands out one ReadWriteLock per file name, created on first use."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, ReadWriteLock] = {}

    def get(self, name: str) -> ReadWriteLock:
        """Return the lock for name, creating it if needed."""
        with self._guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = ReadWriteLock()
            return lock

    def clear(self) -> None:
        """Forget every lock."""
        with self._guard:
            self._locks.clear()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def __contains__(self, name: object) -> bool:
        with self._guard:
            return name in self._locks