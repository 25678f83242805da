"""Readers-writer lock guarding the catalog cache.

Lookups vastly outnumber cache writes (one write per first-loaded
namespace/group/locale), so lookups share a read lock while population,
``add_lines`` and ``set_loaded`` take the exclusive write lock.

Properties:
- Multiple concurrent readers
- Exclusive writer access
- Writer preference, so a burst of lookups cannot starve population
- Reentrant read locks (same thread may nest read sections)

Read-to-write upgrades and write-to-read downgrades raise RuntimeError:
a thread must release one side before taking the other. The catalog cache
follows that rule with double-checked locking.

Python 3.13+.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass  # shared
        >>> with lock.write():
        ...     pass  # exclusive
    """

    __slots__ = (
        "_active_readers",
        "_active_writer",
        "_condition",
        "_reader_threads",
        "_waiting_writers",
    )

    def __init__(self) -> None:
        """Initialize readers-writer lock."""
        self._condition = threading.Condition(threading.Lock())
        self._active_readers: int = 0
        self._active_writer: int | None = None
        self._waiting_writers: int = 0
        # thread id -> nested read acquisitions
        self._reader_threads: dict[int, int] = {}

    @contextmanager
    def read(self) -> Generator[None]:
        """Hold the read lock (shared, reentrant) for the duration of the block.

        Raises:
            RuntimeError: If the thread holds the write lock
        """
        self._acquire_read()
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self) -> Generator[None]:
        """Hold the write lock (exclusive) for the duration of the block.

        Raises:
            RuntimeError: If the thread holds a read lock or already the write lock
        """
        self._acquire_write()
        try:
            yield
        finally:
            self._release_write()

    def _acquire_read(self) -> None:
        thread_id = threading.get_ident()

        with self._condition:
            if thread_id in self._reader_threads:
                self._reader_threads[thread_id] += 1
                return

            if self._active_writer == thread_id:
                msg = (
                    "Cannot acquire read lock while holding write lock. "
                    "Release the write lock before acquiring a read lock."
                )
                raise RuntimeError(msg)

            while self._active_writer is not None or self._waiting_writers > 0:
                self._condition.wait()

            self._active_readers += 1
            self._reader_threads[thread_id] = 1

    def _release_read(self) -> None:
        thread_id = threading.get_ident()

        with self._condition:
            if thread_id not in self._reader_threads:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)

            self._reader_threads[thread_id] -= 1
            if self._reader_threads[thread_id] == 0:
                del self._reader_threads[thread_id]
                self._active_readers -= 1
                if self._active_readers == 0:
                    self._condition.notify_all()

    def _acquire_write(self) -> None:
        thread_id = threading.get_ident()

        with self._condition:
            if thread_id in self._reader_threads:
                msg = (
                    "Cannot upgrade read lock to write lock. "
                    "Release read lock before acquiring write lock."
                )
                raise RuntimeError(msg)

            if self._active_writer == thread_id:
                msg = "Cannot acquire write lock: already holding write lock."
                raise RuntimeError(msg)

            self._waiting_writers += 1
            try:
                while self._active_readers > 0 or self._active_writer is not None:
                    self._condition.wait()
                self._active_writer = thread_id
            finally:
                self._waiting_writers -= 1
                self._condition.notify_all()

    def _release_write(self) -> None:
        thread_id = threading.get_ident()

        with self._condition:
            if self._active_writer != thread_id:
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)

            self._active_writer = None
            self._condition.notify_all()

    @property
    def writer_active(self) -> bool:
        """True if any thread currently holds the write lock (point-in-time)."""
        with self._condition:
            return self._active_writer is not None
