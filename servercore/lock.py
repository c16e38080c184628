"""A re-entrant exclusive lock that records its owning thread."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from .thread_local import EMPTY_THREAD_ID, assign_thread_id, current_thread_id


def _thread_id() -> int:
    return current_thread_id() or assign_thread_id()


class Lock:
    """Exclusive write lock; the owning thread may take it again without blocking.

    Each write_lock() by the owner must be matched by a write_unlock(). An unlock
    from a thread that does not own the lock is ignored.
    """

    def __init__(self) -> None:
        self._mutex = threading.Lock()
        self._owner = EMPTY_THREAD_ID
        self._nested = 0

    def write_lock(self) -> None:
        thread_id = _thread_id()
        if self._owner == thread_id:
            self._nested += 1
            return
        self._mutex.acquire()
        self._owner = thread_id
        self._nested = 1

    def write_unlock(self) -> None:
        if self._owner != current_thread_id() or self._owner == EMPTY_THREAD_ID:
            return
        self._nested -= 1
        if self._nested == 0:
            self._owner = EMPTY_THREAD_ID
            self._mutex.release()

    @property
    def owner_thread_id(self) -> int:
        return self._owner

    @property
    def nested_count(self) -> int:
        return self._nested

    def __enter__(self) -> Lock:
        self.write_lock()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.write_unlock()


@contextmanager
def write_lock_guard(lock: Lock) -> Iterator[Lock]:
    """Hold ``lock`` for the duration of the ``with`` block."""
    lock.write_lock()
    try:
        yield lock
    finally:
        lock.write_unlock()